from blockfall.engine import GameEngine
from blockfall.run_pygame import FrameQueue


def test_callbacks_requested_during_run_wait_for_next_frame():
    frames = FrameQueue()
    seen = []

    def callback(ts):
        seen.append(ts)
        frames.request_frame(callback)

    frames.request_frame(callback)
    frames.run(1.0)
    frames.run(2.0)
    assert seen == [1.0, 2.0]


def test_cancelled_frame_never_runs():
    frames = FrameQueue()
    seen = []
    handle = frames.request_frame(seen.append)
    frames.cancel_frame(handle)
    frames.run(1.0)
    assert seen == []


def test_engine_runs_on_frame_queue():
    frames = FrameQueue()
    engine = GameEngine(scheduler=frames, seed=3)
    engine.start(0)
    for ts in range(0, 3001, 16):
        frames.run(float(ts))
    assert engine.active.y >= 2
