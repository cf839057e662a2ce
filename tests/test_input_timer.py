from blockfall.input_timer import Action, InputTimer


def test_press_fires_immediately_once():
    timer = InputTimer()
    assert timer.press("left", 1000) is Action.MOVE_LEFT
    assert timer.press("left", 1010) is None
    assert timer.press("f", 1010) is None


def test_repeat_waits_for_das_then_follows_arr():
    timer = InputTimer()
    timer.press("right", 0)
    assert timer.update(100) == []
    assert timer.update(169) == []
    assert timer.update(170) == [Action.MOVE_RIGHT]
    assert timer.update(200) == []
    assert timer.update(220) == [Action.MOVE_RIGHT]
    assert timer.update(270) == [Action.MOVE_RIGHT]


def test_repeat_schedule_anchored_on_press_time():
    timer = InputTimer()
    timer.press("down", 0)
    # Late poll fires once and lands back on the original cadence.
    assert timer.update(400) == [Action.SOFT_DROP]
    assert timer.update(419) == []
    assert timer.update(420) == [Action.SOFT_DROP]
    assert timer.update(437) == []
    assert timer.update(470) == [Action.SOFT_DROP]


def test_edge_triggered_actions_never_repeat():
    timer = InputTimer()
    assert timer.press("up", 0) is Action.ROTATE
    assert timer.press("space", 0) is Action.HARD_DROP
    assert timer.press("p", 0) is Action.PAUSE
    assert timer.update(1000) == []


def test_keys_tracked_independently():
    timer = InputTimer()
    timer.press("left", 0)
    timer.press("down", 100)
    assert timer.update(170) == [Action.MOVE_LEFT]
    assert timer.update(270) == [Action.MOVE_LEFT, Action.SOFT_DROP]


def test_release_clears_state_and_restarts_delay():
    timer = InputTimer()
    timer.press("left", 0)
    timer.release("left")
    assert timer.update(500) == []
    assert timer.held_keys() == []
    assert timer.press("left", 600) is Action.MOVE_LEFT
    assert timer.update(700) == []
    assert timer.update(770) == [Action.MOVE_LEFT]


def test_custom_timing_and_key_map():
    timer = InputTimer({"a": Action.MOVE_LEFT}, das_ms=100, arr_ms=10)
    assert timer.press("left", 0) is None
    assert timer.press("a", 0) is Action.MOVE_LEFT
    assert timer.update(100) == [Action.MOVE_LEFT]
    assert timer.update(110) == [Action.MOVE_LEFT]
    timer.clear()
    assert timer.update(200) == []
