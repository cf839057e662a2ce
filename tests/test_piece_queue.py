from collections import Counter

from blockfall.piece_queue import PieceQueue
from blockfall.tetromino import SPAWN_X, SPAWN_Y, TetrominoType


def test_first_seven_draws_cover_every_type():
    queue = PieceQueue()
    shapes = [queue.get_next().shape for _ in range(7)]
    assert sorted(shapes) == sorted(TetrominoType)


def test_every_bag_is_a_permutation():
    queue = PieceQueue(seed=5)
    for _ in range(20):
        bag = [queue.get_next().shape for _ in range(7)]
        assert set(bag) == set(TetrominoType)


def test_distribution_over_many_draws():
    queue = PieceQueue()
    counts = Counter(queue.get_next().shape for _ in range(700))
    for shape in TetrominoType:
        assert 80 <= counts[shape] <= 120


def test_peek_is_idempotent_and_matches_next_draw():
    queue = PieceQueue(seed=1)
    first = queue.peek()
    assert queue.peek() is first
    drawn = queue.get_next()
    assert drawn is first
    assert (drawn.x, drawn.y, drawn.rotation) == (SPAWN_X, SPAWN_Y, 0)


def test_bag_never_holds_duplicates():
    queue = PieceQueue(seed=3)
    for _ in range(30):
        bag = queue.bag
        assert len(bag) == len(set(bag))
        assert 1 <= len(bag) <= 7
        queue.get_next()


def test_seed_makes_sequence_reproducible():
    a = PieceQueue(seed=42)
    b = PieceQueue(seed=42)
    assert [a.get_next().shape for _ in range(14)] == [b.get_next().shape for _ in range(14)]


def test_reset_starts_a_fresh_bag():
    queue = PieceQueue(seed=9)
    for _ in range(3):
        queue.get_next()
    queue.reset()
    assert len(queue.bag) == 7
    shapes = [queue.get_next().shape for _ in range(7)]
    assert set(shapes) == set(TetrominoType)
