from blockfall.game_state import DropBonus, GameState, GameStatus, fall_interval_ms


def test_line_scores_at_level_one():
    state = GameState()
    state.add_score(1)
    assert state.score == 40
    state = GameState()
    state.add_score(4)
    assert state.score == 1200


def test_drop_bonuses_are_flat():
    state = GameState(level=5)
    state.add_score(0, DropBonus.HARD)
    assert state.score == 2
    state.add_score(0, "soft")
    assert state.score == 3
    assert state.lines == 0


def test_line_score_multiplied_by_level():
    state = GameState(level=3)
    state.add_score(2)
    assert state.score == 300


def test_level_recomputed_and_never_decreases():
    state = GameState()
    for _ in range(3):
        state.add_score(4)
    assert state.lines == 12
    assert state.level == 2
    state.add_score(0)
    assert state.level == 2

    high = GameState(level=7)
    high.add_score(1)
    assert high.level == 7


def test_fall_interval():
    assert GameState(level=1).get_fall_interval() == 1000
    assert GameState(level=10).get_fall_interval() == 550
    assert GameState(level=19).get_fall_interval() == 100
    assert fall_interval_ms(100) == 100


def test_unknown_status_is_ignored():
    state = GameState()
    state.set_status(GameStatus.PLAYING)
    state.set_status("EXPLODED")
    assert state.status is GameStatus.PLAYING
    state.set_status("PAUSED")
    assert state.status is GameStatus.PAUSED


def test_reset_restores_defaults():
    state = GameState(score=500, level=4, lines=33, status=GameStatus.GAME_OVER)
    state.reset()
    assert (state.score, state.level, state.lines) == (0, 1, 0)
    assert state.status is GameStatus.READY
