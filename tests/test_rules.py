from block_blast.game.rules import ScoreState, ScoringRules


def test_placement_without_clear_scores_cells_only():
    rules = ScoringRules()
    state = ScoreState()
    assert rules.apply(state, 4, 0) == 4
    assert (state.score, state.streak, state.streak_lives) == (4, 0, 0)


def test_first_clear_arms_streak():
    rules = ScoringRules()
    state = ScoreState()
    gained = rules.apply(state, 8, 1)
    assert state.streak == -1
    assert gained == 8 + 1 * 10 * (-1 + 3)
    assert state.streak_lives == 3
    assert state.displayed_streak == 0


def test_second_clear_starts_counting():
    rules = ScoringRules()
    state = ScoreState()
    rules.apply(state, 3, 1)
    gained = rules.apply(state, 2, 2)
    assert state.streak == 2
    assert gained == 2 + 2 * 10 * (2 + 3)
    assert state.score == 23 + 102


def test_streak_accumulates():
    rules = ScoringRules()
    state = ScoreState(streak=2, streak_lives=1)
    rules.apply(state, 1, 3)
    assert state.streak == 5
    assert state.streak_lives == 3
    assert state.score == 1 + 3 * 10 * (5 + 3)


def test_streak_decays_after_three_misses():
    rules = ScoringRules()
    state = ScoreState(streak=2, streak_lives=3)
    lives = []
    streaks = []
    for _ in range(3):
        rules.apply(state, 1, 0)
        lives.append(state.streak_lives)
        streaks.append(state.streak)
    assert lives == [2, 1, 0]
    assert streaks == [2, 2, 0]


def test_armed_streak_survives_misses():
    rules = ScoringRules()
    state = ScoreState()
    rules.apply(state, 1, 1)
    for _ in range(5):
        rules.apply(state, 1, 0)
    assert state.streak == -1
    assert state.streak_lives == 3


def test_clear_after_decay_rearms():
    rules = ScoringRules()
    state = ScoreState(streak=1, streak_lives=1)
    rules.apply(state, 1, 0)
    assert state.streak == 0
    rules.apply(state, 1, 1)
    assert state.streak == -1


def test_high_score_follows_score():
    rules = ScoringRules()
    state = ScoreState(high_score=10)
    rules.apply(state, 5, 0)
    assert state.high_score == 10
    rules.apply(state, 6, 0)
    assert state.high_score == 11


def test_alternate_bonus_curve():
    rules = ScoringRules(streak_offset=1)
    state = ScoreState(streak=-1)
    assert rules.apply(state, 0, 1) == 1 * 10 * (1 + 1)


def test_reset_keeps_given_high_score():
    state = ScoreState(score=50, streak=3, streak_lives=2, high_score=50)
    state.reset(high_score=70)
    assert state == ScoreState(high_score=70)
