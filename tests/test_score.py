from truco.score import NO_WINNER, POINTS_TO_WIN, Score


def test_new_score_starts_at_one_stake_and_zero_points():
    score = Score()
    assert score.stakes == 1
    assert (score.team0_game_score, score.team1_game_score) == (0, 0)
    assert (score.team0_turns_won, score.team1_turns_won) == (0, 0)


def test_stakes_follow_documented_ladder_and_cap():
    score = Score()
    seen = []
    for _ in range(5):
        score.increase_stakes()
        seen.append(score.stakes)
    assert seen == [3, 6, 9, 12, 12]
    assert score.stakes == score.max_stakes


def test_two_turns_win_round():
    score = Score()
    assert score.update_turn_won(0) == NO_WINNER
    assert score.update_turn_won(0) == 0


def test_split_turns_then_third_decides():
    score = Score()
    assert score.update_turn_won(1) == NO_WINNER
    assert score.update_turn_won(0) == NO_WINNER
    assert score.update_turn_won(1) == 1


def test_draw_after_first_turn_goes_to_first_winner():
    score = Score()
    score.update_turn_won(1)
    assert score.update_turn_won(NO_WINNER) == 1


def test_win_after_drawn_first_turn_takes_round():
    score = Score()
    assert score.update_turn_won(NO_WINNER) == NO_WINNER
    assert score.update_turn_won(0) == 0


def test_all_turns_drawn_leave_no_winner():
    score = Score()
    assert [score.update_turn_won(NO_WINNER) for _ in range(3)] == [NO_WINNER] * 3


def test_round_win_adds_stakes():
    score = Score()
    score.increase_stakes()
    assert score.update_round_won(0) == NO_WINNER
    assert score.team0_game_score == score.stakes
    assert score.team1_game_score == 0


def test_reaching_points_to_win_wins_game():
    score = Score()
    while score.stakes < score.max_stakes:
        score.increase_stakes()
    assert score.update_round_won(1) == 1
    assert score.team1_game_score >= POINTS_TO_WIN


def test_drawn_round_scores_nothing():
    score = Score()
    assert score.update_round_won(NO_WINNER) == NO_WINNER
    assert (score.team0_game_score, score.team1_game_score) == (0, 0)


def test_reset_round_clears_turns_and_stakes():
    score = Score()
    score.increase_stakes()
    score.update_turn_won(0)
    score.update_turn_won(1)
    score.reset_round()
    assert score.stakes == 1
    assert (score.team0_turns_won, score.team1_turns_won) == (0, 0)
    assert score.update_turn_won(0) == NO_WINNER


def test_reset_game_keeps_stakes_but_zeroes_scores():
    score = Score()
    score.update_round_won(0)
    score.update_round_won(1)
    score.reset_game()
    assert (score.team0_game_score, score.team1_game_score) == (0, 0)