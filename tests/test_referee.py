"""Tests for the referee: point award, serve rotation, match end."""

import pytest

from volley.referee import award_point, reset_scores, side_of, winner
from volley.types import Player, Side
from volley import court


def _players(left_score=0, right_score=0):
    left = Player(side=Side.LEFT, score=left_score)
    right = Player(side=Side.RIGHT, score=right_score)
    return left, right


@pytest.mark.parametrize("x, side", [
    (0, Side.LEFT),
    (court.NET_X - 0.5, Side.LEFT),
    (court.NET_X, Side.RIGHT),
    (court.SCREEN_WIDTH, Side.RIGHT),
])
def test_side_of(x, side):
    assert side_of(x) is side


def test_ball_on_left_scores_for_right():
    left, right = _players()
    decision = award_point(left, right, 100)
    assert decision.scorer is Side.RIGHT
    assert decision.serving_side is Side.RIGHT
    assert (left.score, right.score) == (0, 1)
    assert not decision.match_over


def test_ball_on_right_scores_for_left():
    left, right = _players()
    decision = award_point(left, right, 900)
    assert decision.scorer is Side.LEFT
    assert decision.serving_side is Side.LEFT
    assert (left.score, right.score) == (1, 0)


def test_tenth_point_wins():
    left, right = _players(left_score=court.WIN_SCORE - 1, right_score=5)
    decision = award_point(left, right, 900)
    assert decision.match_over
    assert decision.winner is Side.LEFT
    assert left.score == court.WIN_SCORE


def test_no_win_by_two():
    """9-9 then one point ends it at 10-9."""
    left, right = _players(9, 9)
    assert winner(left, right) is None
    decision = award_point(left, right, 200)
    assert decision.winner is Side.RIGHT
    assert (left.score, right.score) == (9, 10)


def test_reset_scores():
    left, right = _players(7, 3)
    reset_scores(left, right)
    assert left.score == right.score == 0
