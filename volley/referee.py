"""Referee — who scores when the ball hits the floor, serve rotation, win check.

Rules:
- Ball lands left of the net → right blob scores; otherwise left blob scores.
- Whoever scores serves next.
- First to WIN_SCORE points wins (no win-by-two).
"""

from typing import Optional

from volley.types import Player, RefereeDecision, Side
from volley import court


def side_of(x: float) -> Side:
    """Court half containing horizontal position ``x``."""
    return Side.LEFT if x < court.NET_X else Side.RIGHT


def winner(left: Player, right: Player) -> Optional[Side]:
    if left.score >= court.WIN_SCORE:
        return Side.LEFT
    if right.score >= court.WIN_SCORE:
        return Side.RIGHT
    return None


def award_point(left: Player, right: Player, contact_x: float) -> RefereeDecision:
    """Score a ground contact at ``contact_x`` and decide serve and match end."""
    scorer = side_of(contact_x).opponent
    if scorer is Side.LEFT:
        left.score += 1
    else:
        right.score += 1

    won_by = winner(left, right)
    return RefereeDecision(
        scorer=scorer,
        serving_side=scorer,
        match_over=won_by is not None,
        winner=won_by,
    )


def reset_scores(left: Player, right: Player) -> None:
    left.score = 0
    right.score = 0
