"""Tests for the AI player engine."""

import random

import pytest

from volley.ai_player import AIPlayer
from volley.controls import place_player
from volley.types import Ball, JumpEvent, Player, Side, Vec2
from volley import court


class ScriptedRandom:
    """Returns pre-programmed draws so the jump miss chance is deterministic."""

    def __init__(self, draws):
        self.draws = list(draws)

    def randint(self, a, b):
        return self.draws.pop(0)


def _blob(side, x=None, y=None):
    p = Player(radius=court.PLAYER_RADIUS, side=side)
    place_player(p)
    if x is not None:
        p.pos.x = x
    if y is not None:
        p.pos.y = y
    return p


def _ball(x, y, vx=0.0, vy=0.0):
    return Ball(pos=Vec2(x, y), vel=Vec2(vx, vy))


@pytest.mark.parametrize("x, vx, expected", [
    (700, 0, True),    # already on its half
    (300, 4, True),    # heading over the net
    (300, -4, False),  # heading away
    (300, 0, False),
])
def test_right_ai_ball_coming_toward(x, vx, expected):
    ai = AIPlayer(Side.RIGHT, ScriptedRandom([]))
    assert ai.ball_coming_toward(_ball(x, 300, vx=vx)) is expected


@pytest.mark.parametrize("x, vx, expected", [
    (300, 0, True),
    (700, -4, True),
    (700, 4, False),
])
def test_left_ai_is_mirrored(x, vx, expected):
    ai = AIPlayer(Side.LEFT, ScriptedRandom([]))
    assert ai.ball_coming_toward(_ball(x, 300, vx=vx)) is expected


def test_idle_drifts_toward_home_without_momentum():
    """Ball on the other half: AI slides 2.4 px toward its home spot, vx stays 0."""
    ai = AIPlayer(Side.RIGHT, ScriptedRandom([]))
    player = _blob(Side.RIGHT, x=900)
    events = ai.update(player, _ball(200, 300, vx=-1))

    assert events == []
    assert player.pos.x == pytest.approx(900 - court.PLAYER_MOVE_SPEED * court.AI_DRIFT_FACTOR)
    assert player.vel.x == 0.0


def test_idle_within_tolerance_stays_put():
    ai = AIPlayer(Side.RIGHT, ScriptedRandom([]))
    player = _blob(Side.RIGHT, x=780)
    ai.update(player, _ball(200, 300, vx=-1))
    assert player.pos.x == 780


@pytest.mark.parametrize("player_x, expected_vx", [
    (600, court.PLAYER_MOVE_SPEED * court.AI_STEER_FACTOR),
    (900, -court.PLAYER_MOVE_SPEED * court.AI_STEER_FACTOR),
    (790, 0.0),
])
def test_steers_toward_ball(player_x, expected_vx):
    ai = AIPlayer(Side.RIGHT, ScriptedRandom([]))
    player = _blob(Side.RIGHT, x=player_x)
    # Ball far above: steering only, no jump draw
    ai.update(player, _ball(800, 200, vx=1))
    assert player.vel.x == pytest.approx(expected_vx)


@pytest.mark.parametrize("draw, jumps", [(50, True), (21, True), (20, False), (0, False)])
def test_jump_draw(draw, jumps):
    """A draw above 20 on 0..100 jumps, 20 or below is a deliberate miss."""
    ai = AIPlayer(Side.RIGHT, ScriptedRandom([draw]))
    player = _blob(Side.RIGHT, x=700, y=668)
    ball = _ball(720, 620)

    assert ai.should_jump(player, ball)
    events = ai.update(player, ball)

    if jumps:
        assert events == [JumpEvent(side=Side.RIGHT)]
        assert player.vel.y == pytest.approx(court.PLAYER_JUMP_FORCE * court.AI_JUMP_SCALE)
        assert not player.on_ground
    else:
        assert events == []
        assert player.vel.y == 0.0
        assert player.on_ground


def test_cooldown_after_jump():
    ai = AIPlayer(Side.RIGHT, ScriptedRandom([50]))
    player = _blob(Side.RIGHT, x=700, y=668)
    ball = _ball(720, 620)

    ai.update(player, ball)
    assert ai.cooldown == court.AI_JUMP_COOLDOWN

    # Cooldown blocks the next attempt without another draw
    player.on_ground = True
    assert ai.update(player, ball) == []
    assert ai.cooldown == court.AI_JUMP_COOLDOWN - 1


def test_ball_out_of_reach_consumes_no_draw():
    """The random draw only happens when the deterministic conditions pass."""
    ai = AIPlayer(Side.RIGHT, ScriptedRandom([]))
    player = _blob(Side.RIGHT, x=700, y=668)

    assert ai.update(player, _ball(720, 400)) == []  # too high
    assert ai.update(player, _ball(720 + court.AI_REACTION_DISTANCE, 620)) == []  # too far


def test_airborne_ai_does_not_jump():
    ai = AIPlayer(Side.RIGHT, ScriptedRandom([]))
    player = _blob(Side.RIGHT, x=700, y=600)
    player.on_ground = False
    assert not ai.should_jump(player, _ball(720, 560))


def test_jump_rate_close_to_eighty_percent():
    """Over many identical chances the AI jumps roughly 80 times in 101."""
    rng = random.Random(5)
    trials = 2000
    jumps = 0
    for _ in range(trials):
        ai = AIPlayer(Side.RIGHT, rng)
        player = _blob(Side.RIGHT, x=700, y=668)
        jumps += len(ai.update(player, _ball(720, 620)))

    rate = jumps / trials
    assert 0.7 < rate < 0.9, f"Jump rate {rate:.2f} outside expected band"
