"""Tests for the player controller."""

import random

import pytest

from volley.controls import (
    Action,
    InputFrame,
    apply_human_input,
    clamp_to_half,
    half_bounds,
    integrate_player,
    place_player,
)
from volley.types import JumpEvent, Player, Side, Vec2
from volley import court


def _grounded(side=Side.LEFT, x=None):
    p = Player(radius=court.PLAYER_RADIUS, side=side)
    place_player(p)
    if x is not None:
        p.pos.x = x
    return p


def _held(*actions):
    return InputFrame(held=frozenset(actions))


def _pressed(*actions):
    return InputFrame(pressed=frozenset(actions))


def test_place_player_home_spots():
    left = _grounded(Side.LEFT)
    right = _grounded(Side.RIGHT)
    assert left.pos == Vec2(court.SCREEN_WIDTH / 4, court.GROUND_LEVEL - court.PLAYER_RADIUS)
    assert right.pos.x == court.SCREEN_WIDTH * 3 / 4
    assert left.on_ground and right.on_ground


def test_move_speed_is_level_not_accumulated():
    p = _grounded()
    apply_human_input(p, _held(Action.P1_RIGHT))
    apply_human_input(p, _held(Action.P1_RIGHT))
    assert p.vel.x == court.PLAYER_MOVE_SPEED

    apply_human_input(p, _held(Action.P1_LEFT))
    assert p.vel.x == -court.PLAYER_MOVE_SPEED

    apply_human_input(p, InputFrame())
    assert p.vel.x == 0.0


def test_left_wins_when_both_held():
    p = _grounded()
    apply_human_input(p, _held(Action.P1_LEFT, Action.P1_RIGHT))
    assert p.vel.x == -court.PLAYER_MOVE_SPEED


def test_right_side_uses_p2_bindings():
    p = _grounded(Side.RIGHT)
    apply_human_input(p, _held(Action.P1_LEFT))
    assert p.vel.x == 0.0
    apply_human_input(p, _held(Action.P2_LEFT))
    assert p.vel.x == -court.PLAYER_MOVE_SPEED


def test_jump_on_press_edge():
    p = _grounded()
    events = apply_human_input(p, _pressed(Action.P1_JUMP))
    assert p.vel.y == court.PLAYER_JUMP_FORCE
    assert not p.on_ground
    assert events == [JumpEvent(side=Side.LEFT)]


def test_holding_jump_does_not_jump():
    p = _grounded()
    events = apply_human_input(p, _held(Action.P1_JUMP))
    assert events == []
    assert p.on_ground


def test_no_double_jump_in_air():
    p = _grounded()
    apply_human_input(p, _pressed(Action.P1_JUMP))
    integrate_player(p)
    vy = p.vel.y
    events = apply_human_input(p, _pressed(Action.P1_JUMP))
    assert events == []
    assert p.vel.y == vy


def test_grounded_player_stays_grounded():
    p = _grounded()
    integrate_player(p)
    assert p.on_ground
    assert p.vel.y == 0.0
    assert p.pos.y == court.GROUND_LEVEL - court.PLAYER_RADIUS


def test_jump_leaves_ground_then_lands():
    p = _grounded()
    apply_human_input(p, _pressed(Action.P1_JUMP))
    integrate_player(p)
    assert not p.on_ground
    assert p.vel.y == pytest.approx(court.PLAYER_JUMP_FORCE + court.PLAYER_GRAVITY)

    for _ in range(60):
        integrate_player(p)
    assert p.on_ground
    assert p.pos.y == court.GROUND_LEVEL - court.PLAYER_RADIUS


def test_fall_speed_clamped():
    p = Player(pos=Vec2(200, 300), vel=Vec2(0, court.PLAYER_MAX_VELOCITY_Y), radius=court.PLAYER_RADIUS)
    integrate_player(p)
    assert p.vel.y == court.PLAYER_MAX_VELOCITY_Y


@pytest.mark.parametrize("side, x, vx, expected", [
    (Side.LEFT, 470, 4, court.NET_X - court.NET_WIDTH / 2 - court.PLAYER_RADIUS),
    (Side.LEFT, 52, -4, court.PLAYER_RADIUS),
    (Side.RIGHT, 560, -4, court.NET_X + court.NET_WIDTH / 2 + court.PLAYER_RADIUS),
    (Side.RIGHT, 990, 4, court.SCREEN_WIDTH - court.PLAYER_RADIUS),
])
def test_player_cannot_leave_half(side, x, vx, expected):
    p = _grounded(side, x)
    p.vel.x = vx
    integrate_player(p)
    assert p.pos.x == pytest.approx(expected)


def test_clamp_to_half_direct():
    p = _grounded(Side.LEFT, 900)
    clamp_to_half(p)
    assert p.pos.x == half_bounds(Side.LEFT, p.radius)[1]


def test_random_inputs_keep_players_in_half():
    """Whatever is pressed, blob x stays inside its half after every update."""
    rng = random.Random(11)
    actions = list(Action)
    for side in Side:
        p = _grounded(side)
        lo, hi = half_bounds(side, p.radius)
        for _ in range(2000):
            frame = InputFrame(
                held=frozenset(a for a in actions if rng.random() < 0.3),
                pressed=frozenset(a for a in actions if rng.random() < 0.1),
            )
            apply_human_input(p, frame)
            integrate_player(p)
            assert lo <= p.pos.x <= hi, f"{side.value} blob escaped its half at x={p.pos.x}"
