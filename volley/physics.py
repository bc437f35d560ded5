"""Ball physics — gravity, spin, trail, wall/ceiling/net/blob/ground collisions.

One call to ``step_ball`` advances the ball by exactly one frame. Collisions are
resolved one after another in a fixed order (walls, ceiling, net, blobs,
ground); each stage sees the position/velocity left by the previous one.
Changing the order changes trajectories. Every bounce leaves the ball at or
below BALL_MAX_SPEED.
"""

import logging
from typing import Iterable, Union

from volley.collision import (
    circle_intersects_rect,
    circles_intersect,
    clamp_speed,
    net_rect,
    normalize,
    reflect,
)
from volley.types import Ball, BounceEvent, GroundEvent, Player, Side, Vec2
from volley import court

logger = logging.getLogger(__name__)

BallEvent = Union[BounceEvent, GroundEvent]


def reset_ball(ball: Ball, serving_side: Side) -> None:
    """Put the ball above the serving side's court centre, at rest."""
    if serving_side is Side.LEFT:
        ball.pos = Vec2(court.SCREEN_WIDTH / 4, court.BALL_SERVE_HEIGHT)
    else:
        ball.pos = Vec2(court.SCREEN_WIDTH * 3 / 4, court.BALL_SERVE_HEIGHT)
    ball.vel = Vec2(0.0, 0.0)
    ball.trail.clear()
    ball.rotation = 0.0


def _integrate(ball: Ball) -> None:
    ball.pos.x += ball.vel.x
    ball.pos.y += ball.vel.y
    ball.vel.y += court.BALL_GRAVITY


def _update_rotation(ball: Ball) -> None:
    # Horizontal speed only: a ball falling straight down does not spin
    ball.rotation += (abs(ball.vel.x) / ball.radius) * court.SPIN_FACTOR


def _sample_trail(ball: Ball) -> None:
    ball.trail.appendleft(ball.pos.copy())


def _cap_speed(ball: Ball) -> None:
    ball.vel = clamp_speed(ball.vel, court.BALL_MAX_SPEED)


def _check_walls(ball: Ball) -> None:
    if ball.pos.x - ball.radius <= 0:
        ball.pos.x = ball.radius
        ball.vel.x *= -court.BALL_BOUNCE_DAMPING
        _cap_speed(ball)
    if ball.pos.x + ball.radius >= court.SCREEN_WIDTH:
        ball.pos.x = court.SCREEN_WIDTH - ball.radius
        ball.vel.x *= -court.BALL_BOUNCE_DAMPING
        _cap_speed(ball)


def _check_ceiling(ball: Ball) -> None:
    if ball.pos.y - ball.radius <= 0:
        ball.pos.y = ball.radius
        ball.vel.y *= -court.BALL_BOUNCE_DAMPING
        _cap_speed(ball)


def resolve_net_collision(ball: Ball) -> list[BounceEvent]:
    """Bounce the ball off the net post and push it clear of the post."""
    rect = net_rect()
    if not circle_intersects_rect(ball.pos, ball.radius, rect):
        return []

    ball.vel.x *= -court.BALL_BOUNCE_DAMPING
    ball.vel.y *= court.NET_VERTICAL_DAMPING
    _cap_speed(ball)

    if ball.pos.x < court.NET_X:
        ball.pos.x = rect.x - ball.radius
    else:
        ball.pos.x = rect.right + ball.radius

    return [BounceEvent(pos=ball.pos.copy(), surface="net")]


def resolve_player_collision(ball: Ball, player: Player) -> list[BounceEvent]:
    """Bat the ball off a blob.

    Reflects the ball about the blob-to-ball normal, keeps 95% of the energy,
    hands over part of the blob's own motion, adds the spike boost for a
    jumping blob, caps the speed and parks the ball just outside the blob.
    """
    if not circles_intersect(ball.pos, ball.radius, player.pos, player.radius):
        return []

    normal = normalize(ball.pos - player.pos)
    if normal is None:
        # Concentric centres: no usable normal this frame
        logger.debug("Skipping %s blob hit with zero-length normal", player.side.value)
        return []

    vel = reflect(ball.vel, normal) * court.HIT_RETENTION
    vel.x += player.vel.x * court.HIT_TRANSFER_X
    vel.y += player.vel.y * court.HIT_TRANSFER_Y

    if player.vel.y < court.SPIKE_VELOCITY:
        vel.y -= court.SPIKE_BOOST

    ball.vel = clamp_speed(vel, court.BALL_MAX_SPEED)
    ball.pos = player.pos + normal * (player.radius + ball.radius)

    return [BounceEvent(pos=ball.pos.copy(), surface="player")]


def _check_ground(ball: Ball) -> list[GroundEvent]:
    if ball.pos.y + ball.radius < court.GROUND_LEVEL:
        return []
    ball.pos.y = court.GROUND_LEVEL - ball.radius
    ball.vel.y *= -court.BALL_BOUNCE_DAMPING
    _cap_speed(ball)
    return [GroundEvent(pos=Vec2(ball.pos.x, court.GROUND_LEVEL))]


def step_ball(
    ball: Ball,
    players: Iterable[Player],
    score_delay: int,
    frame: int,
) -> list[BallEvent]:
    """Advance the ball by one frame and resolve every collision.

    Args:
        ball: Ball to advance, mutated in place.
        players: Blobs to test against, in resolution order.
        score_delay: Frames left in the post-point grace period. Blob hits are
            skipped while it is non-zero.
        frame: Global frame counter; the trail is sampled on even frames.

    Returns:
        Bounce events for net and blob hits, plus a GroundEvent when the ball
        touched the floor. Scoring is left to the caller.
    """
    events: list[BallEvent] = []

    _integrate(ball)
    _update_rotation(ball)
    if frame % court.TRAIL_SAMPLE_INTERVAL == 0:
        _sample_trail(ball)

    _check_walls(ball)
    _check_ceiling(ball)
    events.extend(resolve_net_collision(ball))

    if score_delay == 0:
        for player in players:
            events.extend(resolve_player_collision(ball, player))

    events.extend(_check_ground(ball))
    return events
