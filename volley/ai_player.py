"""AI player — heuristic blob controller for single-player matches.

The AI reads the ball's position and velocity each frame and either idles near
the centre of its half or chases the ball and jumps at it. A random draw on
every jump opportunity makes it miss about one chance in five so a human can
beat it.
"""

import logging

from volley.controls import clamp_to_half, home_x
from volley.types import Ball, JumpEvent, Player, Side
from volley import court

logger = logging.getLogger(__name__)


class AIPlayer:
    """Drives one blob. Owns only its jump cooldown."""

    def __init__(self, side: Side, rng):
        """Create an AI controller.

        Args:
            side: Court half the controlled blob plays on.
            rng: Random source with ``randint(a, b)``, e.g. ``random.Random(seed)``.
        """
        self.side = side
        self.rng = rng
        self.cooldown = 0

    def ball_coming_toward(self, ball: Ball) -> bool:
        """Whether the ball is heading to, or already on, this AI's half."""
        if self.side is Side.RIGHT:
            return (ball.vel.x > 0 and ball.pos.x < court.NET_X) or ball.pos.x >= court.NET_X
        return (ball.vel.x < 0 and ball.pos.x > court.NET_X) or ball.pos.x <= court.NET_X

    def should_jump(self, player: Player, ball: Ball) -> bool:
        """Deterministic part of the jump decision (no random draw)."""
        horizontal = abs(ball.pos.x - player.pos.x)
        below_ball = player.pos.y - ball.pos.y
        return (
            horizontal < court.AI_REACTION_DISTANCE
            and below_ball > -court.AI_JUMP_THRESHOLD
            and below_ball < court.AI_UPPER_REACH
            and self.cooldown == 0
            and player.on_ground
        )

    def _drift_home(self, player: Player) -> None:
        target_x = home_x(self.side)
        step = court.PLAYER_MOVE_SPEED * court.AI_DRIFT_FACTOR
        if player.pos.x < target_x - court.AI_POSITION_TOLERANCE:
            player.pos.x += step
        elif player.pos.x > target_x + court.AI_POSITION_TOLERANCE:
            player.pos.x -= step
        # Idle drift moves the blob without giving it momentum to pass on
        player.vel.x = 0.0
        clamp_to_half(player)

    def update(self, player: Player, ball: Ball) -> list[JumpEvent]:
        """Decide this frame's movement and jump for ``player``."""
        if self.cooldown > 0:
            self.cooldown -= 1

        if not self.ball_coming_toward(ball):
            self._drift_home(player)
            return []

        distance_x = ball.pos.x - player.pos.x
        speed = court.PLAYER_MOVE_SPEED * court.AI_STEER_FACTOR
        if distance_x < -court.AI_POSITION_TOLERANCE:
            player.vel.x = -speed
        elif distance_x > court.AI_POSITION_TOLERANCE:
            player.vel.x = speed
        else:
            player.vel.x = 0.0

        if not self.should_jump(player, ball):
            return []

        if self.rng.randint(0, 100) <= court.AI_MISS_THRESHOLD:
            logger.debug("AI %s skipped a jump", self.side.value)
            return []

        player.vel.y = court.PLAYER_JUMP_FORCE * court.AI_JUMP_SCALE
        player.on_ground = False
        self.cooldown = court.AI_JUMP_COOLDOWN
        logger.debug("AI %s jumps at ball x=%.1f", self.side.value, ball.pos.x)
        return [JumpEvent(side=self.side)]
