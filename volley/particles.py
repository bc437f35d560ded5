"""Impact dust — a fixed pool of cosmetic particles.

Slots are addressed by integer handle (their index in the pool). Nothing in the
gameplay reads particle state.
"""

import logging
import math

from volley.types import Particle, Vec2
from volley import court

logger = logging.getLogger(__name__)


class ParticlePool:
    """Fixed-capacity arena of particle slots."""

    def __init__(self, rng, capacity: int = court.MAX_PARTICLES):
        self.rng = rng
        self.capacity = capacity
        self._slots = [Particle() for _ in range(capacity)]

    def __len__(self) -> int:
        return sum(1 for p in self._slots if p.active)

    def get(self, handle: int) -> Particle:
        return self._slots[handle]

    def active(self) -> list[Particle]:
        return [p for p in self._slots if p.active]

    def _claim(self) -> int:
        for handle, p in enumerate(self._slots):
            if not p.active:
                return handle
        return -1

    def release(self, handle: int) -> None:
        self._slots[handle].active = False

    def clear(self) -> None:
        for p in self._slots:
            p.active = False

    def spawn(self, position: Vec2, count: int) -> list[int]:
        """Throw up to ``count`` particles from ``position``.

        Requests beyond the free capacity are dropped. Returns the handles of
        the slots that were filled.
        """
        handles = []
        for _ in range(min(count, self.capacity)):
            handle = self._claim()
            if handle < 0:
                logger.debug("Particle pool full, dropped %d", count - len(handles))
                break

            angle = math.radians(self.rng.randint(court.PARTICLE_MIN_ANGLE, court.PARTICLE_MAX_ANGLE))
            speed = self.rng.randint(court.PARTICLE_MIN_SPEED, court.PARTICLE_MAX_SPEED)
            direction = 1 if self.rng.randint(0, 1) else -1

            p = self._slots[handle]
            p.pos = position.copy()
            # Screen y grows downward, so "up" is negative
            p.vel = Vec2(math.cos(angle) * speed * direction, -math.sin(angle) * speed)
            p.color = court.GROUND_COLOR
            p.alpha = 1.0
            p.life = 1.0
            p.active = True
            handles.append(handle)
        return handles

    def update(self) -> None:
        """Advance every active particle by one frame."""
        for p in self._slots:
            if not p.active:
                continue
            p.vel.y += court.PARTICLE_GRAVITY
            p.pos.x += p.vel.x
            p.pos.y += p.vel.y

            p.life -= court.PARTICLE_LIFE_DECAY
            p.alpha = max(p.life, 0.0)

            if p.life <= 0.0 or p.pos.y > court.GROUND_LEVEL + court.PARTICLE_GROUND_MARGIN:
                p.active = False
