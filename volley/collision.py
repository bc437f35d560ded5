"""Collision tests and responses — circle/circle, circle/rectangle, reflection.

Pure functions: nothing here mutates its arguments. Callers apply the results.
"""

from dataclasses import dataclass
from typing import Optional

from volley.types import Vec2
from volley import court


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle; ``(x, y)`` is the top-left corner."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


def net_rect() -> Rect:
    """The net post: centred on NET_X, standing on the ground."""
    return Rect(
        x=court.NET_X - court.NET_WIDTH / 2,
        y=court.GROUND_LEVEL - court.NET_HEIGHT,
        width=court.NET_WIDTH,
        height=court.NET_HEIGHT,
    )


def circles_intersect(c1: Vec2, r1: float, c2: Vec2, r2: float) -> bool:
    """True when the circles overlap. Exact tangency does not count."""
    d = c1 - c2
    reach = r1 + r2
    return d.dot(d) < reach * reach


def circle_intersects_rect(c: Vec2, r: float, rect: Rect) -> bool:
    """True when the circle overlaps the rectangle (closest-point test)."""
    closest_x = min(max(c.x, rect.x), rect.right)
    closest_y = min(max(c.y, rect.y), rect.bottom)
    dx = c.x - closest_x
    dy = c.y - closest_y
    return dx * dx + dy * dy < r * r


def normalize(v: Vec2) -> Optional[Vec2]:
    """Unit vector along ``v``, or None for a zero-length vector."""
    length = v.magnitude()
    if length == 0.0:
        return None
    return Vec2(v.x / length, v.y / length)


def reflect(velocity: Vec2, normal: Vec2) -> Vec2:
    """Mirror ``velocity`` about ``normal``: v - 2(v.n)n.

    The normal does not need to be unit length. A zero-length normal leaves
    the velocity unchanged.
    """
    n = normalize(normal)
    if n is None:
        return velocity.copy()
    return velocity - n * (2.0 * velocity.dot(n))


def clamp_speed(velocity: Vec2, max_speed: float) -> Vec2:
    """Uniformly rescale ``velocity`` so its magnitude is at most ``max_speed``."""
    speed = velocity.magnitude()
    if speed <= max_speed:
        return velocity.copy()
    return velocity * (max_speed / speed)
