"""Core data types for the blob volley simulation."""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from volley import court


@dataclass
class Vec2:
    """2D vector for position and velocity (screen pixels, y grows downward)."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vec2":
        return self.__mul__(scalar)

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        return (self.x**2 + self.y**2) ** 0.5

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def copy(self) -> "Vec2":
        return Vec2(self.x, self.y)


class Side(Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def opponent(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class GameState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    GAMEOVER = "gameover"
    CREDITS = "credits"


class GameMode(Enum):
    SINGLE_PLAYER = "single_player"
    TWO_PLAYER = "two_player"


class MenuOption(Enum):
    """Main menu entries, in display order."""
    SINGLE_PLAYER = 0
    TWO_PLAYER = 1
    CREDITS = 2
    EXIT = 3


@dataclass
class KinematicBody:
    """Position, velocity and radius shared by blobs, the ball and particles."""
    pos: Vec2 = field(default_factory=Vec2)
    vel: Vec2 = field(default_factory=Vec2)
    radius: float = 0.0


@dataclass
class Player(KinematicBody):
    """A blob. Score lives here and resets with each new match."""
    side: Side = Side.LEFT
    color: tuple[int, int, int] = court.PLAYER1_COLOR
    score: int = 0
    on_ground: bool = True


@dataclass
class Ball(KinematicBody):
    """The volleyball. ``trail`` holds the last sampled positions, newest first."""
    radius: float = court.BALL_RADIUS
    trail: deque = field(default_factory=lambda: deque(maxlen=court.TRAIL_LENGTH))
    rotation: float = 0.0  # degrees, cosmetic only

    def copy(self) -> "Ball":
        return Ball(
            pos=self.pos.copy(),
            vel=self.vel.copy(),
            radius=self.radius,
            trail=deque((p.copy() for p in self.trail), maxlen=court.TRAIL_LENGTH),
            rotation=self.rotation,
        )


@dataclass
class Particle(KinematicBody):
    """A cosmetic dust particle. Lives in a ParticlePool slot."""
    color: tuple[int, int, int] = court.GROUND_COLOR
    alpha: float = 0.0
    life: float = 0.0  # 1.0 fresh, 0.0 spent
    active: bool = False


@dataclass
class JumpEvent:
    """A blob left the ground."""
    side: Side


@dataclass
class BounceEvent:
    """The ball bounced off the net or a blob."""
    pos: Vec2
    surface: str  # "net" or "player"


@dataclass
class GroundEvent:
    """The ball touched the floor at ``pos``."""
    pos: Vec2


@dataclass
class ScoreEvent:
    """A point was scored and the match continues."""
    scorer: Side
    left_score: int
    right_score: int


@dataclass
class GameOverEvent:
    """A point ended the match."""
    winner: Side
    left_score: int
    right_score: int


@dataclass
class RefereeDecision:
    """Outcome of a ground contact while scoring is live."""
    scorer: Side
    serving_side: Side
    match_over: bool
    winner: Optional[Side] = None
