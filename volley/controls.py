"""Player controller — logical input actions, blob movement, jumping, court halves.

The engine never sees keys or devices, only ``Action`` values collected into an
``InputFrame`` once per tick by whatever front-end drives the game.
"""

from dataclasses import dataclass, field
from enum import Enum

from volley.types import JumpEvent, Player, Side, Vec2
from volley import court


class Action(Enum):
    P1_LEFT = "p1_left"
    P1_RIGHT = "p1_right"
    P1_JUMP = "p1_jump"
    P2_LEFT = "p2_left"
    P2_RIGHT = "p2_right"
    P2_JUMP = "p2_jump"
    PAUSE = "pause"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    MENU_UP = "menu_up"
    MENU_DOWN = "menu_down"


@dataclass(frozen=True)
class InputFrame:
    """Input sampled for one tick.

    ``held`` is level-triggered (movement), ``pressed`` is edge-triggered and
    only contains actions newly pressed this tick (jump, confirm, menu).
    """
    held: frozenset = field(default_factory=frozenset)
    pressed: frozenset = field(default_factory=frozenset)

    def is_held(self, action: Action) -> bool:
        return action in self.held

    def was_pressed(self, action: Action) -> bool:
        return action in self.pressed


# (left, right, jump) per court side
BINDINGS = {
    Side.LEFT: (Action.P1_LEFT, Action.P1_RIGHT, Action.P1_JUMP),
    Side.RIGHT: (Action.P2_LEFT, Action.P2_RIGHT, Action.P2_JUMP),
}


def half_bounds(side: Side, radius: float) -> tuple[float, float]:
    """Allowed range for a blob centre on its own half of the court."""
    if side is Side.LEFT:
        return radius, court.NET_X - court.NET_WIDTH / 2 - radius
    return court.NET_X + court.NET_WIDTH / 2 + radius, court.SCREEN_WIDTH - radius


def clamp_to_half(player: Player) -> None:
    lo, hi = half_bounds(player.side, player.radius)
    player.pos.x = min(max(player.pos.x, lo), hi)


def home_x(side: Side) -> float:
    """Horizontal centre of a side's half (where blobs start and the AI idles)."""
    if side is Side.LEFT:
        return court.SCREEN_WIDTH / 4
    return court.SCREEN_WIDTH * 3 / 4


def place_player(player: Player) -> None:
    """Stand the blob on the ground at its half's centre, at rest."""
    player.pos = Vec2(home_x(player.side), court.GROUND_LEVEL - player.radius)
    player.vel = Vec2(0.0, 0.0)
    player.on_ground = True


def apply_human_input(player: Player, frame: InputFrame) -> list[JumpEvent]:
    """Set the blob's velocity from the held/pressed actions bound to its side.

    Horizontal speed is not accumulated: it is either full move speed or zero.
    """
    left, right, jump = BINDINGS[player.side]

    if frame.is_held(left):
        player.vel.x = -court.PLAYER_MOVE_SPEED
    elif frame.is_held(right):
        player.vel.x = court.PLAYER_MOVE_SPEED
    else:
        player.vel.x = 0.0

    if frame.was_pressed(jump) and player.on_ground:
        player.vel.y = court.PLAYER_JUMP_FORCE
        player.on_ground = False
        return [JumpEvent(side=player.side)]
    return []


def integrate_player(player: Player) -> None:
    """Move the blob one frame: velocity, gravity, ground contact, court half."""
    player.pos.x += player.vel.x
    player.pos.y += player.vel.y

    player.vel.y += court.PLAYER_GRAVITY
    if player.vel.y > court.PLAYER_MAX_VELOCITY_Y:
        player.vel.y = court.PLAYER_MAX_VELOCITY_Y

    if player.pos.y + player.radius >= court.GROUND_LEVEL:
        player.pos.y = court.GROUND_LEVEL - player.radius
        player.vel.y = 0.0
        player.on_ground = True
    else:
        player.on_ground = False

    clamp_to_half(player)
