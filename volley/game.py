"""Match state machine — menu, play, score delay, game over, credits.

``tick`` is the single entry point the host loop calls once per frame. It owns
the fixed update order:

    state dispatch -> particles -> controllers / AI -> blob integration
    -> score-delay countdown -> ball step (collisions) -> scoring

and returns the events produced this frame (jumps, bounces, points, game over)
for the audio/render layer. ``snapshot`` gives the renderer a read-only view.

Also provides a headless AI-vs-AI match runner used by the CLI and the
analysis charts.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from volley.ai_player import AIPlayer
from volley.controls import InputFrame, Action, apply_human_input, integrate_player, place_player
from volley.particles import ParticlePool
from volley.physics import reset_ball, step_ball
from volley.types import (
    Ball,
    BounceEvent,
    GameMode,
    GameOverEvent,
    GameState,
    GroundEvent,
    JumpEvent,
    MenuOption,
    Player,
    ScoreEvent,
    Side,
)
from volley import court, referee

logger = logging.getLogger(__name__)

GameEvent = Union[JumpEvent, BounceEvent, ScoreEvent, GameOverEvent]


class Trigger(Enum):
    START_MATCH = "start_match"
    SHOW_CREDITS = "show_credits"
    CANCEL = "cancel"
    MATCH_WON = "match_won"
    CONFIRM = "confirm"


class InvalidTransition(ValueError):
    """Raised for a (state, trigger) pair with no defined transition."""


_TRANSITIONS = {
    (GameState.MENU, Trigger.START_MATCH): GameState.PLAYING,
    (GameState.MENU, Trigger.SHOW_CREDITS): GameState.CREDITS,
    (GameState.PLAYING, Trigger.CANCEL): GameState.MENU,
    (GameState.PLAYING, Trigger.MATCH_WON): GameState.GAMEOVER,
    (GameState.GAMEOVER, Trigger.CONFIRM): GameState.MENU,
    (GameState.CREDITS, Trigger.CONFIRM): GameState.MENU,
    (GameState.CREDITS, Trigger.CANCEL): GameState.MENU,
}


def transition(state: GameState, trigger: Trigger) -> GameState:
    """Next state for ``trigger`` fired in ``state``."""
    try:
        return _TRANSITIONS[(state, trigger)]
    except KeyError:
        raise InvalidTransition(f"No transition from {state.name} on {trigger.name}") from None


@dataclass
class MatchContext:
    """Everything the simulation mutates. Owned by the host loop."""
    rng: random.Random
    left: Player
    right: Player
    ball: Ball
    particles: ParticlePool
    state: GameState = GameState.MENU
    mode: GameMode = GameMode.SINGLE_PLAYER
    ai: dict = field(default_factory=dict)  # Side -> AIPlayer
    serving_side: Side = Side.LEFT
    score_delay: int = 0
    match_timer: int = 0
    frames: int = 0
    paused: bool = False
    menu_selection: int = 0
    credits_scroll: float = 0.0
    should_exit: bool = False

    @property
    def players(self) -> tuple[Player, Player]:
        return (self.left, self.right)


def new_context(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> MatchContext:
    """Fresh context sitting in the main menu.

    Args:
        seed: Seed for a new ``random.Random`` when ``rng`` is not given.
        rng: Random source shared by the AI and the particle spawner.
    """
    if rng is None:
        rng = random.Random(seed)
    left = Player(radius=court.PLAYER_RADIUS, side=Side.LEFT, color=court.PLAYER1_COLOR)
    right = Player(radius=court.PLAYER_RADIUS, side=Side.RIGHT, color=court.PLAYER2_COLOR)
    place_player(left)
    place_player(right)
    ball = Ball()
    reset_ball(ball, Side.LEFT)
    return MatchContext(rng=rng, left=left, right=right, ball=ball, particles=ParticlePool(rng))


def start_match(ctx: MatchContext, mode: GameMode) -> None:
    """Leave the menu and begin a fresh match in ``mode``."""
    ctx.state = transition(ctx.state, Trigger.START_MATCH)
    ctx.mode = mode
    ctx.ai = {Side.RIGHT: AIPlayer(Side.RIGHT, ctx.rng)} if mode is GameMode.SINGLE_PLAYER else {}

    referee.reset_scores(ctx.left, ctx.right)
    place_player(ctx.left)
    place_player(ctx.right)
    ctx.particles.clear()
    ctx.match_timer = 0
    ctx.score_delay = 0
    ctx.paused = False
    ctx.serving_side = Side.LEFT
    reset_ball(ctx.ball, ctx.serving_side)
    logger.info("Match started (%s)", mode.value)


def _back_to_menu(ctx: MatchContext, trigger: Trigger) -> None:
    logger.info("Back to menu from %s", ctx.state.value)
    ctx.state = transition(ctx.state, trigger)
    ctx.menu_selection = 0


def _tick_menu(ctx: MatchContext, frame: InputFrame) -> list[GameEvent]:
    options = len(MenuOption)
    if frame.was_pressed(Action.MENU_UP):
        ctx.menu_selection = (ctx.menu_selection - 1) % options
    if frame.was_pressed(Action.MENU_DOWN):
        ctx.menu_selection = (ctx.menu_selection + 1) % options

    if not frame.was_pressed(Action.CONFIRM):
        return []

    choice = MenuOption(ctx.menu_selection)
    if choice is MenuOption.SINGLE_PLAYER:
        start_match(ctx, GameMode.SINGLE_PLAYER)
    elif choice is MenuOption.TWO_PLAYER:
        start_match(ctx, GameMode.TWO_PLAYER)
    elif choice is MenuOption.CREDITS:
        ctx.state = transition(ctx.state, Trigger.SHOW_CREDITS)
        logger.info("Showing credits")
        ctx.credits_scroll = float(court.SCREEN_HEIGHT)
    else:
        logger.info("Exit requested from menu")
        ctx.should_exit = True
    return []


def _score_ground_contact(ctx: MatchContext, contact: GroundEvent) -> list[GameEvent]:
    """Throw up dust, then award the point and start the delay if scoring is live."""
    ctx.particles.spawn(contact.pos, court.IMPACT_PARTICLES)
    if ctx.score_delay != 0:
        return []

    decision = referee.award_point(ctx.left, ctx.right, contact.pos.x)
    ctx.serving_side = decision.serving_side

    if decision.match_over:
        ctx.state = transition(ctx.state, Trigger.MATCH_WON)
        logger.info(
            "Game over: %s wins %d-%d", decision.winner.value, ctx.left.score, ctx.right.score
        )
        return [GameOverEvent(winner=decision.winner, left_score=ctx.left.score, right_score=ctx.right.score)]

    ctx.score_delay = court.SCORE_DELAY_FRAMES
    logger.info("Point %s: %d-%d", decision.scorer.value, ctx.left.score, ctx.right.score)
    return [ScoreEvent(scorer=decision.scorer, left_score=ctx.left.score, right_score=ctx.right.score)]


def _simulate_frame(ctx: MatchContext, frame: InputFrame) -> list[GameEvent]:
    events: list[GameEvent] = []

    ctx.match_timer += 1
    ctx.particles.update()

    for player in ctx.players:
        ai = ctx.ai.get(player.side)
        if ai is not None:
            events.extend(ai.update(player, ctx.ball))
        else:
            events.extend(apply_human_input(player, frame))

    for player in ctx.players:
        integrate_player(player)

    if ctx.score_delay > 0:
        ctx.score_delay -= 1
        if ctx.score_delay == 0:
            logger.debug("Serving from %s", ctx.serving_side.value)
            reset_ball(ctx.ball, ctx.serving_side)

    for event in step_ball(ctx.ball, ctx.players, ctx.score_delay, ctx.frames):
        if isinstance(event, GroundEvent):
            events.extend(_score_ground_contact(ctx, event))
        else:
            events.append(event)

    return events


def _tick_playing(ctx: MatchContext, frame: InputFrame) -> list[GameEvent]:
    if frame.was_pressed(Action.PAUSE):
        ctx.paused = not ctx.paused

    if frame.was_pressed(Action.CANCEL):
        _back_to_menu(ctx, Trigger.CANCEL)
        logger.info("Match abandoned")
        return []

    if ctx.paused:
        return []
    return _simulate_frame(ctx, frame)


def _tick_gameover(ctx: MatchContext, frame: InputFrame) -> list[GameEvent]:
    if frame.was_pressed(Action.CONFIRM):
        _back_to_menu(ctx, Trigger.CONFIRM)
        referee.reset_scores(ctx.left, ctx.right)
        ctx.match_timer = 0
    return []


def _tick_credits(ctx: MatchContext, frame: InputFrame) -> list[GameEvent]:
    ctx.credits_scroll = max(ctx.credits_scroll - court.CREDITS_SCROLL_SPEED, court.CREDITS_SCROLL_FLOOR)
    if frame.was_pressed(Action.CONFIRM):
        _back_to_menu(ctx, Trigger.CONFIRM)
    elif frame.was_pressed(Action.CANCEL):
        _back_to_menu(ctx, Trigger.CANCEL)
    return []


_HANDLERS = {
    GameState.MENU: _tick_menu,
    GameState.PLAYING: _tick_playing,
    GameState.GAMEOVER: _tick_gameover,
    GameState.CREDITS: _tick_credits,
}


def tick(ctx: MatchContext, frame: Optional[InputFrame] = None) -> list[GameEvent]:
    """Advance the whole game by one frame and return the events it produced."""
    if frame is None:
        frame = InputFrame()
    ctx.frames += 1
    return _HANDLERS[ctx.state](ctx, frame)


# ---------------------------------------------------------------------------
# Read-only views for the renderer
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlayerView:
    side: Side
    pos: tuple
    vel: tuple
    radius: float
    color: tuple
    score: int
    on_ground: bool


@dataclass(frozen=True)
class BallView:
    pos: tuple
    radius: float
    rotation: float  # degrees in [0, 360)
    trail: tuple  # newest first


@dataclass(frozen=True)
class ParticleView:
    pos: tuple
    color: tuple
    alpha: float
    life: float


@dataclass(frozen=True)
class Snapshot:
    state: GameState
    mode: GameMode
    paused: bool
    menu_selection: int
    credits_scroll: float
    match_timer: int
    score_delay: int
    frames: int
    left: PlayerView
    right: PlayerView
    ball: BallView
    particles: tuple


def _player_view(p: Player) -> PlayerView:
    return PlayerView(
        side=p.side,
        pos=p.pos.as_tuple(),
        vel=p.vel.as_tuple(),
        radius=p.radius,
        color=p.color,
        score=p.score,
        on_ground=p.on_ground,
    )


def snapshot(ctx: MatchContext) -> Snapshot:
    """Copy out everything the renderer needs for this frame."""
    ball = ctx.ball
    return Snapshot(
        state=ctx.state,
        mode=ctx.mode,
        paused=ctx.paused,
        menu_selection=ctx.menu_selection,
        credits_scroll=ctx.credits_scroll,
        match_timer=ctx.match_timer,
        score_delay=ctx.score_delay,
        frames=ctx.frames,
        left=_player_view(ctx.left),
        right=_player_view(ctx.right),
        ball=BallView(
            pos=ball.pos.as_tuple(),
            radius=ball.radius,
            rotation=ball.rotation % 360.0,
            trail=tuple(p.as_tuple() for p in ball.trail),
        ),
        particles=tuple(
            ParticleView(pos=p.pos.as_tuple(), color=p.color, alpha=p.alpha, life=p.life)
            for p in ctx.particles.active()
        ),
    )


# ---------------------------------------------------------------------------
# Headless AI-vs-AI matches
# ---------------------------------------------------------------------------


@dataclass
class MatchResult:
    """Outcome of a headless match."""
    winner: Optional[Side]
    reason: str  # "won" or "timeout"
    left_score: int
    right_score: int
    ticks: int
    point_ticks: list  # frames each point took, in order
    history: list  # one dict per point
    bounces: dict = field(default_factory=dict)  # surface -> count
    jumps: dict = field(default_factory=dict)  # side value -> count
    ball_path: list = field(default_factory=list)  # (x, y) per frame when traced


START_JITTER = 30  # max blob offset from its home spot in headless matches


def simulate_match(
    seed: Optional[int] = None,
    max_ticks: int = 60 * 60 * 10,
    trace: bool = False,
) -> MatchResult:
    """Play a full match with the AI on both sides.

    Blobs start a few pixels off their home spot (seeded) so the first serve
    does not land dead-centre on a blob's head.

    Args:
        seed: Seed for the shared random source.
        max_ticks: Safety limit; the match ends as a "timeout" when reached.
        trace: Record the ball position every frame in ``ball_path``.
    """
    ctx = new_context(seed)
    start_match(ctx, GameMode.TWO_PLAYER)
    ctx.ai = {side: AIPlayer(side, ctx.rng) for side in Side}
    for player in ctx.players:
        player.pos.x += ctx.rng.randint(-START_JITTER, START_JITTER)

    bounces = {"net": 0, "player": 0}
    jumps = {side.value: 0 for side in Side}
    history = []
    point_ticks = []
    ball_path = []
    last_point = 0
    idle = InputFrame()

    while ctx.state is GameState.PLAYING and ctx.match_timer < max_ticks:
        for event in tick(ctx, idle):
            if isinstance(event, BounceEvent):
                bounces[event.surface] += 1
            elif isinstance(event, JumpEvent):
                jumps[event.side.value] += 1
            elif isinstance(event, (ScoreEvent, GameOverEvent)):
                scorer = event.scorer if isinstance(event, ScoreEvent) else event.winner
                history.append({
                    "left": event.left_score,
                    "right": event.right_score,
                    "scorer": scorer.value,
                    "tick": ctx.match_timer,
                })
                point_ticks.append(ctx.match_timer - last_point)
                last_point = ctx.match_timer
        if trace:
            ball_path.append(ctx.ball.pos.as_tuple())

    won_by = referee.winner(ctx.left, ctx.right)
    return MatchResult(
        winner=won_by,
        reason="won" if won_by is not None else "timeout",
        left_score=ctx.left.score,
        right_score=ctx.right.score,
        ticks=ctx.match_timer,
        point_ticks=point_ticks,
        history=history,
        bounces=bounces,
        jumps=jumps,
        ball_path=ball_path,
    )


def compute_match_stats(results: list[MatchResult]) -> dict:
    """Aggregate statistics over several headless matches."""
    point_ticks = [t for r in results for t in r.point_ticks]
    total_points = len(point_ticks)

    return {
        "matches": len(results),
        "left_wins": sum(1 for r in results if r.winner is Side.LEFT),
        "right_wins": sum(1 for r in results if r.winner is Side.RIGHT),
        "timeouts": sum(1 for r in results if r.reason == "timeout"),
        "total_points": total_points,
        "avg_point_ticks": round(sum(point_ticks) / max(total_points, 1), 1),
        "max_point_ticks": max(point_ticks) if point_ticks else 0,
        "avg_match_seconds": round(sum(r.ticks for r in results) / max(len(results), 1) / 60, 1),
        "net_bounces": sum(r.bounces.get("net", 0) for r in results),
        "player_bounces": sum(r.bounces.get("player", 0) for r in results),
        "left_jumps": sum(r.jumps.get("left", 0) for r in results),
        "right_jumps": sum(r.jumps.get("right", 0) for r in results),
    }
