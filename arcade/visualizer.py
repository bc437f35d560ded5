"""Pygame front-end — keyboard input, drawing the snapshot, sound effects."""

import math
import os
import sys

try:
    import pygame
except ImportError:
    pygame = None

from volley.controls import Action, InputFrame
from volley.game import GameEvent, Snapshot, new_context, snapshot, tick
from volley.types import BounceEvent, GameOverEvent, GameState, JumpEvent, MenuOption, ScoreEvent
from volley import court

APP_NAME = "Blob Volley"
FPS = 60
RESOURCE_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "resources")

# Colors
SKY_COLOR = (135, 190, 235)
LINE_GREEN = (0, 228, 48)
NET_GRAY = (130, 130, 130)
NET_CAP = (255, 161, 0)
BALL_ORANGE = (255, 140, 60)
BALL_STRIPE = (220, 100, 40)
TRAIL_GRAY = (200, 200, 200)
TEXT_WHITE = (245, 245, 245)
TEXT_DIM = (160, 160, 160)
MENU_ACTIVE = (230, 41, 55)
GOLD = (255, 203, 0)

MENU_LABELS = {
    MenuOption.SINGLE_PLAYER: "Single Player (vs Computer)",
    MenuOption.TWO_PLAYER: "Two Players (Hotseat)",
    MenuOption.CREDITS: "Credits",
    MenuOption.EXIT: "Exit",
}

CREDITS_LINES = [
    (APP_NAME, 50, TEXT_WHITE, 100),
    ("INSPIRED BY", 30, TEXT_DIM, 50),
    ("Arcade Volley, 1989", 25, TEXT_WHITE, 50),
    ("Blobby Volley, 2000", 25, TEXT_WHITE, 80),
    ("POWERED BY", 30, TEXT_DIM, 50),
    ("pygame", 40, MENU_ACTIVE, 100),
    ("THANK YOU FOR PLAYING!", 40, GOLD, 100),
    ("Press ENTER or ESC to return", 20, TEXT_DIM, 0),
]

SOUND_FILES = {
    "jump": "jump.wav",
    "bounce": "bounce.wav",
    "score": "score.wav",
    "gameover": "gameover.wav",
}

# Background music per screen; other states are silent
MUSIC_FILES = {
    GameState.MENU: "hymn_to_aurora.mod",
    GameState.CREDITS: "space_debris.mod",
}


def _key_bindings():
    # Built lazily: pygame key constants only exist once pygame is imported
    return {
        pygame.K_a: Action.P1_LEFT,
        pygame.K_d: Action.P1_RIGHT,
        pygame.K_w: Action.P1_JUMP,
        pygame.K_LEFT: Action.P2_LEFT,
        pygame.K_RIGHT: Action.P2_RIGHT,
        pygame.K_p: Action.PAUSE,
        pygame.K_RETURN: Action.CONFIRM,
        pygame.K_ESCAPE: Action.CANCEL,
    }


def _actions_for_key(key, bindings) -> set:
    """Logical actions a single key maps to. UP/DOWN serve both the menu and P2."""
    if key == pygame.K_UP:
        return {Action.P2_JUMP, Action.MENU_UP}
    if key == pygame.K_DOWN:
        return {Action.MENU_DOWN}
    action = bindings.get(key)
    return {action} if action else set()


def read_input(pressed_keys, held_keys, bindings) -> InputFrame:
    """Build the tick's InputFrame from KEYDOWN keys and the held-key state."""
    pressed = set()
    for key in pressed_keys:
        pressed |= _actions_for_key(key, bindings)
    held = {action for key, action in bindings.items() if held_keys[key]}
    if held_keys[pygame.K_UP]:
        held.add(Action.P2_JUMP)
    return InputFrame(held=frozenset(held), pressed=frozenset(pressed))


def load_sounds() -> dict:
    """Load whichever sound files exist. Missing files just stay silent."""
    sounds = {}
    try:
        pygame.mixer.init()
    except pygame.error as exc:
        print(f"Audio disabled: {exc}")
        return sounds
    for name, filename in SOUND_FILES.items():
        path = os.path.join(RESOURCE_DIR, filename)
        if os.path.exists(path):
            sounds[name] = pygame.mixer.Sound(path)
    return sounds


def music_track(state: GameState):
    """Path of the background track for ``state``, or None if it has none or the file is missing."""
    filename = MUSIC_FILES.get(state)
    if filename is None:
        return None
    path = os.path.join(RESOURCE_DIR, filename)
    return path if os.path.exists(path) else None


def update_music(state: GameState, current):
    """Start, switch or stop the looping background music when the screen changes.

    Returns the track now selected so the caller can pass it back next frame.
    """
    track = music_track(state)
    if track == current:
        return current
    pygame.mixer.music.stop()
    if track is not None:
        try:
            pygame.mixer.music.load(track)
            pygame.mixer.music.play(-1)
        except pygame.error as exc:
            print(f"Music disabled for {os.path.basename(track)}: {exc}")
    return track


def play_events(events: list[GameEvent], sounds: dict) -> None:
    for e in events:
        if isinstance(e, JumpEvent):
            name = "jump"
        elif isinstance(e, BounceEvent):
            name = "bounce"
        elif isinstance(e, ScoreEvent):
            name = "score"
        elif isinstance(e, GameOverEvent):
            name = "gameover"
        else:
            continue
        sound = sounds.get(name)
        if sound is not None:
            sound.play()


def format_clock(frames: int) -> str:
    """Match timer as MM:SS."""
    total_seconds = frames // FPS
    return f"{total_seconds // 60:02d}:{total_seconds % 60:02d}"


def _text_center(surface, font, text, y, color):
    img = font.render(text, True, color)
    surface.blit(img, (court.SCREEN_WIDTH // 2 - img.get_width() // 2, y))


def _draw_court(surface):
    pygame.draw.rect(
        surface, court.GROUND_COLOR,
        (0, court.GROUND_LEVEL, court.SCREEN_WIDTH, court.SCREEN_HEIGHT - court.GROUND_LEVEL),
    )
    pygame.draw.line(surface, LINE_GREEN, (0, court.GROUND_LEVEL), (court.SCREEN_WIDTH, court.GROUND_LEVEL), 3)

    net_left = int(court.NET_X - court.NET_WIDTH / 2)
    net_top = int(court.GROUND_LEVEL - court.NET_HEIGHT)
    pygame.draw.rect(surface, NET_GRAY, (net_left, net_top, int(court.NET_WIDTH), int(court.NET_HEIGHT)))
    pygame.draw.rect(surface, NET_CAP, (net_left - 2, net_top - 5, int(court.NET_WIDTH) + 4, 5))


def _draw_player(surface, view, frames):
    x, y = int(view.pos[0]), int(view.pos[1])
    r = int(view.radius)

    # Shadow shrinks as the blob rises
    height = court.GROUND_LEVEL - view.pos[1] - view.radius
    scale = min(max(1.0 - height / 200.0, 0.4), 1.0)
    shadow = pygame.Surface((int(r * 2.4 * scale), int(r * scale)), pygame.SRCALPHA)
    pygame.draw.ellipse(shadow, (0, 0, 0, int(255 * 0.3 * scale)), shadow.get_rect())
    surface.blit(shadow, (x - shadow.get_width() // 2, int(court.GROUND_LEVEL - r * 0.3) - shadow.get_height() // 2))

    pygame.draw.circle(surface, view.color, (x, y), r)
    pygame.draw.circle(surface, (0, 0, 0), (x, y), r, 1)

    pulse = 0.4 + math.sin(frames * 0.05) * 0.1
    hx = x + int(-r * 0.35 + view.vel[0] * 0.5)
    hy = y + int(-r * 0.35 - abs(view.vel[1]) * 0.3)
    glow = pygame.Surface((r, r), pygame.SRCALPHA)
    pygame.draw.circle(glow, (255, 255, 255, int(255 * pulse * 0.8)), (r // 2, r // 2), r // 4)
    surface.blit(glow, (hx - r // 2, hy - r // 2))


def _draw_ball(surface, ball):
    r = int(ball.radius)
    for i, (tx, ty) in enumerate(ball.trail):
        fade = 1.0 - i / court.TRAIL_LENGTH
        ghost = pygame.Surface((r * 2, r * 2), pygame.SRCALPHA)
        pygame.draw.circle(ghost, (*TRAIL_GRAY, int(255 * fade * 0.6)), (r, r), int(r * (1.0 - i / court.TRAIL_LENGTH * 0.5)))
        surface.blit(ghost, (int(tx) - r, int(ty) - r))

    x, y = int(ball.pos[0]), int(ball.pos[1])
    pygame.draw.circle(surface, BALL_ORANGE, (x, y), r)
    pygame.draw.circle(surface, (255, 255, 255), (x - r // 3, y - r // 3), r // 3)

    # Four stripes turning with the ball's rotation
    for i in range(4):
        angle = math.radians(ball.rotation + i * 90.0)
        points = []
        for seg in range(9):
            t = seg / 8
            curve = math.radians((t - 0.5) * 160.0)
            reach = r * (0.85 - abs(t - 0.5) * 0.4)
            points.append((x + math.cos(angle + curve) * reach, y + math.sin(angle + curve) * reach))
        pygame.draw.lines(surface, BALL_STRIPE, False, points, 2)


def _draw_particles(surface, particles):
    for p in particles:
        size = max(1, int(3 * p.life))
        dot = pygame.Surface((size * 2, size * 2), pygame.SRCALPHA)
        pygame.draw.circle(dot, (*p.color, int(255 * p.alpha)), (size, size), size)
        surface.blit(dot, (int(p.pos[0]) - size, int(p.pos[1]) - size))


def _draw_score(surface, fonts, snap: Snapshot):
    surface.blit(fonts["xl"].render(str(snap.left.score), True, snap.left.color), (court.SCREEN_WIDTH // 4 - 20, 30))
    surface.blit(fonts["xl"].render(str(snap.right.score), True, snap.right.color), (court.SCREEN_WIDTH * 3 // 4 - 20, 30))
    _text_center(surface, fonts["xl"], "-", 30, TEXT_DIM)
    _text_center(surface, fonts["lg"], format_clock(snap.match_timer), 100, TEXT_WHITE)


def _draw_menu(surface, fonts, snap: Snapshot):
    _text_center(surface, fonts["xl"], APP_NAME, 80, TEXT_WHITE)
    for option, label in MENU_LABELS.items():
        color = MENU_ACTIVE if option.value == snap.menu_selection else TEXT_DIM
        _text_center(surface, fonts["lg"], label, 200 + option.value * 50, color)
    _text_center(surface, fonts["sm"], "Use UP/DOWN to select, ENTER to start", 450, TEXT_DIM)
    surface.blit(fonts["sm"].render("P1: W (jump), A/D (move)", True, TEXT_DIM), (50, court.SCREEN_HEIGHT - 60))
    surface.blit(fonts["sm"].render("P2: UP (jump), LEFT/RIGHT (move)", True, TEXT_DIM), (50, court.SCREEN_HEIGHT - 35))


def _draw_credits(surface, fonts, snap: Snapshot):
    y = int(snap.credits_scroll)
    for text, size, color, gap in CREDITS_LINES:
        font = fonts["xl"] if size >= 50 else fonts["lg"] if size >= 30 else fonts["sm"]
        _text_center(surface, font, text, y, color)
        y += gap


def draw(surface, fonts, snap: Snapshot):
    surface.fill(SKY_COLOR)

    if snap.state is GameState.MENU:
        _draw_menu(surface, fonts, snap)
        return
    if snap.state is GameState.CREDITS:
        _draw_credits(surface, fonts, snap)
        return

    _draw_court(surface)
    _draw_player(surface, snap.left, snap.frames)
    _draw_player(surface, snap.right, snap.frames)
    if snap.state is GameState.PLAYING:
        _draw_particles(surface, snap.particles)
    _draw_ball(surface, snap.ball)
    _draw_score(surface, fonts, snap)

    if snap.state is GameState.PLAYING and snap.paused:
        _text_center(surface, fonts["xl"], "PAUSED", court.SCREEN_HEIGHT // 2, TEXT_DIM)
        _text_center(surface, fonts["sm"], "Press P to continue", court.SCREEN_HEIGHT // 2 + 60, TEXT_WHITE)
    elif snap.state is GameState.GAMEOVER:
        who = "PLAYER 1" if snap.left.score >= court.WIN_SCORE else "PLAYER 2"
        _text_center(surface, fonts["xl"], f"{who} WINS!", court.SCREEN_HEIGHT // 2 - 80, GOLD)
        _text_center(surface, fonts["sm"], "Press ENTER to return to menu", court.SCREEN_HEIGHT // 2 + 20, TEXT_WHITE)


def run_visualizer(seed=None):
    """Open the game window and run the 60 Hz loop until exit."""
    if pygame is None:
        print("ERROR: pygame is not installed. Run: pip install pygame")
        return

    pygame.init()
    screen = pygame.display.set_mode((court.SCREEN_WIDTH, court.SCREEN_HEIGHT))
    pygame.display.set_caption(APP_NAME)
    clock = pygame.time.Clock()
    fonts = {
        "sm": pygame.font.SysFont("monospace", 18),
        "lg": pygame.font.SysFont("monospace", 30, bold=True),
        "xl": pygame.font.SysFont("monospace", 60, bold=True),
    }
    sounds = load_sounds()
    music_enabled = pygame.mixer.get_init() is not None
    music = None
    bindings = _key_bindings()

    ctx = new_context(seed)
    running = True

    while running and not ctx.should_exit:
        clock.tick(FPS)

        pressed_keys = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                pressed_keys.append(event.key)

        frame = read_input(pressed_keys, pygame.key.get_pressed(), bindings)
        events = tick(ctx, frame)
        play_events(events, sounds)
        if music_enabled:
            music = update_music(ctx.state, music)

        draw(screen, fonts, snapshot(ctx))
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    run_visualizer(int(sys.argv[1]) if len(sys.argv) > 1 else None)
