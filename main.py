#!/usr/bin/env python3
"""CLI entry point for Blob Volley.

Usage:
    python main.py play [seed]          Launch the Pygame game
    python main.py game [seed]          Run an AI vs AI match (text mode) and print stats
    python main.py analyze [matches]    Generate analysis charts from AI matches
    python main.py test                 Run all tests

Set VOLLEY_LOG_LEVEL=DEBUG (or INFO) to see engine logging.
"""

import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def _int_arg(index, default=None):
    if len(sys.argv) > index:
        try:
            return int(sys.argv[index])
        except ValueError:
            print(f"Expected an integer, got {sys.argv[index]!r}")
            sys.exit(1)
    return default


def cmd_play():
    """Launch the Pygame game."""
    print("Launching Blob Volley...")
    print("Controls: P1 W/A/D  P2 UP/LEFT/RIGHT  P=pause  ENTER=confirm  ESC=menu")
    print("-" * 60)
    from arcade.visualizer import run_visualizer
    run_visualizer(seed=_int_arg(2))


def cmd_game():
    """Run an AI vs AI match in text mode and print stats."""
    from volley.game import compute_match_stats, simulate_match

    seed = _int_arg(2, 42)

    print("=" * 60)
    print("  AI BLOB VOLLEY MATCH")
    print("=" * 60)
    print(f"\n  Seed: {seed}\n")

    result = simulate_match(seed=seed)

    for i, point in enumerate(result.history):
        seconds = result.point_ticks[i] / 60
        print(f"  Point {i + 1:2d}: {point['scorer']:5s} scores after {seconds:5.1f}s  "
              f"[{point['left']}-{point['right']}]")

    s = compute_match_stats([result])
    print()
    print(f"  FINAL SCORE: {result.left_score} - {result.right_score}")
    if result.winner is None:
        print(f"  NO WINNER ({result.reason} after {result.ticks} frames)")
    else:
        print(f"  WINNER: {result.winner.value}")
    print()
    print(f"  Match length: {s['avg_match_seconds']}s")
    print(f"  Avg point: {s['avg_point_ticks']} frames  |  Longest: {s['max_point_ticks']} frames")
    print(f"  Blob hits: {s['player_bounces']}  |  Net bounces: {s['net_bounces']}")
    print(f"  Jumps: left {s['left_jumps']}  |  right {s['right_jumps']}")
    print()
    print("  Usage: python main.py game [seed]")
    print("=" * 60)


def cmd_analyze():
    """Generate all analysis charts."""
    print("Generating analysis charts...")
    print("-" * 60)
    from arcade.analysis import generate_all_charts
    output_dir = os.path.join(os.path.dirname(__file__), "output")
    paths = generate_all_charts(output_dir=output_dir, n_matches=_int_arg(2, 20))
    print(f"\nDone! {len(paths)} charts saved to {output_dir}/")


def cmd_test():
    """Run all tests."""
    import subprocess
    print("Running tests...")
    print("-" * 60)
    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-v"],
        cwd=os.path.dirname(os.path.abspath(__file__)),
    )
    sys.exit(result.returncode)


COMMANDS = {
    "play": cmd_play,
    "game": cmd_game,
    "analyze": cmd_analyze,
    "test": cmd_test,
}


def main():
    logging.basicConfig(
        level=os.environ.get("VOLLEY_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        print(__doc__)
        print("Available commands:")
        for name, func in COMMANDS.items():
            print(f"  {name:12s} {func.__doc__}")
        sys.exit(1)

    COMMANDS[sys.argv[1]]()


if __name__ == "__main__":
    main()
