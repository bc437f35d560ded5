"""Matplotlib analysis charts — headless AI-vs-AI matches: outcomes, point length, ball paths."""

import os

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

from volley.game import compute_match_stats, simulate_match
from volley import court

LEFT_COLOR = "#0079f1"
RIGHT_COLOR = "#e62937"


def _style_chart(ax, title):
    """Apply dark theme styling to chart."""
    ax.set_facecolor("#0f0f1a")
    ax.set_title(title, color="#e0e0e0", fontsize=13, fontweight="bold", pad=12)
    ax.tick_params(colors="#888888", labelsize=9)
    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)
    ax.spines["bottom"].set_color("#333333")
    ax.spines["left"].set_color("#333333")
    ax.xaxis.label.set_color("#aaaaaa")
    ax.yaxis.label.set_color("#aaaaaa")


def _save(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, facecolor=fig.get_facecolor())
    return fig


def run_matches(n_matches=20, seed=0, max_ticks=60 * 60 * 10):
    """Play ``n_matches`` seeded headless matches."""
    return [simulate_match(seed=seed + i, max_ticks=max_ticks) for i in range(n_matches)]


def chart_final_scores(results, save_path=None):
    """Chart 1: Final score of every match, left vs right."""
    left = np.array([r.left_score for r in results])
    right = np.array([r.right_score for r in results])
    x = np.arange(len(results))

    fig, ax = plt.subplots(figsize=(9, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Final Scores (AI vs AI)")

    width = 0.4
    ax.bar(x - width / 2, left, width, color=LEFT_COLOR, label="Left blob")
    ax.bar(x + width / 2, right, width, color=RIGHT_COLOR, label="Right blob")
    ax.axhline(court.WIN_SCORE, color="#ffc107", linestyle="--", linewidth=1, alpha=0.7)

    ax.set_xlabel("Match")
    ax.set_ylabel("Points")
    ax.set_xticks(x)
    ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)
    ax.grid(True, alpha=0.15, axis="y")
    return _save(fig, save_path)


def chart_point_duration(results, save_path=None):
    """Chart 2: How long a point lasts, in seconds of game time."""
    seconds = np.array([t for r in results for t in r.point_ticks], dtype=float) / 60.0

    fig, ax = plt.subplots(figsize=(8, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Point Duration Distribution")

    if seconds.size:
        ax.hist(seconds, bins=20, color="#4ecdc4", alpha=0.8, edgecolor="#333")
        mean = float(np.mean(seconds))
        ax.axvline(mean, color="#e94560", linestyle="--", linewidth=1.5, label=f"mean {mean:.1f}s")
        ax.legend(facecolor="#1a1a2e", edgecolor="#333", labelcolor="#e0e0e0", fontsize=9)

    ax.set_xlabel("Point duration (s)")
    ax.set_ylabel("Frequency")
    ax.grid(True, alpha=0.15, axis="y")
    return _save(fig, save_path)


def chart_ball_path(seed=0, frames=900, save_path=None):
    """Chart 3: Ball trajectory over the opening seconds of one match."""
    result = simulate_match(seed=seed, max_ticks=frames, trace=True)
    path = np.array(result.ball_path) if result.ball_path else np.zeros((0, 2))

    fig, ax = plt.subplots(figsize=(10, 7.5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, f"Ball Path — first {frames / 60:.0f}s (seed {seed})")

    ax.axhline(court.GROUND_LEVEL, color="#8b6b4a", linewidth=3)
    ax.add_patch(plt.Rectangle(
        (court.NET_X - court.NET_WIDTH / 2, court.GROUND_LEVEL - court.NET_HEIGHT),
        court.NET_WIDTH, court.NET_HEIGHT, color="#aaaaaa",
    ))
    if len(path):
        colors = np.linspace(0, 1, len(path))
        ax.scatter(path[:, 0], path[:, 1], c=colors, cmap="plasma", s=3)

    ax.set_xlim(0, court.SCREEN_WIDTH)
    ax.set_ylim(court.SCREEN_HEIGHT, 0)  # screen y grows downward
    ax.set_aspect("equal")
    ax.set_xlabel("x (px)")
    ax.set_ylabel("y (px)")
    return _save(fig, save_path)


def chart_event_counts(results, save_path=None):
    """Chart 4: Average bounces and jumps per match."""
    stats = compute_match_stats(results)
    n = max(stats["matches"], 1)
    labels = ["Net bounces", "Blob hits", "Left jumps", "Right jumps"]
    values = np.array([
        stats["net_bounces"], stats["player_bounces"], stats["left_jumps"], stats["right_jumps"],
    ]) / n

    fig, ax = plt.subplots(figsize=(7, 5))
    fig.set_facecolor("#0f0f1a")
    _style_chart(ax, "Events per Match")

    bars = ax.barh(labels, values, color=["#ffc107", "#28a745", LEFT_COLOR, RIGHT_COLOR], alpha=0.85)
    for bar, value in zip(bars, values):
        ax.text(bar.get_width() + 0.3, bar.get_y() + bar.get_height() / 2,
                f"{value:.1f}", va="center", fontsize=10, color="#e0e0e0")

    ax.set_xlabel("Average count")
    ax.invert_yaxis()
    ax.grid(True, alpha=0.15, axis="x")
    return _save(fig, save_path)


def generate_all_charts(output_dir=".", n_matches=20, seed=0):
    """Generate all analysis charts and save to output directory."""
    os.makedirs(output_dir, exist_ok=True)
    paths = []

    print(f"  Running {n_matches} AI matches...")
    results = run_matches(n_matches=n_matches, seed=seed)
    stats = compute_match_stats(results)
    print(f"  Left wins: {stats['left_wins']}  Right wins: {stats['right_wins']}  "
          f"Timeouts: {stats['timeouts']}")

    charts = [
        ("chart_final_scores.png", lambda p: chart_final_scores(results, save_path=p)),
        ("chart_point_duration.png", lambda p: chart_point_duration(results, save_path=p)),
        ("chart_ball_path.png", lambda p: chart_ball_path(seed=seed, save_path=p)),
        ("chart_event_counts.png", lambda p: chart_event_counts(results, save_path=p)),
    ]
    for filename, make in charts:
        path = os.path.join(output_dir, filename)
        make(path)
        paths.append(path)
        print(f"  Saved: {path}")

    plt.close("all")
    return paths

