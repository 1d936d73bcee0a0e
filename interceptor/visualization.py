"""
Visualization Engine
====================
Plots and playback for an engagement (shot vs falling target):
  1. Playback snapshot — what is visible at a given elapsed time
  2. Explosion envelope — blast radius over its lifetime
  3. Snapshot renderer — draws one snapshot on any matplotlib Axes
  4. Static engagement plot
  5. Sampler validation plot
  6. Animated engagement (saved as GIF)

Rendering never recomputes physics: it only consumes point lists and the
interception result.
"""

import os
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from dataclasses import dataclass
from typing import List

from .kinematics import Point
from .trajectory import TrajectoryData, FreeFallData, points_to_arrays
from .interception import InterceptionResult
from .settings import (
    ANIMATION_FRAMES, ANIMATION_FPS, EXPLOSION_MAX_SIZE, EXPLOSION_DURATION,
)


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'shot_color': '#00d4ff',
    'target_color': '#ff6b35',
    'hit_color': '#ffeb3b',
    'miss_color': '#ff5252',
    'launcher_color': '#7f8c8d',
}


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


# ══════════════════════════════════════════════════════════════════════════
#  1. Playback Snapshot
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class EngagementSnapshot:
    """Everything a renderer needs at one instant of playback."""
    elapsed: float
    shot_points: List[Point]        # visible prefix of the shot
    target_points: List[Point]      # visible prefix of the falling target
    result: InterceptionResult
    exploded: bool
    explosion_radius: float

    @property
    def shot_position(self) -> Point:
        return self.shot_points[-1]

    @property
    def target_position(self) -> Point:
        return self.target_points[-1]


def _visible_count(elapsed: float, time_step: float, total: int) -> int:
    # Small epsilon so that e.g. 0.3 / 0.1 lands on sample 3, not 2.
    index = int(np.floor(elapsed / time_step + 1e-9)) if elapsed > 0 else 0
    return max(1, min(total, index + 1))


def explosion_radius(progress: float,
                     max_size: float = EXPLOSION_MAX_SIZE) -> float:
    """
    Blast radius at `progress` ∈ [0, 1] of the explosion's lifetime.

    Grows over the first 30%, holds until 80%, then fades to nothing.
    """
    progress = min(max(progress, 0.0), 1.0)
    if progress < 0.3:
        scale = progress / 0.3
    elif progress < 0.8:
        scale = 1.0
    else:
        scale = 1.0 - (progress - 0.8) / 0.2
    return scale * max_size


def build_snapshot(parabolic: TrajectoryData, freefall: FreeFallData,
                   shot_path: List[Point], fall_path: List[Point],
                   result: InterceptionResult,
                   elapsed: float) -> EngagementSnapshot:
    """
    Cut both trajectories at `elapsed` seconds.

    Once a hit time is reached both bodies stop at the hit and the explosion
    starts; it lasts EXPLOSION_DURATION seconds.
    """
    n_shot = _visible_count(elapsed, parabolic.time_step, len(shot_path))
    n_target = _visible_count(elapsed, freefall.time_step, len(fall_path))
    if elapsed >= freefall.fall_time:
        n_target = len(fall_path)
    exploded = False
    radius = 0.0

    if result.intercepted and elapsed >= result.time_parabolic:
        n_shot = _visible_count(result.time_parabolic, parabolic.time_step,
                                len(shot_path))
        n_target = _visible_count(result.time_freefall, freefall.time_step,
                                  len(fall_path))
        exploded = True
        radius = explosion_radius(
            (elapsed - result.time_parabolic) / EXPLOSION_DURATION)

    return EngagementSnapshot(
        elapsed=elapsed,
        shot_points=list(shot_path[:n_shot]),
        target_points=list(fall_path[:n_target]),
        result=result,
        exploded=exploded,
        explosion_radius=radius,
    )


# ══════════════════════════════════════════════════════════════════════════
#  2. Snapshot Renderer
# ══════════════════════════════════════════════════════════════════════════

def render_snapshot(snapshot: EngagementSnapshot, ax) -> list:
    """
    Draw one snapshot on `ax` and return the created artists.

    The caller owns the axes (limits, style); this only adds artists.
    """
    artists = []
    sx, sy = points_to_arrays(snapshot.shot_points)
    tx, ty = points_to_arrays(snapshot.target_points)

    artists += ax.plot(sx[0], sy[0], 's', color=STYLE['launcher_color'],
                       markersize=12, zorder=3)
    artists += ax.plot(sx, sy, color=STYLE['shot_color'], linewidth=2, alpha=0.8)
    artists += ax.plot(tx, ty, color=STYLE['target_color'], linewidth=2,
                       alpha=0.8, linestyle='--')

    if snapshot.exploded:
        hit = snapshot.result.point
        artists += ax.plot(hit.x, hit.y, '*', color=STYLE['hit_color'],
                           markersize=max(snapshot.explosion_radius, 1.0),
                           zorder=6)
    else:
        artists += ax.plot(sx[-1], sy[-1], 'o', color=STYLE['shot_color'],
                           markersize=8, zorder=5)
        artists += ax.plot(tx[-1], ty[-1], 'v', color=STYLE['target_color'],
                           markersize=9, zorder=5)

    return artists


def _draw_closest_approach(ax, result: InterceptionResult):
    a = result.point_parabolic_at_min
    b = result.point_freefall_at_min
    ax.plot([a.x, b.x], [a.y, b.y], ':', color=STYLE['miss_color'],
            linewidth=1.5, label=f'Closest approach ({result.min_distance:.2f} m)')


def _fit_limits(ax, shot_path, fall_path):
    sx, sy = points_to_arrays(shot_path)
    tx, ty = points_to_arrays(fall_path)
    xs = np.concatenate([sx, tx])
    ys = np.concatenate([sy, ty])
    span_x = max(np.ptp(xs), 1.0)
    span_y = max(np.ptp(ys), 1.0)
    ax.set_xlim(xs.min() - 0.05 * span_x, xs.max() + 0.05 * span_x)
    ax.set_ylim(min(0.0, ys.min()), ys.max() + 0.15 * span_y)


# ══════════════════════════════════════════════════════════════════════════
#  3. Static Engagement Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_engagement(shot_path: List[Point], fall_path: List[Point],
                    result: InterceptionResult, title: str = 'Engagement',
                    save_path: str = None, show: bool = False) -> plt.Figure:
    """Full shot and fall paths with the hit or the closest approach marked."""
    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    sx, sy = points_to_arrays(shot_path)
    tx, ty = points_to_arrays(fall_path)

    ax.plot(sx, sy, color=STYLE['shot_color'], linewidth=2.5, label='Shot')
    ax.plot(tx, ty, color=STYLE['target_color'], linewidth=2.5,
            linestyle='--', label='Falling target')
    ax.plot(sx[0], sy[0], 's', color=STYLE['launcher_color'], markersize=12,
            label='Launcher', zorder=5)
    ax.plot(tx[0], ty[0], 'v', color=STYLE['target_color'], markersize=10,
            label='Release', zorder=5)

    if result.intercepted:
        ax.plot(result.point.x, result.point.y, '*', color=STYLE['hit_color'],
                markersize=20, label='Interception', zorder=6)
        status = (f'HIT at t={result.time_parabolic:.2f}s '
                  f'({result.point.x:.2f}, {result.point.y:.2f}) m')
    else:
        _draw_closest_approach(ax, result)
        status = f'MISS, closest approach {result.min_distance:.2f} m'

    ax.set_xlabel('x (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title(f'{title} — {status}', fontsize=13, fontweight='bold')
    ax.legend(loc='upper right', fontsize=10,
              facecolor='#1a1a1a', edgecolor='#444', labelcolor=STYLE['text_color'])
    ax.set_ylim(bottom=0)

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])
    if show:
        plt.show()
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Sampler Validation Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_sampler_validation(validation_results,
                            save_path: str = None) -> plt.Figure:
    """Closed-form vs sampled apex, and the per-angle apex error."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 6))
    _apply_dark_style(fig, axes)

    angles = [v.angle_deg for v in validation_results]
    ref_heights = [v.ref_max_height for v in validation_results]
    sim_heights = [v.sim_max_height for v in validation_results]
    errors = [v.height_error_pct for v in validation_results]

    ax = axes[0]
    ax.plot(angles, ref_heights, 'o-', color='#ffeb3b', linewidth=2,
            markersize=8, label='Closed form')
    ax.plot(angles, sim_heights, 's--', color=STYLE['shot_color'], linewidth=2,
            markersize=8, label='Sampled')
    ax.set_xlabel('Launch Angle (°)')
    ax.set_ylabel('Max Height (m)')
    ax.set_title('Apex Validation', fontweight='bold')
    ax.legend(fontsize=10, facecolor='#1a1a1a', edgecolor='#444',
              labelcolor=STYLE['text_color'])

    ax = axes[1]
    colors = ['#00e676' if abs(e) < 1 else '#ff5252' for e in errors]
    ax.bar(angles, errors, color=colors, alpha=0.8, width=4)
    ax.axhline(y=0, color='#888', linewidth=0.5)
    ax.set_xlabel('Launch Angle (°)')
    ax.set_ylabel('Apex Error (%)')
    ax.set_title('Sampling Error', fontweight='bold')

    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  5. Animated Engagement (GIF)
# ══════════════════════════════════════════════════════════════════════════

def create_engagement_animation(parabolic: TrajectoryData, freefall: FreeFallData,
                                shot_path: List[Point], fall_path: List[Point],
                                result: InterceptionResult,
                                save_path: str = 'outputs/engagement_anim.gif',
                                frames: int = ANIMATION_FRAMES,
                                fps: int = ANIMATION_FPS) -> str:
    """Create an animated GIF replaying the engagement snapshot by snapshot."""
    from matplotlib.animation import FuncAnimation, PillowWriter

    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)
    _fit_limits(ax, shot_path, fall_path)
    ax.set_xlabel('x (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title('Engagement Playback', fontsize=14, fontweight='bold')

    end_time = max((len(shot_path) - 1) * parabolic.time_step,
                   (len(fall_path) - 1) * freefall.time_step)
    if result.intercepted:
        end_time = result.time_parabolic + EXPLOSION_DURATION
    times = np.linspace(0.0, end_time, frames)

    time_text = ax.text(0.02, 0.95, '', transform=ax.transAxes,
                        color=STYLE['text_color'], fontsize=11,
                        fontfamily='monospace')
    drawn: list = []

    def animate(frame_idx):
        for artist in drawn:
            artist.remove()
        drawn.clear()
        snap = build_snapshot(parabolic, freefall, shot_path, fall_path,
                              result, float(times[frame_idx]))
        drawn.extend(render_snapshot(snap, ax))
        label = 'HIT' if snap.exploded else ''
        time_text.set_text(f't={snap.elapsed:.2f}s  {label}')
        return drawn + [time_text]

    anim = FuncAnimation(fig, animate, frames=len(times),
                         interval=1000 // fps, blit=False)
    anim.save(save_path, writer=PillowWriter(fps=fps),
              savefig_kwargs={'facecolor': STYLE['bg_color']})
    plt.close(fig)
    return save_path
