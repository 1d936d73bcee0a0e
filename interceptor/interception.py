"""
Interception Detector
=====================
Decides whether a parabolic shot and a falling body come within a tolerance
of each other *at the same elapsed time*, and reports the closest approach
either way.

Two phases:

1. **Analytic fast path** — only for launches with an upward component.
   With the falling body released from rest, the vertical gap between the
   two bodies closes linearly, so the shot is level with the falling body at

       t = (y_f0 − y_p0) / (v0·sin θ)

   If that instant lies inside the shot's flight and the horizontal gap is
   within tolerance, it is a hit.

2. **Merged-timeline sampled search** — both trajectories are sampled and
   walked with two indices, always advancing the one whose next sample is
   earlier, so the walk follows real time even when the time steps differ.
   The first pair within tolerance is a hit; otherwise the closest pair seen
   is reported.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Optional

from .kinematics import Point
from .trajectory import (
    TrajectoryData, FreeFallData, calculate_trajectory, calculate_free_fall,
)
from .settings import DEFAULT_TOLERANCE


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class InterceptionResult:
    """
    Outcome of an interception check.

    `point`, `time_parabolic` and `time_freefall` are only set on a hit;
    the closest-approach fields are always set. `min_distance` is 0 exactly
    when `intercepted` is true.
    """
    intercepted: bool
    min_distance: float
    time_parabolic_at_min: float
    time_freefall_at_min: float
    point_parabolic_at_min: Point
    point_freefall_at_min: Point
    point: Optional[Point] = None
    time_parabolic: Optional[float] = None
    time_freefall: Optional[float] = None


def _analytic_interception(parabolic: TrajectoryData, freefall: FreeFallData,
                           tolerance: float) -> Optional[InterceptionResult]:
    """Phase 1. Returns a hit, or None when the fast path does not apply."""
    vy = parabolic.vertical_speed
    if vy <= 0:
        return None

    p0 = parabolic.initial_position
    f0 = freefall.initial_position
    t = (f0.y - p0.y) / vy
    if t < 0 or t > parabolic.duration:
        return None

    shot = parabolic.position_at(t)
    target = freefall.position_at(t)
    if abs(shot.x - target.x) > tolerance:
        return None

    hit = Point((shot.x + target.x) / 2.0, shot.y)
    log.debug("analytic interception at t=%.4f s, point=(%.3f, %.3f)",
              t, hit.x, hit.y)
    return InterceptionResult(
        intercepted=True,
        min_distance=0.0,
        time_parabolic_at_min=t,
        time_freefall_at_min=t,
        point_parabolic_at_min=shot,
        point_freefall_at_min=target,
        point=hit,
        time_parabolic=t,
        time_freefall=t,
    )


def _sampled_interception(parabolic: TrajectoryData, freefall: FreeFallData,
                          tolerance: float) -> InterceptionResult:
    """Phase 2. Two-index walk over both materialized trajectories."""
    shot_path = calculate_trajectory(parabolic)
    fall_path = calculate_free_fall(freefall)
    dt_p = parabolic.time_step
    dt_f = freefall.time_step
    n_p, n_f = len(shot_path), len(fall_path)
    tol2 = tolerance ** 2

    i = j = 0
    best_dist2 = np.inf
    best_i = best_j = 0
    steps = 0

    while True:
        a = shot_path[i]
        b = fall_path[j]
        dist2 = (a.x - b.x) ** 2 + (a.y - b.y) ** 2

        if dist2 < best_dist2:
            best_dist2, best_i, best_j = dist2, i, j

        if dist2 <= tol2:
            log.debug("sampled interception at i=%d j=%d after %d steps",
                      i, j, steps)
            return InterceptionResult(
                intercepted=True,
                min_distance=0.0,
                time_parabolic_at_min=i * dt_p,
                time_freefall_at_min=freefall.sample_time(j),
                point_parabolic_at_min=a,
                point_freefall_at_min=b,
                point=a.midpoint(b),
                time_parabolic=i * dt_p,
                time_freefall=freefall.sample_time(j),
            )

        if i + 1 >= n_p or j + 1 >= n_f:
            break

        # Ties advance the free-fall index.
        if (i + 1) * dt_p < (j + 1) * dt_f:
            i += 1
        else:
            j += 1
        steps += 1

    min_distance = float(np.sqrt(best_dist2))
    log.debug("no interception after %d steps, closest %.4f m at i=%d j=%d",
              steps, min_distance, best_i, best_j)
    return InterceptionResult(
        intercepted=False,
        min_distance=min_distance,
        time_parabolic_at_min=best_i * dt_p,
        time_freefall_at_min=freefall.sample_time(best_j),
        point_parabolic_at_min=shot_path[best_i],
        point_freefall_at_min=fall_path[best_j],
    )


def detect_interception(parabolic: TrajectoryData, freefall: FreeFallData,
                        tolerance: float = DEFAULT_TOLERANCE) -> InterceptionResult:
    """
    Check whether the shot meets the falling body within `tolerance` meters.

    Parameters
    ----------
    parabolic : launch of the intercepting projectile
    freefall : release of the falling target
    tolerance : maximum center-to-center distance counted as a hit (m)

    Returns
    -------
    InterceptionResult, never raises for a miss.
    """
    if tolerance < 0:
        raise ValueError(f"tolerance must be >= 0, got {tolerance!r}")
    if parabolic.time_step <= 0 or freefall.time_step <= 0:
        raise ValueError("time_step must be > 0 for both trajectories")
    if parabolic.max_time is not None and parabolic.max_time < 0:
        raise ValueError(f"max_time must be >= 0, got {parabolic.max_time!r}")

    result = _analytic_interception(parabolic, freefall, tolerance)
    if result is not None:
        return result
    return _sampled_interception(parabolic, freefall, tolerance)
