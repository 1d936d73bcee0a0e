"""
Trajectory Sampler
==================
Discretizes continuous motion into an ordered list of absolute points at a
fixed time step:

1. **Parabolic** — a launch from `initial_position` with speed v0 at angle θ.
2. **Free fall** — a body released from rest (optionally drifting at a
   constant horizontal speed) that falls to the ground at y = 0.

Both samplers stop at the first sample that would go underground and
replace it with the linearly interpolated ground crossing, so a sequence
never contains a point below its ground level. Sample times are k·dt.

Output: plain lists of `Point`, fully materialized and safe to reuse.
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .kinematics import (
    Point, ORIGIN, calculate_range, calculate_max_height,
    calculate_flight_time, calculate_position,
)
from .settings import GRAVITY, DEFAULT_TIME_STEP


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrajectoryData:
    """
    Launch configuration for parabolic motion.
    """
    initial_speed: float                       # m/s
    angle: float                               # degrees above horizontal
    initial_position: Point = ORIGIN           # launch point (absolute)
    time_step: float = DEFAULT_TIME_STEP       # s
    max_time: Optional[float] = None           # s  overrides flight time

    @property
    def duration(self) -> float:
        """Sampling horizon: `max_time` when given, else the flight time."""
        if self.max_time is not None:
            return self.max_time
        return calculate_flight_time(self.initial_speed, self.angle)

    @property
    def vertical_speed(self) -> float:
        return float(self.initial_speed * np.sin(np.radians(self.angle)))

    def position_at(self, time: float) -> Point:
        """Absolute position `time` seconds after launch."""
        return self.initial_position + calculate_position(
            self.initial_speed, self.angle, time)


@dataclass(frozen=True)
class FreeFallData:
    """
    Release configuration for a falling body.
    """
    initial_position: Point                    # release point, y > 0 expected
    initial_horizontal_speed: float = 0.0      # m/s  constant drift
    time_step: float = DEFAULT_TIME_STEP       # s

    @property
    def fall_time(self) -> float:
        """Time to reach y = 0 from rest (s); 0 when already grounded."""
        if self.initial_position.y <= 0:
            return 0.0
        return float(np.sqrt(2.0 * self.initial_position.y / GRAVITY))

    def sample_time(self, index: int) -> float:
        """Elapsed time of sample `index`; the closing ground point lands at `fall_time`."""
        return min(index * self.time_step, self.fall_time)

    def position_at(self, time: float) -> Point:
        """Absolute position `time` seconds after release (not clipped)."""
        x0, y0 = self.initial_position.x, self.initial_position.y
        return Point(x0 + self.initial_horizontal_speed * time,
                     y0 - 0.5 * GRAVITY * time ** 2)


@dataclass(frozen=True)
class TrajectorySummary:
    """Closed-form figures of one launch plus its sampled path."""
    range: float
    max_height: float
    flight_time: float
    points: List[Point] = field(default_factory=list)


def _check_time_step(time_step: float) -> None:
    if time_step <= 0:
        raise ValueError(f"time_step must be > 0, got {time_step!r}")


def _check_max_time(max_time: Optional[float]) -> None:
    if max_time is not None and max_time < 0:
        raise ValueError(f"max_time must be >= 0, got {max_time!r}")


def _ground_crossing(prev: Point, current: Point, ground: float) -> Point:
    """Linear interpolation of the point where the segment meets y = ground."""
    ratio = (prev.y - ground) / (prev.y - current.y)
    return Point(prev.x + ratio * (current.x - prev.x), ground)


def calculate_trajectory(data: TrajectoryData) -> List[Point]:
    """
    Sample a parabolic trajectory.

    Without an explicit `max_time`, a trajectory that never dips below its
    launch height has its last point snapped to the closed-form landing point
    `initial_position + (range, 0)`.
    """
    _check_time_step(data.time_step)
    _check_max_time(data.max_time)

    origin = data.initial_position
    duration = data.duration
    points: List[Point] = []

    k = 0
    went_underground = False
    while True:
        t = k * data.time_step
        if t > duration:
            break
        point = data.position_at(t)

        if point.y < origin.y:
            points.append(_ground_crossing(points[-1], point, origin.y))
            went_underground = True
            break

        points.append(point)
        k += 1

    if not went_underground and data.max_time is None and len(points) > 1:
        landing = calculate_range(data.initial_speed, data.angle)
        points[-1] = Point(origin.x + landing, origin.y)

    log.debug("parabolic trajectory: v0=%.3f angle=%.3f -> %d points",
              data.initial_speed, data.angle, len(points))
    return points


def calculate_free_fall(data: FreeFallData) -> List[Point]:
    """
    Sample a free fall down to y = 0.

    A body released at or below the ground is already landed: its trajectory
    is the single point (x0, 0).
    """
    _check_time_step(data.time_step)

    x0, y0 = data.initial_position.x, data.initial_position.y
    if y0 <= 0:
        return [Point(x0, 0.0)]

    t_max = data.fall_time
    points: List[Point] = []

    k = 0
    while True:
        t = k * data.time_step
        if t > t_max:
            break
        point = data.position_at(t)

        if point.y < 0:
            points.append(_ground_crossing(points[-1], point, 0.0))
            break

        points.append(point)
        k += 1

    # Last sample fell short of t_max: close the fall at the exact impact.
    if points[-1].y > 0:
        points.append(Point(x0 + data.initial_horizontal_speed * t_max, 0.0))

    log.debug("free fall: y0=%.3f vx=%.3f -> %d points",
              y0, data.initial_horizontal_speed, len(points))
    return points


def summarize_trajectory(data: TrajectoryData) -> TrajectorySummary:
    """Range, apex and flight time of a launch together with its sampled path."""
    return TrajectorySummary(
        range=calculate_range(data.initial_speed, data.angle),
        max_height=calculate_max_height(data.initial_speed, data.angle),
        flight_time=calculate_flight_time(data.initial_speed, data.angle),
        points=calculate_trajectory(data),
    )


def points_to_arrays(points: List[Point]) -> Tuple[np.ndarray, np.ndarray]:
    """Split a point list into (xs, ys) arrays for plotting / analysis."""
    xs = np.array([p.x for p in points], dtype=float)
    ys = np.array([p.y for p in points], dtype=float)
    return xs, ys
