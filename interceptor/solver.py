"""
Inverse Launch Solver
=====================
Given a target released from rest at (x0, y0) and the height at which it
should be met, computes the launch angle and speed for a launcher at the
origin so that the shot arrives when the target reaches that height.

    t_hit = sqrt(2·(y0 − h) / g)
    θ     = atan2(y0, x0)          (aim at the release point)
    v0    = hypot(x0, y0) / t_hit

The aim is along the line to the release point, not to (x0, h). Both the
shot and the target fall by ½·g·t², so along that line their vertical gap
closes at the same rate as the horizontal one.
"""

import logging
import numpy as np
from dataclasses import dataclass

from .kinematics import Point, ORIGIN
from .trajectory import TrajectoryData
from .settings import GRAVITY, DEFAULT_TIME_STEP


log = logging.getLogger(__name__)


class LaunchSolverError(ValueError):
    """Raised when no launch solution exists for the requested geometry."""


@dataclass(frozen=True)
class LaunchParams:
    angle: float   # degrees
    speed: float   # m/s

    def to_trajectory_data(self, time_step: float = DEFAULT_TIME_STEP) -> TrajectoryData:
        """Launch from the origin with these parameters."""
        return TrajectoryData(
            initial_speed=self.speed,
            angle=self.angle,
            initial_position=ORIGIN,
            time_step=time_step,
        )


def calculate_interception_launch(origin: Point,
                                  intercept_height: float) -> LaunchParams:
    """
    Solve for (angle, speed) meeting a falling target at `intercept_height`.

    Raises
    ------
    LaunchSolverError
        if origin.x <= 0, intercept_height < 0 or intercept_height >= origin.y.
    """
    x0, y0 = origin.x, origin.y

    if x0 <= 0:
        raise LaunchSolverError(
            f"Target x-coordinate must be positive (got x0={x0})")
    if intercept_height < 0:
        raise LaunchSolverError(
            f"Intercept height cannot be negative (got {intercept_height})")
    if intercept_height >= y0:
        raise LaunchSolverError(
            f"Intercept height ({intercept_height}) must be below the "
            f"target's release height ({y0})")

    t_hit = np.sqrt(2.0 * (y0 - intercept_height) / GRAVITY)
    angle = float(np.degrees(np.arctan2(y0, x0)))
    speed = float(np.hypot(x0, y0) / t_hit)

    log.debug("launch solution for (%.3f, %.3f) at h=%.3f: %.3f deg, %.3f m/s",
              x0, y0, intercept_height, angle, speed)
    return LaunchParams(angle=angle, speed=speed)
