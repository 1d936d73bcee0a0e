"""
Projectile Interception Engine
==============================
Kinematics and interception detection for a cannon shot against a falling
target, in an ideal 2D world:
  - Closed-form range, apex, flight time and position
  - Trajectory sampling with exact ground crossings
  - Two-phase interception search (analytic, then merged timeline)
  - Inverse solver for the launch that meets a falling target

Point-mass bodies under constant gravity only: no drag, no wind, no
collision volumes.
"""

from .kinematics import (
    GRAVITY, DEG_TO_RAD, Point, ORIGIN,
    calculate_range, calculate_max_height, calculate_flight_time,
    calculate_position,
)
from .trajectory import (
    TrajectoryData, FreeFallData, TrajectorySummary,
    calculate_trajectory, calculate_free_fall, summarize_trajectory,
    points_to_arrays,
)
from .interception import InterceptionResult, detect_interception
from .solver import LaunchParams, LaunchSolverError, calculate_interception_launch
from .validation import validate_sampler, run_default_validation
from .visualization import (
    EngagementSnapshot, build_snapshot, explosion_radius, render_snapshot,
    plot_engagement, plot_sampler_validation, create_engagement_animation,
)

__version__ = "1.0.0"
__all__ = [
    'GRAVITY', 'DEG_TO_RAD', 'Point', 'ORIGIN',
    'calculate_range', 'calculate_max_height', 'calculate_flight_time',
    'calculate_position',
    'TrajectoryData', 'FreeFallData', 'TrajectorySummary',
    'calculate_trajectory', 'calculate_free_fall', 'summarize_trajectory',
    'points_to_arrays',
    'InterceptionResult', 'detect_interception',
    'LaunchParams', 'LaunchSolverError', 'calculate_interception_launch',
    'validate_sampler', 'run_default_validation',
    'EngagementSnapshot', 'build_snapshot', 'explosion_radius',
    'render_snapshot', 'plot_engagement', 'plot_sampler_validation',
    'create_engagement_animation',
]
