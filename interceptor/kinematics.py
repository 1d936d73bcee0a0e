"""
Closed-Form Projectile Kinematics
=================================
Ideal point-mass motion under constant gravity, no drag:

    x(t) = v0·cos(θ)·t
    y(t) = v0·sin(θ)·t − ½·g·t²

Derived quantities:
    range       R = v0²·sin(2θ) / g
    max height  H = v0²·sin²(θ) / (2g)
    flight time T = 2·v0·sin(θ) / g

Angles are given in degrees, positions are relative to the launch point.
These are total functions: out-of-range angles give physically meaningless
(but finite) results, which callers are expected to avoid.
"""

import numpy as np
from dataclasses import dataclass

from .settings import GRAVITY


DEG_TO_RAD = np.pi / 180.0


@dataclass(frozen=True)
class Point:
    """Position in the 2D plane (x horizontal, y up), in meters."""
    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def distance_to(self, other: "Point") -> float:
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def midpoint(self, other: "Point") -> "Point":
        return Point((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)


ORIGIN = Point(0.0, 0.0)


def calculate_range(initial_speed: float, angle_deg: float) -> float:
    """Horizontal range on flat ground (m). Zero at 0° and 90°."""
    theta = angle_deg * DEG_TO_RAD
    return float(initial_speed ** 2 * np.sin(2 * theta) / GRAVITY)


def calculate_max_height(initial_speed: float, angle_deg: float) -> float:
    """Apex height above the launch point (m)."""
    theta = angle_deg * DEG_TO_RAD
    return float(initial_speed ** 2 * np.sin(theta) ** 2 / (2 * GRAVITY))


def calculate_flight_time(initial_speed: float, angle_deg: float) -> float:
    """
    Time to return to launch height (s).

    Horizontal or downward launches never climb, so they report 0.
    """
    theta = angle_deg * DEG_TO_RAD
    sin_theta = np.sin(theta)
    if sin_theta <= 0:
        return 0.0
    return float(2 * initial_speed * sin_theta / GRAVITY)


def calculate_position(initial_speed: float, angle_deg: float,
                       time: float) -> Point:
    """Position at `time` seconds after launch, relative to the launch point."""
    theta = angle_deg * DEG_TO_RAD
    vx = initial_speed * np.cos(theta)
    vy = initial_speed * np.sin(theta)

    x = vx * time
    y = vy * time - 0.5 * GRAVITY * time ** 2
    return Point(float(x), float(y))
