"""
Sampler Validation Against Closed Form
======================================
Compares the sampled trajectory against the analytic figures it must
reproduce:
  - landing point  (range)
  - apex           (max height)
  - duration       (flight time)

The landing point is exact by construction (endpoint correction); apex and
duration carry the quantization error of the chosen time step, which this
module reports so the time step can be chosen with the error in view.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Sequence

from .kinematics import calculate_range, calculate_max_height, calculate_flight_time
from .trajectory import TrajectoryData, calculate_trajectory, points_to_arrays
from .settings import DEFAULT_TIME_STEP


# Standard sweep — (speed m/s, elevations in degrees)
REFERENCE_SPEED = 20.0
REFERENCE_ANGLES = (15.0, 30.0, 45.0, 60.0, 75.0)


@dataclass
class SamplerValidation:
    """Result of one closed-form comparison."""
    angle_deg: float
    ref_range: float          # closed-form range (m)
    sim_range: float          # sampled landing x (m)
    range_error: float        # m
    ref_max_height: float
    sim_max_height: float
    height_error_pct: float   # %
    ref_flight_time: float
    sim_flight_time: float    # (n − 1)·dt of the sampled path
    time_error: float         # s


def _pct(sim: float, ref: float) -> float:
    return 100.0 * (sim - ref) / ref if ref != 0 else 0.0


def validate_sampler(initial_speed: float = REFERENCE_SPEED,
                     angles: Sequence[float] = REFERENCE_ANGLES,
                     time_step: float = DEFAULT_TIME_STEP,
                     verbose: bool = True) -> List[SamplerValidation]:
    """
    Sample each launch and compare against the closed-form figures.

    Returns list of SamplerValidation for each angle.
    """
    results = []

    if verbose:
        print(f"\n{'='*75}")
        print(f"  SAMPLER VALIDATION: v0 = {initial_speed} m/s, dt = {time_step} s")
        print(f"{'='*75}")
        print(f"{'Angle':>6} {'Ref R':>9} {'Sim R':>9} {'ΔR (m)':>9} "
              f"{'Ref H':>8} {'Sim H':>8} {'Err %':>7} "
              f"{'Ref T':>7} {'Sim T':>7} {'ΔT (s)':>7}")
        print("-" * 75)

    for angle in angles:
        data = TrajectoryData(initial_speed=initial_speed, angle=angle,
                              time_step=time_step)
        xs, ys = points_to_arrays(calculate_trajectory(data))

        ref_range = calculate_range(initial_speed, angle)
        ref_height = calculate_max_height(initial_speed, angle)
        ref_time = calculate_flight_time(initial_speed, angle)

        sim_range = float(xs[-1] - data.initial_position.x)
        sim_height = float(np.max(ys) - data.initial_position.y)
        sim_time = (len(xs) - 1) * time_step

        vr = SamplerValidation(
            angle_deg=angle,
            ref_range=ref_range,
            sim_range=sim_range,
            range_error=sim_range - ref_range,
            ref_max_height=ref_height,
            sim_max_height=sim_height,
            height_error_pct=_pct(sim_height, ref_height),
            ref_flight_time=ref_time,
            sim_flight_time=sim_time,
            time_error=sim_time - ref_time,
        )
        results.append(vr)

        if verbose:
            print(f"{angle:>6.1f} {ref_range:>9.3f} {sim_range:>9.3f} "
                  f"{vr.range_error:>+9.2e} "
                  f"{ref_height:>8.3f} {sim_height:>8.3f} {vr.height_error_pct:>+7.2f} "
                  f"{ref_time:>7.3f} {sim_time:>7.3f} {vr.time_error:>+7.3f}")

    if verbose and results:
        worst_range = max(abs(r.range_error) for r in results)
        mean_height = np.mean([abs(r.height_error_pct) for r in results])
        print("-" * 75)
        print(f"  Worst landing error: {worst_range:.2e} m | "
              f"Mean apex error: {mean_height:.2f}%")
        status = "✓ PASS" if worst_range < 1e-6 else "✗ ENDPOINT DRIFT"
        print(f"  Status: {status}")
        print(f"{'='*75}\n")

    return results


def run_default_validation(verbose: bool = True) -> List[SamplerValidation]:
    """Run the standard sweep at the default time step."""
    return validate_sampler(verbose=verbose)
