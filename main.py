#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  PROJECTILE INTERCEPTION ENGINE — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the complete demonstration pipeline:
    1. Closed-form kinematics table
    2. Sampler validation against the closed form
    3. Hit scenario (analytic fast path)
    4. Miss scenario (sampled search, closest approach)
    5. Inverse solver: solve, then verify by detection
    6. Inverse solver input checks
    7. Engagement animation (GIF)

  All outputs saved to outputs/ directory.

  Usage:
    python main.py              # Run everything
    python main.py --quick      # Skip animation (faster)
    python main.py --verbose    # Debug logging from the engine
═══════════════════════════════════════════════════════════════════════════════
"""

import argparse
import logging
import os
import time

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from interceptor.kinematics import (
    Point, calculate_range, calculate_max_height, calculate_flight_time,
)
from interceptor.trajectory import (
    TrajectoryData, FreeFallData, calculate_trajectory, calculate_free_fall,
)
from interceptor.interception import detect_interception
from interceptor.solver import calculate_interception_launch, LaunchSolverError
from interceptor.validation import run_default_validation
from interceptor.visualization import (
    plot_engagement, plot_sampler_validation, create_engagement_animation,
    ensure_output_dir,
)
from interceptor.settings import (
    DEFAULT_TOLERANCE, FREEFALL_TIME_STEP, OUTPUT_DIR, validate_settings,
)


log = logging.getLogger("main")


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║     PROJECTILE INTERCEPTION ENGINE                                    ║
║     ─────────────────────────────────────────────────────             ║
║     Ideal ballistics · Exact ground crossings · Two-phase search      ║
║     Inverse launch solver for falling targets                         ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def report(result):
    if result.intercepted:
        print(f"  ✓ INTERCEPTED at ({result.point.x:.3f}, {result.point.y:.3f}) m")
        print(f"    t_shot = {result.time_parabolic:.3f} s | "
              f"t_target = {result.time_freefall:.3f} s")
    else:
        a, b = result.point_parabolic_at_min, result.point_freefall_at_min
        print(f"  ✗ MISSED — closest approach {result.min_distance:.3f} m")
        print(f"    shot   ({a.x:.3f}, {a.y:.3f}) m at t = {result.time_parabolic_at_min:.3f} s")
        print(f"    target ({b.x:.3f}, {b.y:.3f}) m at t = {result.time_freefall_at_min:.3f} s")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Projectile interception engine demonstration")
    parser.add_argument('--quick', action='store_true',
                        help='skip the animated GIF')
    parser.add_argument('--verbose', action='store_true',
                        help='debug logging from the engine')
    parser.add_argument('--tolerance', type=float, default=DEFAULT_TOLERANCE,
                        help='interception tolerance in meters')
    parser.add_argument('--output-dir', default=OUTPUT_DIR,
                        help='where plots and animations are written')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    validate_settings()

    start_time = time.time()
    banner()
    out = ensure_output_dir(args.output_dir)
    log.info("Writing outputs to %s (tolerance %.3f m)", out, args.tolerance)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Closed-Form Kinematics
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Closed-Form Kinematics (v0 = 20 m/s)")
    print(f"  {'Angle':>6} {'Range (m)':>10} {'Apex (m)':>10} {'ToF (s)':>8}")
    for angle in [0, 15, 30, 45, 60, 75, 90]:
        print(f"  {angle:>6} {calculate_range(20.0, angle):>10.3f} "
              f"{calculate_max_height(20.0, angle):>10.3f} "
              f"{calculate_flight_time(20.0, angle):>8.3f}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Sampler Validation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Sampler vs Closed Form")
    validation = run_default_validation(verbose=True)
    fig_val = plot_sampler_validation(validation,
                                      save_path=f'{out}/01_sampler_validation.png')
    plt.close(fig_val)
    print(f"  ✓ Saved: {out}/01_sampler_validation.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Hit Scenario
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Hit — 10 m/s at 45° vs target released at (5, 5)")
    shot = TrajectoryData(initial_speed=10.0, angle=45.0)
    target = FreeFallData(initial_position=Point(5.0, 5.0))
    hit = detect_interception(shot, target, args.tolerance)
    report(hit)

    fig_hit = plot_engagement(calculate_trajectory(shot), calculate_free_fall(target),
                              hit, title='Hit scenario',
                              save_path=f'{out}/02_hit_scenario.png')
    plt.close(fig_hit)
    print(f"  ✓ Saved: {out}/02_hit_scenario.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Miss Scenario
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Miss — 5 m/s at 20° vs target released at (50, 50)")
    weak_shot = TrajectoryData(initial_speed=5.0, angle=20.0)
    far_target = FreeFallData(initial_position=Point(50.0, 50.0))
    miss = detect_interception(weak_shot, far_target, args.tolerance)
    report(miss)

    fig_miss = plot_engagement(calculate_trajectory(weak_shot),
                               calculate_free_fall(far_target),
                               miss, title='Miss scenario',
                               save_path=f'{out}/03_miss_scenario.png')
    plt.close(fig_miss)
    print(f"  ✓ Saved: {out}/03_miss_scenario.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Inverse Solver
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Inverse Solver — target at (100, 80), meet at 30 m")
    release = Point(100.0, 80.0)
    params = calculate_interception_launch(release, 30.0)
    print(f"  Launch angle : {params.angle:>8.3f} °")
    print(f"  Launch speed : {params.speed:>8.3f} m/s")

    solved_shot = params.to_trajectory_data()
    solved_target = FreeFallData(initial_position=release,
                                 time_step=FREEFALL_TIME_STEP)
    solved = detect_interception(solved_shot, solved_target, args.tolerance)
    report(solved)

    solved_shot_path = calculate_trajectory(solved_shot)
    solved_fall_path = calculate_free_fall(solved_target)
    fig_solved = plot_engagement(solved_shot_path, solved_fall_path, solved,
                                 title='Solved launch',
                                 save_path=f'{out}/04_solved_launch.png')
    plt.close(fig_solved)
    print(f"  ✓ Saved: {out}/04_solved_launch.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Solver Input Checks
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 6: Solver Input Checks")
    for origin, height in [(Point(-5.0, 20.0), 5.0),
                           (Point(10.0, 20.0), -1.0),
                           (Point(10.0, 20.0), 20.0)]:
        try:
            calculate_interception_launch(origin, height)
        except LaunchSolverError as e:
            print(f"  ✗ ({origin.x}, {origin.y}) h={height}: {e}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 7: Engagement Animation
    # ══════════════════════════════════════════════════════════════════════
    if not args.quick:
        section("PHASE 7: Engagement Animation (GIF)")
        create_engagement_animation(solved_shot, solved_target,
                                    solved_shot_path, solved_fall_path, solved,
                                    save_path=f'{out}/05_engagement.gif')
        print(f"  ✓ Saved: {out}/05_engagement.gif")
    else:
        section("PHASE 7: Animation SKIPPED (--quick mode)")

    # ══════════════════════════════════════════════════════════════════════
    #  SUMMARY
    # ══════════════════════════════════════════════════════════════════════
    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"""
  All outputs saved to: {os.path.abspath(out)}/

  Generated files:
    01_sampler_validation.png  — Sampled vs closed-form apex
    02_hit_scenario.png        — Analytic fast-path hit
    03_miss_scenario.png       — Closest approach on a miss
    04_solved_launch.png       — Inverse-solver launch, verified
    {'05_engagement.gif         — Animated engagement' if not args.quick else '(animation skipped)'}

  Total runtime: {elapsed:.1f} seconds
""")


if __name__ == "__main__":
    main()
