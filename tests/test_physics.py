"""
Unit Tests for Kinematics and Trajectory Sampling
=================================================
Tests closed-form formulas and the samplers for correctness.
Run: python -m pytest tests/ -v
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from interceptor.kinematics import (
    GRAVITY, DEG_TO_RAD, Point,
    calculate_range, calculate_max_height, calculate_flight_time,
    calculate_position,
)
from interceptor.trajectory import (
    TrajectoryData, FreeFallData, calculate_trajectory, calculate_free_fall,
    summarize_trajectory, points_to_arrays,
)
from interceptor.validation import validate_sampler
from interceptor import settings


class TestConstants:

    def test_gravity(self):
        assert GRAVITY == 9.80665

    def test_deg_to_rad(self):
        assert abs(DEG_TO_RAD - np.pi / 180) < 1e-15

    def test_default_settings_are_valid(self):
        settings.validate_settings()


class TestKinematics:
    """Verify the closed-form equations."""

    def test_range_at_45_degrees(self):
        assert calculate_range(20.0, 45.0) == pytest.approx(400.0 / GRAVITY)

    def test_range_zero_at_0_and_90(self):
        for v0 in [1.0, 10.0, 250.0]:
            assert calculate_range(v0, 0.0) == pytest.approx(0.0, abs=1e-9)
            assert calculate_range(v0, 90.0) == pytest.approx(0.0, abs=1e-9)

    def test_range_negative_beyond_90(self):
        assert calculate_range(10.0, 120.0) < 0

    def test_max_height(self):
        expected = 20.0 ** 2 * np.sin(45 * DEG_TO_RAD) ** 2 / (2 * GRAVITY)
        assert calculate_max_height(20.0, 45.0) == pytest.approx(expected)

    def test_flight_time(self):
        expected = 2 * 20.0 * np.sin(45 * DEG_TO_RAD) / GRAVITY
        assert calculate_flight_time(20.0, 45.0) == pytest.approx(expected)

    def test_flight_time_zero_for_flat_or_downward_launch(self):
        assert calculate_flight_time(20.0, 0.0) == 0.0
        assert calculate_flight_time(20.0, -30.0) == 0.0

    def test_position_at_launch(self):
        p = calculate_position(20.0, 45.0, 0.0)
        assert p.x == 0.0
        assert p.y == 0.0

    def test_apex_reached_at_half_flight_time(self):
        for angle in [15.0, 45.0, 80.0]:
            half = calculate_flight_time(30.0, angle) / 2
            p = calculate_position(30.0, angle, half)
            assert p.y == pytest.approx(calculate_max_height(30.0, angle))

    def test_lands_at_range_after_flight_time(self):
        t = calculate_flight_time(15.0, 35.0)
        p = calculate_position(15.0, 35.0, t)
        assert p.x == pytest.approx(calculate_range(15.0, 35.0))
        assert p.y == pytest.approx(0.0, abs=1e-9)


class TestPoint:

    def test_addition(self):
        assert Point(1.0, 2.0) + Point(3.0, -1.0) == Point(4.0, 1.0)

    def test_distance_and_midpoint(self):
        a, b = Point(0.0, 0.0), Point(3.0, 4.0)
        assert a.distance_to(b) == pytest.approx(5.0)
        assert a.midpoint(b) == Point(1.5, 2.0)

    def test_immutable(self):
        p = Point(1.0, 1.0)
        with pytest.raises(AttributeError):
            p.x = 2.0


class TestParabolicSampler:
    """Verify parabolic trajectory sampling."""

    def test_starts_at_origin_by_default(self):
        tr = calculate_trajectory(TrajectoryData(initial_speed=10.0, angle=45.0,
                                                 time_step=0.5))
        assert tr[0] == Point(0.0, 0.0)

    def test_starts_at_offset_initial_position(self):
        data = TrajectoryData(initial_speed=10.0, angle=30.0,
                              initial_position=Point(5.0, 5.0), time_step=0.5)
        assert calculate_trajectory(data)[0] == Point(5.0, 5.0)

    def test_ends_exactly_at_closed_form_range(self):
        for angle in [10.0, 30.0, 45.0, 60.0, 85.0]:
            data = TrajectoryData(initial_speed=25.0, angle=angle,
                                  initial_position=Point(-3.0, 2.0))
            last = calculate_trajectory(data)[-1]
            assert last.y == pytest.approx(2.0)
            assert last.x - (-3.0) == pytest.approx(calculate_range(25.0, angle))

    def test_never_below_launch_height(self):
        data = TrajectoryData(initial_speed=40.0, angle=70.0,
                              initial_position=Point(0.0, 3.0), time_step=0.07)
        assert all(p.y >= 3.0 for p in calculate_trajectory(data))

    def test_max_time_past_landing_interpolates_ground_crossing(self):
        data = TrajectoryData(initial_speed=10.0, angle=45.0, max_time=3.0)
        tr = calculate_trajectory(data)
        assert tr[-1].y == 0.0
        assert abs(tr[-1].x - calculate_range(10.0, 45.0)) < 0.1
        assert all(p.y >= 0.0 for p in tr)

    def test_max_time_before_landing_is_not_corrected(self):
        data = TrajectoryData(initial_speed=10.0, angle=45.0, max_time=0.5)
        tr = calculate_trajectory(data)
        assert len(tr) == 6
        expected = calculate_position(10.0, 45.0, 0.5)
        assert tr[-1].x == pytest.approx(expected.x)
        assert tr[-1].y == pytest.approx(expected.y)

    def test_flat_launch_is_single_point(self):
        data = TrajectoryData(initial_speed=10.0, angle=0.0,
                              initial_position=Point(2.0, 1.0))
        assert calculate_trajectory(data) == [Point(2.0, 1.0)]

    def test_zero_speed_is_single_point(self):
        data = TrajectoryData(initial_speed=0.0, angle=45.0)
        assert calculate_trajectory(data) == [Point(0.0, 0.0)]

    def test_samples_spaced_by_time_step(self):
        data = TrajectoryData(initial_speed=20.0, angle=60.0, time_step=0.25)
        tr = calculate_trajectory(data)
        for k, p in enumerate(tr[:-1]):
            expected = calculate_position(20.0, 60.0, k * 0.25)
            assert p.x == pytest.approx(expected.x)
            assert p.y == pytest.approx(expected.y)

    def test_rejects_non_positive_time_step(self):
        for dt in [0.0, -0.1]:
            with pytest.raises(ValueError):
                calculate_trajectory(TrajectoryData(initial_speed=10.0,
                                                    angle=45.0, time_step=dt))

    def test_rejects_negative_max_time(self):
        with pytest.raises(ValueError, match="max_time"):
            calculate_trajectory(TrajectoryData(initial_speed=10.0, angle=45.0,
                                                max_time=-1.0))

    def test_zero_max_time_is_launch_point_only(self):
        data = TrajectoryData(initial_speed=10.0, angle=45.0, max_time=0.0,
                              initial_position=Point(1.0, 2.0))
        assert calculate_trajectory(data) == [Point(1.0, 2.0)]

    def test_repeatable(self):
        data = TrajectoryData(initial_speed=17.0, angle=52.0, time_step=0.03)
        assert calculate_trajectory(data) == calculate_trajectory(data)


class TestFreeFallSampler:
    """Verify free-fall sampling."""

    def test_starts_at_release_point(self):
        data = FreeFallData(initial_position=Point(0.0, 10.0),
                            initial_horizontal_speed=5.0, time_step=0.1)
        assert calculate_free_fall(data)[0] == Point(0.0, 10.0)

    def test_starts_at_offset_release_point(self):
        data = FreeFallData(initial_position=Point(2.0, 8.0),
                            initial_horizontal_speed=3.0, time_step=0.2)
        assert calculate_free_fall(data)[0] == Point(2.0, 8.0)

    def test_grounded_body_is_single_point(self):
        for y0 in [0.0, -4.0]:
            data = FreeFallData(initial_position=Point(3.0, y0))
            assert calculate_free_fall(data) == [Point(3.0, 0.0)]

    def test_ends_on_the_ground(self):
        data = FreeFallData(initial_position=Point(0.0, 10.0),
                            initial_horizontal_speed=5.0, time_step=0.1)
        tr = calculate_free_fall(data)
        t_fall = np.sqrt(2 * 10.0 / GRAVITY)
        assert tr[-1].y == 0.0
        assert tr[-1].x == pytest.approx(5.0 * t_fall, abs=0.05)
        assert all(p.y >= 0.0 for p in tr)

    def test_drift_moves_body_forward(self):
        data = FreeFallData(initial_position=Point(1.0, 20.0),
                            initial_horizontal_speed=2.0, time_step=0.1)
        xs, ys = points_to_arrays(calculate_free_fall(data))
        assert np.all(np.diff(xs) > 0)
        assert np.all(np.diff(ys) < 0)

    def test_no_drift_stays_vertical(self):
        data = FreeFallData(initial_position=Point(7.0, 15.0))
        assert all(p.x == 7.0 for p in calculate_free_fall(data))

    def test_fall_time(self):
        data = FreeFallData(initial_position=Point(0.0, 45.0))
        assert data.fall_time == pytest.approx(np.sqrt(90.0 / GRAVITY))
        assert FreeFallData(initial_position=Point(0.0, 0.0)).fall_time == 0.0

    def test_rejects_non_positive_time_step(self):
        with pytest.raises(ValueError):
            calculate_free_fall(FreeFallData(initial_position=Point(0.0, 5.0),
                                             time_step=0.0))

    def test_closing_point_time_is_fall_time(self):
        data = FreeFallData(initial_position=Point(0.0, 10.0), time_step=0.1)
        tr = calculate_free_fall(data)
        last = len(tr) - 1
        assert last * data.time_step > data.fall_time
        assert data.sample_time(last) == pytest.approx(data.fall_time)
        assert data.sample_time(3) == pytest.approx(0.3)

    def test_repeatable(self):
        data = FreeFallData(initial_position=Point(4.0, 33.0),
                            initial_horizontal_speed=-1.5, time_step=0.07)
        assert calculate_free_fall(data) == calculate_free_fall(data)


class TestSummary:

    def test_summary_matches_closed_form(self):
        data = TrajectoryData(initial_speed=12.0, angle=40.0,
                              initial_position=Point(100.0, 50.0))
        s = summarize_trajectory(data)
        assert s.range == calculate_range(12.0, 40.0)
        assert s.max_height == calculate_max_height(12.0, 40.0)
        assert s.flight_time == calculate_flight_time(12.0, 40.0)
        assert s.points == calculate_trajectory(data)

    def test_points_to_arrays(self):
        xs, ys = points_to_arrays([Point(0.0, 1.0), Point(2.0, 3.0)])
        assert np.allclose(xs, [0.0, 2.0])
        assert np.allclose(ys, [1.0, 3.0])


class TestSamplerValidation:
    """Sampled paths against the closed form."""

    def test_landing_point_exact(self):
        for r in validate_sampler(verbose=False):
            assert abs(r.range_error) < 1e-9

    def test_apex_within_quantization_error(self):
        dt = 0.1
        bound = 0.5 * GRAVITY * (dt / 2) ** 2 + 1e-9
        for r in validate_sampler(time_step=dt, verbose=False):
            assert r.sim_max_height <= r.ref_max_height + 1e-9
            assert r.ref_max_height - r.sim_max_height <= bound

    def test_duration_within_one_step(self):
        dt = 0.1
        for r in validate_sampler(time_step=dt, verbose=False):
            assert -dt < r.time_error <= 1e-9

    def test_verbose_prints_table(self, capsys):
        validate_sampler(angles=[45.0], verbose=True)
        out = capsys.readouterr().out
        assert 'SAMPLER VALIDATION' in out
        assert 'PASS' in out


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
