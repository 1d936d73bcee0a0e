"""
Tests for playback snapshots and rendering (Agg backend, no display).
Run: python -m pytest tests/ -v
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from interceptor.kinematics import Point
from interceptor.trajectory import (
    TrajectoryData, FreeFallData, calculate_trajectory, calculate_free_fall,
)
from interceptor.interception import detect_interception
from interceptor.validation import validate_sampler
from interceptor.visualization import (
    build_snapshot, explosion_radius, render_snapshot, plot_engagement,
    plot_sampler_validation, create_engagement_animation,
)
from interceptor.settings import EXPLOSION_MAX_SIZE


def _scenario(hit=True):
    if hit:
        shot = TrajectoryData(initial_speed=10.0, angle=45.0)
        target = FreeFallData(initial_position=Point(5.0, 5.0))
    else:
        shot = TrajectoryData(initial_speed=5.0, angle=20.0)
        target = FreeFallData(initial_position=Point(50.0, 50.0))
    return (shot, target, calculate_trajectory(shot), calculate_free_fall(target),
            detect_interception(shot, target))


class TestExplosionEnvelope:

    def test_starts_and_ends_at_zero(self):
        assert explosion_radius(0.0) == 0.0
        assert explosion_radius(1.0) == pytest.approx(0.0)

    def test_grows_then_holds(self):
        assert explosion_radius(0.15) == pytest.approx(EXPLOSION_MAX_SIZE / 2)
        assert explosion_radius(0.5) == EXPLOSION_MAX_SIZE
        assert explosion_radius(0.79) == EXPLOSION_MAX_SIZE

    def test_fades(self):
        assert explosion_radius(0.9) == pytest.approx(EXPLOSION_MAX_SIZE / 2)

    def test_progress_clamped(self):
        assert explosion_radius(-1.0) == 0.0
        assert explosion_radius(3.0) == pytest.approx(0.0)

    def test_custom_size(self):
        assert explosion_radius(0.5, max_size=10.0) == 10.0


class TestSnapshot:

    def test_start_shows_one_point_each(self):
        shot, target, sp, fp, res = _scenario()
        snap = build_snapshot(shot, target, sp, fp, res, 0.0)
        assert snap.shot_points == [sp[0]]
        assert snap.target_points == [fp[0]]
        assert snap.exploded is False
        assert snap.explosion_radius == 0.0

    def test_prefix_follows_elapsed_time(self):
        shot, target, sp, fp, res = _scenario()
        snap = build_snapshot(shot, target, sp, fp, res, 0.3)
        assert len(snap.shot_points) == 4
        assert len(snap.target_points) == 4
        assert snap.shot_position == sp[3]

    def test_stops_at_interception(self):
        shot, target, sp, fp, res = _scenario()
        snap = build_snapshot(shot, target, sp, fp, res, 1.0)
        assert snap.exploded is True
        assert snap.explosion_radius > 0
        assert len(snap.shot_points) == 8
        assert len(snap.target_points) == 8

    def test_miss_clamps_to_trajectory_length(self):
        shot, target, sp, fp, res = _scenario(hit=False)
        snap = build_snapshot(shot, target, sp, fp, res, 100.0)
        assert snap.shot_points == sp
        assert snap.target_points == fp
        assert snap.exploded is False


class TestRendering:

    def test_render_snapshot_returns_artists(self):
        shot, target, sp, fp, res = _scenario()
        fig, ax = plt.subplots()
        artists = render_snapshot(build_snapshot(shot, target, sp, fp, res, 0.2), ax)
        assert len(artists) == 5
        plt.close(fig)

    def test_render_exploded_snapshot(self):
        shot, target, sp, fp, res = _scenario()
        fig, ax = plt.subplots()
        artists = render_snapshot(build_snapshot(shot, target, sp, fp, res, 1.0), ax)
        assert len(artists) == 4
        plt.close(fig)

    def test_plot_engagement_hit_and_miss(self, tmp_path):
        for hit in [True, False]:
            _, _, sp, fp, res = _scenario(hit)
            path = tmp_path / f'engagement_{hit}.png'
            fig = plot_engagement(sp, fp, res, save_path=str(path))
            assert path.exists()
            plt.close(fig)

    def test_plot_sampler_validation(self, tmp_path):
        path = tmp_path / 'validation.png'
        fig = plot_sampler_validation(validate_sampler(verbose=False),
                                      save_path=str(path))
        assert path.exists()
        plt.close(fig)

    def test_animation(self, tmp_path):
        shot, target, sp, fp, res = _scenario()
        path = tmp_path / 'anim.gif'
        out = create_engagement_animation(shot, target, sp, fp, res,
                                          save_path=str(path), frames=4, fps=4)
        assert out == str(path)
        assert path.exists()


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
