"""Tests for xtrsky.analyze.masking module."""

import numpy as np
import pytest

from xtrsky.analyze.alignment import ObservationVector
from xtrsky.analyze.grid import NO_DATA, AngularGrid
from xtrsky.analyze.masking import (
    apply_exclusion_mask,
    apply_visibility_mask,
    exclusion_mask,
    visibility_mask,
)
from xtrsky.analyze.nosat_zone import ExclusionPolygon


def obs_at(*directions):
    az = np.array([d[0] for d in directions], dtype=float)
    el = np.array([d[1] for d in directions], dtype=float)
    return ObservationVector(azimuth=az, elevation=el, value=np.ones(len(directions)))


@pytest.fixture
def grid():
    return AngularGrid()


class TestVisibilityMask:
    """Test bin occupancy and elevation cutoff."""

    def test_observation_marks_nearest_node(self, grid):
        mask = visibility_mask(obs_at((10.2, 20.0)), grid, 0.0)

        assert mask.sum() == 1
        assert mask[7, 3]  # el 21, az 9

    def test_bin_edges(self, grid):
        # [7.5, 10.5) belongs to node 9, 10.5 to node 12
        mask = visibility_mask(obs_at((7.5, 45.0), (10.5, 45.0)), grid, 0.0)

        assert mask[15, 3] and mask[15, 4]
        assert not mask[15, 2]

    def test_azimuth_wraps(self, grid):
        mask = visibility_mask(obs_at((359.0, 30.0)), grid, 0.0)

        assert mask[10, 0] and mask[10, -1]

    def test_cutoff_is_strict(self, grid):
        mask = visibility_mask(obs_at((90.0, 30.0), (90.0, 1.0)), grid, 0.0)

        assert mask[10, 30]
        assert not mask[0, 30]  # horizon row is never above a 0 deg cutoff

        assert not visibility_mask(obs_at((90.0, 30.0)), grid, 30.0)[10, 30]

    def test_monotone_in_cutoff(self, grid):
        rng = np.random.default_rng(1)
        obs = ObservationVector(rng.uniform(0, 360, 300), rng.uniform(0, 90, 300), np.ones(300))

        previous = visibility_mask(obs, grid, 0.0)
        for cutoff in (5.0, 10.0, 15.5, 30.0, 60.0, 89.0):
            current = visibility_mask(obs, grid, cutoff)
            assert not np.any(current & ~previous)
            previous = current

    def test_empty_observations(self, grid):
        obs = ObservationVector(np.array([]), np.array([]), np.array([]))

        assert not visibility_mask(obs, grid, 0.0).any()

    def test_apply_sets_sentinel(self, grid):
        values = np.full(grid.shape, 7.0)

        out = apply_visibility_mask(values, obs_at((10.2, 20.0)), grid, 0.0)

        assert out[7, 3] == 7.0
        assert np.sum(out == NO_DATA) == out.size - 1
        assert np.all(values == 7.0)


class TestExclusionMask:
    """Test polygon membership masking."""

    def test_empty_polygon_no_effect(self, grid):
        values = np.full(grid.shape, 3.0)

        out = apply_exclusion_mask(values, grid, ExclusionPolygon())

        assert np.array_equal(out, values)

    def test_nodes_inside_polygon_cleared(self, grid):
        polygon = ExclusionPolygon.from_azel([[(80, 1), (100, 1), (100, 40), (80, 40)]])
        values = np.full(grid.shape, 3.0)

        out = apply_exclusion_mask(values, grid, polygon)

        assert out[10, 30] == NO_DATA  # az 90, el 30
        assert out[10, 60] == 3.0  # az 180, el 30
        assert out[20, 30] == 3.0  # az 90, el 60

    def test_idempotent(self, grid):
        polygon = ExclusionPolygon.from_azel([[(-30, 0), (30, 0), (30, 50), (-30, 50)]])
        values = np.random.default_rng(3).uniform(0, 50, grid.shape)

        once = apply_exclusion_mask(values, grid, polygon)
        twice = apply_exclusion_mask(once, grid, polygon)

        assert np.array_equal(once, twice)
        assert exclusion_mask(grid, polygon).any()
