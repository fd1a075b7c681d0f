"""Test module for the arc-length resampling of arcpath.path.VectorPath

The tests are run using pytest.
"""

import math

import numpy as np
import pytest

from arcpath.geom import PathCommand, Subpath
from arcpath.path import VectorPath
from arcpath.path_polygonizer import PathPolygonizer
from arcpath.path_support import InvalidIntervalError, PathSettings

###############################################################################
# Lines
###############################################################################


class TestResampleLines:
    """Test resampling straight lines."""

    @pytest.mark.parametrize("length, interval", [(10.0, 3.0), (9.0, 3.0), (7.5, 2.5), (1.0, 0.3), (2.0, 5.0)])
    def test_number_of_vertices_on_a_line(self, length, interval):
        path = VectorPath(f"M 0,0 L {length},0")
        path.resample(interval)
        vertices = path.get_vertices(0)

        assert len(vertices) == 1 + math.floor(length / interval)

    def test_vertices_are_spaced_by_interval(self):
        path = VectorPath("M 0,0 L 10,0")
        path.resample(3.0)
        assert np.allclose(path.get_vertices(0), [[0, 0], [3, 0], [6, 0], [9, 0]])
        assert np.allclose(path.get_distances(0), [0, 3, 6, 9])

    def test_diagonal_line(self):
        path = VectorPath("M 1,1 L 7,9")
        path.resample(5.0)
        assert np.allclose(path.get_vertices(0), [[1, 1], [4, 5], [7, 9]])

    def test_zero_length_line(self):
        path = VectorPath("M 1,1 L 1,1")
        path.resample(2.0)
        assert np.array_equal(path.get_vertices(0), [[1.0, 1.0]])

    def test_each_subpath_starts_at_zero_distance(self):
        path = VectorPath("M 0,0 L 10,0 M 0,5 L 10,5")
        path.resample(3.0)
        assert path.get_polyline_count() == 2
        assert np.allclose(path.get_vertices(1), [[0, 5], [3, 5], [6, 5], [9, 5]])

    def test_records_sample_interval(self):
        path = VectorPath("M 0,0 L 10,0")
        path.resample(2.5)
        assert path.sample_interval == 2.5


###############################################################################
# Carry-over between commands
###############################################################################


class TestResampleCarryOver:
    """Test that the travelled distance is carried from one command to the next."""

    def test_line_after_line(self):
        # the second line is measured from the last emitted vertex (2,0), not from (2.5,0)
        path = VectorPath("M 0,0 L 2.5,0 L 5,0")
        path.resample(1.0)
        assert np.allclose(path.get_vertices(0), [[0, 0], [1, 0], [2, 0], [3, 0], [4, 0], [5, 0]])

    def test_line_after_curve(self):
        # 100 micro-steps of 0.3 along the straight cubic, vertices at the first step past each multiple of 5
        path = VectorPath("M 0,0 C 10,0 20,0 30,0 L 40,0")
        path.resample(5.0)
        expected = [[0, 0], [5.1, 0], [10.2, 0], [15, 0], [20.1, 0], [25.2, 0], [30, 0], [35, 0], [40, 0]]
        assert np.allclose(path.get_vertices(0), expected, atol=1e-9)

    def test_distances_follow_emitted_vertices(self):
        path = VectorPath("M 0,0 C 10,0 20,0 30,0 L 40,0")
        path.resample(5.0)
        assert np.allclose(path.get_distances(0), [0, 5.1, 10.2, 15, 20.1, 25.2, 30, 35, 40], atol=1e-9)


###############################################################################
# Closing
###############################################################################


class TestResampleClosePath:
    """Test that closing always ends on the first vertex."""

    @pytest.mark.parametrize("interval", [0.7, 3.0, 4.0, 100.0])
    def test_close_ends_on_first_vertex(self, interval):
        path = VectorPath("M 2,3 L 12,3 L 12,13 Z")
        path.resample(interval)
        vertices = path.get_vertices(0)

        assert tuple(vertices[0]) == (2.0, 3.0)
        assert tuple(vertices[-1]) == (2.0, 3.0)
        assert path.get_polyline(0).is_closed

    def test_close_on_move_only(self):
        path = VectorPath("M 2,3 Z")
        path.resample(1.0)
        assert np.array_equal(path.get_vertices(0), [[2.0, 3.0], [2.0, 3.0]])


###############################################################################
# Curves
###############################################################################


class TestResampleCurves:
    """Test resampling curves by interval crossing."""

    def test_straight_cubic_crossings(self):
        path = VectorPath("M 0,0 C 10,0 20,0 30,0")
        path.resample(5.0)
        vertices = path.get_vertices(0)

        # micro-steps are 0.3 long, a vertex is emitted at the first step past each boundary
        assert len(vertices) in (6, 7)
        for k, vertex in enumerate(vertices[1:], start=1):
            assert 5.0 * k - 1e-9 <= vertex[0] <= 5.0 * k + 0.3 + 1e-9
            assert vertex[1] == pytest.approx(0.0)

    @pytest.mark.parametrize("curve", ["Q 50,0 50,50", "C 30,0 50,20 50,50"])
    def test_curve_vertices_are_about_one_interval_apart(self, curve):
        interval = 5.0
        path = VectorPath(f"M 0,0 {curve}")
        path.resample(interval)
        vertices = path.get_vertices(0)

        assert len(vertices) > 10
        chords = np.hypot(*np.diff(vertices, axis=0).T)
        # chord <= arc; each arc spans one interval plus at most one micro-step
        assert np.all(chords <= interval + 1.5)
        assert np.all(chords >= interval - 1.5)

    def test_resolution_one_resamples_the_chord(self):
        path = VectorPath("M 0,0 Q 5,5 10,0", settings=PathSettings(resample_resolution=1))
        path.resample(3.0)
        assert np.allclose(path.get_vertices(0), [[0, 0], [3, 0], [6, 0], [9, 0]])

    def test_resolution_zero_skips_curves(self):
        path = VectorPath("M 0,0 C 1,5 9,5 10,0", settings=PathSettings(resample_resolution=0))
        path.resample(1.0)
        assert np.array_equal(path.get_vertices(0), [[0.0, 0.0]])

    def test_resample_polyline_invariants(self):
        path = VectorPath("M 0,0 Q 20,30 40,0 L 40,-10 C 30,-20 10,-20 0,-10 Z")
        path.resample(2.0)
        polyline = path.get_polyline(0)

        assert len(polyline.vertices) == len(polyline.distances)
        assert polyline.distances[0] == 0.0
        assert np.all(np.diff(polyline.distances) >= 0.0)
        assert polyline.total_distance == polyline.distances[-1]
        assert polyline.is_closed


###############################################################################
# Polygonizer and errors
###############################################################################


class TestResampleErrors:
    """Test invalid intervals and direct polygonizer use."""

    @pytest.mark.parametrize("interval", [0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_interval_leaves_path_unchanged(self, interval):
        path = VectorPath("M 0,0 L 10,0")
        path.trace()
        with pytest.raises(InvalidIntervalError):
            path.resample(interval)
        assert path.get_polyline_count() == 1
        assert len(path.get_polyline(0)) == 2
        assert path.sample_interval == 0.0

    def test_invalid_interval_is_value_error(self):
        with pytest.raises(ValueError):
            VectorPath().resample(0)

    def test_resample_subpath_directly(self):
        subpath = Subpath([PathCommand("M", (0.0, 0.0)), PathCommand("L", (4.0, 0.0))])
        polyline = PathPolygonizer.resample_subpath(subpath, 1.0, 100)
        assert np.allclose(polyline.vertices[:, 0], [0, 1, 2, 3, 4])

    def test_empty_subpath(self):
        assert PathPolygonizer.resample_subpath(Subpath(), 1.0, 100).num_vertices == 0

    @pytest.mark.parametrize("resolution", [-1, 1.5])
    def test_resample_subpath_rejects_invalid_resolution(self, resolution):
        subpath = Subpath([PathCommand("M", (0.0, 0.0)), PathCommand("Q", (4.0, 0.0), (2.0, 2.0))])
        with pytest.raises(ValueError, match="resolution"):
            PathPolygonizer.resample_subpath(subpath, 1.0, resolution)

    def test_resample_then_trace_replaces_polylines(self):
        path = VectorPath("M 0,0 L 10,0")
        path.resample(1.0)
        assert len(path.get_vertices(0)) == 11
        path.trace()
        assert len(path.get_vertices(0)) == 2
        assert path.sample_interval == 1.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
