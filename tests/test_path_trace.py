"""Test module for the fixed-resolution trace of arcpath.path.VectorPath

The tests are run using pytest.
"""

import math

import numpy as np
import pytest

from arcpath.geom import Subpath
from arcpath.path import VectorPath
from arcpath.path_polygonizer import PathPolygonizer
from arcpath.path_support import PathSettings, PolylineIndexError


def assert_polyline_invariants(polyline):
    """Check the invariants every polyline must satisfy."""
    assert len(polyline.vertices) == len(polyline.distances)
    if polyline.num_vertices:
        assert polyline.distances[0] == 0.0
        assert np.all(np.diff(polyline.distances) >= 0.0)
        assert polyline.total_distance == polyline.distances[-1]
    else:
        assert polyline.total_distance == 0.0


###############################################################################
# Lines
###############################################################################


class TestTraceLines:
    """Test tracing straight lines and closing."""

    def test_square_round_trip(self):
        path = VectorPath("M 0,0 L 10,0 L 10,10 Z")
        path.trace()

        assert path.get_polyline_count() == 1
        assert np.allclose(path.get_vertices(0), [[0, 0], [10, 0], [10, 10], [0, 0]])
        assert np.allclose(path.get_distances(0), [0.0, 10.0, 20.0, 20.0 + 10.0 * math.sqrt(2.0)])
        assert path.get_polyline(0).total_distance == pytest.approx(20.0 + 10.0 * math.sqrt(2.0))
        assert_polyline_invariants(path.get_polyline(0))

    def test_close_path_returns_to_first_vertex(self):
        path = VectorPath("M 3,4 L 8,4 L 8,9 Z")
        path.trace()
        polyline = path.get_polyline(0)
        assert tuple(polyline.vertices[-1]) == (3.0, 4.0)
        assert polyline.is_closed

    def test_move_only(self):
        path = VectorPath("M 1,1")
        path.trace()
        assert np.array_equal(path.get_vertices(0), [[1.0, 1.0]])
        assert np.array_equal(path.get_distances(0), [0.0])

    def test_one_polyline_per_subpath(self):
        path = VectorPath("M 0,0 L 1,0 M 5,5 L 5,8 L 9,8 M 2,2")
        path.trace()
        assert path.get_polyline_count() == 3
        assert [len(polyline) for polyline in path.polylines] == [2, 3, 1]
        assert path.get_distances(1)[-1] == pytest.approx(7.0)

    def test_empty_path_has_no_polylines(self):
        path = VectorPath()
        path.trace()
        assert path.get_polyline_count() == 0

    def test_empty_subpath_gives_empty_polyline(self):
        polyline = PathPolygonizer.trace_subpath(Subpath(), 12)
        assert polyline.num_vertices == 0
        assert polyline.vertices.shape == (0, 2)
        assert_polyline_invariants(polyline)


###############################################################################
# Curves
###############################################################################


class TestTraceCurves:
    """Test tracing quadratic and cubic curves."""

    def test_quadratic_uses_default_resolution(self):
        path = VectorPath("M 0,0 Q 5,10 10,0")
        path.trace()
        vertices = path.get_vertices(0)

        assert vertices.shape == (13, 2)
        assert tuple(vertices[-1]) == (10.0, 0.0)
        assert vertices[6] == pytest.approx((5.0, 5.0))
        assert_polyline_invariants(path.get_polyline(0))

    def test_cubic_vertices_follow_bernstein_form(self):
        path = VectorPath("M 0,0 C 0,10 10,10 10,0")
        path.trace(resolution=4)
        vertices = path.get_vertices(0)

        assert vertices.shape == (5, 2)
        assert vertices[2] == pytest.approx((5.0, 7.5))
        assert tuple(vertices[-1]) == (10.0, 0.0)

    def test_straight_cubic_length(self):
        path = VectorPath("M 0,0 C 10,0 20,0 30,0")
        path.trace()
        assert path.get_polyline(0).total_distance == pytest.approx(30.0)
        assert np.allclose(np.diff(path.get_distances(0)), 2.5)

    def test_curve_length_approaches_arc_length(self):
        # quarter circle approximated by a cubic, radius 10
        kappa = 0.5522847498
        path = VectorPath(f"M 10,0 C 10,{10 * kappa} {10 * kappa},10 0,10")
        path.trace(resolution=200)
        assert path.get_polyline(0).total_distance == pytest.approx(5.0 * math.pi, rel=1e-3)

    @pytest.mark.parametrize("curve", ["Q 5,10 10,0", "C 0,10 10,10 10,0"])
    def test_resolution_one_is_a_line(self, curve):
        curved = VectorPath(f"M 0,0 {curve}")
        curved.trace(resolution=1)
        straight = VectorPath("M 0,0 L 10,0")
        straight.trace(resolution=1)

        assert np.array_equal(curved.get_vertices(0), straight.get_vertices(0))
        assert np.array_equal(curved.get_distances(0), straight.get_distances(0))

    @pytest.mark.parametrize("curve", ["Q 5,10 10,0", "C 0,10 10,10 10,0"])
    def test_resolution_zero_skips_curves(self, curve):
        path = VectorPath(f"M 0,0 {curve} L 10,5")
        path.trace(resolution=0)
        assert np.array_equal(path.get_vertices(0), [[0.0, 0.0], [10.0, 5.0]])

    def test_resolution_from_settings(self):
        path = VectorPath("M 0,0 Q 5,10 10,0", settings=PathSettings(trace_resolution=3))
        path.trace()
        assert path.get_vertices(0).shape == (4, 2)

    @pytest.mark.parametrize("resolution", [-3, 2.5, "12"])
    def test_invalid_resolution_leaves_path_unchanged(self, resolution):
        path = VectorPath("M 0,0 Q 5,5 10,0 L 20,0")
        path.trace()
        with pytest.raises(ValueError, match="resolution"):
            path.trace(resolution=resolution)
        assert path.get_vertices(0).shape == (14, 2)

    def test_numpy_integer_resolution(self):
        path = VectorPath("M 0,0 Q 5,5 10,0")
        path.trace(resolution=np.int64(2))
        assert path.get_vertices(0).shape == (3, 2)

    def test_trace_subpath_rejects_negative_resolution(self):
        path = VectorPath("M 0,0 Q 5,5 10,0")
        with pytest.raises(ValueError):
            PathPolygonizer.trace_subpath(path.subpaths[0], -1)


###############################################################################
# State handling and queries
###############################################################################


class TestTraceState:
    """Test that tracing replaces polylines and queries check their index."""

    def test_trace_is_idempotent(self):
        path = VectorPath("M 0,0 Q 5,10 10,0 C 12,2 14,-2 16,0 Z")
        path.trace()
        first = path.get_polyline(0)
        path.trace()
        second = path.get_polyline(0)

        assert first is not second
        assert np.array_equal(first.vertices, second.vertices)
        assert np.array_equal(first.distances, second.distances)

    def test_trace_reflects_new_commands(self):
        path = VectorPath("M 0,0 L 1,0")
        path.trace()
        path.line_to((1, 1))
        path.move_to((4, 4))
        path.trace()
        assert path.get_polyline_count() == 2
        assert len(path.get_polyline(0)) == 3

    def test_trace_does_not_set_sample_interval(self):
        path = VectorPath("M 0,0 L 1,0")
        path.trace()
        assert path.sample_interval == 0.0

    @pytest.mark.parametrize("index", [1, 5, -1])
    def test_index_out_of_range(self, index):
        path = VectorPath("M 0,0 L 1,0")
        path.trace()
        with pytest.raises(PolylineIndexError):
            path.get_vertices(index)

    def test_index_error_is_index_error(self):
        with pytest.raises(IndexError):
            VectorPath().get_distances(0)

    @pytest.mark.parametrize("index", [0.5, "0", None])
    def test_index_must_be_an_integer(self, index):
        path = VectorPath("M 0,0 L 1,0")
        path.trace()
        with pytest.raises(PolylineIndexError, match="integer"):
            path.get_vertices(index)

    def test_numpy_integer_index(self):
        path = VectorPath("M 0,0 L 1,0")
        path.trace()
        assert path.get_vertices(np.int64(0)).shape == (2, 2)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
