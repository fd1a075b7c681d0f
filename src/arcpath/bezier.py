"""Bezier curve evaluation utilities for path flattening."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Step counts at or above this threshold are evaluated with NumPy
_NUMPY_STEPS_THRESHOLD: int = 70


class BezierCurve:
    """Class to handle quadratic and cubic Bezier curve evaluation.

    Curves are given by their control points in geometric order, i.e.
    (start, control, end) for quadratic and (start, control1, control2, end)
    for cubic curves. Sampling methods return the curve points for the
    parameters t = 1/steps, 2/steps, ..., 1 (the start point t=0 is never
    part of the result as it is already known to the caller).

    Pure Python and NumPy implementations evaluate the Bernstein form with
    the same operation order and therefore return identical values.
    """

    @staticmethod
    def evaluate_quadratic(
        points: Union[Sequence[Tuple[float, float]], NDArray[np.float64]], t: float
    ) -> Tuple[float, float]:
        """Evaluate B(t) = (1-t)^2*P0 + 2*(1-t)*t*C1 + t^2*P1 at parameter _t_."""
        pt0, pt1, pt2 = points
        omt = 1.0 - t
        x = omt * omt * pt0[0] + 2.0 * omt * t * pt1[0] + t * t * pt2[0]
        y = omt * omt * pt0[1] + 2.0 * omt * t * pt1[1] + t * t * pt2[1]
        return (float(x), float(y))

    @staticmethod
    def evaluate_cubic(
        points: Union[Sequence[Tuple[float, float]], NDArray[np.float64]], t: float
    ) -> Tuple[float, float]:
        """Evaluate B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*C1 + 3*(1-t)*t^2*C2 + t^3*P1 at parameter _t_."""
        pt0, pt1, pt2, pt3 = points
        omt = 1.0 - t
        omt2 = omt * omt
        omt3 = omt2 * omt
        t2 = t * t
        t3 = t2 * t
        x = omt3 * pt0[0] + 3.0 * omt2 * t * pt1[0] + 3.0 * omt * t2 * pt2[0] + t3 * pt3[0]
        y = omt3 * pt0[1] + 3.0 * omt2 * t * pt1[1] + 3.0 * omt * t2 * pt2[1] + t3 * pt3[1]
        return (float(x), float(y))

    @classmethod
    def sample_quadratic_curve_python(
        cls,
        points: Union[Sequence[Tuple[float, float]], NDArray[np.float64]],
        steps: int,
    ) -> NDArray[np.float64]:
        """Sample a quadratic Bezier curve at _steps_ parameters using pure Python."""
        result = np.empty((steps, 2), dtype=np.float64)
        for i in range(1, steps + 1):
            result[i - 1] = cls.evaluate_quadratic(points, i / steps)
        return result

    @classmethod
    def sample_quadratic_curve_numpy(
        cls,
        points: Union[Sequence[Tuple[float, float]], NDArray[np.float64]],
        steps: int,
    ) -> NDArray[np.float64]:
        """Sample a quadratic Bezier curve at _steps_ parameters using vectorized NumPy."""
        points_array = np.asarray(points, dtype=np.float64)

        t = np.arange(1, steps + 1, dtype=np.float64) / steps
        omt = 1.0 - t

        result = np.empty((steps, 2), dtype=np.float64)
        for axis in (0, 1):
            result[:, axis] = (
                omt * omt * points_array[0, axis]
                + 2.0 * omt * t * points_array[1, axis]
                + t * t * points_array[2, axis]
            )
        return result

    @classmethod
    def sample_quadratic_curve(
        cls,
        points: Union[Sequence[Tuple[float, float]], NDArray[np.float64]],
        steps: int,
    ) -> NDArray[np.float64]:
        """
        Sample a quadratic Bezier curve into _steps_ points, excluding the start point.
        Uses pure Python for small step counts, NumPy for larger ones.

        Args:
            points: Control points as Sequence[Tuple[float, float]] or NDArray[np.float64]
                    Must contain exactly 3 points: start, control, end
            steps: Number of segments to divide the curve into

        Returns:
            NDArray[np.float64] of shape (steps, 2); the last row is the end point
        """
        if steps <= 0:
            return np.empty((0, 2), dtype=np.float64)
        if steps < _NUMPY_STEPS_THRESHOLD:
            return cls.sample_quadratic_curve_python(points, steps)
        return cls.sample_quadratic_curve_numpy(points, steps)

    @classmethod
    def sample_cubic_curve_python(
        cls,
        points: Union[Sequence[Tuple[float, float]], NDArray[np.float64]],
        steps: int,
    ) -> NDArray[np.float64]:
        """Sample a cubic Bezier curve at _steps_ parameters using pure Python."""
        result = np.empty((steps, 2), dtype=np.float64)
        for i in range(1, steps + 1):
            result[i - 1] = cls.evaluate_cubic(points, i / steps)
        return result

    @classmethod
    def sample_cubic_curve_numpy(
        cls,
        points: Union[Sequence[Tuple[float, float]], NDArray[np.float64]],
        steps: int,
    ) -> NDArray[np.float64]:
        """Sample a cubic Bezier curve at _steps_ parameters using vectorized NumPy."""
        points_array = np.asarray(points, dtype=np.float64)

        t = np.arange(1, steps + 1, dtype=np.float64) / steps
        omt = 1.0 - t
        omt2 = omt * omt
        omt3 = omt2 * omt
        t2 = t * t
        t3 = t2 * t

        result = np.empty((steps, 2), dtype=np.float64)
        for axis in (0, 1):
            result[:, axis] = (
                omt3 * points_array[0, axis]
                + 3.0 * omt2 * t * points_array[1, axis]
                + 3.0 * omt * t2 * points_array[2, axis]
                + t3 * points_array[3, axis]
            )
        return result

    @classmethod
    def sample_cubic_curve(
        cls,
        points: Union[Sequence[Tuple[float, float]], NDArray[np.float64]],
        steps: int,
    ) -> NDArray[np.float64]:
        """
        Sample a cubic Bezier curve into _steps_ points, excluding the start point.
        Uses pure Python for small step counts, NumPy for larger ones.

        Args:
            points: Control points as Sequence[Tuple[float, float]] or NDArray[np.float64]
                    Must contain exactly 4 points: start, control1, control2, end
            steps: Number of segments to divide the curve into

        Returns:
            NDArray[np.float64] of shape (steps, 2); the last row is the end point
        """
        if steps <= 0:
            return np.empty((0, 2), dtype=np.float64)
        if steps < _NUMPY_STEPS_THRESHOLD:
            return cls.sample_cubic_curve_python(points, steps)
        return cls.sample_cubic_curve_numpy(points, steps)
