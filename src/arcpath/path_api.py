"""Flat, handle-based access to VectorPath for hosts that work with opaque handles."""

from __future__ import annotations

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from arcpath.path import PointLike, VectorPath
from arcpath.path_support import PathSettings


class PathApi:
    """Static functions mirroring the VectorPath methods, taking the path as first argument.

    The handle is the VectorPath itself.
    """

    @staticmethod
    def create(settings: Optional[PathSettings] = None) -> VectorPath:
        return VectorPath(settings=settings)

    @staticmethod
    def destroy(handle: VectorPath) -> None:
        """Release all subpaths and polylines owned by _handle_."""
        handle.clear()

    @staticmethod
    def move_to(handle: VectorPath, point: PointLike) -> None:
        handle.move_to(point)

    @staticmethod
    def line_to(handle: VectorPath, point: PointLike) -> None:
        handle.line_to(point)

    @staticmethod
    def quadratic_curve_to(handle: VectorPath, point: PointLike, control: PointLike) -> None:
        handle.quadratic_curve_to(point, control)

    @staticmethod
    def cubic_curve_to(handle: VectorPath, point: PointLike, control1: PointLike, control2: PointLike) -> None:
        handle.cubic_curve_to(point, control1, control2)

    @staticmethod
    def close(handle: VectorPath) -> None:
        handle.close_path()

    @staticmethod
    def clear(handle: VectorPath) -> None:
        handle.clear()

    @staticmethod
    def add_from_path_description(handle: VectorPath, text: str) -> int:
        return handle.add_from_path_description(text)

    @staticmethod
    def trace(handle: VectorPath) -> None:
        handle.trace()

    @staticmethod
    def resample(handle: VectorPath, interval: float) -> None:
        handle.resample(interval)

    @staticmethod
    def get_polyline_count(handle: VectorPath) -> int:
        return handle.get_polyline_count()

    @staticmethod
    def get_vertices(handle: VectorPath, polyline_index: int) -> NDArray[np.float64]:
        """Vertices of one polyline as read-only (n, 2) array; raises PolylineIndexError if out of range."""
        return handle.get_vertices(polyline_index)
