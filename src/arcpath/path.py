"""Vector path construction and flattening into polylines."""

from __future__ import annotations

import logging
import operator
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from arcpath.common import Point, to_point
from arcpath.geom import PathCommand, Polyline, Subpath
from arcpath.path_polygonizer import PathPolygonizer
from arcpath.path_support import (
    DEFAULT_SETTINGS,
    MissingSubpathError,
    PathSettings,
    PolylineIndexError,
    check_resolution,
)
from arcpath.svgpath import SvgPathScanner, format_number, format_point

logger = logging.getLogger(__name__)

PointLike = Union[Sequence[float], NDArray[np.float64]]


class VectorPath:
    """A path made of subpaths of drawing commands, flattened on demand into polylines.

    A path contains 0..n subpaths; each subpath starts with a MoveTo, is
    followed by an arbitrary mix of LineTo, QuadraticCurveTo and
    CubicCurveTo, and may contain ClosePath commands.

    Polylines are only produced by trace() or resample(). Each call discards
    the previously produced polylines; polyline i belongs to subpath i.

    A VectorPath is not thread-safe. Calls on the same instance must be
    serialized by the caller.
    """

    _subpaths: List[Subpath]
    _polylines: List[Polyline]
    _sample_interval: float
    _settings: PathSettings

    def __init__(self, path_description: Optional[str] = None, settings: Optional[PathSettings] = None):
        """
        Initialize an empty VectorPath.

        Args:
            path_description: optional simplified path description to parse right away.
            settings: flattening settings, defaults to DEFAULT_SETTINGS.
        """
        self._subpaths = []
        self._polylines = []
        self._sample_interval = 0.0
        self._settings = settings if settings is not None else DEFAULT_SETTINGS

        if path_description:
            self.add_from_path_description(path_description)

    ###########################################################################
    # Properties
    ###########################################################################

    @property
    def subpaths(self) -> Tuple[Subpath, ...]:
        """The subpaths in drawing order."""
        return tuple(self._subpaths)

    @property
    def polylines(self) -> Tuple[Polyline, ...]:
        """The polylines produced by the last trace() or resample()."""
        return tuple(self._polylines)

    @property
    def sample_interval(self) -> float:
        """Interval used by the last resample(), 0 if the path was never resampled."""
        return self._sample_interval

    @property
    def settings(self) -> PathSettings:
        return self._settings

    def __repr__(self) -> str:
        return f"VectorPath(subpaths={len(self._subpaths)}, polylines={len(self._polylines)})"

    ###########################################################################
    # Command builder
    ###########################################################################

    def _current_subpath(self, operation: str) -> Subpath:
        if not self._subpaths:
            raise MissingSubpathError(f"{operation} requires a subpath, call move_to first")
        return self._subpaths[-1]

    def move_to(self, p: PointLike) -> None:
        """Start a new subpath at _p_."""
        self._subpaths.append(Subpath([PathCommand("M", to_point(p))]))

    def line_to(self, p: PointLike) -> None:
        """Append a straight line to _p_ to the current subpath."""
        self._current_subpath("line_to").commands.append(PathCommand("L", to_point(p)))

    def _line_axis_to(self, operation: str, x: Optional[float], y: Optional[float]) -> bool:
        subpath = self._current_subpath(operation)
        current_point = subpath.current_point
        if current_point is None:
            logger.warning(
                "%s ignored: the previous command has no end point, the current position is unknown", operation
            )
            return False
        new_x = current_point[0] if x is None else float(x)
        new_y = current_point[1] if y is None else float(y)
        subpath.commands.append(PathCommand("L", (new_x, new_y)))
        return True

    def line_horizontal_to(self, x: float) -> bool:
        """Append a line to (_x_, current y).

        Returns:
            bool: False if the current point is unknown (e.g. after close_path) and nothing was added.
        """
        return self._line_axis_to("line_horizontal_to", x, None)

    def line_vertical_to(self, y: float) -> bool:
        """Append a line to (current x, _y_).

        Returns:
            bool: False if the current point is unknown (e.g. after close_path) and nothing was added.
        """
        return self._line_axis_to("line_vertical_to", None, y)

    def quadratic_curve_to(self, p: PointLike, c1: PointLike) -> None:
        """Append a quadratic Bezier curve ending in _p_ controlled by _c1_."""
        self._current_subpath("quadratic_curve_to").commands.append(PathCommand("Q", to_point(p), to_point(c1)))

    def cubic_curve_to(self, p: PointLike, c1: PointLike, c2: PointLike) -> None:
        """Append a cubic Bezier curve ending in _p_ controlled by _c1_ and _c2_."""
        self._current_subpath("cubic_curve_to").commands.append(
            PathCommand("C", to_point(p), to_point(c1), to_point(c2))
        )

    def close_path(self) -> None:
        """Close the current subpath with a line back to its first vertex (applied when flattening)."""
        self._current_subpath("close_path").commands.append(PathCommand("Z"))

    close = close_path

    def clear(self) -> None:
        """Remove all subpaths and polylines."""
        self._subpaths.clear()
        self._polylines.clear()

    def add_from_path_description(self, text: str) -> int:
        """Parse a simplified path description and append its commands.

        Unrecognized characters are skipped. Use
        SvgPathNormalizer.to_simplified() to prepare general SVG path data.

        Args:
            text (str): e.g. "M 0,0 L 10,0 Q 15,5 10,10 Z"

        Returns:
            int: number of recognized instructions

        Raises:
            MissingSubpathError: if a drawing instruction precedes the first M
        """
        return SvgPathScanner.apply(text, self)

    def to_path_description(self) -> str:
        """Serialize the commands into the simplified dialect accepted by add_from_path_description()."""
        parts: List[str] = []
        for subpath in self._subpaths:
            for command in subpath.commands:
                if command.cmd in ("M", "L"):
                    parts.append(f"{command.cmd} {format_point(command.p)}")
                elif command.cmd == "Q":
                    parts.append(f"Q {format_point(command.c1)} {format_point(command.p)}")
                elif command.cmd == "C":
                    parts.append(f"C {format_point(command.c1)} {format_point(command.c2)} {format_point(command.p)}")
                else:
                    parts.append("Z")
        return " ".join(parts)

    ###########################################################################
    # Flattening
    ###########################################################################

    def trace(self, resolution: Optional[int] = None) -> None:
        """Flatten every subpath using a fixed number of segments per curve.

        Args:
            resolution: segments per curve, defaults to settings.trace_resolution

        Raises:
            ValueError: if _resolution_ is not a non-negative integer; the path stays unchanged
        """
        if resolution is None:
            resolution = self._settings.trace_resolution
        resolution = check_resolution("resolution", resolution)

        self._polylines = [PathPolygonizer.trace_subpath(subpath, resolution) for subpath in self._subpaths]
        logger.debug("Traced %d subpath(s) with resolution %d", len(self._polylines), resolution)

    def resample(self, interval: float) -> None:
        """Flatten every subpath into vertices about _interval_ units of arc length apart.

        Args:
            interval: the arc length between two vertices (> 0)

        Raises:
            InvalidIntervalError: if _interval_ is not positive; the path stays unchanged
        """
        PathPolygonizer.check_interval(interval)

        resolution = self._settings.resample_resolution
        self._polylines = [
            PathPolygonizer.resample_subpath(subpath, interval, resolution) for subpath in self._subpaths
        ]
        self._sample_interval = float(interval)
        logger.debug("Resampled %d subpath(s) with interval %s", len(self._polylines), format_number(interval))

    ###########################################################################
    # Queries
    ###########################################################################

    def get_polyline_count(self) -> int:
        return len(self._polylines)

    def get_polyline(self, polyline_index: int) -> Polyline:
        """Return the polyline at _polyline_index_.

        Raises:
            PolylineIndexError: if the index is not an integer or out of range
        """
        try:
            polyline_index = operator.index(polyline_index)
        except TypeError as err:
            raise PolylineIndexError(f"Polyline index must be an integer, got {polyline_index!r}") from err
        if not 0 <= polyline_index < len(self._polylines):
            raise PolylineIndexError(
                f"Polyline index {polyline_index} out of range, path has {len(self._polylines)} polyline(s)"
            )
        return self._polylines[polyline_index]

    def get_vertices(self, polyline_index: int) -> NDArray[np.float64]:
        """Return the vertices of a polyline as read-only array of shape (n, 2).

        The array keeps its content when the path is flattened again, it
        then simply no longer belongs to the path's current polylines.

        Raises:
            PolylineIndexError: if the index is out of range
        """
        return self.get_polyline(polyline_index).vertices

    def get_distances(self, polyline_index: int) -> NDArray[np.float64]:
        """Return the cumulative arc length per vertex of a polyline as read-only array.

        Raises:
            PolylineIndexError: if the index is out of range
        """
        return self.get_polyline(polyline_index).distances
