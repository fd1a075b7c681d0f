"""Geometries making up a path: commands, subpaths and flattened polylines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from arcpath.common import PathCmds, Point
from arcpath.path_support import PathCommandProcessor

###############################################################################
# PathCommand
###############################################################################


@dataclass(frozen=True)
class PathCommand:
    """A single drawing command.

    Attributes:
        cmd: the command letter (M, L, Q, C or Z)
        p: end point of the command (None for Z)
        c1: first control point (Q and C only)
        c2: second control point (C only)
    """

    cmd: PathCmds
    p: Optional[Point] = None
    c1: Optional[Point] = None
    c2: Optional[Point] = None

    def __post_init__(self):
        try:
            expected = PathCommandProcessor.get_point_count(self.cmd)
        except KeyError as err:
            raise ValueError(f"Unknown command '{self.cmd}'") from err
        num_points = sum(point is not None for point in (self.p, self.c1, self.c2))
        if num_points != expected:
            raise ValueError(f"Command '{self.cmd}' takes {expected} point(s), got {num_points}")

    @property
    def end_point(self) -> Optional[Point]:
        """The point this command ends at, None if it has no point of its own (Z)."""
        if PathCommandProcessor.has_current_point(self.cmd):
            return self.p
        return None

    @property
    def is_curve(self) -> bool:
        """True for quadratic and cubic curve commands."""
        return PathCommandProcessor.is_curve_command(self.cmd)


###############################################################################
# Subpath
###############################################################################


@dataclass
class Subpath:
    """An ordered sequence of commands starting with a MoveTo."""

    commands: List[PathCommand] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.commands)

    @property
    def first_point(self) -> Optional[Point]:
        """Start point of the subpath (point of its MoveTo)."""
        if not self.commands:
            return None
        return self.commands[0].p

    @property
    def current_point(self) -> Optional[Point]:
        """End point of the most recent command, None if unknown (empty or after Z)."""
        if not self.commands:
            return None
        return self.commands[-1].end_point

    @property
    def is_closed(self) -> bool:
        return bool(self.commands) and self.commands[-1].cmd == "Z"


###############################################################################
# Polyline
###############################################################################


class Polyline:
    """Flattened, straight-segment approximation of one subpath.

    Holds the vertices (shape (n, 2)) and the cumulative arc length at each
    vertex (shape (n,)). Both arrays are read-only.
    """

    _vertices: NDArray[np.float64]
    _distances: NDArray[np.float64]

    def __init__(
        self,
        vertices: Optional[NDArray[np.float64]] = None,
        distances: Optional[NDArray[np.float64]] = None,
    ):
        if vertices is None:
            vertices = np.empty((0, 2), dtype=np.float64)
        vertices = np.array(vertices, dtype=np.float64).reshape(-1, 2)

        if distances is None:
            distances = self.cumulative_distances(vertices)
        distances = np.array(distances, dtype=np.float64).reshape(-1)

        if vertices.shape[0] != distances.shape[0]:
            raise ValueError(
                f"Number of vertices ({vertices.shape[0]}) does not match number of distances ({distances.shape[0]})"
            )

        vertices.flags.writeable = False
        distances.flags.writeable = False
        self._vertices = vertices
        self._distances = distances

    @staticmethod
    def cumulative_distances(vertices: NDArray[np.float64]) -> NDArray[np.float64]:
        """Cumulative Euclidean distance along _vertices_, starting at 0.

        The segment lengths are accumulated strictly left to right.
        """
        if vertices.shape[0] == 0:
            return np.empty(0, dtype=np.float64)
        segment_lengths = np.hypot(*np.diff(vertices, axis=0).T)
        return np.add.accumulate(np.concatenate(([0.0], segment_lengths)))

    @property
    def vertices(self) -> NDArray[np.float64]:
        """The vertices as read-only array of shape (n, 2)."""
        return self._vertices.view()

    @property
    def distances(self) -> NDArray[np.float64]:
        """The cumulative arc length per vertex as read-only array of shape (n,)."""
        return self._distances.view()

    @property
    def total_distance(self) -> float:
        """Arc length of the whole polyline, 0 if empty."""
        if self._distances.shape[0] == 0:
            return 0.0
        return float(self._distances[-1])

    @property
    def num_vertices(self) -> int:
        return self._vertices.shape[0]

    def __len__(self) -> int:
        return self.num_vertices

    @property
    def is_closed(self) -> bool:
        """True if the last vertex equals the first one."""
        return self.num_vertices > 1 and bool(np.array_equal(self._vertices[0], self._vertices[-1]))

    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """Bounding box as (xmin, ymin, xmax, ymax), None if empty."""
        if self.num_vertices == 0:
            return None
        xmin, ymin = self._vertices.min(axis=0)
        xmax, ymax = self._vertices.max(axis=0)
        return (float(xmin), float(ymin), float(xmax), float(ymax))

    def __repr__(self) -> str:
        return f"Polyline(num_vertices={self.num_vertices}, total_distance={self.total_distance:g})"
