"""Supporting utilities, settings and errors for VectorPath.

This module contains command metadata, flattening settings and the
exception hierarchy that are used by the core path implementation.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass

from arcpath.common import RESAMPLE_RESOLUTION, TRACE_RESOLUTION, PathCmds

###############################################################################
# Errors
###############################################################################


class PathError(Exception):
    """Base exception for path-related errors."""


class MissingSubpathError(PathError):
    """Raised when a subpath-relative command is issued before any move_to."""


class PolylineIndexError(PathError, IndexError):
    """Raised when a polyline is requested with an index out of range."""


class InvalidIntervalError(PathError, ValueError):
    """Raised when resampling is requested with a non-positive interval."""


###############################################################################
# PathCommandInfo
###############################################################################


@dataclass(frozen=True)
class PathCommandInfo:
    """Metadata for path commands.

    Attributes:
        num_points: Number of points stored by this command (end point + control points)
        is_curve: Whether this command represents a curve
        has_current_point: Whether this command ends at a point usable as current point
    """

    num_points: int
    is_curve: bool
    has_current_point: bool = True


# Command registry with metadata
COMMAND_INFO = {
    "M": PathCommandInfo(1, False),  # MoveTo
    "L": PathCommandInfo(1, False),  # LineTo
    "Q": PathCommandInfo(2, True),  # Quadratic - end point + control point
    "C": PathCommandInfo(3, True),  # Cubic - end point + 2 control points
    "Z": PathCommandInfo(0, False, False),  # ClosePath - no end point of its own
}


###############################################################################
# PathCommandProcessor
###############################################################################


class PathCommandProcessor:
    """Answers questions about single commands."""

    @staticmethod
    def get_point_count(cmd: PathCmds) -> int:
        """Return number of points stored by command."""
        return COMMAND_INFO[cmd].num_points

    @staticmethod
    def is_curve_command(cmd: PathCmds) -> bool:
        """Return True if command represents a curve."""
        return COMMAND_INFO[cmd].is_curve

    @staticmethod
    def has_current_point(cmd: PathCmds) -> bool:
        """Return True if command leaves a known current point behind."""
        return COMMAND_INFO[cmd].has_current_point


###############################################################################
# PathSettings
###############################################################################


def check_resolution(name: str, value) -> int:
    """Return _value_ as int, raise ValueError unless it is a non-negative integer."""
    try:
        resolution = operator.index(value)
    except TypeError as err:
        raise ValueError(f"{name} must be an integer, got {value!r}") from err
    if resolution < 0:
        raise ValueError(f"{name} must not be negative, got {resolution}")
    return resolution


@dataclass(frozen=True)
class PathSettings:
    """Settings controlling how a path is flattened.

    Attributes:
        trace_resolution: Number of segments per curve used by trace().
        resample_resolution: Number of micro-steps per curve used by resample()
            to measure arc length.
    """

    trace_resolution: int = TRACE_RESOLUTION
    resample_resolution: int = RESAMPLE_RESOLUTION

    def __post_init__(self):
        # frozen, so normalized values (e.g. numpy integers) are stored via object.__setattr__
        for name in ("trace_resolution", "resample_resolution"):
            object.__setattr__(self, name, check_resolution(name, getattr(self, name)))

    def to_dict(self) -> dict:
        """Convert settings to a dictionary for serialization."""
        return {
            "trace_resolution": self.trace_resolution,
            "resample_resolution": self.resample_resolution,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PathSettings":
        """Create PathSettings from a dictionary."""
        return cls(
            trace_resolution=data.get("trace_resolution", TRACE_RESOLUTION),
            resample_resolution=data.get("resample_resolution", RESAMPLE_RESOLUTION),
        )


DEFAULT_SETTINGS = PathSettings()
