"""Central module containing types and constants for path construction and flattening."""

from __future__ import annotations

from typing import Literal, Tuple

###############################################################################
# Types
###############################################################################


PathCmds = Literal[  # Type-Definition for the commands stored in a subpath
    # MoveTo (1 point) - start a new subpath at p
    "M",
    # LineTo (1 point) - draw a straight line from the current point to p
    "L",
    # Quadratic Bezier To (2 points) - end point p, control point c1
    "Q",
    # Cubic Bezier To (3 points) - end point p, control points c1 and c2
    "C",
    # ClosePath (0 points) - draw a line back to the first vertex of the subpath
    "Z",
]

Point = Tuple[float, float]


###############################################################################
# Consts
###############################################################################


# Number of segments per curve used by the fixed-resolution trace
TRACE_RESOLUTION: int = 12

# Number of micro-steps per curve used to measure arc length while resampling
RESAMPLE_RESOLUTION: int = 100

# Characters accepted as separators in a path description
PATH_WHITESPACE: str = " \t\r\n"


###############################################################################
# Functions
###############################################################################


def to_point(value) -> Point:
    """Convert an (x, y) pair of any sequence-like type into a Point of floats.

    Args:
        value: tuple, list or numpy row holding at least two numbers

    Returns:
        Point: the pair as (float, float)
    """
    return (float(value[0]), float(value[1]))
