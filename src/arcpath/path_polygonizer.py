"""Path polygonization utilities for converting subpaths into polylines."""

from __future__ import annotations

import math
from typing import List

import numpy as np

from arcpath.bezier import BezierCurve
from arcpath.common import Point
from arcpath.geom import PathCommand, Polyline, Subpath
from arcpath.path_support import InvalidIntervalError, check_resolution


class _PolylineBuilder:
    """Collects vertices and their cumulative distances while a subpath is replayed."""

    def __init__(self):
        self.vertices: List[Point] = []
        self.distances: List[float] = []
        self.total_distance: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.vertices

    @property
    def last(self) -> Point:
        return self.vertices[-1]

    def append(self, point: Point) -> None:
        """Append _point_ and accumulate the distance from the previous vertex."""
        if self.vertices:
            last = self.vertices[-1]
            self.total_distance += math.hypot(point[0] - last[0], point[1] - last[1])
        self.vertices.append(point)
        self.distances.append(self.total_distance)

    def append_curve_samples(self, samples: np.ndarray) -> None:
        for x, y in samples.tolist():
            self.append((x, y))

    def build(self) -> Polyline:
        return Polyline(np.array(self.vertices, dtype=np.float64).reshape(-1, 2), self.distances)


class _Resampler:
    """Replays the commands of one subpath placing vertices every _interval_ units of arc length.

    sum_distance is the arc length the sampling has advanced to within the
    subpath. It is carried across all commands and starts at 0 with the MoveTo.
    """

    def __init__(self, interval: float, resolution: int):
        self.interval = interval
        self.resolution = resolution
        self.sum_distance: float = 0.0
        self.builder = _PolylineBuilder()

    def move_to(self, p: Point) -> None:
        self.builder.append(p)

    def line_to(self, p: Point) -> None:
        if self.builder.is_empty:
            raise ValueError("LineTo command has no starting point")

        interval = self.interval
        start = self.builder.last
        dx = p[0] - start[0]
        dy = p[1] - start[1]
        distance = math.hypot(dx, dy)

        # distance already travelled past the last interval boundary
        start_distance = self.sum_distance - math.floor(self.sum_distance / interval) * interval

        n_intervals = math.floor((distance - start_distance) / interval)

        if n_intervals > 0:
            dir_x = dx / distance
            dir_y = dy / distance
            for i in range(1, n_intervals + 1):
                offset = i * interval + start_distance
                self.builder.append((start[0] + dir_x * offset, start[1] + dir_y * offset))

        self.sum_distance += start_distance + n_intervals * interval

    def curve_to(self, p: Point, samples: np.ndarray) -> None:
        """Emit those of the curve _samples_ at which a new interval boundary is crossed."""
        if self.resolution == 0:
            return
        if self.resolution == 1:
            # a single segment is the chord: nothing to resolve
            self.line_to(p)
            return

        interval = self.interval
        prev_x, prev_y = self.builder.last
        num_intervals = math.floor(self.sum_distance / interval)
        running_distance = self.sum_distance

        for x, y in samples.tolist():
            running_distance += math.hypot(x - prev_x, y - prev_y)
            current_interval = math.floor(running_distance / interval)
            if current_interval > num_intervals:
                self.builder.append((x, y))
                num_intervals = current_interval
                self.sum_distance = running_distance
            prev_x, prev_y = x, y

    def quadratic_curve_to(self, command: PathCommand) -> None:
        if self.builder.is_empty:
            raise ValueError("Quadratic Bezier command has no starting point")
        samples = BezierCurve.sample_quadratic_curve((self.builder.last, command.c1, command.p), self.resolution)
        self.curve_to(command.p, samples)

    def cubic_curve_to(self, command: PathCommand) -> None:
        if self.builder.is_empty:
            raise ValueError("Cubic Bezier command has no starting point")
        samples = BezierCurve.sample_cubic_curve(
            (self.builder.last, command.c1, command.c2, command.p), self.resolution
        )
        self.curve_to(command.p, samples)

    def close_path(self, first: Point) -> None:
        if self.builder.is_empty:
            raise ValueError("ClosePath command has no starting point")

        self.line_to(first)

        last = self.builder.last
        self.sum_distance += math.hypot(first[0] - last[0], first[1] - last[1])

        # interval boundaries hardly ever meet the start point, so close explicitly
        self.builder.append(first)


class PathPolygonizer:
    """Utility class for flattening subpaths into polylines."""

    @staticmethod
    def trace_subpath(subpath: Subpath, resolution: int) -> Polyline:
        """Flatten _subpath_ using a fixed number of segments per curve.

        Lines are copied as they are, ClosePath becomes a line back to the
        first vertex, curves are evaluated at t = 1/resolution, ..., 1.
        A resolution of 0 skips curves, a resolution of 1 replaces them by
        their chord.

        Args:
            subpath: the subpath to flatten
            resolution: number of segments per curve

        Returns:
            Polyline: vertices with cumulative distances (empty for an empty subpath)

        Raises:
            ValueError: If resolution is not a non-negative integer or a drawing
                command appears before the first vertex
        """
        resolution = check_resolution("resolution", resolution)
        builder = _PolylineBuilder()

        for command in subpath.commands:
            cmd = command.cmd

            if cmd in ("M", "L"):
                if cmd == "L" and builder.is_empty:
                    raise ValueError("LineTo command has no starting point")
                builder.append(command.p)

            elif cmd == "Z":
                if builder.is_empty:
                    raise ValueError("ClosePath command has no starting point")
                builder.append(subpath.first_point)

            elif command.is_curve:
                if builder.is_empty:
                    raise ValueError(f"Curve command '{cmd}' has no starting point")
                if resolution == 0:
                    continue
                if resolution == 1:
                    builder.append(command.p)
                    continue
                if cmd == "Q":
                    samples = BezierCurve.sample_quadratic_curve((builder.last, command.c1, command.p), resolution)
                else:
                    samples = BezierCurve.sample_cubic_curve(
                        (builder.last, command.c1, command.c2, command.p), resolution
                    )
                builder.append_curve_samples(samples)

        return builder.build()

    @staticmethod
    def resample_subpath(subpath: Subpath, interval: float, resolution: int) -> Polyline:
        """Flatten _subpath_ into vertices placed about every _interval_ units of arc length.

        Lines are sampled analytically. Curves are measured by walking
        _resolution_ micro-steps along them and a sample point is emitted
        whenever the accumulated distance crosses a new multiple of _interval_.
        ClosePath resamples the line back to the first vertex and then repeats
        the first vertex, so a closed subpath always ends exactly where it started.

        The distances of the returned polyline are the cumulative lengths of
        the emitted polyline itself.

        Args:
            subpath: the subpath to resample
            interval: the wanted arc length between two vertices (> 0)
            resolution: number of micro-steps per curve

        Returns:
            Polyline: the resampled vertices (empty for an empty subpath)

        Raises:
            InvalidIntervalError: If interval is not a positive finite number
            ValueError: If resolution is not a non-negative integer or a drawing
                command appears before the first vertex
        """
        PathPolygonizer.check_interval(interval)
        resolution = check_resolution("resolution", resolution)

        resampler = _Resampler(float(interval), resolution)

        for command in subpath.commands:
            cmd = command.cmd
            if cmd == "M":
                resampler.move_to(command.p)
            elif cmd == "L":
                resampler.line_to(command.p)
            elif cmd == "Q":
                resampler.quadratic_curve_to(command)
            elif cmd == "C":
                resampler.cubic_curve_to(command)
            elif cmd == "Z":
                resampler.close_path(subpath.first_point)

        return resampler.builder.build()

    @staticmethod
    def check_interval(interval: float) -> None:
        """Raise InvalidIntervalError unless _interval_ is a positive finite number."""
        if not math.isfinite(interval) or interval <= 0:
            raise InvalidIntervalError(f"Resample interval must be a positive number, got {interval}")
