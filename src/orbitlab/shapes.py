"""Geometric primitives and their hit tests.

Shapes are immutable and describe one animation step; motion is expressed by
building a new shape per step. Each shape answers coverage for whole arrays
of pixel coordinates (``coverage``) and for a single point (``hit_test``),
the latter being a thin wrapper around the former so both agree exactly.

Colors are palette indices (see ``orbitlab.palette.Color``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar, NamedTuple, Union

import numpy as np

from .coordinates import Coordinate
from .palette import Color

# Slopes steeper than this are treated as vertical
VERTICAL_SLOPE_THRESHOLD = 1e6

Line = tuple[Coordinate, Coordinate]


class HitResult(NamedTuple):
    """Outcome of a hit test: whether the point is covered, and its color."""

    covered: bool
    color: int


def _as_arrays(xs, ys) -> tuple[np.ndarray, np.ndarray]:
    return tuple(np.broadcast_arrays(np.asarray(xs, dtype=float), np.asarray(ys, dtype=float)))


def _hit(shape: Shape, x: float, y: float) -> HitResult:
    covered = bool(shape.coverage(np.array([x], dtype=float), np.array([y], dtype=float))[0])
    return HitResult(covered, int(shape.color) if covered else int(Color.WHITE))


@dataclass(frozen=True)
class Band:
    """The strip between two parallel lines.

    Slope and intercepts are worked out once here so that membership
    tests over many pixels only do the comparison.
    """

    line_a: Line
    line_b: Line
    vertical_threshold: float = VERTICAL_SLOPE_THRESHOLD
    vertical: bool = field(init=False, repr=False, compare=False)
    slope: float = field(init=False, repr=False, compare=False)
    low: float = field(init=False, repr=False, compare=False)
    high: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        (p1, p2), (q1, q2) = self.line_a, self.line_b
        dx = p2.x - p1.x
        dy = p2.y - p1.y

        # Midpoints keep the result independent of the order of each line's points
        mid_a = ((p1.x + p2.x) / 2.0, (p1.y + p2.y) / 2.0)
        mid_b = ((q1.x + q2.x) / 2.0, (q1.y + q2.y) / 2.0)

        vertical = dx == 0 or abs(dy / dx) > self.vertical_threshold
        if vertical:
            slope = math.inf
            bounds = (mid_a[0], mid_b[0])
        else:
            slope = dy / dx
            bounds = (mid_a[1] - slope * mid_a[0], mid_b[1] - slope * mid_b[0])

        object.__setattr__(self, "vertical", vertical)
        object.__setattr__(self, "slope", slope)
        object.__setattr__(self, "low", min(bounds))
        object.__setattr__(self, "high", max(bounds))

    def contains(self, xs, ys) -> np.ndarray:
        """Boolean mask of points lying between the two lines (inclusive)."""
        xs, ys = _as_arrays(xs, ys)
        if self.vertical:
            return (xs >= self.low) & (xs <= self.high)
        intercepts = ys - self.slope * xs
        return (intercepts >= self.low) & (intercepts <= self.high)


def between_lines(
    line_a: Line,
    line_b: Line,
    x,
    y,
    vertical_threshold: float = VERTICAL_SLOPE_THRESHOLD,
) -> np.ndarray:
    """Whether ``(x, y)`` lies between two parallel lines.

    The lines are given as point pairs and are assumed parallel; the slope is
    taken from ``line_a``. For ordinary slopes the query point's intercept
    ``y - m·x`` is compared against the two lines' intercepts. When the line
    is vertical or its slope magnitude exceeds ``vertical_threshold`` the
    test falls back to x-range containment, so no infinite or NaN value is
    ever compared.

    ``x`` and ``y`` may be scalars or arrays; the result has their
    broadcast shape.
    """
    return Band(line_a, line_b, vertical_threshold).contains(x, y)


@dataclass(frozen=True)
class Circle:
    """Filled disc."""

    kind: ClassVar[str] = "circle"

    center: Coordinate
    radius: float
    color: int = Color.BLACK

    def coverage(self, xs, ys) -> np.ndarray:
        xs, ys = _as_arrays(xs, ys)
        return np.hypot(xs - self.center.x, ys - self.center.y) <= self.radius

    def hit_test(self, x: float, y: float) -> HitResult:
        return _hit(self, x, y)


@dataclass(frozen=True)
class LineSegment:
    """Straight segment drawn with a fixed-width distance threshold.

    A point is covered when it sits inside the segment's axis-aligned
    bounding box and its perpendicular distance to the line through both
    endpoints is below ``thickness``.
    """

    kind: ClassVar[str] = "line"

    start: Coordinate
    end: Coordinate
    color: int = Color.BLACK
    thickness: float = 1.0

    def coverage(self, xs, ys) -> np.ndarray:
        xs, ys = _as_arrays(xs, ys)
        x0, y0 = self.start.x, self.start.y
        x1, y1 = self.end.x, self.end.y

        in_box = (
            (xs >= min(x0, x1))
            & (xs <= max(x0, x1))
            & (ys >= min(y0, y1))
            & (ys <= max(y0, y1))
        )

        dx = x1 - x0
        dy = y1 - y0
        if dx == 0 and dy == 0:
            distance = np.hypot(xs - x0, ys - y0)
        elif dx == 0:
            # Vertical: slope undefined
            distance = np.abs(xs - x0)
        else:
            distance = np.abs(dy * (xs - x0) - dx * (ys - y0)) / math.hypot(dx, dy)

        return in_box & (distance < self.thickness)

    def hit_test(self, x: float, y: float) -> HitResult:
        return _hit(self, x, y)


@dataclass(frozen=True)
class Cross:
    """Axis-aligned plus sign made of two overlapping bars.

    The horizontal bar spans ``half_width`` either side of the centre, the
    vertical bar ``half_height``; both are ``half_thickness`` thick on each
    side of their axis. Edges are exclusive.
    """

    kind: ClassVar[str] = "cross"

    center: Coordinate
    half_width: float
    half_height: float
    half_thickness: float
    color: int = Color.BLACK

    def coverage(self, xs, ys) -> np.ndarray:
        xs, ys = _as_arrays(xs, ys)
        dx = np.abs(xs - self.center.x)
        dy = np.abs(ys - self.center.y)
        horizontal = (dx < self.half_width) & (dy < self.half_thickness)
        vertical = (dy < self.half_height) & (dx < self.half_thickness)
        return horizontal | vertical

    def hit_test(self, x: float, y: float) -> HitResult:
        return _hit(self, x, y)


@dataclass(frozen=True)
class EqualArmedCross:
    """Rotatable cross with two equal arms.

    Each arm is a rectangle ``2·arm_length`` long and ``2·half_thickness``
    wide, and the arms meet at right angles. At ``rotation=0`` arm A lies
    along the x axis; ``rotation=π/4`` turns the shape into an X.

    The 8 arm corners, the four bands built from them and the square
    bounding box are computed once at construction. The bounding box
    (``center ± radius``, radius being the distance from the centre to an
    arm corner) is tested before any band geometry.
    """

    kind: ClassVar[str] = "equal_armed_cross"

    center: Coordinate
    arm_length: float
    half_thickness: float
    rotation: float = 0.0
    color: int = Color.BLACK
    corners: tuple[Coordinate, ...] = field(init=False, repr=False, compare=False)
    bands: tuple[Band, Band, Band, Band] = field(init=False, repr=False, compare=False)
    radius: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        a, t = self.arm_length, self.half_thickness
        cos_r, sin_r = math.cos(self.rotation), math.sin(self.rotation)

        def point(along: float, across: float) -> Coordinate:
            # along: arm A direction u = (cos, sin); across: v = (-sin, cos)
            return Coordinate(
                self.center.x + along * cos_r - across * sin_r,
                self.center.y + along * sin_r + across * cos_r,
            )

        a1, a2, a3, a4 = point(a, t), point(-a, t), point(-a, -t), point(a, -t)
        b1, b2, b3, b4 = point(t, a), point(t, -a), point(-t, -a), point(-t, a)

        bands = (
            Band((a1, a2), (a4, a3)),  # long edges of arm A
            Band((b1, b2), (b4, b3)),  # long edges of arm B
            Band((b1, b4), (b2, b3)),  # end caps of arm B
            Band((a1, a4), (a2, a3)),  # end caps of arm A
        )

        object.__setattr__(self, "corners", (a1, a2, a3, a4, b1, b2, b3, b4))
        object.__setattr__(self, "bands", bands)
        object.__setattr__(self, "radius", math.hypot(a, t))

    def in_bounding_box(self, xs, ys) -> np.ndarray:
        xs, ys = _as_arrays(xs, ys)
        return (np.abs(xs - self.center.x) <= self.radius) & (
            np.abs(ys - self.center.y) <= self.radius
        )

    def geometry_coverage(self, xs, ys) -> np.ndarray:
        """Band test without the bounding-box short circuit."""
        band1, band2, band3, band4 = self.bands
        return (band1.contains(xs, ys) & band4.contains(xs, ys)) | (
            band2.contains(xs, ys) & band3.contains(xs, ys)
        )

    def coverage(self, xs, ys) -> np.ndarray:
        xs, ys = _as_arrays(xs, ys)
        in_box = self.in_bounding_box(xs, ys)
        covered = np.zeros(in_box.shape, dtype=bool)
        if in_box.any():
            covered[in_box] = self.geometry_coverage(xs[in_box], ys[in_box])
        return covered

    def hit_test(self, x: float, y: float) -> HitResult:
        return _hit(self, x, y)


Shape = Union[Circle, LineSegment, Cross, EqualArmedCross]
