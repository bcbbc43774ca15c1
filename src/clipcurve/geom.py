"""Geometric primitives used by the curve math"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

from clipcurve.common import Point2D


###############################################################################
# GeomMath
###############################################################################
class GeomMath:
    """Class to provide various static methods related to geometry handling."""

    @staticmethod
    def lerp(a: float, b: float, t: float) -> float:
        """Linear interpolation ``a*(1-t) + b*t``.

        The form is kept as is (not ``a + (b-a)*t``) so that ``t=0`` returns ``a`` and ``t=1``
        returns ``b`` exactly.
        """
        return a * (1.0 - t) + b * t

    @staticmethod
    def lerp_point(p: Point2D, q: Point2D, t: float) -> Point2D:
        """Interpolate two points per axis with the same parameter t."""
        return (GeomMath.lerp(p[0], q[0], t), GeomMath.lerp(p[1], q[1], t))

    @staticmethod
    def length(dx: float, dy: float) -> float:
        """Euclidean length of the vector (dx, dy)."""
        return math.sqrt(dx * dx + dy * dy)

    @staticmethod
    def distance(p: Point2D, q: Point2D) -> float:
        """Euclidean distance between two points."""
        return GeomMath.length(p[0] - q[0], p[1] - q[1])

    @staticmethod
    def perpendicular_foot(p1: Point2D, p2: Point2D, point: Point2D) -> Point2D:
        """
        Project _point_ onto the infinite line through _p1_ and _p2_.

        The foot is ``p1 + t*(p2-p1)`` with ``t = ((point-p1).(p2-p1)) / |p2-p1|^2``.
        If p1 and p2 coincide no line is defined and p1 is returned.

        Args:
            p1 (Tuple[float, float]): First point on the line
            p2 (Tuple[float, float]): Second point on the line
            point (Tuple[float, float]): Point to project

        Returns:
            Tuple[float, float]: the foot of the perpendicular
        """
        vx = p2[0] - p1[0]
        vy = p2[1] - p1[1]
        wx = point[0] - p1[0]
        wy = point[1] - p1[1]

        dot_vv = vx * vx + vy * vy
        if dot_vv == 0:
            return (p1[0], p1[1])

        t = (wx * vx + wy * vy) / dot_vv
        return (p1[0] + t * vx, p1[1] + t * vy)

    @staticmethod
    def clamp(value: float, lower: float = 0.0, upper: float = 1.0) -> float:
        """Clamp _value_ into [lower, upper], by default the unit interval."""
        return max(lower, min(upper, value))


###############################################################################
# ControlBox
###############################################################################
@dataclass(frozen=True)
class ControlBox:
    """
    Axis-aligned box enclosing the control points of a curve.

    A Bezier curve lies inside the convex hull of its control points and
    therefore inside this box.

    Attributes:
        xmin (float): The minimum x-coordinate.
        ymin (float): The minimum y-coordinate.
        xmax (float): The maximum x-coordinate.
        ymax (float): The maximum y-coordinate.
    """

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self):
        # Normalize coordinates to ensure xmin <= xmax and ymin <= ymax
        if self.xmin > self.xmax:
            xmin, xmax = self.xmax, self.xmin
            object.__setattr__(self, "xmin", xmin)
            object.__setattr__(self, "xmax", xmax)
        if self.ymin > self.ymax:
            ymin, ymax = self.ymax, self.ymin
            object.__setattr__(self, "ymin", ymin)
            object.__setattr__(self, "ymax", ymax)

    @classmethod
    def from_points(cls, points: Iterable[Point2D]) -> ControlBox:
        """Create the smallest box containing all given points."""
        xs, ys = zip(*points)
        return cls(xmin=min(xs), ymin=min(ys), xmax=max(xs), ymax=max(ys))

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """The extent of the box as Tuple (xmin, ymin, xmax, ymax)."""
        return self.xmin, self.ymin, self.xmax, self.ymax

    @property
    def width(self) -> float:
        """float: The width of the box (difference between xmax and xmin)."""
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        """float: The height of the box (difference between ymax and ymin)."""
        return self.ymax - self.ymin

    def expand(self, margin: float) -> ControlBox:
        """Return a box grown by _margin_ on every side."""
        return ControlBox(
            xmin=self.xmin - margin,
            ymin=self.ymin - margin,
            xmax=self.xmax + margin,
            ymax=self.ymax + margin,
        )

    def contains(self, x: float, y: float) -> bool:
        """True if (x, y) lies inside the box or on its border."""
        return self.xmin <= x <= self.xmax and self.ymin <= y <= self.ymax

    def __str__(self):
        return (
            f"ControlBox(xmin={self.xmin}, ymin={self.ymin}, "
            f"xmax={self.xmax}, ymax={self.ymax}, "
            f"width={self.width}, height={self.height})"
        )
