"""Linear, quadratic and cubic Bezier curves for clip region editing.

Curves are immutable values built on demand from the editor's control points.
Sampling and subdivision share one De Casteljau implementation so that the
boundary point of a subdivision is exactly the sampled point.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import ClassVar, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from clipcurve.common import (
    MISS,
    ControlPointCountError,
    HitResult,
    HitTestStrategy,
    Point2D,
    PointLike,
    as_point,
)
from clipcurve.consts import DEFAULT_HIT_TEST_SETTINGS, HitTestSettings
from clipcurve.geom import ControlBox, GeomMath
from clipcurve.hit_test import AxisRootSearch, NearestPointSearch

logger = logging.getLogger(__name__)


###############################################################################
# BezierCurve
###############################################################################


class BezierCurve(ABC):
    """Abstract base of the curve variants.

    Subclasses are frozen dataclasses whose fields are the control points in
    curve order, from start point to end point.
    """

    degree: ClassVar[int]

    def __post_init__(self):
        for item in fields(self):
            object.__setattr__(self, item.name, as_point(getattr(self, item.name)))

    @staticmethod
    def from_points(points: Sequence[PointLike]) -> BezierCurve:
        """
        Create the curve variant matching the number of control points.

        Args:
            points: 2, 3 or 4 control points

        Returns:
            BezierCurve: a linear, quadratic or cubic curve

        Raises:
            ControlPointCountError: If the number of points matches no variant.
        """
        variant = _VARIANTS_BY_POINT_COUNT.get(len(points))
        if variant is None:
            raise ControlPointCountError(f"A Bezier curve needs 2, 3 or 4 control points, got {len(points)}")
        return variant(*points)

    @property
    def control_points(self) -> Tuple[Point2D, ...]:
        """All control points including both endpoints, in curve order."""
        return tuple(getattr(self, item.name) for item in fields(self))

    @property
    def start_point(self) -> Point2D:
        """Point2D: The point at t=0."""
        return self.control_points[0]

    @property
    def end_point(self) -> Point2D:
        """Point2D: The point at t=1."""
        return self.control_points[-1]

    def enumerate_control_points(self) -> List[Point2D]:
        """Interior control points (the handles), endpoints excluded. Empty for a line."""
        return list(self.control_points[1:-1])

    def control_box(self) -> ControlBox:
        """Bounding box of the control points, which also encloses the curve."""
        return ControlBox.from_points(self.control_points)

    def de_casteljau(self, t: float) -> List[Tuple[Point2D, ...]]:
        """
        Run De Casteljau's algorithm at _t_ and keep every level of the pyramid.

        Level 0 holds the control points, each following level lerps neighbours of
        the previous one, and the last level holds the single point on the curve.
        """
        levels = [self.control_points]
        points = self.control_points
        while len(points) > 1:
            points = tuple(GeomMath.lerp_point(p, q, t) for p, q in zip(points[:-1], points[1:]))
            levels.append(points)
        return levels

    def sample(self, t: float) -> Point2D:
        """Evaluate the curve at _t_. The domain is not clamped."""
        return self.de_casteljau(t)[-1][0]

    def polygonize(self, steps: int) -> NDArray[np.float64]:
        """
        Sample the curve at ``t = i/steps`` for ``i = 0..steps`` using NumPy.

        The same lerp formula as ``sample`` is applied to all parameters at once,
        so the first and last rows are exactly the endpoints.

        Args:
            steps: Number of segments to divide the curve into

        Returns:
            NDArray[np.float64]: points of shape (steps + 1, 2)
        """
        if steps < 1:
            raise ValueError(f"steps must be positive, got {steps}")

        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)[:, np.newaxis]
        points = [np.asarray(point, dtype=np.float64) for point in self.control_points]
        while len(points) > 1:
            points = [GeomMath.lerp(p, q, t) for p, q in zip(points[:-1], points[1:])]
        return points[0]

    def hit_test(
        self, x: float, y: float, threshold: float, settings: Optional[HitTestSettings] = None
    ) -> HitResult:
        """
        Check whether some point of the curve lies within _threshold_ of (x, y).

        The comparison allows a slack of ``settings.hit_epsilon`` (1e-6 by default) for
        the round-off of the nearest point search: a query at a distance up to
        ``threshold + hit_epsilon`` is a hit, so a point sampled from the curve is found
        even with ``threshold == 0``. The AXIS_ROOTS strategy compares against the
        plain _threshold_. The control box rejection also uses the slack.

        Args:
            x (float): x-coordinate of the query point
            y (float): y-coordinate of the query point
            threshold (float): maximum distance, must be non-negative
            settings (HitTestSettings): tuning, defaults to DEFAULT_HIT_TEST_SETTINGS

        Returns:
            HitResult: found flag and the parameter t in [0, 1] of the hit
        """
        if threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {threshold}")
        if settings is None:
            settings = DEFAULT_HIT_TEST_SETTINGS

        reach = threshold + settings.hit_epsilon
        if not self.control_box().expand(reach).contains(x, y):
            logger.debug("Hit-test (%g, %g) outside control box of %r", x, y, self)
            return MISS

        t = self._find_hit(x, y, threshold, settings)
        if t is None:
            return MISS
        return HitResult(found=True, t=t)

    def snap_point(
        self, x: float, y: float, threshold: float, settings: Optional[HitTestSettings] = None
    ) -> Optional[Point2D]:
        """Point of the curve hit by (x, y), or None if nothing is within _threshold_."""
        result = self.hit_test(x, y, threshold, settings)
        if not result:
            return None
        return self.sample(result.t)

    @abstractmethod
    def _find_hit(self, x: float, y: float, threshold: float, settings: HitTestSettings) -> Optional[float]:
        """Parameter of the hit in [0, 1], or None."""


###############################################################################
# LinearBezierCurve
###############################################################################


@dataclass(frozen=True)
class LinearBezierCurve(BezierCurve):
    """Straight segment from _start_ to _end_."""

    degree: ClassVar[int] = 1

    start: Point2D
    end: Point2D

    def sample(self, t: float) -> Point2D:
        return GeomMath.lerp_point(self.start, self.end, t)

    def _find_hit(self, x: float, y: float, threshold: float, settings: HitTestSettings) -> Optional[float]:
        query = (x, y)
        foot = GeomMath.perpendicular_foot(self.start, self.end, query)
        length = GeomMath.distance(self.start, self.end)

        t = 0.0
        if length > 0:
            t = GeomMath.distance(self.start, foot) / length
            # foot behind the start point
            if (foot[0] - self.start[0]) * (self.end[0] - self.start[0]) + (foot[1] - self.start[1]) * (
                self.end[1] - self.start[1]
            ) < 0:
                t = -t
            t = GeomMath.clamp(t)

        if GeomMath.distance(self.sample(t), query) > threshold + settings.hit_epsilon:
            return None
        return t


###############################################################################
# SubdividableBezierCurve
###############################################################################


class SubdividableBezierCurve(BezierCurve):
    """Curve that can be split and searched with analytic derivatives (quadratic, cubic)."""

    @abstractmethod
    def derivative(self, t: float) -> Point2D:
        """First derivative B'(t)."""

    @abstractmethod
    def second_derivative(self, t: float) -> Point2D:
        """Second derivative B''(t)."""

    @abstractmethod
    def power_coefficients(self, axis: int) -> Tuple[float, ...]:
        """Coefficients of B_axis(t) in the power basis, highest degree first."""

    def subdivide(self, t: float) -> Tuple[SubdividableBezierCurve, SubdividableBezierCurve]:
        """
        Split the curve at _t_ into two curves of the same variant.

        The left curve takes the first point of every De Casteljau level, the right
        curve the last point of every level in reverse order. Both share the
        sampled point at _t_ as boundary.

        Raises:
            ValueError: If t lies outside [0, 1].
        """
        if not 0.0 <= t <= 1.0:
            raise ValueError(f"Subdivision parameter must lie in [0, 1], got {t}")

        levels = self.de_casteljau(t)
        left = type(self)(*(level[0] for level in levels))
        right = type(self)(*(level[-1] for level in reversed(levels)))
        return left, right

    def _find_hit(self, x: float, y: float, threshold: float, settings: HitTestSettings) -> Optional[float]:
        if settings.strategy is HitTestStrategy.AXIS_ROOTS:
            # the axis deviations are exact, no slack
            return AxisRootSearch.find(self, x, y, threshold)

        t, distance = NearestPointSearch.find(self, x, y, settings)
        if distance > threshold + settings.hit_epsilon:
            return None
        return t


###############################################################################
# QuadraticBezierCurve
###############################################################################


@dataclass(frozen=True)
class QuadraticBezierCurve(SubdividableBezierCurve):
    """Quadratic curve from _start_ to _end_ pulled towards a single _control_ point."""

    degree: ClassVar[int] = 2

    start: Point2D
    control: Point2D
    end: Point2D

    def derivative(self, t: float) -> Point2D:
        # B'(t) = 2[(1-t)(P1-P0) + t(P2-P1)]
        (p0x, p0y), (p1x, p1y), (p2x, p2y) = self.start, self.control, self.end
        omt = 1.0 - t
        return (
            2.0 * (omt * (p1x - p0x) + t * (p2x - p1x)),
            2.0 * (omt * (p1y - p0y) + t * (p2y - p1y)),
        )

    def second_derivative(self, t: float) -> Point2D:
        # constant for a quadratic: B'' = 2(P2 - 2P1 + P0)
        (p0x, p0y), (p1x, p1y), (p2x, p2y) = self.start, self.control, self.end
        return (2.0 * (p2x - 2.0 * p1x + p0x), 2.0 * (p2y - 2.0 * p1y + p0y))

    def power_coefficients(self, axis: int) -> Tuple[float, float, float]:
        p0, p1, p2 = self.start[axis], self.control[axis], self.end[axis]
        return (p0 - 2.0 * p1 + p2, 2.0 * (p1 - p0), p0)


###############################################################################
# CubicBezierCurve
###############################################################################


@dataclass(frozen=True)
class CubicBezierCurve(SubdividableBezierCurve):
    """Cubic curve from _start_ to _end_ shaped by the handles _control1_ and _control2_."""

    degree: ClassVar[int] = 3

    start: Point2D
    control1: Point2D
    control2: Point2D
    end: Point2D

    def derivative(self, t: float) -> Point2D:
        # B'(t) = 3[(1-t)^2(P1-P0) + 2(1-t)t(P2-P1) + t^2(P3-P2)]
        (p0x, p0y), (p1x, p1y), (p2x, p2y), (p3x, p3y) = self.control_points
        omt = 1.0 - t
        b0 = 3.0 * omt * omt
        b1 = 6.0 * omt * t
        b2 = 3.0 * t * t
        return (
            b0 * (p1x - p0x) + b1 * (p2x - p1x) + b2 * (p3x - p2x),
            b0 * (p1y - p0y) + b1 * (p2y - p1y) + b2 * (p3y - p2y),
        )

    def second_derivative(self, t: float) -> Point2D:
        # B''(t) = 6[(1-t)(P2-2P1+P0) + t(P3-2P2+P1)]
        (p0x, p0y), (p1x, p1y), (p2x, p2y), (p3x, p3y) = self.control_points
        omt = 1.0 - t
        return (
            6.0 * (omt * (p2x - 2.0 * p1x + p0x) + t * (p3x - 2.0 * p2x + p1x)),
            6.0 * (omt * (p2y - 2.0 * p1y + p0y) + t * (p3y - 2.0 * p2y + p1y)),
        )

    def power_coefficients(self, axis: int) -> Tuple[float, float, float, float]:
        p0, p1, p2, p3 = (point[axis] for point in self.control_points)
        return (
            -p0 + 3.0 * p1 - 3.0 * p2 + p3,
            3.0 * (p0 - 2.0 * p1 + p2),
            3.0 * (p1 - p0),
            p0,
        )


_VARIANTS_BY_POINT_COUNT = {
    2: LinearBezierCurve,
    3: QuadraticBezierCurve,
    4: CubicBezierCurve,
}
