"""Helpers turning a clip region segment into a curve.

A segment of the clip region joins two boundary points. The first point may carry
an outgoing handle and the second point an incoming handle. Depending on which
handles exist the segment is a line, a quadratic or a cubic curve.
"""

from __future__ import annotations

from typing import Optional, Tuple

from clipcurve.bezier import (
    BezierCurve,
    CubicBezierCurve,
    LinearBezierCurve,
    QuadraticBezierCurve,
    SubdividableBezierCurve,
)
from clipcurve.common import Point2D, PointLike, as_point
from clipcurve.consts import HitTestSettings
from clipcurve.geom import GeomMath


def segment_curve(
    start: PointLike,
    end: PointLike,
    out_handle: Optional[PointLike] = None,
    in_handle: Optional[PointLike] = None,
) -> BezierCurve:
    """
    Build the curve of a segment.

    Args:
        start: First boundary point
        end: Second boundary point
        out_handle: Outgoing handle of the first point, if any
        in_handle: Incoming handle of the second point, if any

    Returns:
        BezierCurve: cubic with both handles, quadratic with one, linear with none
    """
    if out_handle is not None and in_handle is not None:
        return CubicBezierCurve(start, out_handle, in_handle, end)
    if in_handle is not None:
        return QuadraticBezierCurve(start, in_handle, end)
    if out_handle is not None:
        return QuadraticBezierCurve(start, out_handle, end)
    return LinearBezierCurve(start, end)


def snap_to_segment(
    # pylint: disable=too-many-arguments,too-many-positional-arguments
    start: PointLike,
    end: PointLike,
    query: PointLike,
    max_distance: float,
    out_handle: Optional[PointLike] = None,
    in_handle: Optional[PointLike] = None,
    settings: Optional[HitTestSettings] = None,
) -> Optional[Point2D]:
    """Point on the segment hit by _query_, or None if the segment is farther than _max_distance_."""
    x, y = as_point(query)
    return segment_curve(start, end, out_handle, in_handle).snap_point(x, y, max_distance, settings)


def split_segment(
    start: PointLike,
    end: PointLike,
    t: float,
    out_handle: Optional[PointLike] = None,
    in_handle: Optional[PointLike] = None,
) -> Tuple[BezierCurve, BezierCurve]:
    """
    Split a segment at _t_ for inserting a new boundary point.

    Curved segments are subdivided, which yields the handles of the new point as
    the interior control points next to the split. A line splits into two lines.

    Raises:
        ValueError: If t lies outside [0, 1].
    """
    curve = segment_curve(start, end, out_handle, in_handle)
    if isinstance(curve, SubdividableBezierCurve):
        return curve.subdivide(t)

    if not 0.0 <= t <= 1.0:
        raise ValueError(f"Split parameter must lie in [0, 1], got {t}")
    middle = GeomMath.lerp_point(curve.start_point, curve.end_point, t)
    return LinearBezierCurve(curve.start_point, middle), LinearBezierCurve(middle, curve.end_point)
