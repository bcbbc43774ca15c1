"""Central module containing types, enums and exceptions shared by the curve math."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

###############################################################################
# Types
###############################################################################


Point2D = Tuple[float, float]  # (x, y) in image space

# Anything accepted as a control point: tuple, list or a numpy row
PointLike = Union[Sequence[float], NDArray[np.float64]]


def as_point(point: PointLike) -> Point2D:
    """Coerce a 2-element sequence into a ``(float, float)`` tuple.

    Raises:
        ValueError: If the sequence does not hold exactly two coordinates.
    """
    if len(point) != 2:
        raise ValueError(f"Point must have exactly 2 coordinates, got {len(point)}")
    return (float(point[0]), float(point[1]))


@dataclass(frozen=True)
class HitResult:
    """Outcome of a hit-test.

    Attributes:
        found: True if some point of the curve lies within the threshold.
        t: Curve parameter in [0, 1] of the nearest point, None if not found.
    """

    found: bool
    t: Optional[float] = None

    def __bool__(self) -> bool:
        return self.found


MISS = HitResult(found=False)


###############################################################################
# Enums
###############################################################################


class HitTestStrategy(Enum):
    """Enum to select the hit-test algorithm used for quadratic and cubic curves."""

    NEAREST_POINT = auto()  # multi-start Newton-Raphson on the squared distance
    AXIS_ROOTS = auto()  # historical per-axis polynomial roots, averaged


###############################################################################
# Exceptions
###############################################################################


class BezierCurveError(Exception):
    """Base exception for curve-related errors."""


class ControlPointCountError(BezierCurveError, ValueError):
    """Raised when the number of control points does not match any curve variant."""
