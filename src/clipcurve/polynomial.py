"""Closed-form real roots of polynomials of degree 1, 2 and 3.

Coefficients are given highest degree first, e.g. ``resolve(a, b, c, d)`` solves
``a*t^3 + b*t^2 + c*t + d = 0``. A leading coefficient of exactly zero reduces the
equation to the next lower degree, so callers can use a single entry point even
when the polynomial implied by a curve degenerates.
"""

from __future__ import annotations

import logging
import math
from typing import List

from clipcurve.consts import CUBIC_DISCRIMINANT_EPSILON

logger = logging.getLogger(__name__)


class PolynomialSolver:
    """Class to provide static methods solving low degree polynomial equations.

    All methods return a fresh list of real roots. An empty list means no real root,
    a repeated root may show up more than once.
    """

    @staticmethod
    def cube_root(value: float) -> float:
        """Real cube root keeping the sign of _value_."""
        if value < 0:
            return -math.pow(-value, 1.0 / 3.0)
        return math.pow(value, 1.0 / 3.0)

    @staticmethod
    def resolve(*coefficients: float) -> List[float]:
        """Solve the polynomial given by 2, 3 or 4 coefficients (highest degree first).

        Raises:
            ValueError: If the number of coefficients is not 2, 3 or 4.
        """
        if len(coefficients) == 2:
            return PolynomialSolver.resolve_linear(*coefficients)
        if len(coefficients) == 3:
            return PolynomialSolver.resolve_quadratic(*coefficients)
        if len(coefficients) == 4:
            return PolynomialSolver.resolve_cubic(*coefficients)
        raise ValueError(f"Expected 2, 3 or 4 coefficients, got {len(coefficients)}")

    @staticmethod
    def resolve_linear(a: float, b: float) -> List[float]:
        """Solve ``a*t + b = 0``.

        A zero intercept ``b`` is treated as degenerate and yields no root.
        A zero slope ``a`` leaves a constant equation, which yields no root as well.
        """
        if b == 0 or a == 0:
            return []
        return [-b / a]

    @staticmethod
    def resolve_quadratic(a: float, b: float, c: float) -> List[float]:
        """Solve ``a*t^2 + b*t + c = 0``, falling back to linear if ``a == 0``."""
        if a == 0:
            logger.debug("Quadratic reduced to linear: %g*t + %g", b, c)
            return PolynomialSolver.resolve_linear(b, c)

        delta = b * b - 4.0 * a * c
        if delta < 0:
            return []

        sqrt_delta = math.sqrt(delta)
        roots = [(-b + sqrt_delta) / (2.0 * a)]
        if delta != 0:
            roots.append((-b - sqrt_delta) / (2.0 * a))
        return roots

    @staticmethod
    def resolve_cubic(a: float, b: float, c: float, d: float) -> List[float]:
        """
        Solve ``a*t^3 + b*t^2 + c*t + d = 0``, falling back to quadratic if ``a == 0``.

        The equation is depressed by ``t = y - b/(3a)`` into ``y^3 + p*y + q = 0``.
        If p and q both vanish next to the shift ``b/(3a)`` the root is triple.
        Otherwise the discriminant ``(q/2)^2 + (p/3)^3`` selects the method:

        - positive: one real root (Cardano with signed cube roots)
        - negative: three distinct real roots (trigonometric form)
        - about zero: a simple root plus a double root

        "Vanish" and "about zero" are relative to the magnitude of the compared terms,
        so the branch choice does not depend on the scale of the roots.

        Args:
            a (float): coefficient of t^3
            b (float): coefficient of t^2
            c (float): coefficient of t
            d (float): constant term

        Returns:
            List[float]: the real roots, a double root is reported twice
        """
        if a == 0:
            logger.debug("Cubic reduced to quadratic: %g*t^2 + %g*t + %g", b, c, d)
            return PolynomialSolver.resolve_quadratic(b, c, d)

        shift = b / (3.0 * a)
        p = (3.0 * a * c - b * b) / (3.0 * a * a)
        q = (2.0 * b * b * b - 9.0 * a * b * c + 27.0 * a * a * d) / (27.0 * a * a * a)
        eps = CUBIC_DISCRIMINANT_EPSILON

        if abs(p) <= eps * shift * shift and abs(q) <= eps * abs(shift * shift * shift):
            return [-shift]

        half_q_squared = (q / 2.0) * (q / 2.0)
        third_p_cubed = (p / 3.0) * (p / 3.0) * (p / 3.0)
        delta = half_q_squared + third_p_cubed
        delta_band = eps * max(half_q_squared, abs(third_p_cubed))

        if delta > delta_band:
            sqrt_delta = math.sqrt(delta)
            u = PolynomialSolver.cube_root(-q / 2.0 + sqrt_delta)
            v = PolynomialSolver.cube_root(-q / 2.0 - sqrt_delta)
            return [u + v - shift]

        if delta < -delta_band:
            # delta < 0 implies p < 0
            sqrt_p_3 = math.sqrt(-p / 3.0)
            cos_theta = (-q / 2.0) / (sqrt_p_3 * sqrt_p_3 * sqrt_p_3)
            cos_theta = max(-1.0, min(1.0, cos_theta))
            theta = math.acos(cos_theta)
            scale = 2.0 * sqrt_p_3
            return [scale * math.cos((theta + 2.0 * math.pi * k) / 3.0) - shift for k in range(3)]

        u = PolynomialSolver.cube_root(-q / 2.0)
        return [2.0 * u - shift, -u - shift]
