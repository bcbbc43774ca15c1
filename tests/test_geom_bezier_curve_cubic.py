"""Test module for CubicBezierCurve in clipcurve.bezier

The tests are run using pytest.
These tests ensure that all cubic curve methods and interfaces
remain working correctly after changes and refactoring.
"""

import numpy as np
import pytest

from clipcurve.bezier import CubicBezierCurve
from clipcurve.consts import AXIS_ROOTS_HIT_TEST_SETTINGS, HitTestSettings

# arch from (0,0) to (1,0) with apex (0.5, 0.75)
ARCH = CubicBezierCurve((0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0))

# S-shaped curve, monotonic in x
WAVE = CubicBezierCurve((0.0, 0.0), (30.0, 60.0), (70.0, -60.0), (100.0, 0.0))

###############################################################################
# Cubic Sampling Tests
###############################################################################


class TestCubicSampling:
    """Test sampling and derivatives of cubic curves."""

    def test_sample_middle(self):
        """Test the apex of the symmetric arch."""
        assert ARCH.sample(0.5) == (0.5, 0.75)

    def test_endpoints(self):
        """Test that t=0 and t=1 return the endpoints exactly."""
        assert WAVE.sample(0.0) == (0.0, 0.0)
        assert WAVE.sample(1.0) == (100.0, 0.0)

    def test_sample_matches_bernstein_form(self):
        """Test De Casteljau against the explicit Bernstein polynomial."""
        for t in (0.1, 0.3, 0.77):
            omt = 1.0 - t
            expected_x = 3 * omt * omt * t * 30.0 + 3 * omt * t * t * 70.0 + t**3 * 100.0
            expected_y = 3 * omt * omt * t * 60.0 - 3 * omt * t * t * 60.0
            assert WAVE.sample(t) == pytest.approx((expected_x, expected_y))

    def test_interior_control_points(self):
        """Test that both handles are enumerated in order."""
        assert ARCH.enumerate_control_points() == [(0.0, 1.0), (1.0, 1.0)]
        assert ARCH.degree == 3

    def test_derivative(self):
        """Test the first derivative at both ends and in the middle."""
        assert ARCH.derivative(0.0) == (0.0, 3.0)
        assert ARCH.derivative(1.0) == (0.0, -3.0)
        assert ARCH.derivative(0.5) == (1.5, 0.0)

    def test_second_derivative(self):
        """Test the second derivative at both ends."""
        assert ARCH.second_derivative(0.0) == (6.0, -6.0)
        assert ARCH.second_derivative(1.0) == (-6.0, -6.0)

    def test_derivatives_match_finite_difference(self):
        """Test the analytic derivatives against central differences."""
        h = 1e-5
        for t in (0.15, 0.45, 0.85):
            (x0, y0), (x1, y1) = WAVE.sample(t - h), WAVE.sample(t + h)
            assert WAVE.derivative(t) == pytest.approx(((x1 - x0) / (2 * h), (y1 - y0) / (2 * h)), rel=1e-6)
            (dx0, dy0), (dx1, dy1) = WAVE.derivative(t - h), WAVE.derivative(t + h)
            expected = ((dx1 - dx0) / (2 * h), (dy1 - dy0) / (2 * h))
            assert WAVE.second_derivative(t) == pytest.approx(expected, rel=1e-5, abs=1e-6)

    def test_power_coefficients(self):
        """Test the power basis form of each axis."""
        assert ARCH.power_coefficients(0) == (-2.0, 3.0, 0.0, 0.0)
        assert ARCH.power_coefficients(1) == (0.0, -3.0, 3.0, 0.0)

    def test_polygonize(self):
        """Test polygonizing matches sampling and keeps the endpoints exact."""
        result = WAVE.polygonize(10)
        assert result.shape == (11, 2)
        assert tuple(result[0]) == WAVE.start_point
        assert tuple(result[-1]) == WAVE.end_point
        for i, t in enumerate(np.linspace(0.0, 1.0, 11)):
            assert np.allclose(result[i], WAVE.sample(float(t)))

    def test_polygonize_invalid_steps(self):
        """Test that at least one step is required."""
        with pytest.raises(ValueError):
            WAVE.polygonize(0)


###############################################################################
# Cubic Subdivision Tests
###############################################################################


class TestCubicSubdivision:
    """Test De Casteljau subdivision of cubic curves."""

    def test_subdivide_middle(self):
        """Test the control points of both halves."""
        left, right = ARCH.subdivide(0.5)
        assert left == CubicBezierCurve((0.0, 0.0), (0.0, 0.5), (0.25, 0.75), (0.5, 0.75))
        assert right == CubicBezierCurve((0.5, 0.75), (0.75, 0.75), (1.0, 0.5), (1.0, 0.0))

    def test_subdivide_keeps_variant(self):
        """Test that both halves are cubic curves."""
        left, right = WAVE.subdivide(0.3)
        assert isinstance(left, CubicBezierCurve)
        assert isinstance(right, CubicBezierCurve)

    def test_subdivide_out_of_range(self):
        """Test that the parameter must lie in [0, 1]."""
        with pytest.raises(ValueError):
            ARCH.subdivide(1.5)


###############################################################################
# Cubic Hit-Test Tests
###############################################################################


class TestCubicHitTest:
    """Test hit-testing against cubic curves."""

    def test_hit_on_apex(self):
        """Test a query exactly on the curve."""
        result = ARCH.hit_test(0.5, 0.75, 0.0)
        assert result.found
        assert result.t == pytest.approx(0.5)

    def test_threshold_above_apex(self):
        """Test a query 0.25 above the apex on the convex side."""
        assert not ARCH.hit_test(0.5, 1.0, 0.2).found
        result = ARCH.hit_test(0.5, 1.0, 0.3)
        assert result.found
        assert result.t == pytest.approx(0.5, abs=1e-6)

    def test_boundary_minimum(self):
        """Test a query whose nearest point is the start point."""
        result = ARCH.hit_test(-0.5, -0.5, 1.0)
        assert result.found
        assert result.t == 0.0

    def test_miss_inside_control_box(self):
        """Test a rejection found by the search, not by the control box."""
        assert WAVE.control_box().contains(50.0, 40.0)
        assert not WAVE.hit_test(50.0, 40.0, 10.0).found

    def test_hit_near_wave_crest(self):
        """Test a query slightly above the first crest of the wave."""
        crest_t = 0.5 - 0.5 / np.sqrt(3.0)  # dBy/dt = 0
        crest_x, crest_y = WAVE.sample(crest_t)
        result = WAVE.hit_test(crest_x, crest_y + 1.0, 1.5)
        assert result.found
        assert result.t == pytest.approx(crest_t, abs=1e-3)

    def test_more_seeds_same_answer(self):
        """Test that a denser seeding finds the same nearest point."""
        dense = HitTestSettings(seed_count=41)
        default_hit = WAVE.hit_test(40.0, 10.0, 20.0)
        dense_hit = WAVE.hit_test(40.0, 10.0, 20.0, dense)
        assert default_hit.found and dense_hit.found
        assert default_hit.t == pytest.approx(dense_hit.t, abs=1e-6)

    def test_axis_roots_strategy_on_curve(self):
        """Test the historical strategy on the apex."""
        result = ARCH.hit_test(0.5, 0.75, 0.01, AXIS_ROOTS_HIT_TEST_SETTINGS)
        assert result.found
        assert result.t == pytest.approx(0.5)
