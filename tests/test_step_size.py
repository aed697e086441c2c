"""
Test suite for the adaptive step-size policy.

Tests cover:
- Massive and photon formulas in both frames
- Free-fall clamp
- Exact tuning constants
"""

import pytest
import numpy as np
from metrika import (
    CentralBody, Mobile, Schwarzschild, GEOMETRIZED, UNIT_BLACK_HOLE,
    circular_orbit, radial_infall, tangential_photon
)
from metrika import step_size as policy
from metrika.step_size import step_size, free_fall_time


def _initialized(body, mobile):
    Schwarzschild(body, [mobile]).initialize()
    return mobile


class TestConstants:
    """Test the tuned constants are unchanged."""

    def test_values(self):
        """Tuned constants keep their exact values."""
        assert policy.MASSIVE_EXTERNAL_EPS == 1e-10
        assert policy.MASSIVE_INTERNAL_EPS == 1e-20
        assert policy.PHOTON_EPS == 1.0
        assert policy.STEP_DIVISOR == 1000
        assert policy.PHOTON_ASTRONAUT_PREFACTOR == 1e-3
        assert policy.FREE_FALL_DIVISOR == 500


class TestFreeFallTime:
    """Test the free-fall timescale."""

    def test_value(self):
        """pi r (r / 2GM)^(1/4) / 2."""
        expected = np.pi * 20.0 * 10.0**0.25 / 2
        assert free_fall_time(UNIT_BLACK_HOLE, 20.0) == pytest.approx(expected)

    def test_increases_with_radius(self):
        """Larger radii allow larger steps."""
        assert free_fall_time(UNIT_BLACK_HOLE, 40.0) > free_fall_time(UNIT_BLACK_HOLE, 20.0)


class TestMassive:
    """Test massive particle steps."""

    def test_circular_orbit(self):
        """r / (sqrt(U_r^2 + U_phi^2) + eps) / 1000, reproduced exactly."""
        mobile = _initialized(UNIT_BLACK_HOLE, circular_orbit(UNIT_BLACK_HOLE, 20.0))
        expected = 20.0 / (np.sqrt(mobile.U_r**2 + mobile.U_phi**2) + 1e-10) / 1000

        assert step_size(UNIT_BLACK_HOLE, mobile, 'A') == expected
        assert expected == pytest.approx(20.0 * np.sqrt(17) / 1000)

    def test_same_in_both_frames(self):
        """Massive steps do not depend on the frame."""
        mobile = _initialized(UNIT_BLACK_HOLE, circular_orbit(UNIT_BLACK_HOLE, 20.0))

        assert step_size(UNIT_BLACK_HOLE, mobile, 'A') == \
            step_size(UNIT_BLACK_HOLE, mobile, 'DO')

    def test_at_rest_is_clamped(self):
        """A mobile at rest gets the free-fall bound."""
        mobile = _initialized(UNIT_BLACK_HOLE, radial_infall(20.0))

        assert step_size(UNIT_BLACK_HOLE, mobile, 'A') == pytest.approx(
            free_fall_time(UNIT_BLACK_HOLE, 20.0) / 500)

    def test_interior_at_rest_is_clamped(self):
        """Interior mobile at rest is bounded by the free-fall time."""
        star = CentralBody(mass=1.0, radius=10.0, constants=GEOMETRIZED)
        mobile = _initialized(star, Mobile(r=5.0))
        dtau = step_size(star, mobile, 'A')

        assert np.isfinite(dtau)
        assert dtau == pytest.approx(free_fall_time(star, 5.0) / 500)


class TestPhoton:
    """Test photon steps."""

    def test_astronaut(self):
        """1e-3 r / (|U_r| + |U_phi| + 1) in the astronaut frame."""
        mobile = _initialized(UNIT_BLACK_HOLE, tangential_photon(50.0))
        U_phi = 1 / np.sqrt(0.96)

        assert mobile.U_phi == pytest.approx(U_phi)
        assert step_size(UNIT_BLACK_HOLE, mobile, 'A') == pytest.approx(
            0.05 / (U_phi + 1), rel=1e-12)

    def test_distant_observer(self):
        """r / (sqrt(U_r^2 + U_phi^2) + 1) / 1000, reproduced exactly."""
        mobile = _initialized(UNIT_BLACK_HOLE, Mobile(r=50.0, v_alpha=0.4, is_photon=True))
        expected = 50.0 / (np.sqrt(mobile.U_r**2 + mobile.U_phi**2) + 1) / 1000

        assert step_size(UNIT_BLACK_HOLE, mobile, 'DO') == expected

    def test_frames_differ_for_oblique_photon(self):
        """Photon steps use different norms in the two frames."""
        mobile = _initialized(UNIT_BLACK_HOLE, Mobile(r=50.0, v_alpha=0.4, is_photon=True))

        assert step_size(UNIT_BLACK_HOLE, mobile, 'A') != \
            step_size(UNIT_BLACK_HOLE, mobile, 'DO')

    def test_astronaut_clamped(self):
        """The free-fall clamp also bounds the astronaut photon step."""
        body = CentralBody(mass=1.0, constants=GEOMETRIZED)
        mobile = Mobile(r=1e-3, v_alpha=0.0, is_photon=True)
        mobile.U_r = np.float64(0.0)
        mobile.U_phi = np.float64(0.0)

        assert step_size(body, mobile, 'A') == pytest.approx(
            free_fall_time(body, 1e-3) / 500)


class TestPositivity:
    """Test steps are positive for valid states."""

    @pytest.mark.parametrize("frame", ['A', 'DO'])
    @pytest.mark.parametrize("mobile_factory", [
        lambda: circular_orbit(UNIT_BLACK_HOLE, 30.0),
        lambda: radial_infall(15.0, v=0.2),
        lambda: tangential_photon(10.0),
    ])
    def test_positive(self, frame, mobile_factory):
        """Steps are strictly positive."""
        mobile = _initialized(UNIT_BLACK_HOLE, mobile_factory())

        assert step_size(UNIT_BLACK_HOLE, mobile, frame) > 0
