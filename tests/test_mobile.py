"""
Test suite for Mobile objects and initial-condition factories.

Tests cover:
- Construction and stored components
- Input validation (strict and permissive)
- Integration constants bookkeeping
- State snapshots
- Factory functions
"""

import pytest
import numpy as np
from metrika import (
    Mobile, UNIT_BLACK_HOLE, temp_config,
    circular_speed, circular_orbit, radial_infall, tangential_photon
)


class TestConstruction:
    """Test Mobile construction."""

    def test_velocity_components(self):
        """Speed and angle are split into radial and tangential parts."""
        mobile = Mobile(r=10.0, v=0.5, v_alpha=np.pi / 3)

        assert mobile.v_norm == 0.5
        assert mobile.v_r == pytest.approx(0.25)
        assert mobile.v_phi == pytest.approx(0.5 * np.sqrt(3) / 2)

    def test_defaults(self):
        """Default mobile is massive, at phi = 0 and at rest."""
        mobile = Mobile(r=10.0)

        assert not mobile.is_photon
        assert mobile.phi == 0.0
        assert mobile.v_norm == 0.0
        assert mobile.name is None

    def test_not_initialized(self):
        """Affine derivatives and constants are NaN before initialization."""
        mobile = Mobile(r=10.0, v=0.1)

        assert not mobile.is_initialized
        assert np.isnan(mobile.U_r)
        assert np.isnan(mobile.U_phi)
        assert np.isnan(mobile.L)
        assert np.isnan(mobile.E)

    def test_clocks_start_at_zero(self):
        """Both clocks and the step start at zero."""
        mobile = Mobile(r=10.0)

        assert mobile.clock_astronaut == 0.0
        assert mobile.clock_distant_observer == 0.0
        assert mobile.dtau == 0.0

    def test_numpy_scalars(self):
        """State is stored as numpy float64."""
        mobile = Mobile(r=10.0, v=0.1)

        assert isinstance(mobile.r, np.float64)
        assert isinstance(mobile.v_r, np.float64)

    def test_division_by_zero_does_not_raise(self):
        """numpy scalars give inf instead of ZeroDivisionError."""
        mobile = Mobile(r=10.0)
        with np.errstate(divide='ignore'):
            result = 1.0 / (mobile.r - mobile.r)
        assert np.isinf(result)

    def test_photon_flag_read_only(self):
        """is_photon cannot be reassigned."""
        mobile = Mobile(r=10.0, is_photon=True)
        with pytest.raises(AttributeError):
            mobile.is_photon = False

    def test_cartesian_position(self):
        """x, y follow from r and phi."""
        mobile = Mobile(r=2.0, phi=np.pi / 2)

        assert mobile.x == pytest.approx(0.0, abs=1e-12)
        assert mobile.y == pytest.approx(2.0)


class TestValidation:
    """Test input validation."""

    @pytest.mark.parametrize("kwargs", [
        dict(r=0.0),
        dict(r=-1.0),
        dict(r=np.nan),
        dict(r=np.inf),
        dict(r=1.0, v=-0.1),
        dict(r=1.0, phi=np.nan),
        dict(r=1.0, v_alpha=np.inf),
    ])
    def test_invalid_inputs_rejected(self, kwargs):
        """Invalid inputs raise ValueError in strict mode."""
        with pytest.raises(ValueError):
            Mobile(**kwargs)

    def test_permissive_mode_warns(self):
        """Invalid inputs only warn when STRICT_VALIDATION is False."""
        with temp_config(STRICT_VALIDATION=False):
            with pytest.warns(UserWarning, match="Radial coordinate"):
                mobile = Mobile(r=-1.0)
        assert mobile.r == -1.0


class TestIntegrationConstants:
    """Test L and E bookkeeping."""

    def test_set_marks_initialized(self):
        """Setting the constants marks the mobile as initialized."""
        mobile = Mobile(r=10.0)
        mobile.set_integration_constants(2.0, 0.9)

        assert mobile.is_initialized
        assert mobile.L == 2.0
        assert mobile.E == 0.9

    def test_non_finite_constants_kept(self):
        """NaN constants are stored and still count as initialized."""
        mobile = Mobile(r=10.0)
        mobile.set_integration_constants(np.nan, np.nan)

        assert mobile.is_initialized
        assert np.isnan(mobile.E)


class TestState:
    """Test state snapshots."""

    def test_state_order(self):
        """state() follows the documented column order."""
        mobile = Mobile(r=10.0, phi=0.5, v=0.2)
        state = mobile.state()

        assert state.shape == (9,)
        assert state[2] == 10.0
        assert state[3] == 0.5
        assert state[7] == pytest.approx(0.2)

    def test_state_is_copy(self):
        """Modifying a snapshot does not affect the mobile."""
        mobile = Mobile(r=10.0)
        state = mobile.state()
        state[2] = 99.0

        assert mobile.r == 10.0

    def test_repr(self):
        """repr shows the name and the particle type."""
        mobile = Mobile(r=10.0, is_photon=True, name='ray')

        assert "'ray'" in repr(mobile)
        assert "photon" in repr(mobile)


class TestFactories:
    """Test initial-condition factories."""

    def test_circular_speed(self):
        """Circular speed at r = 10 R_s / 2 of a unit black hole."""
        assert circular_speed(UNIT_BLACK_HOLE, 20.0) == pytest.approx(np.sqrt(1 / 18))

    def test_circular_orbit_is_tangential(self):
        """circular_orbit() launches tangentially."""
        mobile = circular_orbit(UNIT_BLACK_HOLE, 20.0, name='orbiter')

        assert mobile.v_alpha == pytest.approx(np.pi / 2)
        assert mobile.v_norm == pytest.approx(np.sqrt(1 / 18))
        assert mobile.name == 'orbiter'

    def test_radial_infall_points_inwards(self):
        """radial_infall() points towards the center."""
        mobile = radial_infall(20.0, v=0.1)

        assert mobile.v_r == pytest.approx(-0.1)

    def test_tangential_photon(self):
        """tangential_photon() creates a photon."""
        mobile = tangential_photon(50.0)

        assert mobile.is_photon
        assert mobile.v_alpha == pytest.approx(np.pi / 2)

    def test_factories_return_new_objects(self):
        """Each call creates an independent mobile."""
        assert radial_infall(20.0) is not radial_infall(20.0)
