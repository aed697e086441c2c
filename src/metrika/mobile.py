'''Relativistic trajectory package
Mobile class definition'''

import numpy as np
from typing import Optional
from .utils import validation_error

class Mobile:
    """
    A test particle or photon moving in the equatorial plane of a
    central body.

    The mobile is mutated in place by the simulation for its entire life.
    All numeric state is stored as numpy float64 so that divisions by
    zero and square roots of negative numbers produce inf / NaN instead
    of raising.

    Parameters
    ----------
    r : float
        Initial radial coordinate [m], strictly positive
    phi : float, optional
        Initial azimuthal coordinate [rad] (default: 0)
    v : float, optional
        Initial locally measured speed [m/s] (ignored for photons,
        which always move at c)
    v_alpha : float, optional
        Angle between the velocity and the outward radial direction [rad].
        0 is radial, pi/2 is tangential (default: 0)
    is_photon : bool, optional
        Selects the massless formula family. Fixed for the lifetime of
        the mobile (default: False)
    name : str, optional
        Mobile identifier

    Attributes
    ----------
    U_r, U_phi : float
        Derivatives of r and r*phi with respect to the affine parameter
        (proper time for massive particles)
    v_r, v_phi, v_norm : float
        Locally measured physical velocity components
    L, E : float
        Conserved specific angular momentum and energy (NaN until the
        mobile is initialized)
    dtau : float
        Last integration step
    clock_astronaut : float
        Accumulated proper time
    clock_distant_observer : float
        Accumulated coordinate time of an observer at infinity
    """

    def __init__(
        self,
        r: float,
        phi: float = 0.0,
        v: float = 0.0,
        v_alpha: float = 0.0,
        is_photon: bool = False,
        name: Optional[str] = None
    ):
        # Validate inputs
        for label, value in (('r', r), ('phi', phi), ('v', v),
                             ('v_alpha', v_alpha)):
            if not np.isfinite(value):
                validation_error(f"{label} must be finite, got {value}")
        if r <= 0:
            validation_error(f"Radial coordinate must be positive, got {r}")
        if v < 0:
            validation_error(f"Speed must be non-negative, got {v}")

        self._is_photon = bool(is_photon)
        self._name = name
        self._initialized = False

        # Position
        self.r = np.float64(r)
        self.phi = np.float64(phi)

        # Initial velocity, stored as physical components
        self.v_alpha = np.float64(v_alpha)
        self.v_norm = np.float64(v)
        self.v_r = np.float64(v) * np.cos(self.v_alpha)
        self.v_phi = np.float64(v) * np.sin(self.v_alpha)

        # Affine derivatives and integration constants (set on initialization)
        self.U_r = np.float64(np.nan)
        self.U_phi = np.float64(np.nan)
        self.L = np.float64(np.nan)
        self.E = np.float64(np.nan)

        # Step and clocks
        self.dtau = np.float64(0.0)
        self.clock_astronaut = np.float64(0.0)
        self.clock_distant_observer = np.float64(0.0)

    @property
    def is_photon(self) -> bool:
        """Whether the mobile is massless (read-only)"""
        return self._is_photon

    @property
    def name(self) -> Optional[str]:
        """Mobile identifier"""
        return self._name

    @property
    def is_initialized(self) -> bool:
        """True once the integration constants have been computed."""
        return self._initialized

    def set_integration_constants(self, L, E):
        """
        Store the conserved quantities L and E.

        Called once, at initialization. The values are kept even when
        they are not finite.
        """
        self.L = np.float64(L)
        self.E = np.float64(E)
        self._initialized = True

    @property
    def x(self) -> float:
        """Cartesian x coordinate in the orbital plane [m]"""
        return self.r * np.cos(self.phi)

    @property
    def y(self) -> float:
        """Cartesian y coordinate in the orbital plane [m]"""
        return self.r * np.sin(self.phi)

    def state(self) -> np.ndarray:
        """
        Snapshot of the mobile state.

        Returns
        -------
        np.ndarray
            Array [clock_astronaut, clock_distant_observer, r, phi, U_r,
            v_r, v_phi, v_norm, dtau], the column order of Trajectory
        """
        return np.array([
            self.clock_astronaut, self.clock_distant_observer,
            self.r, self.phi, self.U_r,
            self.v_r, self.v_phi, self.v_norm, self.dtau
        ], dtype=float)

    def __repr__(self) -> str:
        name_str = f"'{self.name}'" if self.name else "unnamed"
        kind = "photon" if self.is_photon else "massive"
        return (f"Mobile({name_str}, {kind}, r={self.r:.6e}, "
                f"phi={self.phi:.6f}, v={self.v_norm:.6e})")
