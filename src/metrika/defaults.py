"""
Default Bodies and Initial Conditions
=====================================

Predefined central bodies, and factory functions for commonly-used
initial conditions. Factories create new Mobile objects on each call,
since mobiles are mutated by the simulation.

Examples
--------
>>> from metrika import Schwarzschild, SAGITTARIUS_A_STAR, circular_orbit
>>> sim = Schwarzschild(SAGITTARIUS_A_STAR)
>>> sim.add_mobile(circular_orbit(SAGITTARIUS_A_STAR, r=1e11))
"""
import numpy as np
from .body import CentralBody, GEOMETRIZED
from .mobile import Mobile

"""
Predefined central bodies for Schwarzschild creation
SI units (kg, m)
"""
SOLAR_MASS = 1.98847e30

SUN = CentralBody(
    mass=SOLAR_MASS,
    radius=6.957e8,
    name='Sun'
)

EARTH = CentralBody(
    mass=5.9722e24,
    radius=6.3781e6,
    name='Earth'
)

# typical 1.4 solar mass neutron star, R_s / R close to 1/3
NEUTRON_STAR = CentralBody(
    mass=1.4 * SOLAR_MASS,
    radius=1.2e4,
    name='Neutron star'
)

# point mass, always in the external regime
SAGITTARIUS_A_STAR = CentralBody(
    mass=4.297e6 * SOLAR_MASS,
    radius=0.0,
    name='Sagittarius A*'
)

# c = G = 1 and R_s = 2, convenient for tests and exploration
UNIT_BLACK_HOLE = CentralBody(
    mass=1.0,
    radius=0.0,
    constants=GEOMETRIZED,
    name='Unit black hole'
)


"""
Factory functions for initial conditions
"""
def circular_speed(body, r):
    """
    Locally measured speed of a circular orbit in the external metric.

    v = c sqrt(R_s / (2 (r - R_s)))

    Only meaningful above the photon sphere (r > 3 R_s / 2), and stable
    above the innermost stable circular orbit (r > 3 R_s).
    """
    R_s = body.schwarzschild_radius
    return body.c * np.sqrt(R_s / (2 * (r - R_s)))


def circular_orbit(body, r, phi=0.0, name=None):
    """
    Create a massive mobile on a circular orbit of radius r.

    Parameters
    ----------
    body : CentralBody
    r : float
        Orbit radius [m], outside the body
    phi : float, optional
        Initial azimuth [rad]

    Returns
    -------
    Mobile
        Tangential velocity (v_alpha = pi/2) at the circular speed
    """
    return Mobile(r, phi=phi, v=circular_speed(body, r),
                  v_alpha=np.pi / 2, name=name)


def radial_infall(r, v=0.0, phi=0.0, name=None):
    """
    Create a massive mobile moving radially inwards.

    Parameters
    ----------
    v : float, optional
        Initial inward speed [m/s] (default: 0, released at rest)
    """
    return Mobile(r, phi=phi, v=v, v_alpha=np.pi, name=name)


def tangential_photon(r, phi=0.0, name=None):
    """Create a photon emitted tangentially at radius r."""
    return Mobile(r, phi=phi, v_alpha=np.pi / 2, is_photon=True, name=name)
