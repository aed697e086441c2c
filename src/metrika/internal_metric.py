"""
Internal Schwarzschild Metric
=============================

Closed-form expressions for motion inside a uniform-density body (r < R).

The interior metric introduces two structure functions of the radial
coordinate, alpha(r) and beta(r). They are never cached: every formula
recomputes them from the ``r`` it is evaluated at.

Only the astronaut frame exists for the interior. There is no distant
observer acceleration or potential here.
"""

import numpy as np

def alpha(body, r):
    """alpha(r) = 1 - r^2 R_s / R^3"""
    return 1 - r**2 * body.schwarzschild_radius / body.radius**3


def beta(body, r):
    """beta(r) = 3/2 sqrt(1 - R_s/R) - 1/2 sqrt(alpha(r))"""
    return (1.5 * np.sqrt(1 - body.schwarzschild_radius / body.radius)
            - 0.5 * np.sqrt(alpha(body, r)))


# ========== MASSIVE PARTICLE ==========
def massive_integration_constants(body, mobile):
    """
    Integration constants of a massive particle.

    Returns
    -------
    L : float
        Specific angular momentum [m]
    E : float
        Specific energy (dimensionless)
    """
    c = body.c
    a = alpha(body, mobile.r)
    b = beta(body, mobile.r)
    L = mobile.U_phi * mobile.r / c
    E = b / c * np.sqrt(mobile.U_r**2 / a + mobile.U_phi**2 + c**2)
    return L, E


def massive_potential_A(body, mobile, r=None):
    """Effective potential seen by the astronaut."""
    r = mobile.r if r is None else r
    E = mobile.E
    return E**2 - alpha(body, r) * ((E / beta(body, r))**2
                                    - (mobile.L / r)**2 - 1)


def massive_acceleration_A(body, mobile, t, r, U_r):
    """Second derivative d2r/dtau2 in proper time (astronaut)."""
    return _acceleration_A(body, mobile, r, rest_mass=1)


# ========== PHOTON ==========
def photon_integration_constants(body, mobile):
    """Integration constants of a photon."""
    c = body.c
    a = alpha(body, mobile.r)
    b = beta(body, mobile.r)
    L = mobile.U_phi * mobile.r / c
    E = b / c * np.sqrt(mobile.U_r**2 / a + mobile.U_phi**2)
    return L, E


def photon_potential_A(body, mobile, r=None):
    """Effective potential along the affine parameter."""
    r = mobile.r if r is None else r
    E = mobile.E
    return E**2 - alpha(body, r) * ((E / beta(body, r))**2
                                    - (mobile.L / r)**2)


def photon_acceleration_A(body, mobile, t, r, U_r):
    """Second derivative d2r/dlambda2 along the affine parameter."""
    return _acceleration_A(body, mobile, r, rest_mass=0)


def _acceleration_A(body, mobile, r, rest_mass):
    # d2r/dtau2 = 1/2 d(U_r^2)/dr, with
    # U_r^2 = c^2 alpha ((E/beta)^2 - (L/r)^2 - rest_mass)
    c = body.c
    R_s = body.schwarzschild_radius
    R = body.radius
    E = mobile.E
    L = mobile.L
    a = alpha(body, r)
    b = beta(body, r)
    return (-(c**2 * r * R_s / R**3)
            * ((E / b)**2 - (L / r)**2 - rest_mass)
            + c**2 * a * 0.5
            * (-(E**2 * r * R_s) / ((b * R)**3 * np.sqrt(a))
               + 2 * L**2 / r**3))
