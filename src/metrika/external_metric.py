"""
External Schwarzschild Metric
=============================

Closed-form expressions for motion outside the central body (r >= R),
in the equatorial plane theta = pi/2, with coordinates (t, r, phi).

L (a length) and E (dimensionless) are the integration constants fixed by
the initial conditions. U_r is dr/dtau and U_phi is r dphi/dtau.

The acceleration functions share the stepper signature
``f(body, mobile, t, r, U_r)`` once bound to a body. They are pure
arithmetic in ``r``, ``mobile.L`` and ``mobile.E`` so they accept floats,
numpy arrays and heyoka expressions alike.

References
----------
https://www.lupm.in2p3.fr/cosmogravity/theorie/theorie_trajectoires_FR.pdf
"""

import numpy as np

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
    R_s = body.schwarzschild_radius
    L = mobile.U_phi * mobile.r / c
    E = np.sqrt((mobile.U_r / c)**2
                + (1 - R_s / mobile.r) * (1 + (mobile.U_phi / c)**2))
    return L, E


def massive_potential_A(body, mobile, r=None):
    """Effective potential seen by the astronaut, V_A(r)."""
    r = mobile.r if r is None else r
    R_s = body.schwarzschild_radius
    return (1 - R_s / r) * (1 + (mobile.L / r)**2)


def massive_potential_DO(body, mobile, r=None):
    """Effective potential seen by the distant observer."""
    r = mobile.r if r is None else r
    V_a = massive_potential_A(body, mobile, r)
    return _potential_DO(body, mobile, r, V_a)


def massive_acceleration_A(body, mobile, t, r, U_r):
    """Second derivative d2r/dtau2 in proper time (astronaut)."""
    c = body.c
    R_s = body.schwarzschild_radius
    L = mobile.L
    return c**2 / (2 * r**4) * (-R_s * r**2 + (2 * r - 3 * R_s) * L**2)


def massive_acceleration_DO(body, mobile, t, r, U_r):
    """Second derivative d2r/dt2 in coordinate time (distant observer)."""
    c = body.c
    R_s = body.schwarzschild_radius
    L = mobile.L
    E = mobile.E
    return (c**2 * (r - R_s)
            * (2 * E**2 * r**3 * R_s + 2 * (L * r)**2
               - 7 * L**2 * r * R_s + 5 * (L * R_s)**2
               - 3 * r**3 * R_s + 3 * (r * R_s)**2)
            / (2 * E**2 * r**6))


# ========== PHOTON ==========
def photon_integration_constants(body, mobile):
    """
    Integration constants of a photon.

    Same as the massive case without the rest-mass term.
    """
    c = body.c
    R_s = body.schwarzschild_radius
    L = mobile.U_phi * mobile.r / c
    E = np.sqrt((mobile.U_r / c)**2
                + (1 - R_s / mobile.r) * (mobile.U_phi / c)**2)
    return L, E


def photon_potential_A(body, mobile, r=None):
    """Effective potential along the affine parameter, V_A(r)."""
    r = mobile.r if r is None else r
    R_s = body.schwarzschild_radius
    return (1 - R_s / r) * (mobile.L / r)**2


def photon_potential_DO(body, mobile, r=None):
    """Effective potential seen by the distant observer."""
    r = mobile.r if r is None else r
    V_a = photon_potential_A(body, mobile, r)
    return _potential_DO(body, mobile, r, V_a)


def photon_acceleration_A(body, mobile, t, r, U_r):
    """Second derivative d2r/dlambda2 along the affine parameter."""
    c = body.c
    R_s = body.schwarzschild_radius
    return c**2 / (2 * r**4) * (2 * r - 3 * R_s) * mobile.L**2


def photon_acceleration_DO(body, mobile, t, r, U_r):
    """Second derivative d2r/dt2 in coordinate time (distant observer)."""
    c = body.c
    R_s = body.schwarzschild_radius
    L = mobile.L
    E = mobile.E
    return (c**2 * (r - R_s)
            * (2 * E**2 * r**3 * R_s + 2 * (L * r)**2
               - 7 * L**2 * r * R_s + 5 * (L * R_s)**2)
            / (2 * E**2 * r**6))


def _potential_DO(body, mobile, r, V_a):
    # frame transform of V_A shared by both particle types
    c = body.c
    R_s = body.schwarzschild_radius
    E = mobile.E
    return E**2 - (c**2 - V_a / E**2) * (1 - R_s / r)**2 / c**2
