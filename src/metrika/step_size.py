"""
Adaptive Step-Size Policy
=========================

The step length of each tick is derived from the current kinematic state.
The constants below are empirical. Changing any of them changes every
recorded trajectory.
"""

import numpy as np
from .frames import Frame, Regime, parse_frame, regime_of

# Empirically tuned: keep exact values.
MASSIVE_EXTERNAL_EPS = 1e-10
MASSIVE_INTERNAL_EPS = 1e-20
PHOTON_EPS = 1.0
STEP_DIVISOR = 1000
PHOTON_ASTRONAUT_PREFACTOR = 1e-3
FREE_FALL_DIVISOR = 500


def free_fall_time(body, r):
    """
    Characteristic infall timescale at radius r.

    pi r sqrt(sqrt(r / (2 G M))) / 2
    """
    return np.pi * r * np.sqrt(np.sqrt(r / (2 * body.G * body.mass))) / 2


def step_size(body, mobile, frame) -> float:
    """
    Next integration step for a mobile.

    Parameters
    ----------
    body : CentralBody
    mobile : Mobile
        Must be initialized (U_r, U_phi set)
    frame : Frame or str
        'A' (astronaut) or 'DO' (distant observer)

    Returns
    -------
    float
        Step dtau, at most free_fall_time / 500
    """
    frame = parse_frame(frame)
    r = mobile.r

    if not mobile.is_photon:
        if regime_of(body, r) == Regime.EXTERNAL:
            eps = MASSIVE_EXTERNAL_EPS
        else:
            eps = MASSIVE_INTERNAL_EPS
        dtau = r / (np.sqrt(mobile.U_r**2 + mobile.U_phi**2) + eps) / STEP_DIVISOR
    elif frame == Frame.ASTRONAUT:
        dtau = (PHOTON_ASTRONAUT_PREFACTOR * r
                / (abs(mobile.U_r) + abs(mobile.U_phi) + PHOTON_EPS))
    else:
        dtau = r / (np.sqrt(mobile.U_r**2 + mobile.U_phi**2) + PHOTON_EPS) / STEP_DIVISOR

    max_step = free_fall_time(body, r) / FREE_FALL_DIVISOR
    if dtau > max_step:
        dtau = max_step
    return dtau
