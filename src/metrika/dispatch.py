'''Relativistic trajectory package
Regime / particle type / frame dispatch of the metric formulas'''

from functools import partial
from typing import Callable, Dict, Tuple
import numpy as np
from . import external_metric as esm
from . import internal_metric as ism
from .frames import Frame, Regime, ParticleType, parse_frame, regime_of, particle_type
from .utils import validation_error


class UnsupportedCombinationError(NotImplementedError):
    """Raised when no formula exists for a regime / particle / frame triple."""


_EXT, _INT = Regime.EXTERNAL, Regime.INTERNAL
_MP, _PH = ParticleType.MASSIVE, ParticleType.PHOTON
_A, _DO = Frame.ASTRONAUT, Frame.DISTANT_OBSERVER

# Lookup tables, built once. The interior has no distant observer entries.
_INTEGRATION_CONSTANTS: Dict[Tuple[Regime, ParticleType], Callable] = {
    (_EXT, _MP): esm.massive_integration_constants,
    (_EXT, _PH): esm.photon_integration_constants,
    (_INT, _MP): ism.massive_integration_constants,
    (_INT, _PH): ism.photon_integration_constants,
}

_ACCELERATIONS: Dict[Tuple[Regime, ParticleType, Frame], Callable] = {
    (_EXT, _MP, _A): esm.massive_acceleration_A,
    (_EXT, _MP, _DO): esm.massive_acceleration_DO,
    (_EXT, _PH, _A): esm.photon_acceleration_A,
    (_EXT, _PH, _DO): esm.photon_acceleration_DO,
    (_INT, _MP, _A): ism.massive_acceleration_A,
    (_INT, _PH, _A): ism.photon_acceleration_A,
}

_POTENTIALS: Dict[Tuple[Regime, ParticleType, Frame], Callable] = {
    (_EXT, _MP, _A): esm.massive_potential_A,
    (_EXT, _MP, _DO): esm.massive_potential_DO,
    (_EXT, _PH, _A): esm.photon_potential_A,
    (_EXT, _PH, _DO): esm.photon_potential_DO,
    (_INT, _MP, _A): ism.massive_potential_A,
    (_INT, _PH, _A): ism.photon_potential_A,
}


def is_supported(regime: Regime, particle: ParticleType, frame) -> bool:
    """Check whether an acceleration exists for the given combination."""
    return (regime, particle, parse_frame(frame)) in _ACCELERATIONS


def require_supported(body, mobile, frame) -> bool:
    """
    Check that the mobile's current combination has an acceleration.

    Returns
    -------
    bool
        True if supported. Otherwise False after a warning, when
        config.STRICT_VALIDATION is False

    Raises
    ------
    UnsupportedCombinationError
        For the interior in the distant observer frame, when
        config.STRICT_VALIDATION is True
    """
    key = _lookup_key(body, mobile, frame)
    if key in _ACCELERATIONS:
        return True
    _unsupported(key, "acceleration")
    return False


def select_integration_constants(body, mobile) -> Callable:
    """
    Integration constants formula for the mobile's current regime.

    Returns
    -------
    callable
        ``f(mobile) -> (L, E)`` bound to ``body``
    """
    key = (regime_of(body, mobile.r), particle_type(mobile))
    return partial(_INTEGRATION_CONSTANTS[key], body)


def select_acceleration(body, mobile, frame) -> Callable:
    """
    Right-hand side d2r/dtau2 for the mobile's current state.

    Decision order: regime from the current r, particle type from
    ``is_photon``, then the requested frame.

    Parameters
    ----------
    body : CentralBody
    mobile : Mobile
    frame : Frame or str
        'A' (astronaut) or 'DO' (distant observer)

    Returns
    -------
    callable
        ``f(mobile, t, r, U_r) -> d2r/dtau2`` bound to ``body``, the
        signature expected by the integrators

    Raises
    ------
    UnsupportedCombinationError
        For the interior in the distant observer frame, when
        config.STRICT_VALIDATION is True. Otherwise a warning is issued
        and the returned function yields NaN.
    """
    key = _lookup_key(body, mobile, frame)
    if key not in _ACCELERATIONS:
        _unsupported(key, "acceleration")
        return _nan_acceleration
    return partial(_ACCELERATIONS[key], body)


def select_potential(body, mobile, frame) -> Callable:
    """
    Diagnostic effective potential for the mobile's current regime.

    Returns
    -------
    callable
        ``f(mobile, r=None) -> V`` bound to ``body``

    Raises
    ------
    UnsupportedCombinationError
        Same conditions as select_acceleration()
    """
    key = _lookup_key(body, mobile, frame)
    potential = potential_for(body, *key)
    if potential is None:
        _unsupported(key, "potential")
        return _nan_potential
    return potential


def acceleration_for(body, regime: Regime, particle: ParticleType, frame):
    """
    Acceleration of an explicit combination, independent of any mobile state.

    Returns
    -------
    callable or None
        ``f(mobile, t, r, U_r) -> d2r/dtau2`` bound to ``body``, None
        when the combination has no acceleration
    """
    key = (regime, particle, parse_frame(frame))
    if key not in _ACCELERATIONS:
        return None
    return partial(_ACCELERATIONS[key], body)


def potential_for(body, regime: Regime, particle: ParticleType, frame):
    """
    Potential of an explicit combination, independent of any mobile state.

    Returns
    -------
    callable or None
        ``f(mobile, r=None) -> V`` bound to ``body``, None when the
        combination has no potential
    """
    key = (regime, particle, parse_frame(frame))
    if key not in _POTENTIALS:
        return None
    return partial(_POTENTIALS[key], body)


def _lookup_key(body, mobile, frame):
    return (regime_of(body, mobile.r), particle_type(mobile), parse_frame(frame))


def _unsupported(key, what):
    regime, particle, frame = key
    validation_error(
        f"No {what} for a {particle.value} mobile in the {regime.value} "
        f"regime and the {frame.name.lower()} frame "
        f"(the interior metric has no distant observer formulas). "
        f"Use the astronaut frame ('A') for mobiles inside the body.",
        UnsupportedCombinationError
    )


def _nan_acceleration(mobile, t, r, U_r):
    return np.float64(np.nan)


def _nan_potential(mobile, r=None):
    r = mobile.r if r is None else r
    return np.full_like(np.asarray(r, dtype=float), np.nan)[()]
