"""
Metrika: Relativistic Trajectories in the Schwarzschild Metric

A Python package for the motion of test particles and photons around a
spherical, non-rotating body, under the external (vacuum) and internal
(uniform density) Schwarzschild metrics, seen by an astronaut or by a
distant observer.
"""

# Core classes
from .body import CentralBody, PhysicalConstants, SI, GEOMETRIZED
from .mobile import Mobile
from .simulation import Schwarzschild
from .trajectory import Trajectory
from .reference import ReferencePropagator, ReferenceTrajectory

# Dispatch
from .frames import Frame, Regime, ParticleType
from .dispatch import UnsupportedCombinationError, is_supported

# Integrators
from .integrators import runge_kutta_order2, euler_order2

# Commonly-used bodies and initial conditions
from .defaults import (
    SUN, EARTH, NEUTRON_STAR, SAGITTARIUS_A_STAR, UNIT_BLACK_HOLE,
    circular_speed, circular_orbit, radial_infall, tangential_photon,
)

# Configuration
from .config import config, temp_config

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from metrika import *"
__all__ = [
    # Classes
    "CentralBody",
    "PhysicalConstants",
    "Mobile",
    "Schwarzschild",
    "Trajectory",
    "ReferencePropagator",
    "ReferenceTrajectory",
    # Enums and dispatch
    "Frame",
    "Regime",
    "ParticleType",
    "UnsupportedCombinationError",
    "is_supported",
    # Integrators
    "runge_kutta_order2",
    "euler_order2",
    # Constants
    "SI",
    "GEOMETRIZED",
    "SUN",
    "EARTH",
    "NEUTRON_STAR",
    "SAGITTARIUS_A_STAR",
    "UNIT_BLACK_HOLE",
    # Factories
    "circular_speed",
    "circular_orbit",
    "radial_infall",
    "tangential_photon",
    # Configuration
    "config",
    "temp_config",
]
