'''Relativistic trajectory package
CentralBody and PhysicalConstants definitions'''

import numpy as np
from dataclasses import dataclass, field
from typing import Optional

"""
Core dataclasses for the gravitating environment.
Both are immutable: the central body is read-only for the simulation,
and physical constants are externally supplied scalars.
"""
@dataclass(frozen=True)
class PhysicalConstants:
    """
    Immutable set of physical constants used by the metric formulas.

    Attributes
    ----------
    c : float
        Speed of light [m/s]
    G : float
        Gravitational constant [m^3/(kg s^2)]
    name : str, optional
        Label of the unit system
    """
    c: float
    G: float
    name: Optional[str] = None

    def __post_init__(self):
        if self.c <= 0:
            raise ValueError(f"Speed of light must be positive, got {self.c}")
        if self.G <= 0:
            raise ValueError(f"Gravitational constant must be positive, got {self.G}")

# SI values (CODATA 2018)
SI = PhysicalConstants(c=299792458.0, G=6.67430e-11, name='SI')
# c = G = 1, lengths and times in units of mass
GEOMETRIZED = PhysicalConstants(c=1.0, G=1.0, name='geometrized')


@dataclass(frozen=True)
class CentralBody:
    """
    Immutable parameters for a spherical, non-rotating central body.

    Attributes
    ----------
    mass : float
        Body mass [kg]
    radius : float
        Physical radius [m]. A radius of 0 denotes a point mass, which
        keeps every mobile in the external regime.
    constants : PhysicalConstants
        Speed of light and gravitational constant (default: SI)
    name : str, optional
        Body identifier

    Notes
    -----
    Nothing checks that the radius lies outside the Schwarzschild radius:
    a body with 0 < radius < R_s gives an interior metric that is not
    defined (NaN values propagate).
    """
    mass: float
    radius: float = 0.0
    constants: PhysicalConstants = field(default=SI)
    name: Optional[str] = None

    def __post_init__(self):
        #Validate parameters
        if not np.isfinite(self.mass) or self.mass <= 0:
            raise ValueError(f"Mass must be positive, got {self.mass}")
        if not np.isfinite(self.radius) or self.radius < 0:
            raise ValueError(f"Radius must be non-negative, got {self.radius}")

    @classmethod
    def from_schwarzschild_radius(
        cls,
        schwarzschild_radius: float,
        radius: float = 0.0,
        constants: PhysicalConstants = SI,
        name: Optional[str] = None
    ) -> "CentralBody":
        """
        Build a body from its Schwarzschild radius instead of its mass.

        Parameters
        ----------
        schwarzschild_radius : float
            Horizon radius R_s = 2 G M / c^2 [m]
        radius : float, optional
            Physical radius [m] (default 0, point mass)
        """
        if schwarzschild_radius <= 0:
            raise ValueError(
                f"Schwarzschild radius must be positive, got {schwarzschild_radius}"
            )
        mass = schwarzschild_radius * constants.c**2 / (2 * constants.G)
        return cls(mass=mass, radius=radius, constants=constants, name=name)

    @property
    def c(self) -> float:
        """Speed of light [m/s]"""
        return self.constants.c

    @property
    def G(self) -> float:
        """Gravitational constant [m^3/(kg s^2)]"""
        return self.constants.G

    @property
    def schwarzschild_radius(self) -> float:
        """Schwarzschild radius R_s = 2 G M / c^2 [m]"""
        return 2 * self.G * self.mass / self.c**2

    @property
    def R_s(self) -> float:
        """Alias of schwarzschild_radius"""
        return self.schwarzschild_radius

    @property
    def is_point_mass(self) -> bool:
        """True when every radius belongs to the external regime."""
        return self.radius == 0

    def summary(self):
        """Print detailed summary of body parameters."""
        name = self.name if self.name else "unnamed"
        print(f"Central Body: {name}")
        print(f"  M   = {self.mass:.6e} kg")
        print(f"  R   = {self.radius:.6e} m"
              + (" (point mass)" if self.is_point_mass else ""))
        print(f"  R_s = {self.schwarzschild_radius:.6e} m")
        if not self.is_point_mass:
            print(f"  R_s / R = {self.schwarzschild_radius / self.radius:.6e}")
        print(f"  Units: {self.constants.name or 'custom'} "
              f"(c = {self.c}, G = {self.G})")

    def __repr__(self) -> str:
        name_str = f"'{self.name}'" if self.name else "unnamed"
        return (f"CentralBody({name_str}, M={self.mass:.3e}, "
                f"R={self.radius:.3e}, R_s={self.schwarzschild_radius:.3e})")
