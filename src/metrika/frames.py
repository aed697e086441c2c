'''Relativistic trajectory package
Enumerations for reference frames, metric regimes and particle types'''

from enum import Enum

# define enumerated lists for the three dispatch axes
class Frame(Enum):
    ASTRONAUT = 'A'
    DISTANT_OBSERVER = 'DO'

class Regime(Enum):
    EXTERNAL = 'external'
    INTERNAL = 'internal'

class ParticleType(Enum):
    MASSIVE = 'massive'
    PHOTON = 'photon'


def parse_frame(frame) -> Frame:
    """Convert string or enum to Frame enum"""
    if isinstance(frame, Frame):
        return frame
    elif isinstance(frame, str):
        # Map string to enum
        frame_map = {
            'A': Frame.ASTRONAUT,
            'a': Frame.ASTRONAUT,
            'astronaut': Frame.ASTRONAUT,
            'Astronaut': Frame.ASTRONAUT,
            'DO': Frame.DISTANT_OBSERVER,
            'do': Frame.DISTANT_OBSERVER,
            'distant_observer': Frame.DISTANT_OBSERVER,
            'Distant_Observer': Frame.DISTANT_OBSERVER,
        }
        if frame in frame_map:
            return frame_map[frame]
        else:
            raise ValueError(f"Unknown reference frame '{frame}'. "
                       f"Use: {list(frame_map.keys())}")
    else:
        raise TypeError(f"frame must be a str or Frame, "
                        f"got {type(frame).__name__}")


def regime_of(body, r) -> Regime:
    """
    Metric regime of a radial coordinate.

    External when r >= radius or the body is a point mass (radius 0),
    internal otherwise.
    """
    if r >= body.radius or body.radius == 0:
        return Regime.EXTERNAL
    return Regime.INTERNAL


def particle_type(mobile) -> ParticleType:
    """Formula family of a mobile."""
    return ParticleType.PHOTON if mobile.is_photon else ParticleType.MASSIVE
