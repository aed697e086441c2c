"""
Global Configuration for Metrika Package
========================================

This module provides package-wide configuration settings that users can modify
to control validation behavior, numerical diagnostics and default plotting
options.

Examples
--------
View current configuration:

>>> import metrika
>>> print(metrika.config)

Modify settings:

>>> metrika.config.DEBUG_CHECKS = True  # Warn on non-finite states
>>> metrika.config.DEFAULT_PLOT_POINTS = 2000  # More detailed plots

Reset to defaults:

>>> metrika.config.reset()

Temporarily modify settings:

>>> with metrika.temp_config(STRICT_VALIDATION=False):
...     # Unsupported frame combinations warn instead of raising
...     sim.tick('DO')

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequent operations until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class MetrikaConfig:
    """
    Global configuration for Metrika package.

    Attributes
    ----------
    STRICT_VALIDATION : bool
        If True, validation failures and unsupported regime/frame
        combinations raise exceptions.
        If False, they issue warnings and NaN propagates through the state.
        Default: True
    DEBUG_CHECKS : bool
        If True, every simulation tick checks the mobile state for NaN or
        infinite values and issues a RuntimeWarning. Ignored when Python
        runs with -O.
        Default: False
    DEFAULT_FRAME : str
        Reference frame used when none is given: 'A' (astronaut) or
        'DO' (distant observer).
        Default: 'A'
    DEFAULT_PLOT_POINTS : int
        Maximum number of recorded points drawn per trajectory.
        Default: 1000
    DEFAULT_BODY_COLOR : str
        Default color for the central body in plots.
        Default: 'lightblue'
    DEFAULT_HORIZON_COLOR : str
        Default color for the event horizon circle in plots.
        Default: 'black'
    DEFAULT_TRAJ_COLOR : str
        Default color for trajectory lines in plots.
        Default: 'red'
    DEFAULT_BODY_OPACITY : float
        Default opacity for the central body disc (0.0 to 1.0).
        Default: 0.6
    """

    # Validation behavior
    STRICT_VALIDATION: bool = True
    DEBUG_CHECKS: bool = False

    # Simulation defaults
    DEFAULT_FRAME: str = 'A'

    # Plotting defaults
    DEFAULT_PLOT_POINTS: int = 1000
    DEFAULT_BODY_COLOR: str = 'lightblue'
    DEFAULT_HORIZON_COLOR: str = 'black'
    DEFAULT_TRAJ_COLOR: str = 'red'
    DEFAULT_TRAJ_COLOR_ADD: str = 'blue'
    DEFAULT_BODY_OPACITY: float = 0.6

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import metrika
        >>> metrika.config.STRICT_VALIDATION = False  # Modify
        >>> metrika.config.reset()  # Back to defaults
        >>> metrika.config.STRICT_VALIDATION
        True
        """
        defaults = MetrikaConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["MetrikaConfig:"]
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append(f"    DEBUG_CHECKS = {self.DEBUG_CHECKS}")
        lines.append("  Simulation:")
        lines.append(f"    DEFAULT_FRAME = '{self.DEFAULT_FRAME}'")
        lines.append("  Plotting:")
        lines.append(f"    DEFAULT_PLOT_POINTS = {self.DEFAULT_PLOT_POINTS}")
        lines.append(f"    DEFAULT_BODY_COLOR = '{self.DEFAULT_BODY_COLOR}'")
        lines.append(f"    DEFAULT_HORIZON_COLOR = '{self.DEFAULT_HORIZON_COLOR}'")
        lines.append(f"    DEFAULT_TRAJ_COLOR = '{self.DEFAULT_TRAJ_COLOR}'")
        lines.append(f"    DEFAULT_TRAJ_COLOR_ADD = '{self.DEFAULT_TRAJ_COLOR_ADD}'")
        lines.append(f"    DEFAULT_BODY_OPACITY = {self.DEFAULT_BODY_OPACITY}")
        return "\n".join(lines)


# Global configuration instance
config = MetrikaConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import metrika
    >>> with metrika.temp_config(DEBUG_CHECKS=True):
    ...     sim.tick('A')
    >>> # Original config restored here
    >>> metrika.config.DEBUG_CHECKS
    False

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"MetrikaConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
