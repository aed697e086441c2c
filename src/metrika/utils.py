"""
Utility functions and classes for the Metrika package.
"""

from time import perf_counter
import warnings
from typing import Type
import numpy as np
from .config import config

class Timer:
    """
    Context manager for timing code execution.

    Examples
    --------
    >>> from metrika.utils import Timer
    >>> with Timer("Propagation"):
    ...     trajectories = sim.propagate(10000, 'A')
    Propagation: 0.123456 s

    >>> with Timer(verbose=False) as t:
    ...     # ... code ...
    >>> print(f"Took {t.elapsed:.6f} seconds")
    """
    def __init__(self, name="Operation", verbose=True):
        """
        Parameters
        ----------
        name : str, optional
            Name to display when timing completes (default: "Operation")
        verbose : bool, optional
            Whether to print timing automatically (default: True)
        """
        self.name = name
        self.verbose = verbose
        self.elapsed = None

    def __enter__(self):
        self.start = perf_counter()
        return self

    def __exit__(self, *args):
        self.end = perf_counter()
        self.elapsed = self.end - self.start
        if self.verbose:
            print(f"{self.name}: {self.elapsed:.6f} s")

def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead and lets the caller continue.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from metrika.utils import validation_error
    >>> from metrika import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")  # Raises ValueError
    >>> validation_error("Not available", NotImplementedError)  # Raises

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=2)

def check_finite(mobile) -> bool:
    """
    Debug diagnostic for the state of a mobile.

    Numerical failures in the metric formulas show up as NaN or infinite
    values rather than exceptions. When config.DEBUG_CHECKS is True (and
    Python is not running with -O), a RuntimeWarning names the offending
    fields. The distant observer clock is excluded since it is set to
    infinity on purpose at the event horizon.

    Returns
    -------
    bool
        True if every checked field is finite (always True when the
        diagnostic is disabled)
    """
    if not (__debug__ and config.DEBUG_CHECKS):
        return True

    fields = ('r', 'phi', 'U_r', 'U_phi', 'v_r', 'v_phi', 'v_norm',
              'L', 'E', 'dtau', 'clock_astronaut')
    bad = [name for name in fields
           if not np.isfinite(getattr(mobile, name))]
    if bad:
        warnings.warn(
            f"Non-finite state for {mobile!r}: {', '.join(bad)}",
            RuntimeWarning,
            stacklevel=2
        )
        return False
    return True
