'''Relativistic trajectory package
High-accuracy reference propagation of the external metric with heyoka'''

import numpy as np
import pandas as pd
from types import SimpleNamespace
from typing import Dict, Optional, Tuple, Union
import heyoka as hy
from .body import CentralBody
from .mobile import Mobile
from .frames import Frame, Regime, ParticleType, parse_frame, regime_of, particle_type
from .dispatch import UnsupportedCombinationError, acceleration_for
from .utils import validation_error

# state vector order of the reference integrators
STATE_NAMES = ('r', 'U_r', 'phi', 'clock_other')


class ReferencePropagator:
    """
    Taylor-series propagation of geodesics in the external metric.

    Builds the same equations of motion as the fixed-step pipeline
    (same acceleration functions, fed symbolic variables) and compiles
    them with heyoka. Used to check the second order Runge-Kutta
    trajectories of the simulation.

    One integrator is compiled per (particle type, frame) pair, lazily on
    first use. L and E are runtime parameters (hy.par), so one compiled
    integrator serves every mobile of that kind.

    Parameters
    ----------
    central_body : CentralBody

    Notes
    -----
    - State vector: [r, U_r, phi, clock_other], where clock_other is the
      clock that does not drive the frame (distant observer time when
      integrating in proper time, and the reverse).
    - Only the external regime is modelled. A mobile that starts inside
      the body is rejected; one that enters it during propagation gives
      meaningless results past that point.
    """

    def __init__(self, central_body: CentralBody):
        if not isinstance(central_body, CentralBody):
            raise TypeError(
                f"central_body must be a CentralBody, "
                f"got {type(central_body).__name__}"
            )
        self._central_body = central_body
        self._cached_integrators: Dict[Tuple[ParticleType, Frame], object] = {}

    @property
    def central_body(self) -> CentralBody:
        return self._central_body

    def is_compiled(self, particle: ParticleType, frame) -> bool:
        """Check if the integrator of a combination has been compiled."""
        return (particle, parse_frame(frame)) in self._cached_integrators

    # ========== EQUATIONS OF MOTION ==========
    def build_eom(self, particle: ParticleType, frame):
        """
        Build symbolic Heyoka equations of motion.

        Returns
        -------
        list of (var, rhs) tuples
            Heyoka ODE system definition ready for taylor_adaptive()
        """
        frame = parse_frame(frame)
        body = self._central_body
        c = body.c
        R_s = body.schwarzschild_radius

        r, U_r, phi, clock = hy.make_vars(*STATE_NAMES)
        # L and E bound at runtime
        constants = SimpleNamespace(L=hy.par[0], E=hy.par[1])

        acceleration = acceleration_for(body, Regime.EXTERNAL, particle, frame)
        f = 1 - R_s / r

        if frame == Frame.ASTRONAUT:
            dphi = c * constants.L / r**2
            dclock = constants.E / f
        else:
            dphi = c * constants.L * f / (r**2 * constants.E)
            if particle == ParticleType.MASSIVE:
                dclock = f / constants.E
            else:
                # photons have no proper time
                dclock = hy.expression(0.)

        return [
            (r, U_r),
            (U_r, acceleration(constants, 0., r, U_r)),
            (phi, dphi),
            (clock, dclock),
        ]

    def _compile_integrator(self, particle: ParticleType, frame: Frame):
        """
        Compile Heyoka integrator (expensive operation).

        This performs automatic differentiation and LLVM compilation,
        which takes a few seconds.
        """
        key = (particle, frame)
        if key in self._cached_integrators:
            return self._cached_integrators[key]

        print(f"Compiling {particle.value} reference integrator "
              f"({frame.name.lower()} frame)...")
        ta = hy.taylor_adaptive(
            sys=self.build_eom(particle, frame),
            state=[0.0] * len(STATE_NAMES),  # Dummy state
            pars=[0.0, 0.0],
        )
        print("Compilation complete")
        self._cached_integrators[key] = ta
        return ta

    # ========== PROPAGATION ==========
    def propagate(self, mobile: Mobile, t_end: float,
                  frame=Frame.ASTRONAUT) -> "ReferenceTrajectory":
        """
        Propagate an initialized mobile with dense output.

        The mobile itself is not modified.

        Parameters
        ----------
        mobile : Mobile
            Initialized mobile (L and E set), in the external regime
        t_end : float
            Final value of the clock driving the frame
        frame : Frame or str, optional
            'A' (default) or 'DO'

        Returns
        -------
        ReferenceTrajectory
        """
        frame = parse_frame(frame)
        body = self._central_body
        if not mobile.is_initialized:
            raise ValueError(
                f"{mobile!r} is not initialized. "
                f"Run Schwarzschild.initialize() first."
            )
        if regime_of(body, mobile.r) != Regime.EXTERNAL:
            validation_error(
                f"Reference propagation only covers the external regime, "
                f"{mobile!r} is inside the body (R = {body.radius})",
                UnsupportedCombinationError
            )

        particle = particle_type(mobile)
        ta = self._compile_integrator(particle, frame)

        if frame == Frame.ASTRONAUT:
            t_start = float(mobile.clock_astronaut)
            clock_other = float(mobile.clock_distant_observer)
        else:
            t_start = float(mobile.clock_distant_observer)
            clock_other = float(mobile.clock_astronaut)
        initial_state = np.array([mobile.r, mobile.U_r, mobile.phi, clock_other],
                                 dtype=float)
        if not np.all(np.isfinite(initial_state)):
            raise ValueError(
                f"Initial state contains NaN or Inf values: {initial_state}"
            )

        ta.time = t_start
        ta.state[:] = initial_state
        ta.pars[:] = [float(mobile.L), float(mobile.E)]

        output = ta.propagate_until(float(t_end), c_output=True)[4]

        # Check for integration failure
        if not np.all(np.isfinite(ta.state)):
            raise ValueError(
                f"Integration failed: state became invalid during propagation.\n"
                f"Initial state: {initial_state}\n"
                f"Final time: {ta.time}\n"
                f"Final state: {ta.state}\n"
                f"Likely cause: the mobile reached the horizon"
            )
        if output is None:
            raise ValueError(
                "Integration produced no continuous output (c_output is None)."
            )

        return ReferenceTrajectory(mobile, output, t_start, float(t_end),
                                   frame.value)

    def __repr__(self):
        return (f"ReferencePropagator(body={self._central_body!r}, "
                f"compiled={len(self._cached_integrators)})")


class ReferenceTrajectory:
    """
    Dense-output reference trajectory.

    Attributes:
        mobile: The mobile the trajectory started from
        output: continuous output function object from hy.taylor_adaptive()
        t0: Start time
        tf: End time
        frame: Frame of the independent variable ('A' or 'DO')
    """
    def __init__(self, mobile: Mobile, output, t0: float, tf: float,
                 frame: str):
        self._mobile = mobile
        self._output = output  # Must have dense output enabled
        self._t0 = t0
        self._tf = tf
        self._frame = frame

    @property
    def mobile(self) -> Mobile:
        return self._mobile

    @property
    def t0(self) -> float:
        return self._t0

    @property
    def tf(self) -> float:
        return self._tf

    @property
    def frame(self) -> str:
        return self._frame

    @property
    def duration(self) -> float:
        """Trajectory duration."""
        return self.tf - self.t0

    def state_at(self, t: float) -> dict:
        """State at time t, keyed by STATE_NAMES."""
        self._validate_time(t)
        return dict(zip(STATE_NAMES, self._output(float(t))))

    def evaluate(self, times: Union[float, np.ndarray, list]) -> np.ndarray:
        """
        Evaluate at one or more times, returning raw arrays.

        Returns:
            State array of shape (4,) if times is scalar,
            Array of shape (n_times, 4) if times is array-like
        """
        if isinstance(times, (int, float)):
            self._validate_time(times)
            return self._output(float(times))
        times = np.asarray(times, dtype=float)
        return self._output(times)

    def to_dataframe(self, times: Optional[np.ndarray] = None,
                     n_points: int = 1000) -> pd.DataFrame:
        """
        Export trajectory to pandas DataFrame.

        Parameters:
            times: Specific times to evaluate. If None, uses uniform sampling.
            n_points: Number of uniform samples if times not provided

        Returns:
            DataFrame with columns for time and state components
        """
        if times is None:
            times = np.linspace(self.t0, self.tf, n_points)
        else:
            times = np.asarray(times, dtype=float)
        states = self._output(times)
        data = {'time': times}
        for i, name in enumerate(STATE_NAMES):
            data[name] = states[:, i]
        return pd.DataFrame(data)

    def _validate_time(self, t: float):
        """Validate that time is within trajectory bounds."""
        t_min = min(self.t0, self.tf)
        t_max = max(self.t0, self.tf)
        if not (t_min <= t <= t_max):
            raise ValueError(
                f"Time {t} outside trajectory bounds [{self.t0}, {self.tf}]"
            )

    def __repr__(self):
        return (f"ReferenceTrajectory(mobile={self.mobile.name!r}, "
                f"frame='{self.frame}', t0={self.t0}, tf={self.tf})")
