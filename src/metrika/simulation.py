'''Relativistic trajectory package
Schwarzschild simulation class definition'''

import numpy as np
from typing import Callable, Iterable, List, Optional, Tuple
import plotly.graph_objects as go
from .body import CentralBody
from .mobile import Mobile
from .config import config
from .frames import Frame, Regime, parse_frame, regime_of, particle_type
from .dispatch import select_acceleration, select_integration_constants, \
    select_potential, potential_for, require_supported
from .integrators import runge_kutta_order2
from .internal_metric import alpha, beta
from .step_size import step_size
from .trajectory import Trajectory
from .utils import Timer, check_finite, validation_error


class Schwarzschild:
    """
    Motion of test particles and photons around a spherical, non-rotating
    body, under the external and internal Schwarzschild metrics.

    Holds the central body and an insertion-ordered catalog of mobiles.
    Each tick runs, for every mobile in order, the step-size policy, the
    position update, the velocity recovery and the clock update. Mobiles
    never read each other's state.

    Parameters
    ----------
    central_body : CentralBody
        Gravitating body (read-only)
    mobiles : iterable of Mobile, optional
        Initial catalog content
    integrator : callable, optional
        Second order stepper ``f(mobile, h, t0, r0, Ur0, accel) ->
        (t1, r1, Ur1)``. Default: runge_kutta_order2

    Notes
    -----
    - The reference frame ('A' astronaut, 'DO' distant observer) is given
      per call and never stored on the mobiles, so the same mobile can be
      stepped in either frame without re-deriving L and E.
    - Physically inadmissible states are not rejected: NaN and inf
      propagate through the state instead of raising.
    """

    # ========== CONSTRUCTION ==========
    def __init__(
        self,
        central_body: CentralBody,
        mobiles: Iterable[Mobile] = (),
        integrator: Callable = runge_kutta_order2
    ):
        if not isinstance(central_body, CentralBody):
            raise TypeError(
                f"central_body must be a CentralBody, "
                f"got {type(central_body).__name__}"
            )
        if not callable(integrator):
            raise TypeError("integrator must be callable")

        self._central_body = central_body
        self._integrator = integrator
        self._mobiles: List[Mobile] = []
        for mobile in mobiles:
            self.add_mobile(mobile)

    # ========== CATALOG ==========
    def add_mobile(self, mobile: Mobile) -> Mobile:
        """
        Append a mobile to the catalog.

        The mobile is not initialized here; call initialize() or let the
        first tick do it.

        Returns
        -------
        Mobile
            The mobile itself, for chaining
        """
        if not isinstance(mobile, Mobile):
            raise TypeError(f"Expected a Mobile, got {type(mobile).__name__}")
        if any(m is mobile for m in self._mobiles):
            raise ValueError(f"{mobile!r} is already in the simulation")
        self._mobiles.append(mobile)
        return mobile

    @property
    def central_body(self) -> CentralBody:
        """Central body (read-only)."""
        return self._central_body

    @property
    def mobiles(self) -> Tuple[Mobile, ...]:
        """Catalog content in insertion order."""
        return tuple(self._mobiles)

    @property
    def integrator(self) -> Callable:
        """Second order stepper used by advance()."""
        return self._integrator

    # ========== INITIALIZATION ==========
    def initialize(self, mobile: Optional[Mobile] = None,
                   reinitialize: bool = False):
        """
        Derive U_r, U_phi and the integration constants L, E.

        Converts the user's physical speed and direction into affine
        derivatives according to the regime the mobile starts in, then
        fixes L and E for the rest of the mobile's life.

        Parameters
        ----------
        mobile : Mobile, optional
            Mobile to initialize. If None, every mobile of the catalog
            that is not yet initialized.
        reinitialize : bool, optional
            Allow a mobile that is already initialized to be initialized
            again from its current r, v_norm and v_alpha. Clocks are reset
            (default: False)

        Raises
        ------
        ValueError
            If ``mobile`` is already initialized and ``reinitialize`` is
            False, when config.STRICT_VALIDATION is True. Otherwise a
            warning is issued and the mobile is left unchanged.
        """
        if mobile is not None:
            if mobile.is_initialized and not reinitialize:
                validation_error(
                    f"{mobile!r} is already initialized: L and E are fixed. "
                    f"Pass reinitialize=True to derive them again."
                )
                return
            self._initialize_mobile(mobile)
            return
        for m in self._mobiles:
            if not m.is_initialized:
                self._initialize_mobile(m)

    def _initialize_mobile(self, mobile: Mobile):
        """
        Affine derivatives from the launch speed and direction.

        A photon emitted outside the body gets U_phi = c / sqrt(1 - R_s/r)
        (not exactly c), which keeps E = 1 for every emission angle.
        """
        body = self._central_body
        c = body.c
        R_s = body.schwarzschild_radius
        r = mobile.r
        cos_a = np.cos(mobile.v_alpha)
        sin_a = np.sin(mobile.v_alpha)

        if mobile.is_photon:
            v = np.float64(c)
        else:
            v = mobile.v_norm

        if regime_of(body, r) == Regime.EXTERNAL:
            f = np.sqrt(1 - R_s / r)
            if not mobile.is_photon:
                E = f / np.sqrt(1 - (v / c)**2)
                mobile.U_r = cos_a * v * E
                mobile.U_phi = sin_a * v * E / f
            else:
                mobile.U_r = cos_a * c
                mobile.U_phi = sin_a * c / f
        else:
            a = alpha(body, r)
            b = beta(body, r)
            if not mobile.is_photon:
                E = b / np.sqrt(1 - (v / c)**2)
                mobile.U_r = cos_a * np.sqrt(a) * v * E / b
                mobile.U_phi = sin_a * v * E / b
            else:
                mobile.U_r = cos_a * np.sqrt(a) * c / b
                mobile.U_phi = sin_a * c / b

        self.integration_constants(mobile, overwrite=True)

        mobile.v_norm = v
        mobile.v_r = v * cos_a
        mobile.v_phi = v * sin_a
        mobile.dtau = np.float64(0.0)
        mobile.clock_astronaut = np.float64(0.0)
        mobile.clock_distant_observer = np.float64(0.0)

    def integration_constants(self, mobile: Mobile,
                              overwrite: bool = False) -> Tuple[float, float]:
        """
        Compute and store L and E from U_r, U_phi and r.

        Parameters
        ----------
        overwrite : bool, optional
            Replace the constants of an already initialized mobile
            (default: False). Without it the stored values are kept and
            a ValueError is raised (a warning when
            config.STRICT_VALIDATION is False).

        Returns
        -------
        tuple
            (L, E)
        """
        if mobile.is_initialized and not overwrite:
            validation_error(
                f"{mobile!r} already has L = {mobile.L} and E = {mobile.E}. "
                f"Pass overwrite=True to replace them."
            )
            return mobile.L, mobile.E
        L, E = select_integration_constants(self._central_body, mobile)(mobile)
        mobile.set_integration_constants(L, E)
        return mobile.L, mobile.E

    # ========== PER-TICK PIPELINE ==========
    def step_size(self, mobile: Mobile, frame=None) -> float:
        """
        Compute and store the next step dtau of a mobile.

        See metrika.step_size.step_size() for the policy.
        """
        frame = self._frame(frame)
        mobile.dtau = step_size(self._central_body, mobile, frame)
        return mobile.dtau

    def trajectory_step(self, mobile: Mobile, dtau: float, frame=None):
        """
        Run the integrator once on the radial equation, without writing back.

        The independent variable is the clock that drives the frame
        (astronaut clock for 'A', distant observer clock for 'DO').

        Returns
        -------
        tuple
            (t1, r1, U_r1) as returned by the integrator
        """
        frame = self._frame(frame)
        acceleration = select_acceleration(self._central_body, mobile, frame)
        if frame == Frame.ASTRONAUT:
            t0 = mobile.clock_astronaut
        else:
            t0 = mobile.clock_distant_observer
        return self._integrator(mobile, dtau, t0, mobile.r, mobile.U_r,
                                acceleration)

    def advance(self, mobile: Mobile, dtau: Optional[float] = None, frame=None):
        """
        Move a mobile by one step.

        r and U_r come from the integrator, phi from its closed-form
        derivative evaluated at the new r.

        Parameters
        ----------
        mobile : Mobile
        dtau : float, optional
            Step length (default: mobile.dtau)
        frame : Frame or str, optional
            'A' or 'DO' (default: config.DEFAULT_FRAME)
        """
        frame = self._frame(frame)
        if dtau is None:
            dtau = mobile.dtau
        c = self._central_body.c
        R_s = self._central_body.schwarzschild_radius

        _, r1, U_r1 = self.trajectory_step(mobile, dtau, frame)
        mobile.r = r1
        mobile.U_r = U_r1

        if frame == Frame.ASTRONAUT:
            mobile.phi += c * mobile.L * dtau / mobile.r**2
        else:
            mobile.phi += (c * mobile.L * dtau * (1 - R_s / mobile.r)
                           / (mobile.r**2 * mobile.E))

    def recover_velocity(self, mobile: Mobile):
        """
        Locally measured velocity from r, L and E.

        Overwrites v_r, v_phi and v_norm. v_r is a magnitude: the
        direction of radial motion is not recovered.
        """
        body = self._central_body
        c = body.c
        R_s = body.schwarzschild_radius
        r = mobile.r
        L = mobile.L
        E = mobile.E
        rest_mass = 0 if mobile.is_photon else 1

        if regime_of(body, r) == Regime.EXTERNAL:
            f = 1 - R_s / r
            dt = E / f
            dphi = c * L / r**2
            mobile.v_phi = np.sqrt((r * dphi / dt)**2 / f)
            dr = (c / E)**2 * f**2 * (E**2 - f * (rest_mass + (L / r)**2))
            mobile.v_r = np.sqrt(np.abs(dr / f**2))
        else:
            a = alpha(body, r)
            b = beta(body, r)
            dt = E / b**2
            dphi = c * L / r**2
            mobile.v_phi = np.abs(r * dphi / dt) / b
            dr = (c / E)**2 * a * b**4 * ((E / b)**2 - (L / r)**2 - rest_mass)
            mobile.v_r = np.sqrt(np.abs(dr) / (a * b**2))

        mobile.v_norm = np.sqrt(mobile.v_r**2 + mobile.v_phi**2)

    def advance_clocks(self, mobile: Mobile, frame=None):
        """
        Accumulate proper time and distant observer time over mobile.dtau.

        Photons have no proper time: their astronaut clock never moves.
        In the astronaut frame outside the body, the distant observer
        clock becomes infinite once the mobile reaches the horizon.
        """
        frame = self._frame(frame)
        body = self._central_body
        R_s = body.schwarzschild_radius
        r = mobile.r
        dtau = mobile.dtau

        if regime_of(body, r) == Regime.EXTERNAL:
            if frame == Frame.ASTRONAUT:
                if not mobile.is_photon:
                    mobile.clock_astronaut += dtau
                if r > R_s:
                    mobile.clock_distant_observer += mobile.E / (1 - R_s / r) * dtau
                else:
                    mobile.clock_distant_observer = np.float64(np.inf)
            else:
                mobile.clock_distant_observer += dtau
                if r >= R_s and not mobile.is_photon:
                    mobile.clock_astronaut += dtau * (1 - R_s / r) / mobile.E
        else:
            b = beta(body, r)
            if frame == Frame.ASTRONAUT:
                mobile.clock_distant_observer += dtau * mobile.E / b**2
                if not mobile.is_photon:
                    mobile.clock_astronaut += dtau
            else:
                mobile.clock_distant_observer += dtau
                if not mobile.is_photon:
                    mobile.clock_astronaut += dtau * b**2 / mobile.E

    def tick(self, frame=None):
        """
        Advance every mobile of the catalog by one step.

        Mobiles are processed one after the other, each one fully before
        the next. Uninitialized mobiles are initialized first.

        Raises
        ------
        UnsupportedCombinationError
            If a mobile is inside the body and the frame is 'DO', when
            config.STRICT_VALIDATION is True. Every mobile is checked
            before any of them is modified, so the catalog is left as it
            was. With STRICT_VALIDATION False a warning is issued and that
            mobile's state becomes NaN while the others advance normally.
        """
        frame = self._frame(frame)
        if config.STRICT_VALIDATION:
            for mobile in self._mobiles:
                require_supported(self._central_body, mobile, frame)
        for mobile in self._mobiles:
            if not mobile.is_initialized:
                self._initialize_mobile(mobile)
            self.step_size(mobile, frame)
            self.advance(mobile, mobile.dtau, frame)
            self.recover_velocity(mobile)
            self.advance_clocks(mobile, frame)
            check_finite(mobile)

    def propagate(self, n_steps: int, frame=None, record_every: int = 1,
                  verbose: bool = False) -> List[Trajectory]:
        """
        Run several ticks and record the state of every mobile.

        Parameters
        ----------
        n_steps : int
            Number of ticks
        frame : Frame or str, optional
            'A' or 'DO' (default: config.DEFAULT_FRAME)
        record_every : int, optional
            Keep one sample every this many ticks (default: 1). The state
            before the first tick is always recorded.
        verbose : bool, optional
            Print the elapsed wall time (default: False)

        Returns
        -------
        list of Trajectory
            One trajectory per mobile, in catalog order
        """
        if n_steps < 0:
            raise ValueError(f"n_steps must be non-negative, got {n_steps}")
        if record_every < 1:
            raise ValueError(f"record_every must be at least 1, got {record_every}")
        frame = self._frame(frame)

        self.initialize()
        records = [[m.state()] for m in self._mobiles]

        with Timer(f"Propagation of {len(self._mobiles)} mobiles", verbose=verbose):
            for step in range(1, n_steps + 1):
                self.tick(frame)
                if step % record_every == 0:
                    for record, mobile in zip(records, self._mobiles):
                        record.append(mobile.state())

        return [Trajectory(self._central_body, mobile, np.vstack(record),
                           frame.value)
                for record, mobile in zip(records, self._mobiles)]

    # ========== DIAGNOSTICS ==========
    def potential(self, mobile: Mobile, frame=None, r=None):
        """
        Effective potential of a mobile, for plotting only.

        The formula is selected from the mobile's current regime.

        Parameters
        ----------
        r : float or array_like, optional
            Radii to evaluate at (default: the mobile's current r)
        """
        frame = self._frame(frame)
        return select_potential(self._central_body, mobile, frame)(mobile, r)

    def potential_curve(self, mobile: Mobile, r, frame=None) -> np.ndarray:
        """
        Effective potential over a range of radii.

        Each radius uses the formula of its own regime. Interior radii
        in the distant observer frame give NaN.
        """
        frame = self._frame(frame)
        body = self._central_body
        r = np.asarray(r, dtype=float)
        values = np.full_like(r, np.nan)
        particle = particle_type(mobile)

        if body.is_point_mass:
            outside = np.ones(r.shape, dtype=bool)
        else:
            outside = r >= body.radius
        for regime, mask in ((Regime.EXTERNAL, outside),
                             (Regime.INTERNAL, ~outside)):
            potential = potential_for(body, regime, particle, frame)
            if potential is not None and np.any(mask):
                values[mask] = potential(mobile, r[mask])
        return values

    def plot_potential(self, mobile: Mobile, frame=None,
                       r_min: Optional[float] = None,
                       r_max: Optional[float] = None,
                       n_points: Optional[int] = None) -> go.Figure:
        """
        Plot the effective potential of a mobile against r.

        Parameters:
            r_min: Smallest radius (default: just outside the horizon)
            r_max: Largest radius (default: 3 times the mobile's r)
            n_points: Number of radii (default: config)

        Returns:
            Plotly Figure object
        """
        frame = self._frame(frame)
        R_s = self._central_body.schwarzschild_radius
        if r_min is None:
            r_min = 1.01 * R_s
        if r_max is None:
            r_max = 3 * float(mobile.r)
        if n_points is None:
            n_points = config.DEFAULT_PLOT_POINTS
        if r_min >= r_max:
            raise ValueError(f"r_min ({r_min}) must be < r_max ({r_max})")

        r = np.linspace(r_min, r_max, n_points)
        V = self.potential_curve(mobile, r, frame)

        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=r, y=V, mode='lines',
            line=dict(color=config.DEFAULT_TRAJ_COLOR, width=2),
            name='Potential'
        ))
        fig.add_trace(go.Scatter(
            x=[float(mobile.r)], y=[float(self.potential(mobile, frame))],
            mode='markers', marker=dict(size=10),
            name=mobile.name or 'Mobile'
        ))
        fig.update_layout(
            xaxis_title='r [m]',
            yaxis_title='V',
            title=f"Effective Potential ({'astronaut' if frame == Frame.ASTRONAUT else 'distant observer'})",
            showlegend=True
        )
        return fig

    def summary(self):
        """Print detailed summary of the simulation."""
        self._central_body.summary()
        print(f"\nMobiles: {len(self._mobiles)}")
        for mobile in self._mobiles:
            regime = regime_of(self._central_body, mobile.r)
            print(f"  {mobile!r} [{regime.value}]")

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return len(self._mobiles)

    def __iter__(self):
        return iter(self._mobiles)

    def __repr__(self):
        return (f"Schwarzschild(body={self._central_body!r}, "
                f"mobiles={len(self._mobiles)})")

    # ========== STATIC METHODS ==========
    @staticmethod
    def _frame(frame) -> Frame:
        """Frame enum from argument or config default"""
        if frame is None:
            frame = config.DEFAULT_FRAME
        return parse_frame(frame)
