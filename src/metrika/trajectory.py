'''Relativistic trajectory package
Trajectory class definition'''

import numpy as np
import pandas as pd
from typing import Optional, TYPE_CHECKING
import plotly.graph_objects as go
from .config import config
if TYPE_CHECKING:
    from .body import CentralBody
    from .mobile import Mobile

# column order of Mobile.state()
COLUMNS = ('clock_astronaut', 'clock_distant_observer', 'r', 'phi', 'U_r',
           'v_r', 'v_phi', 'v_norm', 'dtau')
_BODY_TRACES = ("Central Body", "Horizon")


class Trajectory:
    """
    Recorded ticks of one mobile.

    Unlike a dense-output trajectory, the samples are exactly the states
    produced by the fixed-step pipeline, one row per recorded tick.

    Attributes:
        body: Central body of the simulation (immutable)
        mobile: The mobile the samples belong to (still mutated by the
            simulation after recording)
        frame: Reference frame used while recording ('A' or 'DO')
        states: Array of shape (n_samples, 9), columns in COLUMNS order
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, body: "CentralBody", mobile: "Mobile",
                 states, frame: str):
        states = np.asarray(states, dtype=float)
        if states.ndim != 2 or states.shape[1] != len(COLUMNS):
            raise ValueError(
                f"states must have shape (n, {len(COLUMNS)}), "
                f"got {states.shape}"
            )
        self._body = body
        self._mobile = mobile
        self._states = states
        self._states.flags.writeable = False
        self._frame = frame

    # ========== PROPERTY ACCESS ==========
    @property
    def body(self) -> "CentralBody":
        return self._body

    @property
    def mobile(self) -> "Mobile":
        return self._mobile

    @property
    def frame(self) -> str:
        return self._frame

    @property
    def states(self) -> np.ndarray:
        """Raw recorded states (read-only)."""
        return self._states

    def __getattr__(self, name):
        # column access: traj.r, traj.clock_astronaut, ...
        if name in COLUMNS:
            return self._states[:, COLUMNS.index(name)]
        raise AttributeError(
            f"'{type(self).__name__}' object has no attribute '{name}'"
        )

    # ========== UTILITY METHODS ==========
    def positions(self) -> np.ndarray:
        """Cartesian positions in the orbital plane, shape (n, 2)."""
        r = self.r
        phi = self.phi
        return np.column_stack((r * np.cos(phi), r * np.sin(phi)))

    def final_state(self) -> dict:
        """Last recorded sample as a dict keyed by column name."""
        return dict(zip(COLUMNS, self._states[-1]))

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export trajectory to pandas DataFrame.

        Returns:
            DataFrame with one column per recorded quantity plus the
            Cartesian x, y positions
        """
        data = {name: self._states[:, i] for i, name in enumerate(COLUMNS)}
        xy = self.positions()
        data['x'] = xy[:, 0]
        data['y'] = xy[:, 1]
        return pd.DataFrame(data)

    def _subsample(self, n_points: Optional[int]) -> np.ndarray:
        """Positions reduced to at most n_points evenly spaced samples."""
        xy = self.positions()
        if n_points is None:
            n_points = config.DEFAULT_PLOT_POINTS
        if len(xy) > n_points:
            idx = np.linspace(0, len(xy) - 1, n_points).astype(int)
            xy = xy[idx]
        return xy

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return len(self._states)

    def __repr__(self):
        return (f"Trajectory(mobile={self.mobile.name!r}, "
                f"frame='{self.frame}', n_samples={len(self)})")

    # ========== PLOTTING ==========
    def plot_2d(self, n_points: Optional[int] = None, show_body: bool = True,
                body_color: Optional[str] = None,
                traj_color: Optional[str] = None,
                body_opacity: Optional[float] = None) -> go.Figure:
        """
        Create 2D plot of the trajectory in the orbital plane.

        Parameters:
            n_points: Maximum number of samples drawn (default: config)
            show_body: Whether to draw the central body disc and the
                event horizon (default: True)
            body_color: Color of central body (default: config)
            traj_color: Color of trajectory line (default: config)
            body_opacity: Opacity of central body (default: config)

        Returns:
            Plotly Figure object
        """
        body_color = body_color or config.DEFAULT_BODY_COLOR
        traj_color = traj_color or config.DEFAULT_TRAJ_COLOR
        if body_opacity is None:
            body_opacity = config.DEFAULT_BODY_OPACITY

        fig = go.Figure()

        if show_body:
            if not self.body.is_point_mass:
                self._add_circle_to_plot(
                    fig, self.body.radius, color=body_color,
                    opacity=body_opacity, name="Central Body", fill=True
                )
            self._add_circle_to_plot(
                fig, self.body.schwarzschild_radius,
                color=config.DEFAULT_HORIZON_COLOR,
                opacity=1.0, name="Horizon", fill=self.body.is_point_mass
            )

        xy = self._subsample(n_points)
        fig.add_trace(go.Scatter(
            x=xy[:, 0],
            y=xy[:, 1],
            mode='lines',
            line=dict(color=traj_color, width=2),
            name=self.mobile.name or 'Trajectory',
            hovertemplate='x: %{x:.6e}<br>y: %{y:.6e}<extra></extra>'
        ))

        fig.update_layout(
            xaxis_title='x [m]',
            yaxis_title='y [m]',
            yaxis=dict(scaleanchor='x', scaleratio=1),
            title=('Photon Trajectory' if self.mobile.is_photon
                   else 'Particle Trajectory'),
            showlegend=True
        )
        return fig

    def _add_circle_to_plot(self, fig, radius, color, opacity, name, fill):
        """Helper to add a circle centered on the origin."""
        u = np.linspace(0, 2 * np.pi, 100)
        fig.add_trace(go.Scatter(
            x=radius * np.cos(u),
            y=radius * np.sin(u),
            mode='lines',
            fill='toself' if fill else None,
            line=dict(color=color),
            opacity=opacity,
            name=name,
            hoverinfo='name'
        ))

    def add_to_plot(self, fig: go.Figure, n_points: Optional[int] = None,
                    color: Optional[str] = None, name: Optional[str] = None,
                    **kwargs) -> go.Figure:
        """
        Add this trajectory to an existing Plotly figure.

        Parameters:
            fig: Existing Plotly Figure object
            n_points: Maximum number of samples drawn (default: config)
            color: Color of trajectory line (default: config)
            name: Legend name for this trajectory (default: mobile name,
                or 'Trajectory N')
            **kwargs: Additional arguments passed to Scatter

        Returns:
            Updated Plotly Figure object (same object, modified in place)
        """
        xy = self._subsample(n_points)
        color = color or config.DEFAULT_TRAJ_COLOR_ADD

        if name is None:
            name = self.mobile.name
        if name is None:
            n_existing = sum(1 for trace in fig.data
                             if trace.name not in _BODY_TRACES)
            name = f'Trajectory {n_existing + 1}'

        fig.add_trace(go.Scatter(
            x=xy[:, 0],
            y=xy[:, 1],
            mode='lines',
            line=dict(color=color, width=2),
            name=name,
            hovertemplate='x: %{x:.6e}<br>y: %{y:.6e}<extra></extra>',
            **kwargs
        ))
        return fig
