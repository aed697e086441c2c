"""
Test suite for recorded trajectories.

Tests cover:
- Construction and validation
- Column access and export
- Plotting
"""

import pytest
import numpy as np
import pandas as pd
import plotly.graph_objects as go
from metrika import (
    CentralBody, Mobile, Schwarzschild, Trajectory, GEOMETRIZED,
    UNIT_BLACK_HOLE, circular_orbit, tangential_photon
)
from metrika.trajectory import COLUMNS


@pytest.fixture
def traj():
    """Short circular orbit trajectory, 100 ticks."""
    mobile = circular_orbit(UNIT_BLACK_HOLE, 20.0, name='orbiter')
    return Schwarzschild(UNIT_BLACK_HOLE, [mobile]).propagate(100, 'A')[0]


@pytest.fixture
def unnamed_traj():
    """Unnamed photon trajectory, 50 ticks."""
    return Schwarzschild(UNIT_BLACK_HOLE, [tangential_photon(30.0)]).propagate(50, 'A')[0]


class TestConstruction:
    """Test Trajectory construction."""

    def test_wrong_shape(self):
        """States must have one column per recorded quantity."""
        with pytest.raises(ValueError, match="shape"):
            Trajectory(UNIT_BLACK_HOLE, Mobile(r=1.0), np.zeros((3, 4)), 'A')

    def test_one_dimensional_rejected(self):
        """A single flat state is rejected."""
        with pytest.raises(ValueError):
            Trajectory(UNIT_BLACK_HOLE, Mobile(r=1.0), np.zeros(9), 'A')

    def test_states_read_only(self, traj):
        """Recorded states cannot be modified."""
        with pytest.raises(ValueError):
            traj.states[0, 0] = 1.0

    def test_properties(self, traj):
        """Body, mobile and frame are exposed."""
        assert traj.body is UNIT_BLACK_HOLE
        assert traj.mobile.name == 'orbiter'
        assert traj.frame == 'A'
        assert len(traj) == 101


class TestAccess:
    """Test column access and export."""

    def test_column_attributes(self, traj):
        """Each column is available as an attribute."""
        for i, name in enumerate(COLUMNS):
            np.testing.assert_array_equal(getattr(traj, name), traj.states[:, i])

    def test_unknown_attribute(self, traj):
        """Unknown names raise AttributeError."""
        with pytest.raises(AttributeError):
            traj.not_a_column

    def test_clocks_increase(self, traj):
        """Both clocks grow monotonically."""
        assert np.all(np.diff(traj.clock_astronaut) > 0)
        assert np.all(np.diff(traj.clock_distant_observer) > 0)

    def test_positions(self, traj):
        """Positions lie on the orbit radius."""
        xy = traj.positions()

        assert xy.shape == (101, 2)
        np.testing.assert_allclose(np.hypot(xy[:, 0], xy[:, 1]), 20.0, rtol=1e-6)

    def test_final_state(self, traj):
        """final_state() matches the mobile after propagation."""
        final = traj.final_state()

        assert final['r'] == traj.mobile.r
        assert final['phi'] == traj.mobile.phi
        assert set(final) == set(COLUMNS)

    def test_to_dataframe(self, traj):
        """DataFrame has every column plus x, y."""
        df = traj.to_dataframe()

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 101
        assert list(df.columns) == list(COLUMNS) + ['x', 'y']

    def test_repr(self, traj):
        """repr shows mobile name and sample count."""
        assert "'orbiter'" in repr(traj)
        assert "n_samples=101" in repr(traj)


class TestPlotting:
    """Test Plotly figures."""

    def test_plot_point_mass(self, traj):
        """Point mass draws the horizon and the trajectory."""
        fig = traj.plot_2d()

        assert isinstance(fig, go.Figure)
        assert [t.name for t in fig.data] == ['Horizon', 'orbiter']

    def test_plot_extended_body(self):
        """Extended body adds the body disc."""
        star = CentralBody(mass=1.0, radius=10.0, constants=GEOMETRIZED)
        mobile = Mobile(r=30.0, v=0.2, v_alpha=1.5)
        traj = Schwarzschild(star, [mobile]).propagate(10, 'A')[0]
        fig = traj.plot_2d()

        assert [t.name for t in fig.data] == ['Central Body', 'Horizon', 'Trajectory']

    def test_plot_without_body(self, traj):
        """show_body=False draws only the trajectory."""
        fig = traj.plot_2d(show_body=False)

        assert len(fig.data) == 1

    def test_subsampling(self, traj):
        """n_points limits the drawn samples."""
        fig = traj.plot_2d(n_points=10, show_body=False)

        assert len(fig.data[0].x) == 10

    def test_photon_title(self, unnamed_traj):
        """Photon plots are titled accordingly."""
        fig = unnamed_traj.plot_2d()

        assert fig.layout.title.text == 'Photon Trajectory'

    def test_add_to_plot(self, traj, unnamed_traj):
        """add_to_plot() appends a trace to an existing figure."""
        fig = traj.plot_2d()
        result = unnamed_traj.add_to_plot(fig, color='green')

        assert result is fig
        assert len(fig.data) == 3
        assert fig.data[-1].name == 'Trajectory 2'
        assert fig.data[-1].line.color == 'green'

    def test_add_to_plot_named(self, traj, unnamed_traj):
        """Explicit names are used as given."""
        fig = traj.plot_2d()
        unnamed_traj.add_to_plot(fig, name='ray')

        assert fig.data[-1].name == 'ray'
