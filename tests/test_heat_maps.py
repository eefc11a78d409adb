"""Tests for payoff heat maps (gamekit/analysis/heat_maps.py).

Tests verify data-matrix shapes and values (no display required) plus that
the plot function returns a well-formed matplotlib Figure. The Agg backend
is activated before any pyplot import so environments without a display
server can run the suite safely.
"""

from __future__ import annotations

import os

import matplotlib

matplotlib.use("Agg")  # must precede any pyplot import

import matplotlib.figure
import matplotlib.pyplot as plt
import numpy as np
import pytest

from gamekit.analysis.heat_maps import build_nash_mask, build_payoff_matrices, plot_payoff_heatmaps
from gamekit.engine.normal import Normal


class TestBuildPayoffMatrices:
    def test_prisoners_dilemma(self, pd):
        row, col = build_payoff_matrices(pd)
        np.testing.assert_array_equal(row, [[2, 0], [3, 1]])
        np.testing.assert_array_equal(col, [[2, 3], [0, 1]])

    def test_shape_follows_dimensions(self, dominated_game):
        row, col = build_payoff_matrices(dominated_game)
        assert row.shape == col.shape == (3, 2)
        assert row.dtype == np.float64
        assert row[2, 0] == 4.0

    def test_symmetric_game_is_transpose(self, stag_hunt):
        row, col = build_payoff_matrices(stag_hunt)
        np.testing.assert_array_equal(row, col.T)

    def test_rejects_three_players(self):
        pd3 = Normal.symmetric(["C", "D"], [4, 1, 1, 0, 5, 3, 3, 2], num_players=3)
        with pytest.raises(ValueError):
            build_payoff_matrices(pd3)


class TestBuildNashMask:
    def test_stag_hunt(self, stag_hunt):
        np.testing.assert_array_equal(build_nash_mask(stag_hunt), [[True, False], [False, True]])

    def test_rps_empty(self, rps):
        assert not build_nash_mask(rps).any()


class TestPlotPayoffHeatmaps:
    def test_returns_figure(self, pd):
        fig = plot_payoff_heatmaps(pd, "Prisoner's dilemma", show=False)
        assert isinstance(fig, matplotlib.figure.Figure)
        # two panels plus two colorbars
        assert len(fig.axes) == 4
        assert fig.axes[0].get_title() == "Row player (P0)"
        plt.close(fig)

    def test_nash_cell_outlined(self, pd):
        fig = plot_payoff_heatmaps(pd, show=False)
        assert len(fig.axes[0].patches) == 1
        plt.close(fig)

    def test_save_path(self, rps, tmp_path):
        path = tmp_path / "rps.png"
        fig = plot_payoff_heatmaps(rps, "RPS", show=False, save_path=str(path))
        assert os.path.exists(path)
        assert os.path.getsize(path) > 0
        plt.close(fig)
