"""Payoff heat maps for two-player normal-form games.

Two public data builders return NumPy matrices that can be used
programmatically or passed to the plot helper:

    build_payoff_matrices(game)     — (row_matrix, col_matrix) of utilities
    build_nash_mask(game)           — boolean matrix, True at pure Nash cells

One public plot function renders a matplotlib figure:

    plot_payoff_heatmaps(game, title, ...)  — 1×2 figure, one panel per player

Matrix convention:
    Shape  : (|row moves|, |col moves|), rows = player 0's moves,
             cols = player 1's moves, both in the game's move order.
    Values : float64 utility of the panel's player.
"""

from __future__ import annotations

import matplotlib
import matplotlib.axes
import matplotlib.colors
import matplotlib.figure
import matplotlib.image
import matplotlib.patches
import matplotlib.pyplot as plt
import numpy as np

from gamekit.engine.normal import Normal
from gamekit.engine.players import for2
from gamekit.solvers.equilibria import pure_nash_equilibria

_NASH_EDGE_COLOR: str = "#1f1f1f"


def _make_payoff_cmap() -> matplotlib.colors.Colormap:
    """RdYlGn gradient: red = low utility, green = high utility."""
    return matplotlib.colormaps["RdYlGn"].copy()


_PAYOFF_CMAP: matplotlib.colors.Colormap = _make_payoff_cmap()


# ─── Data builders ────────────────────────────────────────────────────────────


def _check_two_player(game: Normal) -> None:
    if game.num_players != 2:
        raise ValueError(f"payoff heat maps need a two-player game, got {game.num_players} players")


def build_payoff_matrices(game: Normal) -> tuple[np.ndarray, np.ndarray]:
    """Return (row_matrix, col_matrix): each player's utility in every cell.

    Raises:
        ValueError: If the game is not a two-player game.
    """
    _check_two_player(game)
    rows = game.possible_moves_for_player(for2.ROW)
    cols = game.possible_moves_for_player(for2.COL)
    row_matrix = np.empty((len(rows), len(cols)), dtype=np.float64)
    col_matrix = np.empty_like(row_matrix)
    # Outcomes arrive row-major, matching the matrix layout.
    for i, outcome in enumerate(game.possible_outcomes()):
        r, c = divmod(i, len(cols))
        row_matrix[r, c] = float(outcome.payoff[for2.ROW])
        col_matrix[r, c] = float(outcome.payoff[for2.COL])
    return row_matrix, col_matrix


def build_nash_mask(game: Normal) -> np.ndarray:
    """Boolean matrix marking the cells that are pure Nash equilibria."""
    _check_two_player(game)
    rows = game.possible_moves_for_player(for2.ROW)
    cols = game.possible_moves_for_player(for2.COL)
    mask = np.zeros((len(rows), len(cols)), dtype=bool)
    for profile in pure_nash_equilibria(game):
        mask[rows.index(profile[for2.ROW]), cols.index(profile[for2.COL])] = True
    return mask


# ─── Rendering ────────────────────────────────────────────────────────────────


def _render_panel(
    ax: matplotlib.axes.Axes,
    data: np.ndarray,
    nash: np.ndarray,
    row_labels: list[str],
    col_labels: list[str],
) -> matplotlib.image.AxesImage:
    """Render one heat-map panel onto *ax* and return the AxesImage.

    Nash cells get a bold annotation and a dark outline. The caller sets
    title and axis labels.
    """
    im = ax.imshow(data, cmap=_PAYOFF_CMAP, aspect="auto")

    ax.set_xticks(range(len(col_labels)))
    ax.set_xticklabels(col_labels, fontsize=9)
    ax.set_yticks(range(len(row_labels)))
    ax.set_yticklabels(row_labels, fontsize=9)

    for r in range(data.shape[0]):
        for c in range(data.shape[1]):
            is_nash = bool(nash[r, c])
            ax.text(
                c,
                r,
                f"{data[r, c]:g}",
                ha="center",
                va="center",
                fontsize=9,
                color="black",
                fontweight="bold" if is_nash else "normal",
            )
            if is_nash:
                ax.add_patch(
                    matplotlib.patches.Rectangle(
                        (c - 0.5, r - 0.5), 1, 1, fill=False, edgecolor=_NASH_EDGE_COLOR, linewidth=2.5
                    )
                )

    return im


def plot_payoff_heatmaps(
    game: Normal,
    title: str = "Payoffs",
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot each player's payoff matrix side by side, outlining Nash cells.

    Args:
        game:      A two-player normal-form game.
        title:     Figure suptitle.
        show:      If True, call plt.show() after rendering.
        save_path: If not None, save the figure to this path before showing.

    Returns:
        matplotlib.figure.Figure.
    """
    row_matrix, col_matrix = build_payoff_matrices(game)
    nash = build_nash_mask(game)
    row_labels = [str(m) for m in game.possible_moves_for_player(for2.ROW)]
    col_labels = [str(m) for m in game.possible_moves_for_player(for2.COL)]

    fig, (ax_row, ax_col) = plt.subplots(1, 2, figsize=(9, 4.5))
    fig.suptitle(title, fontsize=13, fontweight="bold")

    im_row = _render_panel(ax_row, row_matrix, nash, row_labels, col_labels)
    im_col = _render_panel(ax_col, col_matrix, nash, row_labels, col_labels)

    for ax, name in ((ax_row, "Row player (P0)"), (ax_col, "Column player (P1)")):
        ax.set_title(name, fontsize=10)
        ax.set_xlabel("P1 move", fontsize=9)
        ax.set_ylabel("P0 move", fontsize=9)

    plt.colorbar(im_row, ax=ax_row, label="utility", fraction=0.046, pad=0.04)
    plt.colorbar(im_col, ax=ax_col, label="utility", fraction=0.046, pad=0.04)

    plt.tight_layout()

    if save_path is not None:
        fig.savefig(save_path, bbox_inches="tight", dpi=120)
    if show:
        plt.show()

    return fig
