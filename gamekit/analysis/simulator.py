"""
Monte Carlo simulator for strategy match-ups.

Plays a game repeatedly with a fixed set of strategies and summarises each
player's payoff: mean, sample standard deviation and a 95% confidence
interval. Games aborted by an InvalidMove are counted and left out of the
statistics.

Randomness is drawn from a single numpy Generator seeded once per run, and
passed to play() for chance nodes. Strategies that sample moves should be
built with the same generator (see make_rng) for the run to be reproducible.

Typical use:
    rng = make_rng(7)
    result = simulate_games(rps, [mixed_flat(RPS_MOVES, rng), pure('R')], 10_000, rng=rng)
    print(result)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from gamekit.engine.errors import InvalidMove
from gamekit.engine.game import Playable
from gamekit.engine.play import Strategy, play

logger = logging.getLogger(__name__)

# z-score of a two-sided 95% normal confidence interval.
_Z_95: float = 1.96


# ─── Result type ──────────────────────────────────────────────────────────────


@dataclass
class SimulationResult:
    """Aggregate statistics from a Monte Carlo run.

    Attributes:
        n_games:       Number of games requested.
        n_completed:   Games that reached an End node.
        n_invalid:     Games aborted because a strategy played an invalid move.
        mean_payoff:   Per-player mean payoff over completed games.
        std_payoff:    Per-player sample standard deviation (ddof=1).
        ci_95_low:     Per-player lower bound of the 95% CI for the mean.
        ci_95_high:    Per-player upper bound of the 95% CI for the mean.
        payoffs:       Raw (n_completed, num_players) float64 payoff matrix,
                       or None unless return_payoffs=True was requested.
    """

    n_games: int
    n_completed: int
    n_invalid: int
    mean_payoff: np.ndarray
    std_payoff: np.ndarray
    ci_95_low: np.ndarray
    ci_95_high: np.ndarray
    payoffs: np.ndarray | None = None

    @property
    def num_players(self) -> int:
        return len(self.mean_payoff)

    def __str__(self) -> str:
        lines = [f"Games: {self.n_games:,} | completed: {self.n_completed:,} | invalid: {self.n_invalid:,}"]
        for p in range(self.num_players):
            lines.append(
                f"  P{p}: mean {self.mean_payoff[p]:+.4f} | std {self.std_payoff[p]:.4f} | "
                f"95% CI [{self.ci_95_low[p]:+.4f}, {self.ci_95_high[p]:+.4f}]"
            )
        return "\n".join(lines)


# ─── Simulation ───────────────────────────────────────────────────────────────


def make_rng(seed: int | None = 42) -> np.random.Generator:
    """A numpy Generator for a reproducible run (None for a non-deterministic one)."""
    return np.random.default_rng(seed)


def simulate_games(
    game: Playable,
    strategies: Sequence[Strategy],
    n_games: int = 10_000,
    seed: int | None = 42,
    rng: np.random.Generator | None = None,
    return_payoffs: bool = False,
) -> SimulationResult:
    """Play `game` n_games times and summarise the payoffs.

    Args:
        game:           Any Playable game whose outcomes carry a payoff.
        strategies:     One strategy per player, reused for every game.
        n_games:        Number of games to play.
        seed:           Seed for the chance-node generator; ignored if `rng`
                        is given.
        rng:            Generator to use instead of seeding a new one.
        return_payoffs: Attach the raw payoff matrix to the result.

    Returns:
        SimulationResult for the run.

    Raises:
        ValueError: If n_games < 1.
    """
    if n_games < 1:
        raise ValueError(f"n_games must be at least 1, got {n_games}")
    if rng is None:
        rng = make_rng(seed)

    rows: list[list[float]] = []
    n_invalid = 0
    for _ in range(n_games):
        try:
            outcome = play(game, strategies, rng=rng)
        except InvalidMove as err:
            n_invalid += 1
            logger.debug("simulate_games: game aborted: %s", err)
            continue
        rows.append([float(u) for u in outcome.payoff])

    n_completed = len(rows)
    arr = np.array(rows, dtype=np.float64).reshape(n_completed, game.num_players)
    if n_invalid:
        logger.warning("simulate_games: %d of %d games aborted by invalid moves", n_invalid, n_games)

    if n_completed == 0:
        nan = np.full(game.num_players, np.nan)
        mean, std = nan, nan.copy()
    else:
        mean = arr.mean(axis=0)
        std = arr.std(axis=0, ddof=1) if n_completed > 1 else np.zeros(game.num_players)
    ci_margin = _Z_95 * std / math.sqrt(max(n_completed, 1))

    return SimulationResult(
        n_games=n_games,
        n_completed=n_completed,
        n_invalid=n_invalid,
        mean_payoff=mean,
        std_payoff=std,
        ci_95_low=mean - ci_margin,
        ci_95_high=mean + ci_margin,
        payoffs=arr if return_payoffs else None,
    )
