"""
Payoffs: one utility value per player.

Arithmetic is element-wise (tuple concatenation is deliberately replaced):

    >>> Payoff([1, 2]) + Payoff([3, 4])
    Payoff(4, 6)
    >>> Payoff([1, -1]).is_zero_sum()
    True
"""

from __future__ import annotations

from typing import Any

from .players import PerPlayer, check_player


class Payoff(PerPlayer):
    """A per-player collection of utility values awarded at the end of a game."""

    @classmethod
    def zeros(cls, num_players: int) -> Payoff:
        return cls.init_with(num_players, 0)

    @classmethod
    def zero_sum_loser(cls, num_players: int, loser: int) -> Payoff:
        """Zero-sum payoff where the loser gets 1-N and everyone else gets 1.

        Examples:
            >>> Payoff.zero_sum_loser(3, 1)
            Payoff(1, -2, 1)
        """
        check_player(loser, num_players)
        return cls.generate(num_players, lambda p: 1 - num_players if p == loser else 1)

    @classmethod
    def zero_sum_winner(cls, num_players: int, winner: int) -> Payoff:
        """Zero-sum payoff where the winner gets N-1 and everyone else gets -1.

        Examples:
            >>> Payoff.zero_sum_winner(2, 0)
            Payoff(1, -1)
        """
        check_player(winner, num_players)
        return cls.generate(num_players, lambda p: num_players - 1 if p == winner else -1)

    # ── Element-wise arithmetic ──────────────────────────────────────────────

    def _check_same_size(self, other: Any) -> None:
        if len(other) != len(self):
            raise ValueError(f"payoff size mismatch: {len(self)} vs {len(other)}")

    def __add__(self, other: Any) -> Payoff:
        self._check_same_size(other)
        return Payoff(a + b for a, b in zip(self, other))

    def __sub__(self, other: Any) -> Payoff:
        self._check_same_size(other)
        return Payoff(a - b for a, b in zip(self, other))

    def __neg__(self) -> Payoff:
        return Payoff(-a for a in self)

    def __mul__(self, scalar: Any) -> Payoff:
        return Payoff(a * scalar for a in self)

    __rmul__ = __mul__

    def is_zero_sum(self, total: Any = 0) -> bool:
        """True if the utilities sum to the given constant (zero by default)."""
        return sum(self) == total

    def pareto_improvement(self, other: Payoff) -> Any | None:
        """Total improvement of `other` over this payoff, if it is a Pareto improvement.

        `other` improves on `self` iff every utility is at least as high and one
        is strictly higher. The value is the sum of the (non-negative) deltas.

        Returns:
            The improvement, or None if the payoffs are not comparable this way.

        Examples:
            >>> Payoff([1, 1]).pareto_improvement(Payoff([2, 1]))
            1
            >>> Payoff([1, 1]).pareto_improvement(Payoff([3, 0])) is None
            True
            >>> Payoff([1, 1]).pareto_improvement(Payoff([1, 1])) is None
            True
        """
        self._check_same_size(other)
        improvement = 0
        for mine, theirs in zip(self, other):
            if mine <= theirs:
                improvement = improvement + (theirs - mine)
            else:
                return None
        if improvement == 0:
            return None
        return improvement
