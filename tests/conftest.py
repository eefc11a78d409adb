"""
Shared pytest fixtures for gamekit tests.

Provides the classic example games used across the suite plus a small
Combinatorial game (Nim) for sequential play and minimax.
"""

from __future__ import annotations

from typing import Any, Iterator

import pytest

from gamekit.engine.combinatorial import Combinatorial
from gamekit.engine.errors import InvalidMove
from gamekit.engine.normal import Normal
from gamekit.engine.payoff import Payoff
from gamekit.engine.profile import Profile


def profile(*moves: Any) -> Profile:
    """Build a Profile from moves listed in player order.

    Examples:
        >>> profile('C', 'D')
        Profile('C', 'D')
    """
    return Profile(moves)


class Nim(Combinatorial):
    """Two-player normal-play Nim: whoever takes the last object wins.

    State is (heaps, player to move). A move is (heap index, count taken).
    """

    num_players = 2

    def __init__(self, heaps: tuple[int, ...]) -> None:
        self.heaps = tuple(heaps)

    def initial_state(self) -> tuple[tuple[int, ...], int]:
        return (self.heaps, 0)

    def whose_turn(self, state: Any) -> int:
        return state[1]

    def possible_moves(self, player: int, state: Any) -> Iterator[tuple[int, int]]:
        heaps, _ = state
        for i, size in enumerate(heaps):
            for take in range(1, size + 1):
                yield (i, take)

    def next_state(self, state: Any, move: Any) -> Any:
        heaps, to_move = state
        i, take = move
        if not (0 <= i < len(heaps)) or not (1 <= take <= heaps[i]):
            raise InvalidMove(to_move, move)
        new_heaps = heaps[:i] + (heaps[i] - take,) + heaps[i + 1:]
        return (new_heaps, 1 - to_move)

    def payoff(self, state: Any) -> Payoff | None:
        heaps, to_move = state
        if any(heaps):
            return None
        # The player who just moved took the last object.
        return Payoff.zero_sum_winner(2, 1 - to_move)


@pytest.fixture
def p():
    """Expose the profile() helper as a fixture for convenience."""
    return profile


@pytest.fixture(scope="module")
def pd() -> Normal:
    """Prisoner's dilemma."""
    return Normal.symmetric(["C", "D"], [2, 0, 3, 1])


@pytest.fixture(scope="module")
def stag_hunt() -> Normal:
    return Normal.symmetric(["C", "D"], [3, 0, 2, 1])


@pytest.fixture(scope="module")
def dominated_game() -> Normal:
    """3x2 game where B is weakly dominated by A and D strictly by E."""
    return Normal.from_payoff_vec(
        [["A", "B", "C"], ["D", "E"]],
        [(3, 3), (3, 5), (2, 0), (3, 1), (4, 0), (2, 1)],
    )


@pytest.fixture(scope="module")
def rps() -> Normal:
    """Rock-paper-scissors, zero-sum."""
    return Normal.matrix(
        ["R", "P", "S"],
        ["R", "P", "S"],
        [0, -1, 1, 1, 0, -1, -1, 1, 0],
    )


@pytest.fixture
def nim_small() -> Nim:
    """Heaps (1, 2): nim-sum is non-zero, so the first player wins."""
    return Nim((1, 2))


@pytest.fixture
def nim_lost() -> Nim:
    """Heaps (1, 1): nim-sum is zero, so the first player loses."""
    return Nim((1, 1))
