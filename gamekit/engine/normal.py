"""
Finite simultaneous games in normal form.

A Normal game pairs one finite move list per player with a payoff function
over profiles. Several constructors cover the usual ways of writing a payoff
table down:

    from_payoff_fn(moves, fn)           — arbitrary profile -> Payoff function
    from_utility_fns(moves, fns)        — each player's utility of their own move
    from_payoff_map(moves, mapping)     — explicit {profile: payoff} table
    from_payoff_vec(moves, payoffs)     — payoffs listed in row-major profile order
    matrix(rows, cols, utils)           — two-player zero-sum, row player's utilities
    bimatrix(rows, cols, u0, u1)        — two-player, one utility list per player
    symmetric(moves, utils, n)          — player 0's table rotated for every player
    symmetric_table(moves, table)       — the same, from a nested per-player table

Size policy for listed tables: exactly one value per profile is expected.
Fewer raises PayoffTableError and no game is built; more logs a warning and
the excess is ignored.

Examples:
    >>> pd = Normal.symmetric(['C', 'D'], [2, 0, 3, 1])
    >>> pd.payoff(Profile(['C', 'D']))
    Payoff(0, 3)
    >>> pd.dimensions()
    PerPlayer(2, 2)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Mapping, Sequence

import numpy as np

from .errors import PayoffTableError
from .game import Finite, Playable
from .payoff import Payoff
from .players import PerPlayer, check_player
from .profile import Profile
from .profiles import OutcomeIter, ProfileIter
from .simultaneous import Simultaneous
from .tree import GameTree

logger = logging.getLogger(__name__)

PayoffFn = Callable[[Profile], Payoff]


def _check_table_size(where: str, expected: int, got: int) -> None:
    """Apply the payoff-table size policy."""
    if got < expected:
        raise PayoffTableError(f"{where}: not enough values provided; expected {expected}, got {got}")
    if got > expected:
        logger.warning("%s: too many values provided; expected %d, got %d", where, expected, got)


class Normal(Playable, Finite):
    """A finite normal-form game.

    Args:
        moves:     One sequence of available moves per player.
        payoff_fn: Maps a profile of valid moves to the players' payoff.
    """

    def __init__(self, moves: Sequence[Sequence[Any]], payoff_fn: PayoffFn) -> None:
        self._moves: tuple[tuple, ...] = tuple(tuple(player_moves) for player_moves in moves)
        if not self._moves:
            raise ValueError("a normal-form game needs at least one player")
        for player, player_moves in enumerate(self._moves):
            if not player_moves:
                raise ValueError(f"player {player} has no moves")
        self.num_players = len(self._moves)
        self._payoff_fn = payoff_fn

    # ── Constructors ─────────────────────────────────────────────────────────

    @classmethod
    def from_payoff_fn(cls, moves: Sequence[Sequence[Any]], payoff_fn: PayoffFn) -> Normal:
        return cls(moves, payoff_fn)

    @classmethod
    def from_utility_fns(
        cls, moves: Sequence[Sequence[Any]], utility_fns: Sequence[Callable[[Any], Any]]
    ) -> Normal:
        """Each player's utility depends only on their own move."""
        utility_fns = tuple(utility_fns)
        if len(utility_fns) != len(moves):
            raise ValueError(f"expected {len(moves)} utility functions, got {len(utility_fns)}")

        def payoff_fn(profile: Profile) -> Payoff:
            return Payoff(fn(move) for fn, move in zip(utility_fns, profile))

        return cls(moves, payoff_fn)

    @classmethod
    def from_payoff_map(cls, moves: Sequence[Sequence[Any]], payoff_map: Mapping[Sequence[Any], Any]) -> Normal:
        """Look payoffs up in an explicit table.

        Profiles missing from the table are reported with logger.error and
        receive a zero payoff.
        """
        num_players = len(moves)
        table = {Profile(profile): Payoff(payoff) for profile, payoff in payoff_map.items()}

        def payoff_fn(profile: Profile) -> Payoff:
            payoff = table.get(Profile(profile))
            if payoff is None:
                logger.error("from_payoff_map: no payoff for profile %r", profile)
                return Payoff.zeros(num_players)
            return payoff

        return cls(moves, payoff_fn)

    @classmethod
    def from_payoff_vec(cls, moves: Sequence[Sequence[Any]], payoffs: Sequence[Sequence[Any]]) -> Normal:
        """Build a game from payoffs listed in row-major profile order.

        Raises:
            PayoffTableError: If there are fewer payoffs than profiles.
        """
        profiles = list(ProfileIter(moves))
        payoffs = list(payoffs)
        _check_table_size("from_payoff_vec", len(profiles), len(payoffs))
        return cls.from_payoff_map(moves, dict(zip(profiles, payoffs)))

    @classmethod
    def matrix(cls, row_moves: Sequence[Any], col_moves: Sequence[Any], row_utils: Sequence[Any]) -> Normal:
        """Two-player zero-sum game given the row player's utilities (row-major).

        Examples:
            >>> g = Normal.matrix(['U', 'D'], ['L', 'R'], [1, -1, -1, 1])
            >>> g.payoff(Profile(['U', 'R']))
            Payoff(-1, 1)
        """
        return cls.from_payoff_vec([row_moves, col_moves], [(u, -u) for u in row_utils])

    @classmethod
    def bimatrix(
        cls,
        row_moves: Sequence[Any],
        col_moves: Sequence[Any],
        row_utils: Sequence[Any],
        col_utils: Sequence[Any],
    ) -> Normal:
        """Two-player game given one row-major utility matrix per player."""
        expected = len(row_moves) * len(col_moves)
        _check_table_size("bimatrix (column player)", expected, len(col_utils))
        return cls.from_payoff_vec([row_moves, col_moves], list(zip(row_utils, col_utils)))

    @classmethod
    def symmetric(cls, moves: Sequence[Any], utilities: Sequence[Any], num_players: int = 2) -> Normal:
        """Build a symmetric game from player 0's utilities.

        `utilities` lists player 0's utility for every profile in row-major
        order, so it needs len(moves) ** num_players values. Player p's utility
        at (m0, ..., mN-1) is looked up at the profile rotated so that p's move
        takes player 0's position.

        Raises:
            PayoffTableError: If fewer than len(moves) ** num_players values are given.

        Examples:
            >>> pd3 = Normal.symmetric(['C', 'D'], [4, 1, 1, 0, 5, 3, 3, 2], num_players=3)
            >>> pd3.payoff(Profile(['C', 'C', 'D']))
            Payoff(1, 1, 5)
        """
        if num_players < 1:
            raise ValueError(f"a symmetric game needs at least one player, got {num_players}")
        moves = tuple(moves)
        num_moves = len(moves)
        size = num_moves ** num_players
        _check_table_size(f"symmetric ({num_moves}^{num_players})", size, len(utilities))
        utils = np.asarray(list(utilities)[:size])

        move_index = {move: i for i, move in enumerate(moves)}

        # Row p maps move indexes to the flat index of player p's utility.
        translate_p0 = num_moves ** np.arange(num_players - 1, -1, -1)
        translate = np.stack([np.roll(translate_p0, p) for p in range(num_players)])

        def payoff_fn(profile: Profile) -> Payoff:
            move_indexes = np.zeros(num_players, dtype=np.int64)
            for p, move in enumerate(profile):
                index = move_index.get(move)
                if index is None:
                    logger.error("symmetric: payoff function received an invalid move: %r", move)
                    continue
                move_indexes[p] = index
            return Payoff(utils[translate @ move_indexes].tolist())

        return cls([moves] * num_players, payoff_fn)

    @classmethod
    def symmetric_table(cls, moves: Sequence[Any], p0_table: Sequence[Any]) -> Normal:
        """Build a symmetric game from player 0's utilities as a nested table.

        The table has one axis per player, each of length len(moves);
        p0_table[i0][i1]... is player 0's utility when player k plays
        moves[ik]. The number of players is the table's depth.

        Raises:
            PayoffTableError: If any axis of the table is not len(moves) long.

        Examples:
            >>> pd = Normal.symmetric_table(['C', 'D'], [[2, 0], [3, 1]])
            >>> pd.payoff(Profile(['D', 'C']))
            Payoff(3, 0)
        """
        moves = tuple(moves)
        table = np.asarray(p0_table)
        if table.ndim < 1 or any(axis != len(moves) for axis in table.shape):
            raise PayoffTableError(
                f"symmetric_table: expected {len(moves)} entries on every axis, got shape {table.shape}"
            )
        return cls.symmetric(moves, table.ravel().tolist(), num_players=table.ndim)

    # ── Moves and profiles ───────────────────────────────────────────────────

    def possible_moves_for_player(self, player: int) -> tuple:
        return self._moves[check_player(player, self.num_players)]

    def possible_moves(self, player: int, state: Any = None) -> Iterator[Any]:
        return iter(self.possible_moves_for_player(player))

    def is_valid_move_for_player(self, player: int, move: Any) -> bool:
        return move in self.possible_moves_for_player(player)

    def is_valid_move(self, state: Any, player: int, move: Any) -> bool:
        return self.is_valid_move_for_player(player, move)

    def is_valid_profile(self, profile: Sequence[Any]) -> bool:
        return len(profile) == self.num_players and all(
            self.is_valid_move_for_player(p, move) for p, move in enumerate(profile)
        )

    def payoff(self, profile: Sequence[Any]) -> Payoff:
        return Payoff(self._payoff_fn(Profile(profile)))

    def dimensions(self) -> PerPlayer:
        """Number of moves available to each player."""
        return PerPlayer(len(moves) for moves in self._moves)

    def possible_profiles(self) -> ProfileIter:
        return ProfileIter(self._moves)

    def possible_outcomes(self) -> OutcomeIter:
        return OutcomeIter(self.possible_profiles(), self.payoff)

    def is_zero_sum(self) -> bool:
        return all(outcome.payoff.is_zero_sum() for outcome in self.possible_outcomes())

    # ── Execution ────────────────────────────────────────────────────────────

    def as_simultaneous(self) -> Simultaneous:
        """The same game with move validity expressed as a predicate."""
        return Simultaneous(self.num_players, self.is_valid_move_for_player, self.payoff)

    def game_tree(self) -> GameTree:
        return self.as_simultaneous().game_tree()

    def __repr__(self) -> str:
        return f"Normal(dimensions={list(self.dimensions())})"
