"""
Simultaneous one-shot games with possibly infinite move sets.

Each player picks a move without seeing the others'; the profile determines
the payoff. Move validity is a predicate rather than an enumeration, so moves
may come from an unbounded domain (e.g. any integer).
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from .errors import InvalidMove
from .game import Playable
from .outcome import SimultaneousOutcome
from .payoff import Payoff
from .players import check_player
from .profile import Profile
from .tree import GameTree, all_players, end

MoveFn = Callable[[int, Any], bool]
PayoffFn = Callable[[Profile], Payoff]


class Simultaneous(Playable):
    """A game where all players move once, at the same time.

    Args:
        num_players: Number of players.
        move_fn:     Predicate (player, move) -> bool for valid moves.
        payoff_fn:   Maps a complete profile to the players' payoff.

    Examples:
        >>> g = Simultaneous(2, lambda p, m: m >= 0, lambda prof: Payoff(prof))
        >>> g.is_valid_profile(Profile([1, -1]))
        False
        >>> g.payoff(Profile([4, 5]))
        Payoff(4, 5)
    """

    def __init__(self, num_players: int, move_fn: MoveFn, payoff_fn: PayoffFn) -> None:
        if num_players < 1:
            raise ValueError(f"a game needs at least one player, got {num_players}")
        self.num_players = num_players
        self._move_fn = move_fn
        self._payoff_fn = payoff_fn

    @classmethod
    def from_utility_fns(
        cls, move_fn: MoveFn, utility_fns: Sequence[Callable[[Any], Any]]
    ) -> Simultaneous:
        """Build a game where each player's utility depends only on their own move."""
        utility_fns = tuple(utility_fns)

        def payoff_fn(profile: Profile) -> Payoff:
            return Payoff(fn(move) for fn, move in zip(utility_fns, profile))

        return cls(len(utility_fns), move_fn, payoff_fn)

    def is_valid_move_for_player(self, player: int, move: Any) -> bool:
        check_player(player, self.num_players)
        return bool(self._move_fn(player, move))

    def is_valid_move(self, state: Any, player: int, move: Any) -> bool:
        return self.is_valid_move_for_player(player, move)

    def is_valid_profile(self, profile: Sequence[Any]) -> bool:
        return len(profile) == self.num_players and all(
            self.is_valid_move_for_player(p, move) for p, move in enumerate(profile)
        )

    def payoff(self, profile: Profile) -> Payoff:
        return Payoff(self._payoff_fn(Profile(profile)))

    def game_tree(self) -> GameTree:
        """A single all-player Turn leading directly to the End."""

        def next(state: Any, profile: Profile) -> GameTree:
            for player, move in enumerate(profile):
                if not self.is_valid_move_for_player(player, move):
                    raise InvalidMove(player, move)
            return end(state, SimultaneousOutcome(profile, self.payoff(profile)))

        return all_players(None, self.num_players, next)
