"""
Lazy, constrained enumeration of profiles and outcomes of finite games.

ProfileIter enumerates the Cartesian product of per-player move lists in
row-major order: player 0's move varies slowest, the last player's fastest.

Constraints narrow the product without materialising it:

    include(p, m)   — p must play one of its included moves (union per player)
    exclude(p, m)   — reject any profile where p plays m
    adjacent(p, r)  — profiles differing from r only in p's move

Each constraint returns a new iterator; the receiver is unchanged, so a base
iterator can be shared and re-iterated. Filters are applied to each player's
move list before the product is taken, so a query costs only the size of the
slice it selects:

    >>> it = ProfileIter([['A', 'B', 'C'], ['D', 'E']])
    >>> len(list(it))
    6
    >>> list(it.adjacent(0, Profile(['A', 'E'])))
    [Profile('B', 'E'), Profile('C', 'E')]
"""

from __future__ import annotations

import itertools
from typing import Any, Callable, Iterable, Iterator, Sequence

from .outcome import SimultaneousOutcome
from .payoff import Payoff
from .players import check_player
from .profile import Profile


class ProfileIter:
    """A reusable iterable over the (constrained) profiles of a finite game.

    Args:
        move_lists: One sequence of available moves per player.
    """

    __slots__ = ("_move_lists", "_includes", "_excludes")

    def __init__(
        self,
        move_lists: Iterable[Iterable[Any]],
        includes: Sequence[tuple] | None = None,
        excludes: Sequence[tuple] | None = None,
    ) -> None:
        self._move_lists: tuple[tuple, ...] = tuple(tuple(moves) for moves in move_lists)
        n = len(self._move_lists)
        self._includes: tuple[tuple, ...] = tuple(includes) if includes is not None else ((),) * n
        self._excludes: tuple[tuple, ...] = tuple(excludes) if excludes is not None else ((),) * n

    @classmethod
    def symmetric(cls, moves: Iterable[Any], num_players: int) -> ProfileIter:
        """All profiles of a game where every player has the same moves."""
        moves = tuple(moves)
        return cls(moves for _ in range(num_players))

    @property
    def num_players(self) -> int:
        return len(self._move_lists)

    # ── Constraints ──────────────────────────────────────────────────────────

    def _with(self, player: int, includes: tuple | None = None, excludes: tuple | None = None) -> ProfileIter:
        check_player(player, self.num_players)
        new_includes = list(self._includes)
        new_excludes = list(self._excludes)
        if includes:
            new_includes[player] = new_includes[player] + includes
        if excludes:
            new_excludes[player] = new_excludes[player] + excludes
        return ProfileIter(self._move_lists, new_includes, new_excludes)

    def include(self, player: int, move: Any) -> ProfileIter:
        """Constrain `player` to `move`, in addition to any already included."""
        return self._with(player, includes=(move,))

    def exclude(self, player: int, move: Any) -> ProfileIter:
        """Reject every profile where `player` plays `move`."""
        return self._with(player, excludes=(move,))

    def adjacent(self, player: int, profile: Sequence[Any]) -> ProfileIter:
        """Profiles equal to `profile` except for a different move by `player`."""
        check_player(player, self.num_players)
        it = self.exclude(player, profile[player])
        for other in range(self.num_players):
            if other != player:
                it = it.include(other, profile[other])
        return it

    # ── Enumeration ──────────────────────────────────────────────────────────

    def _allowed_moves(self, player: int) -> list[Any]:
        includes = self._includes[player]
        excludes = self._excludes[player]
        return [
            move for move in self._move_lists[player]
            if (not includes or move in includes) and move not in excludes
        ]

    def __iter__(self) -> Iterator[Profile]:
        allowed = [self._allowed_moves(p) for p in range(self.num_players)]
        return (Profile(moves) for moves in itertools.product(*allowed))

    def count(self) -> int:
        """Number of profiles this iterator yields, without enumerating them."""
        total = 1
        for p in range(self.num_players):
            total *= len(self._allowed_moves(p))
        return total

    def __repr__(self) -> str:
        return f"ProfileIter(players={self.num_players}, count={self.count()})"


class OutcomeIter:
    """Pairs each profile of a ProfileIter with its payoff, lazily.

    Args:
        profiles:  The profiles to enumerate.
        payoff_fn: Maps a profile to its Payoff.
    """

    __slots__ = ("_profiles", "_payoff_fn")

    def __init__(self, profiles: ProfileIter, payoff_fn: Callable[[Profile], Payoff]) -> None:
        self._profiles = profiles
        self._payoff_fn = payoff_fn

    @property
    def profiles(self) -> ProfileIter:
        return self._profiles

    def include(self, player: int, move: Any) -> OutcomeIter:
        return OutcomeIter(self._profiles.include(player, move), self._payoff_fn)

    def exclude(self, player: int, move: Any) -> OutcomeIter:
        return OutcomeIter(self._profiles.exclude(player, move), self._payoff_fn)

    def adjacent(self, player: int, profile: Sequence[Any]) -> OutcomeIter:
        return OutcomeIter(self._profiles.adjacent(player, profile), self._payoff_fn)

    def __iter__(self) -> Iterator[SimultaneousOutcome]:
        for profile in self._profiles:
            yield SimultaneousOutcome(profile, self._payoff_fn(profile))
