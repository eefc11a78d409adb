"""
Player indexes and the fixed-size per-player container.

Players are identified by plain integers in [0, num_players). A PerPlayer is
an immutable tuple holding exactly one value per player; Profile and Payoff
specialise it.

The for2 / for3 / for4 namespaces name the indexes of small games:

    >>> for2.P0, for2.P1
    (0, 1)
    >>> for2.ROW, for2.COL
    (0, 1)
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable, Iterable, Iterator, TypeVar

T = TypeVar("T")
P = TypeVar("P", bound="PerPlayer")


def check_player(player: int, num_players: int) -> int:
    """Validate a player index for a game of the given arity.

    Raises:
        IndexError: If the index is outside [0, num_players).

    Examples:
        >>> check_player(1, 2)
        1
    """
    if not 0 <= player < num_players:
        raise IndexError(f"player index {player} out of range for {num_players} players")
    return player


def all_players(num_players: int) -> Iterator[int]:
    """Iterate over every player index of an N-player game."""
    return iter(range(num_players))


class PerPlayer(tuple):
    """An immutable collection containing exactly one value per player.

    Examples:
        >>> pp = PerPlayer(['a', 'b', 'c'])
        >>> pp.num_players
        3
        >>> pp.for_player(2)
        'c'
        >>> PerPlayer.generate(3, lambda p: p * 10)
        PerPlayer(0, 10, 20)
    """

    def __new__(cls: type[P], values: Iterable[Any]) -> P:
        return super().__new__(cls, values)

    @classmethod
    def generate(cls: type[P], num_players: int, gen: Callable[[int], Any]) -> P:
        """Build a collection by calling gen(player) for each player index."""
        return cls(gen(p) for p in range(num_players))

    @classmethod
    def init_with(cls: type[P], num_players: int, value: Any) -> P:
        """Build a collection with the same value for every player."""
        return cls(value for _ in range(num_players))

    @property
    def num_players(self) -> int:
        return len(self)

    def for_player(self, player: int) -> Any:
        return self[check_player(player, len(self))]

    def map(self, fn: Callable[[Any], Any]) -> PerPlayer:
        """Apply fn to each value, returning a plain PerPlayer."""
        return PerPlayer(fn(v) for v in self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(v) for v in self)})"


# ─── Named player indexes ─────────────────────────────────────────────────────

for1 = SimpleNamespace(P0=0)
for2 = SimpleNamespace(P0=0, P1=1, ROW=0, COL=1)
for3 = SimpleNamespace(P0=0, P1=1, P2=2)
for4 = SimpleNamespace(P0=0, P1=1, P2=2, P3=3)
