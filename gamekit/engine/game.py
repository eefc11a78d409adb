"""
Base classes shared by all game forms.

    Playable — anything that can be translated into a GameTree and played.
    Finite   — games that can enumerate the moves available to a player.

Concrete forms: Normal, Simultaneous, Combinatorial, Repeated.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterator, Sequence

if TYPE_CHECKING:
    import numpy as np

    from .play import Strategy
    from .tree import GameTree


class Playable(ABC):
    """A game that can be executed by walking its game tree."""

    #: Number of players the game is for.
    num_players: int

    @abstractmethod
    def game_tree(self) -> GameTree:
        """The root node of a fresh game tree for one play of this game."""

    def state_view(self, state: Any, player: int) -> Any:
        """The part of `state` visible to `player`. Perfect information by default."""
        return state

    def is_valid_move(self, state: Any, player: int, move: Any) -> bool:
        return True

    def play(
        self,
        strategies: Sequence[Strategy],
        rng: np.random.Generator | None = None,
    ) -> Any:
        """Play one game with one strategy per player; return the outcome."""
        from .play import play

        return play(self, strategies, rng=rng)


class Finite(ABC):
    """A game with a finite set of moves available on each turn.

    Note that "finite" here refers to the move sets, not the number of turns.
    """

    @abstractmethod
    def possible_moves(self, player: int, state: Any) -> Iterator[Any]:
        """Iterate over the moves available to `player` in `state`."""
