"""
Exceptions raised while building, playing, and searching games.

Two failure classes are kept strictly apart:

    InvalidMove         — a player submitted a move the game refuses.
                          Recoverable: aborts only the current turn/iteration.
    MalformedGameError  — the game definition itself is broken (e.g. a move
                          advertised by possible_moves() is refused).
                          Fatal: never caught inside the library.
"""

from __future__ import annotations

from typing import Any


class GameError(Exception):
    """Base class for recoverable errors raised while playing a game."""


class InvalidMove(GameError):
    """A player played a move that the game does not accept.

    Attributes:
        player: Index of the offending player.
        move:   The rejected move.
        state:  Game state at the point of the error, or None if the error was
                raised by a continuation that does not know its own state yet.
                Drivers attach the state before re-raising.
    """

    def __init__(self, player: int, move: Any, state: Any = None) -> None:
        super().__init__(f"player {player} played an invalid move: {move!r}")
        self.player = player
        self.move = move
        self.state = state

    def with_state(self, state: Any) -> InvalidMove:
        """Return a copy of this error attached to the given state."""
        return InvalidMove(self.player, self.move, state)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidMove):
            return NotImplemented
        return (self.player, self.move, self.state) == (other.player, other.move, other.state)

    def __hash__(self) -> int:
        return hash((self.player, self.move))


class MalformedGameError(RuntimeError):
    """The game under execution or search violates its own contract."""


class PayoffTableError(ValueError):
    """Too few payoff or utility values were supplied to build a game."""


class SearchCancelled(RuntimeError):
    """A search exceeded its deadline or its cancellation event was set."""
