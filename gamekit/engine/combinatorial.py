"""
Sequential, perfect-information games defined by a state machine.

Subclasses describe the game through a handful of state functions; the game
tree is derived from them. Each node lets exactly one player move, and the
path taken is recorded in a Transcript that ends up in the outcome.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from .game import Finite, Playable
from .outcome import SequentialOutcome
from .payoff import Payoff
from .profile import Transcript
from .tree import GameTree, end, player


class Combinatorial(Playable, Finite):
    """Base class for turn-taking games such as Nim or tic-tac-toe.

    Subclasses set `num_players` and implement initial_state, whose_turn,
    next_state, payoff and possible_moves. States must be treated as
    immutable: next_state returns a new state.
    """

    @abstractmethod
    def initial_state(self) -> Any:
        """State before any move has been made."""

    @abstractmethod
    def whose_turn(self, state: Any) -> int:
        """Index of the player to move in `state`."""

    @abstractmethod
    def next_state(self, state: Any, move: Any) -> Any:
        """State after the current player plays `move`.

        Raises:
            InvalidMove: If `move` is not legal in `state`.
        """

    @abstractmethod
    def payoff(self, state: Any) -> Payoff | None:
        """Final payoff if the game is over in `state`, else None."""

    def is_game_end(self, state: Any) -> bool:
        return self.payoff(state) is not None

    def is_valid_move(self, state: Any, player: int, move: Any) -> bool:
        return player == self.whose_turn(state) and move in list(self.possible_moves(player, state))

    def game_tree(self) -> GameTree:
        return self._generate_tree(self.initial_state(), Transcript())

    def _generate_tree(self, state: Any, transcript: Transcript) -> GameTree:
        payoff = self.payoff(state)
        if payoff is not None:
            return end(state, SequentialOutcome(transcript, Payoff(payoff)))

        mover = self.whose_turn(state)

        def next(state: Any, move: Any) -> GameTree:
            new_state = self.next_state(state, move)
            return self._generate_tree(new_state, transcript.add_player_move(mover, move))

        return player(state, mover, next)
