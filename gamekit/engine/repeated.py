"""
Repeated games: a stage game played a fixed number of times in a row.

The repeated game's tree is the stage game's tree, lifted so that every node
carries a RepeatedState. When a stage End node is reached its outcome is
appended to the History; either the stage game restarts from a fresh tree,
or, after the last iteration, a final End node carries the whole History.

Strategies see the RepeatedState, so they can react to earlier iterations:

    >>> def tit_for_tat(context):
    ...     last = context.state_view.history.last()
    ...     return 'C' if last is None else last.profile[context.their_index]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterator

from .errors import InvalidMove, MalformedGameError
from .game import Finite, Playable
from .outcome import History
from .tree import Chance, End, GameTree, Turn

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepeatedState:
    """State of a repeated game between two nodes.

    Attributes:
        stage_state: State of the stage game currently in progress.
        history:     Outcomes of all completed iterations.
        remaining:   Iterations still to start after the current one.
    """
    stage_state: Any
    history: History
    remaining: int


def generate_tree(stage_game: Playable, stage_node: GameTree, state: RepeatedState) -> GameTree:
    """Lift `stage_node` of the stage game into a node of the repeated game.

    Stage End nodes that are not the last iteration are folded into the
    history and replaced by a fresh stage tree in a loop, so long repetitions
    do not grow the call stack.
    """
    while isinstance(stage_node, End):
        history = state.history.add(stage_node.outcome)
        if state.remaining == 0:
            final = RepeatedState(stage_node.state, history, 0)
            return End(final, history)
        stage_node = stage_game.game_tree()
        state = RepeatedState(stage_node.state, history, state.remaining - 1)
        logger.debug("repeated game: iteration %d complete, %d to go", len(history), state.remaining + 1)

    if isinstance(stage_node, Turn):
        stage_next = stage_node.next

        def turn_next(repeated_state: RepeatedState, moves: tuple) -> GameTree:
            try:
                child = stage_next(repeated_state.stage_state, moves)
            except InvalidMove as err:
                raise err.with_state(repeated_state) from err
            return generate_tree(stage_game, child, _carry(repeated_state, child))

        return Turn(state, stage_node.to_move, turn_next)

    if isinstance(stage_node, Chance):
        stage_chance_next = stage_node.next

        def chance_next(repeated_state: RepeatedState, move: Any) -> GameTree:
            try:
                child = stage_chance_next(repeated_state.stage_state, move)
            except InvalidMove as err:
                raise err.with_state(repeated_state) from err
            return generate_tree(stage_game, child, _carry(repeated_state, child))

        return Chance(state, stage_node.distribution, chance_next)

    raise MalformedGameError(f"not a game tree node: {stage_node!r}")


def _carry(state: RepeatedState, stage_node: GameTree) -> RepeatedState:
    """The same iteration, moved on to the stage state of `stage_node`."""
    return RepeatedState(stage_node.state, state.history, state.remaining)


class Repeated(Playable, Finite):
    """A stage game repeated `repetitions` times; the outcome is a History.

    Args:
        stage_game:  Any Playable game.
        repetitions: Number of iterations, at least 1.
    """

    def __init__(self, stage_game: Playable, repetitions: int) -> None:
        if repetitions < 1:
            raise ValueError(f"a repeated game needs at least one repetition, got {repetitions}")
        self.stage_game = stage_game
        self.repetitions = repetitions
        self.num_players = stage_game.num_players

    def game_tree(self) -> GameTree:
        stage_root = self.stage_game.game_tree()
        initial = RepeatedState(stage_root.state, History.empty(self.num_players), self.repetitions - 1)
        return generate_tree(self.stage_game, stage_root, initial)

    def state_view(self, state: RepeatedState, player: int) -> RepeatedState:
        return state

    def is_valid_move(self, state: RepeatedState, player: int, move: Any) -> bool:
        return self.stage_game.is_valid_move(state.stage_state, player, move)

    def possible_moves(self, player: int, state: RepeatedState) -> Iterator[Any]:
        if not isinstance(self.stage_game, Finite):
            raise TypeError(f"stage game {type(self.stage_game).__name__} does not enumerate its moves")
        return self.stage_game.possible_moves(player, state.stage_state)
