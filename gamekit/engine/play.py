"""
Executing game trees with strategies.

A strategy is any callable `Context -> move`. The helpers below build the
common ones; play() walks a game's tree, asking each strategy for a move at
Turn nodes, sampling at Chance nodes, and returning the outcome at the End.

    >>> from gamekit.engine.normal import Normal
    >>> pd = Normal.symmetric(['C', 'D'], [2, 0, 3, 1])
    >>> play(pd, [pure('C'), pure('D')]).payoff
    Payoff(0, 3)
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import count
from typing import TYPE_CHECKING, Any, Callable, Sequence

import numpy as np

from .distribution import Distribution
from .errors import InvalidMove, MalformedGameError
from .tree import Chance, End, GameTree, Turn

if TYPE_CHECKING:
    from .game import Finite, Playable


# ─── Strategic context ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Context:
    """Everything a strategy may use to choose its next move.

    Attributes:
        game:       The game being played.
        location:   Current node of the game tree (perfect-information games).
        state_view: The moving player's view of the current state.
        index:      Index of the player whose move is requested.
    """
    game: Any
    location: GameTree
    state_view: Any
    index: int

    @property
    def my_index(self) -> int:
        return self.index

    @property
    def their_index(self) -> int:
        """The other player's index in a two-player game."""
        if self.game.num_players != 2:
            raise ValueError("their_index is only defined for two-player games")
        return 1 - self.index


Strategy = Callable[[Context], Any]


# ─── Strategy helpers ─────────────────────────────────────────────────────────


def pure(move: Any) -> Strategy:
    """Always play the same move."""
    return lambda context: move


def mixed(distribution: Distribution, rng: np.random.Generator | None = None) -> Strategy:
    """Play a move drawn from `distribution` every time."""
    return lambda context: distribution.sample(rng)


def mixed_flat(moves: Sequence[Any], rng: np.random.Generator | None = None) -> Strategy:
    """Play one of `moves` uniformly at random."""
    return mixed(Distribution.flat(moves), rng)


def periodic(strategies: Sequence[Strategy]) -> Strategy:
    """Cycle through `strategies`, one per requested move."""
    if not strategies:
        raise ValueError("periodic strategy needs at least one strategy")
    counter = count()
    strategies = tuple(strategies)
    return lambda context: strategies[next(counter) % len(strategies)](context)


def periodic_pure(moves: Sequence[Any]) -> Strategy:
    """Play `moves` in order, then start over."""
    return periodic([pure(move) for move in moves])


def probabilistic(distribution: Distribution, rng: np.random.Generator | None = None) -> Strategy:
    """Draw a strategy from a distribution over strategies at every move."""
    return lambda context: distribution.sample(rng)(context)


def conditional(
    condition: Callable[[Context], bool],
    on_true: Strategy,
    on_false: Strategy,
) -> Strategy:
    """Play `on_true` whenever `condition` holds for the context, else `on_false`."""
    return lambda context: on_true(context) if condition(context) else on_false(context)


def trigger(
    condition: Callable[[Context], bool],
    before: Strategy,
    after: Strategy,
) -> Strategy:
    """Play `before` until `condition` first holds, then `after` for good.

    Grim trigger in a repeated prisoner's dilemma:

        >>> def defected(context):
        ...     last = context.state_view.history.last()
        ...     return last is not None and last.profile[context.their_index] == 'D'
        >>> grim = trigger(defected, pure('C'), pure('D'))
    """
    triggered = False

    def next_move(context: Context) -> Any:
        nonlocal triggered
        if not triggered:
            triggered = condition(context)
        return after(context) if triggered else before(context)

    return next_move


def randomly(game: Finite, rng: np.random.Generator | None = None) -> Strategy:
    """Pick uniformly among the moves the game currently allows."""

    def next_move(context: Context) -> Any:
        moves = list(game.possible_moves(context.index, context.location.state))
        return Distribution.flat(moves).sample(rng)

    return next_move


# ─── Execution ────────────────────────────────────────────────────────────────


def play(
    game: Playable,
    strategies: Sequence[Strategy],
    rng: np.random.Generator | None = None,
) -> Any:
    """Play one game to completion and return its outcome.

    Args:
        game:       Any Playable game.
        strategies: One strategy per player, indexed by player.
        rng:        Generator used for chance moves.

    Returns:
        The outcome stored at the End node that was reached.

    Raises:
        InvalidMove: A strategy played a move the game rejects. The error
                     carries the state of the node where it happened.
    """
    if len(strategies) != game.num_players:
        raise ValueError(f"expected {game.num_players} strategies, got {len(strategies)}")

    node = game.game_tree()
    while True:
        if isinstance(node, Turn):
            moves = tuple(
                strategies[p](Context(game, node, game.state_view(node.state, p), p))
                for p in node.to_move
            )
            try:
                node = node.advance(moves)
            except InvalidMove as err:
                if err.state is not None:
                    raise
                raise err.with_state(node.state) from err
        elif isinstance(node, Chance):
            move = node.distribution.sample(rng)
            try:
                node = node.advance(move)
            except InvalidMove as err:
                raise MalformedGameError(f"chance move {move!r} was rejected by the game") from err
        elif isinstance(node, End):
            return node.outcome
        else:
            raise MalformedGameError(f"not a game tree node: {node!r}")
