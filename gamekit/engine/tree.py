"""
Generic extensive-form game trees.

Every game form (normal, simultaneous, combinatorial, repeated) is executed by
translating it into a tree built from exactly three node kinds:

    Turn(state, to_move, next)          — one or more players move simultaneously
    Chance(state, distribution, next)   — nature draws a move
    End(state, outcome)                 — terminal; outcome carries the payoff

Edges are continuations: `next(state, moves)` computes the following node on
demand, or raises InvalidMove naming exactly one offending player. Trees are
therefore lazy and may be infinite; nothing is expanded until a move is made.

Node state is never mutated after the node exists. Continuations may share it
freely (and must not mutate anything they capture).

sequentialize() rewrites simultaneous turns into chains of single-player turns
so that algorithms which handle one mover at a time (minimax) apply uniformly:

    Turn([P0, P1], next)  ──►  Turn([P0]) ─m0─► Turn([P1]) ─m1─► next(state, (m0, m1))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence, Union

from .distribution import Distribution
from .errors import MalformedGameError
from .profile import Profile

# Continuation types: (state, moves-tuple) -> node and (state, move) -> node.
TurnNext = Callable[[Any, tuple], "GameTree"]
ChanceNext = Callable[[Any, Any], "GameTree"]


# ─── Node kinds ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Turn:
    """One or more players must move simultaneously.

    Attributes:
        state:   Game state at this node.
        to_move: Players to move, in the order their moves are passed to `next`.
        next:    Continuation taking (state, moves) with one move per player
                 in `to_move`, returning the next node or raising InvalidMove.
    """
    state: Any
    to_move: tuple[int, ...]
    next: TurnNext

    def advance(self, moves: Sequence[Any]) -> GameTree:
        """Apply one move per player in `to_move` and return the next node."""
        moves = tuple(moves)
        if len(moves) != len(self.to_move):
            raise ValueError(
                f"turn for players {list(self.to_move)} expects {len(self.to_move)} moves, got {len(moves)}"
            )
        return self.next(self.state, moves)


@dataclass(frozen=True)
class Chance:
    """A move of chance is drawn from `distribution`."""
    state: Any
    distribution: Distribution
    next: ChanceNext

    def advance(self, move: Any) -> GameTree:
        return self.next(self.state, move)


@dataclass(frozen=True)
class End:
    """The game is over; `outcome` pairs the move record with the payoff."""
    state: Any
    outcome: Any


GameTree = Union[Turn, Chance, End]


# ─── Builders ─────────────────────────────────────────────────────────────────


def players(state: Any, to_move: Sequence[int], next: TurnNext) -> Turn:
    """A node where the given players move simultaneously.

    Raises:
        ValueError: If `to_move` is empty or lists a player more than once.
    """
    to_move = tuple(to_move)
    if not to_move:
        raise ValueError("a turn node needs at least one player to move")
    if len(set(to_move)) != len(to_move):
        raise ValueError(f"a turn node lists a player more than once: {list(to_move)}")
    return Turn(state, to_move, next)


def player(state: Any, to_move: int, next: Callable[[Any, Any], GameTree]) -> Turn:
    """A node where a single player moves; `next` receives that one move."""

    def single_next(state: Any, moves: tuple) -> GameTree:
        if len(moves) != 1:
            raise ValueError(f"single-player turn expects 1 move, got {len(moves)}")
        return next(state, moves[0])

    return players(state, (to_move,), single_next)


def all_players(state: Any, num_players: int, next: Callable[[Any, Profile], GameTree]) -> Turn:
    """A node where every player moves at once; `next` receives a Profile."""

    def profile_next(state: Any, moves: tuple) -> GameTree:
        if len(moves) != num_players:
            raise ValueError(f"all-player turn expects {num_players} moves, got {len(moves)}")
        return next(state, Profile(moves))

    return players(state, range(num_players), profile_next)


def chance(state: Any, distribution: Distribution, next: ChanceNext) -> Chance:
    """A node where a move is drawn from `distribution`."""
    return Chance(state, distribution, next)


def end(state: Any, outcome: Any) -> End:
    """A terminal node carrying the final outcome."""
    return End(state, outcome)


def state_of(node: GameTree) -> Any:
    """The game state stored at any kind of node."""
    if isinstance(node, (Turn, Chance, End)):
        return node.state
    raise MalformedGameError(f"not a game tree node: {node!r}")


# ─── Sequentialization ────────────────────────────────────────────────────────


def sequentialize(node: GameTree, prioritize: int | None = None) -> GameTree:
    """Rewrite the tree so that every Turn node has exactly one player to move.

    A Turn with k simultaneous movers becomes a chain of k single-player
    Turns, in `to_move` order. Each synthetic node captures the moves collected
    so far; the last one invokes the original continuation with all k moves in
    their original order. Nodes below are sequentialized lazily as they are
    reached.

    Args:
        node:       Root of the (sub)tree to rewrite.
        prioritize: Optional player to move first in every simultaneous turn
                    that includes them, e.g. the player a search is run for.
                    `to_move` is rotated to start at that player, so
                    prioritizing 2 in (0, 1, 2, 3) gives (2, 3, 0, 1).

    Returns:
        An equivalent tree: feeding the same moves through the chain yields
        the same next node as invoking the original continuation directly.
    """
    if isinstance(node, Turn):
        to_move = node.to_move
        original_next = node.next
        if prioritize in to_move and to_move[0] != prioritize:
            index = to_move.index(prioritize)
            to_move = to_move[index:] + to_move[:index]

            def original_next(state: Any, moves: tuple, _next: TurnNext = node.next) -> GameTree:
                # moves arrive rotated left by `index`; restore declared order
                return _next(state, moves[-index:] + moves[:-index])

        return _sequentialize_turns(node.state, to_move, (), original_next, prioritize)

    if isinstance(node, Chance):
        chance_next = node.next

        def seq_chance_next(state: Any, move: Any) -> GameTree:
            return sequentialize(chance_next(state, move), prioritize)

        return Chance(node.state, node.distribution, seq_chance_next)

    if isinstance(node, End):
        return node

    raise MalformedGameError(f"not a game tree node: {node!r}")


def _sequentialize_turns(
    state: Any,
    still_to_move: tuple[int, ...],
    moves_so_far: tuple,
    original_next: TurnNext,
    prioritize: int | None,
) -> Turn:
    """Build the single-player Turn for still_to_move[0] in a sequentialized chain."""
    mover = still_to_move[0]
    rest = still_to_move[1:]

    def next_in_chain(state: Any, moves: tuple) -> GameTree:
        if len(moves) != 1:
            raise ValueError(f"sequentialized turn expects 1 move, got {len(moves)}")
        collected = moves_so_far + moves
        if rest:
            return _sequentialize_turns(state, rest, collected, original_next, prioritize)
        return sequentialize(original_next(state, collected), prioritize)

    return Turn(state, (mover,), next_in_chain)
