"""Minimax search with alpha-beta pruning over game trees.

Searches the sequentialized tree of any finite, playable game from the
point of view of one target player, who maximises their own utility while
every other player is assumed to minimise it.

Node handling
-------------
  Turn (target player)  — maximise over possible_moves; raise alpha;
                          stop expanding siblings once value >= beta.
  Turn (anyone else)    — minimise; lower beta; stop once value <= alpha.
  End                   — the target player's utility as a float.
  depth >= max_depth    — heuristic(state) for Turn and Chance nodes.
  Chance before cutoff  — NotImplementedError. Expectation over chance
                          nodes is not supported; searches over games with
                          chance must set max_depth short of them.

A move listed by possible_moves that the tree then refuses means the game
implementation is broken: MalformedGameError, never swallowed.

Search limits (SearchConfig.timeout, SearchConfig.cancel_event) are checked
at every node and abort with SearchCancelled.

The search keeps its own stack of open Turn nodes instead of recursing, so
games thousands of plies long (e.g. long repeated games) can be searched.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from gamekit.engine.errors import InvalidMove, MalformedGameError, SearchCancelled
from gamekit.engine.game import Finite, Playable
from gamekit.engine.play import Context
from gamekit.engine.players import check_player
from gamekit.engine.repeated import Repeated
from gamekit.engine.tree import Chance, End, GameTree, Turn, sequentialize

logger = logging.getLogger(__name__)


def _zero_heuristic(state: Any) -> float:
    return 0.0


@dataclass(frozen=True)
class SearchConfig:
    """Parameters of a minimax search.

    Attributes:
        max_depth:    Plies to search before applying the heuristic; None
                      searches to the end of the game.
        heuristic:    Estimate of the target player's utility in a state.
                      Should fall between the worst and best achievable payoffs.
        prune:        Use alpha-beta pruning. Never changes the value found,
                      only the number of nodes visited.
        timeout:      Wall-clock seconds allowed per search, or None.
        cancel_event: Set from another thread to abort a running search.
    """
    max_depth: int | None = None
    heuristic: Callable[[Any], float] = field(default=_zero_heuristic)
    prune: bool = True
    timeout: float | None = None
    cancel_event: threading.Event | None = None


class Minimax:
    """Minimax search for one player of a finite playable game.

    Args:
        game:   A game that is both Playable and Finite.
        player: The player whose utility is maximised.
        config: Search parameters.

    Attributes:
        nodes_visited: Nodes evaluated by the most recent search.
    """

    def __init__(self, game: Any, player: int, config: SearchConfig | None = None) -> None:
        if not isinstance(game, Playable) or not isinstance(game, Finite):
            raise TypeError(f"minimax needs a playable, finite game, got {type(game).__name__}")
        stage = game
        while isinstance(stage, Repeated):
            stage = stage.stage_game
        if not isinstance(stage, Finite):
            raise TypeError(f"minimax needs a finite stage game, got {type(stage).__name__}")
        self.game = game
        self.player = check_player(player, game.num_players)
        self.config = config if config is not None else SearchConfig()
        self.nodes_visited = 0
        self._deadline: float | None = None

    @classmethod
    def total(cls, game: Any, player: int) -> Minimax:
        """A search with no depth limit: always explores the whole tree."""
        return cls(game, player, SearchConfig(max_depth=None))

    # ── Public API ───────────────────────────────────────────────────────────

    def value(self, node: GameTree | None = None) -> float:
        """Minimax value of `node` (the game's root by default) for the player."""
        root = self._prepare(node)
        result = self._value(root, -math.inf, math.inf, 0)
        logger.debug("minimax: value %s after %d nodes", result, self.nodes_visited)
        return result

    def best_move(self, node: GameTree | None = None) -> Any:
        """The move maximising the player's minimax value at `node`.

        The player is moved to the front of any simultaneous turn, so at a
        joint Turn the search chooses their move first and assumes the other
        players respond to it.

        Raises:
            ValueError: If it is not the player's turn at `node`.
        """
        root = self._prepare(node)
        if not isinstance(root, Turn) or root.to_move[0] != self.player:
            raise ValueError(f"it is not player {self.player}'s turn at this node")

        best, best_value = None, -math.inf
        alpha, beta = -math.inf, math.inf
        for move in self.game.possible_moves(self.player, root.state):
            child = self._advance(root, move)
            child_value = self._value(child, alpha, beta, 1)
            if best is None or child_value > best_value:
                best, best_value = move, child_value
            if self.config.prune:
                alpha = max(alpha, best_value)
        if best is None:
            raise MalformedGameError(f"player {self.player} has no possible moves at {root.state!r}")
        logger.debug("minimax: best move %r (value %s) after %d nodes", best, best_value, self.nodes_visited)
        return best

    def as_strategy(self) -> Callable[[Context], Any]:
        """A strategy playing best_move() at the node it is asked about."""
        return lambda context: self.best_move(context.location)

    # ── Search ───────────────────────────────────────────────────────────────

    def _prepare(self, node: GameTree | None) -> GameTree:
        self.nodes_visited = 0
        timeout = self.config.timeout
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        if node is None:
            node = self.game.game_tree()
        return sequentialize(node, prioritize=self.player)

    def _check_limits(self) -> None:
        event = self.config.cancel_event
        if event is not None and event.is_set():
            raise SearchCancelled(f"search cancelled after {self.nodes_visited} nodes")
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchCancelled(
                f"search exceeded {self.config.timeout}s after {self.nodes_visited} nodes"
            )

    def _advance(self, node: Turn, move: Any) -> GameTree:
        try:
            return node.advance((move,))
        except InvalidMove as err:
            raise MalformedGameError(
                f"malformed game: possible move {move!r} of player {err.player} was refused"
            ) from err

    def _cutoff(self, depth: int) -> bool:
        return self.config.max_depth is not None and depth >= self.config.max_depth

    def _expand(self, node: GameTree, alpha: float, beta: float, depth: int) -> float | _Frame:
        """Value of `node` if it needs no children, else a frame to search them."""
        self._check_limits()
        self.nodes_visited += 1

        if isinstance(node, End):
            return float(node.outcome.payoff[self.player])

        if isinstance(node, Chance):
            if self._cutoff(depth):
                return float(self.config.heuristic(node.state))
            raise NotImplementedError("minimax over chance nodes is not supported")

        if not isinstance(node, Turn):
            raise MalformedGameError(f"not a game tree node: {node!r}")
        if len(node.to_move) != 1:
            raise MalformedGameError(f"expected a sequentialized turn, got movers {list(node.to_move)}")

        if self._cutoff(depth):
            return float(self.config.heuristic(node.state))

        mover = node.to_move[0]
        moves = list(self.game.possible_moves(mover, node.state))
        if not moves:
            raise MalformedGameError(f"player {mover} has no possible moves at {node.state!r}")
        if self.config.prune and alpha >= beta:
            return alpha if mover == self.player else beta

        return _Frame(node, alpha, beta, depth, mover == self.player, moves)

    def _value(self, node: GameTree, alpha: float, beta: float, depth: int) -> float:
        # Explicit stack: game length is bounded by memory, not by the
        # interpreter's recursion limit.
        expanded = self._expand(node, alpha, beta, depth)
        if not isinstance(expanded, _Frame):
            return expanded

        stack = [expanded]
        while True:
            frame = stack[-1]
            move = next(frame.moves, _EXHAUSTED)
            if move is _EXHAUSTED:
                stack.pop()
                if not stack:
                    return frame.value
                child_value = frame.value
                frame = stack[-1]
            else:
                child = self._advance(frame.node, move)
                expanded = self._expand(child, frame.alpha, frame.beta, frame.depth + 1)
                if isinstance(expanded, _Frame):
                    stack.append(expanded)
                    continue
                child_value = expanded
            frame.update(child_value, self.config.prune)


_EXHAUSTED = object()


class _Frame:
    """A Turn whose children are being searched."""

    __slots__ = ("node", "alpha", "beta", "depth", "maximizing", "moves", "value")

    def __init__(
        self, node: Turn, alpha: float, beta: float, depth: int, maximizing: bool, moves: list
    ) -> None:
        self.node = node
        self.alpha = alpha
        self.beta = beta
        self.depth = depth
        self.maximizing = maximizing
        self.moves: Iterator[Any] = iter(moves)
        self.value = -math.inf if maximizing else math.inf

    def update(self, child_value: float, prune: bool) -> None:
        """Fold one child's value in; skip the remaining moves on a cutoff."""
        if self.maximizing:
            self.value = max(self.value, child_value)
            if prune:
                self.alpha = max(self.alpha, self.value)
                if self.value >= self.beta:
                    logger.debug("minimax: beta cutoff at depth %d", self.depth)
                    self.moves = iter(())
        else:
            self.value = min(self.value, child_value)
            if prune:
                self.beta = min(self.beta, self.value)
                if self.value <= self.alpha:
                    logger.debug("minimax: alpha cutoff at depth %d", self.depth)
                    self.moves = iter(())
