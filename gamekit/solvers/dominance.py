"""Dominated-move detection for finite normal-form games."""

from __future__ import annotations

from typing import Any, NamedTuple

from gamekit.engine.normal import Normal
from gamekit.engine.players import PerPlayer, check_player


class Dominated(NamedTuple):
    """`dominated` is never better than `dominator` for the same player.

    Strict domination means `dominated` is worse in every pairing; weak
    domination allows ties.
    """
    dominated: Any
    dominator: Any
    is_strict: bool

    @classmethod
    def strict(cls, dominated: Any, dominator: Any) -> Dominated:
        return cls(dominated, dominator, True)

    @classmethod
    def weak(cls, dominated: Any, dominator: Any) -> Dominated:
        return cls(dominated, dominator, False)

    def __str__(self) -> str:
        kind = "strictly" if self.is_strict else "weakly"
        return f"{self.dominated!r} is {kind} dominated by {self.dominator!r}"


def dominated_moves_for(game: Normal, player: int) -> list[Dominated]:
    """Every (dominated, dominator) pair among `player`'s moves.

    For each ordered pair of distinct moves, the outcomes where `player`
    plays each are walked in lockstep; the other players' moves line up
    because both slices are enumerated in the same row-major order.

    Examples:
        >>> g = Normal.from_payoff_vec(
        ...     [['A', 'B', 'C'], ['D', 'E']],
        ...     [(3, 3), (3, 5), (2, 0), (3, 1), (4, 0), (2, 1)],
        ... )
        >>> dominated_moves_for(g, 1)
        [Dominated(dominated='D', dominator='E', is_strict=True)]
    """
    check_player(player, game.num_players)
    moves = game.possible_moves_for_player(player)
    outcomes = game.possible_outcomes()

    dominated = []
    for maybe_ted in moves:
        ted_outcomes = outcomes.include(player, maybe_ted)
        for maybe_tor in moves:
            if maybe_ted == maybe_tor:
                continue
            tor_outcomes = outcomes.include(player, maybe_tor)

            is_dominated = True
            is_strict = True
            for ted, tor in zip(ted_outcomes, tor_outcomes):
                ted_util = ted.payoff[player]
                tor_util = tor.payoff[player]
                if ted_util > tor_util:
                    is_dominated = False
                    break
                if ted_util == tor_util:
                    is_strict = False
            if is_dominated:
                dominated.append(Dominated(maybe_ted, maybe_tor, is_strict))
    return dominated


def dominated_moves(game: Normal) -> PerPlayer:
    """dominated_moves_for() for every player."""
    return PerPlayer.generate(game.num_players, lambda p: dominated_moves_for(game, p))
