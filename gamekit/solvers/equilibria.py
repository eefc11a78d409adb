"""Pure-strategy solution concepts for finite normal-form games.

Stability
---------
  unilaterally_improve(game, p, profile)
      Best move p could switch to, holding every other player fixed. Scans
      only the adjacent slice of the outcome space (|moves_p| - 1 outcomes).
      The first strictly greatest utility wins; ties keep the earlier move.

  is_stable / pure_nash_equilibria
      A profile is a pure Nash equilibrium iff no player can unilaterally
      improve. Enumeration cost: O(|profiles| x players x moves-per-player).

Efficiency
~~~~~~~~~~
  pareto_improve(game, profile)
      Among outcomes that Pareto-improve on profile's payoff, the one with the
      strictly largest total improvement (first seen wins ties).

  is_pareto_optimal / pareto_optimal_solutions
      A profile is Pareto optimal iff nothing Pareto-improves on it.

Invalid starting profiles are reported with logger.error and yield None.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from gamekit.engine.normal import Normal
from gamekit.engine.players import check_player
from gamekit.engine.profile import Profile

logger = logging.getLogger(__name__)


# ─── Nash equilibria ──────────────────────────────────────────────────────────


def unilaterally_improve(game: Normal, player: int, profile: Sequence[Any]) -> Any | None:
    """The move that most improves `player`'s utility if only they deviate.

    Args:
        game:    A finite normal-form game.
        player:  The deviating player.
        profile: The starting profile.

    Returns:
        The improving move, or None if no deviation strictly improves (or
        the profile is invalid).
    """
    check_player(player, game.num_players)
    profile = Profile(profile)
    if not game.is_valid_profile(profile):
        logger.error("unilaterally_improve: invalid initial profile %r", profile)
        return None

    best_move = None
    best_util = game.payoff(profile)[player]
    for outcome in game.possible_outcomes().adjacent(player, profile):
        util = outcome.payoff[player]
        if util > best_util:
            best_move = outcome.profile[player]
            best_util = util
    return best_move


def is_stable(game: Normal, profile: Sequence[Any]) -> bool:
    """True if no player can improve by deviating on their own."""
    return all(unilaterally_improve(game, p, profile) is None for p in range(game.num_players))


def pure_nash_equilibria(game: Normal) -> list[Profile]:
    """All pure-strategy Nash equilibria, in row-major profile order.

    Examples:
        >>> pd = Normal.symmetric(['C', 'D'], [2, 0, 3, 1])
        >>> pure_nash_equilibria(pd)
        [Profile('D', 'D')]
    """
    return [profile for profile in game.possible_profiles() if is_stable(game, profile)]


# ─── Pareto optimality ────────────────────────────────────────────────────────


def pareto_improve(game: Normal, profile: Sequence[Any]) -> Profile | None:
    """The profile giving the largest Pareto improvement over `profile`, if any."""
    profile = Profile(profile)
    if not game.is_valid_profile(profile):
        logger.error("pareto_improve: invalid initial profile %r", profile)
        return None

    payoff = game.payoff(profile)
    best_profile = None
    best_improvement = 0
    for outcome in game.possible_outcomes():
        improvement = payoff.pareto_improvement(outcome.payoff)
        if improvement is not None and improvement > best_improvement:
            best_profile = outcome.profile
            best_improvement = improvement
    return best_profile


def is_pareto_optimal(game: Normal, profile: Sequence[Any]) -> bool:
    return pareto_improve(game, profile) is None


def pareto_optimal_solutions(game: Normal) -> list[Profile]:
    """All Pareto optimal profiles, in row-major profile order."""
    return [profile for profile in game.possible_profiles() if is_pareto_optimal(game, profile)]
