"""Printed reports on the solution concepts of a normal-form game.

build_report(game) computes everything once; the print functions format it:

    print_summary(report)      — dimensions, zero-sum flag, counts
    print_payoff_table(game)   — every profile with its payoff
    print_equilibria(report)   — pure Nash equilibria and Pareto optimal profiles
    print_dominated(report)    — dominated moves per player
    print_report(game)         — all of the above
"""

from __future__ import annotations

from dataclasses import dataclass

from gamekit.engine.normal import Normal
from gamekit.engine.players import PerPlayer
from gamekit.engine.profile import Profile
from gamekit.solvers.dominance import dominated_moves
from gamekit.solvers.equilibria import pareto_optimal_solutions, pure_nash_equilibria

_RULE: str = "=" * 56


@dataclass
class NormalFormReport:
    """Solution concepts of one normal-form game.

    Attributes:
        dimensions:      Number of moves per player.
        is_zero_sum:     True if every outcome's payoff sums to zero.
        nash_equilibria: Pure Nash equilibria in row-major order.
        pareto_optimal:  Pareto optimal profiles in row-major order.
        dominated:       Per player, the list of Dominated relations.
    """

    dimensions: PerPlayer
    is_zero_sum: bool
    nash_equilibria: list[Profile]
    pareto_optimal: list[Profile]
    dominated: PerPlayer

    @property
    def num_profiles(self) -> int:
        total = 1
        for n in self.dimensions:
            total *= n
        return total


def build_report(game: Normal) -> NormalFormReport:
    return NormalFormReport(
        dimensions=game.dimensions(),
        is_zero_sum=game.is_zero_sum(),
        nash_equilibria=pure_nash_equilibria(game),
        pareto_optimal=pareto_optimal_solutions(game),
        dominated=dominated_moves(game),
    )


def _fmt_profile(profile: Profile) -> str:
    return "(" + ", ".join(str(m) for m in profile) + ")"


# ─── Public report functions ──────────────────────────────────────────────────


def print_summary(report: NormalFormReport) -> None:
    dims = " x ".join(str(n) for n in report.dimensions)
    print(_RULE)
    print("Normal-Form Game Summary")
    print(_RULE)
    print(f"  Players:          {len(report.dimensions)}")
    print(f"  Dimensions:       {dims}  ({report.num_profiles} profiles)")
    print(f"  Zero-sum:         {'yes' if report.is_zero_sum else 'no'}")
    print(f"  Nash equilibria:  {len(report.nash_equilibria)}")
    print(f"  Pareto optimal:   {len(report.pareto_optimal)}")


def print_payoff_table(game: Normal) -> None:
    """Print every outcome, marking pure Nash equilibria with '*'."""
    nash = set(pure_nash_equilibria(game))
    print(_RULE)
    print("Payoff Table  (* = pure Nash equilibrium)")
    print(_RULE)
    for outcome in game.possible_outcomes():
        mark = "*" if outcome.profile in nash else " "
        payoff = ", ".join(str(u) for u in outcome.payoff)
        print(f"  {mark} {_fmt_profile(outcome.profile):<24} -> [{payoff}]")


def print_equilibria(report: NormalFormReport) -> None:
    print(_RULE)
    print("Solution Concepts")
    print(_RULE)
    print("  Pure Nash equilibria:")
    if not report.nash_equilibria:
        print("    (none)")
    for profile in report.nash_equilibria:
        optimal = "  [Pareto optimal]" if profile in report.pareto_optimal else ""
        print(f"    {_fmt_profile(profile)}{optimal}")
    print("  Pareto optimal profiles:")
    for profile in report.pareto_optimal:
        print(f"    {_fmt_profile(profile)}")


def print_dominated(report: NormalFormReport) -> None:
    print(_RULE)
    print("Dominated Moves")
    print(_RULE)
    for player, relations in enumerate(report.dominated):
        if not relations:
            print(f"  P{player}: none")
            continue
        for relation in relations:
            print(f"  P{player}: {relation}")


def print_report(game: Normal) -> NormalFormReport:
    """Print the full report and return it."""
    report = build_report(game)
    print_summary(report)
    print()
    print_payoff_table(game)
    print()
    print_equilibria(report)
    print()
    print_dominated(report)
    return report
