"""
Tests for gamekit/analysis/strategy_report.py

Report building is checked against known solution concepts; the print
functions are checked for their headline content via capsys.
"""

from __future__ import annotations

from gamekit.analysis.strategy_report import (
    NormalFormReport,
    build_report,
    print_dominated,
    print_equilibria,
    print_payoff_table,
    print_report,
    print_summary,
)
from gamekit.solvers.dominance import Dominated
from tests.conftest import profile


class TestBuildReport:
    def test_prisoners_dilemma(self, pd):
        report = build_report(pd)
        assert isinstance(report, NormalFormReport)
        assert report.dimensions == (2, 2)
        assert report.num_profiles == 4
        assert not report.is_zero_sum
        assert report.nash_equilibria == [profile("D", "D")]
        assert profile("D", "D") not in report.pareto_optimal

    def test_dominated(self, dominated_game):
        report = build_report(dominated_game)
        assert report.dominated[0] == [Dominated.weak("B", "A")]
        assert report.dominated[1] == [Dominated.strict("D", "E")]

    def test_zero_sum(self, rps):
        assert build_report(rps).is_zero_sum


class TestPrinting:
    def test_summary(self, pd, capsys):
        print_summary(build_report(pd))
        out = capsys.readouterr().out
        assert "2 x 2" in out
        zero_sum_line = next(line for line in out.splitlines() if "Zero-sum:" in line)
        assert zero_sum_line.endswith("no")

    def test_payoff_table_marks_nash(self, pd, capsys):
        print_payoff_table(pd)
        lines = capsys.readouterr().out.splitlines()
        starred = [line for line in lines if line.strip().startswith("*")]
        assert len(starred) == 1
        assert "(D, D)" in starred[0]

    def test_equilibria_no_nash(self, rps, capsys):
        print_equilibria(build_report(rps))
        assert "(none)" in capsys.readouterr().out

    def test_dominated(self, dominated_game, capsys):
        print_dominated(build_report(dominated_game))
        out = capsys.readouterr().out
        assert "'B' is weakly dominated by 'A'" in out
        assert "'D' is strictly dominated by 'E'" in out

    def test_print_report_returns_report(self, stag_hunt, capsys):
        report = print_report(stag_hunt)
        assert report.nash_equilibria == [profile("C", "C"), profile("D", "D")]
        out = capsys.readouterr().out
        assert "[Pareto optimal]" in out
