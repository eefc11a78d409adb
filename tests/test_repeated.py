"""
Tests for gamekit/engine/repeated.py and gamekit/engine/combinatorial.py

Covers:
    - Repeated: History length, cumulative score, remaining counter
    - History-aware strategies (tit-for-tat) via state_view
    - InvalidMove re-raised against the RepeatedState
    - Long repetitions do not recurse per iteration
    - Combinatorial (Nim): transcript recording, payoffs, invalid moves
"""

from __future__ import annotations

import pytest

from gamekit.engine.errors import InvalidMove
from gamekit.engine.outcome import History, SequentialOutcome
from gamekit.engine.payoff import Payoff
from gamekit.engine.play import periodic, play, pure
from gamekit.engine.profile import Ply
from gamekit.engine.repeated import Repeated, RepeatedState
from gamekit.engine.tree import End, Turn
from tests.conftest import Nim, profile


def tit_for_tat(context):
    last = context.state_view.history.last()
    return "C" if last is None else last.profile[context.their_index]


# ─── Repeated ─────────────────────────────────────────────────────────────────


class TestRepeated:
    def test_history_length_and_score(self, pd):
        history = play(Repeated(pd, 5), [pure("C"), pure("D")])
        assert isinstance(history, History)
        assert len(history) == 5
        assert history.score == Payoff([0, 15])

    def test_score_is_sum_of_iterations(self, pd):
        history = play(Repeated(pd, 4), [periodic([pure("C"), pure("D")]), pure("C")])
        total = Payoff.zeros(2)
        for outcome in history:
            total = total + outcome.payoff
        assert history.score == total == Payoff([10, 4])

    def test_single_repetition(self, pd):
        history = play(Repeated(pd, 1), [pure("D"), pure("D")])
        assert len(history) == 1
        assert history.payoff == Payoff([1, 1])

    def test_zero_repetitions_rejected(self, pd):
        with pytest.raises(ValueError):
            Repeated(pd, 0)

    def test_tit_for_tat_mirrors_opponent(self, pd):
        history = play(Repeated(pd, 4), [tit_for_tat, periodic([pure("D"), pure("C")])])
        assert history.moves_for_player(0) == ["C", "D", "C", "D"]
        assert history.moves_for_player(1) == ["D", "C", "D", "C"]

    def test_remaining_counts_down(self, pd):
        seen = []

        def spy(context):
            seen.append(context.state_view.remaining)
            return "C"

        play(Repeated(pd, 3), [spy, pure("C")])
        assert seen == [2, 1, 0]

    def test_final_node_carries_history(self, pd):
        root = Repeated(pd, 2).game_tree()
        assert isinstance(root, Turn)
        assert isinstance(root.state, RepeatedState)
        node = root.advance(("C", "C")).advance(("D", "C"))
        assert isinstance(node, End)
        assert node.outcome == node.state.history
        assert node.state.remaining == 0

    def test_invalid_move_carries_repeated_state(self, pd):
        moves = iter(["C", "C", "X"])
        with pytest.raises(InvalidMove) as info:
            play(Repeated(pd, 3), [lambda context: next(moves), pure("C")])
        err = info.value
        assert err.player == 0
        assert isinstance(err.state, RepeatedState)
        assert len(err.state.history) == 2

    def test_long_repetition(self, pd):
        history = play(Repeated(pd, 3000), [pure("D"), pure("D")])
        assert len(history) == 3000
        assert history.score == Payoff([3000, 3000])

    def test_is_valid_move_delegates(self, pd):
        game = Repeated(pd, 2)
        state = game.game_tree().state
        assert game.is_valid_move(state, 0, "C")
        assert not game.is_valid_move(state, 0, "Z")
        assert list(game.possible_moves(1, state)) == ["C", "D"]

    def test_repeated_sequential_game(self):
        history = play(Repeated(Nim((2,)), 2), [pure((0, 2)), pure((0, 1))])
        assert len(history) == 2
        assert history.score == Payoff([2, -2])
        assert history.record.moves_by_player(0) == [(0, 2), (0, 2)]


# ─── Combinatorial ────────────────────────────────────────────────────────────


class TestCombinatorial:
    def test_transcript_recorded(self):
        outcome = play(Nim((1, 1)), [pure((0, 1)), lambda ctx: (1, 1)])
        assert isinstance(outcome, SequentialOutcome)
        assert list(outcome.transcript) == [Ply(0, (0, 1)), Ply(1, (1, 1))]
        assert outcome.payoff == Payoff([-1, 1])

    def test_tree_alternates_players(self, nim_small):
        root = nim_small.game_tree()
        assert root.to_move == (0,)
        child = root.advance(((1, 1),))
        assert child.to_move == (1,)
        assert child.state == ((1, 1), 1)

    def test_invalid_move(self, nim_small):
        with pytest.raises(InvalidMove) as info:
            play(nim_small, [pure((0, 5)), pure((0, 1))])
        assert info.value.player == 0
        assert info.value.state == ((1, 2), 0)

    def test_game_end(self, nim_small):
        assert not nim_small.is_game_end(nim_small.initial_state())
        assert nim_small.is_game_end(((0, 0), 1))

    def test_is_valid_move(self, nim_small):
        state = nim_small.initial_state()
        assert nim_small.is_valid_move(state, 0, (1, 2))
        assert not nim_small.is_valid_move(state, 1, (1, 2))
        assert not nim_small.is_valid_move(state, 0, (0, 2))

    def test_empty_game_ends_immediately(self):
        outcome = play(Nim((0,)), [pure(None), pure(None)])
        assert len(outcome.transcript) == 0
        assert outcome.payoff == Payoff([-1, 1])
