"""
Tests for gamekit/engine/tree.py

Covers:
    - Builders: arity validation, single-move and profile continuations
    - Turn.advance / Chance.advance
    - sequentialize(): chain shape, equivalence with the original continuation
      for every move combination, prioritize rotation, laziness below the turn
"""

from __future__ import annotations

import itertools

import pytest

from gamekit.engine.distribution import Distribution
from gamekit.engine.errors import InvalidMove, MalformedGameError
from gamekit.engine.profile import Profile
from gamekit.engine.tree import (
    Chance,
    End,
    Turn,
    all_players,
    chance,
    end,
    player,
    players,
    sequentialize,
    state_of,
)

MOVES = ([0, 1, 2], ["a", "b", "c"], [True, False])


def three_player_turn() -> Turn:
    """A 3x3x2 simultaneous turn whose End records exactly the moves received."""

    def next(state, moves):
        if moves[1] == "c" and moves[0] == 2:
            raise InvalidMove(1, "c")
        return end(state, moves)

    return players("root", (0, 1, 2), next)


def play_chain(node, moves):
    """Feed one move per single-player Turn, in order, until a non-Turn node."""
    moves = list(moves)
    while isinstance(node, Turn) and moves:
        assert len(node.to_move) == 1
        node = node.advance((moves.pop(0),))
    return node


class TestBuilders:
    def test_players_rejects_empty(self):
        with pytest.raises(ValueError):
            players(None, (), lambda s, m: end(s, m))

    def test_players_rejects_duplicates(self):
        with pytest.raises(ValueError):
            players(None, (0, 1, 0), lambda s, m: end(s, m))

    def test_advance_checks_arity(self):
        node = players(None, (0, 1), lambda s, m: end(s, m))
        with pytest.raises(ValueError):
            node.advance(("only-one",))

    def test_player_passes_single_move(self):
        node = player("s", 1, lambda state, move: end(state, move))
        assert node.to_move == (1,)
        assert node.advance(("x",)).outcome == "x"

    def test_all_players_passes_profile(self):
        node = all_players("s", 2, lambda state, profile: end(state, profile))
        result = node.advance(("C", "D"))
        assert isinstance(result.outcome, Profile)
        assert result.outcome == Profile(["C", "D"])

    def test_chance_advance(self):
        node = chance(0, Distribution.flat([1, 2]), lambda state, move: end(state + move, move))
        assert node.advance(2).state == 2

    def test_state_of(self):
        assert state_of(end("final", None)) == "final"
        with pytest.raises(MalformedGameError):
            state_of("not a node")

    def test_nodes_are_frozen(self):
        node = end(1, 2)
        with pytest.raises(AttributeError):
            node.state = 3


class TestSequentialize:
    def test_end_passes_through(self):
        node = end("s", "o")
        assert sequentialize(node) is node

    def test_chain_is_single_player(self):
        seq = sequentialize(three_player_turn())
        assert isinstance(seq, Turn)
        assert seq.to_move == (0,)
        second = seq.advance((0,))
        assert second.to_move == (1,)
        assert second.state == "root"
        assert second.advance(("a",)).to_move == (2,)

    def test_round_trip_every_combination(self):
        original = three_player_turn()
        seq = sequentialize(original)
        for moves in itertools.product(*MOVES):
            if moves[0] == 2 and moves[1] == "c":
                continue
            direct = original.advance(moves)
            via_chain = play_chain(seq, moves)
            assert isinstance(via_chain, End)
            assert via_chain == direct

    def test_invalid_move_surfaces_at_last_link(self):
        seq = sequentialize(three_player_turn())
        with pytest.raises(InvalidMove) as info:
            play_chain(seq, (2, "c", True))
        assert info.value.player == 1

    def test_prioritize_moves_player_first(self):
        seq = sequentialize(three_player_turn(), prioritize=2)
        assert seq.to_move == (2,)
        assert seq.advance((True,)).to_move == (0,)

    def test_prioritize_round_trip_restores_order(self):
        original = three_player_turn()
        seq = sequentialize(original, prioritize=1)
        for m0, m1, m2 in itertools.product(*MOVES):
            if m0 == 2 and m1 == "c":
                continue
            # chain order is P1, P2, P0
            via_chain = play_chain(seq, (m1, m2, m0))
            assert via_chain == original.advance((m0, m1, m2))

    def test_prioritize_rotates_to_move(self):
        node = players(None, (0, 1, 2, 3), lambda s, m: end(s, m))
        seq = sequentialize(node, prioritize=2)
        order = []
        while isinstance(seq, Turn):
            order.append(seq.to_move[0])
            seq = seq.advance((f"m{seq.to_move[0]}",))
        assert order == [2, 3, 0, 1]
        assert seq.outcome == ("m0", "m1", "m2", "m3")

    def test_prioritize_absent_player_keeps_order(self):
        node = players(None, (0, 1), lambda s, m: end(s, m))
        seq = sequentialize(node, prioritize=5)
        assert seq.to_move == (0,)

    def test_nested_turns_are_sequentialized(self):
        def first(state, moves):
            return players(moves, (0, 1), lambda s, m: end(s, (s, m)))

        seq = sequentialize(players(None, (0, 1), first))
        node = play_chain(seq, ["a", "b"])
        assert isinstance(node, Turn)
        assert node.to_move == (0,)
        result = play_chain(node, ["c", "d"])
        assert result.outcome == (("a", "b"), ("c", "d"))

    def test_chance_children_are_sequentialized(self):
        root = chance(None, Distribution.flat([1]), lambda s, m: players(m, (0, 1), lambda s2, ms: end(s2, ms)))
        seq = sequentialize(root)
        assert isinstance(seq, Chance)
        child = seq.advance(1)
        assert child.to_move == (0,)

    def test_non_node_raises(self):
        with pytest.raises(MalformedGameError):
            sequentialize(42)
