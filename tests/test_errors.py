"""
Tests for gamekit/engine/errors.py

Covers:
    - InvalidMove: fields, message, with_state, equality
    - Exception hierarchy used by callers to tell recoverable errors apart
"""

from __future__ import annotations

import pytest

from gamekit.engine.errors import GameError, InvalidMove, MalformedGameError, PayoffTableError, SearchCancelled


class TestInvalidMove:
    def test_fields_and_message(self):
        err = InvalidMove(1, "X")
        assert err.player == 1
        assert err.move == "X"
        assert err.state is None
        assert "player 1" in str(err)
        assert "'X'" in str(err)

    def test_with_state_copies(self):
        err = InvalidMove(0, 3)
        attached = err.with_state("s")
        assert attached.state == "s"
        assert err.state is None
        assert attached == InvalidMove(0, 3, "s")

    def test_inequality(self):
        assert InvalidMove(0, 1) != InvalidMove(1, 1)
        assert InvalidMove(0, 1) != InvalidMove(0, 1, state="s")

    def test_equal_errors_hash_equal(self):
        assert InvalidMove(0, 1) == InvalidMove(0, True)
        assert hash(InvalidMove(0, 1)) == hash(InvalidMove(0, True))
        assert len({InvalidMove(0, 1), InvalidMove(0, True), InvalidMove(0, 1.0)}) == 1

    def test_is_recoverable_game_error(self):
        assert issubclass(InvalidMove, GameError)
        with pytest.raises(GameError):
            raise InvalidMove(0, None)


class TestHierarchy:
    def test_malformed_is_not_game_error(self):
        assert not issubclass(MalformedGameError, GameError)
        assert issubclass(MalformedGameError, RuntimeError)

    def test_payoff_table_error_is_value_error(self):
        assert issubclass(PayoffTableError, ValueError)

    def test_search_cancelled(self):
        assert issubclass(SearchCancelled, RuntimeError)
