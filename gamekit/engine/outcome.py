"""
Game outcomes: a record of the moves played paired with the resulting payoff.

    SimultaneousOutcome — record is a Profile (one move per player)
    SequentialOutcome   — record is a Transcript (ordered plies)
    History             — outcome of a repeated game: every stage outcome
                          plus the running cumulative score
"""

from __future__ import annotations

from typing import Any, Iterator, NamedTuple

from .payoff import Payoff
from .profile import Profile, Transcript


class SimultaneousOutcome(NamedTuple):
    """A (potential) outcome of a simultaneous game: a cell of the payoff table."""
    profile: Profile
    payoff: Payoff

    @property
    def record(self) -> Profile:
        return self.profile


class SequentialOutcome(NamedTuple):
    """A (potential) outcome of a sequential game: a path through the tree."""
    transcript: Transcript
    payoff: Payoff

    @property
    def record(self) -> Transcript:
        return self.transcript


class History:
    """Append-only record of completed stage-game outcomes in a repeated game.

    Instances are immutable: add() returns a new History sharing the previous
    outcomes, so a History can be published into several tree nodes at once.

    Examples:
        >>> h = History.empty(2)
        >>> h = h.add(SimultaneousOutcome(Profile(['C', 'D']), Payoff([0, 3])))
        >>> h = h.add(SimultaneousOutcome(Profile(['D', 'D']), Payoff([1, 1])))
        >>> len(h), h.score
        (2, Payoff(1, 4))
    """

    __slots__ = ("_outcomes", "_score")

    def __init__(self, outcomes: tuple = (), score: Payoff | None = None) -> None:
        self._outcomes = tuple(outcomes)
        if score is None:
            if not self._outcomes:
                raise ValueError("an empty History needs an explicit zero score")
            score = Payoff.zeros(len(self._outcomes[0].payoff))
            for outcome in self._outcomes:
                score = score + outcome.payoff
        self._score = Payoff(score)

    @classmethod
    def empty(cls, num_players: int) -> History:
        return cls((), Payoff.zeros(num_players))

    def add(self, outcome: Any) -> History:
        """Return a new history with one more completed outcome."""
        return History(self._outcomes + (outcome,), self._score + outcome.payoff)

    @property
    def outcomes(self) -> tuple:
        return self._outcomes

    @property
    def score(self) -> Payoff:
        """Element-wise sum of every completed outcome's payoff."""
        return self._score

    @property
    def payoff(self) -> Payoff:
        return self._score

    @property
    def record(self) -> Transcript:
        """Every ply of every completed iteration, in play order."""
        transcript = Transcript()
        for outcome in self._outcomes:
            record = outcome.record
            if isinstance(record, Profile):
                record = record.to_transcript()
            transcript = transcript.extend(record)
        return transcript

    def moves_for_player(self, player: int) -> list[Any]:
        """The move the player made in each completed simultaneous stage game."""
        return [outcome.record[player] for outcome in self._outcomes]

    def last(self) -> Any | None:
        return self._outcomes[-1] if self._outcomes else None

    def __len__(self) -> int:
        return len(self._outcomes)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._outcomes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, History):
            return NotImplemented
        return self._outcomes == other._outcomes and self._score == other._score

    def __hash__(self) -> int:
        return hash((self._outcomes, self._score))

    def __repr__(self) -> str:
        return f"History(len={len(self._outcomes)}, score={self._score!r})"
