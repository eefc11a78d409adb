"""
Move records: profiles (one move per player) and transcripts (move sequences).

A Profile records a simultaneous turn; a Transcript records the plies of a
sequential game, including moves of chance (player=None). Both are immutable.
"""

from __future__ import annotations

from typing import Any, Iterator, NamedTuple

from .players import PerPlayer


class Ply(NamedTuple):
    """A single move, played by a player or by chance (player is None)."""
    player: int | None
    move: Any


class Profile(PerPlayer):
    """One move for each player.

    Examples:
        >>> Profile(['C', 'D']).plies()
        [Ply(player=0, move='C'), Ply(player=1, move='D')]
    """

    def plies(self) -> list[Ply]:
        return [Ply(p, m) for p, m in enumerate(self)]

    def to_transcript(self) -> Transcript:
        return Transcript(self.plies())


class Transcript:
    """The ordered sequence of plies played so far in a game."""

    __slots__ = ("_plies",)

    def __init__(self, plies: Any = ()) -> None:
        self._plies: tuple[Ply, ...] = tuple(Ply(*ply) for ply in plies)

    @classmethod
    def from_profile(cls, profile: Profile) -> Transcript:
        return profile.to_transcript()

    # ── Growth (returns new transcripts) ─────────────────────────────────────

    def add(self, ply: Ply) -> Transcript:
        return Transcript(self._plies + (Ply(*ply),))

    def add_player_move(self, player: int, move: Any) -> Transcript:
        return self.add(Ply(player, move))

    def add_chance_move(self, move: Any) -> Transcript:
        return self.add(Ply(None, move))

    def extend(self, other: Transcript) -> Transcript:
        return Transcript(self._plies + tuple(other))

    # ── Queries ──────────────────────────────────────────────────────────────

    def moves_by(self, player: int | None) -> list[Any]:
        """All moves played by the given player, or by chance if player is None."""
        return [ply.move for ply in self._plies if ply.player == player]

    def moves_by_player(self, player: int) -> list[Any]:
        return self.moves_by(player)

    def moves_by_chance(self) -> list[Any]:
        return self.moves_by(None)

    def first_move_by_player(self, player: int) -> Any | None:
        moves = self.moves_by(player)
        return moves[0] if moves else None

    def last_move_by_player(self, player: int) -> Any | None:
        moves = self.moves_by(player)
        return moves[-1] if moves else None

    def to_profile(self, num_players: int) -> Profile | None:
        """Convert to a profile if the transcript holds exactly one move per player."""
        if len(self._plies) != num_players:
            return None
        moves = [self.first_move_by_player(p) for p in range(num_players)]
        if any(len(self.moves_by(p)) != 1 for p in range(num_players)):
            return None
        return Profile(moves)

    def __iter__(self) -> Iterator[Ply]:
        return iter(self._plies)

    def __len__(self) -> int:
        return len(self._plies)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transcript):
            return NotImplemented
        return self._plies == other._plies

    def __hash__(self) -> int:
        return hash(self._plies)

    def __repr__(self) -> str:
        return f"Transcript({list(self._plies)!r})"
