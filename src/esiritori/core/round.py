"""Rounds group the turns of a game; only the active turn is kept."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .errors import ErrorCode, ValidationError, require
from .turn import Turn

ROUND_NUMBER_RANGE = (1, 10)


@dataclass
class Round:
    """A numbered round wrapping its current turn."""

    round_number: int
    current_turn: Turn
    started_at: datetime
    ended_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        low, high = ROUND_NUMBER_RANGE
        if isinstance(self.round_number, bool) or not isinstance(self.round_number, int) or not (
            low <= self.round_number <= high
        ):
            raise ValidationError(
                ErrorCode.ROUND_INVALID_ROUND_NUMBER,
                f"Round number must be between {low} and {high}",
            )
        require(self.current_turn, ErrorCode.ROUND_INVALID_CURRENT_TURN, "Current turn")

    @classmethod
    def create_initial(cls, turn: Turn, started_at: datetime) -> "Round":
        return cls(round_number=1, current_turn=turn, started_at=started_at)

    def create_next(self, turn: Turn, started_at: datetime) -> "Round":
        """Return the round that follows this one, opened with ``turn``."""

        return Round(round_number=self.round_number + 1, current_turn=turn, started_at=started_at)

    def set_turn(self, turn: Turn) -> "Round":
        require(turn, ErrorCode.ROUND_INVALID_CURRENT_TURN, "Current turn")
        self.current_turn = turn
        return self

    def set_start_time(self, started_at: datetime) -> "Round":
        self.started_at = started_at
        return self

    def set_end_time(self, ended_at: datetime) -> "Round":
        self.ended_at = ended_at
        return self
