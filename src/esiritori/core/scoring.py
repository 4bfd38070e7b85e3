"""Score records and the policy that produces them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable

from .errors import ErrorCode, ValidationError, require
from .turn import Turn
from .values import PlayerId

SCORE_NUMBER_RANGE = (1, 10)
DEFAULT_CORRECT_ANSWER_POINTS = 10
DEFAULT_DRAWER_PENALTY_POINTS = 5


class ScoreReason(str, Enum):
    """Why points were recorded."""

    CORRECT_ANSWER = "correct_answer"
    DRAWER_PENALTY = "drawer_penalty"


def _check_number(value: object, code: ErrorCode, label: str) -> None:
    low, high = SCORE_NUMBER_RANGE
    if isinstance(value, bool) or not isinstance(value, int) or not (low <= value <= high):
        raise ValidationError(code, f"{label} must be between {low} and {high}")


@dataclass(frozen=True)
class ScoreHistory:
    """An append-only scoring event."""

    player_id: PlayerId
    round_number: int
    turn_number: int
    points: int
    reason: ScoreReason
    timestamp: datetime

    def __post_init__(self) -> None:
        require(self.player_id, ErrorCode.SCORE_HISTORY_INVALID_PLAYER_ID, "Player id")
        _check_number(self.round_number, ErrorCode.SCORE_HISTORY_INVALID_ROUND_NUMBER, "Round number")
        _check_number(self.turn_number, ErrorCode.SCORE_HISTORY_INVALID_TURN_NUMBER, "Turn number")
        if isinstance(self.points, bool) or not isinstance(self.points, int) or self.points < 1:
            raise ValidationError(ErrorCode.SCORE_HISTORY_INVALID_POINTS, "Points must be a positive integer")
        object.__setattr__(self, "reason", ScoreReason(self.reason))

    @property
    def signed_points(self) -> int:
        """Points as they count towards a total; penalties subtract."""

        return -self.points if self.reason == ScoreReason.DRAWER_PENALTY else self.points


@dataclass(frozen=True)
class ScoringPolicy:
    """Point values used when turns resolve."""

    correct_answer_points: int = DEFAULT_CORRECT_ANSWER_POINTS
    drawer_penalty_points: int = DEFAULT_DRAWER_PENALTY_POINTS

    def __post_init__(self) -> None:
        if self.correct_answer_points < 1 or self.drawer_penalty_points < 1:
            raise ValueError("Scoring points must be positive integers")

    def correct_answer(self, player_id: PlayerId, round_number: int, turn: Turn, at: datetime) -> ScoreHistory:
        return ScoreHistory(
            player_id=player_id,
            round_number=round_number,
            turn_number=turn.turn_number,
            points=self.correct_answer_points,
            reason=ScoreReason.CORRECT_ANSWER,
            timestamp=at,
        )

    def drawer_penalty(self, round_number: int, turn: Turn, at: datetime) -> ScoreHistory:
        return ScoreHistory(
            player_id=turn.drawer_id,
            round_number=round_number,
            turn_number=turn.turn_number,
            points=self.drawer_penalty_points,
            reason=ScoreReason.DRAWER_PENALTY,
            timestamp=at,
        )


def tally(player_ids: Iterable[PlayerId], histories: Iterable[ScoreHistory]) -> Dict[PlayerId, int]:
    """Sum signed points per player, keeping ``player_ids`` order."""

    totals: Dict[PlayerId, int] = {player_id: 0 for player_id in player_ids}
    for record in histories:
        totals[record.player_id] = totals.get(record.player_id, 0) + record.signed_points
    return totals
