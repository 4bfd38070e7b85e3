"""A single draw-and-guess cycle and its state machine.

Status transitions::

    SETTING_ANSWER -> DRAWING -> FINISHED

``FINISHED`` is reached either by a correct guess or by the external timer
calling :meth:`Turn.finish_turn_by_timeout`. Turns are mutated in place; every
mutating method returns the turn itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from .errors import ErrorCode, ValidationError, require
from .values import Answer, PlayerId

TURN_NUMBER_RANGE = (1, 10)
TURN_TIME_LIMIT_RANGE = (1, 300)


class TurnStatus(str, Enum):
    """Turn states."""

    # Written by older deployments only; new turns start at SETTING_ANSWER.
    NOT_STARTED = "not_started"
    SETTING_ANSWER = "setting_answer"
    DRAWING = "drawing"
    FINISHED = "finished"


@dataclass
class Turn:
    """One drawer, one secret answer, and the players who guessed it."""

    turn_number: int
    drawer_id: PlayerId
    answer: Optional[Answer]
    status: TurnStatus
    time_limit_seconds: int
    started_at: datetime
    ended_at: Optional[datetime] = None
    correct_player_ids: List[PlayerId] = field(default_factory=list)

    def __post_init__(self) -> None:
        low, high = TURN_NUMBER_RANGE
        if isinstance(self.turn_number, bool) or not isinstance(self.turn_number, int) or not (
            low <= self.turn_number <= high
        ):
            raise ValidationError(
                ErrorCode.TURN_INVALID_TURN_NUMBER,
                f"Turn number must be between {low} and {high}",
            )
        require(self.drawer_id, ErrorCode.TURN_INVALID_DRAWER_ID, "Drawer id")
        low, high = TURN_TIME_LIMIT_RANGE
        if isinstance(self.time_limit_seconds, bool) or not isinstance(self.time_limit_seconds, int) or not (
            low <= self.time_limit_seconds <= high
        ):
            raise ValidationError(
                ErrorCode.TURN_INVALID_TIME_LIMIT,
                f"Turn time limit must be between {low} and {high} seconds",
            )
        if self.answer is not None and not isinstance(self.answer, Answer):
            # Answer() rejects non-strings and anything outside hiragana.
            self.answer = Answer(self.answer)
        self.status = TurnStatus(self.status)
        self.correct_player_ids = list(dict.fromkeys(self.correct_player_ids or []))

    @classmethod
    def create_initial(cls, drawer_id: PlayerId, time_limit_seconds: int, started_at: datetime) -> "Turn":
        """Return turn #1 waiting for the drawer to choose an answer."""

        return cls(
            turn_number=1,
            drawer_id=drawer_id,
            answer=None,
            status=TurnStatus.SETTING_ANSWER,
            time_limit_seconds=time_limit_seconds,
            started_at=started_at,
        )

    @property
    def is_finished(self) -> bool:
        return self.status == TurnStatus.FINISHED

    def set_answer_and_start_drawing(self, answer: Union[Answer, str], start_time: datetime) -> "Turn":
        require(answer, ErrorCode.TURN_MISSING_ANSWER, "Answer")
        candidate = answer if isinstance(answer, Answer) else Answer(answer)
        if candidate.is_empty:
            raise ValidationError(ErrorCode.TURN_EMPTY_ANSWER, "The answer of a turn must not be empty")

        self.answer = candidate
        self.status = TurnStatus.DRAWING
        self.started_at = start_time
        return self

    def matches(self, guess: Union[Answer, str]) -> bool:
        """Return True when ``guess`` equals the secret answer after trimming."""

        if self.answer is None:
            return False
        return self.answer.is_correct(guess)

    def check_answer(self, guess: Union[Answer, str], player_id: PlayerId, at: datetime) -> "Turn":
        """Finish the turn when ``guess`` is correct; otherwise leave it untouched."""

        require(guess, ErrorCode.TURN_MISSING_ANSWER, "Guess")
        require(player_id, ErrorCode.TURN_MISSING_PLAYER_ID, "Player id")

        if not self.matches(guess):
            return self

        self.add_correct_player(player_id)
        self.status = TurnStatus.FINISHED
        self.ended_at = at
        return self

    def finish_turn_by_timeout(self, at: datetime) -> "Turn":
        self.status = TurnStatus.FINISHED
        self.ended_at = at
        return self

    def add_correct_player(self, player_id: PlayerId) -> "Turn":
        require(player_id, ErrorCode.TURN_MISSING_PLAYER_ID, "Player id")
        if player_id not in self.correct_player_ids:
            self.correct_player_ids.append(player_id)
        return self
