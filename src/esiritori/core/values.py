"""Immutable, self-validating value objects for the drawing game."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass

from .errors import ErrorCode, ValidationError

PLAYER_NAME_MAX_LENGTH = 20
ANSWER_MAX_LENGTH = 50
# Hiragana only (U+3041-U+3096).
ANSWER_PATTERN = re.compile(r"^[\u3041-\u3096]+$")

TIME_LIMIT_RANGE = (30, 300)
ROUND_COUNT_RANGE = (1, 10)
PLAYER_COUNT_RANGE = (2, 8)


def _clean_identifier(value: object, code: ErrorCode, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(code, f"{label} must be a non-empty string")
    return value.strip()


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class GameId:
    """Opaque identifier of a game."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _clean_identifier(self.value, ErrorCode.GAME_INVALID_ID, "Game id"))

    @classmethod
    def new_id(cls) -> "GameId":
        return cls(uuid.uuid4().hex)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PlayerId:
    """Opaque identifier of a player."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _clean_identifier(self.value, ErrorCode.PLAYER_INVALID_ID, "Player id"))

    @classmethod
    def new_id(cls) -> "PlayerId":
        return cls(uuid.uuid4().hex[:12])

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PlayerName:
    """Display name of a player, 1-20 characters after trimming.

    Length is counted in code points so names written in kana or kanji get the
    same budget as ASCII names.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError(ErrorCode.PLAYER_INVALID_NAME, "Player name must not be empty")
        trimmed = self.value.strip()
        if len(trimmed) > PLAYER_NAME_MAX_LENGTH:
            raise ValidationError(
                ErrorCode.PLAYER_INVALID_NAME,
                f"Player name must be at most {PLAYER_NAME_MAX_LENGTH} characters",
            )
        object.__setattr__(self, "value", trimmed)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Answer:
    """The secret word of a turn.

    An answer is at most 50 hiragana characters. The empty answer is a valid
    value of its own; a turn whose answer has not been chosen yet holds
    ``None`` instead.

    >>> Answer(" ねこ ").value
    'ねこ'
    >>> Answer("ねこ").is_correct(" ねこ")
    True
    >>> Answer("").is_empty
    True
    """

    value: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValidationError(ErrorCode.ANSWER_INVALID_CHARACTERS, "Answer must be a string")
        trimmed = self.value.strip()
        if len(trimmed) > ANSWER_MAX_LENGTH:
            raise ValidationError(
                ErrorCode.ANSWER_TOO_LONG,
                f"Answer must be at most {ANSWER_MAX_LENGTH} characters",
            )
        if trimmed and not ANSWER_PATTERN.match(trimmed):
            raise ValidationError(ErrorCode.ANSWER_INVALID_CHARACTERS, "Answer must be written in hiragana")
        object.__setattr__(self, "value", trimmed)

    @classmethod
    def empty(cls) -> "Answer":
        return cls("")

    @property
    def is_empty(self) -> bool:
        return not self.value

    def is_correct(self, guess: "Answer | str") -> bool:
        """Exact match after trimming both sides; empty guesses never match."""

        candidate = guess.value if isinstance(guess, Answer) else str(guess).strip()
        if not candidate or self.is_empty:
            return False
        return self.value == candidate

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GameSettings:
    """Settings chosen by the host when the room is created."""

    time_limit_seconds: int
    round_count: int
    player_count: int

    def __post_init__(self) -> None:
        low, high = TIME_LIMIT_RANGE
        if not _is_int(self.time_limit_seconds) or not (low <= self.time_limit_seconds <= high):
            raise ValidationError(
                ErrorCode.GAME_SETTINGS_INVALID_TIME_LIMIT,
                f"Time limit must be between {low} and {high} seconds",
            )
        low, high = ROUND_COUNT_RANGE
        if not _is_int(self.round_count) or not (low <= self.round_count <= high):
            raise ValidationError(
                ErrorCode.GAME_SETTINGS_INVALID_ROUND_COUNT,
                f"Round count must be between {low} and {high}",
            )
        low, high = PLAYER_COUNT_RANGE
        if not _is_int(self.player_count) or not (low <= self.player_count <= high):
            raise ValidationError(
                ErrorCode.GAME_SETTINGS_INVALID_PLAYER_COUNT,
                f"Player count must be between {low} and {high}",
            )


__all__ = [
    "ANSWER_MAX_LENGTH",
    "ANSWER_PATTERN",
    "Answer",
    "GameId",
    "GameSettings",
    "PLAYER_NAME_MAX_LENGTH",
    "PlayerId",
    "PlayerName",
]
