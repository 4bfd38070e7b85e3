"""Typed domain errors raised by the game aggregate."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable, machine-readable error codes."""

    # Game
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_ALREADY_STARTED = "GAME_ALREADY_STARTED"
    GAME_ALREADY_ENDED = "GAME_ALREADY_ENDED"
    GAME_NOT_PLAYING = "GAME_NOT_PLAYING"
    GAME_INSUFFICIENT_PLAYERS = "GAME_INSUFFICIENT_PLAYERS"
    GAME_NOT_ALL_PLAYERS_READY = "GAME_NOT_ALL_PLAYERS_READY"
    GAME_PLAYER_LIMIT_EXCEEDED = "GAME_PLAYER_LIMIT_EXCEEDED"
    GAME_PLAYER_ALREADY_JOINED = "GAME_PLAYER_ALREADY_JOINED"
    GAME_PLAYER_NOT_FOUND = "GAME_PLAYER_NOT_FOUND"
    GAME_CANNOT_ADD_PLAYER_AFTER_START = "GAME_CANNOT_ADD_PLAYER_AFTER_START"
    GAME_DRAWER_CANNOT_ANSWER = "GAME_DRAWER_CANNOT_ANSWER"
    GAME_PLAYER_NOT_DRAWER = "GAME_PLAYER_NOT_DRAWER"
    GAME_INVALID_TIMESTAMP = "GAME_INVALID_TIMESTAMP"
    GAME_MISSING_ID = "GAME_MISSING_ID"
    GAME_MISSING_SETTINGS = "GAME_MISSING_SETTINGS"
    GAME_MISSING_CURRENT_ROUND = "GAME_MISSING_CURRENT_ROUND"
    GAME_MISSING_PLAYERS = "GAME_MISSING_PLAYERS"
    GAME_NO_PLAYERS = "GAME_NO_PLAYERS"
    GAME_MISSING_SCORE_HISTORIES = "GAME_MISSING_SCORE_HISTORIES"
    GAME_DUPLICATE_PLAYER = "GAME_DUPLICATE_PLAYER"
    GAME_UNKNOWN_DRAWER = "GAME_UNKNOWN_DRAWER"
    GAME_INVALID_DRAWER_COUNT = "GAME_INVALID_DRAWER_COUNT"

    # Identifiers
    GAME_INVALID_ID = "GAME_INVALID_ID"
    PLAYER_INVALID_ID = "PLAYER_INVALID_ID"

    # Player
    PLAYER_INVALID_NAME = "PLAYER_INVALID_NAME"
    PLAYER_MISSING_ID = "PLAYER_MISSING_ID"
    PLAYER_MISSING_NAME = "PLAYER_MISSING_NAME"

    # Answer
    ANSWER_TOO_LONG = "ANSWER_TOO_LONG"
    ANSWER_INVALID_CHARACTERS = "ANSWER_INVALID_CHARACTERS"

    # GameSettings
    GAME_SETTINGS_INVALID_TIME_LIMIT = "GAME_SETTINGS_INVALID_TIME_LIMIT"
    GAME_SETTINGS_INVALID_ROUND_COUNT = "GAME_SETTINGS_INVALID_ROUND_COUNT"
    GAME_SETTINGS_INVALID_PLAYER_COUNT = "GAME_SETTINGS_INVALID_PLAYER_COUNT"

    # Turn
    TURN_INVALID_TURN_NUMBER = "TURN_INVALID_TURN_NUMBER"
    TURN_INVALID_TIME_LIMIT = "TURN_INVALID_TIME_LIMIT"
    TURN_INVALID_DRAWER_ID = "TURN_INVALID_DRAWER_ID"
    TURN_MISSING_ANSWER = "TURN_MISSING_ANSWER"
    TURN_MISSING_PLAYER_ID = "TURN_MISSING_PLAYER_ID"
    TURN_EMPTY_ANSWER = "TURN_EMPTY_ANSWER"
    TURN_ALREADY_ENDED = "TURN_ALREADY_ENDED"
    TURN_NOT_DRAWING = "TURN_NOT_DRAWING"
    TURN_NOT_SETTING_ANSWER = "TURN_NOT_SETTING_ANSWER"
    TURN_NOT_FINISHED = "TURN_NOT_FINISHED"

    # Round
    ROUND_INVALID_ROUND_NUMBER = "ROUND_INVALID_ROUND_NUMBER"
    ROUND_INVALID_CURRENT_TURN = "ROUND_INVALID_CURRENT_TURN"

    # ScoreHistory
    SCORE_HISTORY_INVALID_PLAYER_ID = "SCORE_HISTORY_INVALID_PLAYER_ID"
    SCORE_HISTORY_INVALID_ROUND_NUMBER = "SCORE_HISTORY_INVALID_ROUND_NUMBER"
    SCORE_HISTORY_INVALID_TURN_NUMBER = "SCORE_HISTORY_INVALID_TURN_NUMBER"
    SCORE_HISTORY_INVALID_POINTS = "SCORE_HISTORY_INVALID_POINTS"

    # Repository
    REPOSITORY_MISSING_GAME = "REPOSITORY_MISSING_GAME"

    # Serialized documents
    DOCUMENT_INVALID = "DOCUMENT_INVALID"
    DOCUMENT_UNSUPPORTED_VERSION = "DOCUMENT_UNSUPPORTED_VERSION"


class DomainError(Exception):
    """Base class for every failure raised by the game domain."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"{code.value}: {message}")


class ValidationError(DomainError):
    """Raised when a constructor input violates a range or format rule."""


class MissingValueError(ValidationError):
    """Raised when a required reference is ``None``."""


class RuleViolationError(DomainError):
    """Raised when an operation is invalid for the aggregate's current state."""


class GameNotFoundError(DomainError):
    """Raised by the application layer when a game id is unknown."""

    def __init__(self, game_id: object) -> None:
        self.game_id = game_id
        super().__init__(ErrorCode.GAME_NOT_FOUND, f"Game {game_id} was not found")


class DocumentError(DomainError):
    """Raised when a serialized game cannot be decoded."""

    def __init__(self, code: ErrorCode, message: str, errors: list | None = None) -> None:
        self.errors = errors or []
        super().__init__(code, message)


def require(value: object, code: ErrorCode, name: str) -> None:
    """Raise :class:`MissingValueError` when ``value`` is ``None``."""

    if value is None:
        raise MissingValueError(code, f"{name} is required")


__all__ = [
    "DocumentError",
    "DomainError",
    "ErrorCode",
    "GameNotFoundError",
    "MissingValueError",
    "RuleViolationError",
    "ValidationError",
    "require",
]
