"""Game domain: value objects, entities and the game aggregate."""

from . import errors, game, player, repository, round, schemas, scoring, turn, values
from .errors import (
    DocumentError,
    DomainError,
    ErrorCode,
    GameNotFoundError,
    MissingValueError,
    RuleViolationError,
    ValidationError,
)
from .game import Game, GameStatus
from .player import Player, PlayerStatus
from .repository import GameRepository
from .round import Round
from .scoring import ScoreHistory, ScoreReason, ScoringPolicy
from .turn import Turn, TurnStatus
from .values import Answer, GameId, GameSettings, PlayerId, PlayerName

__all__ = [
    "Answer",
    "DocumentError",
    "DomainError",
    "ErrorCode",
    "Game",
    "GameId",
    "GameNotFoundError",
    "GameRepository",
    "GameSettings",
    "GameStatus",
    "MissingValueError",
    "Player",
    "PlayerId",
    "PlayerName",
    "PlayerStatus",
    "Round",
    "RuleViolationError",
    "ScoreHistory",
    "ScoreReason",
    "ScoringPolicy",
    "Turn",
    "TurnStatus",
    "ValidationError",
    "errors",
    "game",
    "player",
    "repository",
    "round",
    "schemas",
    "scoring",
    "turn",
    "values",
]
