"""Pydantic contracts for the serialized form of a game.

Storage and wire adapters exchange :class:`GameDocument` instances (or their
JSON encoding). Field names use the camelCase vocabulary of the public API;
enum values are the fixed strings defined on the domain enums.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

import orjson
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import DocumentError, ErrorCode
from .game import Game, GameStatus
from .player import Player, PlayerStatus
from .round import Round
from .scoring import ScoreHistory, ScoreReason
from .turn import Turn, TurnStatus
from .values import Answer, GameId, GameSettings, PlayerId, PlayerName

SCHEMA_VERSION = 1


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SettingsDocument(_Document):
    """Serialized :class:`GameSettings`."""

    time_limit: int = Field(..., alias="timeLimit")
    round_count: int = Field(..., alias="roundCount")
    player_count: int = Field(..., alias="playerCount")


class PlayerDocument(_Document):
    """Serialized :class:`Player`. ``status`` mirrors ``isReady`` for older readers."""

    id: str
    name: str
    status: PlayerStatus
    is_ready: bool = Field(..., alias="isReady")
    is_drawer: bool = Field(..., alias="isDrawer")


class TurnDocument(_Document):
    """Serialized :class:`Turn`. ``answer`` is null when no answer has been set."""

    turn_number: int = Field(..., alias="turnNumber")
    drawer_id: str = Field(..., alias="drawerId")
    answer: Optional[str] = None
    status: TurnStatus
    time_limit: int = Field(..., alias="timeLimit")
    started_at: datetime = Field(..., alias="startedAt")
    ended_at: Optional[datetime] = Field(None, alias="endedAt")
    correct_player_ids: List[str] = Field(default_factory=list, alias="correctPlayerIds")


class RoundDocument(_Document):
    round_number: int = Field(..., alias="roundNumber")
    current_turn: TurnDocument = Field(..., alias="currentTurn")
    started_at: datetime = Field(..., alias="startedAt")
    ended_at: Optional[datetime] = Field(None, alias="endedAt")


class ScoreRecordDocument(_Document):
    player_id: str = Field(..., alias="playerId")
    round_number: int = Field(..., alias="roundNumber")
    turn_number: int = Field(..., alias="turnNumber")
    points: int
    reason: ScoreReason
    timestamp: datetime


class GameDocument(_Document):
    """Top-level serialized game."""

    schema_version: int = Field(SCHEMA_VERSION, alias="schemaVersion")
    id: str
    status: GameStatus
    settings: SettingsDocument
    current_round: RoundDocument = Field(..., alias="currentRound")
    players: List[PlayerDocument] = Field(..., min_length=1)
    score_records: List[ScoreRecordDocument] = Field(default_factory=list, alias="scoreRecords")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


# Aggregate -> document ---------------------------------------------------------


def _turn_document(turn: Turn) -> TurnDocument:
    return TurnDocument(
        turn_number=turn.turn_number,
        drawer_id=turn.drawer_id.value,
        answer=turn.answer.value if turn.answer is not None else None,
        status=turn.status,
        time_limit=turn.time_limit_seconds,
        started_at=turn.started_at,
        ended_at=turn.ended_at,
        correct_player_ids=[player_id.value for player_id in turn.correct_player_ids],
    )


def to_document(game: Game) -> GameDocument:
    """Convert a game aggregate into its serialized document."""

    round_ = game.current_round
    return GameDocument(
        schema_version=SCHEMA_VERSION,
        id=game.id.value,
        status=game.status,
        settings=SettingsDocument(
            time_limit=game.settings.time_limit_seconds,
            round_count=game.settings.round_count,
            player_count=game.settings.player_count,
        ),
        current_round=RoundDocument(
            round_number=round_.round_number,
            current_turn=_turn_document(round_.current_turn),
            started_at=round_.started_at,
            ended_at=round_.ended_at,
        ),
        players=[
            PlayerDocument(
                id=player.id.value,
                name=player.name.value,
                status=player.status,
                is_ready=player.is_ready,
                is_drawer=player.is_drawer,
            )
            for player in game.players
        ],
        score_records=[
            ScoreRecordDocument(
                player_id=record.player_id.value,
                round_number=record.round_number,
                turn_number=record.turn_number,
                points=record.points,
                reason=record.reason,
                timestamp=record.timestamp,
            )
            for record in game.score_histories
        ],
        created_at=game.created_at,
        updated_at=game.updated_at,
    )


# Document -> aggregate ---------------------------------------------------------


def from_document(document: GameDocument) -> Game:
    """Rebuild a game aggregate; domain validation errors propagate unchanged."""

    if document.schema_version != SCHEMA_VERSION:
        raise DocumentError(
            ErrorCode.DOCUMENT_UNSUPPORTED_VERSION,
            f"Unsupported schema version {document.schema_version}; expected {SCHEMA_VERSION}",
        )

    turn_doc = document.current_round.current_turn
    turn = Turn(
        turn_number=turn_doc.turn_number,
        drawer_id=PlayerId(turn_doc.drawer_id),
        answer=Answer(turn_doc.answer) if turn_doc.answer is not None else None,
        status=turn_doc.status,
        time_limit_seconds=turn_doc.time_limit,
        started_at=turn_doc.started_at,
        ended_at=turn_doc.ended_at,
        correct_player_ids=[PlayerId(value) for value in turn_doc.correct_player_ids],
    )
    current_round = Round(
        round_number=document.current_round.round_number,
        current_turn=turn,
        started_at=document.current_round.started_at,
        ended_at=document.current_round.ended_at,
    )
    for item in document.players:
        if (item.status == PlayerStatus.READY) != item.is_ready:
            raise DocumentError(
                ErrorCode.DOCUMENT_INVALID,
                f"Player {item.id} has status {item.status.value!r} but isReady={item.is_ready}",
            )
    players = [
        Player(
            id=PlayerId(item.id),
            name=PlayerName(item.name),
            is_ready=item.is_ready,
            is_drawer=item.is_drawer,
        )
        for item in document.players
    ]
    histories = [
        ScoreHistory(
            player_id=PlayerId(item.player_id),
            round_number=item.round_number,
            turn_number=item.turn_number,
            points=item.points,
            reason=item.reason,
            timestamp=item.timestamp,
        )
        for item in document.score_records
    ]
    return Game(
        id=GameId(document.id),
        settings=GameSettings(
            time_limit_seconds=document.settings.time_limit,
            round_count=document.settings.round_count,
            player_count=document.settings.player_count,
        ),
        status=document.status,
        current_round=current_round,
        players=players,
        score_histories=histories,
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


# JSON encoding -----------------------------------------------------------------


def document_to_dict(document: GameDocument) -> dict:
    return document.model_dump(mode="json", by_alias=True)


def parse_document(data: Any) -> GameDocument:
    """Validate a decoded JSON object or raise :class:`DocumentError`."""

    try:
        return GameDocument.model_validate(data)
    except PydanticValidationError as exc:
        raise DocumentError(ErrorCode.DOCUMENT_INVALID, "Game document failed validation", exc.errors()) from exc


def dumps(game: Game, *, indent: bool = False) -> bytes:
    """Encode a game as JSON bytes."""

    option = orjson.OPT_INDENT_2 if indent else None
    return orjson.dumps(document_to_dict(to_document(game)), option=option)


def loads(data: bytes | str) -> Game:
    """Decode JSON bytes produced by :func:`dumps`."""

    try:
        payload = orjson.loads(data)
    except orjson.JSONDecodeError as exc:
        raise DocumentError(ErrorCode.DOCUMENT_INVALID, f"Game document is not valid JSON: {exc}") from exc
    return from_document(parse_document(payload))
