"""Process-local game repository used by the CLI and tests."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import structlog

from ..core.errors import ErrorCode, require
from ..core.game import Game
from ..core.repository import GameRepository
from ..core.schemas import document_to_dict, from_document, parse_document, to_document
from ..core.values import GameId

LOGGER = structlog.get_logger(__name__)


class InMemoryGameRepository(GameRepository):
    """Keeps serialized snapshots so callers never share live aggregates."""

    def __init__(self) -> None:
        self._documents: Dict[str, dict] = {}
        self._lock = asyncio.Lock()

    async def save(self, game: Game) -> None:
        require(game, ErrorCode.REPOSITORY_MISSING_GAME, "Game")
        snapshot = document_to_dict(to_document(game))
        async with self._lock:
            self._documents[game.id.value] = snapshot
        LOGGER.debug("repository.saved", game_id=game.id.value, status=game.status.value)

    async def find_by_id(self, game_id: GameId) -> Optional[Game]:
        require(game_id, ErrorCode.GAME_MISSING_ID, "Game id")
        async with self._lock:
            snapshot = self._documents.get(game_id.value)
        if snapshot is None:
            return None
        return from_document(parse_document(snapshot))

    async def find_all(self) -> List[Game]:
        async with self._lock:
            snapshots = list(self._documents.values())
        return [from_document(parse_document(snapshot)) for snapshot in snapshots]

    async def delete(self, game_id: GameId) -> None:
        require(game_id, ErrorCode.GAME_MISSING_ID, "Game id")
        async with self._lock:
            removed = self._documents.pop(game_id.value, None)
        if removed is not None:
            LOGGER.debug("repository.deleted", game_id=game_id.value)

    def __len__(self) -> int:
        return len(self._documents)
