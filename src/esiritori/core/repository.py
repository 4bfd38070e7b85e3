"""Persistence contract required by the application layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from .game import Game
from .values import GameId


class GameRepository(ABC):
    """Abstract storage for game aggregates.

    Implementations must:

    - treat :meth:`save` as an upsert keyed by ``game.id``;
    - return ``None`` from :meth:`find_by_id` for unknown ids instead of raising;
    - make :meth:`delete` a no-op for unknown ids;
    - let storage errors and :class:`asyncio.CancelledError` propagate unchanged.
    """

    @abstractmethod
    async def save(self, game: Game) -> None:
        """Insert or replace ``game``."""

    @abstractmethod
    async def find_by_id(self, game_id: GameId) -> Optional[Game]:
        """Return the stored game or ``None``."""

    @abstractmethod
    async def find_all(self) -> List[Game]:
        """Return every stored game."""

    @abstractmethod
    async def delete(self, game_id: GameId) -> None:
        """Remove the game if present."""
