"""Players taking part in a game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import ErrorCode, require
from .values import PlayerId, PlayerName


class PlayerStatus(str, Enum):
    """Readiness as exposed on the wire; derived from ``Player.is_ready``."""

    READY = "ready"
    NOT_READY = "not_ready"


@dataclass(frozen=True, eq=False)
class Player:
    """A participant. Two players are the same player when their ids match."""

    id: PlayerId
    name: PlayerName
    is_ready: bool = False
    is_drawer: bool = False

    def __post_init__(self) -> None:
        require(self.id, ErrorCode.PLAYER_MISSING_ID, "Player id")
        require(self.name, ErrorCode.PLAYER_MISSING_NAME, "Player name")

    @classmethod
    def create_initial(cls, name: PlayerName, player_id: Optional[PlayerId] = None) -> "Player":
        """Return a fresh, not-ready, non-drawing player."""

        return cls(id=player_id or PlayerId.new_id(), name=name)

    @property
    def status(self) -> PlayerStatus:
        return PlayerStatus.READY if self.is_ready else PlayerStatus.NOT_READY

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Player):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
