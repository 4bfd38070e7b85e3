from datetime import datetime, timedelta, timezone

import pytest

from esiritori.core.game import Game
from esiritori.core.player import Player
from esiritori.core.values import GameId, GameSettings, PlayerId, PlayerName

T0 = datetime(2024, 4, 1, 12, 0, tzinfo=timezone.utc)


def at(seconds: int) -> datetime:
    """Return a timestamp ``seconds`` after the fixed test epoch."""
    return T0 + timedelta(seconds=seconds)


def make_player(player_id: str, name: str | None = None, *, ready: bool = False) -> Player:
    return Player(id=PlayerId(player_id), name=PlayerName(name or player_id), is_ready=ready)


class FakeClock:
    """Deterministic clock for the application layer."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now = self.now + timedelta(seconds=1)
        return self.now


@pytest.fixture()
def settings():
    return GameSettings(time_limit_seconds=60, round_count=2, player_count=4)


@pytest.fixture()
def lobby(settings):
    # alice hosts; bob and carol have joined but nobody is ready
    game = Game.create_new(GameId("game-1"), settings, make_player("alice"), T0)
    game.add_player(make_player("bob"), at(1))
    game.add_player(make_player("carol"), at(2))
    return game


@pytest.fixture()
def ready_lobby(lobby):
    for index, player in enumerate(list(lobby.players)):
        lobby.update_player_ready_status(player.id, True, at(10 + index))
    return lobby


@pytest.fixture()
def playing(ready_lobby):
    return ready_lobby.start_game(at(20))


@pytest.fixture()
def drawing(playing):
    return playing.set_answer("ねこ", at(21))


@pytest.fixture()
def clock():
    return FakeClock()
