"""The game aggregate root.

A :class:`Game` owns its settings, players, current round and score history and
is the only place where they change. Game status transitions::

    WAITING -> PLAYING -> FINISHED

Every mutating method validates first and mutates second, so a failing call
leaves the aggregate untouched. Timestamps are always supplied by the caller.
The aggregate does no locking; callers serialize writes per game id.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Union

from .errors import ErrorCode, RuleViolationError, ValidationError, require
from .player import Player
from .round import Round
from .scoring import ScoreHistory, tally
from .turn import Turn, TurnStatus
from .values import Answer, GameId, GameSettings, PlayerId, PlayerName

MIN_PLAYERS_TO_START = 2


def _require_aware(value: datetime, label: str) -> None:
    require(value, ErrorCode.GAME_INVALID_TIMESTAMP, label)
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(ErrorCode.GAME_INVALID_TIMESTAMP, f"{label} must carry a timezone")


class GameStatus(str, Enum):
    """Game states."""

    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


@dataclass(eq=False)
class Game:
    """Aggregate root for one room. Equality is by ``id`` only."""

    id: GameId
    settings: GameSettings
    status: GameStatus
    current_round: Round
    players: List[Player]
    score_histories: List[ScoreHistory]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        require(self.id, ErrorCode.GAME_MISSING_ID, "Game id")
        require(self.settings, ErrorCode.GAME_MISSING_SETTINGS, "Game settings")
        require(self.current_round, ErrorCode.GAME_MISSING_CURRENT_ROUND, "Current round")
        require(self.players, ErrorCode.GAME_MISSING_PLAYERS, "Players")
        require(self.score_histories, ErrorCode.GAME_MISSING_SCORE_HISTORIES, "Score histories")

        _require_aware(self.created_at, "created_at")
        _require_aware(self.updated_at, "updated_at")
        self.status = GameStatus(self.status)
        self.players = list(self.players)
        self.score_histories = list(self.score_histories)

        if not self.players:
            raise ValidationError(ErrorCode.GAME_NO_PLAYERS, "A game needs at least one player")
        if len({player.id for player in self.players}) != len(self.players):
            raise ValidationError(ErrorCode.GAME_DUPLICATE_PLAYER, "Player ids must be unique within a game")
        if len(self.players) > self.settings.player_count:
            raise ValidationError(
                ErrorCode.GAME_PLAYER_LIMIT_EXCEEDED,
                f"A game allows at most {self.settings.player_count} players",
            )
        if self.find_player(self.current_turn.drawer_id) is None:
            raise ValidationError(ErrorCode.GAME_UNKNOWN_DRAWER, "The drawer must be one of the game's players")
        if self.status == GameStatus.PLAYING and sum(1 for p in self.players if p.is_drawer) != 1:
            raise ValidationError(
                ErrorCode.GAME_INVALID_DRAWER_COUNT,
                "A game in progress must have exactly one drawer",
            )

    # Factories -----------------------------------------------------------------

    @classmethod
    def create_new(cls, id: GameId, settings: GameSettings, initial_player: Player, created_at: datetime) -> "Game":
        """Return a waiting game holding only its creator, with round 1 / turn 1 seeded."""

        require(initial_player, ErrorCode.GAME_MISSING_PLAYERS, "Initial player")
        require(settings, ErrorCode.GAME_MISSING_SETTINGS, "Game settings")
        turn = Turn.create_initial(initial_player.id, settings.time_limit_seconds, created_at)
        return cls(
            id=id,
            settings=settings,
            status=GameStatus.WAITING,
            current_round=Round.create_initial(turn, created_at),
            players=[initial_player],
            score_histories=[],
            created_at=created_at,
            updated_at=created_at,
        )

    @classmethod
    def new_game(
        cls,
        settings: GameSettings,
        creator_name: PlayerName,
        now: datetime,
        *,
        game_id: Optional[GameId] = None,
        creator_id: Optional[PlayerId] = None,
    ) -> "Game":
        creator = Player.create_initial(creator_name, creator_id)
        return cls.create_new(game_id or GameId.new_id(), settings, creator, now)

    # Queries -------------------------------------------------------------------

    @property
    def current_turn(self) -> Turn:
        return self.current_round.current_turn

    @property
    def drawer(self) -> Optional[Player]:
        return next((player for player in self.players if player.is_drawer), None)

    def find_player(self, player_id: PlayerId) -> Optional[Player]:
        return next((player for player in self.players if player.id == player_id), None)

    def score_board(self) -> Dict[PlayerId, int]:
        """Return total points per player in join order."""

        return tally((player.id for player in self.players), self.score_histories)

    # Lobby ---------------------------------------------------------------------

    def add_player(self, player: Player, now: datetime) -> "Game":
        require(player, ErrorCode.PLAYER_MISSING_ID, "Player")
        self._check_clock(now)
        if self.status != GameStatus.WAITING:
            raise RuleViolationError(
                ErrorCode.GAME_CANNOT_ADD_PLAYER_AFTER_START,
                "Players cannot join a game that has already started",
            )
        if len(self.players) >= self.settings.player_count:
            raise RuleViolationError(ErrorCode.GAME_PLAYER_LIMIT_EXCEEDED, "The game is full")
        if player in self.players:
            raise RuleViolationError(ErrorCode.GAME_PLAYER_ALREADY_JOINED, "This player has already joined")

        self.players.append(player)
        self.updated_at = now
        return self

    def update_player_ready_status(self, player_id: PlayerId, is_ready: bool, now: datetime) -> "Game":
        self._check_clock(now)
        index = self._player_index(player_id)
        self.players[index] = replace(self.players[index], is_ready=bool(is_ready))
        self.updated_at = now
        return self

    def start_game(self, now: datetime) -> "Game":
        """Start the game with the first player to join as the drawer.

        The current round is replaced by a fresh round 1 / turn 1.
        """

        self._check_clock(now)
        if self.status != GameStatus.WAITING:
            raise RuleViolationError(ErrorCode.GAME_ALREADY_STARTED, "The game has already started")
        if len(self.players) < MIN_PLAYERS_TO_START:
            raise RuleViolationError(
                ErrorCode.GAME_INSUFFICIENT_PLAYERS,
                f"At least {MIN_PLAYERS_TO_START} players are needed to start",
            )
        if not all(player.is_ready for player in self.players):
            raise RuleViolationError(ErrorCode.GAME_NOT_ALL_PLAYERS_READY, "Every player must be ready")

        first_drawer = self.players[0]
        turn = Turn.create_initial(first_drawer.id, self.settings.time_limit_seconds, now)
        self._assign_drawer(first_drawer.id)
        self.current_round = Round.create_initial(turn, now)
        self.status = GameStatus.PLAYING
        self.updated_at = now
        return self

    def end_game(self, now: datetime) -> "Game":
        self._check_clock(now)
        if self.status == GameStatus.FINISHED:
            raise RuleViolationError(ErrorCode.GAME_ALREADY_ENDED, "The game has already ended")

        self.status = GameStatus.FINISHED
        self.updated_at = now
        return self

    def add_score_history(self, score_history: ScoreHistory, now: datetime) -> "Game":
        require(score_history, ErrorCode.SCORE_HISTORY_INVALID_PLAYER_ID, "Score history")
        self._check_clock(now)
        self.score_histories.append(score_history)
        self.updated_at = now
        return self

    # Turn flow -----------------------------------------------------------------

    def set_answer(self, answer: Union[Answer, str], now: datetime) -> "Game":
        """Record the drawer's secret answer and begin drawing."""

        self._check_clock(now)
        self._require_playing()
        turn = self.current_turn
        if turn.status != TurnStatus.SETTING_ANSWER:
            raise RuleViolationError(
                ErrorCode.TURN_NOT_SETTING_ANSWER,
                "The answer can only be set before drawing starts",
            )

        turn.set_answer_and_start_drawing(answer, now)
        self.updated_at = now
        return self

    def check_answer(self, guess: Union[Answer, str], player_id: PlayerId, now: datetime) -> bool:
        """Check a guess against the current turn and return whether it was correct."""

        require(guess, ErrorCode.TURN_MISSING_ANSWER, "Guess")
        self._check_clock(now)
        self._require_playing()
        player = self.players[self._player_index(player_id)]
        if player.id == self.current_turn.drawer_id:
            raise RuleViolationError(ErrorCode.GAME_DRAWER_CANNOT_ANSWER, "The drawer cannot guess")
        turn = self.current_turn
        if turn.is_finished:
            raise RuleViolationError(ErrorCode.TURN_ALREADY_ENDED, "The turn has already ended")
        if turn.status != TurnStatus.DRAWING:
            raise RuleViolationError(ErrorCode.TURN_NOT_DRAWING, "Guesses are only accepted while drawing")

        correct = turn.matches(guess)
        turn.check_answer(guess, player.id, now)
        self.updated_at = now
        return correct

    def finish_turn_by_timeout(self, now: datetime) -> "Game":
        self._check_clock(now)
        self._require_playing()
        self.current_turn.finish_turn_by_timeout(now)
        self.updated_at = now
        return self

    def advance_turn(self, now: datetime) -> "Game":
        """Hand the drawing to the next player in join order.

        Wrapping past the last player opens the next round; wrapping past the
        final round stamps the round as ended and finishes the game.
        """

        self._check_clock(now)
        self._require_playing()
        turn = self.current_turn
        if not turn.is_finished:
            raise RuleViolationError(ErrorCode.TURN_NOT_FINISHED, "The current turn has not finished")

        drawer_index = next(
            (index for index, player in enumerate(self.players) if player.id == turn.drawer_id),
            0,
        )
        next_index = drawer_index + 1
        time_limit = self.settings.time_limit_seconds

        if next_index < len(self.players):
            next_drawer = self.players[next_index]
            next_turn = Turn(
                turn_number=turn.turn_number + 1,
                drawer_id=next_drawer.id,
                answer=None,
                status=TurnStatus.SETTING_ANSWER,
                time_limit_seconds=time_limit,
                started_at=now,
            )
            self._assign_drawer(next_drawer.id)
            self.current_round.set_turn(next_turn)
        elif self.current_round.round_number >= self.settings.round_count:
            self.current_round.set_end_time(now)
            self.status = GameStatus.FINISHED
        else:
            next_drawer = self.players[0]
            next_turn = Turn.create_initial(next_drawer.id, time_limit, now)
            next_round = self.current_round.create_next(next_turn, now)
            self._assign_drawer(next_drawer.id)
            self.current_round = next_round

        self.updated_at = now
        return self

    # Internals -----------------------------------------------------------------

    def _check_clock(self, now: datetime) -> None:
        _require_aware(now, "Timestamp")
        if now < self.updated_at:
            raise ValidationError(
                ErrorCode.GAME_INVALID_TIMESTAMP,
                f"Timestamp {now.isoformat()} is earlier than the last update {self.updated_at.isoformat()}",
            )

    def _require_playing(self) -> None:
        if self.status != GameStatus.PLAYING:
            raise RuleViolationError(ErrorCode.GAME_NOT_PLAYING, "The game is not in progress")

    def _player_index(self, player_id: PlayerId) -> int:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        raise RuleViolationError(ErrorCode.GAME_PLAYER_NOT_FOUND, f"Player {player_id} is not in this game")

    def _assign_drawer(self, drawer_id: PlayerId) -> None:
        self.players = [replace(player, is_drawer=player.id == drawer_id) for player in self.players]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Game):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
