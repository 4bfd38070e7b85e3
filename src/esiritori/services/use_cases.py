"""Application use cases: load a game, apply one domain operation, save it."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Callable, Tuple, Union

import structlog

from ..core.errors import ErrorCode, GameNotFoundError, RuleViolationError
from ..core.game import Game, GameStatus
from ..core.player import Player
from ..core.repository import GameRepository
from ..core.scoring import ScoringPolicy
from ..core.values import Answer, GameId, GameSettings, PlayerId, PlayerName

LOGGER = structlog.get_logger(__name__)

Clock = Callable[[], datetime]
IdLike = Union[GameId, PlayerId, str]


def utc_now() -> datetime:
    return datetime.now(UTC)


def _game_id(value: IdLike) -> GameId:
    return value if isinstance(value, GameId) else GameId(str(value))


def _player_id(value: IdLike) -> PlayerId:
    return value if isinstance(value, PlayerId) else PlayerId(str(value))


@dataclass(frozen=True)
class GuessResult:
    """Outcome of :meth:`GameService.submit_guess`."""

    game: Game
    correct: bool


class GameService:
    """Coordinates the game aggregate with a repository and a clock.

    Every method reads the game, runs exactly one aggregate operation and
    writes the game back. Domain errors propagate unchanged; a failing call
    never reaches ``save``.
    """

    def __init__(
        self,
        repository: GameRepository,
        *,
        policy: ScoringPolicy | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._repository = repository
        self._policy = policy or ScoringPolicy()
        self._clock = clock

    @property
    def policy(self) -> ScoringPolicy:
        return self._policy

    async def get_game(self, game_id: IdLike) -> Game:
        key = _game_id(game_id)
        game = await self._repository.find_by_id(key)
        if game is None:
            LOGGER.warning("game.not_found", game_id=key.value)
            raise GameNotFoundError(key.value)
        return game

    async def create_game(
        self,
        creator_name: str,
        *,
        time_limit_seconds: int,
        round_count: int,
        player_count: int,
    ) -> Game:
        settings = GameSettings(
            time_limit_seconds=time_limit_seconds,
            round_count=round_count,
            player_count=player_count,
        )
        game = Game.new_game(settings, PlayerName(creator_name), self._clock())
        await self._repository.save(game)
        LOGGER.info(
            "game.created",
            game_id=game.id.value,
            creator_id=game.players[0].id.value,
            round_count=round_count,
            player_count=player_count,
        )
        return game

    async def join_game(self, game_id: IdLike, player_name: str) -> Tuple[Game, Player]:
        game = await self.get_game(game_id)
        player = Player.create_initial(PlayerName(player_name))
        game.add_player(player, self._clock())
        await self._repository.save(game)
        LOGGER.info("game.player_joined", game_id=game.id.value, player_id=player.id.value)
        return game, player

    async def set_ready(self, game_id: IdLike, player_id: IdLike, is_ready: bool = True) -> Game:
        game = await self.get_game(game_id)
        pid = _player_id(player_id)
        game.update_player_ready_status(pid, is_ready, self._clock())
        await self._repository.save(game)
        LOGGER.info("game.player_ready", game_id=game.id.value, player_id=pid.value, is_ready=is_ready)
        return game

    async def start_game(self, game_id: IdLike) -> Game:
        game = await self.get_game(game_id)
        game.start_game(self._clock())
        await self._repository.save(game)
        LOGGER.info("game.started", game_id=game.id.value, drawer_id=game.current_turn.drawer_id.value)
        return game

    async def submit_answer(self, game_id: IdLike, player_id: IdLike, answer: str) -> Game:
        """Let the current drawer choose the secret answer."""

        game = await self.get_game(game_id)
        pid = _player_id(player_id)
        if game.find_player(pid) is None:
            raise RuleViolationError(ErrorCode.GAME_PLAYER_NOT_FOUND, f"Player {pid} is not in this game")
        if pid != game.current_turn.drawer_id:
            raise RuleViolationError(ErrorCode.GAME_PLAYER_NOT_DRAWER, "Only the drawer can set the answer")
        game.set_answer(Answer(answer), self._clock())
        await self._repository.save(game)
        turn = game.current_turn
        LOGGER.info(
            "turn.answer_set",
            game_id=game.id.value,
            round_number=game.current_round.round_number,
            turn_number=turn.turn_number,
        )
        return game

    async def submit_guess(self, game_id: IdLike, player_id: IdLike, guess: str) -> GuessResult:
        """Check a guess and record the correct-answer score when it hits."""

        game = await self.get_game(game_id)
        pid = _player_id(player_id)
        now = self._clock()
        correct = game.check_answer(guess, pid, now)
        if correct:
            record = self._policy.correct_answer(pid, game.current_round.round_number, game.current_turn, now)
            game.add_score_history(record, now)
        await self._repository.save(game)
        LOGGER.info(
            "turn.guess_checked",
            game_id=game.id.value,
            player_id=pid.value,
            correct=correct,
        )
        return GuessResult(game=game, correct=correct)

    async def time_out_turn(self, game_id: IdLike) -> Game:
        """Finish the current turn on timer expiry.

        When nobody guessed the answer the drawer is penalised. A turn that has
        already finished is left as is.
        """

        game = await self.get_game(game_id)
        turn = game.current_turn
        if turn.is_finished:
            LOGGER.debug("turn.timeout_ignored", game_id=game.id.value, turn_number=turn.turn_number)
            return game

        now = self._clock()
        game.finish_turn_by_timeout(now)
        penalised = not turn.correct_player_ids
        if penalised:
            game.add_score_history(self._policy.drawer_penalty(game.current_round.round_number, turn, now), now)
        await self._repository.save(game)
        LOGGER.info(
            "turn.timed_out",
            game_id=game.id.value,
            turn_number=turn.turn_number,
            drawer_id=turn.drawer_id.value,
            penalised=penalised,
        )
        return game

    async def next_turn(self, game_id: IdLike) -> Game:
        game = await self.get_game(game_id)
        game.advance_turn(self._clock())
        await self._repository.save(game)
        if game.status == GameStatus.FINISHED:
            LOGGER.info("game.finished", game_id=game.id.value, scores=_score_log(game))
        else:
            LOGGER.info(
                "turn.advanced",
                game_id=game.id.value,
                round_number=game.current_round.round_number,
                turn_number=game.current_turn.turn_number,
                drawer_id=game.current_turn.drawer_id.value,
            )
        return game

    async def end_game(self, game_id: IdLike) -> Game:
        game = await self.get_game(game_id)
        game.end_game(self._clock())
        await self._repository.save(game)
        LOGGER.info("game.ended", game_id=game.id.value, scores=_score_log(game))
        return game


def _score_log(game: Game) -> dict:
    return {player_id.value: points for player_id, points in game.score_board().items()}


__all__ = ["Clock", "GameService", "GuessResult", "utc_now"]
