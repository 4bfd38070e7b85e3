"""Typer CLI entry point for simulating and inspecting Esiritori games."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

import structlog
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..config.settings import DEFAULT_CONFIG_PATH, EngineConfig, load_engine_config
from ..core import schemas
from ..core.errors import DomainError
from ..core.game import Game, GameStatus
from ..utils.rng import build_rng, guess_order, pick_answer
from .memory_repository import InMemoryGameRepository
from .use_cases import GameService, utc_now

LOGGER = structlog.get_logger(__name__)

app = typer.Typer(help="Simulate and inspect draw-and-guess games.", invoke_without_command=False)
console = Console()
_configured_logging = False


def configure_logging(level: str = "INFO") -> None:
    global _configured_logging
    if _configured_logging:
        return
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        # Streams are looked up per call; the app may be invoked repeatedly in one process.
        cache_logger_on_first_use=False,
    )
    _configured_logging = True


class StepClock:
    """Clock that moves forward by a fixed step on every reading."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)) -> None:
        self._now = start
        self._step = step

    def __call__(self) -> datetime:
        self._now = self._now + self._step
        return self._now


async def play_simulation(
    service: GameService,
    *,
    seed: Optional[int],
    players: int,
    rounds: int,
    time_limit: int,
) -> Game:
    """Play one game with simulated players and return the finished aggregate."""

    rng = build_rng(seed=seed)
    game = await service.create_game(
        "bot-1",
        time_limit_seconds=time_limit,
        round_count=rounds,
        player_count=players,
    )
    game_id = game.id
    for seat in range(2, players + 1):
        game, _ = await service.join_game(game_id, f"bot-{seat}")
    for player in list(game.players):
        game = await service.set_ready(game_id, player.id)
    game = await service.start_game(game_id)

    while game.status == GameStatus.PLAYING:
        drawer_id = game.current_turn.drawer_id
        answer = pick_answer(rng)
        game = await service.submit_answer(game_id, drawer_id, answer)

        guessers = [player.id for player in game.players if player.id != drawer_id]
        rng.shuffle(guessers)
        solved = False
        for player_id in guessers:
            for guess in guess_order(rng, answer):
                result = await service.submit_guess(game_id, player_id, guess)
                if result.correct:
                    solved = True
                    break
            if solved:
                break
        if not solved:
            await service.time_out_turn(game_id)
        game = await service.next_turn(game_id)

    return game


def _scoreboard(game: Game) -> Table:
    totals = game.score_board()
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Player", width=20)
    table.add_column("Id", style="dim")
    table.add_column("Points", justify="right")
    ranked = sorted(game.players, key=lambda player: totals[player.id], reverse=True)
    for player in ranked:
        table.add_row(player.name.value, player.id.value, str(totals[player.id]))
    return table


def _summary_lines(game: Game) -> List[str]:
    turn = game.current_turn
    lines = [
        f"Game {game.id.value} ({game.status.value})",
        (
            f"Settings: {game.settings.time_limit_seconds}s per turn, "
            f"{game.settings.round_count} rounds, up to {game.settings.player_count} players"
        ),
        f"Round {game.current_round.round_number}, turn {turn.turn_number} ({turn.status.value})",
    ]
    drawer = game.drawer
    if drawer is not None:
        lines.append(f"Drawer: {drawer.name.value}")
    if turn.is_finished and turn.answer is not None:
        lines.append(f"Answer: {turn.answer.value}")
    return lines


def _load_config(path: Path) -> EngineConfig:
    try:
        return load_engine_config(path)
    except ValueError as exc:
        typer.echo(f"Error: invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1) from exc


@app.command("simulate")
def simulate(
    seed: Optional[int] = typer.Option(None, help="Seed for deterministic simulation"),
    players: int = typer.Option(4, help="Number of simulated players (2-8)"),
    rounds: int = typer.Option(2, help="Number of rounds to play (1-10)"),
    time_limit: int = typer.Option(60, "--time-limit", help="Seconds per turn (30-300)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the finished game JSON here"),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, help="Path to engine configuration JSON"),
) -> None:
    """Play a full game with simulated players and print the scoreboard."""

    load_dotenv()
    engine_config = _load_config(config)
    configure_logging(engine_config.log_level)

    LOGGER.info("simulation.start", seed=seed, players=players, rounds=rounds, time_limit=time_limit)
    service = GameService(
        InMemoryGameRepository(),
        policy=engine_config.scoring,
        clock=StepClock(utc_now()),
    )
    try:
        game = asyncio.run(
            play_simulation(service, seed=seed, players=players, rounds=rounds, time_limit=time_limit)
        )
    except DomainError as exc:
        LOGGER.error("simulation.failed", code=exc.code.value, error=exc.message)
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(schemas.dumps(game, indent=True))
        LOGGER.info("simulation.saved", path=str(output))

    LOGGER.info("simulation.complete", game_id=game.id.value, score_records=len(game.score_histories))
    for line in _summary_lines(game):
        console.print(line)
    console.print(_scoreboard(game))
    if output is not None:
        typer.echo(f"Game JSON saved to {output}")


@app.command("show")
def show(path: Path = typer.Argument(..., help="Game JSON document to display")) -> None:
    """Print the state and scoreboard stored in a game JSON document."""

    try:
        game = schemas.loads(path.read_bytes())
    except OSError as exc:
        typer.echo(f"Error: cannot read {path}: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    except DomainError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    for line in _summary_lines(game):
        console.print(line)
    console.print(_scoreboard(game))


if __name__ == "__main__":  # pragma: no cover
    app()
