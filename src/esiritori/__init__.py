"""Domain core and tooling for the Esiritori draw-and-guess game."""

from . import config
from .core import errors, game, player, round, schemas, scoring, turn, values
from .services import cli, memory_repository, use_cases
from .utils import rng

# Direct re-exports of the domain types
from .core import *  # noqa: F403, F401

__all__ = [
    "cli",
    "config",
    "errors",
    "game",
    "memory_repository",
    "player",
    "rng",
    "round",
    "schemas",
    "scoring",
    "turn",
    "use_cases",
    "values",
]
