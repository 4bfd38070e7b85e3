"""Service modules: use cases, repository adapters and the CLI."""

from . import cli, memory_repository, use_cases

__all__ = ["cli", "memory_repository", "use_cases"]
