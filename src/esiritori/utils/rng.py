"""Seeded randomness helpers for deterministic simulations."""

import random
from typing import List, Sequence

# Hiragana-only prompts used by the simulated drawers.
WORDS: tuple[str, ...] = (
    "いぬ",
    "ねこ",
    "さくら",
    "りんご",
    "やま",
    "うみ",
    "くるま",
    "でんしゃ",
    "とけい",
    "ひまわり",
)


def build_rng(*, seed: int | None = None) -> random.Random:
    """Return a deterministic random generator."""
    return random.Random(seed)


def pick_answer(rng: random.Random, words: Sequence[str] = WORDS) -> str:
    """Pick the secret answer for a simulated drawer.

    Args:
        rng: Random number generator
        words: Candidate answers

    Returns:
        One word from ``words``
    """
    return rng.choice(list(words))


def guess_order(rng: random.Random, answer: str, words: Sequence[str] = WORDS, *, attempts: int = 3) -> List[str]:
    """Return the guesses a simulated player makes, in order.

    The correct answer may or may not be among them.

    Args:
        rng: Random number generator
        answer: The drawer's secret answer
        words: Candidate guesses
        attempts: Number of guesses to produce (default 3)

    Returns:
        List of ``attempts`` distinct words
    """
    pool = list(dict.fromkeys([answer, *words]))
    return rng.sample(pool, min(attempts, len(pool)))
