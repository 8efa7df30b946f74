"""Compare a free-text guess against the resolved name."""

from __future__ import annotations

from dataclasses import dataclass

from specious.resolver import normalize_name


@dataclass(frozen=True)
class GuessVerdict:
    """Result of comparing a guess to the correct name."""

    matched: bool
    normalized_guess: str


def evaluate_guess(guess: str, resolved_name: str | None) -> GuessVerdict:
    """Evaluate a guess by exact match after trimming and lowercasing.

    No fuzzy matching, synonyms or partial credit. When there is no data at
    the guessed rank (``resolved_name`` is None) the guess never matches.
    """
    normalized = normalize_name(guess)
    if resolved_name is None:
        return GuessVerdict(matched=False, normalized_guess=normalized)
    return GuessVerdict(
        matched=normalized == normalize_name(resolved_name),
        normalized_guess=normalized,
    )
