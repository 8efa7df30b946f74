"""Running session score."""

from __future__ import annotations

import logging

from specious.ranks import RANK_CATALOG, RankCatalog

logger = logging.getLogger(__name__)


class ScoreTracker:
    """Owns the session score and is its only writer.

    A correct guess adds the guessed rank's points. A wrong guess either
    resets the score to zero (``reset_on_miss=True``, the streak policy) or
    leaves the running total untouched.
    """

    def __init__(
        self,
        *,
        reset_on_miss: bool = True,
        catalog: RankCatalog = RANK_CATALOG,
    ) -> None:
        self.reset_on_miss = reset_on_miss
        self.catalog = catalog
        self._score = 0

    @property
    def score(self) -> int:
        """The current session score."""
        return self._score

    def points_for(self, matched: bool, rank_key: str) -> int:
        """Get the points a verdict at ``rank_key`` is worth.

        Raises:
            UnknownRank: If the rank is not in the catalog.
        """
        level = self.catalog.lookup(rank_key)
        return level.points if matched else 0

    def apply(self, matched: bool, rank_key: str) -> int:
        """Apply a guess verdict and return the new score."""
        points = self.points_for(matched, rank_key)
        if matched:
            self._score += points
        elif self.reset_on_miss:
            if self._score:
                logger.debug("Miss at %s, resetting score from %d", rank_key, self._score)
            self._score = 0
        return self._score

    def reset(self) -> None:
        """Start a new session at zero."""
        self._score = 0

    def __repr__(self) -> str:
        return f"ScoreTracker(score={self._score}, reset_on_miss={self.reset_on_miss})"
