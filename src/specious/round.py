"""Round lifecycle for the identification quiz.

A round goes AWAITING_CLASSIFICATION -> AWAITING_GUESS -> RESOLVED. The next
round re-enters AWAITING_CLASSIFICATION via ``advance()``. The machine reads
the session score but never writes it; only the ScoreTracker does.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from specious.errors import (
    EmptyGuess,
    InvalidTransition,
    MissingClassification,
    StaleResponse,
)
from specious.evaluation import evaluate_guess
from specious.ranks import DEFAULT_RANK, RANK_CATALOG, RankCatalog
from specious.resolver import resolve_rank_name
from specious.scoring import ScoreTracker
from specious.sequencing import ROUND_CHANNEL, SUGGESTION_CHANNEL, RequestSequencer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from specious.classification import ClassificationRecord, Observation

logger = logging.getLogger(__name__)


class RoundState(Enum):
    """States of a single round."""
    AWAITING_CLASSIFICATION = "awaiting_classification"
    AWAITING_GUESS = "awaiting_guess"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class GuessOutcome:
    """The result of one submitted guess.

    Attributes:
        correct_answer: Normalized correct name at the guessed rank, or None
            when the lineage has no entry at that rank.
        matched: Whether the guess was correct.
        rank_guessed: Rank key the player guessed at.
        points_awarded: Points earned by this guess (0 on a miss).
        score_after: Session score after applying this guess.
        guess: The normalized guess text.
        observation_link: Permalink of the round's observation.
        score_before: Session score before this guess, i.e. the total the
            player had reached when a miss resets it.
    """

    correct_answer: str | None
    matched: bool
    rank_guessed: str
    points_awarded: int
    score_after: int
    guess: str = ""
    observation_link: str = ""
    score_before: int = 0


class RoundStateMachine:
    """Orchestrates load -> guess -> resolve -> advance for each round.

    Example:
        >>> machine = RoundStateMachine()
        >>> machine.load_round(observation, record)
        True
        >>> machine.select_rank("class")
        >>> machine.submit_guess("Aves").matched
        True
    """

    def __init__(
        self,
        tracker: ScoreTracker | None = None,
        *,
        catalog: RankCatalog = RANK_CATALOG,
        default_rank: str = DEFAULT_RANK,
    ) -> None:
        self.catalog = catalog
        self.tracker = tracker if tracker is not None else ScoreTracker(catalog=catalog)
        self.default_rank = catalog.lookup(default_rank).key
        self.sequencer = RequestSequencer()

        self._state = RoundState.AWAITING_CLASSIFICATION
        self._observation: Observation | None = None
        self._record: ClassificationRecord | None = None
        self._selected_rank = self.default_rank
        self._guess_text = ""
        self._suggestions: list = []
        self._outcome: GuessOutcome | None = None

    # Read-only views for the presentation layer

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def observation(self) -> Observation | None:
        return self._observation

    @property
    def record(self) -> ClassificationRecord | None:
        return self._record

    @property
    def selected_rank(self) -> str:
        return self._selected_rank

    @property
    def guess_text(self) -> str:
        return self._guess_text

    @property
    def suggestions(self) -> list:
        return list(self._suggestions)

    @property
    def outcome(self) -> GuessOutcome | None:
        return self._outcome

    @property
    def score(self) -> int:
        return self.tracker.score

    # Transitions

    def begin_load(self) -> int:
        """Issue a ticket for a round request while awaiting a classification.

        Use for the first round or to retry after the provider found nothing.
        Any response carrying an earlier ticket is discarded.
        """
        if self._state is RoundState.AWAITING_GUESS:
            raise InvalidTransition("Cannot request a new round while a guess is pending")
        return self.sequencer.issue(ROUND_CHANNEL)

    def load_round(
        self,
        observation: Observation | None,
        record: ClassificationRecord | None,
        ticket: int | None = None,
    ) -> bool:
        """Load a new observation and its classification.

        Args:
            observation: The observation to show.
            record: Its classification record.
            ticket: The round ticket the request was issued with. When None,
                the load is treated as the latest request.

        Returns:
            True if the round was loaded, False if the response was stale
            and discarded.

        Raises:
            InvalidTransition: If a guess is pending for the current round.
            MissingClassification: If ``record`` is None.
        """
        if ticket is not None:
            try:
                self.sequencer.check(ROUND_CHANNEL, ticket)
            except StaleResponse as e:
                logger.debug("Discarding round load: %s", e)
                return False

        if self._state is RoundState.AWAITING_GUESS:
            raise InvalidTransition("Cannot load a new round before the current one is resolved")
        if ticket is None:
            ticket = self.sequencer.issue(ROUND_CHANNEL)

        if record is None:
            raise MissingClassification("No classification record supplied for this round")

        self._observation = observation
        self._record = record
        self._selected_rank = self.default_rank
        self._guess_text = ""
        self._suggestions = []
        self._outcome = None
        self._state = RoundState.AWAITING_GUESS

        # Invalidate suggestion requests issued for the previous round
        self.sequencer.issue(SUGGESTION_CHANNEL)

        logger.info("Loaded round %d: %r", ticket, record)
        return True

    def _require_guessing(self, operation: str) -> None:
        if self._state is RoundState.AWAITING_CLASSIFICATION:
            raise MissingClassification(f"Cannot {operation} before a classification is loaded")
        if self._state is RoundState.RESOLVED:
            raise InvalidTransition(f"Cannot {operation} after the round is resolved")

    def select_rank(self, rank_key: str) -> None:
        """Choose the rank the next guess is made at.

        Raises:
            UnknownRank: If the rank is not in the catalog.
        """
        self._require_guessing("select a rank")
        self._selected_rank = self.catalog.lookup(rank_key).key

    def set_guess_text(self, text: str) -> None:
        """Record the in-progress guess text."""
        self._require_guessing("type a guess")
        self._guess_text = text

    def submit_guess(self, guess_text: str | None = None) -> GuessOutcome:
        """Evaluate a guess at the selected rank and resolve the round.

        Args:
            guess_text: The guess. Defaults to the recorded guess text.

        Raises:
            MissingClassification: If no classification is loaded. The
                session score is left unchanged.
            InvalidTransition: If the round is already resolved.
            EmptyGuess: If the guess is blank after trimming.
        """
        self._require_guessing("submit a guess")
        if guess_text is None:
            guess_text = self._guess_text
        if not guess_text or not guess_text.strip():
            raise EmptyGuess("Type a guess before submitting")

        rank = self._selected_rank
        correct_name = resolve_rank_name(self._record, rank)
        verdict = evaluate_guess(guess_text, correct_name)
        score_before = self.tracker.score
        points = self.tracker.points_for(verdict.matched, rank)
        score_after = self.tracker.apply(verdict.matched, rank)

        self._outcome = GuessOutcome(
            correct_answer=correct_name,
            matched=verdict.matched,
            rank_guessed=rank,
            points_awarded=points,
            score_after=score_after,
            guess=verdict.normalized_guess,
            observation_link=self._observation.permalink if self._observation else "",
            score_before=score_before,
        )
        self._guess_text = guess_text
        self._suggestions = []
        self._state = RoundState.RESOLVED

        logger.info(
            "Guess %r at %s: %s (+%d, score %d)",
            verdict.normalized_guess,
            rank,
            "correct" if verdict.matched else "wrong",
            points,
            score_after,
        )
        return self._outcome

    def advance(self) -> int:
        """Leave a resolved round and request the next one.

        Returns:
            The round ticket to pass to the following ``load_round``.

        Raises:
            InvalidTransition: If the current round is not resolved.
        """
        if self._state is not RoundState.RESOLVED:
            raise InvalidTransition("Cannot advance before the round is resolved")
        self._state = RoundState.AWAITING_CLASSIFICATION
        logger.debug("Advancing to next round")
        return self.begin_load()

    # Autocomplete

    def begin_suggestions(self) -> int:
        """Issue a ticket for an autocomplete request."""
        return self.sequencer.issue(SUGGESTION_CHANNEL)

    def receive_suggestions(self, ticket: int, suggestions: Sequence) -> bool:
        """Store autocomplete results if they answer the latest request.

        Returns:
            True if stored, False if the results were stale and discarded.
        """
        try:
            self.sequencer.check(SUGGESTION_CHANNEL, ticket)
        except StaleResponse as e:
            logger.debug("Discarding suggestions: %s", e)
            return False
        self._suggestions = list(suggestions)
        return True

    def clear_suggestions(self) -> None:
        self._suggestions = []

    def __repr__(self) -> str:
        return (
            f"RoundStateMachine(state={self._state.value}, rank={self._selected_rank!r}, "
            f"score={self.score})"
        )
