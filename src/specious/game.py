"""Game driver connecting the taxonomy provider to the round engine.

The engine never fetches data itself. This driver plays the caller's part:
it issues round tickets, fetches observations and classifications, and hands
them to the state machine.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

from specious.config import GameConfig
from specious.round import RoundState, RoundStateMachine
from specious.scoring import ScoreTracker

if TYPE_CHECKING:
    from specious.classification import ClassificationRecord, Observation, TaxonSuggestion
    from specious.round import GuessOutcome

logger = logging.getLogger(__name__)


class TaxonomyProvider(Protocol):
    """What the game needs from a taxonomy data source."""

    def fetch_random_observation(self, filter_taxon_id: str | None = None) -> Observation: ...

    def fetch_classification(self, taxon_id: str) -> ClassificationRecord: ...

    def fetch_autocomplete(self, query: str) -> list[TaxonSuggestion]: ...


class SpeciousGame:
    """One player's play session."""

    def __init__(self, provider: TaxonomyProvider, config: GameConfig | None = None) -> None:
        self.provider = provider
        self.config = config or GameConfig()
        self.machine = RoundStateMachine(
            ScoreTracker(reset_on_miss=self.config.reset_on_miss),
            default_rank=self.config.default_rank,
        )
        self.filter: TaxonSuggestion | None = None
        self.filter_results: list[TaxonSuggestion] = []

    @property
    def state(self) -> RoundState:
        return self.machine.state

    @property
    def score(self) -> int:
        return self.machine.score

    def set_filter(self, taxon: TaxonSuggestion | None) -> None:
        """Restrict future rounds to observations within ``taxon`` (None for all life)."""
        self.filter = taxon
        self.filter_results = []
        if taxon:
            logger.info("Filtering observations to %s (%s)", taxon.name, taxon.id)

    def search_filters(self, query: str) -> list[TaxonSuggestion]:
        """Look up taxa the player can filter rounds by."""
        self.filter_results = self.provider.fetch_autocomplete(query)
        return self.filter_results

    def start_round(self) -> bool:
        """Fetch and load a round.

        Advances out of a resolved round first. On NoResultsFound or
        ProviderError the machine stays awaiting a classification and the
        score is untouched, so the call can simply be retried.

        Returns:
            True if the round was loaded, False if a newer request superseded it.
        """
        if self.machine.state is RoundState.RESOLVED:
            ticket = self.machine.advance()
        else:
            ticket = self.machine.begin_load()

        filter_id = self.filter.id if self.filter else None
        observation = self.provider.fetch_random_observation(filter_id)
        record = self.provider.fetch_classification(observation.classification_id)
        return self.machine.load_round(observation, record, ticket)

    next_round = start_round

    def select_rank(self, rank_key: str) -> None:
        self.machine.select_rank(rank_key)

    def type_guess(self, text: str) -> list[TaxonSuggestion]:
        """Record guess text and refresh the guess suggestions."""
        self.machine.set_guess_text(text)
        if not text.strip():
            self.machine.clear_suggestions()
            return []
        ticket = self.machine.begin_suggestions()
        suggestions = self.provider.fetch_autocomplete(text)
        self.machine.receive_suggestions(ticket, suggestions)
        return self.machine.suggestions

    def submit_guess(self, text: str | None = None) -> GuessOutcome:
        return self.machine.submit_guess(text)
