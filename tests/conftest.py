import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import specious without installing
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from specious.classification import (  # noqa: E402
    AncestorEntry,
    ClassificationRecord,
    Observation,
    TaxonSuggestion,
)
from specious.errors import NoResultsFound  # noqa: E402


@pytest.fixture
def aix_record():
    """Wood duck, with family and genus missing from the lineage."""
    return ClassificationRecord(
        rank="species",
        name="Aix sponsa",
        ancestors=(
            AncestorEntry("kingdom", "Animalia"),
            AncestorEntry("class", "Aves"),
            AncestorEntry("order", "Anseriformes"),
        ),
        id="7107",
    )


@pytest.fixture
def observation():
    return Observation(
        id="1001",
        photo_url="https://static.inaturalist.org/photos/1/medium.jpg",
        classification_id="7107",
        permalink="https://www.inaturalist.org/observations/1001",
    )


class FakeProvider:
    """In-memory taxonomy provider recording every call."""

    def __init__(self, observations=None, records=None, suggestions=None):
        self.observations = list(observations or [])
        self.records = dict(records or {})
        self.suggestions = dict(suggestions or {})
        self.calls = []

    def fetch_random_observation(self, filter_taxon_id=None):
        self.calls.append(("observation", filter_taxon_id))
        if not self.observations:
            raise NoResultsFound("No observations found for that group. Try another filter.")
        return self.observations.pop(0)

    def fetch_classification(self, taxon_id):
        self.calls.append(("classification", taxon_id))
        return self.records[taxon_id]

    def fetch_autocomplete(self, query):
        self.calls.append(("autocomplete", query))
        return list(self.suggestions.get(query.strip().lower(), []))


@pytest.fixture
def make_provider(aix_record, observation):
    """Factory for fresh fake providers loaded with two wood duck observations."""
    second = Observation(
        id="1002",
        photo_url="https://static.inaturalist.org/photos/2/medium.jpg",
        classification_id="7107",
        permalink="https://www.inaturalist.org/observations/1002",
    )

    def make(*_args):
        return FakeProvider(
            observations=[observation, second],
            records={"7107": aix_record},
            suggestions={
                "aves": [TaxonSuggestion("3", "Aves", "class")],
                "aix": [
                    TaxonSuggestion("7106", "Aix", "genus"),
                    TaxonSuggestion("7107", "Aix sponsa", "species"),
                ],
            },
        )

    return make


@pytest.fixture
def fake_provider(make_provider):
    return make_provider()
