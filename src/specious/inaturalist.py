"""iNaturalist API client.

Fetches random research-grade observations, full taxon detail with the
ancestor chain, and autocomplete candidates.

Reference: https://api.inaturalist.org/v1/docs/
"""

from __future__ import annotations

import logging
import random
from typing import Any

import requests

from specious.classification import ClassificationRecord, Observation, TaxonSuggestion
from specious.config import GameConfig
from specious.errors import NoResultsFound, ProviderError

logger = logging.getLogger(__name__)

# Only research-grade observations with openly licensed photos
OBSERVATION_FILTERS = {
    "quality_grade": "research",
    "has[]": "photos",
    "photo_license": "CC0,CC-BY",
    "per_page": 1,
}


class INaturalistClient:
    """Taxonomy data provider backed by the iNaturalist API.

    Example:
        >>> client = INaturalistClient()
        >>> obs = client.fetch_random_observation(filter_taxon_id="3")
        >>> record = client.fetch_classification(obs.classification_id)
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        session: requests.Session | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Game configuration (base URL, timeout, photo size).
            session: HTTP session to use. A new one is created if omitted.
            rng: Random generator for picking observation pages.
        """
        self.config = config or GameConfig()
        self.session = session or requests.Session()
        self.session.headers.update({
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
        })
        self.rng = rng or random.Random()

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET a JSON document from the API.

        Raises:
            ProviderError: On connection errors, timeouts, HTTP errors or
                a response body that is not JSON.
        """
        url = f"{self.config.api_base_url}/{path.lstrip('/')}"
        try:
            response = self.session.get(url, params=params, timeout=self.config.request_timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout as e:
            logger.warning("Request to %s timed out", url)
            raise ProviderError(f"Request to {url} timed out") from e
        except requests.exceptions.RequestException as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise ProviderError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            logger.warning("Invalid JSON from %s", url)
            raise ProviderError(f"Invalid JSON from {url}") from e

    @staticmethod
    def _results(data: dict[str, Any]) -> list[dict[str, Any]]:
        return data.get("results") or []

    def fetch_random_observation(self, filter_taxon_id: str | int | None = None) -> Observation:
        """Fetch one random observation, optionally within a taxon.

        Raises:
            NoResultsFound: If nothing matched the filter on the chosen page.
            ProviderError: If the request failed.
        """
        params = dict(OBSERVATION_FILTERS)
        params["page"] = self.rng.randint(1, self.config.max_random_page)
        if filter_taxon_id:
            params["taxon_id"] = filter_taxon_id

        results = self._results(self._get("observations", params))
        if not results:
            raise NoResultsFound(
                "No observations found for that group. Try another filter."
            )

        observation = Observation.from_api(results[0], photo_size=self.config.photo_size)
        logger.debug("Fetched observation %s (taxon %s)", observation.id, observation.classification_id)
        return observation

    def fetch_classification(self, taxon_id: str | int) -> ClassificationRecord:
        """Fetch a taxon with its ancestors in root-to-leaf order.

        Raises:
            NoResultsFound: If the taxon does not exist.
            ProviderError: If the request failed.
        """
        results = self._results(self._get(f"taxa/{taxon_id}"))
        if not results:
            raise NoResultsFound(f"No taxon found with ID {taxon_id}")
        return ClassificationRecord.from_api(results[0])

    def fetch_autocomplete(self, query: str) -> list[TaxonSuggestion]:
        """Fetch taxa whose names start with ``query``.

        A blank query returns an empty list without a request.
        """
        if not query.strip():
            return []
        results = self._results(self._get("taxa/autocomplete", {"q": query.strip()}))
        return [TaxonSuggestion.from_api(r) for r in results]
