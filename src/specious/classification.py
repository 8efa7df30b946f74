"""Observation and classification records supplied by the taxonomy provider.

These mirror the subset of iNaturalist's observation and taxon JSON that a
round needs. Records are immutable once received; each round owns its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AncestorEntry:
    """One node in a classification's lineage."""

    rank: str
    name: str
    id: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> AncestorEntry:
        return cls(
            rank=(data.get("rank") or "").lower(),
            name=data.get("name") or "",
            id=str(data.get("id") or ""),
        )


@dataclass(frozen=True)
class ClassificationRecord:
    """The subject taxon's own rank and name plus its ancestor chain.

    The subject's own rank and name are authoritative for that rank. An
    ancestor at the same rank under a different name is kept but never used
    to resolve that rank, and is logged at debug level.

    Attributes:
        rank: Rank key of the subject itself (e.g., 'species').
        name: Scientific name of the subject.
        ancestors: Lineage in root-to-leaf order, excluding the subject.
        id: Provider taxon ID.
    """

    rank: str
    name: str
    ancestors: tuple[AncestorEntry, ...] = ()
    id: str = ""

    def __post_init__(self) -> None:
        # Accept any sequence but always store a tuple
        if not isinstance(self.ancestors, tuple):
            object.__setattr__(self, "ancestors", tuple(self.ancestors))
        for ancestor in self.ancestors:
            if ancestor.rank == self.rank and ancestor.name != self.name:
                logger.debug(
                    "Ancestor %r shares rank %r with subject %r; the subject wins",
                    ancestor.name,
                    self.rank,
                    self.name,
                )

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> ClassificationRecord:
        """Build a record from an iNaturalist taxon result.

        A missing or null ``ancestors`` field is treated as an empty lineage.
        """
        ancestors = tuple(AncestorEntry.from_api(a) for a in data.get("ancestors") or [])
        return cls(
            rank=(data.get("rank") or "").lower(),
            name=data.get("name") or "",
            ancestors=ancestors,
            id=str(data.get("id") or ""),
        )

    def get_lineage(self) -> list[AncestorEntry]:
        """Get the lineage from the root down to and including the subject."""
        return list(self.ancestors) + [AncestorEntry(self.rank, self.name, self.id)]

    def __repr__(self) -> str:
        return (
            f"ClassificationRecord({self.name!r}, rank={self.rank!r}, "
            f"ancestors={len(self.ancestors)})"
        )


@dataclass(frozen=True)
class Observation:
    """A research-grade observation with a photo.

    The engine treats this as opaque except for ``permalink``, which is shown
    to the player when the round ends.
    """

    id: str
    photo_url: str
    classification_id: str
    permalink: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any], photo_size: str = "medium") -> Observation:
        """Build an observation from an iNaturalist observation result.

        Photo URLs come back in their 'square' thumbnail size and are
        rewritten to ``photo_size``.
        """
        photos = data.get("photos") or []
        photo_url = photos[0].get("url", "") if photos else ""
        if photo_url:
            photo_url = photo_url.replace("square", photo_size)

        taxon = data.get("taxon") or {}
        return cls(
            id=str(data.get("id") or ""),
            photo_url=photo_url,
            classification_id=str(taxon.get("id") or ""),
            permalink=data.get("uri") or "",
        )


@dataclass(frozen=True)
class TaxonSuggestion:
    """An autocomplete candidate from the provider."""

    id: str
    name: str
    rank: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> TaxonSuggestion:
        return cls(
            id=str(data.get("id") or ""),
            name=data.get("name") or "",
            rank=(data.get("rank") or "").lower(),
        )
