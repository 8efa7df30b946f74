"""Taxonomic ranks playable in Specious and the points each one is worth."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

from specious.errors import UnknownRank


@dataclass(frozen=True)
class RankLevel:
    """A guessable rank.

    Attributes:
        name: Display name (e.g., 'Class').
        key: Canonical rank key as used by the taxonomy provider (e.g., 'class').
        points: Points awarded for a correct guess at this rank.
    """

    name: str
    key: str
    points: int


# Major taxonomic ranks in hierarchical order (high to low)
RANK_LEVELS = (
    RankLevel("Kingdom", "kingdom", 100),
    RankLevel("Phylum", "phylum", 200),
    RankLevel("Class", "class", 300),
    RankLevel("Order", "order", 400),
    RankLevel("Family", "family", 600),
    RankLevel("Genus", "genus", 800),
    RankLevel("Species", "species", 1000),
)

DEFAULT_RANK = "species"


class RankCatalog:
    """Read-only, ordered table of rank levels."""

    def __init__(self, levels: tuple[RankLevel, ...] = RANK_LEVELS) -> None:
        self._levels = tuple(levels)
        self._by_key: dict[str, RankLevel] = {}
        for level in self._levels:
            if level.key in self._by_key:
                raise ValueError(f"Duplicate rank key: {level.key!r}")
            if level.points <= 0:
                raise ValueError(f"Rank {level.key!r} must be worth positive points")
            self._by_key[level.key] = level

    @staticmethod
    def normalize_key(key: str) -> str:
        """Normalize a rank key coming from user input."""
        return key.strip().lower()

    def lookup(self, key: str) -> RankLevel:
        """Get the rank level for a key.

        Raises:
            UnknownRank: If the key is not a playable rank.
        """
        level = self._by_key.get(self.normalize_key(key)) if isinstance(key, str) else None
        if level is None:
            raise UnknownRank(key)
        return level

    def keys(self) -> list[str]:
        """Get rank keys from broadest to narrowest."""
        return [level.key for level in self._levels]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.normalize_key(key) in self._by_key

    def __iter__(self) -> Iterator[RankLevel]:
        return iter(self._levels)

    def __len__(self) -> int:
        return len(self._levels)

    def __repr__(self) -> str:
        return f"RankCatalog({', '.join(self.keys())})"


RANK_CATALOG = RankCatalog()
