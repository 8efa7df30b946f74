"""Resolve the correct name at a given rank from a classification record."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from specious.classification import ClassificationRecord


def normalize_name(name: str) -> str:
    """Normalize a taxon name for comparison (trimmed, lowercase)."""
    return name.strip().lower()


def resolve_rank_name(record: ClassificationRecord, target_rank: str) -> str | None:
    """Find the normalized name at ``target_rank`` in a classification.

    The subject's own rank takes precedence over the ancestors. Otherwise the
    first ancestor with a matching rank wins, scanning root to leaf, so
    duplicate rank labels from collapsed clades resolve to the broadest one.

    Args:
        record: The classification to search.
        target_rank: Rank key to resolve (e.g., 'class').

    Returns:
        The lowercase, trimmed name, or None if the lineage has no entry at
        that rank. None is a normal outcome, not an error.
    """
    if record.rank == target_rank:
        return normalize_name(record.name)

    for ancestor in record.ancestors:
        if ancestor.rank == target_rank:
            return normalize_name(ancestor.name)

    return None
