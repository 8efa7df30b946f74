"""Exceptions raised by the Specious round engine and provider client.

Engine errors are precondition violations on the public round operations.
They are recoverable: front ends catch them and re-prompt the player.
"""

from __future__ import annotations


class SpeciousError(Exception):
    """Base class for all Specious errors."""


class MissingClassification(SpeciousError):
    """No classification record is available for the current round."""


class UnknownRank(SpeciousError):
    """A rank key is not part of the rank catalog."""

    def __init__(self, rank: str) -> None:
        super().__init__(f"Unknown rank: {rank!r}")
        self.rank = rank


class EmptyGuess(SpeciousError):
    """The guess text is blank after trimming."""


class InvalidTransition(SpeciousError):
    """An operation was called in a round state that does not allow it."""


class StaleResponse(SpeciousError):
    """A provider response arrived for a request that is no longer current."""

    def __init__(self, channel: str, ticket: int, latest: int) -> None:
        super().__init__(
            f"Stale {channel} response: ticket {ticket}, latest issued {latest}"
        )
        self.channel = channel
        self.ticket = ticket
        self.latest = latest


class NoResultsFound(SpeciousError):
    """The taxonomy provider returned an empty result set."""


class ProviderError(SpeciousError):
    """The taxonomy provider could not be reached or returned an error."""
