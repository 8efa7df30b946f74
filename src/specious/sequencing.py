"""Sequence numbers for outbound provider requests.

Provider fetches are started independently and never cancelled, so a slow
response can arrive after a newer request on the same channel. Each request
gets a monotonically increasing ticket; only the latest ticket per channel is
accepted.
"""

from __future__ import annotations

from specious.errors import StaleResponse

ROUND_CHANNEL = "round"
SUGGESTION_CHANNEL = "suggestions"


class RequestSequencer:
    """Per-channel counters of issued request tickets."""

    def __init__(self) -> None:
        self._latest: dict[str, int] = {}

    def issue(self, channel: str) -> int:
        """Issue the next ticket on a channel."""
        ticket = self._latest.get(channel, 0) + 1
        self._latest[channel] = ticket
        return ticket

    def latest(self, channel: str) -> int:
        """Get the latest issued ticket (0 if none yet)."""
        return self._latest.get(channel, 0)

    def is_current(self, channel: str, ticket: int) -> bool:
        return ticket == self.latest(channel)

    def check(self, channel: str, ticket: int) -> None:
        """Verify that a response's ticket is still the latest issued.

        Raises:
            StaleResponse: If a newer request has been issued since.
        """
        if not self.is_current(channel, ticket):
            raise StaleResponse(channel, ticket, self.latest(channel))
