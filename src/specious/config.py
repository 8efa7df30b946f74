"""Game configuration.

Immutable settings shared by the engine, the provider client and the front
ends. Values are validated on construction.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from specious.ranks import DEFAULT_RANK, RANK_CATALOG

DEFAULT_API_BASE_URL = "https://api.inaturalist.org/v1"
DEFAULT_USER_AGENT = "Specious/0.1 (identification quiz; educational project)"

ENV_PREFIX = "SPECIOUS_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class GameConfig:
    """Configuration for a play session.

    Attributes:
        reset_on_miss: Reset the score to zero on a wrong guess. When False,
            a wrong guess leaves the running total unchanged.
        default_rank: Rank selected at the start of every round.
        api_base_url: Base URL of the iNaturalist API.
        request_timeout: Timeout in seconds for each provider request.
        max_random_page: Upper bound of the random observation page.
        photo_size: iNaturalist photo size to display ('small', 'medium', 'large').
        user_agent: User-Agent header sent to the provider.

    Example:
        >>> config = GameConfig(reset_on_miss=False)
    """

    reset_on_miss: bool = True
    default_rank: str = DEFAULT_RANK
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = 30.0
    max_random_page: int = 500
    photo_size: str = "medium"
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if self.default_rank not in RANK_CATALOG:
            raise ValueError(f"default_rank must be one of {RANK_CATALOG.keys()}")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")
        if self.max_random_page < 1:
            raise ValueError("max_random_page must be at least 1")
        if not self.api_base_url:
            raise ValueError("api_base_url must not be empty")
        # Normalize so that path joins never produce a double slash
        object.__setattr__(self, "api_base_url", self.api_base_url.rstrip("/"))

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> GameConfig:
        """Build a configuration from ``SPECIOUS_*`` environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable has an invalid value.
        """
        env = os.environ if environ is None else environ
        converters = {
            "reset_on_miss": lambda v: _parse_bool(ENV_PREFIX + "RESET_ON_MISS", v),
            "default_rank": lambda v: v.strip().lower(),
            "api_base_url": str.strip,
            "request_timeout": float,
            "max_random_page": int,
            "photo_size": str.strip,
            "user_agent": str.strip,
        }

        kwargs: dict[str, object] = {}
        for field_name, convert in converters.items():
            value = env.get(ENV_PREFIX + field_name.upper())
            if value is not None:
                kwargs[field_name] = convert(value)

        return cls(**kwargs)
