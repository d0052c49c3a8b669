"""Client settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

_DEFAULT_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class RestSettings:
    """Connection settings shared by every service bound to one API.

    Attributes:
        base_url: API root that relative endpoint URLs are resolved against.
        timeout_s: Per-request timeout handed to the transport.
        api_token: Optional bearer token sent in ``Authorization``.
    """

    base_url: str = ""
    timeout_s: float = _DEFAULT_TIMEOUT_S
    api_token: str | None = None

    @classmethod
    def from_env(cls) -> RestSettings:
        """Build settings from ``PAGEREST_*`` environment variables.

        Raises ``ValueError`` if ``PAGEREST_TIMEOUT_S`` is not a positive number.
        """
        raw_timeout = os.environ.get("PAGEREST_TIMEOUT_S", "").strip()
        timeout_s = float(raw_timeout) if raw_timeout else _DEFAULT_TIMEOUT_S
        if timeout_s <= 0:
            raise ValueError(f"PAGEREST_TIMEOUT_S must be positive, got {raw_timeout!r}")
        return cls(
            base_url=os.environ.get("PAGEREST_BASE_URL", "").strip(),
            timeout_s=timeout_s,
            api_token=os.environ.get("PAGEREST_API_TOKEN") or None,
        )
