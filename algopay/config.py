"""
Ledger node configuration.

Values come from an explicit mapping first, then the environment, then
defaults that point at a local sandbox node:

    ALGOD_URL        node base URL           (http://localhost:4001)
    ALGOD_TOKEN      X-Algo-API-Token value  (64 × "a", sandbox token)
    ALGOD_TIMEOUT_S  request timeout, secs   (30.0)
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_ALGOD_URL = "http://localhost:4001"
DEFAULT_ALGOD_TOKEN = "a" * 64
DEFAULT_TIMEOUT_S = 30.0


@dataclass(frozen=True)
class AlgodConfig:
    """Connection settings for an algod node.

    Attributes:
        url: Base URL, without trailing slash.
        token: API token sent as X-Algo-API-Token. Empty for public nodes.
        timeout_s: Request timeout in seconds.
    """

    url: str = DEFAULT_ALGOD_URL
    token: str = DEFAULT_ALGOD_TOKEN
    timeout_s: float = DEFAULT_TIMEOUT_S

    def __post_init__(self) -> None:
        if not self.url:
            raise ValueError("url must be non-empty")
        if not math.isfinite(self.timeout_s) or self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be a finite number > 0, got: {self.timeout_s!r}")
        object.__setattr__(self, "url", self.url.rstrip("/"))

    @classmethod
    def from_env(
        cls,
        overrides: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> AlgodConfig:
        """Build a config from overrides, then the environment.

        Args:
            overrides: Keys ``url``, ``token``, ``timeout_s``. None values
                are ignored.
            environ: Environment to read. Defaults to ``os.environ``.

        Raises:
            ValueError: If ALGOD_TIMEOUT_S is not a number.
        """
        overrides = overrides or {}
        env = os.environ if environ is None else environ

        url = overrides.get("url") or env.get("ALGOD_URL", DEFAULT_ALGOD_URL)
        token = overrides.get("token")
        if token is None:
            token = env.get("ALGOD_TOKEN", DEFAULT_ALGOD_TOKEN)
        timeout_raw = overrides.get("timeout_s") or env.get("ALGOD_TIMEOUT_S")
        try:
            timeout_s = float(timeout_raw) if timeout_raw is not None else DEFAULT_TIMEOUT_S
        except ValueError as exc:
            raise ValueError(f"ALGOD_TIMEOUT_S must be a number, got: {timeout_raw!r}") from exc

        return cls(url=url, token=token, timeout_s=timeout_s)
