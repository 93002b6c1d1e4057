"""Client configuration, optionally read from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from . import __version__
from .errors import ConfigError, MissingCredentialsError
from .retry import FixedDelay, RetryPolicy


DEFAULT_BASE_URL = "https://api.replicate.com/v1"
DEFAULT_USER_AGENT = f"replicate-client/{__version__}"


def _env_number(name: str, cast, default):
    """Read a numeric variable; unset or empty gives ``default``."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {raw!r}")
    return value


def _env_attempts(name: str, default: Optional[int]) -> Optional[int]:
    # 0 means poll until a terminal status
    return _env_number(name, int, default) or None


@dataclass(frozen=True)
class Config:  # pylint: disable=too-many-instance-attributes
    """Configuration shared by the transport and every accessor."""

    api_token: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: Optional[float] = None
    verify_ssl: bool = True
    poll_interval_ms: int = 1000
    max_poll_attempts: Optional[int] = 600

    @classmethod
    def from_env(cls) -> "Config":
        """Build a Config from ``REPLICATE_*`` environment variables.

        Raises ConfigError naming the variable when a number is malformed.
        """
        return cls(
            api_token=os.getenv("REPLICATE_API_TOKEN") or None,
            base_url=os.getenv("REPLICATE_BASE_URL") or DEFAULT_BASE_URL,
            timeout=_env_number("REPLICATE_TIMEOUT", float, None),
            verify_ssl=(
                os.getenv("REPLICATE_VERIFY_SSL", "true").lower()
                not in ("0", "false")
            ),
            poll_interval_ms=_env_number("REPLICATE_POLL_INTERVAL_MS", int, 1000),
            max_poll_attempts=_env_attempts("REPLICATE_MAX_POLL_ATTEMPTS", 600),
        )

    def check_auth(self) -> None:
        """Raise MissingCredentialsError if no API token is set."""
        if not self.api_token:
            raise MissingCredentialsError(
                "No API token provided. Set the REPLICATE_API_TOKEN environment "
                "variable or pass Config(api_token=...). You can find your token "
                "on https://replicate.com/account"
            )

    def url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def default_retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_poll_attempts,
            strategy=FixedDelay(self.poll_interval_ms),
        )


__all__ = ["Config", "DEFAULT_BASE_URL", "DEFAULT_USER_AGENT"]
