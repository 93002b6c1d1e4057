"""Exception hierarchy raised by the client.

Every public operation surfaces one of these; the underlying ``requests``
or decoding exception is chained as ``__cause__``.
"""

from __future__ import annotations

from typing import Any, Optional


class ReplicateError(Exception):
    """Base class for every error raised by replicate_client."""


class TransportError(ReplicateError):
    """The request never produced a response (connection error, timeout)."""


class ResponseError(ReplicateError):
    """The API answered with a status outside 2xx."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Received a non 2xx response ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class DeserializationError(ReplicateError):
    """The response body was not JSON or did not have the expected shape."""

    def __init__(self, message: str, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.body = body


class InvalidVersionError(ReplicateError):
    """A model or version reference was malformed."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Invalid version string: {reference!r}")
        self.reference = reference


class RetryExhaustedError(ReplicateError):
    """wait() spent its attempt budget before a terminal status."""

    def __init__(self, prediction: Any, attempts: int) -> None:
        super().__init__(
            f"Prediction {prediction.id} still {prediction.status.value} "
            f"after {attempts} polls"
        )
        self.prediction = prediction
        self.attempts = attempts


class ConfigError(ReplicateError):
    """A configuration value is missing or malformed."""


class MissingCredentialsError(ConfigError):
    """No API token was configured."""


__all__ = [
    "ReplicateError",
    "TransportError",
    "ResponseError",
    "DeserializationError",
    "InvalidVersionError",
    "RetryExhaustedError",
    "ConfigError",
    "MissingCredentialsError",
]
