"""Replicate API client package initialization."""

# pylint: disable=wrong-import-position,pointless-string-statement

from __future__ import annotations
import logging

"""
replicate_client package initializer.

Provides a small, synchronous ReplicateClient, its configuration dataclass,
typed response structures, and a factory to create a client from the
environment.
"""


__version__ = "0.1.0"


logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


from .config import Config
from .errors import (
    ConfigError,
    DeserializationError,
    InvalidVersionError,
    MissingCredentialsError,
    ReplicateError,
    ResponseError,
    RetryExhaustedError,
    TransportError,
)
from .identifiers import parse_version
from .prediction import PredictionClient
from .retry import FixedDelay, RetryPolicy
from .schemas import Prediction, PredictionSource, PredictionStatus
from .client import ReplicateClient, create_client


# package exports
__all__ = [
    "Config",
    "ReplicateClient",
    "create_client",
    "PredictionClient",
    "Prediction",
    "PredictionStatus",
    "PredictionSource",
    "RetryPolicy",
    "FixedDelay",
    "parse_version",
    "ReplicateError",
    "TransportError",
    "ResponseError",
    "DeserializationError",
    "InvalidVersionError",
    "RetryExhaustedError",
    "ConfigError",
    "MissingCredentialsError",
    "__version__",
]
