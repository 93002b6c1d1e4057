"""Top-level entry point composing configuration, transport and accessors."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests  # pylint: disable=import-error

from .config import Config
from .retry import RetryPolicy
from .resources import Collections, Models, Predictions, Trainings
from .schemas import Prediction
from .transport import Transport


logger = logging.getLogger(__name__)


class ReplicateClient:  # pylint: disable=too-few-public-methods
    """
    Client for the Replicate HTTP API.

    Usage:
        cfg = Config(api_token="r8_...")
        client = ReplicateClient(cfg)
        result = client.run("owner/model:version", {"prompt": "hello"})
        print(result.output)

    Raises MissingCredentialsError when the config has no API token.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or Config.from_env()
        self.config.check_auth()
        self.transport = Transport(self.config, session=session)

        self.predictions = Predictions(self.transport)
        self.models = Models(self.transport)
        self.trainings = Trainings(self.transport)
        self.collections = Collections(self.transport)
        logger.debug("Initialized ReplicateClient with base_url=%s", self.config.base_url)

    def run(  # pylint: disable=redefined-builtin
        self,
        version: str,
        input: Dict[str, Any],
        retry_policy: Optional[RetryPolicy] = None,
    ) -> Prediction:
        """Create a prediction and block until it reaches a terminal status.

        Failed and canceled predictions are returned, not raised; inspect
        ``status`` and ``error`` on the result.
        """
        return self.predictions.create(version, input).wait(retry_policy)


def create_client(
    config: Optional[Config] = None, session: Optional[requests.Session] = None
) -> ReplicateClient:
    """Factory to create a ReplicateClient with the given config or the environment."""
    return ReplicateClient(config, session=session)


__all__ = ["ReplicateClient", "create_client"]
