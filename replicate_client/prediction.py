"""Lifecycle handle for a single prediction: create, reload, cancel, wait."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .errors import DeserializationError, InvalidVersionError, RetryExhaustedError
from .identifiers import parse_version
from .retry import RetryPolicy
from .schemas import Prediction, PredictionStatus
from .transport import Transport


logger = logging.getLogger(__name__)


class PredictionClient:
    """
    Owns the local copy of one prediction's server state.

    State only changes by re-fetching the prediction from the API; the
    client never advances the status itself.

    Usage:
        handle = PredictionClient.create(transport, "owner/model:abc", {"x": 1})
        final = handle.wait()
        if final.status is PredictionStatus.SUCCEEDED:
            print(final.output)
    """

    def __init__(self, transport: Transport, prediction: Prediction) -> None:
        self._transport = transport
        self.prediction = prediction

    @classmethod
    def create(  # pylint: disable=redefined-builtin
        cls, transport: Transport, version: str, input: Dict[str, Any]
    ) -> "PredictionClient":
        """Start a prediction of ``owner/name:version`` with ``input``.

        Only the version part of the reference is sent to the API.
        """
        parsed = parse_version(version)
        if parsed is None:
            raise InvalidVersionError(version)
        _model, version_id = parsed

        prediction = transport.post(
            transport.url("/predictions"),
            Prediction.from_dict,
            {"version": version_id, "input": input},
        )
        logger.info(
            "Created prediction %s (%s)", prediction.id, prediction.status.value
        )
        return cls(transport, prediction)

    @property
    def id(self) -> str:
        return self.prediction.id

    @property
    def status(self) -> PredictionStatus:
        return self.prediction.status

    @property
    def output(self) -> Any:
        return self.prediction.output

    @property
    def error(self) -> Optional[str]:
        return self.prediction.error

    @property
    def logs(self) -> Optional[str]:
        return self.prediction.logs

    def _get_url(self) -> str:
        urls = self.prediction.urls
        if urls is not None and urls.get:
            return urls.get
        return self._transport.url(f"/predictions/{self.id}")

    def _cancel_url(self) -> str:
        urls = self.prediction.urls
        if urls is not None and urls.cancel:
            return urls.cancel
        return self._transport.url(f"/predictions/{self.id}/cancel")

    def reload(self) -> None:
        """Replace the local state with the server's current view."""
        fresh = self._transport.get(self._get_url(), Prediction.from_dict)
        if fresh.id != self.id:
            raise DeserializationError(
                f"expected prediction {self.id}, got {fresh.id}"
            )
        if fresh.status != self.prediction.status:
            logger.debug(
                "Prediction %s: %s -> %s",
                self.id,
                self.prediction.status.value,
                fresh.status.value,
            )
        self.prediction = fresh

    def cancel(self) -> None:
        """Ask the API to cancel, then reload the authoritative status."""
        logger.info("Canceling prediction %s", self.id)
        self._transport.request("POST", self._cancel_url())
        self.reload()

    def wait(self, retry_policy: Optional[RetryPolicy] = None) -> Prediction:
        """Poll until the prediction reaches a terminal status.

        Returns the final Prediction for every terminal status, including
        failed and canceled ones; check ``status`` before reading ``output``.
        Raises RetryExhaustedError once the policy's attempt budget is spent.
        """
        policy = retry_policy or self._transport.config.default_retry_policy()
        attempts = 0
        while True:
            self.reload()
            attempts += 1
            if self.status.is_terminal:
                logger.info(
                    "Prediction %s finished with status %s after %d polls",
                    self.id,
                    self.status.value,
                    attempts,
                )
                return self.prediction
            if policy.exhausted(attempts):
                raise RetryExhaustedError(self.prediction, attempts)
            policy.step(attempts)

    def __repr__(self) -> str:
        return f"PredictionClient(id={self.id!r}, status={self.status.value!r})"


__all__ = ["PredictionClient"]
