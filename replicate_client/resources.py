"""Stateless accessors for the non-polling endpoints.

Each accessor builds a URL from the shared Config, issues one request through
the shared Transport and decodes the body. Listing methods accept a
``cursor`` (the ``next`` or ``previous`` URL of an earlier page) which is
requested verbatim.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .prediction import PredictionClient
from .schemas import (
    Collection,
    CollectionSummary,
    Model,
    ModelVersion,
    Page,
    Prediction,
    PredictionSummary,
    Training,
    TrainingRequest,
    TrainingSummary,
    WebhookEvent,
)
from .transport import Transport


logger = logging.getLogger(__name__)


class _Resource:  # pylint: disable=too-few-public-methods
    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def _list_url(self, path: str, cursor: Optional[str]) -> str:
        return cursor if cursor else self._transport.url(path)


class Predictions(_Resource):
    """``/predictions`` endpoints."""

    def create(  # pylint: disable=redefined-builtin
        self, version: str, input: Dict[str, Any]
    ) -> PredictionClient:
        """Start a prediction and return a handle that can wait or cancel."""
        return PredictionClient.create(self._transport, version, input)

    def get(self, prediction_id: str) -> Prediction:
        return self._transport.get(
            self._transport.url(f"/predictions/{prediction_id}"), Prediction.from_dict
        )

    def list(self, cursor: Optional[str] = None) -> Page[PredictionSummary]:
        return self._transport.get(
            self._list_url("/predictions", cursor),
            lambda data: Page.from_dict(data, PredictionSummary.from_dict),
        )

    def cancel(self, prediction_id: str) -> Prediction:
        """Cancel by id and return the refreshed prediction.

        Needs only the id, so a prediction blocked in ``wait()`` on one
        thread can be canceled from another thread through that thread's
        own ReplicateClient; clients are not shared across threads.
        """
        logger.info("Canceling prediction %s", prediction_id)
        self._transport.request(
            "POST", self._transport.url(f"/predictions/{prediction_id}/cancel")
        )
        return self.get(prediction_id)


class Versions(_Resource):
    """``/models/{owner}/{name}/versions`` endpoints."""

    def get(self, owner: str, name: str, version_id: str) -> ModelVersion:
        return self._transport.get(
            self._transport.url(f"/models/{owner}/{name}/versions/{version_id}"),
            ModelVersion.from_dict,
        )

    def list(
        self, owner: str, name: str, cursor: Optional[str] = None
    ) -> Page[ModelVersion]:
        return self._transport.get(
            self._list_url(f"/models/{owner}/{name}/versions", cursor),
            lambda data: Page.from_dict(data, ModelVersion.from_dict),
        )


class Models(_Resource):
    """``/models`` endpoints; versions are reachable as ``models.versions``."""

    def __init__(self, transport: Transport) -> None:
        super().__init__(transport)
        self.versions = Versions(transport)

    def get(self, owner: str, name: str) -> Model:
        return self._transport.get(
            self._transport.url(f"/models/{owner}/{name}"), Model.from_dict
        )


class Trainings(_Resource):
    """``/trainings`` endpoints. There is no polling helper for trainings."""

    def create(  # pylint: disable=too-many-arguments,too-many-positional-arguments,redefined-builtin
        self,
        owner: str,
        name: str,
        version_id: str,
        destination: str,
        input: Dict[str, Any],
        webhook: Optional[str] = None,
        webhook_events_filter: Optional[List[WebhookEvent]] = None,
    ) -> Training:
        body = TrainingRequest(
            destination=destination,
            input=input,
            webhook=webhook,
            webhook_events_filter=webhook_events_filter,
        )
        training = self._transport.post(
            self._transport.url(
                f"/models/{owner}/{name}/versions/{version_id}/trainings"
            ),
            Training.from_dict,
            body.to_dict(),
        )
        logger.info("Created training %s -> %s", training.id, destination)
        return training

    def get(self, training_id: str) -> Training:
        return self._transport.get(
            self._transport.url(f"/trainings/{training_id}"), Training.from_dict
        )

    def list(self, cursor: Optional[str] = None) -> Page[TrainingSummary]:
        return self._transport.get(
            self._list_url("/trainings", cursor),
            lambda data: Page.from_dict(data, TrainingSummary.from_dict),
        )

    def cancel(self, training_id: str) -> Training:
        logger.info("Canceling training %s", training_id)
        self._transport.request(
            "POST", self._transport.url(f"/trainings/{training_id}/cancel")
        )
        return self.get(training_id)


class Collections(_Resource):
    """``/collections`` endpoints."""

    def get(self, slug: str) -> Collection:
        return self._transport.get(
            self._transport.url(f"/collections/{slug}"), Collection.from_dict
        )

    def list(self, cursor: Optional[str] = None) -> Page[CollectionSummary]:
        return self._transport.get(
            self._list_url("/collections", cursor),
            lambda data: Page.from_dict(data, CollectionSummary.from_dict),
        )


__all__ = ["Predictions", "Models", "Versions", "Trainings", "Collections"]
