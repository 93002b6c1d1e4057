"""Tests for response decoding and wire enums."""

import json

import pytest

from conftest import prediction_body
from replicate_client.schemas import (
    Collection,
    Model,
    Page,
    Prediction,
    PredictionSource,
    PredictionStatus,
    PredictionSummary,
    TrainingRequest,
    WebhookEvent,
)


def test_status_wire_tokens():
    """Enum values are the exact lowercase wire strings."""
    assert [s.value for s in PredictionStatus] == [
        "starting",
        "processing",
        "succeeded",
        "failed",
        "canceled",
    ]
    assert [s.value for s in PredictionSource] == ["api", "web"]
    assert PredictionStatus("canceled") is PredictionStatus.CANCELED


def test_terminal_statuses():
    """Only succeeded, failed and canceled are terminal."""
    terminal = {s for s in PredictionStatus if s.is_terminal}
    assert terminal == {
        PredictionStatus.SUCCEEDED,
        PredictionStatus.FAILED,
        PredictionStatus.CANCELED,
    }


def test_unknown_status_is_rejected():
    """A token outside the enum raises ValueError."""
    with pytest.raises(ValueError):
        Prediction.from_dict(prediction_body(status="Succeeded"))


def test_prediction_from_dict():
    """All fields decode, including nested urls and free-form output."""
    body = prediction_body(
        status="succeeded",
        output=["https://example.com/out-0.png"],
        metrics={"predict_time": 1.5},
        completed_at="2022-04-26T20:02:27.648305Z",
    )
    prediction = Prediction.from_dict(body)
    assert prediction.id == "p1"
    assert prediction.status is PredictionStatus.SUCCEEDED
    assert prediction.source is PredictionSource.API
    assert prediction.urls.get.endswith("/predictions/p1")
    assert prediction.output == ["https://example.com/out-0.png"]
    assert prediction.metrics == {"predict_time": 1.5}


def test_prediction_missing_id_raises_key_error():
    """Required keys are enforced."""
    body = prediction_body()
    del body["id"]
    with pytest.raises(KeyError):
        Prediction.from_dict(body)


def test_prediction_to_dict_is_json_ready():
    """to_dict() emits wire tokens and survives json.dumps."""
    data = Prediction.from_dict(prediction_body(status="processing")).to_dict()
    assert data["status"] == "processing"
    assert data["source"] == "api"
    assert json.loads(json.dumps(data))["input"] == {"text": "world"}


def test_model_treats_empty_objects_as_absent():
    """default_example and latest_version may be {} or null."""
    model = Model.from_dict(
        {
            "url": "https://replicate.com/replicate/hello-world",
            "owner": "replicate",
            "name": "hello-world",
            "description": "A tiny model",
            "visibility": "public",
            "run_count": 12,
            "default_example": {},
            "latest_version": None,
        }
    )
    assert model.default_example is None
    assert model.latest_version is None
    assert model.run_count == 12


def test_model_with_latest_version():
    """A populated latest_version decodes to ModelVersion."""
    model = Model.from_dict(
        {
            "owner": "replicate",
            "name": "hello-world",
            "latest_version": {
                "id": "5c7d5dc6",
                "created_at": "2022-04-26T19:29:04.418669Z",
                "cog_version": "0.3.0",
                "openapi_schema": {"info": {}},
            },
        }
    )
    assert model.latest_version.id == "5c7d5dc6"
    assert model.to_dict()["latest_version"]["cog_version"] == "0.3.0"


def test_collection_with_models():
    """Collections decode their nested models."""
    collection = Collection.from_dict(
        {
            "name": "Super resolution",
            "slug": "super-resolution",
            "description": "Upscaling models.",
            "models": [{"owner": "a", "name": "b"}],
        }
    )
    assert collection.models[0].owner == "a"


def test_page_decodes_items_and_cursors():
    """Page keeps next/previous and decodes every result."""
    page = Page.from_dict(
        {
            "previous": None,
            "next": "https://api.replicate.com/v1/predictions?cursor=abc",
            "results": [
                {"id": "p1", "version": "v1", "status": "succeeded", "source": "web"}
            ],
        },
        PredictionSummary.from_dict,
    )
    assert page.next.endswith("cursor=abc")
    assert page.results[0].source is PredictionSource.WEB


def test_training_request_body():
    """Optional webhook fields are omitted unless set."""
    assert TrainingRequest("me/model", {"data": "x"}).to_dict() == {
        "destination": "me/model",
        "input": {"data": "x"},
    }
    body = TrainingRequest(
        "me/model",
        {},
        webhook="https://example.com/hook",
        webhook_events_filter=[WebhookEvent.COMPLETED, "logs"],
    ).to_dict()
    assert body["webhook_events_filter"] == ["completed", "logs"]
