"""Typed request and response structures for the Replicate HTTP API.

Each response type exposes ``from_dict`` which accepts the decoded JSON
body. Missing required keys raise KeyError, wrong shapes raise TypeError or
AttributeError, unknown enum tokens raise ValueError; the transport turns
all of those into DeserializationError.

Input and output payloads stay plain JSON values (dict, list, str, int,
float, bool or None) since their shape depends on the model being run.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar


T = TypeVar("T")


class PredictionStatus(str, Enum):
    """Lifecycle status of a prediction or training, as sent on the wire."""

    STARTING = "starting"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELED = "canceled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {PredictionStatus.SUCCEEDED, PredictionStatus.FAILED, PredictionStatus.CANCELED}
)


class PredictionSource(str, Enum):
    API = "api"
    WEB = "web"


class WebhookEvent(str, Enum):
    START = "start"
    OUTPUT = "output"
    LOGS = "logs"
    COMPLETED = "completed"


def _mapping(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"expected a JSON object, got {type(value).__name__}")
    return value


def _optional(value: Any, decode: Callable[[Dict[str, Any]], T]) -> Optional[T]:
    """Decode a nested object, treating null and ``{}`` as absent."""
    if value is None or value == {}:
        return None
    return decode(_mapping(value))


def _source(value: Optional[str]) -> Optional[PredictionSource]:
    return PredictionSource(value) if value is not None else None


def _enum_values(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in data.items()
    }


@dataclass(frozen=True)
class PredictionUrls:
    get: Optional[str] = None
    cancel: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PredictionUrls":
        data = _mapping(data)
        return cls(get=data.get("get"), cancel=data.get("cancel"))


@dataclass
class Prediction:  # pylint: disable=too-many-instance-attributes
    """Full server state of one prediction."""

    id: str
    version: str
    status: PredictionStatus
    created_at: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    urls: Optional[PredictionUrls] = None
    source: Optional[PredictionSource] = None
    input: Dict[str, Any] = field(default_factory=dict)
    output: Any = None
    error: Optional[str] = None
    logs: Optional[str] = None
    metrics: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Prediction":
        data = _mapping(data)
        metrics = data.get("metrics")
        return cls(
            id=data["id"],
            version=data["version"],
            status=PredictionStatus(data["status"]),
            created_at=data.get("created_at"),
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
            urls=_optional(data.get("urls"), PredictionUrls.from_dict),
            source=_source(data.get("source")),
            input=dict(_mapping(data.get("input") or {})),
            output=data.get("output"),
            error=data.get("error"),
            logs=data.get("logs"),
            metrics=dict(_mapping(metrics)) if metrics is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _enum_values(asdict(self))


@dataclass(frozen=True)
class PredictionSummary:
    """Entry of the prediction listing."""

    id: str
    version: str
    status: PredictionStatus
    created_at: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    urls: Optional[PredictionUrls] = None
    source: Optional[PredictionSource] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PredictionSummary":
        data = _mapping(data)
        return cls(
            id=data["id"],
            version=data["version"],
            status=PredictionStatus(data["status"]),
            created_at=data.get("created_at"),
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
            urls=_optional(data.get("urls"), PredictionUrls.from_dict),
            source=_source(data.get("source")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _enum_values(asdict(self))


@dataclass(frozen=True)
class ModelVersion:
    id: str
    created_at: Optional[str] = None
    cog_version: Optional[str] = None
    openapi_schema: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelVersion":
        data = _mapping(data)
        return cls(
            id=data["id"],
            created_at=data.get("created_at"),
            cog_version=data.get("cog_version"),
            openapi_schema=dict(_mapping(data.get("openapi_schema") or {})),
        )


@dataclass(frozen=True)
class Model:  # pylint: disable=too-many-instance-attributes
    """Model metadata; ``latest_version`` and ``default_example`` may be absent."""

    owner: str
    name: str
    url: Optional[str] = None
    description: Optional[str] = None
    visibility: Optional[str] = None
    github_url: Optional[str] = None
    paper_url: Optional[str] = None
    license_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    run_count: Optional[int] = None
    default_example: Optional[Prediction] = None
    latest_version: Optional[ModelVersion] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Model":
        data = _mapping(data)
        return cls(
            owner=data["owner"],
            name=data["name"],
            url=data.get("url"),
            description=data.get("description"),
            visibility=data.get("visibility"),
            github_url=data.get("github_url"),
            paper_url=data.get("paper_url"),
            license_url=data.get("license_url"),
            cover_image_url=data.get("cover_image_url"),
            run_count=data.get("run_count"),
            default_example=_optional(data.get("default_example"), Prediction.from_dict),
            latest_version=_optional(data.get("latest_version"), ModelVersion.from_dict),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.default_example is not None:
            data["default_example"] = self.default_example.to_dict()
        return data


@dataclass(frozen=True)
class CollectionSummary:
    slug: str
    name: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CollectionSummary":
        data = _mapping(data)
        return cls(
            slug=data["slug"], name=data.get("name"), description=data.get("description")
        )


@dataclass(frozen=True)
class Collection:
    slug: str
    name: Optional[str] = None
    description: Optional[str] = None
    models: List[Model] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Collection":
        data = _mapping(data)
        return cls(
            slug=data["slug"],
            name=data.get("name"),
            description=data.get("description"),
            models=[Model.from_dict(item) for item in data.get("models") or []],
        )


@dataclass
class Training:  # pylint: disable=too-many-instance-attributes
    id: str
    version: str
    status: PredictionStatus
    created_at: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    urls: Optional[PredictionUrls] = None
    input: Optional[Dict[str, Any]] = None
    output: Any = None
    error: Optional[str] = None
    logs: Optional[str] = None
    webhook_completed: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Training":
        data = _mapping(data)
        return cls(
            id=data["id"],
            version=data["version"],
            status=PredictionStatus(data["status"]),
            created_at=data.get("created_at"),
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
            urls=_optional(data.get("urls"), PredictionUrls.from_dict),
            input=data.get("input"),
            output=data.get("output"),
            error=data.get("error"),
            logs=data.get("logs"),
            webhook_completed=data.get("webhook_completed"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _enum_values(asdict(self))


@dataclass(frozen=True)
class TrainingSummary:
    id: str
    version: str
    status: PredictionStatus
    created_at: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    urls: Optional[PredictionUrls] = None
    source: Optional[PredictionSource] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrainingSummary":
        data = _mapping(data)
        return cls(
            id=data["id"],
            version=data["version"],
            status=PredictionStatus(data["status"]),
            created_at=data.get("created_at"),
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
            urls=_optional(data.get("urls"), PredictionUrls.from_dict),
            source=_source(data.get("source")),
        )


@dataclass(frozen=True)
class TrainingRequest:
    """Body of ``POST /models/{owner}/{name}/versions/{id}/trainings``."""

    destination: str
    input: Dict[str, Any]
    webhook: Optional[str] = None
    webhook_events_filter: Optional[List[WebhookEvent]] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"destination": self.destination, "input": self.input}
        if self.webhook is not None:
            body["webhook"] = self.webhook
        if self.webhook_events_filter is not None:
            body["webhook_events_filter"] = [
                WebhookEvent(event).value for event in self.webhook_events_filter
            ]
        return body


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a cursor-paginated listing."""

    results: List[T]
    next: Optional[str] = None
    previous: Optional[str] = None

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], item: Callable[[Dict[str, Any]], T]
    ) -> "Page[T]":
        data = _mapping(data)
        return cls(
            results=[item(entry) for entry in data["results"]],
            next=data.get("next"),
            previous=data.get("previous"),
        )


__all__ = [
    "PredictionStatus",
    "PredictionSource",
    "WebhookEvent",
    "TERMINAL_STATUSES",
    "PredictionUrls",
    "Prediction",
    "PredictionSummary",
    "ModelVersion",
    "Model",
    "CollectionSummary",
    "Collection",
    "Training",
    "TrainingSummary",
    "TrainingRequest",
    "Page",
]
