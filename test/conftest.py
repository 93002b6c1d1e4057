"""Shared fixtures: an in-memory stand-in for ``requests.Session``."""

import json

import pytest
import requests

from replicate_client import Config, ReplicateClient
from replicate_client.transport import Transport


BASE_URL = "http://replicate.test/v1"


class FakeResponse:
    """Just enough of ``requests.Response`` for the transport."""

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        if text is None:
            text = json.dumps(body) if body is not None else ""
        self.text = text

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if 400 <= self.status_code < 600:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Serves queued responses per (method, url) and records every call.

    The last queued response for a route is repeated once the queue is
    drained. An exception instance queued as a response is raised.
    """

    def __init__(self):
        self.headers = {}
        self.calls = []
        self._routes = {}

    def add(self, method, url, *responses):
        self._routes.setdefault((method, url), []).extend(responses)

    def request(self, method, url, json=None, timeout=None, verify=None):  # pylint: disable=redefined-outer-name
        self.calls.append(
            {"method": method, "url": url, "json": json, "timeout": timeout, "verify": verify}
        )
        queue = self._routes.get((method, url))
        if not queue:
            return FakeResponse(404, text=f"no route for {method} {url}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        return response

    def count(self, method, url):
        return sum(1 for c in self.calls if c["method"] == method and c["url"] == url)


def prediction_body(status="starting", **overrides):
    body = {
        "id": "p1",
        "version": "v1",
        "urls": {
            "get": f"{BASE_URL}/predictions/p1",
            "cancel": f"{BASE_URL}/predictions/p1/cancel",
        },
        "created_at": "2022-04-26T20:00:40.658234Z",
        "started_at": None,
        "completed_at": None,
        "source": "api",
        "status": status,
        "input": {"text": "world"},
        "output": None,
        "error": None,
        "logs": "",
        "metrics": None,
    }
    body.update(overrides)
    return body


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def config():
    return Config(api_token="test-token", base_url=BASE_URL)


@pytest.fixture
def transport(config, session):  # pylint: disable=redefined-outer-name
    return Transport(config, session=session)


@pytest.fixture
def client(config, session):  # pylint: disable=redefined-outer-name
    return ReplicateClient(config, session=session)


@pytest.fixture
def sleeps(monkeypatch):
    """Record retry sleeps instead of blocking."""
    import replicate_client.retry as retry  # pylint: disable=import-outside-toplevel

    recorded = []
    monkeypatch.setattr(retry.time, "sleep", recorded.append)
    return recorded
