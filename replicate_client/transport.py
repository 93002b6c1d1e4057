"""Authenticated HTTP access to the Replicate API.

One ``requests.Session`` carries the ``Authorization`` and ``User-Agent``
headers for every call. Failures are mapped onto the exception hierarchy in
``replicate_client.errors`` and logged before being raised.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, TypeVar

import requests  # pylint: disable=import-error

from .config import Config
from .errors import DeserializationError, ResponseError, TransportError


logger = logging.getLogger(__name__)

T = TypeVar("T")


class Transport:
    """
    Thin wrapper around ``requests.Session`` bound to one Config.

    Usage:
        transport = Transport(Config(api_token="secret"))
        body = transport.request("GET", transport.url("/predictions"))
        page = transport.decode(body, lambda data: Page.from_dict(data, ...))
    """

    def __init__(
        self, config: Config, session: Optional[requests.Session] = None
    ) -> None:
        self.config = config
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})
        if self.config.api_token:
            self.session.headers.update(
                {"Authorization": f"Token {self.config.api_token}"}
            )
        logger.debug("Initialized Transport with base_url=%s", self.config.base_url)

    def url(self, path: str) -> str:
        return self.config.url(path)

    def request(
        self,
        method: str,
        url: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Args:
            method: HTTP method.
            url: Absolute URL (see ``url()``).
            payload: JSON body, if any.

        Returns:
            The parsed JSON body, or None when the body is empty.

        Raises:
            TransportError on connection failures and timeouts.
            ResponseError on non-2xx responses.
            DeserializationError if the body is not valid JSON.
        """
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(
                method,
                url,
                json=payload,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise TransportError(f"failed to send the api request: {exc}") from exc

        # raise_for_status() lets unfollowed 1xx/3xx answers through
        if not 200 <= resp.status_code < 300:
            logger.error(
                "%s %s returned %s: %s", method, url, resp.status_code, resp.text
            )
            raise ResponseError(resp.status_code, resp.text)

        if not resp.text.strip():
            return None
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("Invalid JSON response from %s: %s", url, resp.text)
            raise DeserializationError(
                f"failed to parse the api response: {exc}", resp.text
            ) from exc

    @staticmethod
    def decode(body: Any, decoder: Callable[[Any], T]) -> T:
        """Build a typed value from a JSON body, mapping shape errors."""
        if body is None:
            raise DeserializationError("expected a JSON body, got an empty response")
        try:
            return decoder(body)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.error("Unexpected response shape: %r (%s)", body, exc)
            raise DeserializationError(
                f"unexpected response shape: {exc!r}", repr(body)
            ) from exc

    def get(self, url: str, decoder: Callable[[Any], T]) -> T:
        return self.decode(self.request("GET", url), decoder)

    def post(
        self,
        url: str,
        decoder: Callable[[Any], T],
        payload: Optional[Dict[str, Any]] = None,
    ) -> T:
        return self.decode(self.request("POST", url, payload), decoder)


__all__ = ["Transport"]
