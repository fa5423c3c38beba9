"""HTTP transport for the Jupiter API.

Turns parameter objects into GET/POST requests, checks the response status
and decodes the generic {data, timeTaken, contextSlot} envelope. Every
failure is raised as one of the jupiter_client.errors classes with the
original exception chained.
"""

import json
import logging
from typing import Any, Optional, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import TypeAdapter, ValidationError

from jupiter_client.config import ClientConfig
from jupiter_client.encoding import encode_json, encode_query
from jupiter_client.errors import (
    EnvelopeDecodeError,
    ParamEncodingError,
    PayloadDecodeError,
    TransportError,
    UnexpectedStatusError,
)
from jupiter_client.models import ResponseEnvelope

logger = logging.getLogger(__name__)

CONTENT_TYPE_JSON = "application/json"

# Response body kept on UnexpectedStatusError and in log lines
MAX_ERROR_BODY = 500

T = TypeVar("T")


class Transport:
    """Synchronous request/response exchange against the configured API root.

    Holds no per-call state, so one instance can serve concurrent callers
    as long as the underlying httpx.Client does.
    """

    def __init__(self, config: ClientConfig):
        self.config = config
        self._owns_client = config.http_client is None
        if config.http_client is not None:
            self._client = config.http_client
        else:
            self._client = httpx.Client(timeout=config.timeout)

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def build_url(self, endpoint: str, query: Optional[list[tuple[str, str]]] = None) -> str:
        url = f"{self.config.api_url}{endpoint}"
        if query:
            url = f"{url}?{urlencode(query)}"
        return url

    def get(self, endpoint: str, params: Any, operation: Optional[str] = None) -> httpx.Response:
        """Send a GET with ``params`` encoded as the query string."""
        query = encode_query(params, operation=operation)
        url = self.build_url(endpoint, query)
        headers = {"Accept": CONTENT_TYPE_JSON}
        return self._send("GET", url, headers=headers, operation=operation)

    def post(self, endpoint: str, params: Any, operation: Optional[str] = None) -> httpx.Response:
        """Send a POST with ``params`` encoded as a JSON body."""
        body = encode_json(params, operation=operation)
        try:
            content = json.dumps(body, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise ParamEncodingError(f"failed to marshal POST params: {e}", operation=operation) from e

        url = self.build_url(endpoint)
        headers = {"Content-Type": CONTENT_TYPE_JSON, "Accept": CONTENT_TYPE_JSON}
        return self._send("POST", url, headers=headers, content=content, operation=operation)

    def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: Optional[str] = None,
        operation: Optional[str] = None,
    ) -> httpx.Response:
        logger.debug(f"{method} {url}")
        try:
            response = self._client.request(method, url, headers=headers, content=content)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Jupiter {method} {url} failed: {type(e).__name__}: {e}")
            raise TransportError(f"failed to make {method} request: {e}", operation=operation) from e

        if not response.is_success:
            body = response.text[:MAX_ERROR_BODY]
            logger.warning(f"Jupiter API error: {response.status_code} - {body}")
            raise UnexpectedStatusError(response.status_code, body=body, operation=operation)

        return response

    def fetch_envelope(self, response: httpx.Response, operation: Optional[str] = None) -> ResponseEnvelope:
        """Decode the whole {data, timeTaken, contextSlot} envelope."""
        try:
            envelope = ResponseEnvelope.model_validate(response.json())
        except ValueError as e:
            # ValidationError and JSONDecodeError are both ValueErrors
            raise EnvelopeDecodeError(f"failed to decode response: {e}", operation=operation) from e

        logger.debug(
            f"Envelope from {response.request.url.path}: "
            f"slot {envelope.context_slot}, took {envelope.time_taken}s"
        )
        return envelope

    def unwrap(self, response: httpx.Response, operation: Optional[str] = None) -> Any:
        """Return only the ``data`` field of an enveloped response."""
        return self.fetch_envelope(response, operation=operation).data

    def decode_body(self, response: httpx.Response, adapter: TypeAdapter[T], operation: Optional[str] = None) -> T:
        """Decode a raw (non-enveloped) response body."""
        try:
            payload = response.json()
        except ValueError as e:
            raise PayloadDecodeError(f"failed to decode response: {e}", operation=operation) from e
        return decode_payload(payload, adapter, operation=operation)


def decode_payload(payload: Any, adapter: TypeAdapter[T], operation: Optional[str] = None) -> T:
    """Validate already-parsed JSON against a model type."""
    try:
        return adapter.validate_python(payload)
    except ValidationError as e:
        raise PayloadDecodeError(f"failed to parse response: {e}", operation=operation) from e
