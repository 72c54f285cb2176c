from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from .errors import DecodeError, TransportError, UpstreamStatusError

Json = dict[str, Any]


@dataclass
class BaseHttpClient:
    """
    Provider-agnostic HTTP client wrapper.

    - Uses a single underlying httpx.Client for connection pooling.
    - Maps httpx failures onto the provider error taxonomy.
    - `timeout_s=None` disables timeouts entirely.
    - Provider-specific clients wrap this and add endpoint methods.
    """

    base_url: str
    timeout_s: float | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        self._client = httpx.Client(
            base_url=self.base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(self.timeout_s),
            headers=dict(self.headers),
            transport=self.transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BaseHttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def request_json_value(
        self,
        method: str,
        path: str,
        *,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """
        Perform an HTTP request and return the decoded JSON value (any shape).

        Raises TransportError on network failures, UpstreamStatusError on
        anything but HTTP 200, and DecodeError when the body is not JSON.
        """
        try:
            resp = self._client.request(
                method=method,
                url=path.lstrip("/"),
                content=content,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"failed to execute request: {e}") from e

        if resp.status_code != httpx.codes.OK:
            raise UpstreamStatusError(resp.status_code, str(resp.request.url))

        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"failed to decode response: {e}") from e

    def request_json(
        self,
        method: str,
        path: str,
        *,
        content: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        """Like request_json_value, but requires a JSON object."""
        data = self.request_json_value(
            method, path, content=content, headers=headers
        )
        if not isinstance(data, dict):
            raise DecodeError(f"Expected JSON object, got {type(data).__name__}")
        return data

    def get_json_value(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return self.request_json_value("GET", path, headers=headers)
