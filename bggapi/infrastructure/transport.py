"""HTTP transport for the BoardGameGeek XML API.

``Transport`` is the contract the client dispatches through: send a GET to a
named resource with string query parameters and get back a decoded response
model, or a ``TransportError``. ``HttpTransport`` implements it with a single
``httpx.Client`` and the XML decoders.

No retries, caching or throttling happen here; each ``send`` is exactly one
HTTP request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Self

import httpx
from loguru import logger

from bggapi.core.config import ApiConfig, get_settings
from bggapi.core.exceptions import TransportError
from bggapi.core.observability import add_span_attributes
from bggapi.infrastructure.decoding import decode

if TYPE_CHECKING:
    from types import TracebackType

    from bggapi.core.types import Parameters
    from bggapi.domain.responses import BggResponse


class Transport(Protocol):
    """Contract for sending a serialized request to a resource."""

    def send[T: BggResponse](
        self, resource: str, parameters: Parameters, response_type: type[T]
    ) -> T:
        """Send one read-style request and decode the response.

        Raises:
            TransportError: If the call or the decoding fails.
        """
        ...


class HttpTransport:
    """``Transport`` backed by ``httpx``.

    Args:
        config: API settings; defaults to ``get_settings().api_config``.
        client: Preconfigured ``httpx.Client``. When given, its base URL,
            timeout and headers are used as-is and the transport does not
            close it.

    Example:
        >>> with HttpTransport() as transport:
        ...     transport.send("thing", {"id": "13"}, ThingReturn)
    """

    def __init__(
        self,
        config: ApiConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config or get_settings().api_config
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            headers={"User-Agent": self.config.user_agent},
        )

    def send[T: BggResponse](
        self, resource: str, parameters: Parameters, response_type: type[T]
    ) -> T:
        """GET ``{base_url}/{resource}`` and decode the XML body.

        Args:
            resource: Resource path segment, e.g. ``"thing"``.
            parameters: Serialized query parameters.
            response_type: Response model to decode into.

        Returns:
            T: The decoded response.

        Raises:
            TransportError: On network errors, non-success status codes and
                bodies that cannot be decoded into ``response_type``.
        """
        try:
            response = self._client.get(f"/{resource}", params=parameters)
            add_span_attributes(status_code=response.status_code)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(
                "BGG API returned status {} for {}",
                status_code,
                resource,
                resource=resource,
                status_code=status_code,
            )
            msg = f"BGG API returned HTTP {status_code} for '{resource}'"
            raise TransportError(
                msg, resource=resource, status_code=status_code, cause=e
            ) from e
        except httpx.HTTPError as e:
            logger.warning(
                "HTTP call to {} failed: {}", resource, e, resource=resource
            )
            msg = f"HTTP call to '{resource}' failed: {e}"
            raise TransportError(msg, resource=resource, cause=e) from e

        try:
            return decode(response.content, response_type)
        except ValueError as e:
            logger.warning(
                "Could not decode {} response: {}",
                resource,
                e,
                resource=resource,
                status_code=response.status_code,
            )
            msg = f"Could not decode '{resource}' response: {e}"
            raise TransportError(
                msg,
                resource=resource,
                status_code=response.status_code,
                cause=e,
            ) from e

    def close(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
