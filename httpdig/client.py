"""
Resolver client for a DNS-over-HTTPS JSON endpoint.

Each lookup issues a single GET, decodes the JSON body into a ``Response`` and
hands it back. Resolver-side failures such as NXDOMAIN are not errors here;
they come back as a decoded ``Response`` with a non-zero ``status``.
"""

import logging
import threading
from typing import Any

import httpx
from pydantic import ValidationError

from httpdig.http_client import create_async_resolver_client, create_resolver_client
from httpdig.models import Response
from httpdig.settings import Settings

logger = logging.getLogger(__name__)

# Longest possible domain name; queries are padded up to this length.
MAX_NAME_LENGTH = 253
PADDING_CHAR = "0"


class HttpDigError(RuntimeError):
    """Base class for failures raised by the resolver client."""


class ResolutionFailure(HttpDigError):
    """The request never produced a usable HTTP response."""


class DecodeFailure(HttpDigError):
    """The resolver answered with a body that is not a valid response."""


def padding_length(host: str) -> int:
    """Number of filler characters needed to pad ``host`` to the maximum name length.

    Length is measured in UTF-8 bytes, so non-ASCII names get less padding.
    """
    return max(0, MAX_NAME_LENGTH - len(host.encode("utf-8")))


def build_query_params(host: str, record_type: str, edns_subnet: str) -> list[tuple[str, str]]:
    """
    Build the ordered query string for a lookup.

    ``random_padding`` keeps the request size roughly constant so an observer
    cannot infer the queried name's length. ``edns_client_subnet`` is left out
    entirely when ``edns_subnet`` is empty.
    """
    params = [("name", host), ("type", record_type)]
    if edns_subnet:
        params.append(("edns_client_subnet", edns_subnet))
    params.append(("random_padding", PADDING_CHAR * padding_length(host)))
    return params


def parse_response(body: bytes | str) -> Response:
    """Decode a resolver body, raising DecodeFailure on malformed input."""
    try:
        return Response.model_validate_json(body)
    except ValidationError as exc:
        logger.error("Resolver returned an undecodable body", extra={"errors": exc.error_count()})
        raise DecodeFailure(f"Unable to decode resolver response: {exc}") from exc


class _BaseDohClient:
    """State and response handling shared by the sync and async clients."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._settings_lock = threading.Lock()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def edns_subnet(self) -> str:
        return self._settings.edns_subnet

    def set_edns_subnet(self, subnet: str) -> None:
        """
        Set the EDNS client subnet sent with every later query.

        The value must be in slashed-subnet form such as ``"1.2.3.0/24"`` but is
        not checked locally; the resolver reports bad values through
        ``Status``/``Comment``. An empty string lets the resolver fall back to
        the caller's apparent public address.
        """
        with self._settings_lock:
            self._settings = self._settings.with_edns_subnet(subnet)
        logger.debug("EDNS client subnet updated", extra={"edns_subnet": subnet})

    def _prepare(self, host: str, record_type: str) -> tuple[str, list[tuple[str, str]]]:
        settings = self._settings
        logger.debug(
            "Dispatching DNS query",
            extra={"host": host, "record_type": record_type, "api_url": settings.api_url},
        )
        return settings.api_url, build_query_params(host, record_type, settings.edns_subnet)

    @staticmethod
    def _transport_error(host: str, exc: Exception) -> ResolutionFailure:
        logger.error(
            "Unable to reach resolver",
            extra={"host": host},
            exc_info=exc,
        )
        if isinstance(exc, httpx.TimeoutException):
            return ResolutionFailure(f"Resolver request timed out while resolving {host}.")
        return ResolutionFailure(f"Unable to resolve host {host}: {exc!s}")

    @staticmethod
    def _handle_response(host: str, response: httpx.Response) -> Response:
        if response.is_server_error:
            snippet = response.text.strip()
            if len(snippet) > 512:
                snippet = f"{snippet[:512]}..."
            logger.warning(
                "Resolver responded with server error",
                extra={"host": host, "status_code": response.status_code, "content": snippet},
            )
            raise ResolutionFailure(
                f"Resolver error ({response.status_code}) while resolving {host}: {snippet or 'no body provided.'}"
            )
        return parse_response(response.content)


class DohClient(_BaseDohClient):
    """Blocking resolver client around a shared ``httpx.Client``."""

    def __init__(self, client: httpx.Client, settings: Settings | None = None) -> None:
        super().__init__(settings or Settings())
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "DohClient":
        return cls(create_resolver_client(settings), settings)

    def query(self, host: str, record_type: str) -> Response:
        """Resolve ``host`` for ``record_type``, e.g. ``client.query("google.com", "NS")``."""
        url, params = self._prepare(host, record_type)
        try:
            response = self._client.get(url, params=params)
        except httpx.RequestError as exc:
            raise self._transport_error(host, exc) from exc
        return self._handle_response(host, response)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "DohClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class AsyncDohClient(_BaseDohClient):
    """Async resolver client around a shared ``httpx.AsyncClient``."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings | None = None) -> None:
        super().__init__(settings or Settings())
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "AsyncDohClient":
        return cls(create_async_resolver_client(settings), settings)

    async def query(self, host: str, record_type: str) -> Response:
        """Resolve ``host`` for ``record_type`` without blocking the event loop."""
        url, params = self._prepare(host, record_type)
        try:
            response = await self._client.get(url, params=params)
        except httpx.RequestError as exc:
            raise self._transport_error(host, exc) from exc
        return self._handle_response(host, response)

    async def aclose(self) -> None:
        """Close the underlying HTTP resources."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncDohClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
