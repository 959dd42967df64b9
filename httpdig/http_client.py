"""HTTP client factories for talking to the DNS-over-HTTPS resolver."""

import httpx

from httpdig.settings import Settings

_DEFAULT_HEADERS = {"Accept": "application/dns-json"}

# Same hop limit as httpx's own default redirect handling.
MAX_REDIRECTS = 10


def create_resolver_client(
    settings: Settings,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Build a blocking Client configured for the resolver endpoint."""
    return httpx.Client(
        timeout=settings.api_timeout,
        headers=_DEFAULT_HEADERS,
        follow_redirects=True,
        max_redirects=MAX_REDIRECTS,
        transport=transport,
    )


def create_async_resolver_client(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Build an AsyncClient configured for the resolver endpoint.

    Redirects from the endpoint are followed; TLS and connection pooling are
    left to httpx defaults.
    """
    return httpx.AsyncClient(
        timeout=settings.api_timeout,
        headers=_DEFAULT_HEADERS,
        follow_redirects=True,
        max_redirects=MAX_REDIRECTS,
        transport=transport,
    )
