"""
DNS-over-HTTPS JSON client.

The module-level ``query`` and ``set_edns_subnet`` helpers share one lazily
created ``DohClient``; callers wanting explicit configuration should build
their own ``DohClient`` or ``AsyncDohClient`` instead.
"""

import threading

from httpdig.client import (
    AsyncDohClient,
    DecodeFailure,
    DohClient,
    HttpDigError,
    ResolutionFailure,
)
from httpdig.models import Question, Rcode, ResourceRecord, Response
from httpdig.settings import Settings

__all__ = [
    "AsyncDohClient",
    "DecodeFailure",
    "DohClient",
    "HttpDigError",
    "Question",
    "Rcode",
    "ResolutionFailure",
    "ResourceRecord",
    "Response",
    "Settings",
    "get_default_client",
    "query",
    "set_edns_subnet",
]

_default_client: DohClient | None = None
_default_client_lock = threading.Lock()


def get_default_client() -> DohClient:
    """Return the process-wide client, creating it on first use."""
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            _default_client = DohClient.from_settings(Settings())
        return _default_client


def query(host: str, record_type: str) -> Response:
    """Send a lookup to the resolver, e.g. ``httpdig.query("google.com", "NS")``."""
    return get_default_client().query(host, record_type)


def set_edns_subnet(subnet: str) -> None:
    """
    Set the EDNS client subnet for all later ``query`` calls.

    Defaults to ``"0.0.0.0/0"`` for anonymity. Passing ``""`` lets the resolver
    use the caller's apparent public address, with the last portion chopped off.
    """
    get_default_client().set_edns_subnet(subnet)
