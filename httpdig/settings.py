"""Environment-driven configuration for the DNS-over-HTTPS client."""

import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

DEFAULT_API_URL = "https://dns.google.com/resolve"

# Zero-information subnet so the resolver cannot geolocate the caller.
DEFAULT_EDNS_SUBNET = "0.0.0.0/0"


@dataclass(frozen=True, slots=True)
class Settings:
    """Container for runtime configuration."""

    api_url: str = DEFAULT_API_URL
    edns_subnet: str = DEFAULT_EDNS_SUBNET
    api_timeout: float = 10.0
    mcp_sse_port: int = 8000

    def with_edns_subnet(self, subnet: str) -> "Settings":
        """Return a copy of these settings using ``subnet`` for EDNS client subnet."""
        return replace(self, edns_subnet=subnet)

    @classmethod
    def load(cls) -> "Settings":
        """
        Load configuration from environment variables.

        HTTPDIG_EDNS_SUBNET is special: leaving it unset keeps the anonymous
        default, while setting it to an empty value stops the parameter from
        being sent at all.
        """
        load_dotenv()

        edns_subnet = os.environ.get("HTTPDIG_EDNS_SUBNET", DEFAULT_EDNS_SUBNET).strip()

        api_timeout_raw = os.getenv("HTTPDIG_TIMEOUT", "").strip() or "10"
        try:
            api_timeout = float(api_timeout_raw)
        except ValueError as exc:
            raise ValueError("HTTPDIG_TIMEOUT must be a numeric value.") from exc
        if api_timeout <= 0:
            raise ValueError("HTTPDIG_TIMEOUT must be greater than zero.")

        mcp_sse_port_raw = os.getenv("MCP_SSE_PORT", "").strip() or "8000"
        try:
            mcp_sse_port = int(mcp_sse_port_raw)
        except ValueError as exc:
            raise ValueError("MCP_SSE_PORT must be an integer.") from exc
        if mcp_sse_port <= 0:
            raise ValueError("MCP_SSE_PORT must be greater than zero.")

        return cls(
            edns_subnet=edns_subnet,
            api_timeout=api_timeout,
            mcp_sse_port=mcp_sse_port,
        )
