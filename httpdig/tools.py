"""MCP tool registrations exposing DNS-over-HTTPS lookups."""

import logging
from dataclasses import dataclass
from typing import Annotated, Any, Awaitable, Callable

from fastmcp import FastMCP
from pydantic import Field

from httpdig.client import AsyncDohClient, HttpDigError
from httpdig.models import ResourceRecord, Response

logger = logging.getLogger(__name__)


@dataclass
class ResolverToolDependencies:
    """Runtime dependencies required by the MCP tools."""

    doh_client: AsyncDohClient | None = None

    def attach_client(self, client: AsyncDohClient) -> None:
        self.doh_client = client

    def detach_client(self) -> None:
        self.doh_client = None

    def require_client(self) -> AsyncDohClient:
        if self.doh_client is None:
            raise RuntimeError("DNS-over-HTTPS client is not initialized.")
        return self.doh_client


def _record_to_dict(record: ResourceRecord) -> dict[str, Any]:
    return {
        "name": record.name,
        "type": record.type,
        "ttl": int(record.ttl.total_seconds()),
        "data": record.data,
    }


def response_to_dict(response: Response) -> dict[str, Any]:
    """Render a resolver response as a JSON-ready dict with TTLs in whole seconds."""
    rcode = response.rcode
    return {
        "status": response.status,
        "rcode": rcode.name if rcode is not None else None,
        "truncated": response.tc,
        "recursion_desired": response.rd,
        "recursion_available": response.ra,
        "authenticated_data": response.ad,
        "checking_disabled": response.cd,
        "question": [{"name": q.name, "type": q.type} for q in response.question],
        "answer": [_record_to_dict(r) for r in response.answer],
        "authority": [_record_to_dict(r) for r in response.authority],
        "additional": list(response.additional),
        "edns_client_subnet": response.edns_client_subnet,
        "comment": response.comment,
    }


def _validate_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string.")
    return value.strip()


async def _with_error_handling(
    tool_name: str,
    action: Callable[[], Awaitable[dict[str, Any]]],
) -> dict[str, Any]:
    try:
        return await action()
    except HttpDigError as exc:
        logger.warning("%s failed due to resolver error", tool_name, exc_info=True)
        return {"error": str(exc)}
    except Exception as exc:  # noqa: BLE001
        logger.exception("%s failed unexpectedly", tool_name)
        return {"error": f"Unexpected error: {exc}"}


def register_resolver_tools(
    mcp: FastMCP,
    dependencies: ResolverToolDependencies,
) -> None:
    """Register MCP tools that proxy to the DNS-over-HTTPS resolver."""

    @mcp.tool(
        name="dns_query",
        description="Resolves a domain name through a DNS-over-HTTPS resolver and returns the decoded answer, authority and additional sections. A non-zero 'status' means the resolver itself reported a failure such as NXDOMAIN.",
    )
    async def dns_query(
        host: Annotated[str, Field(description="The domain name to resolve (e.g., 'example.com').")],
        record_type: Annotated[str, Field(description="The record type to request (e.g., 'A', 'NS', 'MX').")] = "A",
    ) -> dict[str, Any]:
        """Run a single lookup and return the decoded response."""

        host_value = _validate_non_empty(host, "host")
        record_type_value = _validate_non_empty(record_type, "record_type")
        client = dependencies.require_client()

        async def _call() -> dict[str, Any]:
            response = await client.query(host_value, record_type_value)
            logger.info(
                "dns_query succeeded",
                extra={
                    "host": host_value,
                    "record_type": record_type_value,
                    "status": response.status,
                    "answers": len(response.answer),
                },
            )
            return response_to_dict(response)

        return await _with_error_handling("dns_query", _call)

    @mcp.tool(
        name="set_edns_subnet",
        description="Sets the EDNS client subnet (e.g., '1.2.3.0/24') sent with later lookups. Use '0.0.0.0/0' to stay anonymous or an empty string to let the resolver use the caller's public address.",
    )
    async def set_edns_subnet(
        subnet: Annotated[str, Field(description="Subnet in slashed form, or an empty string to stop sending it.")],
    ) -> dict[str, Any]:
        """Update the subnet used by the shared client."""

        client = dependencies.require_client()
        client.set_edns_subnet(subnet.strip())
        logger.info("EDNS client subnet changed", extra={"edns_subnet": client.edns_subnet})
        return {"edns_subnet": client.edns_subnet}

    logger.info("DNS-over-HTTPS MCP tools registered.")
