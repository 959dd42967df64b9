"""Server bootstrap exposing the DNS-over-HTTPS client over MCP."""

import asyncio
import logging

from fastmcp import FastMCP

from httpdig.client import AsyncDohClient
from httpdig.settings import Settings
from httpdig.tools import ResolverToolDependencies, register_resolver_tools


class ServerApp:
    """Owns the FastMCP instance and the resolver client it uses."""

    def __init__(self, settings: Settings) -> None:
        self._logger = logging.getLogger(__name__)
        self._settings = settings
        self._doh_client: AsyncDohClient | None = None
        self._tool_dependencies = ResolverToolDependencies()
        self._mcp_app = FastMCP(
            name="httpdig",
            instructions=(
                "Resolve domain names through a DNS-over-HTTPS resolver and inspect the records returned."
            ),
        )
        register_resolver_tools(self._mcp_app, self._tool_dependencies)

    def startup(self) -> None:
        """Prepare resources required to launch the SSE server."""
        self._logger.info("Starting server bootstrap", extra={"api_url": self._settings.api_url})
        self._doh_client = AsyncDohClient.from_settings(self._settings)
        self._tool_dependencies.attach_client(self._doh_client)

    def shutdown(self) -> None:
        """Release acquired resources."""
        asyncio.run(self.ashutdown())

    async def ashutdown(self) -> None:
        """Release acquired resources from inside a running event loop."""
        self._logger.info("Shutting down server bootstrap")
        if self._doh_client is not None:
            await self._doh_client.aclose()
            self._doh_client = None
        self._tool_dependencies.detach_client()

    def _bind_address(self, host: str) -> dict[str, str | int]:
        return {"host": host, "port": self._settings.mcp_sse_port}

    def serve_forever(self, host: str = "0.0.0.0") -> None:
        """Block serving MCP over SSE until interrupted."""
        bind = self._bind_address(host)
        self._logger.info("Serving MCP over SSE", extra=bind)
        self._mcp_app.run(transport="sse", **bind)

    async def serve_sse_async(self, host: str = "0.0.0.0") -> None:
        """Serve MCP over SSE on the caller's event loop."""
        await self._mcp_app.run_http_async(transport="sse", **self._bind_address(host))

    @property
    def mcp(self) -> FastMCP:
        return self._mcp_app

    @property
    def dependencies(self) -> ResolverToolDependencies:
        return self._tool_dependencies


def build_server(settings: Settings) -> ServerApp:
    """Factory used by main.py to create the configured server instance."""
    return ServerApp(settings)
