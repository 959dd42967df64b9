"""Run the httpdig MCP server: ``python -m httpdig``."""

import logging
import os

from httpdig.server import build_server
from httpdig.settings import Settings

logger = logging.getLogger("httpdig")


def main() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    settings = Settings.load()
    server = build_server(settings)
    logger.info(
        "Resolving through %s (edns_client_subnet=%r)",
        settings.api_url,
        settings.edns_subnet,
    )

    try:
        server.startup()
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutdown requested (Ctrl+C).")
    finally:
        server.shutdown()


if __name__ == "__main__":
    main()
