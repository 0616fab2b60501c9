"""Application entrypoint."""

from __future__ import annotations

import asyncio

import uvicorn

from search_proxy.config import get_settings
from search_proxy.logging import configure_logging, logger
from search_proxy.web.app import create_app


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, environment=settings.environment)

    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level="info" if settings.environment == "dev" else "warning",
    )
    server = uvicorn.Server(config)

    logger.info("proxy_listening", host=settings.server.host, port=settings.server.port)
    await server.serve()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
