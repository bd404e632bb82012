"""Entry point for serving the Blog Service.

Launches the FastAPI application with Uvicorn.  Configuration such as
``DATABASE_URL``, ``SECRET_KEY``, ``API_HOST`` and ``API_PORT`` is read
from the environment (see ``blog_service/app/core/config.py``).

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from blog_service.app.core.config import settings
from blog_service.app.main import app


async def run_api() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


async def main() -> None:
    logging.getLogger(__name__).info(
        "Starting Blog Service on %s:%s", settings.api_host, settings.api_port
    )
    await run_api()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
