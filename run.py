"""Entry point for serving the Travel Agency API.

Configuration is read from environment variables (see
``travel_agency_api.app.core.config``).  Host and port come from
``HOST`` and ``PORT``; defaults are ``0.0.0.0`` and ``8000``.

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server

from travel_agency_api.app.core.config import Settings
from travel_agency_api.app.main import create_app


async def main() -> None:
    """Start the API using Uvicorn."""
    settings = Settings.from_env()
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(
        app=create_app(settings),
        host=host,
        port=port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
