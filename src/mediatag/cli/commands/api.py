"""CLI commands for API server management."""

from __future__ import annotations

from typing import Optional

import typer

from mediatag.config.settings import get_settings

api_app = typer.Typer(
    name="api",
    help="API server management commands",
    no_args_is_help=True,
)


@api_app.command()
def start(
    port: Optional[int] = typer.Option(
        None, "--port", "-p", help="Port to run the server on (default: API_PORT)"
    ),
    production: bool = typer.Option(
        False, "--production", help="Run in production mode"
    ),
) -> None:
    """
    Start the mediatag API server.

    Development mode (default): Auto-reload enabled, info logging.
    Production mode: warning-level logging, no reload.

    The store is in memory, so production mode runs a single worker;
    several workers would each hold their own independent store.

    Examples:
        mediatag api start
        mediatag api start --port 3000
        mediatag api start --production
    """
    import uvicorn

    settings = get_settings()
    port = port if port is not None else settings.api_port

    if production:
        uvicorn.run(
            "mediatag.api.main:app",
            host=settings.api_host,
            port=port,
            workers=1,
            log_level="warning",
        )
    else:
        uvicorn.run(
            "mediatag.api.main:app",
            host=settings.api_host,
            port=port,
            reload=True,
            log_level="info",
        )
