from __future__ import annotations

import json
import logging

import typer

from home_ranking.cli.common import provider_scope
from home_ranking.core.config import settings
from home_ranking.core.logging_config import configure_logging
from home_ranking.ingestion.providers.base.errors import ProviderError
from home_ranking.rankings.season_selector import select_active_season, utc_now

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, help="Pokémon HOME ranking proxy.")


@app.command("serve")
def serve_cmd(
    host: str = typer.Option(settings.host, "--host", help="Interface to bind."),
    port: int = typer.Option(settings.port, "--port", help="Port to listen on."),
) -> None:
    """Run the /rankings HTTP server."""

    import uvicorn

    from home_ranking.api.app import create_app

    configure_logging(settings.log_level)
    logger.info("Server is running on port %d", port)
    try:
        uvicorn.run(create_app(settings), host=host, port=port, log_config=None)
    except (Exception, SystemExit):
        logger.exception("Server failed to start on %s:%d", host, port)
        raise typer.Exit(code=1)


@app.command("active-season")
def active_season_cmd() -> None:
    """Fetch the season list once and print the currently active season."""

    try:
        with provider_scope() as client:
            season = select_active_season(client.fetch_season_catalog(), now=utc_now())
    except ProviderError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(season.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
