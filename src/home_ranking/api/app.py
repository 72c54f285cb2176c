"""
Ranking proxy API

Single endpoint republishing the current Pokémon HOME season and its top
1000 trainers.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from home_ranking.core.config import Settings, settings as default_settings
from home_ranking.ingestion.providers.base.adapter import RankingProvider
from home_ranking.ingestion.providers.base.errors import ProviderError
from home_ranking.ingestion.providers.pokemon_home.client import PokemonHomeClient
from home_ranking.rankings.season_selector import utc_now
from home_ranking.rankings.service import RankingAggregator

logger = logging.getLogger(__name__)

RANKINGS_PATH = "/rankings"

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

# HEAD must not fall through to the GET pipeline.
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

ProviderFactory = Callable[[], RankingProvider]


def method_not_allowed() -> PlainTextResponse:
    return PlainTextResponse("Method not allowed", status_code=405)


def create_app(
    cfg: Settings | None = None,
    *,
    provider_factory: ProviderFactory | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> FastAPI:
    """
    Build the proxy application.

    `provider_factory` is called once per GET request; the provider is closed
    when the request finishes. Defaults to a PokemonHomeClient built from
    `cfg`.
    """
    cfg = cfg or default_settings

    def default_provider() -> RankingProvider:
        return PokemonHomeClient.from_settings(cfg)

    make_provider = provider_factory or default_provider

    app = FastAPI(
        title="Pokémon HOME Ranking Proxy",
        description="Active ranked-battle season and its top 1000 trainers",
        version="0.1.0",
    )

    @app.middleware("http")
    async def allow_any_origin(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    # Verbs outside ROUTED_METHODS are rejected by the router itself.
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 405:
            return method_not_allowed()
        return await http_exception_handler(request, exc)

    # Runs outside the middleware stack, so the header is added here.
    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> Response:
        logger.exception("%s %s crashed", request.method, request.url.path)
        return PlainTextResponse(str(exc), status_code=500, headers=CORS_HEADERS)

    @app.api_route(RANKINGS_PATH, methods=ROUTED_METHODS)
    def rankings(request: Request) -> Response:
        if request.method != "GET":
            return method_not_allowed()

        provider = make_provider()
        try:
            result = RankingAggregator(provider=provider, clock=clock).aggregate()
        except ProviderError as e:
            logger.warning("GET %s failed: %s", RANKINGS_PATH, e)
            return PlainTextResponse(str(e), status_code=500)
        finally:
            provider.close()

        return JSONResponse(content=result.to_json_dict())

    return app
