from __future__ import annotations

import logging

import httpx

from home_ranking.core.config import Settings, settings
from home_ranking.ingestion.providers.base.client import BaseHttpClient
from home_ranking.ingestion.providers.base.errors import ShortRanking
from home_ranking.ingestion.providers.pokemon_home.parser import (
    parse_ranking_rows,
    parse_season_catalog,
    to_ranking_entry,
)
from home_ranking.rankings.models import RankingEntry, SeasonRecord

logger = logging.getLogger(__name__)

MIN_RANKING_ROWS = 1000

SEASON_LIST_PATH = "/tt/cbd/competition/rankmatch/list"
SEASON_LIST_BODY = b'{"soft": "Sc"}'

# The season list is not a public API; it only answers requests shaped like
# the official ranking web page.
SEASON_LIST_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json, text/javascript, */*; q=0.01",
    "Accept-Language": "ja,en-US;q=0.9,en;q=0.8",
    "Origin": "https://resource.pokemon-home.com",
    "Referer": "https://resource.pokemon-home.com/",
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Site": "same-site",
}


def ranking_path(competition_id: str, result_id: int, timestamp1: str) -> str:
    return f"/battledata/ranking/scvi/{competition_id}/{result_id}/{timestamp1}/traner-1"


class PokemonHomeClient:
    """Season list + trainer ranking endpoints of Pokémon HOME (Scarlet/Violet)."""

    def __init__(self, *, battle: BaseHttpClient, resource: BaseHttpClient, icon_base_url: str) -> None:
        self.battle = battle
        self.resource = resource
        self.icon_base_url = icon_base_url

    @classmethod
    def from_settings(
        cls,
        cfg: Settings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> PokemonHomeClient:
        cfg = cfg or settings
        return cls(
            battle=BaseHttpClient(
                base_url=cfg.battle_api_base_url,
                timeout_s=cfg.upstream_timeout_s,
                transport=transport,
            ),
            resource=BaseHttpClient(
                base_url=cfg.resource_base_url,
                timeout_s=cfg.upstream_timeout_s,
                transport=transport,
            ),
            icon_base_url=cfg.trainer_icon_base_url,
        )

    def close(self) -> None:
        self.battle.close()
        self.resource.close()

    def __enter__(self) -> PokemonHomeClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def fetch_season_catalog(self) -> list[SeasonRecord]:
        payload = self.battle.request_json(
            "POST",
            SEASON_LIST_PATH,
            content=SEASON_LIST_BODY,
            headers=SEASON_LIST_HEADERS,
        )
        seasons = parse_season_catalog(payload)
        logger.debug("Season list returned %d seasons", len(seasons))
        return seasons

    def fetch_top_ranking(
        self, competition_id: str, result_id: int, timestamp1: str
    ) -> list[RankingEntry]:
        """Top trainers for one season; fails unless at least MIN_RANKING_ROWS come back."""

        value = self.resource.get_json_value(ranking_path(competition_id, result_id, timestamp1))
        rows = parse_ranking_rows(value)
        if len(rows) < MIN_RANKING_ROWS:
            raise ShortRanking(len(rows), MIN_RANKING_ROWS)

        return [
            to_ranking_entry(row, icon_base_url=self.icon_base_url)
            for row in rows[:MIN_RANKING_ROWS]
        ]
