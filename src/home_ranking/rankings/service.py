from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from home_ranking.ingestion.providers.base.adapter import RankingProvider
from home_ranking.ingestion.providers.base.errors import ProviderError
from home_ranking.rankings.models import AggregatedResponse
from home_ranking.rankings.season_selector import select_active_season, utc_now

logger = logging.getLogger(__name__)


class PipelineState(str, enum.Enum):
    IDLE = "idle"
    FETCHING_CATALOG = "fetching_catalog"
    SELECTING_SEASON = "selecting_season"
    FETCHING_RANKING = "fetching_ranking"
    DONE = "done"
    FAILED = "failed"


_STAGE_MESSAGES = {
    PipelineState.FETCHING_CATALOG: "Error fetching ranking data",
    PipelineState.SELECTING_SEASON: "Error fetching latest season data",
    PipelineState.FETCHING_RANKING: "Error fetching top 1000 ranking data",
}


class PipelineError(ProviderError):
    """A provider failure tagged with the pipeline stage it happened in."""

    def __init__(self, stage: PipelineState, cause: ProviderError) -> None:
        super().__init__(f"{_STAGE_MESSAGES[stage]}: {cause}")
        self.stage = stage
        self.cause = cause


@dataclass
class RankingAggregator:
    """
    Linear fetch -> select -> fetch pipeline behind GET /rankings.

    One instance per request. Nothing is retried; the first failure moves the
    pipeline to FAILED and is raised as PipelineError.
    """

    provider: RankingProvider
    clock: Callable[[], datetime] = utc_now
    state: PipelineState = field(default=PipelineState.IDLE, init=False)

    def _enter(self, state: PipelineState) -> None:
        logger.debug("ranking pipeline %s -> %s", self.state.value, state.value)
        self.state = state

    def aggregate(self) -> AggregatedResponse:
        try:
            self._enter(PipelineState.FETCHING_CATALOG)
            seasons = self.provider.fetch_season_catalog()

            self._enter(PipelineState.SELECTING_SEASON)
            season = select_active_season(seasons, now=self.clock())
            logger.info(
                "Active season %s (%s): %s -> %s",
                season.competition_id,
                season.name,
                season.start_time,
                season.end_time,
            )

            self._enter(PipelineState.FETCHING_RANKING)
            entries = self.provider.fetch_top_ranking(
                season.competition_id, season.result_id, season.timestamp1_key
            )
        except ProviderError as e:
            stage = self.state
            self._enter(PipelineState.FAILED)
            raise PipelineError(stage, e) from e

        self._enter(PipelineState.DONE)
        return AggregatedResponse(active_season=season, top_entries=entries)
