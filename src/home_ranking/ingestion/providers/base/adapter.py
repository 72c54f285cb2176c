from __future__ import annotations

from typing import Protocol

from home_ranking.rankings.models import RankingEntry, SeasonRecord


class RankingProvider(Protocol):
    """
    Orchestration depends on this, not on any HTTP client.

    Implementations own their transport and are closed after one request.
    """

    def fetch_season_catalog(self) -> list[SeasonRecord]:
        """Every known season, flattened; order is not meaningful."""
        ...

    def fetch_top_ranking(
        self, competition_id: str, result_id: int, timestamp1: str
    ) -> list[RankingEntry]:
        """Reshaped top-N rows for one season, in rank order."""
        ...

    def close(self) -> None:
        ...
