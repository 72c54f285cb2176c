from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime

from home_ranking.ingestion.dates import format_season_datetime, parse_season_datetime
from home_ranking.ingestion.providers.base.errors import NoActiveSeason
from home_ranking.rankings.models import SeasonRecord


def utc_now() -> datetime:
    """Current wall time as a naive datetime, comparable with parsed season bounds."""

    return datetime.now(UTC).replace(tzinfo=None)


def select_active_season(seasons: Iterable[SeasonRecord], *, now: datetime) -> SeasonRecord:
    """
    Return the first season whose window strictly contains `now`.

    Windows are expected not to overlap, so iteration order does not matter.
    An instant exactly on a start or end boundary is not active. The returned
    record carries normalized "YYYY-MM-DD HH:MM:SS" start/end strings.
    """

    for season in seasons:
        start = parse_season_datetime(season.start_time)
        end = parse_season_datetime(season.end_time)
        if start < now < end:
            return season.model_copy(
                update={
                    "start_time": format_season_datetime(start),
                    "end_time": format_season_datetime(end),
                }
            )

    raise NoActiveSeason(f"no season data available at {format_season_datetime(now)}")
