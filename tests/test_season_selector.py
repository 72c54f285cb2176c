from __future__ import annotations

from datetime import datetime

import pytest

from home_ranking.ingestion.providers.base.errors import MalformedTimestamp, NoActiveSeason
from home_ranking.rankings.models import SeasonRecord
from home_ranking.rankings.season_selector import select_active_season


def _season(cid: str, start: str, end: str, season: int = 1) -> SeasonRecord:
    return SeasonRecord.model_validate(
        {
            "cId": cid,
            "cnt": 100,
            "rule": 0,
            "rst": 0,
            "season": season,
            "start": start,
            "end": end,
            "ts1": 1700000000,
            "ts2": 1700000001,
            "name": f"Season {season}",
            "rankCnt": 1000,
        }
    )


SEASONS = [
    _season("10001", "2024/11/01 09:00", "2024/12/01 08:59", season=24),
    _season("10002", "2024/12/01 09:00", "2025/01/07 08:59", season=25),
    _season("10003", "2025/01/07 09:00", "2025/02/01 08:59", season=26),
]


def test_select_active_season_picks_window_containing_now() -> None:
    season = select_active_season(SEASONS, now=datetime(2024, 12, 15, 12, 0))
    assert season.competition_id == "10002"
    assert season.season_number == 25


def test_select_active_season_does_not_depend_on_order() -> None:
    now = datetime(2025, 1, 20, 0, 0)
    forward = select_active_season(SEASONS, now=now)
    backward = select_active_season(list(reversed(SEASONS)), now=now)
    assert forward == backward
    assert forward.competition_id == "10003"


def test_select_active_season_is_idempotent() -> None:
    now = datetime(2024, 11, 15, 0, 0)
    assert select_active_season(SEASONS, now=now) == select_active_season(SEASONS, now=now)


def test_select_active_season_normalizes_bounds() -> None:
    season = select_active_season(SEASONS, now=datetime(2024, 12, 15, 12, 0))
    assert season.start_time == "2024-12-01 09:00:00"
    assert season.end_time == "2025-01-07 08:59:00"


@pytest.mark.parametrize(
    "now",
    [datetime(2024, 12, 1, 9, 0), datetime(2025, 1, 7, 8, 59)],
)
def test_select_active_season_boundaries_are_exclusive(now: datetime) -> None:
    only = [_season("10002", "2024/12/01 09:00", "2025/01/07 08:59")]
    with pytest.raises(NoActiveSeason):
        select_active_season(only, now=now)


def test_select_active_season_between_seasons() -> None:
    with pytest.raises(NoActiveSeason):
        select_active_season(SEASONS, now=datetime(2025, 1, 7, 8, 59, 30))


def test_select_active_season_empty_catalog() -> None:
    with pytest.raises(NoActiveSeason):
        select_active_season([], now=datetime(2024, 12, 15))


def test_select_active_season_propagates_bad_dates() -> None:
    broken = [_season("10009", "soon", "2025/01/07 08:59")]
    with pytest.raises(MalformedTimestamp):
        select_active_season(broken, now=datetime(2024, 12, 15))
