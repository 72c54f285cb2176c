from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from home_ranking.ingestion.providers.base.errors import DecodeError
from home_ranking.rankings.models import RankingEntry, RawRankingRow, SeasonRecord

ApiItem = dict[str, Any]


def parse_season_catalog(payload: ApiItem) -> list[SeasonRecord]:
    """Flatten the season list response into a list of SeasonRecord.

    Response shape:
        {"list": {"<group>": {"<competition>": {"cId": ..., "start": ..., ...}}}}

    The grouping keys carry no meaning for selection and are dropped.
    """

    groups = payload.get("list")
    if not isinstance(groups, dict):
        raise DecodeError(f"Season list response missing/invalid 'list': {type(groups).__name__}")

    seasons: list[SeasonRecord] = []
    for group_key, group in groups.items():
        if not isinstance(group, dict):
            raise DecodeError(f"Season group {group_key!r} is not an object")
        for sub_key, item in group.items():
            try:
                seasons.append(SeasonRecord.model_validate(item))
            except ValidationError as e:
                raise DecodeError(
                    f"failed to decode season {group_key}/{sub_key}: {e}"
                ) from e
    return seasons


def parse_ranking_rows(value: Any) -> list[RawRankingRow]:
    if not isinstance(value, list):
        raise DecodeError(f"Expected ranking list, got {type(value).__name__}")

    rows: list[RawRankingRow] = []
    for i, item in enumerate(value):
        try:
            rows.append(RawRankingRow.model_validate(item))
        except ValidationError as e:
            raise DecodeError(f"failed to decode ranking row {i}: {e}") from e
    return rows


def to_ranking_entry(row: RawRankingRow, *, icon_base_url: str) -> RankingEntry:
    """Rating is stored in thousandths; icon is a bare filename."""

    return RankingEntry(
        rank=row.rank,
        rating_value=row.rating_value / 1000,
        icon_url=f"{icon_base_url}{row.icon}",
        name=row.name,
        lng=row.lng,
    )
