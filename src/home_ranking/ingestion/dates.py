from __future__ import annotations

from datetime import datetime
from typing import Any

from home_ranking.ingestion.providers.base.errors import MalformedTimestamp

SEASON_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_season_datetime(value: Any) -> datetime:
    """
    Parse a Pokémon HOME season boundary into a naive datetime.

    Supports:
      - "2024/12/01 09:00"     (native upstream format)
      - "2024-12-01 09:00"
      - "2024/12/01 09:00:00"  (seconds already present)

    No timezone is attached; the upstream's implicit zone is kept as-is.
    """
    if not isinstance(value, str):
        raise MalformedTimestamp(f"failed to parse season time: {value!r}")

    normalized = value.strip().replace("/", "-")
    date_part, _, time_part = normalized.partition(" ")
    if time_part.count(":") == 1:
        normalized = f"{date_part} {time_part}:00"

    try:
        return datetime.strptime(normalized, SEASON_DATETIME_FORMAT)
    except ValueError as e:
        raise MalformedTimestamp(f"failed to parse season time {value!r}: {e}") from e


def format_season_datetime(dt: datetime) -> str:
    return dt.strftime(SEASON_DATETIME_FORMAT)
