from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def _field(upstream: str, public: str, python: str, **kwargs: Any) -> Any:
    """Accept the upstream key, the public key or the python name; emit the public key."""

    return Field(
        validation_alias=AliasChoices(upstream, public, python),
        serialization_alias=public,
        **kwargs,
    )


class SeasonRecord(BaseModel):
    """One ranked-battle season as published by the Pokémon HOME season list."""

    model_config = ConfigDict(frozen=True)

    competition_id: str = _field("cId", "competitionId", "competition_id")
    count: float = _field("cnt", "count", "count", default=0)
    rule_id: int = _field("rule", "ruleId", "rule_id", default=0)
    result_id: int = _field("rst", "resultId", "result_id")
    season_number: int = _field("season", "seasonNumber", "season_number", default=0)
    start_time: str = _field("start", "startTime", "start_time")
    end_time: str = _field("end", "endTime", "end_time")
    timestamp1: float = _field("ts1", "timestamp1", "timestamp1")
    timestamp2: float = _field("ts2", "timestamp2", "timestamp2", default=0)
    name: str = _field("name", "name", "name", default="")
    rank_count: int = _field("rankCnt", "rankCount", "rank_count", default=0)

    @property
    def timestamp1_key(self) -> str:
        # ts1 is published as a float but used as an integer path segment.
        return f"{self.timestamp1:.0f}"


class RawRankingRow(BaseModel):
    """A trainer row exactly as the ranking feed returns it."""

    rank: int
    rating_value: float
    icon: str = ""
    name: str = ""
    lng: str = ""


class RankingEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rank: int
    rating_value: float = Field(alias="ratingValue")
    icon_url: str = Field(alias="iconUrl")
    name: str
    lng: str


class AggregatedResponse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    active_season: SeasonRecord = Field(alias="activeSeason")
    top_entries: list[RankingEntry] = Field(alias="topEntries")

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
