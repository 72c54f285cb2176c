from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager

import pytest
import uvicorn
from typer.testing import CliRunner

from home_ranking.cli import app as cli_module
from home_ranking.cli.app import app
from home_ranking.ingestion.providers.base.errors import UpstreamStatusError
from home_ranking.rankings.models import SeasonRecord


class _CatalogOnly:
    def __init__(self, seasons: list[SeasonRecord] | None = None, error: Exception | None = None):
        self.seasons = seasons or []
        self.error = error

    def fetch_season_catalog(self) -> list[SeasonRecord]:
        if self.error:
            raise self.error
        return self.seasons


def _patch_provider(monkeypatch: pytest.MonkeyPatch, provider: _CatalogOnly) -> None:
    @contextmanager
    def fake_scope() -> Iterator[_CatalogOnly]:
        yield provider

    monkeypatch.setattr(cli_module, "provider_scope", fake_scope)


def test_cli_help_smoke() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "serve" in result.stdout
    assert "active-season" in result.stdout


def test_cli_active_season_prints_json(monkeypatch: pytest.MonkeyPatch) -> None:
    season = SeasonRecord(
        competition_id="10002",
        result_id=0,
        start_time="2000/01/01 00:00",
        end_time="2999/12/31 23:59",
        timestamp1=1733875200.0,
        name="Season 25",
    )
    _patch_provider(monkeypatch, _CatalogOnly([season]))

    result = CliRunner().invoke(app, ["active-season"])

    assert result.exit_code == 0
    body = json.loads(result.stdout)
    assert body["competitionId"] == "10002"
    assert body["startTime"] == "2000-01-01 00:00:00"


def test_cli_active_season_reports_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_provider(monkeypatch, _CatalogOnly(error=UpstreamStatusError(502, "https://example.test")))

    result = CliRunner().invoke(app, ["active-season"])

    assert result.exit_code == 1


def test_cli_serve_logs_bind_failure(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    def failing_run(*args: object, **kwargs: object) -> None:
        # uvicorn exits the process when the port cannot be bound.
        raise SystemExit(1)

    monkeypatch.setattr(uvicorn, "run", failing_run)
    monkeypatch.setattr(cli_module, "configure_logging", lambda level: None)

    with caplog.at_level(logging.ERROR, logger="home_ranking.cli.app"):
        result = CliRunner().invoke(app, ["serve", "--port", "18080"])

    assert result.exit_code == 1
    assert "Server failed to start" in caplog.text
