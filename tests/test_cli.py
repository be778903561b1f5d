"""Tests for the Typer command-line interface."""

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from pytest_mock import MockerFixture
from typer.testing import CliRunner

from wave_cli import __version__
from wave_cli.api.client import WaveAPIClient
from wave_cli.cli import app as app_module
from wave_cli.exceptions import ApiRequestError
from wave_cli.media.thumbnail import SavedThumbnail, ThumbnailDownloader
from wave_cli.models.track import WaveTrack

runner = CliRunner()

TRACKS = [
    WaveTrack(id="a1", title="Alpha", uploaderName="Band", duration=185),
    WaveTrack(id="b2", title="Beta", uploaderName="Band", thumbnail="http://x/b.png"),
]


@pytest.fixture(autouse=True)
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at a config file inside a temporary directory."""
    path = tmp_path / "config" / "config.ini"
    monkeypatch.setattr(app_module, "CONFIG_FILE", path)
    return path


@pytest.fixture
def mock_search(mocker: MockerFixture) -> AsyncMock:
    return mocker.patch.object(
        WaveAPIClient, "search", new=AsyncMock(return_value=TRACKS)
    )


def test_version() -> None:
    result = runner.invoke(app_module.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_search_prints_table(mock_search: AsyncMock) -> None:
    result = runner.invoke(app_module.app, ["search", "some", "band"])

    assert result.exit_code == 0
    assert "Alpha" in result.output
    assert "Beta" in result.output
    assert "3:05" in result.output
    mock_search.assert_awaited_once_with("some band", method=None, limit=0)


def test_search_json_output(mock_search: AsyncMock) -> None:
    result = runner.invoke(app_module.app, ["search", "band", "--json", "--post", "-n", "1"])

    assert result.exit_code == 0
    lines = [json.loads(line) for line in result.output.splitlines() if line]
    assert lines[0] == {"id": "a1", "title": "Alpha", "uploaderName": "Band", "duration": 185}
    mock_search.assert_awaited_once_with("band", method="POST", limit=1)


def test_search_no_results(mocker: MockerFixture) -> None:
    mocker.patch.object(WaveAPIClient, "search", new=AsyncMock(return_value=[]))

    result = runner.invoke(app_module.app, ["search", "zzz"])

    assert result.exit_code == 0
    assert "No results" in result.output


def test_search_api_error_exits_nonzero(mocker: MockerFixture) -> None:
    mocker.patch.object(
        WaveAPIClient,
        "search",
        new=AsyncMock(side_effect=ApiRequestError("Failed to fetch data: HTTP 503", 503)),
    )

    result = runner.invoke(app_module.app, ["search", "band"])

    assert result.exit_code == 1
    assert "HTTP 503" in result.output


def test_search_blank_query_exits_nonzero() -> None:
    result = runner.invoke(app_module.app, ["search", " "])

    assert result.exit_code == 1
    assert "cannot be empty" in result.output


def test_thumbnail_saves_selected_result(
    mock_search: AsyncMock, mocker: MockerFixture, tmp_path: Path
) -> None:
    saved = SavedThumbnail(tmp_path / "out" / "Band - Beta.png", written=True, size=2048)
    save = mocker.patch.object(
        ThumbnailDownloader, "save", new=AsyncMock(return_value=saved)
    )

    result = runner.invoke(
        app_module.app, ["thumbnail", "band", "-i", "2", "-o", str(tmp_path / "out")]
    )

    assert result.exit_code == 0
    assert "Saved thumbnail" in result.output
    save.assert_awaited_once_with(TRACKS[1], tmp_path / "out", overwrite=False)


def test_thumbnail_index_out_of_range(mock_search: AsyncMock) -> None:
    result = runner.invoke(app_module.app, ["thumbnail", "band", "--index", "5"])

    assert result.exit_code == 1
    assert "No result #5" in result.output


def test_thumbnail_reports_kept_file(
    mock_search: AsyncMock, mocker: MockerFixture, tmp_path: Path
) -> None:
    kept = SavedThumbnail(tmp_path / "Band - Beta.png", written=False, size=3)
    mocker.patch.object(ThumbnailDownloader, "save", new=AsyncMock(return_value=kept))

    result = runner.invoke(app_module.app, ["thumbnail", "band", "-i", "2"])

    assert result.exit_code == 0
    assert "already exists, kept it" in result.output
    assert "Saved thumbnail" not in result.output


@pytest.mark.parametrize("verbosity", [[], ["-vv"]])
def test_search_with_bracketed_text(mocker: MockerFixture, verbosity: list[str]) -> None:
    mocker.patch.object(
        WaveAPIClient,
        "api_call",
        new=AsyncMock(return_value={"items": [{"title": "Song [live]", "id": "[/x]"}]}),
    )

    result = runner.invoke(app_module.app, [*verbosity, "search", "[/b] remix"])

    assert result.exit_code == 0, result.output
    assert "[/b] remix" in result.output
    assert "Song [live]" in result.output
    assert "[/x]" in result.output


def test_thumbnail_missing_result_with_bracketed_query(mocker: MockerFixture) -> None:
    mocker.patch.object(WaveAPIClient, "search", new=AsyncMock(return_value=[]))

    result = runner.invoke(app_module.app, ["thumbnail", "[/i] live"])

    assert result.exit_code == 1
    assert "No result #1 for '[/i] live'" in result.output


def test_init_writes_config(config_file: Path) -> None:
    result = runner.invoke(app_module.app, ["init"])

    assert result.exit_code == 0
    assert config_file.is_file()
    assert "base_url" in config_file.read_text(encoding="utf-8")


def test_init_refuses_overwrite_without_confirmation(config_file: Path) -> None:
    config_file.parent.mkdir(parents=True)
    config_file.write_text("[DEFAULT]\ntimeout = 9\n", encoding="utf-8")

    result = runner.invoke(app_module.app, ["init"], input="n\n")

    assert result.exit_code == 1
    assert "timeout = 9" in config_file.read_text(encoding="utf-8")


def test_validate_and_show_config(config_file: Path) -> None:
    config_file.parent.mkdir(parents=True)
    config_file.write_text("[DEFAULT]\nrequest_method = post\n", encoding="utf-8")

    validate = runner.invoke(app_module.app, ["validate"])
    show = runner.invoke(app_module.app, ["--show-config"])

    assert validate.exit_code == 0
    assert "POST" in validate.output
    assert show.exit_code == 0
    assert "request_method = POST" in show.output


def test_invalid_config_exits_nonzero(config_file: Path) -> None:
    config_file.parent.mkdir(parents=True)
    config_file.write_text("[DEFAULT]\ntimeout = 0\n", encoding="utf-8")

    result = runner.invoke(app_module.app, ["validate"])

    assert result.exit_code == 1
    assert "ConfigurationError" in result.output
