"""Basic tests for the arcwiki-extremes CLI."""

import json

import httpx
import pytest
from asyncclick.testing import CliRunner

from arcwiki_extremes.main import app as main
from arcwiki_extremes.persistence import compute_fetch_key

SONGLIST = {
    "songs": [
        {"id": "alpha", "title_localized": {"en": "Alpha"}, "difficulties": [{"ratingClass": 2, "rating": 8}]},
    ]
}


def _wiki(request: httpx.Request) -> httpx.Response:
    title = request.url.params["title"]
    if title == "Template:Songlist.json":
        return httpx.Response(200, json=SONGLIST)
    if title == "Template:Transition.json":
        return httpx.Response(200, json={})
    return httpx.Response(200, text="|FutureNote=777|")


def test_main_function_exists():
    """Test that the main function exists and is callable."""
    assert callable(main)


@pytest.mark.asyncio
async def test_main_command_help():
    runner = CliRunner()
    result = await runner.invoke(main, ["--help"])

    assert result.exit_code == 0
    assert "Arcwiki Extremes" in result.output
    assert "harvest" in result.output


@pytest.mark.asyncio
async def test_main_with_logging_status():
    """Test that logging-status command works."""
    runner = CliRunner()
    result = await runner.invoke(main, ["logging-status"])

    assert result.exit_code == 0
    assert "Logging Configuration" in result.output


@pytest.mark.asyncio
async def test_cache_key_command():
    runner = CliRunner()
    result = await runner.invoke(
        main, ["--json", "cache-key", "https://arcwiki.mcd.blue/index.php", "title=Fracture Ray", "action=raw"]
    )

    assert result.exit_code == 0
    expected = compute_fetch_key("https://arcwiki.mcd.blue/index.php", {"title": "Fracture Ray", "action": "raw"})
    assert expected in result.output


@pytest.mark.asyncio
async def test_cache_key_rejects_bare_parameter():
    runner = CliRunner()
    result = await runner.invoke(main, ["--json", "cache-key", "https://arcwiki.mcd.blue/index.php", "title"])

    assert result.exit_code != 0


@pytest.mark.asyncio
async def test_harvest_writes_artifact(httpx_mock, tmp_path):
    httpx_mock.add_callback(_wiki, is_reusable=True)
    output = tmp_path / "extremes.json"

    runner = CliRunner()
    result = await runner.invoke(
        main, ["--json", "harvest", "--no-cache", "--concurrency", "2", "--output", str(output)]
    )

    assert result.exit_code == 0
    artifact = json.loads(output.read_text(encoding="utf-8"))
    assert artifact["Alpha"] == [{"ratingFull": "8", "ratingClass": "Future", "notes": 777, "min": True, "max": True}]
    assert artifact["Last"][0] == {"ratingFull": "4", "ratingClass": "Past", "notes": 680, "min": True, "max": True}


@pytest.mark.asyncio
async def test_harvest_exits_nonzero_when_catalog_unavailable(httpx_mock):
    httpx_mock.add_response(status_code=503, is_reusable=True)

    runner = CliRunner()
    result = await runner.invoke(main, ["--json", "harvest", "--no-cache"])

    assert result.exit_code == 1
