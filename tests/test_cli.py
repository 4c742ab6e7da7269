"""
Test the iosite command-line interface.
"""

import json

import pytest
from click.testing import CliRunner

from iosite import __version__
from iosite.cli import cli


@pytest.fixture
def runner(site_dir):
    return CliRunner(env={
        "IOSITE_DIR": str(site_dir),
        "IOSITE_ENV": "prod",
        "IOSITE_PREFIX": "/io15",
    })


@pytest.fixture
def schedule_file(tmp_path):
    path = tmp_path / "schedule.json"
    path.write_text(json.dumps({
        "modified": "2015-05-20T10:00:00Z",
        "sessions": {"s1": {}, "s2": {}},
    }))
    return str(path)


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_render_to_stdout(runner):
    result = runner.invoke(cli, ["render", "schedule"])

    assert result.exit_code == 0, result.output
    assert "<title>Sessions</title>" in result.output


def test_render_partial_with_title(runner, tmp_path):
    output = tmp_path / "out.html"

    result = runner.invoke(cli, ["render", "home", "--partial", "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == b'<div class="partial">Home home</div>'


def test_render_missing_page(runner):
    result = runner.invoke(cli, ["render", "missing"])

    assert result.exit_code == 1
    assert "missing" in result.output


def test_sitemap(runner, schedule_file, tmp_path):
    output = tmp_path / "sitemap.xml"

    result = runner.invoke(cli, [
        "sitemap", "https://events.google.com/io2015/", "-s", schedule_file, "-o", str(output),
    ])

    assert result.exit_code == 0, result.output
    xml = output.read_text()
    assert "http://www.sitemaps.org/schemas/sitemap/0.9" in xml
    assert "<loc>https://events.google.com/io2015/schedule?sid=s2</loc>" in xml
    assert "<lastmod>2015-05-20T10:00:00Z</lastmod>" in xml
    assert "error_404" not in xml


def test_sitemap_missing_schedule(runner, tmp_path):
    result = runner.invoke(cli, [
        "sitemap", "https://events.google.com/io2015/", "-s", str(tmp_path / "none.json"),
    ])

    assert result.exit_code == 1
    assert "SCHEDULE_UNAVAILABLE" in result.output


def test_pages(runner):
    result = runner.invoke(cli, ["pages"])

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert "home\tpage\tlayout_full.html" in lines
    assert "error_404\terror\tlayout_error.html" in lines
    assert "upgrade\tbare\tlayout_bare.html" in lines


def test_invalid_config(runner):
    result = runner.invoke(cli, ["pages"], env={"IOSITE_SCHEDULE__TIMEZONE": "Nowhere/Land"})

    assert result.exit_code == 1
    assert "CONFIG_INVALID" in result.output
