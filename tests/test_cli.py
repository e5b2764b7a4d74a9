# File: tests/test_cli.py
"""Тесты для CLI (`sitemap_scout.cli`) с использованием click.testing.CliRunner.
Проверяют команды `scan`, `config`, `--version`, а также обработку ошибок.
"""
import json

import pytest
from click.testing import CliRunner

import sitemap_scout.cli as cli_module
from sitemap_scout.aggregator import aggregate_results
from sitemap_scout.cli import cli
from sitemap_scout.crawler.models import SEORecord

RECORD = SEORecord(
    url="https://example.com/post",
    title="Post",
    h1="Heading",
    meta_description="Description",
    status_code=200,
)


@pytest.fixture(autouse=True)
def patch_run_scan(monkeypatch):
    """Патчим run_scan для возвращения фиктивного отчёта без сети."""
    calls = []

    async def fake_scan(cfg):
        calls.append(cfg)
        return aggregate_results(str(cfg.sitemap_url), [RECORD], discovered=1)

    monkeypatch.setattr(cli_module, "run_scan", fake_scan)
    return calls


@pytest.fixture()
def cfg_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("sitemap_url: https://example.com/sitemap.xml\nconcurrency: 4\n", encoding="utf-8")
    return path


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SitemapScout" in result.output


def test_show_config(cfg_file):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["sitemap_url"] == "https://example.com/sitemap.xml"
    assert data["concurrency"] == 4


def test_cli_overrides_config_file(cfg_file):
    result = CliRunner().invoke(
        cli, ["--config", str(cfg_file), "--concurrency", "2", "--url", "https://other.org/sm.xml", "config"]
    )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["concurrency"] == 2
    assert data["sitemap_url"] == "https://other.org/sm.xml"


def test_url_without_config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["--url", "https://example.com/sitemap.xml", "config"])
    assert result.exit_code == 0
    assert json.loads(result.output)["concurrency"] == 10


def test_scan_stdout(cfg_file, patch_run_scan):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "scan", "--phase-timeout", "30"])
    assert result.exit_code == 0
    # progress and log lines precede the JSON document
    records = json.loads(result.output.strip().splitlines()[-1])
    assert records == [RECORD.to_dict()]
    assert patch_run_scan[0].phase_timeout == 30.0


def test_scan_writes_reports(cfg_file, tmp_path):
    json_path = tmp_path / "out" / "report.json"
    html_path = tmp_path / "out" / "report.html"
    result = CliRunner().invoke(
        cli, ["--config", str(cfg_file), "scan", "--json", str(json_path), "--html", str(html_path)]
    )
    assert result.exit_code == 0
    assert f"JSON report: {json_path}" in result.output
    assert json.loads(json_path.read_text(encoding="utf-8"))["records"][0]["title"] == "Post"
    assert "https://example.com/post" in html_path.read_text(encoding="utf-8")


def test_invalid_url_exits_with_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["--url", "example.com/sitemap.xml", "config"])
    assert result.exit_code == 1


def test_missing_default_config_exits_with_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["config"])
    assert result.exit_code == 1


def test_invalid_config_contents(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("concurrency: 0\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(bad), "config"])
    assert result.exit_code == 1


def test_scan_failure_exits_with_error(cfg_file, monkeypatch):
    async def broken_scan(cfg):
        raise RuntimeError("event loop exploded")

    monkeypatch.setattr(cli_module, "run_scan", broken_scan)
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "scan"])
    assert result.exit_code == 1


def test_help_mentions_stderr_for_logs():
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "stderr" in result.output
