# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from sitemap_scout.config import ScraperConfig, load_config
from sitemap_scout.crawler.fetcher import USER_AGENTS


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,expect_exc",
    [
        ("sitemap_url: http://example.com/sitemap.xml", None),
        (json.dumps({"sitemap_url": "http://example.com/sitemap.xml", "concurrency": 3}), None),
        ("{}", ValidationError),
        ("::invalid yaml", TypeError),
        ("key: [unclosed", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, expect_exc):
    suffix = ".yaml" if not content.strip().startswith("{") else ".json"
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, ScraperConfig)
        assert str(cfg.sitemap_url) == "http://example.com/sitemap.xml"


def test_defaults():
    cfg = ScraperConfig(sitemap_url="https://example.com/sitemap.xml")
    assert cfg.concurrency == 10
    assert cfg.timeout == 10.0
    assert cfg.phase_timeout is None
    assert cfg.dedupe_pages is False
    assert cfg.user_agents == list(USER_AGENTS)


@pytest.mark.parametrize(
    "override",
    [
        {"concurrency": 0},
        {"timeout": 0},
        {"phase_timeout": -1},
        {"user_agents": []},
        {"user_agents": ["  "]},
        {"unknown_option": True},
        {"sitemap_url": "not a url"},
    ],
)
def test_invalid_values_rejected(override):
    data = {"sitemap_url": "https://example.com/sitemap.xml", **override}
    with pytest.raises(ValidationError):
        ScraperConfig(**data)


def test_config_is_frozen():
    cfg = ScraperConfig(sitemap_url="https://example.com/sitemap.xml")
    with pytest.raises(ValidationError):
        cfg.concurrency = 3


def test_unsupported_suffix(tmp_path):
    cfg_path = write_file(tmp_path, "sitemap_url = 'x'", ".toml")
    with pytest.raises(ValueError):
        load_config(cfg_path)


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_load_config_default_present(tmp_path, monkeypatch):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "sitemap_url: https://example.com/sitemap.xml\nconcurrency: 4\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    assert load_config(None).concurrency == 4


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")
