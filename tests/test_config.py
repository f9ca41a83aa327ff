# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from seo_scout.config import CrawlerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("sites:\n  - https://www.example.com/\nmax_pages: 5", ".yaml", None),
        (json.dumps({"sites": ["https://www.example.com/"], "max_pages": 5}), ".json", None),
        ("max_pages: 0", ".yaml", ValidationError),
        ("unknown_option: 1", ".yml", ValidationError),
        ("- just\n- a list", ".yaml", TypeError),
        ("sites: [unclosed", ".yaml", ValueError),
        ("{not json", ".json", ValueError),
        ("max_pages = 5", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert cfg.sites == ["https://www.example.com/"]
        assert cfg.max_pages == 5


def test_defaults_match_crawl_policy():
    cfg = CrawlerConfig()
    assert cfg.max_pages == 1000
    assert cfg.page_timeout == 10.0
    assert cfg.probe_timeout == 20.0
    assert cfg.max_redirects == 5
    assert cfg.excluded_path_keywords == ["blog"]
    assert cfg.bypass_markers == ["npm/eruda"]


def test_markers_are_lowercased():
    cfg = CrawlerConfig(bypass_markers=["NPM/Eruda", ""], excluded_path_keywords=["News"])
    assert cfg.bypass_markers == ["npm/eruda"]
    assert cfg.excluded_path_keywords == ["news"]


def test_load_config_without_default_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == CrawlerConfig()


def test_load_config_picks_up_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_pages: 7\n", encoding="utf-8")
    assert load_config(None).max_pages == 7


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_config_is_frozen():
    cfg = CrawlerConfig()
    with pytest.raises(ValidationError):
        cfg.max_pages = 3
