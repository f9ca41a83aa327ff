# File: tests/test_cli.py
"""Тесты для CLI (`seo_scout.cli`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import importlib
import json

import pytest
from click.testing import CliRunner
from seo_scout.aggregator import GlobalReport, record_site
from seo_scout.cli import cli
from seo_scout.crawler.models import SeoError, SiteReport
from seo_scout.logger import configure

# `seo_scout.cli` attribute is shadowed by the re-exported click group; fetch the module itself.
cli_module = importlib.import_module("seo_scout.cli")

SITE = "https://www.example.com/"
QUIET = ["--log-level", "ERROR"]


@pytest.fixture()
def calls():
    return []


@pytest.fixture(autouse=True)
def restore_logging():
    """CliRunner streams are closed after invoke; point the logger back at stdout."""
    yield
    configure()


@pytest.fixture(autouse=True)
def patch_start_scan(monkeypatch, calls):
    """Патчим start_scan: возвращаем отчёт с ошибкой для каждого сайта, кроме 'clean'."""

    async def fake_scan(cfg, sites=None):
        calls.append((cfg, list(sites or [])))
        report = GlobalReport(timestamp="2026-10-17T08:00:00.000Z")
        for url in sites or []:
            if "clean" in url:
                continue
            site = SiteReport(site_url=url, total_pages_visited=1)
            site.errors.add(SeoError(url, ["Missing canonical tag"]))
            record_site(url, site, report)
        return report

    monkeypatch.setattr(cli_module, "start_scan", fake_scan)


def write_config(tmp_path, **data):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(json.dumps(data), encoding="utf-8")
    return cfg_file


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SeoScout" in result.output


def test_show_config(tmp_path):
    cfg_file = write_config(tmp_path, sites=[SITE], max_pages=10)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["sites"] == [SITE]
    assert data["max_pages"] == 10


def test_limit_overrides_max_pages(tmp_path, calls):
    cfg_file = write_config(tmp_path, sites=[SITE], max_pages=10)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "--limit", "3", "crawl", "--stdout"])
    assert result.exit_code == 0
    assert calls[0][0].max_pages == 3


def test_crawl_writes_report_to_output_dir(tmp_path, calls):
    cfg_file = write_config(tmp_path, sites=[SITE])
    out_dir = tmp_path / "downloads"
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "crawl", "--output-dir", str(out_dir)])
    assert result.exit_code == 0
    assert calls[0][1] == [SITE]

    files = list(out_dir.glob("crawl-report-*.json"))
    assert len(files) == 1
    assert str(files[0]) in result.output
    data = json.loads(files[0].read_text(encoding="utf-8"))
    assert data["sites"][SITE]["errors"]["seoErrors"][0]["errors"] == ["Missing canonical tag"]


def test_crawl_arguments_override_config_sites(tmp_path, calls):
    cfg_file = write_config(tmp_path, sites=[SITE])
    runner = CliRunner()
    result = runner.invoke(
        cli, QUIET + ["--config", str(cfg_file), "crawl", "--stdout", "https://a.example.com/", "https://b.example.com/"]
    )
    assert result.exit_code == 0
    assert calls[0][1] == ["https://a.example.com/", "https://b.example.com/"]
    output = json.loads(result.output)
    assert list(output["sites"]) == ["https://a.example.com/", "https://b.example.com/"]


def test_no_errors_means_no_report(tmp_path):
    out_dir = tmp_path / "downloads"
    cfg_file = write_config(tmp_path, output_dir=str(out_dir))
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "crawl", "https://clean.example.com/"])
    assert result.exit_code == 0
    assert "No report generated" in result.output
    assert not out_dir.exists()


def test_crawl_html_report(tmp_path):
    cfg_file = write_config(tmp_path, output_dir=str(tmp_path / "downloads"))
    out = tmp_path / "report.html"
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "crawl", SITE, "--html", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    assert SITE in out.read_text(encoding="utf-8")


def test_crawl_without_sites_fails(tmp_path):
    cfg_file = write_config(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "crawl"])
    assert result.exit_code == 1


def test_bad_config_fails(tmp_path):
    cfg_file = write_config(tmp_path, max_pages=0)
    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1


def test_scan_timeout(monkeypatch, tmp_path):
    async def slow(cfg, sites=None):
        await asyncio.sleep(2)
        return GlobalReport()

    monkeypatch.setattr(cli_module, "start_scan", slow)
    cfg_file = write_config(tmp_path, sites=[SITE])

    runner = CliRunner()
    result = runner.invoke(cli, QUIET + ["--config", str(cfg_file), "crawl", "--scan-timeout", "0.5"])
    assert result.exit_code == 1
    assert "не завершён" in result.output
