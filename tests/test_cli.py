# File: tests/test_cli.py
"""Тесты для CLI (`keyscout.cli`) с использованием click.testing.CliRunner.
Проверяют команды `run`, `config`, `--version`, а также обработку ошибок.
"""
import asyncio
import json

import pytest
from click.testing import CliRunner

import keyscout.cli as cli_module
from keyscout.aggregator import ScoutReport
from keyscout.cli import cli


@pytest.fixture()
def cfg_file(tmp_path):
    """Корректный конфиг со своими путями входных файлов."""
    (tmp_path / "input.csv").write_text("example.com\n", encoding="utf-8")
    (tmp_path / "keywords.json").write_text('["alpha"]', encoding="utf-8")
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "domains_file": str(tmp_path / "input.csv"),
                "keywords_file": str(tmp_path / "keywords.json"),
                "results_dir": str(tmp_path / "saved"),
                "results_csv": str(tmp_path / "results.csv"),
                "request_delay": 0,
                "search": {"api_key": "secret"},
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def patch_start_scout(monkeypatch):
    """Патчим start_scout, чтобы не ходить в сеть и не запускать браузер."""
    seen = []

    async def fake_scout(cfg):
        seen.append(cfg)
        return ScoutReport(
            domains=[
                {
                    "domain": "example.com",
                    "state": "quota_met",
                    "pages_visited": 1,
                    "fetch_failures": 0,
                    "keywords_found": [{"keyword": "alpha", "reference_url": "https://example.com/"}],
                }
            ],
            keywords=["alpha"],
            totals={"domains": 1, "records": 1},
        )

    monkeypatch.setattr(cli_module, "start_scout", fake_scout)
    return seen


def _json_from(output: str):
    return json.loads(output[output.index("{"):])


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "KeyScout" in result.output


def test_show_config(cfg_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["max_crawl_depth"] == 3
    assert data["search"]["api_key"] == "secret"


def test_run_stdout(cfg_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "run"])
    assert result.exit_code == 0
    report = _json_from(result.output)
    assert report["domains"][0]["keywords_found"][0]["keyword"] == "alpha"


def test_run_overrides(cfg_file, tmp_path, patch_start_scout):
    other = tmp_path / "other.csv"
    other.write_text("b.com\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        cli, ["--config", str(cfg_file), "run", "--domains", str(other), "--depth", "2", "--quota", "1"]
    )
    assert result.exit_code == 0
    cfg = patch_start_scout[0]
    assert cfg.domains_file == other
    assert cfg.max_crawl_depth == 2
    assert cfg.max_keywords_per_domain == 1


def test_run_json_file(cfg_file, tmp_path):
    out = tmp_path / "out.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "run", "--json", str(out)])
    assert result.exit_code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["domains"][0]["domain"] == "example.com"
    assert data["totals"]["records"] == 1


@pytest.mark.parametrize("flags,indented", [([], False), (["--pretty"], True)])
def test_run_json_file_honours_pretty(cfg_file, tmp_path, flags, indented):
    out = tmp_path / "out.json"
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "run", "--json", str(out), *flags])
    assert result.exit_code == 0
    text = out.read_text(encoding="utf-8")
    assert ('\n  "domains"' in text) is indented
    assert json.loads(text)["totals"]["records"] == 1


def test_run_html_file(cfg_file, tmp_path):
    out = tmp_path / "report.html"
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "run", "--html", str(out)])
    assert result.exit_code == 0
    html = out.read_text(encoding="utf-8")
    assert "example.com" in html
    assert "https://example.com/" in html


def test_run_timeout(monkeypatch, cfg_file):
    async def slow(cfg):
        await asyncio.sleep(2)

    monkeypatch.setattr(cli_module, "start_scout", slow)
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "run", "--run-timeout", "0.2"])
    assert result.exit_code == 1
    assert "не завершён" in result.output


def test_run_input_error(monkeypatch, cfg_file):
    async def broken(cfg):
        raise FileNotFoundError("input.csv")

    monkeypatch.setattr(cli_module, "start_scout", broken)
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "run"])
    assert result.exit_code == 1
    assert "Ошибка при обходе" in result.output


def test_bad_config(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("max_crawl_depth: 0\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(bad), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output
