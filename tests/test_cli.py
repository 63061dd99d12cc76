# File: tests/test_cli.py
"""Тесты для CLI (`rank_spider/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `config`, `--version`, а также обработку ошибок.
"""
import json
from pathlib import Path

import pytest
import rank_spider.engine as engine_module
from click.testing import CliRunner
from rank_spider.cli import cli
from rank_spider.config import read_config_data
from rank_spider.graph import LinkGraph
from rank_spider.logger import init_logging


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Без configs/default.yaml в рабочем каталоге; логгер восстанавливается после теста."""
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    # CliRunner closes the stream the CLI attached its log handler to
    init_logging()


@pytest.fixture()
def fake_crawl(monkeypatch):
    """Патчим start_crawl: возвращает фиктивный граф без сетевых запросов."""
    seen = []

    async def fake_start_crawl(cfg):
        seen.append(cfg)
        graph = LinkGraph()
        graph.get_or_create_node("http://example.com/")
        graph.get_or_create_node("http://example.com/about")
        graph.add_edge("http://example.com/", "http://example.com/about")
        return graph

    monkeypatch.setattr(engine_module, "start_crawl", fake_start_crawl)
    return seen


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "RankSpider" in result.output


def test_show_config_from_options():
    result = CliRunner().invoke(
        cli, ["config", "--url", "http://example.com", "--safe", "--count", "7", "--dir", "pages"]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["start_url"] == "http://example.com/"
    assert data["obey_robots"] is True
    assert data["max_count"] == 7
    assert data["output_dir"] == "pages"
    assert data["slow"] is False


def test_show_config_file_with_override(tmp_path):
    cfg_file = tmp_path / "spider.json"
    cfg_file.write_text(
        json.dumps({"start_url": "https://example.com", "max_count": 3, "obey_robots": True}),
        encoding="utf-8",
    )
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config", "--count", "0"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["start_url"] == "https://example.com/"
    assert data["max_count"] == 0
    assert data["obey_robots"] is True


def test_crawl_prints_graph(fake_crawl):
    result = CliRunner().invoke(cli, ["crawl", "-u", "http://example.com", "--slow", "-n", "5"])
    assert result.exit_code == 0, result.output
    assert "Graph Structure:" in result.output
    assert "  -> [http://example.com/about]" in result.output
    (cfg,) = fake_crawl
    assert cfg.slow is True
    assert cfg.max_count == 5


def test_crawl_saves_json(fake_crawl, tmp_path):
    out = tmp_path / "graph.json"
    result = CliRunner().invoke(cli, ["crawl", "--url", "http://example.com", "--json", str(out)])
    assert result.exit_code == 0, result.output
    assert f"JSON report: {out}" in result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["edges"] == [["http://example.com/", "http://example.com/about"]]


def test_crawl_without_url_fails(fake_crawl):
    result = CliRunner().invoke(cli, ["crawl"])
    assert result.exit_code == 1
    assert not fake_crawl


def test_crawl_error_exits_with_status_1(monkeypatch):
    async def broken(cfg):
        raise RuntimeError("network down")

    monkeypatch.setattr(engine_module, "start_crawl", broken)
    result = CliRunner().invoke(cli, ["crawl", "--url", "http://example.com"])
    assert result.exit_code == 1


def test_invalid_config_file(tmp_path):
    cfg_file = tmp_path / "bad.yaml"
    cfg_file.write_text("start_url: not a url", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1


def test_negative_flags_override_config_file(tmp_path):
    cfg_file = tmp_path / "spider.yaml"
    cfg_file.write_text(
        "start_url: http://example.com\nobey_robots: true\nslow: true\n", encoding="utf-8"
    )
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config", "--no-safe", "--no-slow"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["obey_robots"] is False
    assert data["slow"] is False


def test_flags_left_off_keep_file_values(tmp_path):
    cfg_file = tmp_path / "spider.yaml"
    cfg_file.write_text("start_url: http://example.com\nobey_robots: true\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["obey_robots"] is True


def test_default_config_does_not_obey_robots_or_save_pages(tmp_path):
    shipped = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(shipped.read_text(encoding="utf-8"), encoding="utf-8")

    data = read_config_data(shipped)
    assert data["obey_robots"] is False
    assert "output_dir" not in data

    result = CliRunner().invoke(cli, ["config", "-u", "http://example.com/"])
    assert result.exit_code == 0, result.output
    shown = json.loads(result.output)
    assert shown["obey_robots"] is False
    assert shown["output_dir"] is None
    assert shown["max_count"] == 100
