# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from rank_spider.config import SpiderConfig, load_config, read_config_data


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,expect_exc",
    [
        ("start_url: http://example.com\nmax_count: 5", None),
        (json.dumps({"start_url": "http://example.com", "max_count": 5}), None),
        ("{}", ValidationError),
        ("- a\n- b", TypeError),
        ("start_url: [unclosed", ValueError),
        ("start_url: http://example.com\nunknown: 1", ValidationError),
        ("start_url: http://example.com\nmax_count: -1", ValidationError),
    ],
)
def test_load_config_variants(tmp_path, content, expect_exc):
    suffix = ".json" if content.strip().startswith("{") else ".yaml"
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, SpiderConfig)
        assert str(cfg.start_url).rstrip("/") == "http://example.com"
        assert cfg.max_count == 5
        assert cfg.obey_robots is False
        assert cfg.output_dir is None


def test_overrides_replace_file_values(tmp_path):
    cfg_path = write_file(tmp_path, "start_url: http://example.com\nmax_count: 5\nslow: true", ".yml")
    cfg = load_config(cfg_path, max_count=0, slow=None, output_dir=str(tmp_path / "out"))
    assert cfg.max_count == 0
    assert cfg.slow is True
    assert cfg.output_dir == tmp_path / "out"


def test_config_is_frozen():
    cfg = SpiderConfig(start_url="http://example.com")
    with pytest.raises(ValidationError):
        cfg.max_count = 3


def test_load_config_without_default_file_uses_overrides(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        read_config_data(None)
    with pytest.raises(ValidationError):
        load_config(None)
    cfg = load_config(None, start_url="http://example.com", obey_robots=False, max_count=None)
    assert cfg.obey_robots is False
    assert cfg.max_count == 10000


def test_load_config_prefers_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("start_url: http://example.com\nmax_count: 4", encoding="utf-8")
    cfg = load_config(None, slow=True)
    assert cfg.max_count == 4
    assert cfg.slow is True


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError):
        load_config(write_file(tmp_path, "start_url = 'x'", ".toml"))
