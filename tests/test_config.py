import json

from dockmon.utils import config
from dockmon.utils.config import DEFAULT_CONFIG, load_config, normalize_config, save_config


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(str(tmp_path / "missing.json")) == DEFAULT_CONFIG


def test_load_merges_over_defaults(tmp_path):
    path = tmp_path / "dockmon.json"
    path.write_text(json.dumps({"refresh_interval": 1.5, "unknown": True}))
    loaded = load_config(str(path))
    assert loaded["refresh_interval"] == 1.5
    assert loaded["container_fetch_interval"] == DEFAULT_CONFIG["container_fetch_interval"]
    assert "unknown" not in loaded


def test_unreadable_file_gives_defaults(tmp_path):
    path = tmp_path / "dockmon.json"
    path.write_text("{not json")
    assert load_config(str(path)) == DEFAULT_CONFIG
    path.write_text("[1, 2]")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_numbers_are_clamped():
    values = normalize_config({"refresh_interval": 0, "container_fetch_interval": "x"})
    assert values["refresh_interval"] == 0.1
    assert values["container_fetch_interval"] == DEFAULT_CONFIG["container_fetch_interval"]


def test_save_and_reload(tmp_path, monkeypatch):
    path = tmp_path / "dockmon.json"
    monkeypatch.setattr(config, "CONFIG_FILE", str(path))
    assert save_config(dict(DEFAULT_CONFIG, docker_url="tcp://127.0.0.1:2375"))
    assert load_config()["docker_url"] == "tcp://127.0.0.1:2375"


def test_save_failure_is_reported(tmp_path):
    assert save_config(DEFAULT_CONFIG, str(tmp_path / "no" / "such" / "dir.json")) is False
