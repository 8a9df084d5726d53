import pytest

from dockmon.main import build_config, parse_args
from dockmon.utils.config import DEFAULT_CONFIG


def test_flags_override_file_settings():
    base = dict(DEFAULT_CONFIG, refresh_interval=2.0, docker_url="unix:///tmp/a.sock")
    config = build_config(parse_args(["--interval", "0.75", "--log-level", "DEBUG"]), base=base)
    assert config["refresh_interval"] == 0.75
    assert config["log_level"] == "DEBUG"
    assert config["docker_url"] == "unix:///tmp/a.sock"


@pytest.mark.parametrize("interval", ["0", "-1"])
def test_interval_flag_is_clamped(interval):
    config = build_config(parse_args(["--interval", interval]), base=dict(DEFAULT_CONFIG))
    assert config["refresh_interval"] == 0.1


def test_missing_flags_keep_base():
    config = build_config(parse_args([]), base=dict(DEFAULT_CONFIG))
    assert config == DEFAULT_CONFIG
