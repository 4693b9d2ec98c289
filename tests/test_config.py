import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from task_allocator.config import CONFIG_ENV_VAR, AppConfig, load_config


def test_defaults_when_missing(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config = load_config(str(tmp_path / "missing.yaml"))
    assert config == AppConfig()
    assert config.port == 3001


def test_load_from_file_resolves_dataset(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("port: 8080\nlog_level: debug\ndataset: team.yaml\n", encoding="utf8")
    config = load_config(str(path))
    assert config.port == 8080
    assert config.log_level == "DEBUG"
    assert config.dataset == str(tmp_path / "team.yaml")


def test_env_var_and_validation(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("debug: true\n", encoding="utf8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_config().debug is True

    path.write_text("colour: blue\n", encoding="utf8")
    with pytest.raises(ValueError):
        load_config(str(path))

    with pytest.raises(ValueError):
        AppConfig(log_level="chatty")
