import pytest

from clipscribe.errors import ConfigError
from clipscribe.models.config import AppConfig, load_config


def test_missing_default_config_yields_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config()
    assert config == AppConfig()
    assert config.backend.factory is None
    assert config.review.auto_approve is False


def test_explicit_missing_config_is_an_error(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


def test_config_loads_yaml_and_resolves_script(tmp_path):
    path = tmp_path / "clipscribe.yaml"
    path.write_text(
        "backend:\n"
        "  script: replay.yaml\n"
        "logging:\n"
        "  verbose: true\n"
        "review:\n"
        "  auto_approve: true\n"
    )
    config = load_config(path)
    assert config.backend.script == str(tmp_path / "replay.yaml")
    assert config.logging.verbose is True
    assert config.review.auto_approve is True


def test_unknown_keys_are_rejected(tmp_path):
    path = tmp_path / "clipscribe.yaml"
    path.write_text("backend:\n  scirpt: replay.yaml\n")
    with pytest.raises(ConfigError):
        load_config(path)
