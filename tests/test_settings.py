import json

import pytest

from curiosity.config import (
    ConfigValidationError,
    Settings,
    deep_merge,
    load_config_file,
)
from curiosity.config.constants import DEFAULT_LLM_BASE_URL, DEFAULT_LLM_MODEL


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "SAMBANOVA_API_KEY",
        "LLM_API_KEY",
        "LLM_MODEL",
        "LLM_BASE_URL",
        "LLM_TEMPERATURE",
        "AGENT_MAX_ITERATIONS",
        "SERVER_PORT",
        "LOG_COLORS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings()

    assert settings.model == DEFAULT_LLM_MODEL
    assert settings.llm_base_url == DEFAULT_LLM_BASE_URL
    assert settings.max_iterations == 10
    assert settings.temperature == 0.1
    assert settings.server_port == 8765
    assert settings.llm_api_key is None


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("LLM_API_KEY", "env-key")
    monkeypatch.setenv("AGENT_MAX_ITERATIONS", "4")
    monkeypatch.setenv("LLM_TEMPERATURE", "0.7")
    monkeypatch.setenv("LOG_COLORS", "false")

    settings = Settings()

    assert settings.llm_api_key == "env-key"
    assert settings.max_iterations == 4
    assert settings.temperature == 0.7
    assert settings.log_colors is False


def test_sambanova_key_preferred(monkeypatch):
    monkeypatch.setenv("SAMBANOVA_API_KEY", "samba")
    monkeypatch.setenv("LLM_API_KEY", "generic")

    assert Settings().llm_api_key == "samba"


def test_file_values_win(monkeypatch):
    monkeypatch.setenv("LLM_MODEL", "env-model")

    settings = Settings({"llm": {"model": "file-model"}, "agent": {"max_iterations": 3}})

    assert settings.model == "file-model"
    assert settings.max_iterations == 3


def test_with_overrides_merges():
    base = Settings({"llm": {"model": "a", "api_key": "k"}})

    updated = base.with_overrides({"llm": {"model": "b"}})

    assert updated.model == "b"
    assert updated.llm_api_key == "k"
    assert base.model == "a"


def test_validation_status():
    valid, errors = Settings().validation_status()

    assert not valid
    assert any("api key" in e for e in errors)

    assert Settings({"llm": {"api_key": "k"}}).validation_status() == (True, [])


def test_validate_rejects_zero_iterations():
    with pytest.raises(ValueError, match="max_iterations"):
        Settings({"llm": {"api_key": "k"}, "agent": {"max_iterations": 0}}).validate_or_raise()


def test_deep_merge_skips_none():
    base = {"llm": {"model": "a", "temperature": 0.1}}

    merged = deep_merge(base, {"llm": {"model": None, "temperature": 0.5}, "x": 1})

    assert merged == {"llm": {"model": "a", "temperature": 0.5}, "x": 1}
    assert base == {"llm": {"model": "a", "temperature": 0.1}}


def test_load_config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"server": {"port": 9000}}))

    assert Settings.from_file(path).server_port == 9000


def test_load_config_file_errors(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{nope")
    not_object = tmp_path / "list.json"
    not_object.write_text("[1]")

    with pytest.raises(ConfigValidationError):
        load_config_file(bad)
    with pytest.raises(ConfigValidationError):
        load_config_file(not_object)
    with pytest.raises(ConfigValidationError):
        load_config_file(tmp_path / "missing.json")
