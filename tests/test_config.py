import json

import pytest

from sentinel.config import API_KEY_ENV_VARS, Settings, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in API_KEY_ENV_VARS + ("SENTINEL_HISTORY_PATH",):
        monkeypatch.delenv(var, raising=False)


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(data if isinstance(data, str) else json.dumps(data))
    return str(path)


def test_defaults_when_missing(tmp_path):
    settings = load_settings(str(tmp_path / "missing.json"))
    assert settings == Settings()
    assert settings.history_capacity == 10
    assert settings.request_timeout == 8


def test_reads_file(tmp_path):
    path = write_config(tmp_path, {
        "api_key": "file-key",
        "advice_model": "gemini-test",
        "request_timeout": 2.5,
        "history_capacity": 5,
    })
    settings = load_settings(path)

    assert settings.api_key == "file-key"
    assert settings.advice_model == "gemini-test"
    assert settings.request_timeout == 2.5
    assert settings.history_capacity == 5


@pytest.mark.parametrize("content", ["", "{not json", "[1, 2]"])
def test_corrupt_file_gives_defaults(tmp_path, content):
    assert load_settings(write_config(tmp_path, content)) == Settings()


def test_invalid_values_are_ignored(tmp_path):
    path = write_config(tmp_path, {
        "request_timeout": "fast",
        "history_capacity": -3,
        "advice_timeout": True,
        "surprise": 1,
    })
    assert load_settings(path) == Settings()


def test_env_overrides(tmp_path, monkeypatch):
    path = write_config(tmp_path, {"api_key": "file-key"})
    monkeypatch.setenv("API_KEY", "generic")
    monkeypatch.setenv("GEMINI_API_KEY", "gemini")
    monkeypatch.setenv("SENTINEL_HISTORY_PATH", "/tmp/h.db")

    settings = load_settings(path)

    assert settings.api_key == "gemini"
    assert settings.history_path == "/tmp/h.db"
