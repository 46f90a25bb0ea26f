from __future__ import annotations

from pathlib import Path

import pytest

from assistant_relay.common.settings import (
    load_client_settings,
    load_relay_settings,
    resolve_api_key,
)

ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_API_KEY_FILE",
    "FIREBASE_PROJECT_ID",
    "GOOGLE_CLOUD_PROJECT",
    "RELAY_PORT",
    "USE_RELAY",
    "RELAY_URL",
    "RELAY_ID_TOKEN",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write_cfg(tmp_path: Path, text: str) -> str:
    path = tmp_path / "relay.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_config_file_key_wins_over_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    cfg = _write_cfg(tmp_path, "gemini:\n  apikey: file-key\n")
    assert load_relay_settings(cfg).api_key == "file-key"


def test_env_key_used_when_config_empty(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    cfg = _write_cfg(tmp_path, 'gemini:\n  apikey: ""\n')
    assert load_relay_settings(cfg).api_key == "env-key"


def test_secret_file_is_last_resort(monkeypatch, tmp_path: Path) -> None:
    secret = tmp_path / "gemini_key"
    secret.write_text("secret-key\n", encoding="utf-8")
    monkeypatch.setenv("GEMINI_API_KEY_FILE", str(secret))
    assert resolve_api_key({}) == "secret-key"


def test_no_key_anywhere(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GEMINI_API_KEY_FILE", str(tmp_path / "missing"))
    assert resolve_api_key({}) is None
    assert load_relay_settings(str(tmp_path / "absent.yaml")).api_key is None


def test_relay_settings_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "gcp-project")
    monkeypatch.setenv("RELAY_PORT", "9090")
    settings = load_relay_settings(str(tmp_path / "absent.yaml"))
    assert settings.firebase_project_id == "gcp-project"
    assert settings.port == 9090


def test_client_in_relay_mode_carries_no_api_key(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("USE_RELAY", "true")
    monkeypatch.setenv("RELAY_URL", "https://relay.example.com/callGemini")
    monkeypatch.setenv("RELAY_ID_TOKEN", "tok")

    settings = load_client_settings(str(tmp_path / "absent.yaml"))

    assert settings.use_relay is True
    assert settings.api_key is None
    assert settings.id_token == "tok"


def test_client_direct_mode_resolves_key(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    settings = load_client_settings(str(tmp_path / "absent.yaml"))
    assert settings.use_relay is False
    assert settings.api_key == "env-key"
