"""Runtime configuration for the relay and the generation client.

Values come from an optional YAML file and the process environment. The
upstream credential is resolved in this order, first non-empty value wins:

1. ``gemini.apikey`` in the YAML config
2. ``GEMINI_API_KEY`` environment variable
3. contents of the file named by ``GEMINI_API_KEY_FILE`` (mounted secret)
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

LOGGER = logging.getLogger("assistant_relay.settings")

DEFAULT_CFG_PATH = "configs/relay.yaml"

_TRUE = ("1", "true", "yes", "on")


def load_cfg(path: str | None) -> dict[str, Any]:
    """Read a YAML config file; a missing file yields an empty config."""
    if not path or not Path(path).exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _read_secret_file(path: str) -> str | None:
    try:
        return Path(path).read_text(encoding="utf-8").strip()
    except OSError as e:
        LOGGER.error("Cannot read secret file %s: %s", path, e)
        return None


def resolve_api_key(cfg: dict[str, Any]) -> str | None:
    gemini = cfg.get("gemini") or {}
    candidates = [
        lambda: gemini.get("apikey"),
        lambda: os.getenv("GEMINI_API_KEY"),
        lambda: _read_secret_file(os.environ["GEMINI_API_KEY_FILE"])
        if os.getenv("GEMINI_API_KEY_FILE")
        else None,
    ]
    for source in candidates:
        value = source()
        if value:
            return str(value).strip()
    return None


@dataclass(frozen=True)
class RelaySettings:
    api_key: str | None = None
    firebase_project_id: str | None = None
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"


def load_relay_settings(cfg_path: str | None = DEFAULT_CFG_PATH) -> RelaySettings:
    """Evaluate relay configuration once, at process start."""
    cfg = load_cfg(cfg_path)
    firebase = cfg.get("firebase") or {}
    return RelaySettings(
        api_key=resolve_api_key(cfg),
        firebase_project_id=(
            firebase.get("project_id")
            or os.getenv("FIREBASE_PROJECT_ID")
            or os.getenv("GOOGLE_CLOUD_PROJECT")
        ),
        host=os.getenv("RELAY_HOST", "0.0.0.0"),
        port=int(os.getenv("RELAY_PORT", "8080")),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@dataclass(frozen=True)
class ClientSettings:
    use_relay: bool = False
    relay_url: str | None = None
    id_token: str | None = None
    api_key: str | None = None
    timeout: float = 120.0


def load_client_settings(cfg_path: str | None = DEFAULT_CFG_PATH) -> ClientSettings:
    cfg = load_cfg(cfg_path)
    use_relay = os.getenv("USE_RELAY", "false").lower() in _TRUE
    return ClientSettings(
        use_relay=use_relay,
        relay_url=os.getenv("RELAY_URL"),
        id_token=os.getenv("RELAY_ID_TOKEN"),
        # The key stays off the caller when the relay holds it.
        api_key=None if use_relay else resolve_api_key(cfg),
        timeout=float(os.getenv("RELAY_TIMEOUT", "120")),
    )
