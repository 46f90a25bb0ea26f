"""Prompt templating for speech requests."""
from __future__ import annotations
import logging
from pathlib import Path

LOGGER = logging.getLogger("assistant_relay.templates")

DEFAULT_SPEECH_TEMPLATE = "Read the following aloud, clearly and naturally: {{input}}"
DEFAULT_TEMPLATE_PATH = "configs/speech_template.txt"

def load_template(path: str = DEFAULT_TEMPLATE_PATH, fallback: str | None = DEFAULT_SPEECH_TEMPLATE) -> str:
    """
    Load a speech prompt template.

    Args:
        path: Path to template.
        fallback: Returned when the file cannot be read; None re-raises.
    """
    try:
        return Path(path).read_text(encoding="utf-8").strip()
    except OSError as e:
        if fallback is None:
            raise
        LOGGER.warning("Failed to read prompt template %s, using default: %s", path, e)
        return fallback

def render_prompt(template: str, text: str) -> str:
    """Substitute `text` for the {{input}} placeholder."""
    return template.replace("{{input}}", text)
