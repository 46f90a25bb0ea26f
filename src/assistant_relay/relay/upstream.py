"""Forwarding of generation calls to the Gemini API via google-genai."""
from __future__ import annotations
import base64
import datetime
import enum
import logging
from typing import Any

from google import genai

LOGGER = logging.getLogger("assistant_relay.relay.upstream")


def _jsonable(value: Any) -> Any:
    """Convert a python-mode dump to JSON types; bytes become standard base64."""
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    return value


def _dump(obj: Any) -> Any:
    """Render SDK models with their camelCase wire names, dropping unset fields."""
    if hasattr(obj, "model_dump"):
        return _jsonable(obj.model_dump(mode="python", by_alias=True, exclude_none=True))
    return _jsonable(obj)


def to_payload(result: Any) -> dict[str, Any]:
    """Extract the fields returned to callers from an SDK response."""
    candidates = getattr(result, "candidates", None)
    usage = getattr(result, "usage_metadata", None)
    return {
        "text": getattr(result, "text", None),
        "candidates": [_dump(c) for c in candidates] if candidates is not None else None,
        "usageMetadata": _dump(usage) if usage is not None else None,
    }


async def generate_content(
    api_key: str, model: str, contents: Any, config: Any
) -> dict[str, Any]:
    """Single upstream call; failures propagate to the caller unchanged."""
    LOGGER.debug("Forwarding generation call to model %s", model)
    async with genai.Client(api_key=api_key).aio as aclient:
        result = await aclient.models.generate_content(
            model=model,
            contents=contents,
            config=config,
        )
    return to_payload(result)


def generate_content_sync(
    api_key: str, model: str, contents: Any, config: Any
) -> dict[str, Any]:
    LOGGER.debug("Forwarding generation call to model %s", model)
    with genai.Client(api_key=api_key) as client:
        result = client.models.generate_content(model=model, contents=contents, config=config)
    return to_payload(result)
