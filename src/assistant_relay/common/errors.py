"""Error types shared by the relay, the client and the audio helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class RelayError(Exception):
    """Relay failure carrying the HTTP status and JSON error body."""

    status_code: int
    error: str
    message: str | None = None

    def __str__(self) -> str:
        return self.error if self.message is None else f"{self.error}: {self.message}"

    def to_error(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.message is not None:
            body["message"] = self.message
        return body


class MethodNotAllowed(RelayError):
    def __init__(self) -> None:
        super().__init__(405, "Method Not Allowed")


class Unauthorized(RelayError):
    def __init__(self, error: str = "Unauthorized - Invalid token") -> None:
        super().__init__(401, error)


class BadRequest(RelayError):
    def __init__(
        self, error: str = "Missing required parameters: model and contents"
    ) -> None:
        super().__init__(400, error)


class ConfigurationError(RelayError):
    def __init__(self, error: str = "API key not configured") -> None:
        super().__init__(500, error)


class UpstreamFailure(RelayError):
    def __init__(self, message: str | None = None) -> None:
        super().__init__(500, "Failed to process request", message)


class RelayCallError(Exception):
    """Raised by the client when the relay answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class OutOfRangeError(IndexError):
    """Requested more frames than the PCM buffer holds."""
