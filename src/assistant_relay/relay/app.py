"""FastAPI relay that forwards authenticated generation calls to Gemini.

Endpoints:
- GET /health
- POST /callGemini  { "model": "...", "contents": ..., "config": ... }
"""
from __future__ import annotations
import logging
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from assistant_relay.common.errors import (
    BadRequest,
    ConfigurationError,
    MethodNotAllowed,
    RelayError,
    UpstreamFailure,
)
from assistant_relay.common.schema import GenerationRequest
from assistant_relay.common.settings import RelaySettings, load_relay_settings
from assistant_relay.relay.auth import require_identity
from assistant_relay.relay.upstream import generate_content

LOGGER = logging.getLogger("assistant_relay.relay.app")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RelayError)
    async def handle_relay_error(_request: Request, exc: RelayError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_error())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 405:
            content = MethodNotAllowed().to_error()
        else:
            content = {"error": exc.detail}
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None),
        )


def _scrub(message: str, secret: str) -> str:
    return message.replace(secret, "***") if secret else message


async def _read_generation_request(request: Request) -> GenerationRequest:
    try:
        body = await request.json()
    except ValueError:
        raise BadRequest()
    if not isinstance(body, dict):
        raise BadRequest()
    try:
        payload = GenerationRequest.model_validate(body)
    except ValidationError:
        raise BadRequest()
    if not payload.is_complete():
        raise BadRequest()
    return payload


async def call_gemini(
    request: Request,
    _claims: dict[str, Any] = Depends(require_identity),
) -> JSONResponse:
    settings: RelaySettings = request.app.state.settings
    if not settings.api_key:
        LOGGER.error("GEMINI_API_KEY not configured")
        raise ConfigurationError()

    payload = await _read_generation_request(request)

    try:
        result = await generate_content(
            settings.api_key,
            payload.model,
            payload.contents,
            payload.config or {},
        )
    except Exception as e:
        message = _scrub(str(e), settings.api_key)
        LOGGER.error("Error calling Gemini API: %s", message)
        raise UpstreamFailure(message) from e

    # Absent fields are left out of the body entirely.
    content = {k: v for k, v in result.items() if v is not None}
    return JSONResponse(status_code=200, content=content)


def create_app(settings: RelaySettings | None = None) -> FastAPI:
    app = FastAPI(title="assistant-relay", version="0.1.0", redoc_url=None)
    app.state.settings = settings if settings is not None else load_relay_settings()
    if not app.state.settings.firebase_project_id:
        LOGGER.error("No Firebase project id configured; authenticated requests will fail")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )
    register_exception_handlers(app)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.add_api_route("/callGemini", call_gemini, methods=["POST"])
    return app
