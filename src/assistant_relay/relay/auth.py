"""Bearer token extraction and Firebase ID token verification."""
from __future__ import annotations
import logging
from typing import Any

import cachecontrol
import requests
from fastapi import Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from assistant_relay.common.errors import ConfigurationError, Unauthorized

LOGGER = logging.getLogger("assistant_relay.relay.auth")

security = HTTPBearer(auto_error=False)

# Google's signing certificates are served with Cache-Control headers;
# the cached session reuses them until they expire.
_session = cachecontrol.CacheControl(requests.Session())
_transport = google_requests.Request(session=_session)


def verify_id_token(token: str, project_id: str) -> dict[str, Any]:
    """Verify a Firebase ID token issued for `project_id` and return its claims.

    Raises whatever google-auth raises on a bad signature, expiry, wrong
    audience or key fetch failure.
    """
    if not project_id:
        raise ValueError("A Firebase project id is required to verify ID tokens")
    return id_token.verify_firebase_token(token, _transport, audience=project_id)


async def require_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict[str, Any]:
    if credentials is None or not credentials.credentials:
        LOGGER.info("Rejected request without bearer token")
        raise Unauthorized("Unauthorized - No token provided")

    project_id = request.app.state.settings.firebase_project_id
    if not project_id:
        LOGGER.error("FIREBASE_PROJECT_ID not configured; refusing to verify tokens")
        raise ConfigurationError("Identity verification not configured")

    try:
        claims = await run_in_threadpool(
            verify_id_token, credentials.credentials, project_id
        )
    except Exception as e:
        LOGGER.warning("Token verification failed: %s: %s", type(e).__name__, e)
        raise Unauthorized("Unauthorized - Invalid token") from e
    if not claims:
        raise Unauthorized("Unauthorized - Invalid token")
    return claims
