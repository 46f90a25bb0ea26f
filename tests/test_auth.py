from __future__ import annotations

from typing import Any

import cachecontrol
import pytest

import assistant_relay.relay.auth as auth_mod


def test_verify_passes_project_as_audience(monkeypatch) -> None:
    seen: dict[str, Any] = {}

    def fake_verify(token, request, audience=None):
        seen.update(token=token, request=request, audience=audience)
        return {"uid": "user-1", "aud": audience}

    monkeypatch.setattr(auth_mod.id_token, "verify_firebase_token", fake_verify)

    claims = auth_mod.verify_id_token("T", "my-project")

    assert claims["uid"] == "user-1"
    assert seen["audience"] == "my-project"
    assert seen["request"] is auth_mod._transport


@pytest.mark.parametrize("project_id", [None, ""])
def test_verify_without_project_never_skips_audience(monkeypatch, project_id) -> None:
    calls: list[Any] = []
    monkeypatch.setattr(
        auth_mod.id_token, "verify_firebase_token", lambda *a, **k: calls.append((a, k)) or {"uid": "x"}
    )

    with pytest.raises(ValueError):
        auth_mod.verify_id_token("T", project_id)
    assert calls == []


def test_certificate_fetches_use_cached_session() -> None:
    assert auth_mod._transport.session is auth_mod._session
    assert isinstance(auth_mod._session.get_adapter("https://www.googleapis.com/"), cachecontrol.CacheControlAdapter)
