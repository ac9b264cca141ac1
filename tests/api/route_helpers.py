from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from quizfest.api.routes import quizzes_helpers

INTERNAL_TOKEN = "route-test-token"
OWNER_USER_ID = 7
NOW_UTC = datetime(2026, 3, 14, 18, 30, tzinfo=timezone.utc)
OWNER_HEADERS = {"X-Internal-Token": INTERNAL_TOKEN, "X-User-Id": str(OWNER_USER_ID)}


class DummySessionBegin:
    async def __aenter__(self) -> object:
        return object()

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        return False


class DummySessionLocal:
    def begin(self) -> DummySessionBegin:
        return DummySessionBegin()


def install_route_env(monkeypatch: pytest.MonkeyPatch, *route_modules: object) -> None:
    monkeypatch.setattr(
        quizzes_helpers,
        "get_settings",
        lambda: SimpleNamespace(internal_api_token=INTERNAL_TOKEN),
    )
    for module in route_modules:
        monkeypatch.setattr(module, "SessionLocal", DummySessionLocal())
