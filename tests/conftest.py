from __future__ import annotations

import random
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(autouse=True)
def _isolate_storyscript_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of the developer's STORYSCRIPT_* environment."""

    monkeypatch.delenv("STORYSCRIPT_MAX_DEPTH", raising=False)
    monkeypatch.delenv("STORYSCRIPT_LOG_LEVEL", raising=False)


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    """Shared TestClient for tests that exercise the HTTP surface."""

    from storyscript.main import app

    with TestClient(app) as c:
        yield c
