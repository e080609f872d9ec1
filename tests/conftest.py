"""
Shared fixtures for the sales leaderboard Lambda.

Every test runs against an in-memory store and a fixed clock unless it
builds its own.
"""

from datetime import datetime

import pytest

from sales_leaderboard import handler
from sales_leaderboard.kv_store import InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def as_of() -> datetime:
    # naive: interpreted as server-local time
    return datetime(2026, 10, 18, 12, 0, 0)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SLACK_VERIFICATION_TOKEN", "SLACK_TOKEN_SECRET_NAME", "RECORDS_TABLE", "KV_NAMESPACE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(handler, "_store", None)
    handler.get_secret_value.cache_clear()
    handler.secrets_client.cache_clear()
