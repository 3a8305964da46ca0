"""Shared fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from shared.config import ServerSettings, Settings


class FakeClock:
    """Controllable clock for the record store."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(clock):
    from mcp_server.store import create_store

    return create_store(seed=True, clock=clock)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        environment="test",
        server=ServerSettings(
            enable_audit=False,
            audit_log_path=str(tmp_path / "audit.log"),
        ),
    )


@pytest.fixture
def server(settings, store):
    from mcp_server.server import create_server

    return create_server(settings, store=store)
