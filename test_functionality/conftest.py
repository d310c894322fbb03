"""
Shared fixtures: an in-memory store, a controllable clock and services
wired through ServiceFactory exactly as the CLI wires them.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from remissio.application.dto import SignUpRequest
from remissio.factory import ServiceFactory
from remissio.infrastructure.config import Settings
from remissio.infrastructure.storage.kv_store import MemoryKeyValueStore


class FakeClock:
    """Callable clock; tests move it with set() / advance()."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, iso: str) -> None:
        self.now = datetime.fromisoformat(iso).replace(tzinfo=timezone.utc)

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 10, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def factory(store, clock) -> ServiceFactory:
    f = ServiceFactory(Settings(storage_backend="memory"), store=store, clock=clock)
    f.initialize()
    return f


@pytest.fixture
def ctx(factory):
    return factory.create_storage_context()


@pytest.fixture
def db(ctx):
    return ctx.db


@pytest.fixture
def auth(ctx):
    return ctx.auth


@pytest.fixture
def user(factory):
    """A freshly signed-up (and therefore signed-in) user."""
    return factory.create_authentication_service().sign_up(
        SignUpRequest(email="alex@example.com", password="secret1", name="Alex")
    )


def pucai_answers(**overrides) -> dict[str, int]:
    answers = {
        "stomachache": 0,
        "rectal_bleeding": 0,
        "texture": 0,
        "frequency": 0,
        "nightly_bowel_movements": 0,
        "level_of_activity": 0,
    }
    answers.update(overrides)
    return answers
