"""Tests for the session store."""

import asyncio
from datetime import UTC, datetime, timedelta

import pytest

from advidly.domain.enums import UserType
from advidly.services.sessions import SessionStore


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 6, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def test_create_and_get() -> None:
    """Test a new session can be looked up by its id."""
    store = SessionStore()
    session = store.create(1, UserType.COMPANY)

    assert store.get(session.id) == session
    assert session.user_type == UserType.COMPANY
    assert len(store) == 1


def test_session_ids_are_unique() -> None:
    """Test two logins never share an id."""
    store = SessionStore()

    assert store.create(1, UserType.COMPANY).id != store.create(1, UserType.COMPANY).id


def test_unknown_or_empty_id() -> None:
    """Test unknown ids resolve to no session."""
    store = SessionStore()

    assert store.get("nope") is None
    assert store.get(None) is None
    assert store.get("") is None


def test_session_expires_after_ttl() -> None:
    """Test a session stops resolving once its TTL has passed."""
    clock = FakeClock()
    store = SessionStore(ttl=timedelta(hours=24), clock=clock)
    session = store.create(1, UserType.INDIVIDUAL)

    clock.advance(hours=23)
    assert store.get(session.id) is not None

    clock.advance(hours=1)
    assert store.get(session.id) is None
    assert len(store) == 0


def test_destroy() -> None:
    """Test logging out removes the session."""
    store = SessionStore()
    session = store.create(1, UserType.COMPANY)

    assert store.destroy(session.id) is True
    assert store.get(session.id) is None
    assert store.destroy(session.id) is False


def test_prune_removes_only_expired() -> None:
    """Test the periodic sweep drops expired sessions and keeps live ones."""
    clock = FakeClock()
    store = SessionStore(ttl=timedelta(hours=1), clock=clock)
    old = store.create(1, UserType.COMPANY)
    clock.advance(minutes=30)
    fresh = store.create(2, UserType.INDIVIDUAL)
    clock.advance(minutes=45)

    assert store.prune() == 1
    assert len(store) == 1
    assert store.get(fresh.id) is not None
    assert store.get(old.id) is None


@pytest.mark.asyncio
async def test_pruner_sweeps_expired_sessions() -> None:
    """Test the background sweep removes sessions once they expire."""
    clock = FakeClock()
    store = SessionStore(ttl=timedelta(hours=1), clock=clock)
    expired = store.create(1, UserType.COMPANY)
    clock.advance(minutes=50)
    live = store.create(2, UserType.INDIVIDUAL)
    clock.advance(minutes=20)

    pruner = asyncio.create_task(store.run_pruner(0.01))
    await asyncio.sleep(0.05)
    pruner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await pruner

    assert len(store) == 1
    assert store.get(live.id) is not None
    assert store.get(expired.id) is None
