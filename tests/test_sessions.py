"""SessionStore — create/lookup/touch/destroy/sweep against a real DB."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select, update

from taskledger.auth.sessions import SessionStore
from taskledger.db.models import Session


def _ago(seconds: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(seconds=seconds)


def _from_now(seconds: int) -> datetime:
    return datetime.now(timezone.utc) + timedelta(seconds=seconds)


async def _set(db, token: str, **values) -> None:
    await db.execute(update(Session).where(Session.id == token).values(**values))
    await db.commit()


async def _expiry(db, token: str):
    result = await db.execute(
        select(Session.expires_at, Session.max_expires_at).where(Session.id == token)
    )
    return result.one()


@pytest.mark.asyncio
async def test_create_then_lookup(db_session):
    store = SessionStore(db_session)
    principal_id = uuid.uuid4()

    token = await store.create(principal_id)

    assert await store.lookup(token) == principal_id


@pytest.mark.asyncio
async def test_tokens_are_unique_and_opaque(db_session):
    store = SessionStore(db_session)
    principal_id = uuid.uuid4()

    tokens = {await store.create(principal_id) for _ in range(20)}

    assert len(tokens) == 20
    for token in tokens:
        assert len(token) >= 43
        assert str(principal_id) not in token


@pytest.mark.asyncio
async def test_lookup_unknown_token(db_session):
    assert await SessionStore(db_session).lookup("nope") is None


@pytest.mark.asyncio
async def test_lookup_checks_expiry_not_just_presence(db_session):
    store = SessionStore(db_session)
    token = await store.create(uuid.uuid4())

    await _set(db_session, token, expires_at=_ago(1))

    assert await store.lookup(token) is None
    assert await store.touch(token) is None


@pytest.mark.asyncio
async def test_destroy_is_idempotent(db_session):
    store = SessionStore(db_session)
    token = await store.create(uuid.uuid4())

    await store.destroy(token)
    await store.destroy(token)

    assert await store.lookup(token) is None


@pytest.mark.asyncio
async def test_destroy_only_removes_its_own_session(db_session):
    store = SessionStore(db_session)
    principal_id = uuid.uuid4()
    keep = await store.create(principal_id)
    drop = await store.create(principal_id)

    await store.destroy(drop)

    assert await store.lookup(keep) == principal_id


@pytest.mark.asyncio
async def test_touch_slides_expiry_forward(db_session):
    store = SessionStore(db_session, ttl_seconds=3600, absolute_ttl_seconds=7200)
    principal_id = uuid.uuid4()
    token = await store.create(principal_id)
    await _set(db_session, token, expires_at=_from_now(5))
    before, _ = await _expiry(db_session, token)

    live = await store.touch(token)
    assert live.principal_id == principal_id

    after, _ = await _expiry(db_session, token)
    assert after > before
    assert live.expires_at == after


@pytest.mark.asyncio
async def test_touch_never_passes_max_age(db_session):
    store = SessionStore(db_session, ttl_seconds=3600, absolute_ttl_seconds=7200)
    principal_id = uuid.uuid4()
    token = await store.create(principal_id)
    await _set(db_session, token, max_expires_at=_from_now(10))

    live = await store.touch(token)
    assert live.principal_id == principal_id

    expires_at, max_expires_at = await _expiry(db_session, token)
    assert expires_at == max_expires_at
    # The caller sees the capped expiry, not a full idle TTL
    assert live.expires_at == max_expires_at
    assert 0 < live.seconds_left() <= 10


@pytest.mark.asyncio
async def test_create_caps_expiry_at_absolute_ttl(db_session):
    store = SessionStore(db_session, ttl_seconds=3600, absolute_ttl_seconds=60)
    token = await store.create(uuid.uuid4())

    expires_at, max_expires_at = await _expiry(db_session, token)
    assert expires_at == max_expires_at


@pytest.mark.asyncio
async def test_sweep_removes_only_expired(db_session):
    store = SessionStore(db_session)
    live = await store.create(uuid.uuid4())
    dead1 = await store.create(uuid.uuid4())
    dead2 = await store.create(uuid.uuid4())
    await _set(db_session, dead1, expires_at=_ago(10))
    await _set(db_session, dead2, expires_at=_ago(1))

    assert await store.sweep() == 2
    assert await store.sweep() == 0

    remaining = (await db_session.execute(select(Session.id))).scalars().all()
    assert remaining == [live]
