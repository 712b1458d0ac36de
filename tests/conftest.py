"""Test fixtures — a throwaway SQLite database per test.

Each test gets its own database file under tmp_path with the schema
created from the models, so tests never share state and need no
running PostgreSQL. The app's get_db is overridden to hand out sessions
bound to that database.

Three HTTP clients:
- client: the auth gate is overridden to a seeded user, for record tests
- unauthenticated_client: the real cookie-session gate runs
- failing_client: every database dependency raises, for the 500 path
"""

import os

# Must be set before taskledger.config builds its settings singleton.
os.environ.setdefault("TASKLEDGER_DATABASE_URL", "sqlite+aiosqlite://")
os.environ["TASKLEDGER_BCRYPT_ROUNDS"] = "4"

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskledger.auth.password import hash_password  # noqa: E402
from taskledger.db.engine import get_db  # noqa: E402
from taskledger.db.models import Base, User  # noqa: E402
from taskledger.main import app  # noqa: E402


@pytest_asyncio.fixture()
async def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture()
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def test_user(session_factory):
    async with session_factory() as session:
        user = User(username="owner", password_hash=hash_password("owner-pw"))
        session.add(user)
        await session.commit()
        await session.refresh(user)
    return user


def _override_db(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db


@pytest_asyncio.fixture()
async def client(session_factory, test_user):
    """HTTP client with the auth gate overridden to return test_user.

    Record tests don't need to register and log in first.
    """
    from taskledger.auth.dependencies import get_current_principal

    _override_db(session_factory)
    app.dependency_overrides[get_current_principal] = lambda: test_user

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def unauthenticated_client(session_factory):
    """HTTP client WITHOUT the gate override — real cookie sessions."""
    _override_db(session_factory)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def failing_client():
    """HTTP client whose database dependency blows up on every request.

    Exceptions that escape the app are turned into responses rather than
    re-raised into the test, the way a real server would answer.
    """

    async def broken_get_db():
        raise RuntimeError("database is on fire")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = broken_get_db

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
