"""Server-side session store and the session cookie.

A session is a row keyed by an opaque random token. The browser only
ever holds the token (HttpOnly cookie); everything else stays here.

Every store operation is a single SQL statement, so concurrent requests
and the background sweeper can interleave freely:
- create  → INSERT
- lookup  → SELECT ... WHERE unexpired
- touch   → UPDATE ... WHERE unexpired RETURNING principal_id, expires_at
- destroy → DELETE (idempotent)
- sweep   → DELETE ... WHERE expired

Expiry is always checked in the query, so a missed sweep never lets an
expired session through.
"""

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

import structlog
from fastapi import Response
from sqlalchemy import case, delete, literal, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.config import settings
from taskledger.db.models import Session

logger = structlog.get_logger()


def _now() -> datetime:
    return datetime.now(timezone.utc)


class LiveSession(NamedTuple):
    """A session that touch() found unexpired, with its new expiry."""

    principal_id: uuid.UUID
    expires_at: datetime

    def seconds_left(self) -> int:
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            # SQLite hands back naive datetimes; everything is stored as UTC
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return max(0, int((expires_at - _now()).total_seconds()))


def new_session_token() -> str:
    """256 bits from the OS CSPRNG, URL-safe."""
    return secrets.token_urlsafe(32)


class SessionStore:
    """Token → principal mapping with sliding and absolute expiry."""

    def __init__(
        self,
        db: AsyncSession,
        ttl_seconds: Optional[int] = None,
        absolute_ttl_seconds: Optional[int] = None,
    ):
        self.db = db
        self.ttl = timedelta(seconds=ttl_seconds or settings.session_ttl_seconds)
        self.absolute_ttl = timedelta(
            seconds=absolute_ttl_seconds or settings.session_absolute_ttl_seconds
        )

    async def create(self, principal_id: uuid.UUID) -> str:
        """Start a session for ``principal_id`` and return its token."""
        now = _now()
        token = new_session_token()
        self.db.add(
            Session(
                id=token,
                principal_id=principal_id,
                created_at=now,
                expires_at=min(now + self.ttl, now + self.absolute_ttl),
                max_expires_at=now + self.absolute_ttl,
            )
        )
        await self.db.commit()
        return token

    async def lookup(self, session_id: str) -> Optional[uuid.UUID]:
        """Principal id for a live session, None if absent or expired."""
        q = select(Session.principal_id).where(
            Session.id == session_id,
            Session.expires_at > _now(),
        )
        result = await self.db.execute(q)
        return result.scalar_one_or_none()

    async def touch(self, session_id: str) -> Optional[LiveSession]:
        """Like lookup, but also slides expiry forward (capped by max_expires_at).

        Returns the principal and the new expiry, or None if absent or expired.
        """
        now = _now()
        slid = literal(now + self.ttl, Session.expires_at.type)
        q = (
            update(Session)
            .where(Session.id == session_id, Session.expires_at > now)
            .values(
                expires_at=case(
                    (Session.max_expires_at < slid, Session.max_expires_at),
                    else_=slid,
                )
            )
            .returning(Session.principal_id, Session.expires_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(q)
        row = result.one_or_none()
        await self.db.commit()
        if row is None:
            return None
        return LiveSession(principal_id=row.principal_id, expires_at=row.expires_at)

    async def destroy(self, session_id: str) -> None:
        """Remove a session. No error if it's already gone."""
        q = (
            delete(Session)
            .where(Session.id == session_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(q)
        await self.db.commit()

    async def sweep(self) -> int:
        """Delete every expired session. Returns how many were removed."""
        q = (
            delete(Session)
            .where(Session.expires_at <= _now())
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(q)
        await self.db.commit()
        return result.rowcount or 0


# ─── Cookie transport ─────────────────────────────────────


def set_session_cookie(
    response: Response, token: str, max_age: Optional[int] = None
) -> None:
    """HttpOnly, SameSite=Lax, Secure in production."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_ttl_seconds if max_age is None else max_age,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
