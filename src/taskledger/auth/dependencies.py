"""FastAPI auth dependencies — the authorization gate.

These are used as Depends() in route handlers and at include_router level
to resolve the session cookie into the current user.

Per request:
  no cookie                      → unauthenticated
  cookie → touch() → principal   → authorized (user on request.state)
  cookie → touch() → None        → unauthenticated (expired / unknown)

get_current_principal turns "unauthenticated" into a 401 before the
wrapped handler runs.
"""

from typing import Optional

import structlog
from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.auth.credentials import CredentialService
from taskledger.auth.sessions import SessionStore, set_session_cookie
from taskledger.config import settings
from taskledger.db.engine import get_db
from taskledger.db.models import User
from taskledger.errors import Unauthorized

logger = structlog.get_logger()


def get_session_store(db: AsyncSession = Depends(get_db)) -> SessionStore:
    return SessionStore(db)


def get_credential_service(db: AsyncSession = Depends(get_db)) -> CredentialService:
    return CredentialService(db)


async def get_current_principal_optional(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
    credentials: CredentialService = Depends(get_credential_service),
) -> Optional[User]:
    """Resolve the session cookie to a user, or None.

    This is the "soft" gate, used by endpoints that answer both ways
    (e.g. /check-auth). A live session has its expiry slid forward and
    its cookie re-issued.
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None

    live = await store.touch(token)
    if live is None:
        return None

    user = await credentials.get_principal(live.principal_id)
    if user is None:
        # Session outlived its user
        logger.info("auth.dangling_session", principal_id=str(live.principal_id))
        return None

    # Cookie lifetime follows the server-side expiry, which may be capped
    set_session_cookie(response, token, max_age=live.seconds_left())
    request.state.principal = user
    structlog.contextvars.bind_contextvars(user_id=str(user.id))
    return user


async def get_current_principal(
    principal: Optional[User] = Depends(get_current_principal_optional),
) -> User:
    """The "hard" gate — 401 if there's no authenticated user."""
    if principal is None:
        raise Unauthorized()
    return principal
