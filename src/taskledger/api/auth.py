"""Auth API — registration, cookie-session login/logout, auth status check.

- POST /register   → create a user (201)
- POST /login      → username/password → session cookie
- POST /logout     → drop the session server-side and clear the cookie
- GET  /check-auth → who am I (never 401)

None of these sit behind the gate; /logout works with or without a
live session.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Request, Response

from taskledger.auth.credentials import CredentialService
from taskledger.auth.dependencies import (
    get_credential_service,
    get_current_principal_optional,
    get_session_store,
)
from taskledger.auth.sessions import (
    SessionStore,
    clear_session_cookie,
    set_session_cookie,
)
from taskledger.config import settings
from taskledger.db.models import User
from taskledger.schemas.auth import AuthResult, AuthStatus, Credentials, Message, UserRead

logger = structlog.get_logger()

router = APIRouter()


@router.post("/register", response_model=AuthResult, status_code=201)
async def register(
    body: Credentials,
    credentials: CredentialService = Depends(get_credential_service),
):
    """Create a new user account. 400 if the username is taken."""
    user = await credentials.register(body.username, body.password)
    return AuthResult(
        message="User registered successfully",
        user=UserRead.model_validate(user),
    )


@router.post("/login", response_model=AuthResult)
async def login(
    body: Credentials,
    request: Request,
    response: Response,
    credentials: CredentialService = Depends(get_credential_service),
    store: SessionStore = Depends(get_session_store),
):
    """Check credentials, start a session, and hand back its cookie.

    Any session the caller already holds is dropped first, so a token
    planted before login can't be reused afterwards.
    """
    user = await credentials.verify(body.username, body.password)

    previous = request.cookies.get(settings.session_cookie_name)
    if previous:
        await store.destroy(previous)

    token = await store.create(user.id)
    set_session_cookie(response, token)
    logger.info("auth.login", user_id=str(user.id))

    return AuthResult(message="Login successful", user=UserRead.model_validate(user))


@router.post("/logout", response_model=Message)
async def logout(
    request: Request,
    response: Response,
    store: SessionStore = Depends(get_session_store),
):
    """Best-effort logout: always clears the cookie and returns 200."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        try:
            await store.destroy(token)
        except Exception:
            logger.exception("auth.logout_destroy_failed")

    clear_session_cookie(response)
    return Message(message="Logout successful")


@router.get("/check-auth", response_model=AuthStatus)
async def check_auth(
    principal: Optional[User] = Depends(get_current_principal_optional),
):
    """Report whether the caller's session cookie is live."""
    if principal is None:
        return AuthStatus(user=None, is_authenticated=False)
    return AuthStatus(user=UserRead.model_validate(principal), is_authenticated=True)
