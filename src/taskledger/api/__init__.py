"""API route aggregation.

All routers registered here get mounted in main.py.

Auth is applied at the include_router level using FastAPI's
dependencies parameter. This protects every route in a router without
touching individual handlers. Health and auth routers are open.
"""

from fastapi import APIRouter, Depends

from taskledger.api.accounts import router as accounts_router
from taskledger.api.auth import router as auth_router
from taskledger.api.health import router as health_router
from taskledger.api.tasks import router as tasks_router
from taskledger.auth.dependencies import get_current_principal

# All protected routers require a live session
_auth = [Depends(get_current_principal)]

api_router = APIRouter()

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes — require a valid session cookie
api_router.include_router(tasks_router, tags=["tasks"], dependencies=_auth)
api_router.include_router(accounts_router, tags=["accounts"], dependencies=_auth)
