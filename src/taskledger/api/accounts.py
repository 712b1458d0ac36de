"""Account API routes (behind the auth gate)."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.auth.dependencies import get_current_principal
from taskledger.db.engine import get_db
from taskledger.db.models import User
from taskledger.schemas.account import AccountCreate, AccountRead
from taskledger.schemas.auth import Message
from taskledger.services.account_service import AccountService

router = APIRouter(prefix="/api")


def _account_svc(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)


@router.post("/accounts", response_model=AccountRead, status_code=201)
async def create_account(
    body: AccountCreate,
    principal: User = Depends(get_current_principal),
    svc: AccountService = Depends(_account_svc),
):
    return await svc.create_account(principal, body.model_dump())


@router.get("/accounts", response_model=list[AccountRead])
async def list_accounts(
    principal: User = Depends(get_current_principal),
    svc: AccountService = Depends(_account_svc),
):
    return await svc.list_accounts(principal)


@router.delete("/accounts/{account_id}", response_model=Message)
async def delete_account(
    account_id: uuid.UUID,
    principal: User = Depends(get_current_principal),
    svc: AccountService = Depends(_account_svc),
):
    await svc.delete_account(principal, account_id)
    return Message(message="Account deleted")
