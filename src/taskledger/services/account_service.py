"""Account service — per-user account CRUD on top of the document store."""

import uuid
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from taskledger.db.documents import DocumentStore
from taskledger.db.models import Account, User
from taskledger.errors import NotFound

logger = structlog.get_logger()


class AccountNotFound(NotFound):
    message = "Account not found"


class AccountService:
    def __init__(self, db: AsyncSession):
        self.accounts = DocumentStore(db, Account)

    async def list_accounts(self, owner: User) -> list[Account]:
        return await self.accounts.find({"user_id": owner.id}, order_by="created_at")

    async def create_account(self, owner: User, fields: dict[str, Any]) -> Account:
        account = await self.accounts.insert(
            **fields, user_id=owner.id, user_name=owner.username
        )
        logger.info("account.created", account_id=str(account.id))
        return account

    async def delete_account(self, owner: User, account_id: uuid.UUID) -> None:
        account = await self.accounts.find_by_id(account_id)
        if not account or account.user_id != owner.id:
            raise AccountNotFound()
        await self.accounts.find_by_id_and_delete(account_id)
        logger.info("account.deleted", account_id=str(account_id))
