"""Pydantic schemas for accounts (camelCase on the wire)."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AccountCreate(BaseModel):
    report: Optional[str] = None
    account_class: Optional[str] = None
    caption: Optional[str] = None
    fs_line: Optional[str] = None
    currency: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AccountRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    user_name: str
    report: Optional[str]
    account_class: Optional[str]
    caption: Optional[str]
    fs_line: Optional[str]
    currency: Optional[str]
    created_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )
