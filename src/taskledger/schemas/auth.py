"""Pydantic schemas for registration, login and the auth status check.

UserRead never carries the password hash.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Body of POST /register and POST /login."""
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1, max_length=1024)


class UserRead(BaseModel):
    id: uuid.UUID
    username: str

    model_config = ConfigDict(from_attributes=True)


class AuthResult(BaseModel):
    message: str
    user: UserRead


class AuthStatus(BaseModel):
    user: Optional[UserRead] = None
    is_authenticated: bool = Field(..., alias="isAuthenticated")

    model_config = ConfigDict(populate_by_name=True)


class Message(BaseModel):
    message: str
