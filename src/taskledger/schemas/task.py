"""Pydantic schemas for tasks.

JSON uses camelCase (shortDescription, assignedBy, ...) to match the
frontend; Python attributes stay snake_case.

- TaskCreate: what you POST to create a task
- TaskUpdate: what you PUT to modify a task (only sent fields are applied)
- TaskRead: what the API returns
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(BaseModel):
    list_number: Optional[int] = None
    short_description: Optional[str] = None
    long_description: Optional[str] = None
    deadline: Optional[datetime] = None
    priority: Optional[str] = None
    assigned_by: Optional[str] = None

    model_config = _camel


class TaskUpdate(TaskCreate):
    """Partial update — fields left out of the body are not touched."""


class TaskRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    user_name: str
    list_number: Optional[int]
    short_description: Optional[str]
    long_description: Optional[str]
    deadline: Optional[datetime]
    priority: Optional[str]
    assigned_by: Optional[str]
    created_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )
