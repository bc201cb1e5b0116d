# trekker/schemas/list_schema.py
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

ListEntityType = Literal["epic", "task", "subtask"]


class ListItem(BaseModel):
    type: ListEntityType
    id: str
    title: str
    status: str
    priority: int
    parent_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ListPage(BaseModel):
    total: int
    page: int
    limit: int
    items: list[ListItem]
