# trekker/schemas/comment_schema.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CommentCreate(BaseModel):
    author: str = Field(min_length=1)
    content: str = Field(min_length=1)


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    author: str
    content: str
    created_at: datetime
    updated_at: datetime
