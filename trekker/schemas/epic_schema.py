# trekker/schemas/epic_schema.py
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

EpicStatus = Literal["todo", "in_progress", "completed", "archived"]


class EpicBase(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    status: EpicStatus = "todo"
    priority: int = Field(default=2, ge=0, le=5)


class EpicCreate(EpicBase):
    pass


class EpicUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[EpicStatus] = None
    priority: Optional[int] = Field(default=None, ge=0, le=5)


class EpicRead(EpicBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    created_at: datetime
    updated_at: datetime
