# trekker/schemas/task_schema.py
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TaskStatus = Literal["todo", "in_progress", "completed", "wont_fix", "archived"]


# --------- Base schema (common fields) ----------
class TaskBase(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    status: TaskStatus = "todo"
    priority: int = Field(default=2, ge=0, le=5)  # 0 = highest
    epic_id: Optional[str] = None
    tags: Optional[str] = None


# --------- For CREATE ----------
class TaskCreate(TaskBase):
    parent_task_id: Optional[str] = None


# --------- For UPDATE (PATCH) ----------
# parent_task_id is deliberately absent: the subtask tree is fixed at creation
class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[int] = Field(default=None, ge=0, le=5)
    epic_id: Optional[str] = None
    tags: Optional[str] = None


# --------- For READ (responses) ----------
class TaskRead(TaskBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    parent_task_id: Optional[str] = None
    depends_on: list[str] = []
    blocks: list[str] = []
    created_at: datetime
    updated_at: datetime
