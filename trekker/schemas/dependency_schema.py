# trekker/schemas/dependency_schema.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DependencyCreate(BaseModel):
    task_id: str = Field(min_length=1)
    depends_on_id: str = Field(min_length=1)


class DependencyRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    depends_on_id: str
    created_at: datetime
