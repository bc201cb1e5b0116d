# trekker/schemas/event_schema.py
"""Change-feed event payloads.

Six event kinds, discriminated by ``type``. Deletions carry the last-known
title and no status.
"""
from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel


class TaskEvent(BaseModel):
    type: Literal["task_created", "task_updated", "task_deleted"]
    task_id: str
    task_title: str
    status: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class EpicEvent(BaseModel):
    type: Literal["epic_created", "epic_updated", "epic_deleted"]
    epic_id: str
    epic_title: str
    status: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


ChangeEvent = Union[TaskEvent, EpicEvent]
