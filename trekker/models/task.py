# trekker/models/task.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from trekker.database import Base, utcnow


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False)

    # epic_id is a soft reference: deleting an epic leaves it dangling
    epic_id = Column(String, nullable=True, index=True)
    parent_task_id = Column(String, nullable=True, index=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(String, default="todo", nullable=False)
    priority = Column(Integer, default=2, nullable=False)
    tags = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
