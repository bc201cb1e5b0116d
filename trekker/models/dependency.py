# trekker/models/dependency.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, String
from trekker.database import Base, utcnow


class Dependency(Base):
    """Directed edge task_id -> depends_on_id."""

    __tablename__ = "dependencies"

    id = Column(String, primary_key=True)
    task_id = Column(String, nullable=False, index=True)
    depends_on_id = Column(String, nullable=False, index=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
