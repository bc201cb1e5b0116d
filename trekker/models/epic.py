# trekker/models/epic.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from trekker.database import Base, utcnow


class Epic(Base):
    __tablename__ = "epics"

    id = Column(String, primary_key=True)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    status = Column(String, default="todo", nullable=False)  # todo | in_progress | completed | archived
    priority = Column(Integer, default=2, nullable=False)    # 0 = highest, 5 = lowest

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
