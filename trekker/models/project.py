# trekker/models/project.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, String
from trekker.database import Base, utcnow


class Project(Base):
    __tablename__ = "projects"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
