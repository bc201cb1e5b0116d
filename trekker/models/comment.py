# trekker/models/comment.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, String
from trekker.database import Base, utcnow


class Comment(Base):
    __tablename__ = "comments"

    id = Column(String, primary_key=True)
    task_id = Column(String, nullable=False, index=True)

    author = Column(String, nullable=False)
    content = Column(String, nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)
