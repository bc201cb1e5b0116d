# trekker/store.py
"""Entity store adapter.

Point-in-time reads and single-row writes of every stored entity, keyed by
the entity's stable id. Each write commits on its own; nothing here spans
multiple rows in one transaction.
"""
from __future__ import annotations

from typing import Any, Iterator

from sqlalchemy.orm import Session

from trekker.database import SessionLocal
from trekker.models.comment import Comment
from trekker.models.dependency import Dependency
from trekker.models.epic import Epic
from trekker.models.project import Project
from trekker.models.task import Task

MODELS = {
    "project": Project,
    "epic": Epic,
    "task": Task,
    "dependency": Dependency,
    "comment": Comment,
}


def _model_for(entity_type: str):
    try:
        return MODELS[entity_type]
    except KeyError:
        raise ValueError(f"Unknown entity type: {entity_type}") from None


class EntityStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_type: str, entity_id: str) -> Any | None:
        return self.db.get(_model_for(entity_type), entity_id)

    def list(self, entity_type: str, order_by: str | None = None, **filters: Any) -> list[Any]:
        """Return rows matching every equality filter, in the store's native order
        unless ``order_by`` names a column."""
        model = _model_for(entity_type)
        q = self.db.query(model)
        for column, value in filters.items():
            q = q.filter(getattr(model, column) == value)
        if order_by:
            q = q.order_by(getattr(model, order_by))
        return q.all()

    def insert(self, entity_type: str, record: dict[str, Any]) -> Any:
        row = _model_for(entity_type)(**record)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def update(self, entity_type: str, entity_id: str, values: dict[str, Any]) -> Any | None:
        row = self.get(entity_type, entity_id)
        if row is None:
            return None
        for column, value in values.items():
            setattr(row, column, value)
        self.db.commit()
        self.db.refresh(row)
        return row

    def delete(self, entity_type: str, entity_id: str) -> None:
        # deleting an absent row is a no-op
        row = self.get(entity_type, entity_id)
        if row is None:
            return
        self.db.delete(row)
        self.db.commit()


def get_store() -> Iterator[EntityStore]:
    db = SessionLocal()
    try:
        yield EntityStore(db)
    finally:
        db.close()
