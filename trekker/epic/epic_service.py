# trekker/epic/epic_service.py
from __future__ import annotations

import logging

from trekker.database import utcnow
from trekker.errors import NotFoundError
from trekker.ids import generate_id
from trekker.models.epic import Epic
from trekker.project import project_service
from trekker.schemas.epic_schema import EpicCreate, EpicUpdate
from trekker.store import EntityStore

logger = logging.getLogger("trekker.epic")


def list_epics(store: EntityStore) -> list[Epic]:
    return store.list("epic")


def get_epic(store: EntityStore, epic_id: str) -> Epic:
    epic = store.get("epic", epic_id)
    if epic is None:
        raise NotFoundError("Epic", epic_id)
    return epic


def create_epic(store: EntityStore, data: EpicCreate) -> Epic:
    project = project_service.require(store)
    now = utcnow()
    epic = store.insert(
        "epic",
        {
            "id": generate_id("epic"),
            "project_id": project.id,
            "title": data.title,
            "description": data.description or None,
            "status": data.status,
            "priority": data.priority,
            "created_at": now,
            "updated_at": now,
        },
    )
    logger.info("epic_created", extra={"epic_id": epic.id})
    return epic


def update_epic(store: EntityStore, epic_id: str, data: EpicUpdate) -> Epic:
    get_epic(store, epic_id)

    values = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field == "description"
    }
    values["updated_at"] = utcnow()
    return store.update("epic", epic_id, values)


def delete_epic(store: EntityStore, epic_id: str) -> None:
    """Delete the epic row only.

    Tasks keep their epic_id and are left pointing at an epic that no longer
    exists; task history outlives the grouping.
    """
    get_epic(store, epic_id)
    store.delete("epic", epic_id)
    logger.info("epic_deleted", extra={"epic_id": epic_id})
