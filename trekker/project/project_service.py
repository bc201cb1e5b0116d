# trekker/project/project_service.py
from __future__ import annotations

import logging

from trekker.database import utcnow
from trekker.errors import ConflictError, ValidationError
from trekker.ids import generate_uuid
from trekker.models.project import Project
from trekker.store import EntityStore

logger = logging.getLogger("trekker.project")


def get(store: EntityStore) -> Project | None:
    projects = store.list("project")
    return projects[0] if projects else None


def require(store: EntityStore) -> Project:
    """Return the project row; tasks and epics cannot exist without one."""
    project = get(store)
    if project is None:
        raise ValidationError("Project not initialized")
    return project


def initialize(store: EntityStore, name: str) -> Project:
    if get(store) is not None:
        raise ConflictError("Project already initialized")

    now = utcnow()
    project = store.insert(
        "project",
        {"id": generate_uuid(), "name": name, "created_at": now, "updated_at": now},
    )
    logger.info("project_initialized", extra={"project_id": project.id})
    return project
