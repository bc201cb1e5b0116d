# trekker/archive/archive_service.py
from __future__ import annotations

import logging

from trekker.database import utcnow
from trekker.store import EntityStore

logger = logging.getLogger("trekker.archive")


def bulk_archive_completed(store: EntityStore) -> dict[str, int]:
    """Move every completed task and epic to archived."""
    now = utcnow()

    completed_tasks = store.list("task", status="completed")
    for task in completed_tasks:
        store.update("task", task.id, {"status": "archived", "updated_at": now})

    completed_epics = store.list("epic", status="completed")
    for epic in completed_epics:
        store.update("epic", epic.id, {"status": "archived", "updated_at": now})

    result = {"tasks_archived": len(completed_tasks), "epics_archived": len(completed_epics)}
    logger.info("bulk_archive_completed", extra=result)
    return result
