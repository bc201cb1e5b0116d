# trekker/dependency/dependency_service.py
"""Dependency graph engine.

Edges are directed ``task_id -> depends_on_id`` ("task_id cannot complete
until depends_on_id has"). The edge set is kept acyclic, free of self-loops
and free of duplicate ordered pairs.
"""
from __future__ import annotations

import logging
from collections import defaultdict

from trekker.database import utcnow
from trekker.errors import ConflictError, NotFoundError, ValidationError
from trekker.ids import generate_uuid
from trekker.models.dependency import Dependency
from trekker.store import EntityStore

logger = logging.getLogger("trekker.dependency")


def _assert_task_exists(store: EntityStore, task_id: str, label: str) -> None:
    if store.get("task", task_id) is None:
        raise NotFoundError(label, task_id)


def _find_edge(store: EntityStore, task_id: str, depends_on_id: str) -> Dependency | None:
    matches = store.list("dependency", task_id=task_id, depends_on_id=depends_on_id)
    return matches[0] if matches else None


def would_create_cycle(store: EntityStore, task_id: str, depends_on_id: str) -> bool:
    """Return True if adding ``task_id -> depends_on_id`` would close a cycle.

    The existing edges are loaded once and walked depth-first from
    ``depends_on_id`` along "depends on" edges; reaching ``task_id`` means a
    path back already exists. Each node is expanded at most once, so a
    pre-existing cycle cannot hang the walk.
    """
    prerequisites: dict[str, list[str]] = defaultdict(list)
    for edge in store.list("dependency"):
        prerequisites[edge.task_id].append(edge.depends_on_id)

    visited: set[str] = set()
    stack = [depends_on_id]

    while stack:
        current = stack.pop()
        if current == task_id:
            return True
        if current in visited:
            continue
        visited.add(current)

        for nxt in prerequisites.get(current, ()):
            if nxt not in visited:
                stack.append(nxt)

    return False


def add_dependency(store: EntityStore, task_id: str, depends_on_id: str) -> Dependency:
    if task_id == depends_on_id:
        raise ValidationError("A task cannot depend on itself")

    _assert_task_exists(store, task_id, "Task")
    _assert_task_exists(store, depends_on_id, "Dependency task")

    if _find_edge(store, task_id, depends_on_id) is not None:
        raise ConflictError("Dependency already exists")

    if would_create_cycle(store, task_id, depends_on_id):
        logger.info(
            "dependency_cycle_rejected",
            extra={"task_id": task_id, "depends_on_id": depends_on_id},
        )
        raise ValidationError("Adding this dependency would create a cycle")

    dependency = store.insert(
        "dependency",
        {
            "id": generate_uuid(),
            "task_id": task_id,
            "depends_on_id": depends_on_id,
            "created_at": utcnow(),
        },
    )
    logger.info(
        "dependency_created",
        extra={"task_id": task_id, "depends_on_id": depends_on_id},
    )
    return dependency


def remove_dependency(store: EntityStore, task_id: str, depends_on_id: str) -> None:
    edge = _find_edge(store, task_id, depends_on_id)
    if edge is None:
        raise NotFoundError("Dependency", f"{task_id} -> {depends_on_id}")

    store.delete("dependency", edge.id)
    logger.info(
        "dependency_removed",
        extra={"task_id": task_id, "depends_on_id": depends_on_id},
    )
