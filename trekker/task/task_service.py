# trekker/task/task_service.py
"""Task CRUD and cascade deletion.

Deleting a task removes everything that only exists because of it: its
comments, every dependency edge touching it and its whole subtask tree.
"""
from __future__ import annotations

import logging
from typing import Iterable

from trekker.database import utcnow
from trekker.errors import NotFoundError
from trekker.ids import generate_id
from trekker.models.dependency import Dependency
from trekker.models.task import Task
from trekker.project import project_service
from trekker.schemas.task_schema import TaskCreate, TaskRead, TaskUpdate
from trekker.store import EntityStore

logger = logging.getLogger("trekker.task")

NULLABLE_FIELDS = ("description", "epic_id", "tags")


def _with_deps(task: Task, edges: Iterable[Dependency]) -> TaskRead:
    edges = list(edges)
    read = TaskRead.model_validate(task)
    read.depends_on = [e.depends_on_id for e in edges if e.task_id == task.id]
    read.blocks = [e.task_id for e in edges if e.depends_on_id == task.id]
    return read


def _assert_epic_exists(store: EntityStore, epic_id: str) -> None:
    if store.get("epic", epic_id) is None:
        raise NotFoundError("Epic", epic_id)


def get_task(store: EntityStore, task_id: str) -> Task:
    task = store.get("task", task_id)
    if task is None:
        raise NotFoundError("Task", task_id)
    return task


def list_tasks(store: EntityStore) -> list[TaskRead]:
    edges = store.list("dependency")
    return [_with_deps(t, edges) for t in store.list("task")]


def get_task_with_deps(store: EntityStore, task_id: str) -> TaskRead:
    return _with_deps(get_task(store, task_id), store.list("dependency"))


def list_subtasks(store: EntityStore, task_id: str) -> list[TaskRead]:
    get_task(store, task_id)
    edges = store.list("dependency")
    return [_with_deps(t, edges) for t in store.list("task", parent_task_id=task_id)]


def create_task(store: EntityStore, data: TaskCreate) -> TaskRead:
    if data.epic_id:
        _assert_epic_exists(store, data.epic_id)
    if data.parent_task_id:
        get_task(store, data.parent_task_id)

    project = project_service.require(store)
    now = utcnow()

    task = store.insert(
        "task",
        {
            "id": generate_id("task"),
            "project_id": project.id,
            "epic_id": data.epic_id or None,
            "parent_task_id": data.parent_task_id or None,
            "title": data.title,
            "description": data.description or None,
            "status": data.status,
            "priority": data.priority,
            "tags": data.tags or None,
            "created_at": now,
            "updated_at": now,
        },
    )
    logger.info("task_created", extra={"task_id": task.id, "parent_task_id": task.parent_task_id})
    return _with_deps(task, [])


def update_task(store: EntityStore, task_id: str, data: TaskUpdate) -> TaskRead:
    get_task(store, task_id)

    if data.epic_id:
        _assert_epic_exists(store, data.epic_id)

    # only fields the caller actually sent; explicit nulls clear nullable columns
    values = {
        field: value
        for field, value in data.model_dump(exclude_unset=True).items()
        if value is not None or field in NULLABLE_FIELDS
    }
    values["updated_at"] = utcnow()

    store.update("task", task_id, values)
    return get_task_with_deps(store, task_id)


def _delete_owned_records(store: EntityStore, task_id: str) -> None:
    for comment in store.list("comment", task_id=task_id):
        store.delete("comment", comment.id)

    # edges in both directions: "depends on" and "is depended on by"
    for edge in store.list("dependency", task_id=task_id):
        store.delete("dependency", edge.id)
    for edge in store.list("dependency", depends_on_id=task_id):
        store.delete("dependency", edge.id)


def delete_task(store: EntityStore, task_id: str) -> list[str]:
    """Delete a task and its whole subtask tree.

    The tree is collected with an explicit stack in depth-first pre-order, then
    deleted in reverse so every descendant is gone before its parent. For each
    node its comments and dependency edges go first, then the row itself.

    This is not the top-down order (root comments and edges, then subtree,
    then root row): here a node's own comments and edges are removed only
    after its whole subtree is gone. The end state is identical, and a
    failure part-way always leaves the root row in place.

    Every step is a no-op on already-absent rows, so re-running after a
    partial failure finishes the job.

    Returns the deleted task ids in deletion order.
    """
    get_task(store, task_id)

    order: list[str] = []
    seen: set[str] = set()
    stack = [task_id]
    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen.add(current)
        order.append(current)
        children = store.list("task", parent_task_id=current)
        # reversed so the first child is expanded first
        stack.extend(child.id for child in reversed(children))

    for current in reversed(order):
        _delete_owned_records(store, current)
        store.delete("task", current)

    logger.info("task_deleted", extra={"task_id": task_id, "cascade_count": len(order)})
    return list(reversed(order))
