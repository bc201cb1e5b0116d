# trekker/task/task_router.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from trekker.comment import comment_service
from trekker.schemas.comment_schema import CommentCreate, CommentRead
from trekker.schemas.task_schema import TaskCreate, TaskRead, TaskUpdate
from trekker.store import EntityStore, get_store
from trekker.task import task_service


# ==========================
#  ROUTER
# ==========================
router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)


@router.get("", response_model=list[TaskRead])
def get_all_tasks(store: EntityStore = Depends(get_store)):
    return task_service.list_tasks(store)


@router.post("", response_model=TaskRead, status_code=201)
def create_task(data: TaskCreate, store: EntityStore = Depends(get_store)):
    return task_service.create_task(store, data)


@router.get("/{task_id}", response_model=TaskRead)
def get_task(task_id: str, store: EntityStore = Depends(get_store)):
    return task_service.get_task_with_deps(store, task_id)


@router.patch("/{task_id}", response_model=TaskRead)
def update_task(task_id: str, data: TaskUpdate, store: EntityStore = Depends(get_store)):
    return task_service.update_task(store, task_id, data)


@router.delete("/{task_id}")
def delete_task(task_id: str, store: EntityStore = Depends(get_store)):
    task_service.delete_task(store, task_id)
    return {"success": True}


@router.get("/{task_id}/subtasks", response_model=list[TaskRead])
def get_subtasks(task_id: str, store: EntityStore = Depends(get_store)):
    return task_service.list_subtasks(store, task_id)


# ==========================
#  COMMENTS (owned by a task)
# ==========================
@router.get("/{task_id}/comments", response_model=list[CommentRead])
def get_comments(task_id: str, store: EntityStore = Depends(get_store)):
    return comment_service.list_for_task(store, task_id)


@router.post("/{task_id}/comments", response_model=CommentRead, status_code=201)
def add_comment(task_id: str, data: CommentCreate, store: EntityStore = Depends(get_store)):
    return comment_service.create_comment(store, task_id, data)
