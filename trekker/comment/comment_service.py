# trekker/comment/comment_service.py
from __future__ import annotations

from trekker.database import utcnow
from trekker.errors import NotFoundError
from trekker.ids import generate_id
from trekker.models.comment import Comment
from trekker.schemas.comment_schema import CommentCreate
from trekker.store import EntityStore
from trekker.task import task_service


def list_for_task(store: EntityStore, task_id: str) -> list[Comment]:
    task_service.get_task(store, task_id)
    return store.list("comment", order_by="created_at", task_id=task_id)


def create_comment(store: EntityStore, task_id: str, data: CommentCreate) -> Comment:
    task_service.get_task(store, task_id)

    now = utcnow()
    return store.insert(
        "comment",
        {
            "id": generate_id("comment"),
            "task_id": task_id,
            "author": data.author,
            "content": data.content,
            "created_at": now,
            "updated_at": now,
        },
    )


def delete_comment(store: EntityStore, comment_id: str) -> None:
    if store.get("comment", comment_id) is None:
        raise NotFoundError("Comment", comment_id)
    store.delete("comment", comment_id)
