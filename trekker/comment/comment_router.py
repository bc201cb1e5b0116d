# trekker/comment/comment_router.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from trekker.comment import comment_service
from trekker.store import EntityStore, get_store

router = APIRouter(prefix="/comments", tags=["comments"])


@router.delete("/{comment_id}")
def delete_comment(comment_id: str, store: EntityStore = Depends(get_store)):
    comment_service.delete_comment(store, comment_id)
    return {"success": True}
