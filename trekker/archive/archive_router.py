# trekker/archive/archive_router.py
from fastapi import APIRouter, Depends

from trekker.archive import archive_service
from trekker.store import EntityStore, get_store

router = APIRouter(prefix="/archive", tags=["archive"])


@router.post("")
def archive_completed(store: EntityStore = Depends(get_store)):
    return archive_service.bulk_archive_completed(store)
