# trekker/listing/list_router.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from trekker.errors import ValidationError
from trekker.listing import list_service
from trekker.schemas.list_schema import ListPage
from trekker.store import EntityStore, get_store

router = APIRouter(prefix="/list", tags=["list"])


def _split(raw: Optional[str]) -> Optional[list[str]]:
    if not raw:
        return None
    return [part.strip() for part in raw.split(",") if part.strip()]


@router.get("", response_model=ListPage)
def list_all(
    type: Optional[str] = None,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    sort: Optional[str] = None,
    limit: int = 50,
    page: int = 1,
    store: EntityStore = Depends(get_store),
):
    priorities = _split(priority)
    try:
        parsed_priorities = [int(p) for p in priorities] if priorities else None
    except ValueError:
        raise ValidationError(f"Invalid priority: {priority}")

    return list_service.list_items(
        store,
        types=_split(type),
        statuses=_split(status),
        priorities=parsed_priorities,
        sort=sort,
        limit=limit,
        page=page,
    )
