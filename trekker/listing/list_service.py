# trekker/listing/list_service.py
"""Unified, paginated listing of epics, top-level tasks and subtasks."""
from __future__ import annotations

from typing import Optional

from trekker.errors import ValidationError
from trekker.schemas.list_schema import ListItem, ListPage
from trekker.store import EntityStore

VALID_SORT_FIELDS = ("created", "updated", "title", "priority", "status")
VALID_TYPES = ("epic", "task", "subtask")

_SORT_ATTRS = {"created": "created_at", "updated": "updated_at"}


def parse_sort(sort: str) -> list[tuple[str, bool]]:
    """Parse "field[:asc|desc],..." into (attribute, descending) pairs."""
    keys = []
    for part in sort.split(","):
        field, _, direction = part.strip().lower().partition(":")
        field = field.strip()
        if field not in VALID_SORT_FIELDS:
            raise ValidationError(
                f"Invalid sort field: {field}. Valid fields: {', '.join(VALID_SORT_FIELDS)}"
            )
        keys.append((_SORT_ATTRS.get(field, field), direction.strip() != "asc"))
    return keys


def _collect(store: EntityStore) -> list[ListItem]:
    items = [
        ListItem(
            type="epic",
            id=e.id,
            title=e.title,
            status=e.status,
            priority=e.priority,
            parent_id=None,
            created_at=e.created_at,
            updated_at=e.updated_at,
        )
        for e in store.list("epic")
    ]
    for t in store.list("task"):
        is_subtask = t.parent_task_id is not None
        items.append(
            ListItem(
                type="subtask" if is_subtask else "task",
                id=t.id,
                title=t.title,
                status=t.status,
                priority=t.priority,
                parent_id=t.parent_task_id if is_subtask else t.epic_id,
                created_at=t.created_at,
                updated_at=t.updated_at,
            )
        )
    return items


def list_items(
    store: EntityStore,
    *,
    types: Optional[list[str]] = None,
    statuses: Optional[list[str]] = None,
    priorities: Optional[list[int]] = None,
    sort: Optional[str] = None,
    limit: int = 50,
    page: int = 1,
) -> ListPage:
    if types:
        unknown = [t for t in types if t not in VALID_TYPES]
        if unknown:
            raise ValidationError(f"Invalid type: {unknown[0]}")
    if limit < 1 or page < 1:
        raise ValidationError("limit and page must be positive")

    sort_keys = parse_sort(sort) if sort else [("created_at", True)]

    items = [
        item
        for item in _collect(store)
        if (not types or item.type in types)
        and (not statuses or item.status in statuses)
        and (not priorities or item.priority in priorities)
    ]

    # stable sorts applied from the least to the most significant key
    for attr, descending in reversed(sort_keys):
        items.sort(key=lambda item: getattr(item, attr), reverse=descending)

    offset = (page - 1) * limit
    return ListPage(total=len(items), page=page, limit=limit, items=items[offset:offset + limit])
