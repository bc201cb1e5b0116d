# trekker/dependency/dependency_router.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from trekker.dependency import dependency_service
from trekker.schemas.dependency_schema import DependencyCreate, DependencyRead
from trekker.store import EntityStore, get_store

router = APIRouter(prefix="/dependencies", tags=["dependencies"])


@router.post("", response_model=DependencyRead, status_code=201)
def create_dependency(data: DependencyCreate, store: EntityStore = Depends(get_store)):
    return dependency_service.add_dependency(store, data.task_id, data.depends_on_id)


@router.delete("")
def delete_dependency(task_id: str, depends_on_id: str, store: EntityStore = Depends(get_store)):
    dependency_service.remove_dependency(store, task_id, depends_on_id)
    return {"success": True}
