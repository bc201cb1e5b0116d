# trekker/epic/epic_router.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from trekker.epic import epic_service
from trekker.schemas.epic_schema import EpicCreate, EpicRead, EpicUpdate
from trekker.store import EntityStore, get_store

router = APIRouter(prefix="/epics", tags=["epics"])


@router.get("", response_model=list[EpicRead])
def get_all_epics(store: EntityStore = Depends(get_store)):
    return epic_service.list_epics(store)


@router.post("", response_model=EpicRead, status_code=201)
def create_epic(data: EpicCreate, store: EntityStore = Depends(get_store)):
    return epic_service.create_epic(store, data)


@router.get("/{epic_id}", response_model=EpicRead)
def get_epic(epic_id: str, store: EntityStore = Depends(get_store)):
    return epic_service.get_epic(store, epic_id)


@router.patch("/{epic_id}", response_model=EpicRead)
def update_epic(epic_id: str, data: EpicUpdate, store: EntityStore = Depends(get_store)):
    return epic_service.update_epic(store, epic_id, data)


@router.delete("/{epic_id}")
def delete_epic(epic_id: str, store: EntityStore = Depends(get_store)):
    epic_service.delete_epic(store, epic_id)
    return {"success": True}
