# trekker/project/project_router.py

from typing import Optional

from fastapi import APIRouter, Depends

from trekker.project import project_service
from trekker.schemas.project_schema import ProjectCreate, ProjectRead
from trekker.store import EntityStore, get_store

router = APIRouter(prefix="/project", tags=["project"])


@router.get("", response_model=Optional[ProjectRead])
def get_project(store: EntityStore = Depends(get_store)):
    return project_service.get(store)


@router.post("", response_model=ProjectRead, status_code=201)
def create_project(data: ProjectCreate, store: EntityStore = Depends(get_store)):
    return project_service.initialize(store, data.name)
