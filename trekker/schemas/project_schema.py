# trekker/schemas/project_schema.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


# --------- For creating the project (POST) ---------
class ProjectCreate(BaseModel):
    name: str = Field(min_length=1)


# --------- For reading the project (GET responses) ---------
class ProjectRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
