from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class RequirementTypeCreate(BaseModel):
    name: Optional[str] = None

class RequirementTypeRead(BaseModel):
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True
