# schemas/requirement.py

from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

# Los campos obligatorios se declaran opcionales: la validación de vacíos
# la hace el servicio y responde 400, no 422.

class CommentCreate(BaseModel):
    text: Optional[str] = None
    images: Optional[List[str]] = None
    videos: Optional[List[str]] = None

class CommentSeed(CommentCreate):
    """Comentario incluido al crear el requisito (puede traer su timestamp)."""
    timestamp: Optional[datetime] = None

class CommentRead(BaseModel):
    text: str = ""
    timestamp: datetime
    images: List[str] = []
    videos: List[str] = []

class RequirementCreate(BaseModel):
    customer: Optional[str] = None
    contact: Optional[str] = None
    details: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    images: Optional[List[str]] = None
    videos: Optional[List[str]] = None
    comments: Optional[List[CommentSeed]] = None

class RequirementRead(BaseModel):
    id: int
    customer: str
    contact: Optional[str]
    details: str
    type: str
    status: str
    images: List[str]
    videos: List[str]
    comments: List[CommentRead]
    created_at: datetime
    updated_at: datetime
    last_comment_at: Optional[datetime]

    class Config:
        from_attributes = True

class RequirementUpdate(BaseModel):
    customer: Optional[str] = None
    contact: Optional[str] = None
    details: Optional[str] = None
    type: Optional[str] = None

class RequirementStatusUpdate(BaseModel):
    status: Optional[str] = None

class DeleteConfirmation(BaseModel):
    message: str
