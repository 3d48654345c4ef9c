from typing import Any, Dict, List, Optional
from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from datetime import datetime

from app.utils.clock import UTCTimestamp, utcnow

# JSONB en Postgres, JSON genérico en SQLite (tests)
JSONList = JSON().with_variant(JSONB(), "postgresql")

DEFAULT_STATUS = "Pending"

class Requirement(SQLModel, table=True):
    __tablename__ = "requirements"

    id: Optional[int] = Field(default=None, primary_key=True)
    customer: str = Field(max_length=255)
    contact: Optional[str] = Field(default=None, max_length=255)
    details: str
    type: str = Field(max_length=255)   # copia del nombre del tipo, sin foreign key
    status: str = Field(default=DEFAULT_STATUS, max_length=100)   # sin enum: cualquier texto
    images: List[str] = Field(default_factory=list, sa_column=Column(JSONList, nullable=False))
    videos: List[str] = Field(default_factory=list, sa_column=Column(JSONList, nullable=False))
    # Cada comentario: {"text", "timestamp" (ISO), "images", "videos"}. Solo se añaden.
    comments: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSONList, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCTimestamp, nullable=False, index=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCTimestamp, nullable=False))
    last_comment_at: Optional[datetime] = Field(default=None, sa_column=Column(UTCTimestamp, nullable=True))
