from typing import Optional
from sqlmodel import SQLModel, Field, Column
from datetime import datetime

from app.utils.clock import UTCTimestamp, utcnow

class RequirementType(SQLModel, table=True):
    __tablename__ = "requirement_types"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, unique=True, index=True)
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(UTCTimestamp, nullable=False))
