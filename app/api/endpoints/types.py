from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from app.database import get_session
from app.schemas.requirement_type import RequirementTypeCreate, RequirementTypeRead
from app.services import type_registry

router = APIRouter()

@router.get("/", response_model=List[RequirementTypeRead])
def list_types(session: Session = Depends(get_session)):
    return type_registry.list_types(session)

@router.post("/", response_model=RequirementTypeRead, status_code=status.HTTP_201_CREATED)
def add_type(type_in: RequirementTypeCreate, session: Session = Depends(get_session)):
    return type_registry.add_type(session, type_in.name)
