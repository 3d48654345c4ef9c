# api/endpoints/requirements.py

from fastapi import APIRouter, Depends, status
from sqlmodel import Session
from typing import List

from app.database import get_session
from app.schemas.requirement import (
    CommentCreate,
    DeleteConfirmation,
    RequirementCreate,
    RequirementRead,
    RequirementStatusUpdate,
    RequirementUpdate,
)
from app.services import requirement_store

router = APIRouter()

@router.get("/", response_model=List[RequirementRead])
def list_requirements(session: Session = Depends(get_session)):
    return requirement_store.list_requirements(session)

@router.post("/", response_model=RequirementRead, status_code=status.HTTP_201_CREATED)
def create_requirement(
    requirement_in: RequirementCreate,
    session: Session = Depends(get_session),
):
    return requirement_store.create_requirement(
        session,
        customer=requirement_in.customer,
        contact=requirement_in.contact,
        details=requirement_in.details,
        type_=requirement_in.type,
        status=requirement_in.status,
        images=requirement_in.images,
        videos=requirement_in.videos,
        comments=[c.dict() for c in requirement_in.comments or []],
    )

@router.patch("/{requirement_id}/status", response_model=RequirementRead)
def update_status(
    requirement_id: int,
    status_in: RequirementStatusUpdate,
    session: Session = Depends(get_session),
):
    return requirement_store.update_status(session, requirement_id, status_in.status)

@router.put("/{requirement_id}", response_model=RequirementRead)
def update_requirement(
    requirement_id: int,
    requirement_in: RequirementUpdate,
    session: Session = Depends(get_session),
):
    return requirement_store.update_requirement(
        session,
        requirement_id,
        customer=requirement_in.customer,
        contact=requirement_in.contact,
        details=requirement_in.details,
        type_=requirement_in.type,
    )

@router.delete("/{requirement_id}", response_model=DeleteConfirmation)
def delete_requirement(
    requirement_id: int,
    session: Session = Depends(get_session),
):
    requirement_store.delete_requirement(session, requirement_id)
    return DeleteConfirmation(message="Requirement deleted successfully")

@router.post("/{requirement_id}/comments", response_model=RequirementRead)
def append_comment(
    requirement_id: int,
    comment_in: CommentCreate,
    session: Session = Depends(get_session),
):
    return requirement_store.append_comment(
        session,
        requirement_id,
        text=comment_in.text,
        images=comment_in.images,
        videos=comment_in.videos,
    )
