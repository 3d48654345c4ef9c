"""Ciclo de vida de los requisitos y protocolo de comentarios.

Cada función recibe la sesión explícitamente y no guarda registros en memoria
entre llamadas. Los errores se lanzan como excepciones de `app.core.exceptions`.

Los comentarios de un requisito se guardan como una lista JSON dentro de la
fila. Añadir un comentario es leer-añadir-escribir, así que dos llamadas
concurrentes sobre el mismo id podrían perder una actualización. Para evitarlo
las llamadas se serializan por id: un lock de proceso (`append_locks`) y un
bloqueo de fila (`SELECT ... FOR UPDATE`) para varias instancias contra
Postgres. SQLite ignora FOR UPDATE; allí solo protege el lock de proceso.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from app.core.exceptions import NotFoundError, ValidationError
from app.models.requirement import DEFAULT_STATUS, Requirement
from app.services.store_support import is_blank, require_fields, store_failure
from app.utils.clock import as_utc, utcnow
from app.utils.keyed_locks import KeyedLocks

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Customer, details, and type are required"
COMMENT_REQUIRED_MESSAGE = "Comment text or media is required"
NOT_FOUND_MESSAGE = "Requirement not found"

append_locks = KeyedLocks()


def _get_requirement(session: Session, requirement_id: int, for_update: bool = False) -> Requirement:
    statement = select(Requirement).where(Requirement.id == requirement_id)
    if for_update:
        statement = statement.with_for_update().execution_options(populate_existing=True)
    requirement = session.exec(statement).first()
    if requirement is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return requirement


def _stamp(value: Any, default: datetime) -> str:
    """Timestamp ISO en UTC para un comentario inicial (datetime, texto ISO o None)."""
    if value is None:
        return default.isoformat()
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid comment timestamp: {value!r}")
    if not isinstance(value, datetime):
        raise ValidationError(f"Invalid comment timestamp: {value!r}")
    return as_utc(value).isoformat()


def build_comment(
    text: Optional[str] = None,
    images: Optional[Iterable[str]] = None,
    videos: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    """Valida y arma un comentario sin timestamp (se asigna al guardarlo)."""
    images = list(images or [])
    videos = list(videos or [])
    if is_blank(text) and not images and not videos:
        logger.warning("Rejected comment without text or media")
        raise ValidationError(COMMENT_REQUIRED_MESSAGE)
    return {"text": text or "", "images": images, "videos": videos}


def list_requirements(session: Session) -> List[Requirement]:
    try:
        return list(
            session.exec(
                select(Requirement).order_by(Requirement.created_at.desc(), Requirement.id)
            ).all()
        )
    except SQLAlchemyError:
        raise store_failure(session, "fetch requirements")


def create_requirement(
    session: Session,
    customer: Optional[str],
    contact: Optional[str],
    details: Optional[str],
    type_: Optional[str],
    status: Optional[str] = None,
    images: Optional[Iterable[str]] = None,
    videos: Optional[Iterable[str]] = None,
    comments: Optional[Iterable[Mapping[str, Any]]] = None,
) -> Requirement:
    require_fields(REQUIRED_FIELDS_MESSAGE, customer, details, type_)

    now = utcnow()
    initial_comments = []
    for item in comments or []:
        comment = build_comment(item.get("text"), item.get("images"), item.get("videos"))
        comment["timestamp"] = _stamp(item.get("timestamp"), now)
        initial_comments.append(comment)

    requirement = Requirement(
        customer=customer,
        contact=contact,
        details=details,
        type=type_,
        status=DEFAULT_STATUS if is_blank(status) else status,
        images=list(images or []),
        videos=list(videos or []),
        comments=initial_comments,
        created_at=now,
        updated_at=now,
        last_comment_at=None,
    )
    try:
        session.add(requirement)
        session.commit()
        session.refresh(requirement)
    except SQLAlchemyError:
        raise store_failure(session, "add requirement")
    logger.info("Requirement %s created for customer %r", requirement.id, requirement.customer)
    return requirement


def update_status(session: Session, requirement_id: int, status: Optional[str]) -> Requirement:
    require_fields("Status is required", status)
    try:
        requirement = _get_requirement(session, requirement_id)
        requirement.status = status
        requirement.updated_at = utcnow()
        session.add(requirement)
        session.commit()
        session.refresh(requirement)
    except SQLAlchemyError:
        raise store_failure(session, "update status")
    return requirement


def update_requirement(
    session: Session,
    requirement_id: int,
    customer: Optional[str],
    contact: Optional[str],
    details: Optional[str],
    type_: Optional[str],
) -> Requirement:
    """Edita solo los metadatos; estado, media y comentarios no se tocan."""
    require_fields(REQUIRED_FIELDS_MESSAGE, customer, details, type_)
    try:
        requirement = _get_requirement(session, requirement_id)
        requirement.customer = customer
        requirement.contact = contact
        requirement.details = details
        requirement.type = type_
        requirement.updated_at = utcnow()
        session.add(requirement)
        session.commit()
        session.refresh(requirement)
    except SQLAlchemyError:
        raise store_failure(session, "update requirement")
    return requirement


def delete_requirement(session: Session, requirement_id: int) -> None:
    try:
        requirement = _get_requirement(session, requirement_id)
        session.delete(requirement)
        session.commit()
    except SQLAlchemyError:
        raise store_failure(session, "delete requirement")
    append_locks.forget(requirement_id)
    logger.info("Requirement %s deleted", requirement_id)


def append_comment(
    session: Session,
    requirement_id: int,
    text: Optional[str] = None,
    images: Optional[Iterable[str]] = None,
    videos: Optional[Iterable[str]] = None,
) -> Requirement:
    """Añade un comentario al final y devuelve el requisito completo."""
    comment = build_comment(text, images, videos)
    try:
        with append_locks.hold(requirement_id):
            try:
                requirement = _get_requirement(session, requirement_id, for_update=True)
                now = utcnow()
                comment["timestamp"] = now.isoformat()
                # lista nueva para que SQLAlchemy detecte el cambio en la columna JSON
                requirement.comments = [*(requirement.comments or []), comment]
                requirement.last_comment_at = now
                requirement.updated_at = now
                session.add(requirement)
                session.commit()
                session.refresh(requirement)
            except SQLAlchemyError:
                raise store_failure(session, "add comment")
    except NotFoundError:
        # un id inexistente no debe quedarse en el registro de locks
        append_locks.forget(requirement_id)
        raise
    return requirement
