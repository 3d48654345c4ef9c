import logging
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from app.core.exceptions import DuplicateError
from app.models.requirement_type import RequirementType
from app.services.store_support import require_fields, store_failure

logger = logging.getLogger(__name__)

DEFAULT_TYPES = (
    "Special Order",
    "Bulk Purchase",
    "Custom Item",
    "Rush Delivery",
    "Product Inquiry",
    "Price Quote",
)

DUPLICATE_MESSAGE = "This requirement type already exists"


def list_types(session: Session) -> List[RequirementType]:
    try:
        return list(session.exec(select(RequirementType).order_by(RequirementType.name)).all())
    except SQLAlchemyError:
        raise store_failure(session, "fetch types")


def add_type(session: Session, name: Optional[str]) -> RequirementType:
    require_fields("Type name is required", name)
    name = name.strip()
    try:
        existing = session.exec(
            select(RequirementType).where(RequirementType.name == name)
        ).first()
        if existing:
            raise DuplicateError(DUPLICATE_MESSAGE)
        requirement_type = RequirementType(name=name)
        session.add(requirement_type)
        session.commit()
        session.refresh(requirement_type)
    except IntegrityError:
        # otra petición insertó el mismo nombre entre la consulta y el commit
        session.rollback()
        raise DuplicateError(DUPLICATE_MESSAGE)
    except SQLAlchemyError:
        raise store_failure(session, "add type")
    logger.info("Requirement type created: %s (id=%s)", requirement_type.name, requirement_type.id)
    return requirement_type


def seed_default_types(session: Session, names: Sequence[str] = DEFAULT_TYPES) -> int:
    """Inserta los tipos por defecto que falten. Devuelve cuántos se crearon."""
    existing = set(session.exec(select(RequirementType.name)).all())
    created = 0
    for name in names:
        if name in existing:
            continue
        session.add(RequirementType(name=name))
        try:
            session.commit()
            created += 1
        except IntegrityError:
            # equivalente a ON CONFLICT DO NOTHING
            session.rollback()
    logger.info("Default requirement types seeded: %d new", created)
    return created
