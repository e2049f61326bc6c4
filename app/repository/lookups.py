"""Case-insensitive find-or-create for the lookups a nominee references.

Creates only flush; the caller owns the transaction. The unique
``lower(name)`` indexes make a concurrent duplicate insert fail with
``sqlite3.IntegrityError`` instead of producing a second row.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.models import District, Institution, Position

from .institutions import create_institution, get_institution_by_name
from .reference import (
    create_district,
    create_position,
    get_district_by_name,
    get_position_by_name,
)


def find_or_create_position(session: Session, name: str) -> tuple[Position, bool]:
    existing = get_position_by_name(session, name)
    if existing is not None:
        return existing, False
    return create_position(session, name, commit=False), True


def find_or_create_institution(
    session: Session, name: str
) -> tuple[Institution, bool]:
    existing = get_institution_by_name(session, name)
    if existing is not None:
        return existing, False
    return create_institution(session, name, status=False, commit=False), True


def find_or_create_district(
    session: Session, name: str, region: str
) -> tuple[District, bool]:
    existing = get_district_by_name(session, name)
    if existing is not None:
        return existing, False
    return create_district(session, name, region, commit=False), True
