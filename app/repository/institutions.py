from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app import schema as db_schema
from app.models import Institution
from app.query import Filters, Page, PageRequest, paginate

from ._db import add_model, delete_model, get_model, get_model_by_name, update_model
from .mappers import _to_institution

INSTITUTION_LIST_INCLUDE = ("ratings.category",)


def create_institution(
    session: Session,
    name: str,
    status: bool = False,
    image: Optional[str] = None,
    *,
    commit: bool = True,
) -> Institution:
    model = add_model(
        session,
        db_schema.Institution(
            name=name.strip(), status=1 if status else 0, image=image
        ),
        commit=commit,
    )
    return _to_institution(model)


def get_institution_by_id(
    session: Session, institution_id: int, *, with_ratings: bool = False
) -> Optional[Institution]:
    model = get_model(
        session,
        db_schema.Institution,
        institution_id,
        include=INSTITUTION_LIST_INCLUDE if with_ratings else (),
    )
    return _to_institution(model) if model else None


def get_institution_by_name(session: Session, name: str) -> Optional[Institution]:
    model = get_model_by_name(session, db_schema.Institution, name)
    return _to_institution(model) if model else None


def list_institutions(
    session: Session,
    page_request: PageRequest,
    filters: Optional[Filters] = None,
    include: tuple[str, ...] = INSTITUTION_LIST_INCLUDE,
) -> Page[Institution]:
    return paginate(
        session,
        db_schema.Institution,
        page_request,
        filters,
        include=include,
        mapper=_to_institution,
    )


def update_institution(
    session: Session,
    institution_id: int,
    *,
    name: Optional[str] = None,
    status: Optional[bool] = None,
    image: Optional[str] = None,
) -> Optional[Institution]:
    values: dict[str, object] = {}
    if name is not None:
        values["name"] = name.strip()
    if status is not None:
        values["status"] = 1 if status else 0
    if image is not None:
        values["image"] = image or None
    model = update_model(session, db_schema.Institution, institution_id, values)
    return _to_institution(model) if model else None


def delete_institution(session: Session, institution_id: int) -> bool:
    return delete_model(session, db_schema.Institution, institution_id)
