from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app import schema as db_schema
from app.models import Nominee
from app.query import Filters, Page, PageRequest, paginate

from ._db import add_model, delete_model, get_model, update_model
from .mappers import _to_nominee

NOMINEE_LIST_INCLUDE = ("position", "institution", "district", "ratings.category")


def create_nominee(
    session: Session,
    name: str,
    position_id: int,
    institution_id: int,
    district_id: int,
    status: bool = False,
    evidence: Optional[str] = None,
    image: Optional[str] = None,
    *,
    commit: bool = True,
) -> Nominee:
    model = add_model(
        session,
        db_schema.Nominee(
            name=name.strip(),
            position_id=position_id,
            institution_id=institution_id,
            district_id=district_id,
            status=1 if status else 0,
            evidence=evidence,
            image=image,
        ),
        commit=commit,
    )
    return _to_nominee(model)


def get_nominee_by_id(
    session: Session, nominee_id: int, *, with_relations: bool = False
) -> Optional[Nominee]:
    model = get_model(
        session,
        db_schema.Nominee,
        nominee_id,
        include=NOMINEE_LIST_INCLUDE if with_relations else (),
    )
    return _to_nominee(model) if model else None


def list_nominees(
    session: Session,
    page_request: PageRequest,
    filters: Optional[Filters] = None,
    include: tuple[str, ...] = NOMINEE_LIST_INCLUDE,
) -> Page[Nominee]:
    return paginate(
        session,
        db_schema.Nominee,
        page_request,
        filters,
        include=include,
        mapper=_to_nominee,
    )


def update_nominee(
    session: Session,
    nominee_id: int,
    *,
    name: Optional[str] = None,
    position_id: Optional[int] = None,
    institution_id: Optional[int] = None,
    district_id: Optional[int] = None,
    status: Optional[bool] = None,
    evidence: Optional[str] = None,
    image: Optional[str] = None,
) -> Optional[Nominee]:
    values: dict[str, object] = {}
    if name is not None:
        values["name"] = name.strip()
    if position_id is not None:
        values["position_id"] = position_id
    if institution_id is not None:
        values["institution_id"] = institution_id
    if district_id is not None:
        values["district_id"] = district_id
    if status is not None:
        values["status"] = 1 if status else 0
    if evidence is not None:
        values["evidence"] = evidence or None
    if image is not None:
        values["image"] = image or None
    model = update_model(session, db_schema.Nominee, nominee_id, values)
    return _to_nominee(model) if model else None


def delete_nominee(session: Session, nominee_id: int) -> bool:
    return delete_model(session, db_schema.Nominee, nominee_id)
