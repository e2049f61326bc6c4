"""Departments, impact areas, positions and districts.

These are plain named lookups; positions and districts double as
find-or-create targets for the nominee bulk import (see ``lookups``).
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app import schema as db_schema
from app.models import Department, District, ImpactArea, Position
from app.query import Filters, Page, PageRequest, paginate

from ._db import add_model, delete_model, get_model, get_model_by_name, update_model
from .mappers import _to_department, _to_district, _to_impact_area, _to_position


def _present(**values: object) -> dict[str, object]:
    return {name: value for name, value in values.items() if value is not None}


def create_department(session: Session, name: str, *, commit: bool = True) -> Department:
    model = add_model(session, db_schema.Department(name=name.strip()), commit=commit)
    return _to_department(model)


def get_department_by_id(session: Session, department_id: int) -> Optional[Department]:
    model = get_model(session, db_schema.Department, department_id)
    return _to_department(model) if model else None


def get_department_by_name(session: Session, name: str) -> Optional[Department]:
    model = get_model_by_name(session, db_schema.Department, name)
    return _to_department(model) if model else None


def list_departments(
    session: Session, page_request: PageRequest, filters: Optional[Filters] = None
) -> Page[Department]:
    return paginate(
        session, db_schema.Department, page_request, filters, mapper=_to_department
    )


def update_department(
    session: Session, department_id: int, name: Optional[str] = None
) -> Optional[Department]:
    model = update_model(
        session,
        db_schema.Department,
        department_id,
        _present(name=name.strip() if name is not None else None),
    )
    return _to_department(model) if model else None


def delete_department(session: Session, department_id: int) -> bool:
    return delete_model(session, db_schema.Department, department_id)


def create_impact_area(session: Session, name: str) -> ImpactArea:
    model = add_model(session, db_schema.ImpactArea(name=name.strip()))
    return _to_impact_area(model)


def get_impact_area_by_id(session: Session, impact_area_id: int) -> Optional[ImpactArea]:
    model = get_model(session, db_schema.ImpactArea, impact_area_id)
    return _to_impact_area(model) if model else None


def list_impact_areas(
    session: Session, page_request: PageRequest, filters: Optional[Filters] = None
) -> Page[ImpactArea]:
    return paginate(
        session, db_schema.ImpactArea, page_request, filters, mapper=_to_impact_area
    )


def update_impact_area(
    session: Session, impact_area_id: int, name: Optional[str] = None
) -> Optional[ImpactArea]:
    model = update_model(
        session,
        db_schema.ImpactArea,
        impact_area_id,
        _present(name=name.strip() if name is not None else None),
    )
    return _to_impact_area(model) if model else None


def delete_impact_area(session: Session, impact_area_id: int) -> bool:
    return delete_model(session, db_schema.ImpactArea, impact_area_id)


def create_position(session: Session, name: str, *, commit: bool = True) -> Position:
    model = add_model(session, db_schema.Position(name=name.strip()), commit=commit)
    return _to_position(model)


def get_position_by_id(session: Session, position_id: int) -> Optional[Position]:
    model = get_model(session, db_schema.Position, position_id)
    return _to_position(model) if model else None


def get_position_by_name(session: Session, name: str) -> Optional[Position]:
    model = get_model_by_name(session, db_schema.Position, name)
    return _to_position(model) if model else None


def list_positions(
    session: Session, page_request: PageRequest, filters: Optional[Filters] = None
) -> Page[Position]:
    return paginate(session, db_schema.Position, page_request, filters, mapper=_to_position)


def update_position(
    session: Session, position_id: int, name: Optional[str] = None
) -> Optional[Position]:
    model = update_model(
        session,
        db_schema.Position,
        position_id,
        _present(name=name.strip() if name is not None else None),
    )
    return _to_position(model) if model else None


def delete_position(session: Session, position_id: int) -> bool:
    return delete_model(session, db_schema.Position, position_id)


def create_district(
    session: Session, name: str, region: str, *, commit: bool = True
) -> District:
    model = add_model(
        session,
        db_schema.District(name=name.strip(), region=region.strip()),
        commit=commit,
    )
    return _to_district(model)


def get_district_by_id(session: Session, district_id: int) -> Optional[District]:
    model = get_model(session, db_schema.District, district_id)
    return _to_district(model) if model else None


def get_district_by_name(session: Session, name: str) -> Optional[District]:
    model = get_model_by_name(session, db_schema.District, name)
    return _to_district(model) if model else None


def list_districts(
    session: Session, page_request: PageRequest, filters: Optional[Filters] = None
) -> Page[District]:
    return paginate(session, db_schema.District, page_request, filters, mapper=_to_district)


def update_district(
    session: Session,
    district_id: int,
    name: Optional[str] = None,
    region: Optional[str] = None,
) -> Optional[District]:
    model = update_model(
        session,
        db_schema.District,
        district_id,
        _present(
            name=name.strip() if name is not None else None,
            region=region.strip() if region is not None else None,
        ),
    )
    return _to_district(model) if model else None


def delete_district(session: Session, district_id: int) -> bool:
    return delete_model(session, db_schema.District, district_id)
