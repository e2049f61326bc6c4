from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app import repository
from app.dependencies import get_session
from app.query import FilterConfig

from .dependencies import require_admin
from .schemas import DistrictCreate, DistrictUpdate, NamedCreate, NamedUpdate
from .utils import (
    conflict_on_integrity_error,
    district_payload,
    filters_from,
    named_payload,
    not_found,
    page_request_from,
)

router = APIRouter()

NAMED_FILTERS = FilterConfig(
    search_fields=("name",),
    range_fields=("created_at", "updated_at"),
)
DISTRICT_FILTERS = FilterConfig(
    search_fields=("name", "region"),
    exact_fields={"region": str},
    range_fields=("created_at", "updated_at"),
)

_IN_USE = "Record is referenced by other records."


@router.get("/departments")
def list_departments(request: Request, session: Session = Depends(get_session)):
    page = repository.list_departments(
        session, page_request_from(request), filters_from(request, NAMED_FILTERS)
    )
    return page.to_payload(named_payload)


@router.get("/departments/{department_id}")
def get_department(department_id: int, session: Session = Depends(get_session)):
    department = repository.get_department_by_id(session, department_id)
    if department is None:
        raise not_found("Department")
    return named_payload(department)


@router.post("/departments", status_code=status.HTTP_201_CREATED)
def create_department(
    payload: NamedCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error("Department name already exists."):
        department = repository.create_department(session, payload.name)
    return named_payload(department)


@router.patch("/departments/{department_id}")
def update_department(
    department_id: int,
    payload: NamedUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error("Department name already exists."):
        department = repository.update_department(session, department_id, name=payload.name)
    if department is None:
        raise not_found("Department")
    return named_payload(department)


@router.delete("/departments/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_department(
    department_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    with conflict_on_integrity_error(_IN_USE):
        deleted = repository.delete_department(session, department_id)
    if not deleted:
        raise not_found("Department")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/impact-areas")
def list_impact_areas(request: Request, session: Session = Depends(get_session)):
    page = repository.list_impact_areas(
        session, page_request_from(request), filters_from(request, NAMED_FILTERS)
    )
    return page.to_payload(named_payload)


@router.get("/impact-areas/{impact_area_id}")
def get_impact_area(impact_area_id: int, session: Session = Depends(get_session)):
    impact_area = repository.get_impact_area_by_id(session, impact_area_id)
    if impact_area is None:
        raise not_found("Impact area")
    return named_payload(impact_area)


@router.post("/impact-areas", status_code=status.HTTP_201_CREATED)
def create_impact_area(
    payload: NamedCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error("Impact area name already exists."):
        impact_area = repository.create_impact_area(session, payload.name)
    return named_payload(impact_area)


@router.patch("/impact-areas/{impact_area_id}")
def update_impact_area(
    impact_area_id: int,
    payload: NamedUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error("Impact area name already exists."):
        impact_area = repository.update_impact_area(
            session, impact_area_id, name=payload.name
        )
    if impact_area is None:
        raise not_found("Impact area")
    return named_payload(impact_area)


@router.delete("/impact-areas/{impact_area_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_impact_area(
    impact_area_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    with conflict_on_integrity_error(_IN_USE):
        deleted = repository.delete_impact_area(session, impact_area_id)
    if not deleted:
        raise not_found("Impact area")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/positions")
def list_positions(request: Request, session: Session = Depends(get_session)):
    page = repository.list_positions(
        session, page_request_from(request), filters_from(request, NAMED_FILTERS)
    )
    return page.to_payload(named_payload)


@router.get("/positions/{position_id}")
def get_position(position_id: int, session: Session = Depends(get_session)):
    position = repository.get_position_by_id(session, position_id)
    if position is None:
        raise not_found("Position")
    return named_payload(position)


@router.post("/positions", status_code=status.HTTP_201_CREATED)
def create_position(
    payload: NamedCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error("Position name already exists."):
        position = repository.create_position(session, payload.name)
    return named_payload(position)


@router.patch("/positions/{position_id}")
def update_position(
    position_id: int,
    payload: NamedUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error("Position name already exists."):
        position = repository.update_position(session, position_id, name=payload.name)
    if position is None:
        raise not_found("Position")
    return named_payload(position)


@router.delete("/positions/{position_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_position(
    position_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    with conflict_on_integrity_error(_IN_USE):
        deleted = repository.delete_position(session, position_id)
    if not deleted:
        raise not_found("Position")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/districts")
def list_districts(request: Request, session: Session = Depends(get_session)):
    page = repository.list_districts(
        session, page_request_from(request), filters_from(request, DISTRICT_FILTERS)
    )
    return page.to_payload(district_payload)


@router.get("/districts/{district_id}")
def get_district(district_id: int, session: Session = Depends(get_session)):
    district = repository.get_district_by_id(session, district_id)
    if district is None:
        raise not_found("District")
    return district_payload(district)


@router.post("/districts", status_code=status.HTTP_201_CREATED)
def create_district(
    payload: DistrictCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error("District name already exists."):
        district = repository.create_district(session, payload.name, payload.region)
    return district_payload(district)


@router.patch("/districts/{district_id}")
def update_district(
    district_id: int,
    payload: DistrictUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error("District name already exists."):
        district = repository.update_district(
            session, district_id, name=payload.name, region=payload.region
        )
    if district is None:
        raise not_found("District")
    return district_payload(district)


@router.delete("/districts/{district_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_district(
    district_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    with conflict_on_integrity_error(_IN_USE):
        deleted = repository.delete_district(session, district_id)
    if not deleted:
        raise not_found("District")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
