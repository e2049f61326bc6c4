from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app import repository
from app.dependencies import get_session
from app.query import FilterConfig
from app.repository import RatingTarget

from .dependencies import require_admin
from .schemas import InstitutionCreate, InstitutionUpdate
from .utils import (
    conflict_on_integrity_error,
    filters_from,
    institution_payload,
    not_found,
    page_request_from,
)

router = APIRouter()

INSTITUTION_FILTERS = FilterConfig(
    search_fields=("name",),
    exact_fields={"status": bool},
    range_fields=("created_at", "updated_at"),
)


@router.get("/institutions")
def list_institutions(request: Request, session: Session = Depends(get_session)):
    page = repository.list_institutions(
        session, page_request_from(request), filters_from(request, INSTITUTION_FILTERS)
    )
    return page.to_payload(institution_payload)


@router.get("/institutions/{institution_id}")
def get_institution(institution_id: int, session: Session = Depends(get_session)):
    institution = repository.get_institution_by_id(
        session, institution_id, with_ratings=True
    )
    if institution is None:
        raise not_found("Institution")
    score = repository.get_score_summary(session, RatingTarget.INSTITUTION, institution_id)
    return institution_payload(institution, score)


@router.post("/institutions", status_code=status.HTTP_201_CREATED)
def create_institution(
    payload: InstitutionCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error("Institution name already exists."):
        institution = repository.create_institution(
            session,
            payload.name,
            status=payload.status,
            image=payload.image,
        )
    return institution_payload(institution)


@router.patch("/institutions/{institution_id}")
def update_institution(
    institution_id: int,
    payload: InstitutionUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error("Institution name already exists."):
        institution = repository.update_institution(
            session,
            institution_id,
            name=payload.name,
            status=payload.status,
            image=payload.image,
        )
    if institution is None:
        raise not_found("Institution")
    return institution_payload(institution)


@router.delete("/institutions/{institution_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_institution(
    institution_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    with conflict_on_integrity_error("Institution is referenced by other records."):
        deleted = repository.delete_institution(session, institution_id)
    if not deleted:
        raise not_found("Institution")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
