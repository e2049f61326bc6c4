from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app import repository
from app.dependencies import get_session
from app.query import FilterConfig
from app.repository import RatingTarget

from .dependencies import require_admin
from .schemas import NomineeCreate, NomineeUpdate
from .utils import (
    conflict_on_integrity_error,
    filters_from,
    nominee_payload,
    not_found,
    page_request_from,
)

router = APIRouter()

NOMINEE_FILTERS = FilterConfig(
    search_fields=("name", "evidence"),
    exact_fields={
        "position_id": int,
        "institution_id": int,
        "district_id": int,
        "status": bool,
    },
    range_fields=("created_at", "updated_at"),
)

_BAD_REFERENCE = "Position, institution or district does not exist."


@router.get("/nominees")
def list_nominees(request: Request, session: Session = Depends(get_session)):
    page = repository.list_nominees(
        session, page_request_from(request), filters_from(request, NOMINEE_FILTERS)
    )
    return page.to_payload(nominee_payload)


@router.get("/nominees/{nominee_id}")
def get_nominee(nominee_id: int, session: Session = Depends(get_session)):
    nominee = repository.get_nominee_by_id(session, nominee_id, with_relations=True)
    if nominee is None:
        raise not_found("Nominee")
    score = repository.get_score_summary(session, RatingTarget.NOMINEE, nominee_id)
    return nominee_payload(nominee, score)


@router.post("/nominees", status_code=status.HTTP_201_CREATED)
def create_nominee(
    payload: NomineeCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error(_BAD_REFERENCE):
        nominee = repository.create_nominee(
            session,
            name=payload.name,
            position_id=payload.position_id,
            institution_id=payload.institution_id,
            district_id=payload.district_id,
            status=payload.status,
            evidence=payload.evidence,
            image=payload.image,
        )
    return nominee_payload(nominee)


@router.patch("/nominees/{nominee_id}")
def update_nominee(
    nominee_id: int,
    payload: NomineeUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error(_BAD_REFERENCE):
        nominee = repository.update_nominee(
            session,
            nominee_id,
            name=payload.name,
            position_id=payload.position_id,
            institution_id=payload.institution_id,
            district_id=payload.district_id,
            status=payload.status,
            evidence=payload.evidence,
            image=payload.image,
        )
    if nominee is None:
        raise not_found("Nominee")
    return nominee_payload(nominee)


@router.delete("/nominees/{nominee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_nominee(
    nominee_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    with conflict_on_integrity_error("Nominee is referenced by other records."):
        deleted = repository.delete_nominee(session, nominee_id)
    if not deleted:
        raise not_found("Nominee")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
