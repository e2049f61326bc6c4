from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from app import repository
from app.dependencies import get_session
from app.query import FilterConfig
from app.repository import RatingTarget

from .dependencies import require_admin
from .schemas import (
    InstitutionRatingCreate,
    NomineeRatingCreate,
    RatingCategoryCreate,
    RatingCategoryUpdate,
    RatingUpdate,
)
from .utils import (
    conflict_on_integrity_error,
    filters_from,
    not_found,
    page_request_from,
    rating_category_payload,
    rating_payload,
)

router = APIRouter()

CATEGORY_FILTERS = FilterConfig(
    search_fields=("name", "keyword", "description"),
    exact_fields={"keyword": str},
    range_fields=("created_at", "updated_at"),
)
NOMINEE_RATING_FILTERS = FilterConfig(
    search_fields=("evidence",),
    exact_fields={"nominee_id": int, "rating_category_id": int, "severity": str},
    range_fields=("created_at", "updated_at"),
)
INSTITUTION_RATING_FILTERS = FilterConfig(
    search_fields=("evidence",),
    exact_fields={"institution_id": int, "rating_category_id": int, "severity": str},
    range_fields=("created_at", "updated_at"),
)

_CATEGORY_IN_USE = "Rating category is referenced by ratings."
_BAD_RATING_REFERENCE = "Rated record or rating category does not exist."


def _list_categories(request: Request, session: Session, target: RatingTarget) -> dict:
    page = repository.list_rating_categories(
        session,
        target,
        page_request_from(request),
        filters_from(request, CATEGORY_FILTERS),
    )
    return page.to_payload(rating_category_payload)


def _get_category(session: Session, target: RatingTarget, category_id: int) -> dict:
    category = repository.get_rating_category_by_id(session, target, category_id)
    if category is None:
        raise not_found("Rating category")
    return rating_category_payload(category)


def _create_category(
    session: Session, target: RatingTarget, payload: RatingCategoryCreate
) -> dict:
    with conflict_on_integrity_error("Rating category could not be created."):
        category = repository.create_rating_category(
            session,
            target,
            name=payload.name,
            keyword=payload.keyword,
            icon=payload.icon,
            description=payload.description,
            weight=payload.weight,
        )
    return rating_category_payload(category)


def _update_category(
    session: Session,
    target: RatingTarget,
    category_id: int,
    payload: RatingCategoryUpdate,
) -> dict:
    category = repository.update_rating_category(
        session, target, category_id, payload.model_dump(exclude_none=True)
    )
    if category is None:
        raise not_found("Rating category")
    return rating_category_payload(category)


def _delete_category(session: Session, target: RatingTarget, category_id: int) -> Response:
    with conflict_on_integrity_error(_CATEGORY_IN_USE):
        deleted = repository.delete_rating_category(session, target, category_id)
    if not deleted:
        raise not_found("Rating category")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/rating-categories")
def list_rating_categories(request: Request, session: Session = Depends(get_session)):
    return _list_categories(request, session, RatingTarget.NOMINEE)


@router.get("/rating-categories/{category_id}")
def get_rating_category(category_id: int, session: Session = Depends(get_session)):
    return _get_category(session, RatingTarget.NOMINEE, category_id)


@router.post("/rating-categories", status_code=status.HTTP_201_CREATED)
def create_rating_category(
    payload: RatingCategoryCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    return _create_category(session, RatingTarget.NOMINEE, payload)


@router.patch("/rating-categories/{category_id}")
def update_rating_category(
    category_id: int,
    payload: RatingCategoryUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    return _update_category(session, RatingTarget.NOMINEE, category_id, payload)


@router.delete("/rating-categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_rating_category(
    category_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    return _delete_category(session, RatingTarget.NOMINEE, category_id)


@router.get("/institution-rating-categories")
def list_institution_rating_categories(
    request: Request, session: Session = Depends(get_session)
):
    return _list_categories(request, session, RatingTarget.INSTITUTION)


@router.get("/institution-rating-categories/{category_id}")
def get_institution_rating_category(
    category_id: int, session: Session = Depends(get_session)
):
    return _get_category(session, RatingTarget.INSTITUTION, category_id)


@router.post("/institution-rating-categories", status_code=status.HTTP_201_CREATED)
def create_institution_rating_category(
    payload: RatingCategoryCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    return _create_category(session, RatingTarget.INSTITUTION, payload)


@router.patch("/institution-rating-categories/{category_id}")
def update_institution_rating_category(
    category_id: int,
    payload: RatingCategoryUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    return _update_category(session, RatingTarget.INSTITUTION, category_id, payload)


@router.delete(
    "/institution-rating-categories/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_institution_rating_category(
    category_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    return _delete_category(session, RatingTarget.INSTITUTION, category_id)


def _get_rating(session: Session, target: RatingTarget, rating_id: int) -> dict:
    rating = repository.get_rating_by_id(session, target, rating_id)
    if rating is None:
        raise not_found("Rating")
    return rating_payload(rating)


def _update_rating(
    session: Session, target: RatingTarget, rating_id: int, payload: RatingUpdate
) -> dict:
    with conflict_on_integrity_error(_BAD_RATING_REFERENCE):
        updated = repository.update_rating(
            session, target, rating_id, payload.model_dump(exclude_none=True)
        )
    if updated is None:
        raise not_found("Rating")
    return _get_rating(session, target, rating_id)


def _delete_rating(session: Session, target: RatingTarget, rating_id: int) -> Response:
    if not repository.delete_rating(session, target, rating_id):
        raise not_found("Rating")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/nominee-ratings")
def list_nominee_ratings(request: Request, session: Session = Depends(get_session)):
    page = repository.list_ratings(
        session,
        RatingTarget.NOMINEE,
        page_request_from(request),
        filters_from(request, NOMINEE_RATING_FILTERS),
    )
    return page.to_payload(rating_payload)


@router.get("/nominee-ratings/{rating_id}")
def get_nominee_rating(rating_id: int, session: Session = Depends(get_session)):
    return _get_rating(session, RatingTarget.NOMINEE, rating_id)


@router.post("/nominee-ratings", status_code=status.HTTP_201_CREATED)
def create_nominee_rating(
    payload: NomineeRatingCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error(_BAD_RATING_REFERENCE):
        rating = repository.create_rating(
            session,
            RatingTarget.NOMINEE,
            subject_id=payload.nominee_id,
            rating_category_id=payload.rating_category_id,
            score=payload.score,
            evidence=payload.evidence,
            severity=payload.severity,
        )
    return _get_rating(session, RatingTarget.NOMINEE, rating.id)


@router.patch("/nominee-ratings/{rating_id}")
def update_nominee_rating(
    rating_id: int,
    payload: RatingUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    return _update_rating(session, RatingTarget.NOMINEE, rating_id, payload)


@router.delete("/nominee-ratings/{rating_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_nominee_rating(
    rating_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    return _delete_rating(session, RatingTarget.NOMINEE, rating_id)


@router.get("/institution-ratings")
def list_institution_ratings(request: Request, session: Session = Depends(get_session)):
    page = repository.list_ratings(
        session,
        RatingTarget.INSTITUTION,
        page_request_from(request),
        filters_from(request, INSTITUTION_RATING_FILTERS),
    )
    return page.to_payload(rating_payload)


@router.get("/institution-ratings/{rating_id}")
def get_institution_rating(rating_id: int, session: Session = Depends(get_session)):
    return _get_rating(session, RatingTarget.INSTITUTION, rating_id)


@router.post("/institution-ratings", status_code=status.HTTP_201_CREATED)
def create_institution_rating(
    payload: InstitutionRatingCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    with conflict_on_integrity_error(_BAD_RATING_REFERENCE):
        rating = repository.create_rating(
            session,
            RatingTarget.INSTITUTION,
            subject_id=payload.institution_id,
            rating_category_id=payload.rating_category_id,
            score=payload.score,
            evidence=payload.evidence,
            severity=payload.severity,
        )
    return _get_rating(session, RatingTarget.INSTITUTION, rating.id)


@router.patch("/institution-ratings/{rating_id}")
def update_institution_rating(
    rating_id: int,
    payload: RatingUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    return _update_rating(session, RatingTarget.INSTITUTION, rating_id, payload)


@router.delete("/institution-ratings/{rating_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_institution_rating(
    rating_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    return _delete_rating(session, RatingTarget.INSTITUTION, rating_id)
