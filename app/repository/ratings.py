"""Rating categories, ratings and aggregate scores.

Nominees and institutions are rated against separate category tables; both
share the same shape, so every function takes a ``RatingTarget``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app import schema as db_schema
from app.models import Rating, RatingCategory, ScoreSummary
from app.query import Filters, Page, PageRequest, paginate

from ._db import add_model, delete_model, get_model, update_model
from .mappers import _to_rating, _to_rating_category


class RatingTarget(str, Enum):
    NOMINEE = "nominee"
    INSTITUTION = "institution"

    @property
    def category_model(self) -> type:
        if self is RatingTarget.NOMINEE:
            return db_schema.RatingCategory
        return db_schema.InstitutionRatingCategory

    @property
    def rating_model(self) -> type:
        if self is RatingTarget.NOMINEE:
            return db_schema.NomineeRating
        return db_schema.InstitutionRating

    @property
    def subject_column(self) -> str:
        return f"{self.value}_id"


def create_rating_category(
    session: Session,
    target: RatingTarget,
    name: str,
    keyword: str = "",
    icon: str = "",
    description: str = "",
    weight: float = 0,
) -> RatingCategory:
    model = add_model(
        session,
        target.category_model(
            name=name.strip(),
            keyword=keyword.strip(),
            icon=icon.strip(),
            description=description,
            weight=weight,
        ),
    )
    return _to_rating_category(model)


def get_rating_category_by_id(
    session: Session, target: RatingTarget, category_id: int
) -> Optional[RatingCategory]:
    model = get_model(session, target.category_model, category_id)
    return _to_rating_category(model) if model else None


def list_rating_categories(
    session: Session,
    target: RatingTarget,
    page_request: PageRequest,
    filters: Optional[Filters] = None,
) -> Page[RatingCategory]:
    return paginate(
        session,
        target.category_model,
        page_request,
        filters,
        mapper=_to_rating_category,
    )


def update_rating_category(
    session: Session,
    target: RatingTarget,
    category_id: int,
    values: dict[str, Any],
) -> Optional[RatingCategory]:
    model = update_model(session, target.category_model, category_id, values)
    return _to_rating_category(model) if model else None


def delete_rating_category(
    session: Session, target: RatingTarget, category_id: int
) -> bool:
    return delete_model(session, target.category_model, category_id)


def create_rating(
    session: Session,
    target: RatingTarget,
    subject_id: int,
    rating_category_id: int,
    score: float,
    evidence: Optional[str] = None,
    severity: Optional[str] = None,
) -> Rating:
    model = add_model(
        session,
        target.rating_model(
            **{target.subject_column: subject_id},
            rating_category_id=rating_category_id,
            score=score,
            evidence=evidence,
            severity=severity,
        ),
    )
    return _to_rating(model)


def get_rating_by_id(
    session: Session, target: RatingTarget, rating_id: int
) -> Optional[Rating]:
    model = get_model(session, target.rating_model, rating_id, include=("category",))
    return _to_rating(model) if model else None


def list_ratings(
    session: Session,
    target: RatingTarget,
    page_request: PageRequest,
    filters: Optional[Filters] = None,
) -> Page[Rating]:
    return paginate(
        session,
        target.rating_model,
        page_request,
        filters,
        include=("category",),
        mapper=_to_rating,
    )


def update_rating(
    session: Session, target: RatingTarget, rating_id: int, values: dict[str, Any]
) -> Optional[Rating]:
    model = update_model(session, target.rating_model, rating_id, values)
    return _to_rating(model) if model else None


def delete_rating(session: Session, target: RatingTarget, rating_id: int) -> bool:
    return delete_model(session, target.rating_model, rating_id)


def get_score_summary(
    session: Session, target: RatingTarget, subject_id: int
) -> ScoreSummary:
    # Unweighted mean: category weights are intentionally not applied.
    rating_model = target.rating_model
    average, count = session.execute(
        select(func.avg(rating_model.score), func.count(rating_model.id)).where(
            getattr(rating_model, target.subject_column) == subject_id
        )
    ).one()
    return ScoreSummary(
        average=float(average) if average is not None else None,
        count=int(count or 0),
    )
