from __future__ import annotations

from typing import Optional

from sqlalchemy import inspect

from app import schema as db_schema
from app.models import (
    Comment,
    Department,
    District,
    ImpactArea,
    Institution,
    Nominee,
    Position,
    Rating,
    RatingCategory,
    User,
    UserRole,
)


def _is_loaded(model: object, relation: str) -> bool:
    return relation not in inspect(model).unloaded


def _to_department(model: db_schema.Department) -> Department:
    return Department(
        id=int(model.id),
        name=str(model.name),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_impact_area(model: db_schema.ImpactArea) -> ImpactArea:
    return ImpactArea(
        id=int(model.id),
        name=str(model.name),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_position(model: db_schema.Position) -> Position:
    return Position(
        id=int(model.id),
        name=str(model.name),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_district(model: db_schema.District) -> District:
    return District(
        id=int(model.id),
        name=str(model.name),
        region=str(model.region),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_rating_category(
    model: db_schema.RatingCategory | db_schema.InstitutionRatingCategory,
) -> RatingCategory:
    return RatingCategory(
        id=int(model.id),
        name=str(model.name),
        keyword=model.keyword or "",
        icon=model.icon or "",
        description=model.description or "",
        weight=float(model.weight or 0),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _to_rating(
    model: db_schema.NomineeRating | db_schema.InstitutionRating,
) -> Rating:
    category: Optional[RatingCategory] = None
    if _is_loaded(model, "category") and model.category is not None:
        category = _to_rating_category(model.category)
    return Rating(
        id=int(model.id),
        score=float(model.score),
        evidence=model.evidence,
        severity=model.severity,
        rating_category_id=int(model.rating_category_id),
        created_at=model.created_at,
        updated_at=model.updated_at,
        nominee_id=getattr(model, "nominee_id", None),
        institution_id=getattr(model, "institution_id", None),
        category=category,
    )


def _to_institution(model: db_schema.Institution) -> Institution:
    ratings = None
    if _is_loaded(model, "ratings"):
        ratings = [_to_rating(rating) for rating in model.ratings]
    return Institution(
        id=int(model.id),
        name=str(model.name),
        status=bool(model.status),
        image=model.image,
        created_at=model.created_at,
        updated_at=model.updated_at,
        ratings=ratings,
    )


def _to_nominee(model: db_schema.Nominee) -> Nominee:
    nominee = Nominee(
        id=int(model.id),
        name=str(model.name),
        position_id=int(model.position_id),
        institution_id=int(model.institution_id),
        district_id=int(model.district_id),
        status=bool(model.status),
        evidence=model.evidence,
        image=model.image,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
    if _is_loaded(model, "position") and model.position is not None:
        nominee.position = _to_position(model.position)
    if _is_loaded(model, "institution") and model.institution is not None:
        nominee.institution = _to_institution(model.institution)
    if _is_loaded(model, "district") and model.district is not None:
        nominee.district = _to_district(model.district)
    if _is_loaded(model, "ratings"):
        nominee.ratings = [_to_rating(rating) for rating in model.ratings]
    return nominee


def _to_comment(model: db_schema.Comment) -> Comment:
    author_name = None
    if _is_loaded(model, "user") and model.user is not None:
        author_name = model.user.name
    return Comment(
        id=int(model.id),
        content=str(model.content),
        user_id=int(model.user_id),
        nominee_id=model.nominee_id,
        institution_id=model.institution_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
        author_name=author_name,
    )


def _to_user(model: db_schema.User) -> User:
    return User(
        id=int(model.id),
        name=str(model.name),
        email=str(model.email),
        hashed_password=str(model.hashed_password),
        role=UserRole(model.role),
        is_active=bool(model.is_active),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
