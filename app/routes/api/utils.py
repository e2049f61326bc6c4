from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import HTTPException, Request, status

from app.environment import get_default_page_size
from app.imports.models import CsvTemplate, ImportResult, RowFailure
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
    ScoreSummary,
    User,
)
from app.query import FilterConfig, Filters, PageRequest, build_filters


def page_request_from(request: Request) -> PageRequest:
    return PageRequest.from_params(request.query_params, get_default_page_size())


def filters_from(request: Request, config: FilterConfig) -> Filters:
    return build_filters(request.query_params, config)


def not_found(entity: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} not found.")


@contextmanager
def conflict_on_integrity_error(detail: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.IntegrityError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail) from exc


def _timestamps(record) -> dict[str, str]:
    return {"created_at": record.created_at, "updated_at": record.updated_at}


def named_payload(record: Department | ImpactArea | Position) -> dict:
    return {"id": record.id, "name": record.name, **_timestamps(record)}


def district_payload(district: District) -> dict:
    return {
        "id": district.id,
        "name": district.name,
        "region": district.region,
        **_timestamps(district),
    }


def rating_category_payload(category: RatingCategory) -> dict:
    return {
        "id": category.id,
        "name": category.name,
        "keyword": category.keyword,
        "icon": category.icon,
        "description": category.description,
        "weight": category.weight,
        **_timestamps(category),
    }


def rating_payload(rating: Rating) -> dict:
    payload = {
        "id": rating.id,
        "score": rating.score,
        "evidence": rating.evidence,
        "severity": rating.severity,
        "rating_category_id": rating.rating_category_id,
        **_timestamps(rating),
    }
    if rating.nominee_id is not None:
        payload["nominee_id"] = rating.nominee_id
    if rating.institution_id is not None:
        payload["institution_id"] = rating.institution_id
    if rating.category is not None:
        payload["category"] = rating_category_payload(rating.category)
    return payload


def score_payload(score: ScoreSummary) -> dict:
    return {"average": score.average, "count": score.count}


def institution_payload(
    institution: Institution, score: Optional[ScoreSummary] = None
) -> dict:
    payload = {
        "id": institution.id,
        "name": institution.name,
        "status": institution.status,
        "image": institution.image,
        **_timestamps(institution),
    }
    if institution.ratings is not None:
        payload["ratings"] = [rating_payload(rating) for rating in institution.ratings]
    if score is not None:
        payload["score"] = score_payload(score)
    return payload


def nominee_payload(nominee: Nominee, score: Optional[ScoreSummary] = None) -> dict:
    payload = {
        "id": nominee.id,
        "name": nominee.name,
        "position_id": nominee.position_id,
        "institution_id": nominee.institution_id,
        "district_id": nominee.district_id,
        "status": nominee.status,
        "evidence": nominee.evidence,
        "image": nominee.image,
        **_timestamps(nominee),
    }
    if nominee.position is not None:
        payload["position"] = named_payload(nominee.position)
    if nominee.institution is not None:
        payload["institution"] = institution_payload(nominee.institution)
    if nominee.district is not None:
        payload["district"] = district_payload(nominee.district)
    if nominee.ratings is not None:
        payload["ratings"] = [rating_payload(rating) for rating in nominee.ratings]
    if score is not None:
        payload["score"] = score_payload(score)
    return payload


def comment_payload(comment: Comment) -> dict:
    return {
        "id": comment.id,
        "content": comment.content,
        "user_id": comment.user_id,
        "author_name": comment.author_name,
        "nominee_id": comment.nominee_id,
        "institution_id": comment.institution_id,
        **_timestamps(comment),
    }


def user_payload(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "is_active": user.is_active,
        **_timestamps(user),
    }


def template_payload(template: CsvTemplate) -> dict:
    return {
        "template": {
            "headers": list(template.headers),
            "required": list(template.required),
            "optional": list(template.optional),
            "example": dict(template.example),
        }
    }


def import_result_payload(result: ImportResult) -> dict:
    summary = result.summary
    results = []
    for outcome in result.outcomes:
        if isinstance(outcome, RowFailure):
            results.append(
                {
                    "line": outcome.line,
                    "success": False,
                    "name": outcome.name,
                    "error": outcome.reason,
                }
            )
            continue
        entry = {"line": outcome.line, "success": True, "name": outcome.name}
        if outcome.created_ids:
            entry["createdEntityIds"] = dict(outcome.created_ids)
        results.append(entry)
    return {
        "message": (
            f"Processed {summary.total} {result.entity}: "
            f"{summary.successful} successful, {summary.failed} failed."
        ),
        "summary": {
            "total": summary.total,
            "successful": summary.successful,
            "failed": summary.failed,
            "details": {
                entity: tally.__dict__.copy() for entity, tally in summary.details.items()
            },
        },
        "results": results,
        "errors": result.errors,
    }
