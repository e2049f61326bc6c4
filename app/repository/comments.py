from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app import schema as db_schema
from app.models import Comment
from app.query import Filters, Page, PageRequest, paginate

from ._db import add_model, delete_model, get_model, update_model
from .mappers import _to_comment


def create_comment(
    session: Session,
    content: str,
    user_id: int,
    nominee_id: Optional[int] = None,
    institution_id: Optional[int] = None,
) -> Comment:
    model = add_model(
        session,
        db_schema.Comment(
            content=content,
            user_id=user_id,
            nominee_id=nominee_id,
            institution_id=institution_id,
        ),
    )
    return _to_comment(model)


def get_comment_by_id(session: Session, comment_id: int) -> Optional[Comment]:
    model = get_model(session, db_schema.Comment, comment_id, include=("user",))
    return _to_comment(model) if model else None


def list_comments(
    session: Session, page_request: PageRequest, filters: Optional[Filters] = None
) -> Page[Comment]:
    return paginate(
        session,
        db_schema.Comment,
        page_request,
        filters,
        include=("user",),
        mapper=_to_comment,
    )


def update_comment(session: Session, comment_id: int, content: str) -> Optional[Comment]:
    model = update_model(session, db_schema.Comment, comment_id, {"content": content})
    return _to_comment(model) if model else None


def delete_comment(session: Session, comment_id: int) -> bool:
    return delete_model(session, db_schema.Comment, comment_id)
