from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app import repository
from app.dependencies import get_session
from app.models import Comment, User
from app.query import FilterConfig

from .dependencies import get_current_user
from .schemas import CommentCreate, CommentUpdate
from .utils import (
    comment_payload,
    conflict_on_integrity_error,
    filters_from,
    not_found,
    page_request_from,
)

router = APIRouter()

COMMENT_FILTERS = FilterConfig(
    search_fields=("content",),
    exact_fields={"nominee_id": int, "institution_id": int, "user_id": int},
    range_fields=("created_at", "updated_at"),
)


def _load_editable_comment(session: Session, comment_id: int, user: User) -> Comment:
    comment = repository.get_comment_by_id(session, comment_id)
    if comment is None:
        raise not_found("Comment")
    if comment.user_id != user.id and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the author or an admin can change this comment.",
        )
    return comment


@router.get("/comments")
def list_comments(request: Request, session: Session = Depends(get_session)):
    page = repository.list_comments(
        session, page_request_from(request), filters_from(request, COMMENT_FILTERS)
    )
    return page.to_payload(comment_payload)


@router.get("/comments/{comment_id}")
def get_comment(comment_id: int, session: Session = Depends(get_session)):
    comment = repository.get_comment_by_id(session, comment_id)
    if comment is None:
        raise not_found("Comment")
    return comment_payload(comment)


@router.post("/comments", status_code=status.HTTP_201_CREATED)
def create_comment(
    payload: CommentCreate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    with conflict_on_integrity_error("Commented record does not exist."):
        comment = repository.create_comment(
            session,
            content=payload.content,
            user_id=user.id,
            nominee_id=payload.nominee_id,
            institution_id=payload.institution_id,
        )
    return comment_payload(repository.get_comment_by_id(session, comment.id))


@router.patch("/comments/{comment_id}")
def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
):
    _load_editable_comment(session, comment_id, user)
    repository.update_comment(session, comment_id, payload.content)
    return comment_payload(repository.get_comment_by_id(session, comment_id))


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    session: Session = Depends(get_session),
    user: User = Depends(get_current_user),
) -> Response:
    _load_editable_comment(session, comment_id, user)
    repository.delete_comment(session, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
