from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app import auth, repository
from app.dependencies import get_session
from app.models import User, UserRole
from app.query import FilterConfig

from .dependencies import require_admin
from .schemas import UserCreate, UserUpdate
from .utils import (
    conflict_on_integrity_error,
    filters_from,
    not_found,
    page_request_from,
    user_payload,
)

router = APIRouter()

USER_FILTERS = FilterConfig(
    search_fields=("name", "email"),
    exact_fields={"role": str, "is_active": bool},
    range_fields=("created_at", "updated_at"),
)

_EMAIL_TAKEN = "Email is already registered."


def _ensure_admin_remains(session: Session, target: User) -> None:
    if target.is_admin and target.is_active and repository.count_active_admins(session) <= 1:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="At least one active admin is required.",
        )


@router.get("/users")
def list_users(
    request: Request,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    page = repository.list_users(
        session, page_request_from(request), filters_from(request, USER_FILTERS)
    )
    return page.to_payload(user_payload)


@router.get("/users/{user_id}")
def get_user(
    user_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    user = repository.get_user_by_id(session, user_id)
    if user is None:
        raise not_found("User")
    return user_payload(user)


@router.post("/users", status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    if repository.get_user_by_email(session, payload.email) is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=_EMAIL_TAKEN)
    with conflict_on_integrity_error(_EMAIL_TAKEN):
        user = repository.create_user(
            session,
            name=payload.name,
            email=payload.email,
            hashed_password=auth.hash_password(payload.password),
            role=payload.role,
            is_active=payload.is_active,
        )
    return user_payload(user)


@router.patch("/users/{user_id}")
def update_user(
    user_id: int,
    payload: UserUpdate,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    existing = repository.get_user_by_id(session, user_id)
    if existing is None:
        raise not_found("User")
    demoted = payload.role is not None and payload.role != UserRole.ADMIN
    if demoted or payload.is_active is False:
        _ensure_admin_remains(session, existing)
    with conflict_on_integrity_error(_EMAIL_TAKEN):
        user = repository.update_user(
            session,
            user_id,
            name=payload.name,
            email=payload.email,
            hashed_password=(
                auth.hash_password(payload.password) if payload.password else None
            ),
            role=payload.role,
            is_active=payload.is_active,
        )
    if user is None:
        raise not_found("User")
    return user_payload(user)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
) -> Response:
    existing = repository.get_user_by_id(session, user_id)
    if existing is None:
        raise not_found("User")
    _ensure_admin_remains(session, existing)
    with conflict_on_integrity_error("User has comments and cannot be deleted."):
        repository.delete_user(session, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
