from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from app import schema as db_schema
from app.models import User, UserRole
from app.query import Filters, Page, PageRequest, paginate

from ._db import add_model, get_model, update_model, write_session_scope
from .mappers import _to_user


def create_user(
    session: Session,
    name: str,
    email: str,
    hashed_password: str,
    role: UserRole = UserRole.USER,
    is_active: bool = True,
) -> User:
    model = add_model(
        session,
        db_schema.User(
            name=name,
            email=email.strip(),
            hashed_password=hashed_password,
            role=role.value,
            is_active=1 if is_active else 0,
        ),
    )
    return _to_user(model)


def count_users(session: Session) -> int:
    total = session.scalar(select(func.count()).select_from(db_schema.User))
    return int(total or 0)


def get_user_by_email(session: Session, email: str) -> Optional[User]:
    model = session.scalars(
        select(db_schema.User).where(
            func.lower(db_schema.User.email) == func.lower(email.strip())
        )
    ).first()
    return _to_user(model) if model else None


def get_user_by_id(session: Session, user_id: int) -> Optional[User]:
    model = get_model(session, db_schema.User, user_id)
    return _to_user(model) if model else None


def list_users(
    session: Session, page_request: PageRequest, filters: Optional[Filters] = None
) -> Page[User]:
    return paginate(session, db_schema.User, page_request, filters, mapper=_to_user)


def update_user(
    session: Session,
    user_id: int,
    *,
    name: Optional[str] = None,
    email: Optional[str] = None,
    hashed_password: Optional[str] = None,
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
) -> Optional[User]:
    values: dict[str, object] = {}
    if name is not None:
        values["name"] = name
    if email is not None:
        values["email"] = email.strip()
    if hashed_password is not None:
        values["hashed_password"] = hashed_password
    if role is not None:
        values["role"] = role.value
    if is_active is not None:
        values["is_active"] = 1 if is_active else 0
    model = update_model(session, db_schema.User, user_id, values)
    return _to_user(model) if model else None


def update_user_password(
    session: Session, user_id: int, hashed_password: str
) -> Optional[User]:
    return update_user(session, user_id, hashed_password=hashed_password)


def delete_user(session: Session, user_id: int) -> bool:
    with write_session_scope(session):
        session.execute(
            delete(db_schema.Session).where(db_schema.Session.user_id == user_id)
        )
        result = session.execute(
            delete(db_schema.User).where(db_schema.User.id == user_id)
        )
        session.commit()
    return bool(result.rowcount)


def count_active_admins(session: Session) -> int:
    total = session.scalar(
        select(func.count())
        .select_from(db_schema.User)
        .where(
            db_schema.User.role == UserRole.ADMIN.value,
            db_schema.User.is_active == 1,
        )
    )
    return int(total or 0)
