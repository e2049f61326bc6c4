from __future__ import annotations

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app import schema as db_schema

from ._db import add_model, write_session_scope


def create_session(session: Session, token: str, user_id: int) -> None:
    add_model(session, db_schema.Session(token=token, user_id=user_id))


def get_session_user_id(session: Session, token: str) -> Optional[int]:
    try:
        user_id = session.scalar(
            select(db_schema.Session.user_id).where(db_schema.Session.token == token)
        )
    except OperationalError:
        return None
    if user_id is None:
        return None
    return int(user_id)


def delete_session(session: Session, token: str) -> bool:
    with write_session_scope(session):
        result = session.execute(
            delete(db_schema.Session).where(db_schema.Session.token == token)
        )
        session.commit()
    return bool(result.rowcount)
