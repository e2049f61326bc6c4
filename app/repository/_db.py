from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.query import load_options
from app.schema import casefold_name

ModelT = TypeVar("ModelT")


@contextmanager
def write_session_scope(session: Session) -> Iterator[Session]:
    try:
        yield session
    except IntegrityError as exc:
        session.rollback()
        reraise_as_sqlite_integrity_error(exc)
    except Exception:
        session.rollback()
        raise


def reraise_as_sqlite_integrity_error(exc: IntegrityError) -> None:
    detail = str(exc.orig) if exc.orig else str(exc)
    raise sqlite3.IntegrityError(detail) from exc


def get_model(
    session: Session,
    model_cls: type[ModelT],
    record_id: int,
    include: Sequence[str] = (),
) -> Optional[ModelT]:
    statement = select(model_cls).where(model_cls.id == record_id)
    if include:
        # Rows already in the identity map keep their unloaded relations
        # unless they are repopulated.
        statement = statement.options(*load_options(model_cls, include)).execution_options(
            populate_existing=True
        )
    return session.scalars(statement).first()


def get_model_by_name(
    session: Session, model_cls: type[ModelT], name: str
) -> Optional[ModelT]:
    return session.scalars(
        select(model_cls)
        .where(model_cls.name_key == casefold_name(name))
        .order_by(model_cls.id)
    ).first()


def add_model(session: Session, model: ModelT, *, commit: bool = True) -> ModelT:
    with write_session_scope(session):
        session.add(model)
        if commit:
            session.commit()
        else:
            session.flush()
    session.refresh(model)
    return model


def update_model(
    session: Session,
    model_cls: type[ModelT],
    record_id: int,
    values: Mapping[str, Any],
) -> Optional[ModelT]:
    with write_session_scope(session):
        model = session.get(model_cls, record_id)
        if model is None:
            return None
        for name, value in values.items():
            setattr(model, name, value)
        session.commit()
    session.refresh(model)
    return model


def delete_model(session: Session, model_cls: type, record_id: int) -> bool:
    with write_session_scope(session):
        result = session.execute(delete(model_cls).where(model_cls.id == record_id))
        session.commit()
    return bool(result.rowcount)
