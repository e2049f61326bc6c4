from __future__ import annotations

import secrets
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from app import repository

_PWD_CONTEXT = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return _PWD_CONTEXT.hash(password)


def verify_and_update_password(
    password: str, hashed_password: str
) -> tuple[bool, Optional[str]]:
    try:
        verified, replacement_hash = _PWD_CONTEXT.verify_and_update(
            password,
            hashed_password,
        )
    except ValueError:
        return False, None
    return bool(verified), replacement_hash


def verify_password(password: str, hashed_password: str) -> bool:
    verified, _ = verify_and_update_password(password, hashed_password)
    return verified


def create_access_token(session: Session, user_id: int) -> str:
    token = secrets.token_urlsafe(32)
    repository.create_session(session, token=token, user_id=user_id)
    return token


def get_user_id_for_token(session: Session, token: str) -> Optional[int]:
    return repository.get_session_user_id(session, token)


def revoke_access_token(session: Session, token: str) -> bool:
    return repository.delete_session(session, token)
