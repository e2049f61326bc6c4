from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app import auth, repository
from app.dependencies import get_session
from app.models import User

from .dependencies import get_bearer_token, get_current_user
from .schemas import LoginRequest, RegisterRequest, TokenResponse
from .utils import conflict_on_integrity_error, user_payload

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, session: Session = Depends(get_session)) -> TokenResponse:
    if repository.get_user_by_email(session, request.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Email is already registered."
        )
    with conflict_on_integrity_error("Email is already registered."):
        user = repository.create_user(
            session,
            name=request.name,
            email=request.email,
            hashed_password=auth.hash_password(request.password),
        )
    token = auth.create_access_token(session, user.id)
    return TokenResponse(access_token=token)


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, session: Session = Depends(get_session)) -> TokenResponse:
    user = repository.get_user_by_email(session, request.email)
    if user is None or not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password."
        )
    verified, replacement_hash = auth.verify_and_update_password(
        request.password, user.hashed_password
    )
    if not verified:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password."
        )
    if replacement_hash is not None:
        repository.update_user_password(
            session,
            user_id=user.id,
            hashed_password=replacement_hash,
        )
    token = auth.create_access_token(session, user.id)
    return TokenResponse(access_token=token)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    token: str = Depends(get_bearer_token),
    session: Session = Depends(get_session),
    _user: User = Depends(get_current_user),
) -> Response:
    auth.revoke_access_token(session, token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me")
def me(user: User = Depends(get_current_user)):
    return user_payload(user)
