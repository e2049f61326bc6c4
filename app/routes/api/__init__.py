from __future__ import annotations

from fastapi import APIRouter

from . import (
    auth,
    comments,
    imports,
    institutions,
    nominees,
    ratings,
    reference,
    system,
    uploads,
    users,
)
from .dependencies import get_current_user, require_admin

router = APIRouter()
router.include_router(system.router)
router.include_router(auth.router)
# Bulk-upload paths must win over the "/{entity}/{id}" detail routes.
router.include_router(imports.router)
router.include_router(uploads.router)
router.include_router(reference.router)
router.include_router(institutions.router)
router.include_router(nominees.router)
router.include_router(ratings.router)
router.include_router(comments.router)
router.include_router(users.router)

__all__ = ["router", "get_current_user", "require_admin"]
