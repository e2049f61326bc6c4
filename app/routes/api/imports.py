from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.dependencies import get_session
from app.environment import get_upload_max_bytes
from app.imports import IMPORTERS, ImportParseError, run_bulk_import
from app.imports.importers import Importer
from app.imports.uploads import (
    UploadTooLargeError,
    is_csv_filename,
    read_upload_limited,
    upload_size_detail,
)

from .dependencies import require_admin
from .utils import import_result_payload, template_payload

router = APIRouter()


def _get_importer(entity: str) -> Importer:
    importer = IMPORTERS.get(entity)
    if importer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found.")
    return importer


@router.get("/{entity}/bulk-upload")
def bulk_upload_template(entity: str):
    return template_payload(_get_importer(entity).template)


@router.post("/{entity}/bulk-upload")
async def bulk_upload(
    entity: str,
    file: UploadFile | None = File(None),
    session: Session = Depends(get_session),
    _user=Depends(require_admin),
):
    importer = _get_importer(entity)
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded."
        )
    if not is_csv_filename(file.filename):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are accepted.",
        )
    max_bytes = get_upload_max_bytes()
    try:
        payload = await read_upload_limited(file, max_bytes=max_bytes)
    except UploadTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=upload_size_detail(max_bytes),
        ) from exc

    try:
        result = await run_in_threadpool(
            run_bulk_import, session, importer, payload, filename=file.filename
        )
    except ImportParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Failed to parse CSV: {exc}",
        ) from exc
    return import_result_payload(result)
