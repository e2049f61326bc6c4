from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from app.environment import get_upload_max_bytes
from app.imports.uploads import UploadTooLargeError, read_upload_limited, upload_size_detail
from app.storage import LocalFileStorage, get_storage

from .dependencies import require_admin

router = APIRouter()


@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: UploadFile | None = File(None),
    storage: LocalFileStorage = Depends(get_storage),
    _user=Depends(require_admin),
):
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded."
        )
    max_bytes = get_upload_max_bytes()
    try:
        content = await read_upload_limited(file, max_bytes=max_bytes)
    except UploadTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=upload_size_detail(max_bytes),
        ) from exc
    url = await run_in_threadpool(storage.save, file.filename, content)
    return {"url": url}
