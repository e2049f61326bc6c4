from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path

from app.environment import get_upload_dir, get_upload_url_prefix

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str | None) -> str:
    base = Path(filename or "").name
    cleaned = _UNSAFE_CHARS.sub("-", base).strip(".-")
    return cleaned or "upload"


class LocalFileStorage:
    """Stores uploads on local disk under a single directory."""

    def __init__(self, upload_dir: str, url_prefix: str) -> None:
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, filename: str | None, content: bytes) -> str:
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        stored_name = f"{uuid.uuid4().hex}-{safe_filename(filename)}"
        (self.upload_dir / stored_name).write_bytes(content)
        logger.info("Stored upload %s (%s bytes)", stored_name, len(content))
        return f"{self.url_prefix}/{stored_name}"


def get_storage() -> LocalFileStorage:
    return LocalFileStorage(get_upload_dir(), get_upload_url_prefix())
