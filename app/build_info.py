from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

_REPO_ROOT = Path(__file__).resolve().parents[1]


def _get_env_value(name: str, default: str) -> str:
    value = os.getenv(name)
    if not value:
        return default
    return value


def _read_git_head(git_dir: Path) -> Optional[str]:
    head_path = git_dir / "HEAD"
    if not head_path.is_file():
        return None
    head = head_path.read_text(encoding="utf-8").strip()
    if not head.startswith("ref: "):
        return head or None
    ref_path = git_dir / head[5:].strip()
    if ref_path.is_file():
        return ref_path.read_text(encoding="utf-8").strip() or None
    return None


def get_build_info() -> dict[str, str]:
    commit = _get_env_value("NOMIRATE_COMMIT", "")
    if not commit:
        commit = _read_git_head(_REPO_ROOT / ".git") or "unknown"

    return {
        "status": "ok",
        "version": _get_env_value("NOMIRATE_VERSION", "dev"),
        "commit": commit,
        "build_time": _get_env_value("NOMIRATE_BUILD_TIME", "unknown"),
    }
