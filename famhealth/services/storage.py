"""Local storage for uploaded test-result files."""
from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Optional

DEFAULT_UPLOAD_DIR = Path(
    os.getenv("UPLOAD_ROOT")
    or (Path(__file__).resolve().parent.parent / "uploads")
)
FILES_BASE_URL = (os.getenv("FILES_BASE_URL") or "/files").rstrip("/")


def _ensure_upload_dir(subdir: Optional[str] = None) -> Path:
    path = DEFAULT_UPLOAD_DIR / subdir if subdir else DEFAULT_UPLOAD_DIR
    path.mkdir(parents=True, exist_ok=True)
    return path


def store_user_upload(user_id: str, data: bytes, original_name: Optional[str]) -> str:
    """Write the upload under ``<user_id>/<epoch_ms>.<ext>`` and return that relative path."""
    user_dir = _ensure_upload_dir(str(user_id))
    suffix = Path(original_name or "").suffix.lower().lstrip(".")
    ext = suffix if suffix and len(suffix) <= 10 else "bin"
    stamp = int(time.time() * 1000)
    filename = f"{stamp}.{ext}"
    target = user_dir / filename
    # two uploads in the same millisecond
    while target.exists():
        stamp += 1
        filename = f"{stamp}.{ext}"
        target = user_dir / filename
    target.write_bytes(data)
    return f"{user_id}/{filename}"


def public_url(path: Optional[str]) -> Optional[str]:
    if not path:
        return None
    return f"{FILES_BASE_URL}/{path.lstrip('/')}"


def delete_upload(path: Optional[str]) -> bool:
    if not path:
        return False
    target = DEFAULT_UPLOAD_DIR / path
    if target.is_file():
        target.unlink()
        return True
    return False


__all__ = ["DEFAULT_UPLOAD_DIR", "delete_upload", "public_url", "store_user_upload"]
