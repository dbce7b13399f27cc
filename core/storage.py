# core/storage.py
from __future__ import annotations
import logging
import re
import time
import uuid
from pathlib import Path

from core.errors import StoreError
from core.models import Upload

logger = logging.getLogger(__name__)

APP_ROOT = Path(__file__).resolve().parents[1]

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_name(name: str) -> str:
    base = Path(name or "").name
    cleaned = _UNSAFE.sub("-", base).strip("-.")
    return cleaned or "upload"


class LocalStorage:
    """
    Stores uploaded files under ``root`` and hands back a URL under ``public_url``.
    With Streamlit static serving enabled, static/uploads is reachable as app/static/uploads.
    """

    def __init__(self, root: str | Path, public_url: str):
        root = Path(root)
        self.root = root if root.is_absolute() else APP_ROOT / root
        self.public_url = public_url.rstrip("/")

    def upload(self, folder: str, upload: Upload) -> str:
        folder = _safe_name(folder)
        file_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{_safe_name(upload.name)}"
        target = self.root / folder / file_name
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(upload.data)
        except OSError as e:
            logger.exception("Upload of %s failed", upload.name)
            raise StoreError(f"Failed to upload image: {e}") from e
        logger.info("Stored upload %s/%s (%d bytes)", folder, file_name, len(upload.data))
        return f"{self.public_url}/{folder}/{file_name}"

    def local_path(self, url: str) -> Path | None:
        """Filesystem path for a URL this storage produced, else None."""
        prefix = f"{self.public_url}/"
        if not url or not url.startswith(prefix):
            return None
        return self.root / url[len(prefix):]
