import logging
import os
import random
import re
import time
from pathlib import Path
from typing import Iterable, List, Optional

from fastapi import UploadFile

from app.core.config import settings
from app.core.exceptions import ValidationFailed

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ALLOWED_IMAGE_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_IMAGE_MIME = re.compile(r"jpeg|jpg|png|gif|webp")


class BlobStore:
    """
    Local-disk storage for uploaded images.

    Files land in ``<root>/<folder>/<prefix>-<ms>-<rand><ext>`` and are
    referenced from entities by their public relative path
    ``<url_prefix>/<folder>/<filename>``.
    """

    def __init__(self, root: Path, url_prefix: str = "/uploads", max_size: int = 5 * 1024 * 1024):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_size = max_size

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def check_image(self, upload: UploadFile) -> str:
        """Validate extension and declared MIME type, return the extension."""
        filename = upload.filename or ""
        ext = os.path.splitext(filename)[1].lower()
        content_type = (upload.content_type or "").lower()
        if ext not in ALLOWED_IMAGE_EXTENSIONS or not ALLOWED_IMAGE_MIME.search(content_type):
            raise ValidationFailed(
                "Only image files are allowed (jpeg, jpg, png, gif, webp)",
                errors=[{"field": "images", "message": f"Unsupported file '{filename}'"}],
            )
        return ext

    async def save(self, folder: str, upload: UploadFile, prefix: str) -> str:
        ext = self.check_image(upload)
        content = await upload.read()
        if len(content) > self.max_size:
            raise ValidationFailed(
                "File too large",
                errors=[{"field": "images", "message": f"'{upload.filename}' exceeds {self.max_size} bytes"}],
            )

        filename = f"{prefix}-{int(time.time() * 1000)}-{random.randint(0, 10**9 - 1)}{ext}"
        directory = self.root / folder
        directory.mkdir(parents=True, exist_ok=True)
        (directory / filename).write_bytes(content)
        logger.info(f"Stored upload {upload.filename} as {folder}/{filename}")
        return f"{self.url_prefix}/{folder}/{filename}"

    async def save_many(self, folder: str, uploads: Iterable[UploadFile], prefix: str) -> List[str]:
        """Save every upload; on failure remove what was already written."""
        saved: List[str] = []
        try:
            for upload in uploads:
                saved.append(await self.save(folder, upload, prefix))
        except Exception:
            self.delete_many(saved)
            raise
        return saved

    def path_for(self, relative: str) -> Optional[Path]:
        """Map a stored relative path back onto disk, None if outside the root."""
        if not relative or not relative.startswith(self.url_prefix + "/"):
            return None
        candidate = (self.root / relative[len(self.url_prefix) + 1:]).resolve()
        if self.root.resolve() not in candidate.parents:
            return None
        return candidate

    def exists(self, relative: str) -> bool:
        path = self.path_for(relative)
        return path is not None and path.is_file()

    def delete(self, relative: str) -> None:
        path = self.path_for(relative)
        if path is None:
            logger.warning(f"Refusing to delete path outside upload root: {relative}")
            return
        path.unlink(missing_ok=True)

    def delete_many(self, paths: Iterable[str]) -> None:
        """Best-effort removal; failures are logged and never raised."""
        for relative in paths or []:
            try:
                self.delete(relative)
            except OSError as e:
                logger.error(f"Failed to delete upload {relative}: {str(e)}")


def create_blob_store() -> BlobStore:
    store = BlobStore(
        root=settings.UPLOAD_DIR,
        url_prefix=settings.UPLOAD_URL_PREFIX,
        max_size=settings.MAX_UPLOAD_SIZE,
    )
    store.ensure_root()
    return store
