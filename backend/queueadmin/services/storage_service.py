"""
File storage for admin avatars and teller photos.

Uploads are checked with Pillow, shrunk to a bounded size, written under the
upload directory and served back through the ``/uploads`` static mount.
"""

import io
import logging
import time
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from ..config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


class StorageService:
    """Saves images and hands out their public download reference."""

    ALLOWED_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.bmp', '.webp'}
    MAX_DIMENSIONS: Tuple[int, int] = (512, 512)

    def __init__(self, upload_dir: Optional[str] = None, url_prefix: Optional[str] = None):
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self.url_prefix = (url_prefix or settings.UPLOAD_URL_PREFIX).rstrip("/")
        self.max_file_size = settings.MAX_IMAGE_SIZE_MB * 1024 * 1024

    def save_image(self, file_content: bytes, filename: str, folder: str, name: str) -> str:
        """Store an image as ``<folder>/<name>.jpg`` and return its URL."""
        ext = Path(filename or "").suffix.lower()
        if ext not in self.ALLOWED_EXTENSIONS:
            raise ValueError(f"Invalid file type. Allowed: {sorted(self.ALLOWED_EXTENSIONS)}")

        if len(file_content) > self.max_file_size:
            raise ValueError(f"File too large. Maximum size: {settings.MAX_IMAGE_SIZE_MB}MB")

        try:
            img = Image.open(io.BytesIO(file_content))
            img.load()
        except (UnidentifiedImageError, OSError):
            raise ValueError("File is not a readable image")

        img.thumbnail(self.MAX_DIMENSIONS, Image.Resampling.LANCZOS)
        if img.mode != 'RGB':
            img = img.convert('RGB')

        save_dir = self.upload_dir / folder
        save_dir.mkdir(parents=True, exist_ok=True)
        path = save_dir / f"{name}.jpg"
        img.save(path, 'JPEG', quality=85)
        logger.info("Stored image %s (%d bytes uploaded)", path, len(file_content))

        # Version suffix so replaced images are not served from cache
        return f"{self.url_prefix}/{folder}/{name}.jpg?v={int(time.time())}"
