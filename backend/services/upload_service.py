"""
Image upload handling for project screenshots.

Files are validated by size, extension and declared content type, then
written under UPLOAD_DIR with an unpredictable name.
"""

import secrets
import time
from pathlib import Path

from fastapi import UploadFile
from loguru import logger

from models.config import settings
from models.exceptions import FileTooLargeException, UnsupportedFileTypeException

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}

PUBLIC_PREFIX = "/uploads"


class UploadService:
    """Stores validated image uploads."""

    @staticmethod
    def generate_filename(extension: str) -> str:
        """image-{epoch_ms}-{random}{ext}"""
        epoch_ms = int(time.time() * 1000)
        return f"image-{epoch_ms}-{secrets.randbelow(10**9)}{extension}"

    @staticmethod
    def validate(filename: str | None, content_type: str | None, size: int) -> str:
        """
        Check an upload against the image allow-list.

        Returns:
            The normalized (lower-case) file extension

        Raises:
            FileTooLargeException: If size exceeds MAX_UPLOAD_SIZE
            UnsupportedFileTypeException: If extension or content type is not allowed
        """
        if size > settings.MAX_UPLOAD_SIZE:
            raise FileTooLargeException(settings.MAX_UPLOAD_SIZE)

        extension = Path(filename or "").suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            raise UnsupportedFileTypeException()
        if (content_type or "").lower() not in ALLOWED_MIME_TYPES:
            raise UnsupportedFileTypeException()

        return extension

    @classmethod
    def save_image(cls, file: UploadFile) -> str:
        """
        Validate and store an uploaded image.

        Args:
            file: Multipart file from the request

        Returns:
            Public URL path, e.g. "/uploads/image-1700000000000-123.png"

        Raises:
            UploadException: If the file is rejected
        """
        # One byte past the limit is enough to know it is too large
        content = file.file.read(settings.MAX_UPLOAD_SIZE + 1)
        extension = cls.validate(file.filename, file.content_type, len(content))

        upload_dir = Path(settings.UPLOAD_DIR)
        upload_dir.mkdir(parents=True, exist_ok=True)

        filename = cls.generate_filename(extension)
        (upload_dir / filename).write_bytes(content)

        logger.info(f"Stored upload {filename} ({len(content)} bytes)")
        return f"{PUBLIC_PREFIX}/{filename}"
