"""Tests for UploadService."""

import io
import re
from pathlib import Path

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from models.config import settings
from models.exceptions import FileTooLargeException, UnsupportedFileTypeException
from services.upload_service import UploadService


def _upload(filename: str, content: bytes, content_type: str) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestValidate:
    @pytest.mark.parametrize(
        "filename,content_type",
        [
            ("a.jpg", "image/jpeg"),
            ("a.JPEG", "image/jpeg"),
            ("a.png", "image/png"),
            ("a.gif", "image/gif"),
            ("a.webp", "image/webp"),
        ],
    )
    def test_accepts_images(self, filename, content_type) -> None:
        extension = UploadService.validate(filename, content_type, 10)
        assert extension == Path(filename).suffix.lower()

    def test_rejects_wrong_extension(self) -> None:
        with pytest.raises(UnsupportedFileTypeException):
            UploadService.validate("notes.txt", "image/png", 10)

    def test_rejects_wrong_content_type(self) -> None:
        with pytest.raises(UnsupportedFileTypeException):
            UploadService.validate("shot.png", "text/html", 10)

    def test_rejects_svg(self) -> None:
        with pytest.raises(UnsupportedFileTypeException):
            UploadService.validate("logo.svg", "image/svg+xml", 10)

    def test_rejects_oversized(self) -> None:
        with pytest.raises(FileTooLargeException):
            UploadService.validate("a.png", "image/png", settings.MAX_UPLOAD_SIZE + 1)


class TestSaveImage:
    def test_writes_file_with_generated_name(self) -> None:
        url = UploadService.save_image(_upload("My Photo.PNG", b"png-bytes", "image/png"))

        assert re.match(r"^/uploads/image-\d+-\d+\.png$", url)
        stored = Path(settings.UPLOAD_DIR) / url.rsplit("/", 1)[1]
        assert stored.read_bytes() == b"png-bytes"

    def test_names_are_unique(self) -> None:
        urls = {
            UploadService.save_image(_upload("a.gif", b"gif", "image/gif"))
            for _ in range(5)
        }
        assert len(urls) == 5

    def test_rejected_file_is_not_written(self) -> None:
        before = set(Path(settings.UPLOAD_DIR).iterdir())

        with pytest.raises(UnsupportedFileTypeException):
            UploadService.save_image(_upload("x.html", b"<html>", "text/html"))

        assert set(Path(settings.UPLOAD_DIR).iterdir()) == before
