"""Restaurant image upload validation and storage."""

import os
import uuid
from pathlib import Path

from fastapi import UploadFile

from tablebook.config import get_settings

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif"}
CHUNK_SIZE = 1024 * 64


class ImageStorage:
    """Streams uploaded images into UPLOAD_DIR/restaurants."""

    def validate_upload_metadata(self, filename: str, content_type: str | None) -> str | None:
        """Validate upload file metadata (extension + MIME). Returns error message or None if valid."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            return f"Unsupported image type '{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"

        if content_type and not content_type.startswith("image/") and content_type != "application/octet-stream":
            return f"Invalid content type '{content_type}'. Must be an image."

        return None

    async def store(self, upload: UploadFile) -> str:
        """Stream one upload to disk and return its path relative to UPLOAD_DIR.

        Raises ValueError if the file is not an image or exceeds the size limit.
        """
        error = self.validate_upload_metadata(upload.filename or "", upload.content_type)
        if error:
            raise ValueError(error)

        settings = get_settings()
        max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
        ext = Path(upload.filename or "image.bin").suffix.lower()
        stored_filename = f"{uuid.uuid4()}{ext}"
        target_dir = Path(settings.UPLOAD_DIR) / "restaurants"
        target_dir.mkdir(parents=True, exist_ok=True)

        file_path = target_dir / stored_filename
        file_size = 0

        try:
            with open(file_path, "wb") as f:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    file_size += len(chunk)
                    if file_size > max_bytes:
                        raise ValueError(f"Image too large. Maximum: {settings.MAX_UPLOAD_SIZE_MB}MB")
                    f.write(chunk)
        except ValueError:
            if file_path.exists():
                os.remove(file_path)
            raise

        return f"restaurants/{stored_filename}"

    async def store_many(self, uploads: list[UploadFile] | None) -> list[str]:
        """Store several uploads, removing the ones already written if a later one fails."""
        stored: list[str] = []
        try:
            for upload in uploads or []:
                if not upload.filename:
                    continue
                stored.append(await self.store(upload))
        except ValueError:
            self.remove(stored)
            raise
        return stored

    def remove(self, paths: list[str]) -> None:
        upload_dir = Path(get_settings().UPLOAD_DIR)
        for path in paths:
            file_path = upload_dir / path
            if file_path.exists():
                os.remove(file_path)


_image_storage: ImageStorage | None = None


def get_image_storage() -> ImageStorage:
    """Get singleton image storage instance."""
    global _image_storage
    if _image_storage is None:
        _image_storage = ImageStorage()
    return _image_storage
