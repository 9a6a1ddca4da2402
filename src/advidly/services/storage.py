"""Upload storage service for ad and video files."""

import asyncio
import secrets
import time
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from advidly.domain.enums import UploadKind
from advidly.logging import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024


class UploadRejectedError(Exception):
    """Raised when an upload fails the type or size checks."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class StoredUpload:
    """Metadata for a file written to upload storage."""

    file_path: Path
    file_size_bytes: int
    mime_type: str
    original_filename: str | None


class UploadStorage:
    """Writes uploaded files under ``<base_path>/{ads|videos}/``.

    Filenames are generated (kind, epoch milliseconds, random suffix, original
    extension), so two uploads never collide. Files are only ever removed
    when their record is deleted.
    """

    def __init__(self, base_path: Path, allowed_mime_types: list[str] | set[str]) -> None:
        """Initialize upload storage.

        Args:
            base_path: Root upload directory; subdirectories are created on demand
            allowed_mime_types: Content types accepted by :meth:`save`
        """
        self.base_path = Path(base_path)
        self.allowed_mime_types = frozenset(allowed_mime_types)

    def _get_subdir(self, kind: UploadKind) -> Path:
        subdir = self.base_path / kind.value
        subdir.mkdir(parents=True, exist_ok=True)
        return subdir

    def generate_filename(self, kind: UploadKind, original_filename: str | None) -> str:
        """Build a collision-resistant name keeping the original extension."""
        prefix = "ad" if kind == UploadKind.AD else "video"
        ext = Path(original_filename).suffix.lower() if original_filename else ""
        stamp = int(time.time() * 1000)
        suffix = secrets.randbelow(10**9)
        return f"{prefix}-{stamp}-{suffix:09d}{ext}"

    def check_type(self, content_type: str | None) -> None:
        """Reject anything outside the MIME allowlist."""
        if content_type not in self.allowed_mime_types:
            raise UploadRejectedError("Only video files are allowed")

    async def save(self, upload: UploadFile, kind: UploadKind, max_bytes: int) -> StoredUpload:
        """Validate an upload and stream it to disk.

        Disk writes run in the default executor. The size ceiling is enforced
        while copying; an oversized file is removed before this raises, so no
        partial file is left behind.

        Raises:
            UploadRejectedError: Wrong content type or file larger than ``max_bytes``.
        """
        self.check_type(upload.content_type)
        if upload.size is not None and upload.size > max_bytes:
            raise UploadRejectedError("File too large")

        loop = asyncio.get_running_loop()
        subdir = await loop.run_in_executor(None, self._get_subdir, kind)
        file_path = subdir / self.generate_filename(kind, upload.filename)
        written = 0
        out = await loop.run_in_executor(None, file_path.open, "wb")
        try:
            while chunk := await upload.read(CHUNK_SIZE):
                written += len(chunk)
                if written > max_bytes:
                    raise UploadRejectedError("File too large")
                await loop.run_in_executor(None, out.write, chunk)
        except BaseException:
            out.close()
            file_path.unlink(missing_ok=True)
            raise
        await loop.run_in_executor(None, out.close)

        logger.info(
            "upload_stored",
            kind=kind.value,
            file_path=str(file_path),
            file_size=written,
        )

        return StoredUpload(
            file_path=file_path,
            file_size_bytes=written,
            mime_type=upload.content_type or "application/octet-stream",
            original_filename=upload.filename,
        )

    def delete_file(self, path: str | Path | None) -> bool:
        """Remove a stored file. A file that is already gone is not an error."""
        if not path:
            return False
        try:
            Path(path).unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.error("storage_delete_failed", path=str(path), error=str(e))
            return False
