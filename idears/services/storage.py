"""Local disk storage for attachment binaries."""

import logging
from pathlib import Path
from typing import BinaryIO

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from idears.config import Settings
from idears.errors import StorageError, UploadTooLargeError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class FileStorage:
    """Service for moving uploaded files into the upload directory and removing them."""

    url_prefix = "/uploads"

    def __init__(self, settings: Settings):
        """Initialize storage rooted at the configured upload directory."""
        self.root = Path(settings.upload_dir)
        self.max_size = settings.max_upload_size_bytes

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def public_path(self, stored_name: str) -> str:
        """Server-relative path recorded in attachment metadata."""
        return f"{self.url_prefix}/{stored_name}"

    def resolve(self, public_path: str) -> Path:
        """
        Map a recorded server-relative path back to a file in the upload directory.

        Only the final path component is used, so a recorded path can never
        point outside the upload directory.
        """
        return self.root / Path(public_path).name

    async def save(self, upload: UploadFile, stored_name: str) -> Path:
        """
        Move an uploaded payload from its temporary spool into the upload directory.

        Args:
            upload: Incoming multipart file
            stored_name: Target file name (attachment id + original extension)

        Returns:
            Path of the stored file

        Raises:
            UploadTooLargeError: If the payload exceeds the size cap (nothing is kept)
            StorageError: If the file cannot be written
        """
        destination = self.root / stored_name
        try:
            await run_in_threadpool(self._copy, upload.file, destination)
        except UploadTooLargeError:
            destination.unlink(missing_ok=True)
            raise
        except OSError as e:
            destination.unlink(missing_ok=True)
            raise StorageError(f"Failed to store upload {stored_name}: {e}") from e

        logger.info("Stored upload %s as %s", upload.filename, destination)
        return destination

    def _copy(self, source: BinaryIO, destination: Path) -> None:
        source.seek(0)
        written = 0
        with open(destination, "wb") as out:
            while chunk := source.read(CHUNK_SIZE):
                written += len(chunk)
                if written > self.max_size:
                    raise UploadTooLargeError(self.max_size)
                out.write(chunk)

    async def delete(self, public_path: str) -> bool:
        """
        Remove a stored file.

        A file that is already gone is not an error.

        Returns:
            True if a file was removed, False if there was nothing to remove

        Raises:
            StorageError: If the file exists but cannot be removed
        """
        path = self.resolve(public_path)
        try:
            await run_in_threadpool(path.unlink)
        except FileNotFoundError:
            logger.info("Stored file %s already absent", path)
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete stored file {path}: {e}") from e

        logger.info("Removed stored file %s", path)
        return True
