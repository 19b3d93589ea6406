"""
Local file storage for book covers.

Uploads are written under ``<upload root>/users/<user id>/`` with a
millisecond timestamp as the file name, keeping the lower-cased extension of
the uploaded file when it has one. Disk access from async callers goes through
the threadpool so a slow disk never blocks the event loop.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


def file_extension(filename: Optional[str]) -> str:
    """Return the lower-cased extension of ``filename`` without the dot, or ``""``."""
    if not filename:
        return ""
    last_dot = filename.rfind(".")
    if last_dot == -1:
        return ""
    return filename[last_dot + 1 :].lower()


def read_file_from_location(location: Optional[str]) -> bytes:
    """Read a stored file, returning empty bytes for a blank or unreadable location."""
    if location is None or not location.strip():
        return b""
    try:
        return Path(location).read_bytes()
    except OSError as e:
        logger.warning(f"No file found in the path {location}: {e}")
        return b""


async def read_cover(location: Optional[str]) -> bytes:
    return await run_in_threadpool(read_file_from_location, location)

class FileStorageService:
    """Persist uploaded files on the local filesystem."""

    def __init__(self, upload_path: str) -> None:
        self.upload_path = Path(upload_path)

    def save_file(self, content: bytes, filename: Optional[str], user_id: int) -> Optional[str]:
        """
        Write ``content`` for ``user_id`` and return where it was stored.

        Args:
            content: Raw file bytes
            filename: Original file name, only used for its extension
            user_id: Uploading user

        Returns:
            The stored path, or None if the file could not be written
        """
        target_dir = self.upload_path / "users" / str(user_id)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Failed to create the target folder {target_dir}: {e}")
            return None
        extension = file_extension(filename)
        name = str(int(time.time() * 1000))
        if extension:
            name = f"{name}.{extension}"
        target = target_dir / name
        try:
            target.write_bytes(content)
        except OSError as e:
            logger.error(f"File was not saved to {target}: {e}")
            return None
        logger.info(f"File saved to {target}")
        return str(target)

    async def store(self, content: bytes, filename: Optional[str], user_id: int) -> Optional[str]:
        """Async counterpart of ``save_file`` that writes from a worker thread."""
        return await run_in_threadpool(self.save_file, content, filename, user_id)
