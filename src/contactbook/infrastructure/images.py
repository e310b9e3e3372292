"""Copies picked images into application-owned storage."""

import asyncio
import logging
import os
import shutil
import tempfile
from pathlib import Path
from urllib.parse import unquote, urlparse

logger = logging.getLogger(__name__)


def _source_path(source: str) -> Path:
    """Accept a plain path or a file:// URI."""
    if source.startswith("file://"):
        return Path(unquote(urlparse(source).path))
    return Path(source)


class ImageStorage:
    """Image files owned by the application, kept under one directory.

    Picked image references may not outlive the picker, so the bytes are copied
    here and the contact stores the resulting path.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    async def copy_into_storage(self, source: str, file_name: str) -> str | None:
        """Copy source into storage as file_name. Return the absolute path, or None on failure."""
        return await asyncio.to_thread(self._copy, source, file_name)

    def _copy(self, source: str, file_name: str) -> str | None:
        destination = self._root / Path(file_name).name
        partial: Path | None = None
        try:
            src = _source_path(source)
            if src.is_file() and destination.exists() and src.samefile(destination):
                return str(destination.resolve())
            self._root.mkdir(parents=True, exist_ok=True)
            with src.open("rb") as reader:
                with tempfile.NamedTemporaryFile(
                    dir=self._root, prefix=".copy-", delete=False
                ) as writer:
                    partial = Path(writer.name)
                    shutil.copyfileobj(reader, writer)
            os.replace(partial, destination)
        except (OSError, ValueError) as e:
            logger.warning("Could not copy image %s: %s", source, e)
            if partial is not None:
                partial.unlink(missing_ok=True)
            return None
        return str(destination.resolve())
