"""Filesystem implementation backed by the local disk."""

import logging
import os
from pathlib import Path

from .filesystem import Filesystem, FileInfo

_LOGGER = logging.getLogger(__name__)


class LocalFilesystem(Filesystem):
    """Filesystem that operates on the real operating system paths."""

    def list_dir(self, path: Path) -> list[FileInfo]:
        """List the direct children of a directory."""
        with os.scandir(path) as entries:
            return [
                FileInfo(path=Path(entry.path), is_dir=entry.is_dir())
                for entry in entries
            ]

    def read_bytes(self, path: Path) -> bytes:
        """Return the full content of a file."""
        return path.read_bytes()

    def write_bytes(self, path: Path, data: bytes, mode: int) -> None:
        """Create or overwrite a file with the given permissions."""
        _LOGGER.debug("Writing %d bytes to %s", len(data), path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # The mode passed to open only applies when the file is created
        os.chmod(path, mode)

    def stat(self, path: Path) -> FileInfo:
        """Return information about a path."""
        if not path.exists():
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        return FileInfo(path=path, is_dir=path.is_dir())
