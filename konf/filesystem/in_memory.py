"""Module for an in memory filesystem."""

import logging
from pathlib import Path

from .filesystem import Filesystem, FileInfo


_LOGGER = logging.getLogger(__name__)


class InMemoryFilesystem(Filesystem):
    """In-memory implementation of the Filesystem interface.

    Files are kept as bytes keyed by path, along with their permissions.
    Directories are tracked explicitly so that empty directories can exist.
    """

    def __init__(self) -> None:
        """Initialize the InMemoryFilesystem."""
        self._files: dict[Path, bytes] = {}
        self._modes: dict[Path, int] = {}
        self._dirs: set[Path] = set()

    def mkdir(self, path: Path) -> None:
        """Create a directory and all of its parents."""
        self._dirs.add(path)
        self._dirs.update(path.parents)

    def list_dir(self, path: Path) -> list[FileInfo]:
        """List the direct children of a directory."""
        if path in self._files:
            raise NotADirectoryError(f"Not a directory: '{path}'")
        if path not in self._dirs:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        children = [FileInfo(path=p) for p in self._files if p.parent == path]
        children.extend(
            FileInfo(path=p, is_dir=True)
            for p in self._dirs
            if p.parent == path and p != path
        )
        return children

    def read_bytes(self, path: Path) -> bytes:
        """Return the full content of a file."""
        if path in self._dirs:
            raise IsADirectoryError(f"Is a directory: '{path}'")
        if (data := self._files.get(path)) is None:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        return data

    def write_bytes(self, path: Path, data: bytes, mode: int) -> None:
        """Create or overwrite a file with the given permissions."""
        if path in self._dirs:
            raise IsADirectoryError(f"Is a directory: '{path}'")
        _LOGGER.debug("Writing %d bytes to %s", len(data), path)
        self.mkdir(path.parent)
        self._files[path] = bytes(data)
        self._modes[path] = mode

    def stat(self, path: Path) -> FileInfo:
        """Return information about a path."""
        if path in self._dirs:
            return FileInfo(path=path, is_dir=True)
        if path in self._files:
            return FileInfo(path=path)
        raise FileNotFoundError(f"No such file or directory: '{path}'")

    def mode(self, path: Path) -> int:
        """Return the permissions a file was written with."""
        if path not in self._modes:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        return self._modes[path]
