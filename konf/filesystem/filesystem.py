"""Storage interface used to access the konf directory."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileInfo:
    """Information about a single directory entry."""

    path: Path
    is_dir: bool = False

    @property
    def name(self) -> str:
        """Return the final path component."""
        return self.path.name


class Filesystem(ABC):
    """Abstract base class for the files konf reads and writes."""

    @abstractmethod
    def list_dir(self, path: Path) -> list[FileInfo]:
        """List the direct children of a directory in no particular order.

        Raises:
            FileNotFoundError: If the directory does not exist.
            NotADirectoryError: If the path is not a directory.
        """

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        """Return the full content of a file.

        Raises:
            FileNotFoundError: If the file does not exist.
        """

    @abstractmethod
    def write_bytes(self, path: Path, data: bytes, mode: int) -> None:
        """Create or overwrite a file with the given permissions.

        Missing parent directories are created.
        """

    @abstractmethod
    def stat(self, path: Path) -> FileInfo:
        """Return information about a path.

        Raises:
            FileNotFoundError: If the path does not exist.
        """

    def exists(self, path: Path) -> bool:
        """Check if the path exists."""
        try:
            self.stat(path)
        except FileNotFoundError:
            return False
        return True
