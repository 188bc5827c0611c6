"""
The filesystem module provides the minimal storage interface konf depends on.

- Lists, reads, writes and stats files by path.
- A local implementation is used by the command line tool.
- An in-memory implementation allows testing without touching the disk.
"""

from .filesystem import Filesystem, FileInfo
from .local import LocalFilesystem
from .in_memory import InMemoryFilesystem

__all__ = [
    "Filesystem",
    "FileInfo",
    "LocalFilesystem",
    "InMemoryFilesystem",
]
