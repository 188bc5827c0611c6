"""Library for reading the konf store.

The store is a flat directory holding one kubeconfig per cluster and context.
Reading it happens in two steps: the store directory is scanned for candidate
files, then each candidate is parsed and validated into a `StoreEntry`.
"""

from collections import Counter
import logging
from pathlib import Path

from .config import KonfConfig
from .exceptions import (
    EmptyStoreError,
    MalformedEntryError,
    StoreImpurityError,
    StoreReadError,
)
from .filesystem import Filesystem, FileInfo
from .manifest import KubeConfig, StoreEntry

__all__ = [
    "scan_store",
    "index_store",
    "fetch_konfs",
]

_LOGGER = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


def scan_store(fs: Filesystem, store_dir: Path) -> list[FileInfo]:
    """Return the candidate kubeconfig files in the store sorted by name.

    Directories are not descended into and hidden files are skipped without
    notice, as 'konf import' never produces them and they are most likely
    artifacts of the operating system such as '.DS_Store'.

    Raises:
        EmptyStoreError: If no candidate file is left.
        StoreReadError: If the store directory could not be listed.
    """
    try:
        children = fs.list_dir(store_dir)
    except FileNotFoundError as err:
        _LOGGER.debug("Store directory %s does not exist", store_dir)
        raise EmptyStoreError(store_dir) from err
    except OSError as err:
        raise StoreReadError(store_dir, err) from err
    files = sorted(
        (
            info
            for info in children
            if not info.is_dir and not info.name.startswith(HIDDEN_PREFIX)
        ),
        key=lambda info: info.name,
    )
    if not files:
        raise EmptyStoreError(store_dir)
    return files


def _parse_entry(fs: Filesystem, info: FileInfo) -> StoreEntry:
    """Parse a single store file into an entry."""
    try:
        content = fs.read_bytes(info.path)
    except OSError as err:
        raise StoreReadError(info.path, err) from err
    kubeconfig = KubeConfig.parse_yaml(content, info.path)
    if len(kubeconfig.contexts) > 1 or len(kubeconfig.clusters) > 1:
        raise StoreImpurityError(info.path)
    if not kubeconfig.contexts or not kubeconfig.clusters:
        raise MalformedEntryError(info.path, "no context or cluster defined")
    # Parsing guarantees names are non-empty strings
    return StoreEntry(
        context=kubeconfig.contexts[0].name,
        cluster=kubeconfig.clusters[0].name,
        file=info.path,
    )


def index_store(fs: Filesystem, files: list[FileInfo]) -> list[StoreEntry]:
    """Parse the candidate files into store entries, keeping their order.

    A file that does not contain a valid kubeconfig is skipped with a warning,
    since it was likely created outside of konf and should not block the
    selection of others. A file with multiple contexts or clusters aborts the
    whole operation, as it makes the ids of all entries ambiguous.

    Raises:
        StoreImpurityError: If a file has more than one context or cluster.
        StoreReadError: If a file could not be read.
    """
    entries: list[StoreEntry] = []
    for info in files:
        try:
            entry = _parse_entry(fs, info)
        except MalformedEntryError as err:
            _LOGGER.warning("%s. Skipping for evaluation", err)
            continue
        entries.append(entry)

    counts = Counter(entry.konf_id for entry in entries)
    for konf_id, count in counts.items():
        if count > 1:
            _LOGGER.warning(
                "Konf id '%s' is used by %d files in the store; only one of them "
                "can be set by id",
                konf_id,
                count,
            )
    return entries


def fetch_konfs(fs: Filesystem, config: KonfConfig) -> list[StoreEntry]:
    """Return all valid kubeconfigs currently in the store.

    Raises:
        EmptyStoreError: If the store has no valid kubeconfig.
        StoreImpurityError: If a file has more than one context or cluster.
        StoreReadError: If the store or one of its files could not be read.
    """
    entries = index_store(fs, scan_store(fs, config.store_dir))
    if not entries:
        raise EmptyStoreError(config.store_dir)
    return entries
