"""Library for making a kubeconfig from the store active in a shell session.

The store files are never modified. Instead, the content of the selected
kubeconfig is copied to a path that is scoped to the shell session, which the
shell hook then points $KUBECONFIG at. This allows changing the active
kubeconfig (e.g. its namespace) without affecting other sessions.
"""

import logging
from pathlib import Path

from .config import KONF_PERM, KonfConfig
from .exceptions import (
    ActivationWriteError,
    KonfNotFoundError,
    LatestReadError,
    LatestWriteError,
    NoPriorSelectionError,
    StoreReadError,
)
from .filesystem import Filesystem

__all__ = [
    "KonfActivator",
]

_LOGGER = logging.getLogger(__name__)


class KonfActivator:
    """Activates kubeconfigs from the store and remembers the latest one."""

    def __init__(self, fs: Filesystem, config: KonfConfig) -> None:
        """Initialize the KonfActivator."""
        self._fs = fs
        self._config = config

    def activate(self, konf_id: str, scope_key: str) -> Path:
        """Copy the kubeconfig with the given id to the active path of a scope.

        The scope key identifies the shell session, typically the process id of
        the calling shell. Returns the path of the active kubeconfig.

        Raises:
            KonfNotFoundError: If the store has no kubeconfig with the id.
            StoreReadError: If the kubeconfig in the store could not be read.
            ActivationWriteError: If the active kubeconfig could not be written.
        """
        store_path = self._config.store_path(konf_id)
        try:
            content = self._fs.read_bytes(store_path)
        except FileNotFoundError as err:
            raise KonfNotFoundError(konf_id, store_path) from err
        except OSError as err:
            raise StoreReadError(store_path, err) from err

        active_path = self._config.active_path(scope_key)
        _LOGGER.debug("Activating %s at %s", store_path, active_path)
        try:
            self._fs.write_bytes(active_path, content, KONF_PERM)
        except OSError as err:
            raise ActivationWriteError(
                f"Could not write active kubeconfig '{active_path}': {err}"
            ) from err
        return active_path

    def record_latest(self, konf_id: str) -> None:
        """Remember the id as the latest activated kubeconfig.

        Raises:
            LatestWriteError: If the record could not be written.
        """
        path = self._config.latest_konf_file
        try:
            self._fs.write_bytes(path, konf_id.encode(), KONF_PERM)
        except OSError as err:
            raise LatestWriteError(
                f"Could not save latest konf to '{path}': {err}"
            ) from err

    def recall_latest(self) -> str:
        """Return the id of the latest activated kubeconfig.

        Raises:
            NoPriorSelectionError: If no kubeconfig was activated yet.
            LatestReadError: If the record could not be read or decoded.
        """
        path = self._config.latest_konf_file
        try:
            return self._fs.read_bytes(path).decode()
        except FileNotFoundError as err:
            raise NoPriorSelectionError() from err
        except (OSError, UnicodeDecodeError) as err:
            raise LatestReadError(
                f"Could not read latest konf from '{path}': {err}"
            ) from err
