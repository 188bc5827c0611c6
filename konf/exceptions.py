"""Exceptions related to konf."""

from pathlib import Path

__all__ = [
    "KonfException",
    "EmptyStoreError",
    "StoreImpurityError",
    "MalformedEntryError",
    "StoreReadError",
    "KonfNotFoundError",
    "InvalidSelectionError",
    "PromptAbortedError",
    "NoPriorSelectionError",
    "ActivationWriteError",
    "LatestWriteError",
    "LatestReadError",
]


class KonfException(Exception):
    """Generic base exception used for this library."""


class EmptyStoreError(KonfException):
    """Raised when no usable kubeconfig is inside the store.

    Some operations treat this as benign (e.g. shell completion) while it is
    detrimental for others (e.g. running the selection prompt).
    """

    def __init__(self, store_dir: Path) -> None:
        super().__init__(
            f"The konf store at '{store_dir}' is empty. "
            "Please run 'konf import' to populate it"
        )
        self.store_dir = store_dir


class StoreImpurityError(KonfException):
    """Raised when a kubeconfig in the store has multiple contexts or clusters."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Impure Store: The kubeconfig '{path}' contains multiple contexts "
            "and/or clusters. Please only use 'konf import' for populating the store"
        )
        self.path = path


class StoreReadError(KonfException):
    """Raised when the store or one of its files could not be read."""

    def __init__(self, path: Path, err: Exception) -> None:
        super().__init__(f"Could not read '{path}' from the konf store: {err}")
        self.path = path


class MalformedEntryError(KonfException):
    """Raised when a store file does not contain a valid kubeconfig."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"File '{path}' does not contain a valid kubeconfig: {reason}")
        self.path = path
        self.reason = reason


class KonfNotFoundError(KonfException):
    """Raised when there is no store file for a konf id."""

    def __init__(self, konf_id: str, path: Path) -> None:
        super().__init__(f"No konf with id '{konf_id}' found in store ({path})")
        self.konf_id = konf_id
        self.path = path


class InvalidSelectionError(KonfException):
    """Raised when the selection prompt returned an index outside the options."""

    def __init__(self, index: int) -> None:
        super().__init__(f"invalid selection {index}")
        self.index = index


class PromptAbortedError(KonfException):
    """Raised when the user cancels the selection prompt."""


class NoPriorSelectionError(KonfException):
    """Raised when the latest konf is requested but no konf was set yet."""

    def __init__(self) -> None:
        super().__init__(
            "could not select latest konf, because no konf was yet set. "
            "Run 'konf set' first"
        )


class ActivationWriteError(KonfException):
    """Raised when the active kubeconfig could not be written."""


class LatestWriteError(KonfException):
    """Raised when the latest konf record could not be written."""


class LatestReadError(KonfException):
    """Raised when the latest konf record exists but could not be read."""
