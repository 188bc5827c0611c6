"""Configuration objects for konf."""

from dataclasses import dataclass
import os
from pathlib import Path

__all__ = [
    "KonfConfig",
    "KONF_DIR_ENV",
    "KONF_PERM",
]

KONF_DIR_ENV = "KONF_DIR"
DEFAULT_KONF_DIR = Path("~/.kube/konfs")

# Files written by konf may hold credentials so they are only readable by the owner
KONF_PERM = 0o600

STORE_DIR_NAME = "store"
ACTIVE_DIR_NAME = "active"
LATEST_KONF_NAME = "latestkonf"
KONF_SUFFIX = ".yaml"


@dataclass(frozen=True)
class KonfConfig:
    """Locations of the store and the files derived from it."""

    konf_dir: Path
    """Root directory holding the store, active konfs and the latest record."""

    @property
    def store_dir(self) -> Path:
        """Directory with one kubeconfig per cluster and context."""
        return self.konf_dir / STORE_DIR_NAME

    @property
    def active_dir(self) -> Path:
        """Directory with the kubeconfigs currently in use by shell sessions."""
        return self.konf_dir / ACTIVE_DIR_NAME

    @property
    def latest_konf_file(self) -> Path:
        return self.konf_dir / LATEST_KONF_NAME

    def store_path(self, konf_id: str) -> Path:
        """Return the store path of the kubeconfig with the specified id."""
        return self.store_dir / f"{konf_id}{KONF_SUFFIX}"

    def active_path(self, scope_key: str) -> Path:
        """Return the active kubeconfig path for a shell session scope."""
        return self.active_dir / f"{scope_key}{KONF_SUFFIX}"

    @classmethod
    def from_env(cls, konf_dir: str | Path | None = None) -> "KonfConfig":
        """Build the config from an explicit directory, the environment or the default.

        The directory is made absolute, since active paths are handed over to
        the shell which may run in a different working directory.
        """
        if konf_dir is None:
            konf_dir = os.environ.get(KONF_DIR_ENV) or DEFAULT_KONF_DIR
        return cls(konf_dir=Path(konf_dir).expanduser().absolute())
