"""Tests for the activation library."""

from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from konf.activation import KonfActivator
from konf.config import KonfConfig
from konf.exceptions import (
    ActivationWriteError,
    KonfNotFoundError,
    LatestReadError,
    LatestWriteError,
    NoPriorSelectionError,
    StoreReadError,
)
from konf.filesystem import InMemoryFilesystem

SCOPE = "4711"


@pytest.fixture
def activator(fs: InMemoryFilesystem, config: KonfConfig) -> KonfActivator:
    """Return an activator working on the in-memory filesystem."""
    return KonfActivator(fs, config)


@pytest.mark.usefixtures("eu_asia_store")
def test_activate(
    activator: KonfActivator,
    fs: InMemoryFilesystem,
    kubeconfigs: dict[str, str],
) -> None:
    """Test the store file is copied to the active path of the scope."""
    path = activator.activate("dev-eu_dev-eu-1", SCOPE)
    assert path == Path("/konf/active/4711.yaml")
    assert fs.read_bytes(path) == kubeconfigs["eu"].encode()
    assert fs.mode(path) == 0o600


@pytest.mark.usefixtures("eu_asia_store")
def test_activate_overwrites(
    activator: KonfActivator, fs: InMemoryFilesystem, config: KonfConfig
) -> None:
    """Test that activating again replaces the active kubeconfig of the scope."""
    activator.activate("dev-eu_dev-eu-1", SCOPE)
    path = activator.activate("dev-asia_dev-asia-1", SCOPE)
    assert fs.read_bytes(path) == fs.read_bytes(
        config.store_path("dev-asia_dev-asia-1")
    )


@pytest.mark.usefixtures("eu_asia_store")
def test_activate_scopes_are_independent(
    activator: KonfActivator, fs: InMemoryFilesystem, kubeconfigs: dict[str, str]
) -> None:
    """Test that each scope has its own active kubeconfig."""
    eu_path = activator.activate("dev-eu_dev-eu-1", "100")
    asia_path = activator.activate("dev-asia_dev-asia-1", "200")
    assert eu_path != asia_path
    assert fs.read_bytes(eu_path) == kubeconfigs["eu"].encode()
    assert fs.read_bytes(asia_path) == kubeconfigs["asia"].encode()


def test_activate_is_byte_copy(
    activator: KonfActivator, fs: InMemoryFilesystem, add_konf: Any
) -> None:
    """Test that the content is copied verbatim, even if not parsed by konf."""
    content = b"# comment kept\napiVersion: v1\r\nclusters: []\n\x00"
    add_konf("raw_raw.yaml", content)
    path = activator.activate("raw_raw", SCOPE)
    assert fs.read_bytes(path) == content


def test_activate_not_found(activator: KonfActivator, fs: InMemoryFilesystem) -> None:
    """Test activating an id without store file."""
    with pytest.raises(KonfNotFoundError, match="i-am-invalid") as exc_info:
        activator.activate("i-am-invalid", SCOPE)
    assert exc_info.value.path == Path("/konf/store/i-am-invalid.yaml")
    assert not fs.exists(Path("/konf/active/4711.yaml"))


@pytest.mark.usefixtures("eu_asia_store")
def test_activate_write_failure(
    activator: KonfActivator, fs: InMemoryFilesystem
) -> None:
    """Test a failure writing the active kubeconfig."""
    with patch.object(fs, "write_bytes", side_effect=PermissionError("denied")):
        with pytest.raises(ActivationWriteError, match="denied"):
            activator.activate("dev-eu_dev-eu-1", SCOPE)


def test_record_and_recall_latest(
    activator: KonfActivator, fs: InMemoryFilesystem
) -> None:
    """Test recalling the recorded konf id."""
    activator.record_latest("context_cluster")
    assert activator.recall_latest() == "context_cluster"
    assert fs.read_bytes(Path("/konf/latestkonf")) == b"context_cluster"
    assert fs.mode(Path("/konf/latestkonf")) == 0o600

    activator.record_latest("other_cluster")
    assert activator.recall_latest() == "other_cluster"


def test_recall_latest_without_record(activator: KonfActivator) -> None:
    """Test recalling before anything was recorded."""
    with pytest.raises(NoPriorSelectionError, match="no konf was yet set"):
        activator.recall_latest()


def test_record_latest_write_failure(
    activator: KonfActivator, fs: InMemoryFilesystem
) -> None:
    """Test a failure writing the latest konf record."""
    with patch.object(fs, "write_bytes", side_effect=OSError("disk full")):
        with pytest.raises(LatestWriteError, match="disk full"):
            activator.record_latest("context_cluster")


def test_activate_store_entry_is_directory(
    activator: KonfActivator, fs: InMemoryFilesystem, config: KonfConfig
) -> None:
    """Test activating an id whose store path is not a file."""
    fs.mkdir(config.store_path("foo"))
    with pytest.raises(StoreReadError, match="Could not read") as exc_info:
        activator.activate("foo", SCOPE)
    assert exc_info.value.path == config.store_path("foo")
    assert not fs.exists(config.active_path(SCOPE))


@pytest.mark.usefixtures("eu_asia_store")
def test_activate_store_entry_unreadable(
    activator: KonfActivator, fs: InMemoryFilesystem
) -> None:
    """Test activating a store file that cannot be read."""
    with patch.object(fs, "read_bytes", side_effect=PermissionError("denied")):
        with pytest.raises(StoreReadError, match="denied"):
            activator.activate("dev-eu_dev-eu-1", SCOPE)


def test_recall_latest_not_decodable(
    activator: KonfActivator, fs: InMemoryFilesystem, config: KonfConfig
) -> None:
    """Test recalling a latest konf record that is not valid text."""
    fs.write_bytes(config.latest_konf_file, b"\xff\xfe", 0o600)
    with pytest.raises(LatestReadError, match="Could not read latest konf"):
        activator.recall_latest()


def test_recall_latest_is_directory(
    activator: KonfActivator, fs: InMemoryFilesystem, config: KonfConfig
) -> None:
    """Test recalling when the latest konf record is not a file."""
    fs.mkdir(config.latest_konf_file)
    with pytest.raises(LatestReadError):
        activator.recall_latest()
