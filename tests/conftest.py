"""Test fixtures for konf."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from konf.config import KonfConfig
from konf.filesystem import InMemoryFilesystem

KONF_DIR = Path("/konf")

KonfWriter = Callable[[str, str | bytes], Path]


def make_kubeconfig(contexts: list[str], clusters: list[str]) -> str:
    """Return a kubeconfig document with the given context and cluster names."""
    doc: dict[str, Any] = {
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": [
            {
                "name": cluster,
                "cluster": {
                    "server": f"https://{cluster}.example.com:6443",
                    "certificate-authority-data": "LS0tLS1CRUdJTi==",
                },
            }
            for cluster in clusters
        ],
        "contexts": [
            {
                "name": context,
                "context": {"cluster": clusters[0], "user": f"{context}-admin"},
            }
            for context in contexts
        ],
        "users": [
            {"name": f"{context}-admin", "user": {"token": "secret"}}
            for context in contexts
        ],
        "current-context": contexts[0],
    }
    return yaml.dump(doc, sort_keys=False)


KUBECONFIG_EU = make_kubeconfig(["dev-eu"], ["dev-eu-1"])
KUBECONFIG_ASIA = make_kubeconfig(["dev-asia"], ["dev-asia-1"])
KUBECONFIG_MULTI_CLUSTER = make_kubeconfig(["dev-eu"], ["dev-eu-1", "dev-eu-2"])
KUBECONFIG_MULTI_CONTEXT = make_kubeconfig(["dev-eu", "dev-eu-admin"], ["dev-eu-1"])
INVALID_YAML = "apiVersion: v1\nclusters: [dev-eu-1\n"


@pytest.fixture
def kubeconfigs() -> dict[str, str]:
    """Return sample store file contents by name."""
    return {
        "eu": KUBECONFIG_EU,
        "asia": KUBECONFIG_ASIA,
        "multi_cluster": KUBECONFIG_MULTI_CLUSTER,
        "multi_context": KUBECONFIG_MULTI_CONTEXT,
        "invalid": INVALID_YAML,
    }


@pytest.fixture(name="config")
def config_fixture() -> KonfConfig:
    """Return the config for a konf directory in the in-memory filesystem."""
    return KonfConfig(konf_dir=KONF_DIR)


@pytest.fixture(name="fs")
def fs_fixture(config: KonfConfig) -> InMemoryFilesystem:
    """Return an in-memory filesystem with an empty store."""
    fs = InMemoryFilesystem()
    fs.mkdir(config.store_dir)
    return fs


@pytest.fixture
def add_konf(fs: InMemoryFilesystem, config: KonfConfig) -> KonfWriter:
    """Return a function that writes a file to the store."""

    def _add(name: str, content: str | bytes) -> Path:
        path = config.store_dir / name
        data = content.encode() if isinstance(content, str) else content
        fs.write_bytes(path, data, 0o600)
        return path

    return _add


@pytest.fixture
def eu_asia_store(add_konf: KonfWriter) -> None:
    """Populate the store with two valid kubeconfigs."""
    add_konf("dev-eu_dev-eu-1.yaml", KUBECONFIG_EU)
    add_konf("dev-asia_dev-asia-1.yaml", KUBECONFIG_ASIA)
