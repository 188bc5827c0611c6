"""Representation of the kubeconfig files kept in the konf store.

Only the parts of a kubeconfig that konf needs to reason about are modeled
explicitly; everything else in the document is ignored when parsing and kept
untouched on disk, since activation copies the raw bytes.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig
from mashumaro.exceptions import InvalidFieldValue, MissingField
import yaml

from .exceptions import MalformedEntryError

__all__ = [
    "KubeConfig",
    "NamedCluster",
    "NamedContext",
    "StoreEntry",
    "konf_id",
    "konf_id_from_path",
]

ID_SEPARATOR = "_"


def konf_id(cluster: str, context: str) -> str:
    """Return the id used to refer to a kubeconfig in the store."""
    return f"{context}{ID_SEPARATOR}{cluster}"


def konf_id_from_path(path: Path) -> str:
    """Return the id of a store file based on its file name."""
    return path.stem


def _check_type(path: Path, key: str, value: Any, expected: type) -> None:
    """Raise if an optional value is set to something of another type.

    Values are not converted when decoding, so a scalar of the wrong type
    would otherwise be kept as is.
    """
    if value is not None and not isinstance(value, expected):
        raise MalformedEntryError(
            path, f"'{key}' must be of type {expected.__name__}, got {value!r}"
        )


def _check_name(path: Path, key: str, value: Any) -> None:
    if not isinstance(value, str) or not value:
        raise MalformedEntryError(
            path, f"'{key}' must be a non-empty string, got {value!r}"
        )


@dataclass
class BaseManifest(DataClassDictMixin):
    """Base class for all kubeconfig objects."""

    class Config(BaseConfig):
        omit_none = True


@dataclass
class Cluster(BaseManifest):
    """Connection details of a cluster."""

    server: str | None = None
    """The address of the kubernetes api server."""

    certificate_authority: str | None = field(
        metadata=field_options(alias="certificate-authority"), default=None
    )
    """Path to a cert file for the certificate authority."""

    certificate_authority_data: str | None = field(
        metadata=field_options(alias="certificate-authority-data"), default=None
    )
    """PEM-encoded certificate authority certificates."""

    insecure_skip_tls_verify: bool | None = field(
        metadata=field_options(alias="insecure-skip-tls-verify"), default=None
    )

    def check(self, path: Path, prefix: str) -> None:
        """Check the fields hold values of the declared types."""
        _check_type(path, f"{prefix}.server", self.server, str)
        _check_type(
            path,
            f"{prefix}.certificate-authority",
            self.certificate_authority,
            str,
        )
        _check_type(
            path,
            f"{prefix}.certificate-authority-data",
            self.certificate_authority_data,
            str,
        )
        _check_type(
            path,
            f"{prefix}.insecure-skip-tls-verify",
            self.insecure_skip_tls_verify,
            bool,
        )


@dataclass
class NamedCluster(BaseManifest):
    """A cluster along with the name it is referenced by."""

    name: str
    cluster: Cluster | None = None

    def check(self, path: Path, prefix: str) -> None:
        """Check the fields hold values of the declared types."""
        _check_name(path, f"{prefix}.name", self.name)
        if self.cluster is not None:
            self.cluster.check(path, f"{prefix}.cluster")


@dataclass
class Context(BaseManifest):
    """A tuple of references to a cluster, a user and a namespace."""

    cluster: str | None = None
    user: str | None = None
    namespace: str | None = None

    def check(self, path: Path, prefix: str) -> None:
        """Check the fields hold values of the declared types."""
        _check_type(path, f"{prefix}.cluster", self.cluster, str)
        _check_type(path, f"{prefix}.user", self.user, str)
        _check_type(path, f"{prefix}.namespace", self.namespace, str)


@dataclass
class NamedContext(BaseManifest):
    """A context along with the name it is referenced by."""

    name: str
    context: Context | None = None

    def check(self, path: Path, prefix: str) -> None:
        """Check the fields hold values of the declared types."""
        _check_name(path, f"{prefix}.name", self.name)
        if self.context is not None:
            self.context.check(path, f"{prefix}.context")


@dataclass
class NamedUser(BaseManifest):
    """Credentials along with the name they are referenced by."""

    name: str
    user: dict[str, Any] | None = None

    def check(self, path: Path, prefix: str) -> None:
        """Check the fields hold values of the declared types."""
        _check_name(path, f"{prefix}.name", self.name)


@dataclass
class KubeConfig(BaseManifest):
    """A kubeconfig document."""

    api_version: str | None = field(
        metadata=field_options(alias="apiVersion"), default=None
    )
    kind: str | None = None
    clusters: list[NamedCluster] = field(default_factory=list)
    contexts: list[NamedContext] = field(default_factory=list)
    users: list[NamedUser] = field(default_factory=list)
    current_context: str | None = field(
        metadata=field_options(alias="current-context"), default=None
    )
    preferences: dict[str, Any] | None = None

    def check(self, path: Path) -> None:
        """Check the document holds values of the declared types.

        Every named cluster, context and user must have a non-empty string as
        name, so ids are only ever derived from names defined in the file.
        """
        _check_type(path, "apiVersion", self.api_version, str)
        _check_type(path, "kind", self.kind, str)
        _check_type(path, "current-context", self.current_context, str)
        for i, cluster in enumerate(self.clusters):
            cluster.check(path, f"clusters[{i}]")
        for i, context in enumerate(self.contexts):
            context.check(path, f"contexts[{i}]")
        for i, user in enumerate(self.users):
            user.check(path, f"users[{i}]")

    @classmethod
    def parse_doc(cls, doc: Any, path: Path) -> "KubeConfig":
        """Parse a kubeconfig from a loaded yaml document."""
        if not isinstance(doc, dict):
            raise MalformedEntryError(path, "document is not a mapping")
        # Explicit nulls are treated like absent lists
        doc = {k: v for k, v in doc.items() if v is not None}
        try:
            kubeconfig = cls.from_dict(doc)
        except (MissingField, InvalidFieldValue) as err:
            raise MalformedEntryError(path, str(err)) from err
        kubeconfig.check(path)
        return kubeconfig

    @classmethod
    def parse_yaml(cls, content: bytes, path: Path) -> "KubeConfig":
        """Parse a serialized kubeconfig."""
        try:
            doc = yaml.safe_load(content)
        except yaml.YAMLError as err:
            raise MalformedEntryError(path, str(err)) from err
        return cls.parse_doc(doc, path)


@dataclass(frozen=True, order=True)
class StoreEntry:
    """Descriptor of a single kubeconfig in the store."""

    context: str
    """Name of the only context in the kubeconfig."""

    cluster: str
    """Name of the only cluster in the kubeconfig."""

    file: Path
    """Path of the kubeconfig in the store."""

    @property
    def konf_id(self) -> str:
        """Return the id used to select this kubeconfig."""
        return konf_id(self.cluster, self.context)
