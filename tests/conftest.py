"""Pytest configuration and shared fixtures.

Provides in-memory listing collaborators so walkers and the enumerator
can be exercised without any storage backend.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from azsnaffler.classifier.classifier import BlobPolicy, Classifier, TreePolicy
from azsnaffler.providers.base import StorageProvider, StorageResource
from azsnaffler.rules.ruleset import RuleSet
from azsnaffler.walkers.base import (
    AccessDeniedError,
    DirectoryEntry,
    DirectoryHandle,
    FlatContainer,
    ListingFaultError,
)

# A nested dict is a directory, None is a file, and an exception
# instance is a directory whose listing raises that exception.
Tree = dict[str, Any]


class FakeDirectory(DirectoryHandle):
    """DirectoryHandle over a nested dict."""

    def __init__(self, tree: Tree | Exception, path: str = "") -> None:
        self._tree = tree
        self._path = path
        self.listed: list[str] = []

    @property
    def path(self) -> str:
        return self._path

    def list_entries(self) -> Iterator[DirectoryEntry]:
        if isinstance(self._tree, Exception):
            raise self._tree
        for name, value in self._tree.items():
            yield DirectoryEntry(name=name, is_directory=value is not None)

    def child(self, name: str) -> "FakeDirectory":
        assert isinstance(self._tree, dict)
        return FakeDirectory(self._tree[name], f"{self._path}/{name}")


class FakeFlatContainer(FlatContainer):
    """FlatContainer over a list of paths, optionally failing mid-way."""

    def __init__(
        self,
        paths: list[str],
        name: str = "container",
        fail_after: int | None = None,
        error: Exception | None = None,
    ) -> None:
        self._paths = paths
        self._name = name
        self._fail_after = fail_after
        self._error = error or ListingFaultError("listing broke")

    @property
    def name(self) -> str:
        return self._name

    def list_paths(self) -> Iterator[str]:
        for index, path in enumerate(self._paths):
            if self._fail_after is not None and index == self._fail_after:
                raise self._error
            yield path


class FakeProvider(StorageProvider):
    """Provider serving fake shares and blob containers per resource."""

    def __init__(
        self,
        resources: list[StorageResource],
        shares: dict[tuple[str, str], Tree | Exception] | None = None,
        blobs: dict[tuple[str, str], list[str]] | None = None,
    ) -> None:
        self._resources = resources
        self._shares = shares or {}
        self._blobs = blobs or {}

    def discover(self) -> Iterator[StorageResource]:
        yield from self._resources

    def open_share(self, resource: StorageResource, share: str) -> DirectoryHandle:
        return FakeDirectory(self._shares[(resource.name, share)])

    def open_blob_container(self, resource: StorageResource, container: str) -> FlatContainer:
        return FakeFlatContainer(self._blobs[(resource.name, container)], name=container)


@pytest.fixture
def ruleset() -> RuleSet:
    """Default rule set."""
    return RuleSet()


@pytest.fixture
def classifier(ruleset: RuleSet) -> Classifier:
    """Classifier over the default rule set."""
    return Classifier(ruleset)


@pytest.fixture
def tree_policy(classifier: Classifier) -> TreePolicy:
    """Tree-shaped decision policy."""
    return TreePolicy(classifier)


@pytest.fixture
def blob_policy(classifier: Classifier) -> BlobPolicy:
    """Flat-container decision policy."""
    return BlobPolicy(classifier)


@pytest.fixture
def sample_share() -> Tree:
    """A share with restricted, excluded and interesting content."""
    return {
        "public": {
            "web.config": None,
            "logo.PNG": None,
            "readme.md": None,
        },
        "restricted": AccessDeniedError("/restricted"),
        "IPC$": {"passwords.txt": None},
        "ADMIN$": {"unattend.xml": None},
        "home": {"user": {".ssh": {"id_rsa": None, "known_hosts": None}}},
    }


@pytest.fixture
def config_home(
    tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory so user files are never read."""
    home = tmp_path_factory.mktemp("config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    return home / "azsnaffler"
