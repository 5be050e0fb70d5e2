"""Local and mounted filesystem provider.

Lets the same engine walk a directory on disk, for example an SMB or
Azure Files share mounted on the assessment host. The directory can be
walked as a tree, or flattened into a list of relative object paths to
exercise the flat-container rules.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from azsnaffler.providers.base import StorageProvider, StorageResource
from azsnaffler.walkers.base import (
    AccessDeniedError,
    DirectoryEntry,
    DirectoryHandle,
    FlatContainer,
    ListingFaultError,
)

logger = logging.getLogger(__name__)


class LocalDirectory(DirectoryHandle):
    """DirectoryHandle over a local directory.

    Args:
        root: Filesystem location of this directory.
        path: Path accumulated from the walk root ("" for the root).
    """

    def __init__(self, root: Path, path: str = "") -> None:
        self._root = root
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def list_entries(self) -> Iterator[DirectoryEntry]:
        try:
            entries = sorted(self._root.iterdir())
        except PermissionError as e:
            raise AccessDeniedError(str(self._root)) from e
        except OSError as e:
            raise ListingFaultError(f"Cannot list {self._root}: {e}") from e

        for entry in entries:
            # Symlinks are never followed into, to avoid cycles
            is_directory = entry.is_dir() and not entry.is_symlink()
            yield DirectoryEntry(name=entry.name, is_directory=is_directory)

    def child(self, name: str) -> "LocalDirectory":
        return LocalDirectory(self._root / name, f"{self._path}/{name}")


class LocalFlatContainer(FlatContainer):
    """FlatContainer listing every file below a directory.

    Paths are relative to the root and forward-slash separated, the way
    blob names are.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def name(self) -> str:
        return self._root.name or str(self._root)

    def list_paths(self) -> Iterator[str]:
        if not os.access(self._root, os.R_OK | os.X_OK):
            raise AccessDeniedError(str(self._root))

        def _on_error(exc: OSError) -> None:
            logger.debug("Skipping unreadable directory %s: %s", exc.filename, exc)

        for dirpath, dirnames, filenames in os.walk(self._root, onerror=_on_error):
            dirnames.sort()
            relative = Path(dirpath).relative_to(self._root).as_posix()
            prefix = "" if relative == "." else f"{relative}/"
            for filename in sorted(filenames):
                yield f"{prefix}{filename}"


class LocalProvider(StorageProvider):
    """Provider exposing one local directory as a single resource.

    Args:
        root: Directory to scan.
        flat: If True, expose it as a flat container instead of a share.
    """

    def __init__(self, root: Path, *, flat: bool = False) -> None:
        self._root = root
        self._flat = flat

    def discover(self) -> Iterator[StorageResource]:
        label = self._root.name or str(self._root)
        if not self._root.is_dir():
            yield StorageResource(name=str(self._root), error="Not a directory")
            return

        if self._flat:
            yield StorageResource(name=str(self._root), blob_containers=(label,))
        else:
            yield StorageResource(name=str(self._root), shares=(label,))

    def open_share(self, resource: StorageResource, share: str) -> DirectoryHandle:
        _ = resource, share  # A local provider has exactly one share
        return LocalDirectory(self._root)

    def open_blob_container(self, resource: StorageResource, container: str) -> FlatContainer:
        _ = resource, container
        return LocalFlatContainer(self._root)
