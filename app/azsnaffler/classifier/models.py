"""Classification domain models.

Defines the transient candidate passed to the classifier and the
finding it produces for the reporting layer.
"""

from dataclasses import dataclass
from enum import Enum


class ReasonKind(str, Enum):
    """Rule category that caused an entry to be reported.

    Attributes:
        PATH: Full path matched a known-sensitive path suffix.
        NAME: File name contained an interesting token.
        EXTENSION: File name ended with an interesting extension.
        DIRECTORY: Directory name (or blob path) contains an interesting name.
    """

    PATH = "path"
    NAME = "name"
    EXTENSION = "extension"
    DIRECTORY = "directory"


class EntryKind(str, Enum):
    """Shape of the entry under classification."""

    CONTAINER = "container"
    FILE = "file"
    BLOB = "blob"


@dataclass(frozen=True, slots=True)
class Candidate:
    """One entry under consideration by the classifier.

    Attributes:
        name: Leaf component (directory or file name; last segment for blobs).
        full_path: Path accumulated from the container root, forward-slash
            separated. For blobs this is the object path as listed.
        kind: Whether this is a sub-container, a file, or a flat object.
    """

    name: str
    full_path: str
    kind: EntryKind

    @classmethod
    def for_blob(cls, blob_path: str) -> "Candidate":
        """Build a candidate from a flat object path."""
        return cls(name=blob_path.rsplit("/", 1)[-1], full_path=blob_path, kind=EntryKind.BLOB)


@dataclass(frozen=True, slots=True)
class Finding:
    """An entry judged sensitive.

    Attributes:
        full_path: Path of the reported entry.
        reason: Rule category that triggered the report.
    """

    full_path: str
    reason: ReasonKind

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"path": self.full_path, "reason": self.reason.value}
