"""Rule evaluation for tree-shaped and flat storage containers.

The Classifier holds the only copy of the matching logic. Walkers do not
call it directly; they go through a DecisionPolicy, which adapts one
traversal shape (directory tree or flat object list) to the shared
``skip`` / ``raise_reason`` contract.

Precedence, highest first:

1. Skip rules (excluded directory names, extensions, path suffixes).
2. Interesting directory name anywhere in the path (flat paths only).
3. Interesting path suffix.
4. Interesting filename substring.
5. Interesting extension.

All predicates accept any string, including the empty string.
"""

from abc import ABC, abstractmethod

from azsnaffler.classifier.models import Candidate, EntryKind, ReasonKind
from azsnaffler.rules.ruleset import RuleSet


def _ends_with_any(value: str, suffixes: tuple[str, ...]) -> bool:
    return any(value.endswith(suffix) for suffix in suffixes)


def _path_matches_suffix(path: str, suffixes: tuple[str, ...]) -> bool:
    """Check whether the path, or any of its ancestors, ends with a suffix.

    ``/home/u/.ssh/id_rsa`` matches ``.ssh`` through its parent directory.
    """
    return any(path.endswith(suffix) or f"{suffix}/" in path for suffix in suffixes)


class Classifier:
    """Decides skip / raise / pass-through for storage entries.

    Pure and stateless beyond its immutable rule set, so one instance can
    be shared by any number of concurrent walks.

    Args:
        rules: Rule tables to evaluate against.
    """

    def __init__(self, rules: RuleSet) -> None:
        self._rules = rules
        self._upper = rules.upper

    @property
    def rules(self) -> RuleSet:
        """The rule set this classifier evaluates."""
        return self._rules

    # === Hierarchical containers ===

    def should_skip_container(self, name: str) -> bool:
        """Check whether a sub-container must not be descended into."""
        return name.upper() in self._upper.excluded_directory_names

    def should_raise_container(self, name: str) -> bool:
        """Check whether a sub-container's name is itself noteworthy.

        A raised container is still walked.
        """
        return name.upper() in self._upper.interesting_directory_names

    def should_skip_file(self, full_path: str, name: str) -> bool:
        """Check whether a file is known-benign.

        Args:
            full_path: Path accumulated from the container root.
            name: File name.

        Returns:
            True if the name ends with an excluded extension or the path
            matches an excluded path suffix.
        """
        upper = self._upper
        return _ends_with_any(name.upper(), upper.excluded_extensions) or _path_matches_suffix(
            full_path.upper(), upper.excluded_path_suffixes
        )

    def should_raise_file(self, full_path: str, name: str) -> ReasonKind | None:
        """Decide whether a non-skipped file is interesting, and why.

        Args:
            full_path: Path accumulated from the container root.
            name: File name.

        Returns:
            The first matching reason (path, then name, then extension),
            or None if the file is not interesting.
        """
        upper = self._upper
        path_upper = full_path.upper()
        name_upper = name.upper()

        if _path_matches_suffix(path_upper, upper.interesting_path_suffixes):
            return ReasonKind.PATH
        if any(token in name_upper for token in upper.interesting_filename_substrings):
            return ReasonKind.NAME
        if _ends_with_any(name_upper, upper.interesting_extensions):
            return ReasonKind.EXTENSION
        return None

    # === Flat containers ===

    def should_skip_blob(self, blob_path: str) -> bool:
        """Check whether a flat object is known-benign.

        Besides the file skip rules, an object is skipped when its path
        contains an excluded directory name anywhere, leaf included.
        """
        path_upper = blob_path.upper()
        if any(token in path_upper for token in self._upper.excluded_directory_names):
            return True
        return self.should_skip_file(blob_path, blob_path.rsplit("/", 1)[-1])

    def should_raise_blob(self, blob_path: str) -> ReasonKind | None:
        """Decide whether a non-skipped flat object is interesting, and why.

        A path containing an interesting directory name anywhere wins with
        reason ``directory``; otherwise the file raise rules apply to the
        full path and the last segment.
        """
        path_upper = blob_path.upper()
        if any(token in path_upper for token in self._upper.interesting_directory_names):
            return ReasonKind.DIRECTORY
        return self.should_raise_file(blob_path, blob_path.rsplit("/", 1)[-1])


class DecisionPolicy(ABC):
    """Uniform decision contract consumed by the walkers.

    Example:
        >>> policy = TreePolicy(Classifier(RuleSet()))
        >>> candidate = Candidate("logo.PNG", "/web/logo.PNG", EntryKind.FILE)
        >>> policy.skip(candidate)
        True
    """

    def __init__(self, classifier: Classifier) -> None:
        self._classifier = classifier

    @property
    def classifier(self) -> Classifier:
        """The classifier this policy delegates to."""
        return self._classifier

    @abstractmethod
    def skip(self, candidate: Candidate) -> bool:
        """Return True if the candidate must be ignored (and not descended)."""

    @abstractmethod
    def raise_reason(self, candidate: Candidate) -> ReasonKind | None:
        """Return why the candidate is interesting, or None."""


class TreePolicy(DecisionPolicy):
    """Policy for directory trees, dispatching on container vs file."""

    def skip(self, candidate: Candidate) -> bool:
        if candidate.kind == EntryKind.CONTAINER:
            return self._classifier.should_skip_container(candidate.name)
        return self._classifier.should_skip_file(candidate.full_path, candidate.name)

    def raise_reason(self, candidate: Candidate) -> ReasonKind | None:
        if candidate.kind == EntryKind.CONTAINER:
            if self._classifier.should_raise_container(candidate.name):
                return ReasonKind.DIRECTORY
            return None
        return self._classifier.should_raise_file(candidate.full_path, candidate.name)


class BlobPolicy(DecisionPolicy):
    """Policy for flat object containers, keyed on the full object path."""

    def skip(self, candidate: Candidate) -> bool:
        return self._classifier.should_skip_blob(candidate.full_path)

    def raise_reason(self, candidate: Candidate) -> ReasonKind | None:
        return self._classifier.should_raise_blob(candidate.full_path)
