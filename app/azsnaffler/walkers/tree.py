"""Depth-first walker for hierarchical containers.

Walks a file share (or any DirectoryHandle) without recursion, using an
explicit stack of child iterators so that pathological nesting cannot
exhaust the interpreter stack. Each stack frame carries its own
accumulated path.
"""

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass

from azsnaffler.classifier.classifier import DecisionPolicy
from azsnaffler.classifier.models import Candidate, EntryKind, Finding
from azsnaffler.walkers.base import AccessDeniedError, DirectoryEntry, DirectoryHandle

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256


@dataclass(slots=True)
class _Frame:
    """One directory being listed."""

    handle: DirectoryHandle
    path: str
    depth: int
    entries: Iterator[DirectoryEntry] | None = None


class TreeWalker:
    """Walks a directory tree and yields findings in arrival order.

    Args:
        policy: Decision policy for tree-shaped containers.
        max_depth: Directories nested deeper than this are not descended.
        cancel_event: When set, the walk stops at the next listing step.
    """

    def __init__(
        self,
        policy: DecisionPolicy,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._policy = policy
        self._max_depth = max_depth
        self._cancel = cancel_event or threading.Event()

    def walk(self, root: DirectoryHandle) -> Iterator[Finding]:
        """Walk everything reachable from root.

        Access denials end the affected sub-tree silently. Other faults
        are logged and abandon only the directory in which they occur.

        Args:
            root: Root directory of the container.

        Yields:
            Finding for every raised directory or file.
        """
        stack: list[_Frame] = [_Frame(handle=root, path="", depth=0)]

        while stack:
            if self._cancel.is_set():
                logger.info("Walk cancelled at %s", stack[-1].path or "/")
                return

            frame = stack[-1]
            try:
                if frame.entries is None:
                    frame.entries = iter(frame.handle.list_entries())
                entry = next(frame.entries, None)
            except AccessDeniedError:
                logger.debug("Access denied listing %s", frame.path or "/")
                stack.pop()
                continue
            except Exception:
                logger.warning("Failed listing %s", frame.path or "/", exc_info=True)
                stack.pop()
                continue

            if entry is None:
                stack.pop()
                continue

            full_path = f"{frame.path}/{entry.name}"

            if not entry.is_directory:
                finding = self._classify_file(entry.name, full_path)
                if finding is not None:
                    yield finding
                continue

            candidate = Candidate(name=entry.name, full_path=full_path, kind=EntryKind.CONTAINER)
            if self._policy.skip(candidate):
                continue

            reason = self._policy.raise_reason(candidate)
            if reason is not None:
                yield Finding(full_path=full_path, reason=reason)

            child_frame = self._open_child(frame, entry.name, full_path)
            if child_frame is not None:
                stack.append(child_frame)

    def _classify_file(self, name: str, full_path: str) -> Finding | None:
        candidate = Candidate(name=name, full_path=full_path, kind=EntryKind.FILE)
        if self._policy.skip(candidate):
            return None
        reason = self._policy.raise_reason(candidate)
        if reason is None:
            return None
        return Finding(full_path=full_path, reason=reason)

    def _open_child(self, parent: _Frame, name: str, full_path: str) -> _Frame | None:
        """Build the stack frame for a sub-directory, or None if unreachable."""
        depth = parent.depth + 1
        if depth > self._max_depth:
            logger.warning(
                "Maximum depth %d reached, not descending into %s", self._max_depth, full_path
            )
            return None

        try:
            handle = parent.handle.child(name)
        except AccessDeniedError:
            logger.debug("Access denied opening %s", full_path)
            return None
        except Exception:
            logger.warning("Failed opening %s", full_path, exc_info=True)
            return None

        return _Frame(handle=handle, path=full_path, depth=depth)
