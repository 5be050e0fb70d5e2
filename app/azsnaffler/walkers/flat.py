"""Single-pass walker for flat object containers."""

import logging
import threading
from collections.abc import Iterator

from azsnaffler.classifier.classifier import DecisionPolicy
from azsnaffler.classifier.models import Candidate, Finding
from azsnaffler.walkers.base import AccessDeniedError, FlatContainer

logger = logging.getLogger(__name__)


class FlatWalker:
    """Classifies every object path of a flat container.

    Args:
        policy: Decision policy for flat containers.
        cancel_event: When set, the walk stops before the next object.
    """

    def __init__(
        self,
        policy: DecisionPolicy,
        *,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._policy = policy
        self._cancel = cancel_event or threading.Event()

    def walk(self, container: FlatContainer) -> Iterator[Finding]:
        """Walk every object in the container.

        A fault on one object is logged and the walk moves on. A fault
        while enumerating ends this container only.

        Args:
            container: Container to enumerate.

        Yields:
            Finding for every raised object.
        """
        try:
            paths = iter(container.list_paths())
            while not self._cancel.is_set():
                blob_path = next(paths, None)
                if blob_path is None:
                    return
                try:
                    finding = self._classify(blob_path)
                except Exception:
                    logger.warning(
                        "Failed classifying %r in %s", blob_path, container.name, exc_info=True
                    )
                    continue
                if finding is not None:
                    yield finding
        except AccessDeniedError:
            logger.debug("Access denied listing container %s", container.name)
            return
        except Exception:
            logger.warning("Failed listing container %s", container.name, exc_info=True)
            return

        logger.info("Walk of container %s cancelled", container.name)

    def _classify(self, blob_path: str) -> Finding | None:
        candidate = Candidate.for_blob(blob_path)
        if self._policy.skip(candidate):
            return None
        reason = self._policy.raise_reason(candidate)
        if reason is None:
            return None
        return Finding(full_path=blob_path, reason=reason)
