"""Scan orchestration across storage resources.

Feeds every share of every discovered resource to the TreeWalker and every
blob container to the FlatWalker. Container walks are independent, so
they run on a bounded thread pool; reports are still yielded in discovery
order so output is deterministic.
"""

import logging
import threading
from collections import deque
from collections.abc import Iterator
from concurrent.futures import Future, ThreadPoolExecutor

from azsnaffler.classifier.classifier import BlobPolicy, Classifier, TreePolicy
from azsnaffler.core.config import ScanSettings
from azsnaffler.models.report import ContainerKind, ContainerReport, ResourceReport
from azsnaffler.providers.base import StorageProvider, StorageResource
from azsnaffler.walkers.flat import FlatWalker
from azsnaffler.walkers.tree import TreeWalker

logger = logging.getLogger(__name__)


class Enumerator:
    """Runs the walkers over everything a provider discovers.

    Args:
        provider: Source of resources and listing handles.
        classifier: Shared, immutable classifier.
        settings: Worker count and depth limit.
        cancel_event: Shared cancellation flag honoured by every walk.
    """

    def __init__(
        self,
        provider: StorageProvider,
        classifier: Classifier,
        settings: ScanSettings | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        self._provider = provider
        self._settings = settings or ScanSettings()
        self._cancel = cancel_event or threading.Event()
        self._tree_walker = TreeWalker(
            TreePolicy(classifier),
            max_depth=self._settings.max_depth,
            cancel_event=self._cancel,
        )
        self._flat_walker = FlatWalker(BlobPolicy(classifier), cancel_event=self._cancel)

    @property
    def cancelled(self) -> bool:
        """Whether the scan was cancelled."""
        return self._cancel.is_set()

    def cancel(self) -> None:
        """Ask every running walk to stop at its next listing step."""
        self._cancel.set()

    def scan(self) -> Iterator[ResourceReport]:
        """Scan every discovered resource.

        Yields:
            ResourceReport per resource, in discovery order.

        Raises:
            ProviderError: If the provider cannot discover resources.
        """
        if self._settings.workers == 1:
            for resource in self._provider.discover():
                if self._cancel.is_set():
                    return
                containers = tuple(
                    self.scan_container(resource, kind, name)
                    for kind, name in self._containers(resource)
                )
                self._provider.release(resource)
                yield ResourceReport(resource=resource, containers=containers)
            return

        pending: deque[tuple[StorageResource, list[Future[ContainerReport]]]] = deque()
        with ThreadPoolExecutor(
            max_workers=self._settings.workers, thread_name_prefix="azsnaffler"
        ) as pool:
            try:
                for resource in self._provider.discover():
                    if self._cancel.is_set():
                        break
                    futures = [
                        pool.submit(self.scan_container, resource, kind, name)
                        for kind, name in self._containers(resource)
                    ]
                    pending.append((resource, futures))

                    while pending and all(f.done() for f in pending[0][1]):
                        yield self._collect(*pending.popleft())

                while pending:
                    yield self._collect(*pending.popleft())
            except (GeneratorExit, KeyboardInterrupt):
                self._cancel.set()
                raise

    def scan_container(
        self,
        resource: StorageResource,
        kind: ContainerKind,
        name: str,
    ) -> ContainerReport:
        """Walk a single container, never raising.

        Args:
            resource: Owning resource.
            kind: Walk as a tree (share) or flat (blob container).
            name: Container name.

        Returns:
            ContainerReport with findings, or with error set on failure.
        """
        logger.debug("Walking %s %s/%s", kind.value, resource.name, name)
        try:
            if kind == ContainerKind.SHARE:
                root = self._provider.open_share(resource, name)
                findings = tuple(self._tree_walker.walk(root))
            else:
                container = self._provider.open_blob_container(resource, name)
                findings = tuple(self._flat_walker.walk(container))
        except Exception as e:
            logger.warning("Failed walking %s %s/%s: %s", kind.value, resource.name, name, e)
            return ContainerReport(
                resource=resource.name, container=name, kind=kind, error=str(e) or type(e).__name__
            )

        return ContainerReport(resource=resource.name, container=name, kind=kind, findings=findings)

    @staticmethod
    def _containers(resource: StorageResource) -> list[tuple[ContainerKind, str]]:
        if resource.error:
            return []
        jobs = [(ContainerKind.SHARE, share) for share in resource.shares]
        jobs.extend((ContainerKind.BLOB, blob) for blob in resource.blob_containers)
        return jobs

    def _collect(
        self,
        resource: StorageResource,
        futures: list[Future[ContainerReport]],
    ) -> ResourceReport:
        containers = tuple(f.result() for f in futures)
        self._provider.release(resource)
        return ResourceReport(resource=resource, containers=containers)
