"""Azure storage provider.

Discovers storage accounts in every visible subscription, retrieves an
account key for each, and exposes file shares as directory trees and
blob containers as flat containers. Key-based connection strings are
used for data-plane access so that listing works regardless of RBAC data
roles on the caller's identity.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from azure.core.exceptions import AzureError, ClientAuthenticationError, HttpResponseError
from azure.identity import DefaultAzureCredential
from azure.mgmt.resource import SubscriptionClient
from azure.mgmt.storage import StorageManagementClient
from azure.storage.blob import ContainerClient
from azure.storage.fileshare import ShareClient, ShareDirectoryClient

from azsnaffler.core.config import ScanSettings
from azsnaffler.providers.base import ProviderError, StorageProvider, StorageResource
from azsnaffler.walkers.base import (
    AccessDeniedError,
    DirectoryEntry,
    DirectoryHandle,
    FlatContainer,
    ListingError,
    ListingFaultError,
)

logger = logging.getLogger(__name__)

ENDPOINT_SUFFIX = "core.windows.net"

_DENIED_STATUS_CODES: frozenset[int] = frozenset({401, 403})


def _translate_error(exc: AzureError, target: str) -> ListingError:
    """Map an SDK exception to the walker's two failure kinds."""
    if isinstance(exc, ClientAuthenticationError):
        return AccessDeniedError(target)
    if isinstance(exc, HttpResponseError) and exc.status_code in _DENIED_STATUS_CODES:
        return AccessDeniedError(target)
    return ListingFaultError(f"{target}: {exc}")


def build_connection_string(account_name: str, account_key: str) -> str:
    """Build a key-based storage connection string."""
    return (
        "DefaultEndpointsProtocol=https;"
        f"AccountName={account_name};"
        f"AccountKey={account_key};"
        f"EndpointSuffix={ENDPOINT_SUFFIX}"
    )


def parse_resource_group(resource_id: str) -> str | None:
    """Extract the resource group name from an ARM resource id.

    Args:
        resource_id: e.g. ``/subscriptions/x/resourceGroups/rg/providers/...``.

    Returns:
        The resource group name, or None if the id has none.
    """
    parts = resource_id.split("/")
    for index, part in enumerate(parts[:-1]):
        if part.lower() == "resourcegroups":
            return parts[index + 1] or None
    return None


class AzureShareDirectory(DirectoryHandle):
    """DirectoryHandle over an Azure Files directory client."""

    def __init__(self, client: ShareDirectoryClient, path: str = "") -> None:
        self._client = client
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def list_entries(self) -> Iterator[DirectoryEntry]:
        try:
            for item in self._client.list_directories_and_files():
                yield DirectoryEntry(name=item["name"], is_directory=bool(item["is_directory"]))
        except AzureError as e:
            raise _translate_error(e, self._path or "/") from e

    def child(self, name: str) -> "AzureShareDirectory":
        return AzureShareDirectory(
            self._client.get_subdirectory_client(name),
            f"{self._path}/{name}",
        )


class AzureBlobContainer(FlatContainer):
    """FlatContainer over an Azure blob container client."""

    def __init__(self, client: ContainerClient, name: str) -> None:
        self._client = client
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def list_paths(self) -> Iterator[str]:
        try:
            yield from self._client.list_blob_names()
        except AzureError as e:
            raise _translate_error(e, self._name) from e


class AzureProvider(StorageProvider):
    """Discovers Azure storage accounts and opens their containers.

    Args:
        settings: Scan settings (subscription filter, container kinds, auth).
        credential: Token credential. Defaults to DefaultAzureCredential.
    """

    def __init__(self, settings: ScanSettings, credential: Any | None = None) -> None:
        self._settings = settings
        self._credential = credential
        # Account name -> connection string, held from discovery until release()
        self._connection_strings: dict[str, str] = {}

    def _get_credential(self) -> Any:
        if self._credential is None:
            self._credential = DefaultAzureCredential(
                exclude_interactive_browser_credential=not self._settings.interactive_auth
            )
        return self._credential

    def discover(self) -> Iterator[StorageResource]:
        """Yield every storage account in the selected subscriptions.

        Raises:
            ProviderError: If subscriptions cannot be listed.
        """
        credential = self._get_credential()

        try:
            subscriptions = list(SubscriptionClient(credential).subscriptions.list())
        except AzureError as e:
            raise ProviderError(f"Cannot list subscriptions: {e}") from e

        wanted = {s.lower() for s in self._settings.subscriptions}
        selected = [
            sub
            for sub in subscriptions
            if not wanted
            or (sub.subscription_id or "").lower() in wanted
            or (sub.display_name or "").lower() in wanted
        ]
        if not selected:
            raise ProviderError("No subscriptions found")

        for sub in selected:
            logger.info("Scanning subscription %s (%s)", sub.display_name, sub.subscription_id)
            client = StorageManagementClient(credential, sub.subscription_id)
            try:
                accounts = list(client.storage_accounts.list())
            except AzureError as e:
                logger.warning("Cannot list storage accounts in %s: %s", sub.display_name, e)
                continue

            for account in accounts:
                yield self._describe_account(client, account, sub.display_name)

    def _describe_account(
        self,
        client: StorageManagementClient,
        account: Any,
        subscription: str | None,
    ) -> StorageResource:
        """List the containers of one storage account."""
        name: str = account.name
        resource_group = parse_resource_group(account.id or "")
        if resource_group is None:
            return StorageResource(name=name, subscription=subscription, error="No resource group")

        try:
            keys = client.storage_accounts.list_keys(resource_group, name).keys or []
        except AzureError as e:
            logger.debug("Cannot list keys for %s: %s", name, e)
            keys = []
        if not keys:
            return StorageResource(name=name, subscription=subscription, error="No access keys")

        self._connection_strings[name] = build_connection_string(name, keys[0].value)

        shares: tuple[str, ...] = ()
        blobs: tuple[str, ...] = ()
        tables: tuple[str, ...] = ()
        if self._settings.scan_shares:
            shares = self._list_names(
                lambda: client.file_shares.list(resource_group, name), "file shares", name
            )
        if self._settings.scan_blobs:
            blobs = self._list_names(
                lambda: client.blob_containers.list(resource_group, name), "blob containers", name
            )
        if self._settings.list_tables:
            tables = self._list_names(
                lambda: client.table.list(resource_group, name), "tables", name
            )

        return StorageResource(
            name=name,
            subscription=subscription,
            shares=shares,
            blob_containers=blobs,
            tables=tables,
        )

    @staticmethod
    def _list_names(
        fetch: Callable[[], Iterable[Any]],
        what: str,
        account: str,
    ) -> tuple[str, ...]:
        try:
            return tuple(item.name for item in fetch())
        except AzureError as e:
            logger.warning("Cannot list %s for %s: %s", what, account, e)
            return ()

    def _connection_string(self, resource: StorageResource) -> str:
        try:
            return self._connection_strings[resource.name]
        except KeyError:
            raise ListingFaultError(f"No credentials for storage account {resource.name}") from None

    def release(self, resource: StorageResource) -> None:
        self._connection_strings.pop(resource.name, None)

    def open_share(self, resource: StorageResource, share: str) -> DirectoryHandle:
        client = ShareClient.from_connection_string(self._connection_string(resource), share)
        return AzureShareDirectory(client.get_directory_client(""))

    def open_blob_container(self, resource: StorageResource, container: str) -> FlatContainer:
        client = ContainerClient.from_connection_string(
            self._connection_string(resource), container
        )
        return AzureBlobContainer(client, container)
