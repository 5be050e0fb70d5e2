"""Tests for the Azure storage provider.

All SDK clients are patched; no network access happens.
"""

from collections.abc import Iterator
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from azsnaffler.core.config import ScanSettings
from azsnaffler.providers.azure import (
    AzureBlobContainer,
    AzureProvider,
    AzureShareDirectory,
    build_connection_string,
    parse_resource_group,
)
from azsnaffler.providers.base import ProviderError, StorageResource
from azsnaffler.walkers.base import AccessDeniedError, DirectoryEntry, ListingFaultError
from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
)

MODULE = "azsnaffler.providers.azure"
ACCOUNT_ID = (
    "/subscriptions/0000/resourceGroups/rg-data/providers/"
    "Microsoft.Storage/storageAccounts/acct1"
)


def _http_error(status: int) -> HttpResponseError:
    error = HttpResponseError(message=f"status {status}")
    error.status_code = status
    return error


def _named(*names: str) -> list[SimpleNamespace]:
    return [SimpleNamespace(name=n) for n in names]


class TestHelpers:
    """Tests for module-level helpers."""

    def test_connection_string(self) -> None:
        """The connection string carries name, key and endpoint suffix."""
        value = build_connection_string("acct", "a2V5")
        assert value == (
            "DefaultEndpointsProtocol=https;AccountName=acct;"
            "AccountKey=a2V5;EndpointSuffix=core.windows.net"
        )

    @pytest.mark.parametrize(
        ("resource_id", "expected"),
        [
            (ACCOUNT_ID, "rg-data"),
            ("/subscriptions/0000/resourcegroups/Other/providers/x", "Other"),
            ("/subscriptions/0000/providers/x", None),
            ("/subscriptions/0000/resourceGroups", None),
            ("", None),
        ],
    )
    def test_parse_resource_group(self, resource_id: str, expected: str | None) -> None:
        """The resource group segment follows 'resourceGroups'."""
        assert parse_resource_group(resource_id) == expected


class TestAzureShareDirectory:
    """Tests for AzureShareDirectory."""

    def test_list_entries(self) -> None:
        """SDK items become DirectoryEntry values."""
        client = MagicMock()
        client.list_directories_and_files.return_value = [
            {"name": "docs", "is_directory": True},
            {"name": "id_rsa", "is_directory": False},
        ]

        entries = list(AzureShareDirectory(client).list_entries())

        assert entries == [DirectoryEntry("docs", True), DirectoryEntry("id_rsa", False)]

    @pytest.mark.parametrize(
        "error",
        [ClientAuthenticationError(message="expired"), _http_error(403), _http_error(401)],
    )
    def test_denied(self, error: Exception) -> None:
        """Authentication and authorization failures are access denials."""
        client = MagicMock()
        client.list_directories_and_files.side_effect = error
        with pytest.raises(AccessDeniedError):
            list(AzureShareDirectory(client, "/locked").list_entries())

    @pytest.mark.parametrize(
        "error",
        [_http_error(500), ResourceNotFoundError(message="gone"), ServiceRequestError("dns")],
    )
    def test_fault(self, error: Exception) -> None:
        """Other SDK failures are listing faults."""
        client = MagicMock()
        client.list_directories_and_files.side_effect = error
        with pytest.raises(ListingFaultError):
            list(AzureShareDirectory(client).list_entries())

    def test_fault_part_way(self) -> None:
        """A failure during paging surfaces after earlier entries."""

        def pages() -> Iterator[dict[str, object]]:
            yield {"name": "a.txt", "is_directory": False}
            raise _http_error(503)

        client = MagicMock()
        client.list_directories_and_files.return_value = pages()
        entries = AzureShareDirectory(client).list_entries()

        assert next(entries).name == "a.txt"
        with pytest.raises(ListingFaultError):
            next(entries)

    def test_child(self) -> None:
        """child() builds a sub-directory client and extends the path."""
        client = MagicMock()
        child = AzureShareDirectory(client, "/a").child("b")

        client.get_subdirectory_client.assert_called_once_with("b")
        assert child.path == "/a/b"


class TestAzureBlobContainer:
    """Tests for AzureBlobContainer."""

    def test_list_paths(self) -> None:
        """Blob names are passed through."""
        client = MagicMock()
        client.list_blob_names.return_value = iter(["a/b.txt", "c.ps1"])
        container = AzureBlobContainer(client, "backups")

        assert container.name == "backups"
        assert list(container.list_paths()) == ["a/b.txt", "c.ps1"]

    def test_denied(self) -> None:
        """A 403 from the service is an access denial."""
        client = MagicMock()
        client.list_blob_names.side_effect = _http_error(403)
        with pytest.raises(AccessDeniedError):
            list(AzureBlobContainer(client, "locked").list_paths())


@pytest.fixture
def subscriptions() -> list[SimpleNamespace]:
    """Two visible subscriptions."""
    return [
        SimpleNamespace(subscription_id="sub-1", display_name="Production"),
        SimpleNamespace(subscription_id="sub-2", display_name="Sandbox"),
    ]


@pytest.fixture
def storage_client() -> MagicMock:
    """Management client with one fully readable account."""
    client = MagicMock()
    client.storage_accounts.list.return_value = [SimpleNamespace(name="acct1", id=ACCOUNT_ID)]
    client.storage_accounts.list_keys.return_value = SimpleNamespace(
        keys=[SimpleNamespace(value="a2V5")]
    )
    client.file_shares.list.return_value = _named("files")
    client.blob_containers.list.return_value = _named("backups", "logs")
    client.table.list.return_value = _named("audit")
    return client


class TestAzureProviderDiscover:
    """Tests for AzureProvider.discover."""

    def _discover(
        self,
        settings: ScanSettings,
        subscriptions: list[SimpleNamespace],
        storage_client: MagicMock,
    ) -> tuple[list[StorageResource], MagicMock]:
        with (
            patch(f"{MODULE}.SubscriptionClient") as sub_cls,
            patch(f"{MODULE}.StorageManagementClient", return_value=storage_client) as mgmt_cls,
        ):
            sub_cls.return_value.subscriptions.list.return_value = subscriptions
            provider = AzureProvider(settings, credential=object())
            return list(provider.discover()), mgmt_cls

    def test_discovers_accounts(
        self, subscriptions: list[SimpleNamespace], storage_client: MagicMock
    ) -> None:
        """Every account in every subscription is described."""
        resources, mgmt_cls = self._discover(ScanSettings(), subscriptions, storage_client)

        assert mgmt_cls.call_count == 2
        assert resources[0] == StorageResource(
            name="acct1",
            subscription="Production",
            shares=("files",),
            blob_containers=("backups", "logs"),
            tables=("audit",),
        )
        storage_client.storage_accounts.list_keys.assert_called_with("rg-data", "acct1")

    def test_subscription_filter(
        self, subscriptions: list[SimpleNamespace], storage_client: MagicMock
    ) -> None:
        """Subscriptions can be selected by id or display name."""
        settings = ScanSettings(subscriptions=["sandbox"])
        resources, mgmt_cls = self._discover(settings, subscriptions, storage_client)

        mgmt_cls.assert_called_once()
        assert mgmt_cls.call_args.args[1] == "sub-2"
        assert [r.subscription for r in resources] == ["Sandbox"]

    def test_no_matching_subscription(
        self, subscriptions: list[SimpleNamespace], storage_client: MagicMock
    ) -> None:
        """An empty selection is a provider error."""
        with pytest.raises(ProviderError, match="No subscriptions"):
            self._discover(ScanSettings(subscriptions=["nope"]), subscriptions, storage_client)

    def test_subscription_listing_fails(self, storage_client: MagicMock) -> None:
        """Failing to list subscriptions is a provider error."""
        with patch(f"{MODULE}.SubscriptionClient") as sub_cls:
            sub_cls.return_value.subscriptions.list.side_effect = ClientAuthenticationError(
                message="no login"
            )
            provider = AzureProvider(ScanSettings(), credential=object())
            with pytest.raises(ProviderError, match="Cannot list subscriptions"):
                list(provider.discover())

    def test_container_kinds_disabled(
        self, subscriptions: list[SimpleNamespace], storage_client: MagicMock
    ) -> None:
        """Disabled container kinds are not listed."""
        settings = ScanSettings(scan_blobs=False, list_tables=False)
        resources, _ = self._discover(settings, subscriptions[:1], storage_client)

        assert resources[0].blob_containers == ()
        assert resources[0].tables == ()
        storage_client.blob_containers.list.assert_not_called()

    def test_no_keys(
        self, subscriptions: list[SimpleNamespace], storage_client: MagicMock
    ) -> None:
        """An account whose keys cannot be read is reported with an error."""
        storage_client.storage_accounts.list_keys.side_effect = _http_error(403)
        resources, _ = self._discover(ScanSettings(), subscriptions[:1], storage_client)

        assert resources == [
            StorageResource(name="acct1", subscription="Production", error="No access keys")
        ]
        storage_client.file_shares.list.assert_not_called()

    def test_no_resource_group(
        self, subscriptions: list[SimpleNamespace], storage_client: MagicMock
    ) -> None:
        """An account id without a resource group is reported with an error."""
        storage_client.storage_accounts.list.return_value = [
            SimpleNamespace(name="odd", id="/subscriptions/sub-1")
        ]
        resources, _ = self._discover(ScanSettings(), subscriptions[:1], storage_client)
        assert resources[0].error == "No resource group"

    def test_share_listing_fails(
        self, subscriptions: list[SimpleNamespace], storage_client: MagicMock
    ) -> None:
        """A failing container listing leaves that kind empty."""
        storage_client.file_shares.list.side_effect = _http_error(409)
        resources, _ = self._discover(ScanSettings(), subscriptions[:1], storage_client)

        assert resources[0].shares == ()
        assert resources[0].blob_containers == ("backups", "logs")
        assert resources[0].error is None


class TestAzureProviderOpen:
    """Tests for opening containers."""

    def test_open_requires_discovery(self) -> None:
        """Opening a container of an unknown account fails."""
        provider = AzureProvider(ScanSettings(), credential=object())
        with pytest.raises(ListingFaultError, match="No credentials"):
            provider.open_share(StorageResource(name="unknown"), "files")

    def test_open_share_and_container(
        self, subscriptions: list[SimpleNamespace], storage_client: MagicMock
    ) -> None:
        """Data-plane clients are built from the discovered key."""
        with (
            patch(f"{MODULE}.SubscriptionClient") as sub_cls,
            patch(f"{MODULE}.StorageManagementClient", return_value=storage_client),
            patch(f"{MODULE}.ShareClient") as share_cls,
            patch(f"{MODULE}.ContainerClient") as container_cls,
        ):
            sub_cls.return_value.subscriptions.list.return_value = subscriptions[:1]
            provider = AzureProvider(ScanSettings(), credential=object())
            (resource,) = list(provider.discover())

            share = provider.open_share(resource, "files")
            container = provider.open_blob_container(resource, "backups")

        expected = build_connection_string("acct1", "a2V5")
        share_cls.from_connection_string.assert_called_once_with(expected, "files")
        share_cls.from_connection_string.return_value.get_directory_client.assert_called_once_with(
            ""
        )
        container_cls.from_connection_string.assert_called_once_with(expected, "backups")
        assert isinstance(share, AzureShareDirectory)
        assert share.path == ""
        assert container.name == "backups"

    def test_release_forgets_key(
        self, subscriptions: list[SimpleNamespace], storage_client: MagicMock
    ) -> None:
        """After release the account key is no longer held."""
        with (
            patch(f"{MODULE}.SubscriptionClient") as sub_cls,
            patch(f"{MODULE}.StorageManagementClient", return_value=storage_client),
            patch(f"{MODULE}.ShareClient"),
        ):
            sub_cls.return_value.subscriptions.list.return_value = subscriptions[:1]
            provider = AzureProvider(ScanSettings(), credential=object())
            (resource,) = list(provider.discover())
            provider.open_share(resource, "files")

            provider.release(resource)

            with pytest.raises(ListingFaultError, match="No credentials"):
                provider.open_share(resource, "files")

    def test_default_credential(self) -> None:
        """DefaultAzureCredential honours the interactive setting."""
        with patch(f"{MODULE}.DefaultAzureCredential") as cred_cls, patch(
            f"{MODULE}.SubscriptionClient"
        ) as sub_cls:
            sub_cls.return_value.subscriptions.list.return_value = []
            provider = AzureProvider(ScanSettings(interactive_auth=False))
            with pytest.raises(ProviderError):
                list(provider.discover())

        cred_cls.assert_called_once_with(exclude_interactive_browser_credential=True)
