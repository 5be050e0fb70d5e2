"""Storage providers supplying resources and listing handles."""

from azsnaffler.providers.base import ProviderError, StorageProvider, StorageResource
from azsnaffler.providers.local import LocalDirectory, LocalFlatContainer, LocalProvider

__all__ = [
    "LocalDirectory",
    "LocalFlatContainer",
    "LocalProvider",
    "ProviderError",
    "StorageProvider",
    "StorageResource",
]
