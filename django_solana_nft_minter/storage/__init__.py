from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from django_solana_nft_minter.choices import StorageBackendTypes
from django_solana_nft_minter.settings import nft_minter_settings
from django_solana_nft_minter.storage.base import BaseMetadataStorage


def get_metadata_storage() -> BaseMetadataStorage:
    """
    Returns the storage configured in SOLANA_NFT_MINTER['STORAGE_BACKEND']:
    "mock", "pinata" or a dotted path to a BaseMetadataStorage subclass.
    """
    backend = nft_minter_settings.STORAGE_BACKEND

    if backend == StorageBackendTypes.MOCK:
        from django_solana_nft_minter.storage.mock_storage import MockMetadataStorage

        return MockMetadataStorage()

    if backend == StorageBackendTypes.PINATA:
        from django_solana_nft_minter.storage.pinata_storage import (
            PinataMetadataStorage,
        )

        return PinataMetadataStorage()

    try:
        storage_class = import_string(backend)
    except ImportError:
        raise ImproperlyConfigured(
            f"STORAGE_BACKEND '{backend}' is neither 'mock', 'pinata' nor an "
            "importable storage class"
        )

    if not issubclass(storage_class, BaseMetadataStorage):
        raise ImproperlyConfigured(
            f"STORAGE_BACKEND '{backend}' must subclass BaseMetadataStorage"
        )

    return storage_class()
