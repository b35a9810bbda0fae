import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import replace

from django.core.exceptions import ImproperlyConfigured
from django.utils import timezone
from django.utils.module_loading import import_string

from django_solana_nft_minter.dtos import MintedNftDTO, NftAttributeDTO
from django_solana_nft_minter.models import MintedNft
from django_solana_nft_minter.settings import nft_minter_settings

logger = logging.getLogger(__name__)


class BaseRecentNftStore(ABC):
    """Where recently minted NFTs are kept for the gallery."""

    @abstractmethod
    def append(self, nft: MintedNftDTO) -> MintedNftDTO:
        """Stores `nft` and returns it as stored."""

    @abstractmethod
    def list_by_owner(
        self,
        owner_address: str,
        environment: str | None = None,
        limit: int | None = None,
    ) -> list[MintedNftDTO]:
        """Returns the owner's NFTs, newest first."""


class InMemoryRecentNftStore(BaseRecentNftStore):
    """Process-local store without persistence or eviction."""

    def __init__(self):
        self._nfts: list[MintedNftDTO] = []
        self._lock = threading.Lock()

    def append(self, nft: MintedNftDTO) -> MintedNftDTO:
        if nft.created is None:
            nft = replace(nft, created=timezone.now())
        with self._lock:
            self._nfts.insert(0, nft)
        logger.info(f"Added NFT {nft.mint_address} to the recent list")
        return nft

    def list_by_owner(
        self,
        owner_address: str,
        environment: str | None = None,
        limit: int | None = None,
    ) -> list[MintedNftDTO]:
        with self._lock:
            nfts = [
                nft
                for nft in self._nfts
                if nft.owner_address == owner_address
                and (environment is None or nft.environment == environment)
            ]
        return nfts[:limit] if limit else nfts

    def clear(self) -> None:
        with self._lock:
            self._nfts.clear()


class DatabaseRecentNftStore(BaseRecentNftStore):
    """Keeps minted NFTs in the MintedNft table."""

    def append(self, nft: MintedNftDTO) -> MintedNftDTO:
        minted_nft = MintedNft.objects.create(
            mint_address=nft.mint_address,
            owner_address=nft.owner_address,
            environment=nft.environment,
            name=nft.name,
            description=nft.description,
            image_uri=nft.image_uri,
            metadata_uri=nft.metadata_uri,
            attributes=[
                {"trait_type": attribute.trait_type, "value": attribute.value}
                for attribute in nft.attributes
            ],
            signature=nft.tx_signature,
        )
        logger.info(f"Stored NFT {nft.mint_address} for owner {nft.owner_address}")
        return minted_nft_to_dto(minted_nft)

    def list_by_owner(
        self,
        owner_address: str,
        environment: str | None = None,
        limit: int | None = None,
    ) -> list[MintedNftDTO]:
        queryset = MintedNft.objects.filter(owner_address=owner_address)
        if environment:
            queryset = queryset.filter(environment=environment)
        if limit:
            queryset = queryset[:limit]
        return [minted_nft_to_dto(minted_nft) for minted_nft in queryset]


def minted_nft_to_dto(minted_nft: MintedNft) -> MintedNftDTO:
    return MintedNftDTO(
        mint_address=minted_nft.mint_address,
        owner_address=minted_nft.owner_address,
        name=minted_nft.name,
        description=minted_nft.description,
        image_uri=minted_nft.image_uri,
        metadata_uri=minted_nft.metadata_uri,
        tx_signature=minted_nft.signature,
        environment=minted_nft.environment,
        attributes=[
            NftAttributeDTO(
                trait_type=attribute["trait_type"], value=attribute["value"]
            )
            for attribute in minted_nft.attributes or []
        ],
        created=minted_nft.created,
    )


_recent_nft_store: BaseRecentNftStore | None = None


def get_recent_nft_store() -> BaseRecentNftStore:
    """
    Returns the process-wide store configured in
    SOLANA_NFT_MINTER['RECENT_NFT_STORE'].
    """
    global _recent_nft_store
    if _recent_nft_store is None:
        store_path = nft_minter_settings.RECENT_NFT_STORE
        try:
            store_class = import_string(store_path)
        except ImportError:
            raise ImproperlyConfigured(
                f"RECENT_NFT_STORE '{store_path}' could not be imported"
            )
        if not issubclass(store_class, BaseRecentNftStore):
            raise ImproperlyConfigured(
                f"RECENT_NFT_STORE '{store_path}' must subclass BaseRecentNftStore"
            )
        _recent_nft_store = store_class()
    return _recent_nft_store


def reset_recent_nft_store() -> None:
    """Reset the store singleton (useful for testing)."""
    global _recent_nft_store
    _recent_nft_store = None
