import logging

import httpx
from asgiref.sync import async_to_sync
from solana.exceptions import SolanaRpcException
from solana.rpc.core import RPCException
from solders.pubkey import Pubkey

from django_solana_nft_minter.choices import SolanaEnvironmentTypes
from django_solana_nft_minter.dtos import (
    ImageFileDTO,
    MintedNftDTO,
    NftMetadataDTO,
    UploadedMetadataDTO,
)
from django_solana_nft_minter.exceptions import (
    InsufficientBalanceError,
    InvalidNftMetadataError,
    NftMintError,
)
from django_solana_nft_minter.settings import nft_minter_settings
from django_solana_nft_minter.signals import nft_minted
from django_solana_nft_minter.solana.base_solana_client import BaseSolanaClient
from django_solana_nft_minter.solana.solana_balance_client import SolanaBalanceClient
from django_solana_nft_minter.solana.solana_nft_mint_client import (
    SolanaNftMintClient,
)
from django_solana_nft_minter.storage import get_metadata_storage
from django_solana_nft_minter.storage.base import BaseMetadataStorage
from django_solana_nft_minter.storage.metadata import build_metadata_json
from django_solana_nft_minter.stores import BaseRecentNftStore, get_recent_nft_store
from django_solana_nft_minter.utils import is_insufficient_balance_message

logger = logging.getLogger(__name__)


def insufficient_balance_message(environment: str) -> str:
    minimum = nft_minter_settings.MIN_SOL_BALANCE_FOR_MINTING
    if environment == SolanaEnvironmentTypes.DEVNET:
        hint = "Get free Devnet SOL from a faucet."
    else:
        hint = "Please add more SOL to your wallet."
    return (
        f"Insufficient SOL balance for minting. "
        f"You need at least {minimum} SOL to mint. {hint}"
    )


def classify_mint_error(error: Exception | str, environment: str) -> str:
    """
    Turns a minting failure into user guidance: balance problems get the
    funding hint for the environment, anything else keeps its message.
    """
    message = str(error) or "Unknown error occurred"
    if is_insufficient_balance_message(message):
        return insufficient_balance_message(environment)
    return message


class NftMintingService:
    def __init__(
        self,
        environment: str | None = None,
        storage: BaseMetadataStorage | None = None,
        recent_nft_store: BaseRecentNftStore | None = None,
    ):
        self.environment = environment or nft_minter_settings.DEFAULT_ENVIRONMENT
        self.storage = storage or get_metadata_storage()
        self.recent_nft_store = recent_nft_store or get_recent_nft_store()

    def build_solana_client(self) -> BaseSolanaClient:
        return BaseSolanaClient(environment=self.environment)

    @staticmethod
    def validate_metadata(metadata: NftMetadataDTO, image: ImageFileDTO | None):
        if not metadata.name or not metadata.name.strip():
            raise InvalidNftMetadataError("NFT name is required")

        if image is None or not image.content:
            raise InvalidNftMetadataError("Please upload an image for your NFT")

        if image.content_type and not image.content_type.startswith("image/"):
            raise InvalidNftMetadataError(
                f"Unsupported image content type: {image.content_type}"
            )

        if len(image.content) > nft_minter_settings.MAX_IMAGE_SIZE_BYTES:
            raise InvalidNftMetadataError(
                f"Image is larger than {nft_minter_settings.MAX_IMAGE_SIZE_BYTES} bytes"
            )

        for attribute in metadata.attributes:
            if not attribute.trait_type or not attribute.trait_type.strip():
                raise InvalidNftMetadataError("Attribute trait_type must not be blank")

    async def aupload_metadata(
        self,
        metadata: NftMetadataDTO,
        image: ImageFileDTO,
        extra_metadata: dict | None = None,
    ) -> UploadedMetadataDTO:
        image_uri = await self.storage.upload_file(
            image.content, image.file_name or metadata.name, image.content_type
        )
        metadata_json = build_metadata_json(
            metadata, image_uri, image.content_type, extra=extra_metadata
        )
        metadata_uri = await self.storage.upload_json(metadata_json, metadata.name)

        logger.info(
            f"Uploaded NFT '{metadata.name}': image={image_uri}, metadata={metadata_uri}"
        )
        return UploadedMetadataDTO(image_uri=image_uri, metadata_uri=metadata_uri)

    def upload_metadata(
        self,
        metadata: NftMetadataDTO,
        image: ImageFileDTO,
        extra_metadata: dict | None = None,
    ) -> UploadedMetadataDTO:
        self.validate_metadata(metadata, image)
        return async_to_sync(self.aupload_metadata)(metadata, image, extra_metadata)

    async def amint(
        self,
        metadata: NftMetadataDTO,
        image: ImageFileDTO,
        owner_address: str | None = None,
    ) -> MintedNftDTO:
        """
        Uploads the image and metadata and mints the NFT. Returns once the
        mint transaction is confirmed; nothing is stored.
        """
        async with self.build_solana_client() as solana_client:
            minter_pubkey = solana_client.MINTER_KEYPAIR.pubkey()
            owner = Pubkey.from_string(owner_address) if owner_address else minter_pubkey

            balance_client = SolanaBalanceClient(base_solana_client=solana_client)
            if not await balance_client.has_enough_sol_for_minting(minter_pubkey):
                raise InsufficientBalanceError(
                    insufficient_balance_message(self.environment)
                )

            uploaded = await self.aupload_metadata(metadata, image)

            mint_client = SolanaNftMintClient(base_solana_client=solana_client)
            try:
                minted_token = await mint_client.mint_nft(
                    metadata_uri=uploaded.metadata_uri, owner=owner
                )
            except (RPCException, SolanaRpcException, httpx.HTTPError) as e:
                logger.error(f"Error creating NFT '{metadata.name}': {e}")
                if is_insufficient_balance_message(str(e)):
                    raise InsufficientBalanceError(
                        insufficient_balance_message(self.environment)
                    ) from e
                raise NftMintError(str(e)) from e

        return MintedNftDTO(
            mint_address=str(minted_token.mint_address),
            owner_address=str(owner),
            name=metadata.name,
            description=metadata.description,
            image_uri=uploaded.image_uri,
            metadata_uri=uploaded.metadata_uri,
            tx_signature=str(minted_token.tx_signature),
            environment=self.environment,
            attributes=list(metadata.attributes),
        )

    def create_nft(
        self,
        metadata: NftMetadataDTO,
        image: ImageFileDTO,
        owner_address: str | None = None,
        send_nft_minted_signal: bool = True,
    ) -> MintedNftDTO:
        self.validate_metadata(metadata, image)
        logger.info(
            f"Minting NFT '{metadata.name}' on {self.environment} for owner={owner_address}"
        )

        minted_nft = async_to_sync(self.amint)(metadata, image, owner_address)
        minted_nft = self.recent_nft_store.append(minted_nft)

        if send_nft_minted_signal:
            nft_minted.send(
                sender=self.__class__,
                nft=minted_nft,
                environment=self.environment,
            )

        logger.info(f"NFT minted: mint={minted_nft.mint_address}")
        return minted_nft

    def list_recent_nfts(
        self, owner_address: str, limit: int | None = None
    ) -> list[MintedNftDTO]:
        return self.recent_nft_store.list_by_owner(
            owner_address, environment=self.environment, limit=limit
        )
