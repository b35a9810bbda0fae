import json
import logging
from typing import Any

import httpx
import stamina

from django_solana_nft_minter.exceptions import (
    MetadataUploadError,
    StorageConfigurationError,
)
from django_solana_nft_minter.settings import nft_minter_settings
from django_solana_nft_minter.storage.base import BaseMetadataStorage

logger = logging.getLogger(__name__)

PIN_FILE_PATH = "/pinning/pinFileToIPFS"
PIN_JSON_PATH = "/pinning/pinJSONToIPFS"
PINATA_OPTIONS = {"cidVersion": 0}


class PinataMetadataStorage(BaseMetadataStorage):
    """Pins images and metadata JSON on IPFS through the Pinata API."""

    def __init__(
        self,
        api_url: str | None = None,
        jwt: str | None = None,
        api_key: str | None = None,
        secret_api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = (api_url or nft_minter_settings.PINATA_API_URL).rstrip("/")
        self._jwt = jwt or nft_minter_settings.PINATA_JWT
        self._api_key = api_key or nft_minter_settings.PINATA_API_KEY
        self._secret_api_key = (
            secret_api_key or nft_minter_settings.PINATA_SECRET_API_KEY
        )
        self._timeout = timeout
        self._transport = transport

        if not self._jwt and not (self._api_key and self._secret_api_key):
            raise StorageConfigurationError(
                "Pinata storage requires SOLANA_NFT_MINTER['PINATA_JWT'] or both "
                "PINATA_API_KEY and PINATA_SECRET_API_KEY"
            )

    @property
    def auth_headers(self) -> dict[str, str]:
        if self._jwt:
            return {"Authorization": f"Bearer {self._jwt}"}
        return {
            "pinata_api_key": self._api_key,
            "pinata_secret_api_key": self._secret_api_key,
        }

    @stamina.retry(
        on=(httpx.HTTPStatusError, httpx.RequestError),
        attempts=3,
        wait_initial=1.0,
        wait_max=5.0,
    )
    async def _post(self, path: str, **kwargs) -> dict[str, Any]:
        async with httpx.AsyncClient(
            base_url=self.api_url,
            headers=self.auth_headers,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.post(path, **kwargs)
            if response.status_code == 429:
                logger.warning("Pinata rate limit reached, will retry")
            response.raise_for_status()
            return response.json()

    async def _pin(self, path: str, what: str, **kwargs) -> str:
        try:
            result = await self._post(path, **kwargs)
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.error(f"Error uploading {what} to IPFS: {e}")
            raise MetadataUploadError(f"Error uploading {what} to IPFS: {e}") from e

        ipfs_hash = result.get("IpfsHash")
        if not ipfs_hash:
            raise MetadataUploadError(f"Pinata response for {what} has no IpfsHash")

        return f"ipfs://{ipfs_hash}"

    async def upload_file(
        self, content: bytes, file_name: str, content_type: str | None = None
    ) -> str:
        return await self._pin(
            PIN_FILE_PATH,
            f"file '{file_name}'",
            files={
                "file": (
                    file_name,
                    content,
                    content_type or "application/octet-stream",
                )
            },
            data={
                "pinataMetadata": json.dumps({"name": file_name or "nft_image"}),
                "pinataOptions": json.dumps(PINATA_OPTIONS),
            },
        )

    async def upload_json(self, data: dict[str, Any], name: str) -> str:
        return await self._pin(
            PIN_JSON_PATH,
            f"metadata '{name}'",
            json={
                "pinataContent": data,
                "pinataMetadata": {"name": f"{name or 'nft'}_metadata"},
                "pinataOptions": PINATA_OPTIONS,
            },
        )
