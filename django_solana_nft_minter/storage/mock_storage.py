import hashlib
import json
import logging
from typing import Any

from django_solana_nft_minter.settings import nft_minter_settings
from django_solana_nft_minter.storage.base import BaseMetadataStorage

logger = logging.getLogger(__name__)


class MockMetadataStorage(BaseMetadataStorage):
    """
    Fabricates content addresses without persisting anything. Meant for local
    development, the returned URIs do not resolve.
    """

    def __init__(self, base_url: str | None = None):
        self.base_url = (base_url or nft_minter_settings.MOCK_STORAGE_BASE_URL).rstrip(
            "/"
        )

    def _address_for(self, content: bytes) -> str:
        return f"{self.base_url}/{hashlib.sha256(content).hexdigest()}"

    async def upload_file(
        self, content: bytes, file_name: str, content_type: str | None = None
    ) -> str:
        uri = self._address_for(content)
        logger.info(f"Mock storage: {file_name} ({len(content)} bytes) -> {uri}")
        return uri

    async def upload_json(self, data: dict[str, Any], name: str) -> str:
        content = json.dumps(data, sort_keys=True).encode("utf-8")
        uri = self._address_for(content)
        logger.info(f"Mock storage: metadata '{name}' -> {uri}")
        return uri
