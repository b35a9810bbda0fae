from abc import ABC, abstractmethod
from typing import Any


class BaseMetadataStorage(ABC):
    """Content storage for NFT images and their off-chain metadata JSON."""

    @abstractmethod
    async def upload_file(
        self, content: bytes, file_name: str, content_type: str | None = None
    ) -> str:
        """Stores `content` and returns the URI it is retrievable from."""

    @abstractmethod
    async def upload_json(self, data: dict[str, Any], name: str) -> str:
        """Stores `data` as JSON and returns the URI it is retrievable from."""
