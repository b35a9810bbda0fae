import hashlib
import json

import httpx
import pytest
from django.core.exceptions import ImproperlyConfigured

from django_solana_nft_minter.exceptions import (
    MetadataUploadError,
    StorageConfigurationError,
)
from django_solana_nft_minter.storage import get_metadata_storage
from django_solana_nft_minter.storage.base import BaseMetadataStorage
from django_solana_nft_minter.storage.mock_storage import MockMetadataStorage
from django_solana_nft_minter.storage.pinata_storage import (
    PIN_FILE_PATH,
    PIN_JSON_PATH,
    PinataMetadataStorage,
)


class DummyStorage(BaseMetadataStorage):
    async def upload_file(self, content, file_name, content_type=None):
        return "dummy://file"

    async def upload_json(self, data, name):
        return "dummy://json"


def test_get_metadata_storage_resolves_backends(minter_settings):
    minter_settings["STORAGE_BACKEND"] = "mock"
    assert isinstance(get_metadata_storage(), MockMetadataStorage)

    minter_settings["STORAGE_BACKEND"] = "pinata"
    minter_settings["PINATA_JWT"] = "jwt-token"
    assert isinstance(get_metadata_storage(), PinataMetadataStorage)

    minter_settings["STORAGE_BACKEND"] = (
        "django_solana_nft_minter.tests.test_metadata_storage.DummyStorage"
    )
    assert isinstance(get_metadata_storage(), DummyStorage)


@pytest.mark.parametrize(
    "backend",
    ["s3", "django_solana_nft_minter.stores.InMemoryRecentNftStore"],
)
def test_get_metadata_storage_rejects_unknown_backend(minter_settings, backend):
    minter_settings["STORAGE_BACKEND"] = backend

    with pytest.raises(ImproperlyConfigured):
        get_metadata_storage()


@pytest.mark.asyncio
async def test_mock_storage_returns_content_addressed_urls():
    storage = MockMetadataStorage(base_url="https://storage.test/")
    content = b"image-bytes"

    image_uri = await storage.upload_file(content, "image.png", "image/png")
    metadata_uri = await storage.upload_json({"b": 1, "a": 2}, "NFT")

    assert image_uri == f"https://storage.test/{hashlib.sha256(content).hexdigest()}"
    expected_json = json.dumps({"a": 2, "b": 1}, sort_keys=True).encode("utf-8")
    assert (
        metadata_uri
        == f"https://storage.test/{hashlib.sha256(expected_json).hexdigest()}"
    )
    assert await storage.upload_file(content, "copy.png") == image_uri


def test_pinata_storage_requires_credentials():
    with pytest.raises(StorageConfigurationError):
        PinataMetadataStorage()

    with pytest.raises(StorageConfigurationError):
        PinataMetadataStorage(api_key="key")


def test_pinata_auth_headers():
    assert PinataMetadataStorage(jwt="token").auth_headers == {
        "Authorization": "Bearer token"
    }
    assert PinataMetadataStorage(
        api_key="key", secret_api_key="secret"
    ).auth_headers == {
        "pinata_api_key": "key",
        "pinata_secret_api_key": "secret",
    }


@pytest.mark.asyncio
async def test_pinata_storage_pins_file_and_json():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path == PIN_FILE_PATH:
            return httpx.Response(200, json={"IpfsHash": "QmImage"})
        return httpx.Response(200, json={"IpfsHash": "QmMetadata"})

    storage = PinataMetadataStorage(
        api_url="https://pinata.test",
        jwt="token",
        transport=httpx.MockTransport(handler),
    )

    image_uri = await storage.upload_file(b"png", "image.png", "image/png")
    metadata_uri = await storage.upload_json({"name": "NFT"}, "NFT")

    assert image_uri == "ipfs://QmImage"
    assert metadata_uri == "ipfs://QmMetadata"
    assert [request.url.path for request in requests] == [PIN_FILE_PATH, PIN_JSON_PATH]
    assert all(
        request.headers["Authorization"] == "Bearer token" for request in requests
    )

    json_body = json.loads(requests[1].content)
    assert json_body["pinataContent"] == {"name": "NFT"}
    assert json_body["pinataMetadata"] == {"name": "NFT_metadata"}


@pytest.mark.asyncio
async def test_pinata_storage_wraps_http_errors():
    storage = PinataMetadataStorage(
        api_url="https://pinata.test",
        jwt="token",
        transport=httpx.MockTransport(
            lambda request: httpx.Response(500, json={"error": "boom"})
        ),
    )

    with pytest.raises(MetadataUploadError, match="Error uploading file"):
        await storage.upload_file(b"png", "image.png", "image/png")


@pytest.mark.asyncio
async def test_pinata_storage_requires_ipfs_hash():
    storage = PinataMetadataStorage(
        api_url="https://pinata.test",
        jwt="token",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
    )

    with pytest.raises(MetadataUploadError, match="no IpfsHash"):
        await storage.upload_json({"name": "NFT"}, "NFT")
