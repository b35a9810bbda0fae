import json
from unittest.mock import patch

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from django_solana_nft_minter.dtos import NftAttributeDTO
from django_solana_nft_minter.exceptions import (
    ConfirmationTimeoutError,
    InsufficientBalanceError,
    MetadataUploadError,
    NftMintError,
)

pytestmark = pytest.mark.django_db

CREATE_NFT = (
    "django_solana_nft_minter.api.views.mint_nft.NftMintingService.create_nft"
)
OWNER_ADDRESS = "11111111111111111111111111111111"


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture(autouse=True)
def api_test_settings(settings):
    settings.ROOT_URLCONF = "django_solana_nft_minter.urls"


def build_payload(**overrides):
    payload = {
        "name": "Sunset #1",
        "description": "A sunset over the sea",
        "attributes": json.dumps([{"trait_type": "Color", "value": "Orange"}]),
        "image": SimpleUploadedFile(
            "sunset.png", b"\x89PNG\r\n\x1a\n", content_type="image/png"
        ),
    }
    payload.update(overrides)
    return {key: value for key, value in payload.items() if value is not None}


@patch(CREATE_NFT)
def test_mint_nft_returns_201_with_minted_nft(mock_create_nft, api_client, minted_nft):
    mock_create_nft.return_value = minted_nft

    response = api_client.post(
        "/mint/",
        build_payload(owner_address=OWNER_ADDRESS, environment="devnet"),
        format="multipart",
    )

    assert response.status_code == 201
    assert response.data["mint_address"] == minted_nft.mint_address
    assert response.data["tx_signature"] == minted_nft.tx_signature
    assert response.data["attributes"] == [{"trait_type": "Color", "value": "Orange"}]

    metadata = mock_create_nft.call_args.kwargs["metadata"]
    image = mock_create_nft.call_args.kwargs["image"]
    assert metadata.name == "Sunset #1"
    assert metadata.attributes == [NftAttributeDTO(trait_type="Color", value="Orange")]
    assert image.content == b"\x89PNG\r\n\x1a\n"
    assert image.file_name == "sunset.png"
    assert image.content_type == "image/png"
    assert mock_create_nft.call_args.kwargs["owner_address"] == OWNER_ADDRESS


def test_mint_nft_requires_image(api_client):
    response = api_client.post("/mint/", build_payload(image=None), format="multipart")

    assert response.status_code == 400
    assert "image" in response.data


def test_mint_nft_requires_name(api_client):
    response = api_client.post("/mint/", build_payload(name=" "), format="multipart")

    assert response.status_code == 400
    assert "name" in response.data


def test_mint_nft_rejects_non_image_upload(api_client):
    response = api_client.post(
        "/mint/",
        build_payload(
            image=SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        ),
        format="multipart",
    )

    assert response.status_code == 400
    assert "image" in response.data


def test_mint_nft_rejects_invalid_owner_address(api_client):
    response = api_client.post(
        "/mint/", build_payload(owner_address="not-an-address"), format="multipart"
    )

    assert response.status_code == 400
    assert "owner_address" in response.data


def test_mint_nft_rejects_malformed_attributes(api_client):
    response = api_client.post(
        "/mint/",
        build_payload(attributes=json.dumps([{"value": "missing trait"}])),
        format="multipart",
    )

    assert response.status_code == 400
    assert "attributes" in response.data


@pytest.mark.parametrize(
    "error, status_code, message",
    [
        (
            InsufficientBalanceError("insufficient lamports"),
            402,
            "Insufficient SOL balance",
        ),
        (MetadataUploadError("Error uploading to IPFS"), 502, "Error uploading"),
        (
            ConfirmationTimeoutError("5" * 64, 60_000),
            504,
            "check its status again",
        ),
        (NftMintError("Blockhash not found"), 409, "Blockhash not found"),
    ],
)
@patch(CREATE_NFT)
def test_mint_nft_maps_errors_to_status_codes(
    mock_create_nft, api_client, error, status_code, message
):
    mock_create_nft.side_effect = error

    response = api_client.post("/mint/", build_payload(), format="multipart")

    assert response.status_code == status_code
    assert message in str(response.data["detail"])
