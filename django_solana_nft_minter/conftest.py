"""Shared fixtures for the tests under tests/, solana/tests/ and api/tests/."""

import copy

import pytest
import stamina
from django.conf import settings as django_settings

from django_solana_nft_minter.dtos import (
    ImageFileDTO,
    MintedNftDTO,
    NftAttributeDTO,
    NftMetadataDTO,
)
from django_solana_nft_minter.stores import reset_recent_nft_store

OWNER_ADDRESS = "11111111111111111111111111111111"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture(autouse=True)
def reset_recent_nft_store_singleton():
    """
    Automatically reset the recent NFT store singleton before each test.
    Settings are read dynamically and don't need resetting.
    """
    reset_recent_nft_store()

    yield

    reset_recent_nft_store()


@pytest.fixture(autouse=True)
def stamina_testing_mode():
    """Retries run once and without waiting."""
    stamina.set_testing(True)
    yield
    stamina.set_testing(False)


@pytest.fixture
def minter_settings(settings):
    """
    Returns a mutable copy of SOLANA_NFT_MINTER that is applied back to the
    settings fixture, so tests can override single keys.
    """
    settings.SOLANA_NFT_MINTER = copy.deepcopy(django_settings.SOLANA_NFT_MINTER)
    return settings.SOLANA_NFT_MINTER


@pytest.fixture
def nft_metadata():
    return NftMetadataDTO(
        name="Sunset #1",
        description="A sunset over the sea",
        attributes=[NftAttributeDTO(trait_type="Color", value="Orange")],
    )


@pytest.fixture
def image_file():
    return ImageFileDTO(
        content=PNG_BYTES, file_name="sunset.png", content_type="image/png"
    )


@pytest.fixture
def minted_nft():
    return MintedNftDTO(
        mint_address="So11111111111111111111111111111111111111112",
        owner_address=OWNER_ADDRESS,
        name="Sunset #1",
        description="A sunset over the sea",
        image_uri="https://mockstorage.example.com/image",
        metadata_uri="https://mockstorage.example.com/metadata",
        tx_signature="5" * 64,
        environment="devnet",
        attributes=[NftAttributeDTO(trait_type="Color", value="Orange")],
    )
