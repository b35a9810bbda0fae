from django_solana_nft_minter.dtos import NftAttributeDTO, NftMetadataDTO
from django_solana_nft_minter.storage.metadata import build_metadata_json

IMAGE_URI = "ipfs://QmImage"


def test_build_metadata_json_describes_the_nft():
    metadata = NftMetadataDTO(
        name="Sunset #1",
        description="A sunset",
        attributes=[NftAttributeDTO(trait_type="Color", value="Orange")],
    )

    result = build_metadata_json(metadata, IMAGE_URI, "image/png")

    assert result == {
        "name": "Sunset #1",
        "description": "A sunset",
        "image": IMAGE_URI,
        "attributes": [{"trait_type": "Color", "value": "Orange"}],
        "seller_fee_basis_points": 500,
        "properties": {
            "files": [{"uri": IMAGE_URI, "type": "image/png"}],
            "category": "image",
        },
    }


def test_build_metadata_json_uses_configured_royalty(minter_settings):
    minter_settings["SELLER_FEE_BASIS_POINTS"] = 250

    result = build_metadata_json(NftMetadataDTO(name="NFT"), IMAGE_URI)

    assert result["seller_fee_basis_points"] == 250


def test_build_metadata_json_points_client_document_at_uploaded_image():
    extra = {
        "name": "ignored",
        "symbol": "SUN",
        "seller_fee_basis_points": 0,
        "properties": {
            "files": [{"uri": "", "type": ""}, {"uri": "ipfs://QmOther", "type": "video/mp4"}],
            "category": "video",
        },
    }

    result = build_metadata_json(NftMetadataDTO(name="NFT"), IMAGE_URI, "image/gif", extra)

    assert result["name"] == "NFT"
    assert result["symbol"] == "SUN"
    assert result["seller_fee_basis_points"] == 0
    assert result["properties"]["category"] == "video"
    assert result["properties"]["files"] == [
        {"uri": IMAGE_URI, "type": "image/gif"},
        {"uri": "ipfs://QmOther", "type": "video/mp4"},
    ]
    # the caller's document is left untouched
    assert extra["properties"]["files"][0] == {"uri": "", "type": ""}
