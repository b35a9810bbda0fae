from typing import Any

from django_solana_nft_minter.dtos import NftMetadataDTO
from django_solana_nft_minter.settings import nft_minter_settings


def build_metadata_json(
    metadata: NftMetadataDTO,
    image_uri: str,
    content_type: str | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Builds the off-chain metadata document for an NFT. `extra` lets callers
    pass through a client-supplied document; its image and first file entry
    are pointed at `image_uri`.
    """
    metadata_json: dict[str, Any] = dict(extra or {})
    metadata_json.update(
        {
            "name": metadata.name,
            "description": metadata.description,
            "image": image_uri,
            "attributes": [
                {"trait_type": attribute.trait_type, "value": attribute.value}
                for attribute in metadata.attributes
            ],
        }
    )
    metadata_json.setdefault(
        "seller_fee_basis_points", nft_minter_settings.SELLER_FEE_BASIS_POINTS
    )

    properties = dict(metadata_json.get("properties") or {})
    files = [dict(file) for file in properties.get("files") or []]
    if files:
        files[0]["uri"] = image_uri
        files[0]["type"] = content_type
    else:
        files = [{"uri": image_uri, "type": content_type}]
        properties.setdefault("category", "image")
    properties["files"] = files
    metadata_json["properties"] = properties

    return metadata_json
