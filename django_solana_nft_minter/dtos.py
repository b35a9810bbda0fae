from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class NftAttributeDTO:
    trait_type: str
    value: str


@dataclass(frozen=True, slots=True)
class NftMetadataDTO:
    name: str
    description: str = ""
    attributes: list[NftAttributeDTO] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class ImageFileDTO:
    content: bytes
    file_name: str
    content_type: str | None = None


@dataclass(frozen=True, slots=True)
class UploadedMetadataDTO:
    image_uri: str
    metadata_uri: str


@dataclass(frozen=True, slots=True)
class MintedNftDTO:
    mint_address: str
    owner_address: str
    name: str
    image_uri: str
    metadata_uri: str
    tx_signature: str
    environment: str
    description: str = ""
    attributes: list[NftAttributeDTO] = field(default_factory=list)
    created: datetime | None = None
