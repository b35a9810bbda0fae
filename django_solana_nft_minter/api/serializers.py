from rest_framework import serializers
from rest_framework.exceptions import ValidationError
from solana.rpc.commitment import Confirmed, Finalized, Processed
from solders.pubkey import Pubkey

from django_solana_nft_minter.choices import (
    ConfirmationStatusTypes,
    SolanaEnvironmentTypes,
)
from django_solana_nft_minter.dtos import ImageFileDTO, NftAttributeDTO, NftMetadataDTO
from django_solana_nft_minter.settings import nft_minter_settings
from django_solana_nft_minter.solana.confirmation_poller import (
    confirmation_status_name,
)

COMMITMENT_CHOICES = [Processed, Confirmed, Finalized]


def validate_solana_address(value: str) -> str:
    try:
        Pubkey.from_string(value)
    except ValueError:
        raise ValidationError(f"'{value}' is not a valid Solana address")
    return value


class EnvironmentSerializerMixin(serializers.Serializer):
    environment = serializers.ChoiceField(
        SolanaEnvironmentTypes.choices, required=False
    )

    def get_environment(self) -> str:
        return (
            self.validated_data.get("environment")
            or nft_minter_settings.DEFAULT_ENVIRONMENT
        )


class NftAttributeSerializer(serializers.Serializer):
    trait_type = serializers.CharField(max_length=255)
    value = serializers.CharField(max_length=255, allow_blank=True)


class NftImageSerializerMixin(serializers.Serializer):
    image = serializers.FileField()

    def validate_image(self, image):
        content_type = getattr(image, "content_type", None)
        if content_type and not content_type.startswith("image/"):
            raise ValidationError("Only PNG, JPG or GIF images are supported")

        if image.size > nft_minter_settings.MAX_IMAGE_SIZE_BYTES:
            raise ValidationError(
                f"Image must not exceed {nft_minter_settings.MAX_IMAGE_SIZE_BYTES} bytes"
            )
        return image

    def get_image_dto(self) -> ImageFileDTO:
        image = self.validated_data["image"]
        image.seek(0)
        return ImageFileDTO(
            content=image.read(),
            file_name=image.name,
            content_type=getattr(image, "content_type", None),
        )


class MintNftSerializer(EnvironmentSerializerMixin, NftImageSerializerMixin):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    # Multipart forms send attributes as a JSON string
    attributes = serializers.JSONField(binary=True, required=False, default=list)
    owner_address = serializers.CharField(
        max_length=64, required=False, validators=[validate_solana_address]
    )

    def validate_name(self, value):
        if not value.strip():
            raise ValidationError("NFT name is required")
        return value.strip()

    def validate_attributes(self, value):
        if not isinstance(value, list):
            raise ValidationError("attributes must be a list")

        attribute_serializer = NftAttributeSerializer(data=value, many=True)
        attribute_serializer.is_valid(raise_exception=True)
        return attribute_serializer.validated_data

    def get_metadata_dto(self) -> NftMetadataDTO:
        return NftMetadataDTO(
            name=self.validated_data["name"],
            description=self.validated_data.get("description", ""),
            attributes=[
                NftAttributeDTO(**attribute)
                for attribute in self.validated_data.get("attributes", [])
            ],
        )


class UploadMetadataSerializer(NftImageSerializerMixin):
    metadata = serializers.JSONField(binary=True)

    def validate_metadata(self, value):
        if not isinstance(value, dict):
            raise ValidationError("metadata must be a JSON object")
        if not str(value.get("name", "")).strip():
            raise ValidationError("metadata.name is required")

        attributes = NftAttributeSerializer(
            data=value.get("attributes") or [], many=True
        )
        attributes.is_valid(raise_exception=True)

        properties = value.get("properties")
        if properties is not None and not isinstance(properties, dict):
            raise ValidationError("metadata.properties must be a JSON object")
        files = (properties or {}).get("files")
        if files is not None and not (
            isinstance(files, list) and all(isinstance(file, dict) for file in files)
        ):
            raise ValidationError("metadata.properties.files must be a list of objects")
        return value

    def get_metadata_dto(self) -> NftMetadataDTO:
        metadata = self.validated_data["metadata"]
        return NftMetadataDTO(
            name=str(metadata["name"]).strip(),
            description=metadata.get("description") or "",
            attributes=[
                NftAttributeDTO(
                    trait_type=attribute["trait_type"], value=attribute["value"]
                )
                for attribute in metadata.get("attributes") or []
            ],
        )


class UploadedMetadataSerializer(serializers.Serializer):
    image_uri = serializers.CharField()
    metadata_uri = serializers.CharField()


class MintedNftSerializer(serializers.Serializer):
    mint_address = serializers.CharField()
    owner_address = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    image_uri = serializers.CharField()
    metadata_uri = serializers.CharField()
    tx_signature = serializers.CharField()
    environment = serializers.CharField()
    attributes = NftAttributeSerializer(many=True)
    created = serializers.DateTimeField(allow_null=True)


class RecentNftsQuerySerializer(EnvironmentSerializerMixin):
    owner = serializers.CharField(max_length=64, validators=[validate_solana_address])
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False)


class TransactionStatusQuerySerializer(EnvironmentSerializerMixin):
    commitment = serializers.ChoiceField(COMMITMENT_CHOICES, required=False)
    timeout_ms = serializers.IntegerField(min_value=1, required=False)


class TransactionStatusSerializer(serializers.Serializer):
    signature = serializers.CharField(source="tx_signature")
    status = serializers.ChoiceField(ConfirmationStatusTypes.choices)
    slot = serializers.IntegerField(allow_null=True)
    confirmation_status = serializers.SerializerMethodField()
    error = serializers.SerializerMethodField()

    def get_confirmation_status(self, obj):
        return confirmation_status_name(obj.confirmation_status)

    def get_error(self, obj):
        return str(obj.error) if obj.error is not None else None


class WalletBalanceSerializer(serializers.Serializer):
    address = serializers.CharField()
    environment = serializers.CharField()
    balance = serializers.DecimalField(max_digits=30, decimal_places=9)
    can_mint = serializers.BooleanField()
    min_balance_for_minting = serializers.DecimalField(max_digits=30, decimal_places=9)
