import mimetypes
from pathlib import Path

from django.core.management import BaseCommand, CommandError

from django_solana_nft_minter.choices import SolanaEnvironmentTypes
from django_solana_nft_minter.dtos import ImageFileDTO, NftAttributeDTO, NftMetadataDTO
from django_solana_nft_minter.exceptions import SolanaNftMinterError
from django_solana_nft_minter.services.nft_minting_service import NftMintingService


def parse_attribute(value: str) -> NftAttributeDTO:
    trait_type, separator, trait_value = value.partition("=")
    if not separator or not trait_type.strip():
        raise CommandError(f"Attributes must look like trait=value, got '{value}'")
    return NftAttributeDTO(trait_type=trait_type.strip(), value=trait_value.strip())


class Command(BaseCommand):
    help = "Upload an image with its metadata and mint it as an NFT."

    def add_arguments(self, parser):
        parser.add_argument("image_path", help="Path to the NFT image.")
        parser.add_argument("--name", required=True, help="NFT name.")
        parser.add_argument("--description", default="", help="NFT description.")
        parser.add_argument(
            "--attribute",
            action="append",
            default=[],
            dest="attributes",
            help="Attribute as trait=value. Can be repeated.",
        )
        parser.add_argument(
            "--owner",
            default=None,
            help="Owner address. Defaults to the minter wallet.",
        )
        parser.add_argument(
            "--environment",
            choices=SolanaEnvironmentTypes.values,
            default=None,
            help="Solana cluster to mint on. Defaults to DEFAULT_ENVIRONMENT.",
        )

    def handle(self, *args, **options):
        image_path = Path(options["image_path"])
        if not image_path.is_file():
            raise CommandError(f"Image file '{image_path}' does not exist")

        metadata = NftMetadataDTO(
            name=options["name"],
            description=options["description"],
            attributes=[parse_attribute(value) for value in options["attributes"]],
        )
        image = ImageFileDTO(
            content=image_path.read_bytes(),
            file_name=image_path.name,
            content_type=mimetypes.guess_type(image_path.name)[0],
        )

        try:
            minted_nft = NftMintingService(
                environment=options["environment"]
            ).create_nft(metadata, image, owner_address=options["owner"])
        except SolanaNftMinterError as e:
            raise CommandError(str(e))

        self.stdout.write(
            self.style.SUCCESS(
                "NFT minted: "
                f"mint={minted_nft.mint_address}, "
                f"owner={minted_nft.owner_address}, "
                f"metadata_uri={minted_nft.metadata_uri}, "
                f"signature={minted_nft.tx_signature}"
            )
        )
