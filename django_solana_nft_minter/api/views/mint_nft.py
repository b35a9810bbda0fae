from rest_framework import generics, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from django_solana_nft_minter.api.serializers import (
    MintedNftSerializer,
    MintNftSerializer,
)
from django_solana_nft_minter.exceptions import (
    ConfirmationTimeoutError,
    InsufficientBalanceError,
    InvalidNftMetadataError,
    MetadataUploadError,
    NftMintError,
    ViewException,
)
from django_solana_nft_minter.services.nft_minting_service import (
    NftMintingService,
    classify_mint_error,
)


class MintNftView(generics.CreateAPIView):
    permission_classes = [AllowAny]
    parser_classes = [MultiPartParser, FormParser]
    serializer_class = MintNftSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        environment = serializer.get_environment()

        try:
            minted_nft = NftMintingService(environment=environment).create_nft(
                metadata=serializer.get_metadata_dto(),
                image=serializer.get_image_dto(),
                owner_address=serializer.validated_data.get("owner_address"),
            )
        except InsufficientBalanceError as exc:
            raise ViewException(
                error_message=classify_mint_error(exc, environment),
                status_code=status.HTTP_402_PAYMENT_REQUIRED,
            )
        except InvalidNftMetadataError as exc:
            raise ViewException(
                error_message=str(exc),
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        except MetadataUploadError as exc:
            raise ViewException(
                error_message=str(exc),
                status_code=status.HTTP_502_BAD_GATEWAY,
            )
        except ConfirmationTimeoutError as exc:
            raise ViewException(
                error_message=(
                    f"{exc}. The transaction may still land, check its status again "
                    f"at transactions/{exc.tx_signature}/status"
                ),
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            )
        except NftMintError as exc:
            raise ViewException(
                error_message=classify_mint_error(exc, environment),
                status_code=status.HTTP_409_CONFLICT,
            )

        return Response(
            MintedNftSerializer(minted_nft).data,
            status=status.HTTP_201_CREATED,
        )
