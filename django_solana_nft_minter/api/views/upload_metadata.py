from rest_framework import generics, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from django_solana_nft_minter.api.serializers import (
    UploadedMetadataSerializer,
    UploadMetadataSerializer,
)
from django_solana_nft_minter.exceptions import (
    InvalidNftMetadataError,
    MetadataUploadError,
    ViewException,
)
from django_solana_nft_minter.services.nft_minting_service import NftMintingService


class UploadNftMetadataView(generics.GenericAPIView):
    permission_classes = [AllowAny]
    parser_classes = [MultiPartParser, FormParser]
    serializer_class = UploadMetadataSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            uploaded = NftMintingService().upload_metadata(
                metadata=serializer.get_metadata_dto(),
                image=serializer.get_image_dto(),
                extra_metadata=serializer.validated_data["metadata"],
            )
        except InvalidNftMetadataError as exc:
            raise ViewException(
                error_message=str(exc),
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        except MetadataUploadError as exc:
            raise ViewException(
                error_message=str(exc) or "Error uploading to IPFS",
                status_code=status.HTTP_502_BAD_GATEWAY,
            )

        return Response(UploadedMetadataSerializer(uploaded).data)
