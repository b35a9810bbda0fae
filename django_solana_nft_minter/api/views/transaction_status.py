from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from django_solana_nft_minter.api.serializers import (
    TransactionStatusQuerySerializer,
    TransactionStatusSerializer,
)
from django_solana_nft_minter.exceptions import ConfirmationTimeoutError, ViewException
from django_solana_nft_minter.services.solana_query_service import SolanaQueryService


class TransactionStatusView(generics.RetrieveAPIView):
    permission_classes = [AllowAny]
    serializer_class = TransactionStatusSerializer

    def retrieve(self, request, *args, **kwargs):
        signature = self.kwargs.get("signature")

        query_serializer = TransactionStatusQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        try:
            confirmation = SolanaQueryService(
                environment=query_serializer.get_environment()
            ).await_transaction_confirmation(
                signature,
                commitment=query_serializer.validated_data.get("commitment"),
                timeout_ms=query_serializer.validated_data.get("timeout_ms"),
            )
        except ValueError as exc:
            raise ViewException(
                error_message=f"Invalid transaction signature: {exc}",
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        except ConfirmationTimeoutError as exc:
            raise ViewException(
                error_message=f"{exc}. Check again later.",
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            )

        return Response(self.get_serializer(confirmation).data)
