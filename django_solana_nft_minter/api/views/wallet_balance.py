import httpx
from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from solana.exceptions import SolanaRpcException

from django_solana_nft_minter.api.serializers import (
    EnvironmentSerializerMixin,
    WalletBalanceSerializer,
    validate_solana_address,
)
from django_solana_nft_minter.exceptions import ViewException
from django_solana_nft_minter.services.solana_query_service import SolanaQueryService
from django_solana_nft_minter.settings import nft_minter_settings


class WalletBalanceView(generics.RetrieveAPIView):
    permission_classes = [AllowAny]
    serializer_class = WalletBalanceSerializer

    def retrieve(self, request, *args, **kwargs):
        address = validate_solana_address(self.kwargs.get("address"))

        query_serializer = EnvironmentSerializerMixin(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)
        environment = query_serializer.get_environment()

        try:
            balance, can_mint = SolanaQueryService(
                environment=environment
            ).get_wallet_balance(address)
        except (SolanaRpcException, httpx.HTTPError) as exc:
            raise ViewException(
                error_message=f"Error getting balance: {exc}",
                status_code=status.HTTP_502_BAD_GATEWAY,
            )

        serializer = self.get_serializer(
            dict(
                address=address,
                environment=environment,
                balance=balance,
                can_mint=can_mint,
                min_balance_for_minting=nft_minter_settings.MIN_SOL_BALANCE_FOR_MINTING,
            )
        )
        return Response(serializer.data)
