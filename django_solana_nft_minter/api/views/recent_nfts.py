from rest_framework import generics
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from django_solana_nft_minter.api.serializers import (
    MintedNftSerializer,
    RecentNftsQuerySerializer,
)
from django_solana_nft_minter.stores import get_recent_nft_store


class RecentNftListView(generics.ListAPIView):
    pagination_class = None
    permission_classes = [AllowAny]
    serializer_class = MintedNftSerializer

    def list(self, request, *args, **kwargs):
        query_serializer = RecentNftsQuerySerializer(data=request.query_params)
        query_serializer.is_valid(raise_exception=True)

        nfts = get_recent_nft_store().list_by_owner(
            query_serializer.validated_data["owner"],
            environment=query_serializer.get_environment(),
            limit=query_serializer.validated_data.get("limit"),
        )

        return Response(self.get_serializer(nfts, many=True).data)
