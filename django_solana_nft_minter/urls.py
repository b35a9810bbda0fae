from django.urls import path

from django_solana_nft_minter.api.views.mint_nft import MintNftView
from django_solana_nft_minter.api.views.recent_nfts import RecentNftListView
from django_solana_nft_minter.api.views.transaction_status import (
    TransactionStatusView,
)
from django_solana_nft_minter.api.views.upload_metadata import UploadNftMetadataView
from django_solana_nft_minter.api.views.wallet_balance import WalletBalanceView

urlpatterns = [
    path("mint/", MintNftView.as_view()),
    path("upload-metadata/", UploadNftMetadataView.as_view()),
    path("nfts/", RecentNftListView.as_view()),
    path(
        "transactions/<str:signature>/status", TransactionStatusView.as_view()
    ),
    path("wallets/<str:address>/balance", WalletBalanceView.as_view()),
]
