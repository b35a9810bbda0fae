from django.contrib import admin

from django_solana_nft_minter.models import MintedNft


@admin.register(MintedNft)
class MintedNftAdmin(admin.ModelAdmin):
    list_display = ("name", "mint_address", "owner_address", "environment", "created")
    readonly_fields = ("mint_address", "signature", "metadata_uri", "created", "updated")
    list_filter = ("environment",)
    search_fields = ("name", "mint_address", "owner_address", "signature")
