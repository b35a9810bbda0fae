from django.db import models

from django_solana_nft_minter.choices import SolanaEnvironmentTypes


class MintedNft(models.Model):
    mint_address = models.CharField(max_length=64, unique=True)
    owner_address = models.CharField(max_length=64, db_index=True)
    environment = models.CharField(
        max_length=10,
        choices=SolanaEnvironmentTypes.choices,
        default=SolanaEnvironmentTypes.DEVNET,
        db_index=True,
    )

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    image_uri = models.CharField(max_length=512)
    metadata_uri = models.CharField(max_length=512)
    attributes = models.JSONField(default=list, blank=True)

    signature = models.CharField(max_length=255)

    created = models.DateTimeField(auto_now_add=True)
    updated = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created", "-id"]

    def __str__(self):
        return f"{self.name} - {self.mint_address}"
