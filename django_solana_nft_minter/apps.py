# apps.py
from django.apps import AppConfig

class SolanaNftMinterConfig(AppConfig):
    name = 'django_solana_nft_minter'
    verbose_name = 'Solana NFT Minter'
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        from .settings import nft_minter_settings
        # Trigger the property checks to ensure the environment and its RPC URL resolve
        _ = nft_minter_settings.rpc_url_for(nft_minter_settings.DEFAULT_ENVIRONMENT)
