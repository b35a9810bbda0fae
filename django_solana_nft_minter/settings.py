from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from solana.rpc.commitment import Commitment, Confirmed

from django_solana_nft_minter.choices import SolanaEnvironmentTypes

DEFAULT_DEVNET_RPC_URL = "https://api.devnet.solana.com"
DEFAULT_MAINNET_RPC_URL = "https://api.mainnet-beta.solana.com"


class SolanaNftMinterSettings:
    """
    Settings accessor for django-solana-nft-minter.
    Reads from django.conf.settings.SOLANA_NFT_MINTER dynamically.
    """

    def _get_setting(self, key, default=None, required=False):
        minter_config = getattr(settings, "SOLANA_NFT_MINTER", {})
        value = minter_config.get(key, default)
        if required and value is None:
            raise ImproperlyConfigured(
                f"SOLANA_NFT_MINTER['{key}'] is required in settings.py"
            )
        return value

    @property
    def DEVNET_RPC_URL(self) -> str:
        return self._get_setting("DEVNET_RPC_URL", default=DEFAULT_DEVNET_RPC_URL)

    @property
    def MAINNET_RPC_URL(self) -> str:
        return self._get_setting("MAINNET_RPC_URL", default=DEFAULT_MAINNET_RPC_URL)

    @property
    def DEFAULT_ENVIRONMENT(self) -> str:
        environment = self._get_setting(
            "DEFAULT_ENVIRONMENT", default=SolanaEnvironmentTypes.DEVNET
        )
        if environment not in SolanaEnvironmentTypes.values:
            raise ImproperlyConfigured(
                f"SOLANA_NFT_MINTER['DEFAULT_ENVIRONMENT'] must be one of "
                f"{SolanaEnvironmentTypes.values}, got '{environment}'"
            )
        return environment

    def rpc_url_for(self, environment: str | None = None) -> str:
        """Returns the RPC endpoint configured for the given environment."""
        environment = environment or self.DEFAULT_ENVIRONMENT

        if environment == SolanaEnvironmentTypes.DEVNET:
            return self.DEVNET_RPC_URL
        if environment == SolanaEnvironmentTypes.MAINNET:
            return self.MAINNET_RPC_URL

        raise ImproperlyConfigured(f"Unknown Solana environment: '{environment}'")

    @property
    def RPC_COMMITMENT(self) -> Commitment:
        return self._get_setting("RPC_COMMITMENT", default=Confirmed)

    @property
    def CONFIRMATION_COMMITMENT(self) -> Commitment:
        return self._get_setting("CONFIRMATION_COMMITMENT", default=Confirmed)

    @property
    def CONFIRMATION_TIMEOUT_MS(self) -> int:
        return self._get_setting("CONFIRMATION_TIMEOUT_MS", default=60_000)

    @property
    def CONFIRMATION_POLL_INTERVAL_MS(self) -> int:
        return self._get_setting("CONFIRMATION_POLL_INTERVAL_MS", default=2_000)

    @property
    def MINTER_KEYPAIR(self) -> str | list | bytes:
        return self._get_setting("MINTER_KEYPAIR", required=True)

    @property
    def MINTER_KEYPAIR_ENCRYPTION_KEY(self) -> str | None:
        return self._get_setting("MINTER_KEYPAIR_ENCRYPTION_KEY", default=None)

    @property
    def MIN_SOL_BALANCE_FOR_MINTING(self) -> Decimal:
        return Decimal(
            str(self._get_setting("MIN_SOL_BALANCE_FOR_MINTING", default="0.02"))
        )

    @property
    def SELLER_FEE_BASIS_POINTS(self) -> int:
        # 500 basis points = 5%
        return self._get_setting("SELLER_FEE_BASIS_POINTS", default=500)

    @property
    def STORAGE_BACKEND(self) -> str:
        return self._get_setting("STORAGE_BACKEND", default="mock")

    @property
    def MOCK_STORAGE_BASE_URL(self) -> str:
        return self._get_setting(
            "MOCK_STORAGE_BASE_URL", default="https://mockstorage.example.com"
        )

    @property
    def PINATA_API_URL(self) -> str:
        return self._get_setting("PINATA_API_URL", default="https://api.pinata.cloud")

    @property
    def PINATA_JWT(self) -> str | None:
        return self._get_setting("PINATA_JWT")

    @property
    def PINATA_API_KEY(self) -> str | None:
        return self._get_setting("PINATA_API_KEY")

    @property
    def PINATA_SECRET_API_KEY(self) -> str | None:
        return self._get_setting("PINATA_SECRET_API_KEY")

    @property
    def RECENT_NFT_STORE(self) -> str:
        return self._get_setting(
            "RECENT_NFT_STORE",
            default="django_solana_nft_minter.stores.DatabaseRecentNftStore",
        )

    @property
    def MAX_IMAGE_SIZE_BYTES(self) -> int:
        # 10MB, same limit the upload form advertises
        return self._get_setting("MAX_IMAGE_SIZE_BYTES", default=10 * 1024 * 1024)


# Global instance - settings are read dynamically from django.conf.settings on each access
nft_minter_settings = SolanaNftMinterSettings()
