import logging
from decimal import Decimal

from asgiref.sync import async_to_sync
from solana.rpc.commitment import Commitment
from solders.pubkey import Pubkey

from django_solana_nft_minter.settings import nft_minter_settings
from django_solana_nft_minter.solana.base_solana_client import BaseSolanaClient
from django_solana_nft_minter.solana.dtos import ConfirmationStatusDTO
from django_solana_nft_minter.solana.solana_balance_client import SolanaBalanceClient

logger = logging.getLogger(__name__)


class SolanaQueryService:
    """Read-only ledger lookups for one environment."""

    def __init__(self, environment: str | None = None):
        self.environment = environment or nft_minter_settings.DEFAULT_ENVIRONMENT

    def build_solana_client(self) -> BaseSolanaClient:
        return BaseSolanaClient(environment=self.environment)

    async def aawait_transaction_confirmation(
        self,
        tx_signature: str,
        commitment: Commitment | None = None,
        timeout_ms: int | None = None,
    ) -> ConfirmationStatusDTO:
        async with self.build_solana_client() as solana_client:
            return await solana_client.confirm_transaction(
                tx_signature, commitment=commitment, timeout_ms=timeout_ms
            )

    def await_transaction_confirmation(
        self,
        tx_signature: str,
        commitment: Commitment | None = None,
        timeout_ms: int | None = None,
    ) -> ConfirmationStatusDTO:
        logger.info(
            "Awaiting confirmation of %s on %s (commitment=%s, timeout_ms=%s)",
            tx_signature,
            self.environment,
            commitment,
            timeout_ms,
        )
        return async_to_sync(self.aawait_transaction_confirmation)(
            tx_signature, commitment, timeout_ms
        )

    async def aget_wallet_balance(self, address: str) -> tuple[Decimal, bool]:
        async with self.build_solana_client() as solana_client:
            balance = await SolanaBalanceClient(
                base_solana_client=solana_client
            ).get_balance_by_address(Pubkey.from_string(address))

        return balance, balance >= nft_minter_settings.MIN_SOL_BALANCE_FOR_MINTING

    def get_wallet_balance(self, address: str) -> tuple[Decimal, bool]:
        """Returns the SOL balance of `address` and whether it covers a mint."""
        return async_to_sync(self.aget_wallet_balance)(address)
