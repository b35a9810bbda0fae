import logging
from decimal import Decimal

from solders.pubkey import Pubkey

from django_solana_nft_minter.settings import nft_minter_settings
from django_solana_nft_minter.solana.base_solana_client import BaseSolanaClient

logger = logging.getLogger(__name__)


class SolanaBalanceClient:
    def __init__(self, base_solana_client: BaseSolanaClient):
        self.base_solana_client = base_solana_client

    async def get_balance_by_address(self, address: Pubkey) -> Decimal:
        balance = (await self.base_solana_client.http_client.get_balance(address)).value
        return Decimal(balance) / Decimal(self.base_solana_client.LAMPORTS_PER_SOL)

    async def has_enough_sol_for_minting(self, address: Pubkey) -> bool:
        """
        A failed balance query counts as not enough: minting is not attempted
        without a known balance.
        """
        try:
            balance = await self.get_balance_by_address(address)
        except Exception as e:
            logger.error(f"Error checking balance of {address}: {e}")
            return False

        return balance >= nft_minter_settings.MIN_SOL_BALANCE_FOR_MINTING
