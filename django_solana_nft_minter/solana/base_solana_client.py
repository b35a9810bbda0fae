import logging

import httpx
import stamina
from django.core.exceptions import ImproperlyConfigured
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solders.keypair import Keypair
from solders.signature import Signature
from solders.transaction import Transaction
from spl.token.constants import NATIVE_DECIMALS

from django_solana_nft_minter.services.keypair_encryption_service import (
    KeypairEncryptionService,
)
from django_solana_nft_minter.settings import nft_minter_settings
from django_solana_nft_minter.solana.confirmation_poller import ConfirmationPoller
from django_solana_nft_minter.solana.dtos import ConfirmationStatusDTO
from django_solana_nft_minter.solana.polling_connection import PollingConnection
from django_solana_nft_minter.utils import parse_keypair

solana_client_logger = logging.getLogger(__name__)


class BaseSolanaClient:
    """
    Async RPC client for one environment. The underlying connection never
    subscribes: it is wrapped in a PollingConnection.

    Usable as an async context manager, which closes the HTTP session on exit.
    """

    def __init__(self, rpc_url: str = None, environment: str = None):
        self.environment = environment or nft_minter_settings.DEFAULT_ENVIRONMENT
        self._rpc_url = self._build_rpc_url(rpc_url, self.environment)
        rpc_client = AsyncClient(
            endpoint=self._rpc_url,
            commitment=nft_minter_settings.RPC_COMMITMENT,
        )
        self._http_client = PollingConnection(
            rpc_client, poller=ConfirmationPoller(rpc_client)
        )
        self.LAMPORTS_PER_SOL = 10**NATIVE_DECIMALS

    @staticmethod
    def _build_rpc_url(rpc_url: str | None, environment: str) -> str:
        """Builds Solana RPC endpoint URL with provided rpc_url parameter if needed."""
        return rpc_url or nft_minter_settings.rpc_url_for(environment)

    @property
    def rpc_url(self) -> str:
        return self._rpc_url

    @property
    def http_client(self) -> PollingConnection:
        return self._http_client

    @property
    def MINTER_KEYPAIR(self) -> Keypair:
        """
        Parse the minter keypair from settings, decrypting it first when
        MINTER_KEYPAIR_ENCRYPTION_KEY is set.
        """
        keypair_data = nft_minter_settings.MINTER_KEYPAIR
        encryption_key = nft_minter_settings.MINTER_KEYPAIR_ENCRYPTION_KEY

        if encryption_key:
            keypair_data = KeypairEncryptionService(encryption_key).decrypt(
                keypair_data
            )

        try:
            return parse_keypair(keypair_data)
        except ValueError as e:
            solana_client_logger.error(f"Invalid MINTER_KEYPAIR: {e}")
            raise ImproperlyConfigured(
                "Invalid MINTER_KEYPAIR in settings. "
                "Supported formats: JSON string '[1,2,3,...]', Base58 string, or byte array. "
                f"Error: {e}"
            )

    async def close(self) -> None:
        await self._http_client.close()

    async def __aenter__(self) -> "BaseSolanaClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def confirm_transaction(
        self,
        tx_signature: Signature,
        commitment: Commitment | None = None,
        timeout_ms: int | None = None,
    ) -> ConfirmationStatusDTO:
        commitment = commitment or nft_minter_settings.CONFIRMATION_COMMITMENT

        confirmation = await self.http_client.confirm_transaction_using_polling(
            tx_signature, commitment=commitment, timeout_ms=timeout_ms
        )

        if confirmation.is_failure:
            solana_client_logger.error(
                f"Transaction with signature: {str(tx_signature)} failed on-chain: "
                f"{confirmation.error}"
            )
        else:
            solana_client_logger.info(
                f"Transaction with signature: {str(tx_signature)} was confirmed"
            )

        return confirmation

    @stamina.retry(
        on=(SolanaRpcException, httpx.HTTPStatusError, httpx.RequestError),
        attempts=5,
        wait_initial=1.0,
        wait_max=5.0,
    )
    async def send_transaction_with_retry(self, transaction: Transaction) -> Signature:
        """
        Sends a transaction with retries on network errors.
        """
        try:
            sent_transaction = await self.http_client.send_transaction(transaction)
            return sent_transaction.value
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 429:
                solana_client_logger.warning(
                    "Rate limit reached while sending transaction, will retry"
                )
            else:
                solana_client_logger.warning(f"send_transaction error: {str(e)}")
            raise
        except (SolanaRpcException, httpx.RequestError) as e:
            solana_client_logger.warning(f"send_transaction error: {e}")
            raise
