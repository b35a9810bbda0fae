import asyncio
import logging
import time
from typing import Awaitable, Callable

from solana.rpc.commitment import Commitment, Confirmed, Finalized, Processed
from solders.signature import Signature
from solders.transaction_status import TransactionConfirmationStatus

from django_solana_nft_minter.choices import ConfirmationStatusTypes
from django_solana_nft_minter.exceptions import (
    ConfirmationQueryError,
    ConfirmationTimeoutError,
)
from django_solana_nft_minter.settings import nft_minter_settings
from django_solana_nft_minter.solana.dtos import ConfirmationStatusDTO

logger = logging.getLogger(__name__)

# Ascending order of ledger guarantees
COMMITMENT_ORDER: tuple[Commitment, ...] = (Processed, Confirmed, Finalized)
CONFIRMATION_STATUS_ORDER = (
    TransactionConfirmationStatus.Processed,
    TransactionConfirmationStatus.Confirmed,
    TransactionConfirmationStatus.Finalized,
)


def commitment_rank(commitment: Commitment) -> int:
    try:
        return COMMITMENT_ORDER.index(commitment)
    except ValueError:
        raise ValueError(
            f"Unsupported commitment level: '{commitment}'. "
            f"Expected one of {COMMITMENT_ORDER}"
        )


def confirmation_status_rank(
    confirmation_status: TransactionConfirmationStatus | None,
) -> int:
    """Returns -1 for a status the ledger has not ranked yet."""
    for rank, known_status in enumerate(CONFIRMATION_STATUS_ORDER):
        if confirmation_status == known_status:
            return rank
    return -1


def confirmation_status_name(
    confirmation_status: TransactionConfirmationStatus | None,
) -> str | None:
    rank = confirmation_status_rank(confirmation_status)
    return str(COMMITMENT_ORDER[rank]) if rank >= 0 else None


def to_signature(tx_signature: Signature | str) -> Signature:
    if isinstance(tx_signature, Signature):
        return tx_signature

    if not tx_signature or not str(tx_signature).strip():
        raise ValueError("Transaction signature must be a non-empty string")

    return Signature.from_string(str(tx_signature).strip())


class ConfirmationPoller:
    """
    Resolves the on-ledger outcome of a submitted transaction by repeatedly
    querying its signature status instead of holding a subscription open.

    Each await_confirmation call is an independent coroutine: queries inside
    one call are strictly sequential, and concurrent calls only share the
    read-only RPC client.
    """

    def __init__(
        self,
        client,
        poll_interval_ms: int | None = None,
        timeout_ms: int | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client
        self._poll_interval_ms = poll_interval_ms
        self._timeout_ms = timeout_ms
        self._clock = clock
        self._sleep = sleep

    @property
    def poll_interval_ms(self) -> int:
        if self._poll_interval_ms is None:
            return nft_minter_settings.CONFIRMATION_POLL_INTERVAL_MS
        return self._poll_interval_ms

    @property
    def timeout_ms(self) -> int:
        if self._timeout_ms is None:
            return nft_minter_settings.CONFIRMATION_TIMEOUT_MS
        return self._timeout_ms

    async def await_confirmation(
        self,
        tx_signature: Signature | str,
        commitment: Commitment | None = None,
        timeout_ms: int | None = None,
    ) -> ConfirmationStatusDTO:
        """
        Polls until the transaction carries an on-chain error or reaches
        `commitment`, returning the first conclusive status.

        Raises ConfirmationTimeoutError when nothing conclusive was observed
        within `timeout_ms` of the first query. Query errors are logged and
        retried; the timeout is checked between attempts only.
        """
        signature = to_signature(tx_signature)
        commitment = commitment or nft_minter_settings.CONFIRMATION_COMMITMENT
        target_rank = commitment_rank(commitment)
        timeout_ms = self.timeout_ms if timeout_ms is None else timeout_ms

        if timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be greater than 0, got {timeout_ms}")

        poll_interval_seconds = self.poll_interval_ms / 1000
        started_at = self._clock()
        last_query_error: ConfirmationQueryError | None = None
        attempt = 0

        while True:
            attempt += 1
            try:
                response = await self.client.get_signature_statuses(
                    [signature], search_transaction_history=True
                )
            except Exception as e:
                last_query_error = ConfirmationQueryError(str(signature), e)
                logger.warning(
                    "Error polling for signature status of %s (attempt %s): %s",
                    signature,
                    attempt,
                    e,
                )
            else:
                last_query_error = None
                result = self._conclusive_status(signature, response, target_rank)
                if result is not None:
                    logger.info(
                        "Transaction %s resolved as %s at slot %s after %s attempt(s)",
                        signature,
                        result.status,
                        result.slot,
                        attempt,
                    )
                    return result

            elapsed_ms = (self._clock() - started_at) * 1000
            if elapsed_ms >= timeout_ms:
                logger.error(
                    "Transaction %s was not confirmed within %s ms (%s attempts)",
                    signature,
                    timeout_ms,
                    attempt,
                )
                raise ConfirmationTimeoutError(
                    str(signature), timeout_ms, last_query_error
                ) from last_query_error

            await self._sleep(poll_interval_seconds)

    @staticmethod
    def _conclusive_status(
        signature: Signature, response, target_rank: int
    ) -> ConfirmationStatusDTO | None:
        if response is None or not response.value:
            return None

        transaction_status = response.value[0]
        if transaction_status is None:
            return None

        slot = response.context.slot if response.context else None

        if transaction_status.err is not None:
            return ConfirmationStatusDTO(
                tx_signature=signature,
                status=ConfirmationStatusTypes.CONFIRMED_FAILURE,
                slot=slot,
                confirmation_status=transaction_status.confirmation_status,
                error=transaction_status.err,
            )

        if (
            confirmation_status_rank(transaction_status.confirmation_status)
            >= target_rank
        ):
            return ConfirmationStatusDTO(
                tx_signature=signature,
                status=ConfirmationStatusTypes.CONFIRMED_SUCCESS,
                slot=slot,
                confirmation_status=transaction_status.confirmation_status,
            )

        return None
