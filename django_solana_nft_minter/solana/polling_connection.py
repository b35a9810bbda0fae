import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable

from solana.rpc.commitment import Commitment
from solders.signature import Signature

from django_solana_nft_minter.exceptions import ConfirmationTimeoutError
from django_solana_nft_minter.settings import nft_minter_settings
from django_solana_nft_minter.solana.confirmation_poller import (
    ConfirmationPoller,
    commitment_rank,
    to_signature,
)
from django_solana_nft_minter.solana.dtos import (
    ConfirmationStatusDTO,
    SimulationResultDTO,
)

logger = logging.getLogger(__name__)

SUBSCRIPTIONS_DISABLED_MESSAGE = (
    "WebSocket subscriptions are disabled. Using polling instead."
)

SignatureCallback = Callable[[ConfirmationStatusDTO, dict[str, Any]], Any]


@dataclass(slots=True)
class PollingSubscription:
    """Stand-in for a subscription handle. Only signature subscriptions carry a task."""

    subscription_id: int = 0
    task: asyncio.Task | None = None

    def cancel(self) -> None:
        if self.task is not None and not self.task.done():
            self.task.cancel()


class PollingConnection:
    """
    Wraps an async Solana RPC client so that nothing opens a persistent socket.

    Push-based subscription entry points become inert, signature subscriptions
    and transaction confirmation are resolved by polling, and simulation
    failures are swallowed into an empty result. Every other attribute is
    delegated to the wrapped client unchanged.
    """

    def __init__(self, client, poller: ConfirmationPoller | None = None):
        self._client = client
        self.poller = poller or ConfirmationPoller(client)

    def __getattr__(self, name):
        if name == "_client":
            raise AttributeError(name)
        return getattr(self._client, name)

    @property
    def wrapped_client(self):
        return self._client

    def _inert_subscription(self, kind: str) -> PollingSubscription:
        logger.warning("%s (%s)", SUBSCRIPTIONS_DISABLED_MESSAGE, kind)
        return PollingSubscription()

    def account_subscribe(self, *args, **kwargs) -> PollingSubscription:
        return self._inert_subscription("account_subscribe")

    def program_subscribe(self, *args, **kwargs) -> PollingSubscription:
        return self._inert_subscription("program_subscribe")

    def logs_subscribe(self, *args, **kwargs) -> PollingSubscription:
        return self._inert_subscription("logs_subscribe")

    def slot_subscribe(self, *args, **kwargs) -> PollingSubscription:
        return self._inert_subscription("slot_subscribe")

    def slots_updates_subscribe(self, *args, **kwargs) -> PollingSubscription:
        return self._inert_subscription("slots_updates_subscribe")

    def root_subscribe(self, *args, **kwargs) -> PollingSubscription:
        return self._inert_subscription("root_subscribe")

    def signature_subscribe(
        self,
        signature: Signature | str,
        callback: SignatureCallback,
        commitment: Commitment | None = None,
    ) -> PollingSubscription:
        """
        Starts polling for `signature` in the running event loop and calls
        `callback(status, {"slot": slot})` once with the terminal status.
        Raises ValueError right away for a malformed signature or an unknown
        commitment.
        """
        logger.warning("%s (signature_subscribe)", SUBSCRIPTIONS_DISABLED_MESSAGE)
        signature = to_signature(signature)
        commitment_rank(commitment or nft_minter_settings.CONFIRMATION_COMMITMENT)

        task = asyncio.get_running_loop().create_task(
            self._poll_signature_status(signature, callback, commitment)
        )
        return PollingSubscription(task=task)

    async def _poll_signature_status(
        self,
        signature: Signature | str,
        callback: SignatureCallback,
        commitment: Commitment | None,
    ) -> None:
        try:
            result = await self.poller.await_confirmation(signature, commitment)
            callback(result, {"slot": result.slot})
        except ConfirmationTimeoutError as e:
            logger.error("Signature subscription for %s gave up: %s", signature, e)
        except Exception:
            logger.exception("Signature subscription for %s failed", signature)

    async def account_unsubscribe(self, subscription_id: int) -> None:
        return None

    async def program_unsubscribe(self, subscription_id: int) -> None:
        return None

    async def logs_unsubscribe(self, subscription_id: int) -> None:
        return None

    async def slot_unsubscribe(self, subscription_id: int) -> None:
        return None

    async def slots_updates_unsubscribe(self, subscription_id: int) -> None:
        return None

    async def root_unsubscribe(self, subscription_id: int) -> None:
        return None

    async def signature_unsubscribe(self, subscription_id: int) -> None:
        return None

    async def confirm_transaction(
        self,
        tx_sig: Signature | str,
        commitment: Commitment | None = None,
        *args,
        **kwargs,
    ) -> ConfirmationStatusDTO:
        return await self.confirm_transaction_using_polling(tx_sig, commitment)

    async def confirm_transaction_using_polling(
        self,
        tx_sig: Signature | str,
        commitment: Commitment | None = None,
        timeout_ms: int | None = None,
    ) -> ConfirmationStatusDTO:
        return await self.poller.await_confirmation(
            tx_sig, commitment=commitment, timeout_ms=timeout_ms
        )

    async def simulate_transaction(self, txn, *args, **kwargs) -> SimulationResultDTO:
        """
        Simulates `txn` for diagnostics. An unavailable simulation endpoint
        yields an empty result instead of an exception.
        """
        try:
            response = await self._client.simulate_transaction(txn, *args, **kwargs)
        except Exception as e:
            logger.error("Error simulating transaction: %s", e)
            return SimulationResultDTO()

        simulation = response.value
        return SimulationResultDTO(
            err=simulation.err,
            logs=list(simulation.logs or []),
            accounts=simulation.accounts,
            units_consumed=simulation.units_consumed or 0,
            slot=response.context.slot,
        )
