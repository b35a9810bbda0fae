from dataclasses import dataclass, field
from typing import Any

from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction_status import TransactionConfirmationStatus

from django_solana_nft_minter.choices import ConfirmationStatusTypes


@dataclass(frozen=True, slots=True)
class ConfirmationStatusDTO:
    tx_signature: Signature
    status: ConfirmationStatusTypes = ConfirmationStatusTypes.PENDING
    slot: int | None = None
    confirmation_status: TransactionConfirmationStatus | None = None
    error: Any = None

    @property
    def is_success(self) -> bool:
        return self.status == ConfirmationStatusTypes.CONFIRMED_SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status == ConfirmationStatusTypes.CONFIRMED_FAILURE

    @property
    def is_terminal(self) -> bool:
        return self.status != ConfirmationStatusTypes.PENDING


@dataclass(frozen=True, slots=True)
class SimulationResultDTO:
    err: Any = None
    logs: list[str] = field(default_factory=list)
    accounts: list | None = None
    units_consumed: int = 0
    slot: int = 0


@dataclass(frozen=True, slots=True)
class MintedTokenDTO:
    mint_address: Pubkey
    tx_signature: Signature
    confirmation: ConfirmationStatusDTO
