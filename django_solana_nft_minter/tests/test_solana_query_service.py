from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from solana.rpc.commitment import Finalized
from solders.pubkey import Pubkey
from solders.signature import Signature

from django_solana_nft_minter.choices import ConfirmationStatusTypes
from django_solana_nft_minter.exceptions import ConfirmationTimeoutError
from django_solana_nft_minter.services.solana_query_service import SolanaQueryService
from django_solana_nft_minter.solana.dtos import ConfirmationStatusDTO

SIGNATURE = Signature.from_bytes(bytes([12] * 64))
ADDRESS = str(Pubkey.from_bytes(bytes([13] * 32)))


@pytest.fixture
def fake_solana_client():
    fake_client = MagicMock()
    fake_client.__aenter__.return_value = fake_client
    return fake_client


@pytest.fixture
def query_service(fake_solana_client):
    service = SolanaQueryService(environment="mainnet")
    service.build_solana_client = MagicMock(return_value=fake_solana_client)
    return service


def test_environment_defaults_to_settings():
    assert SolanaQueryService().environment == "devnet"


def test_await_transaction_confirmation_returns_status(
    query_service, fake_solana_client
):
    confirmation = ConfirmationStatusDTO(
        tx_signature=SIGNATURE,
        status=ConfirmationStatusTypes.CONFIRMED_SUCCESS,
        slot=99,
    )
    fake_solana_client.confirm_transaction = AsyncMock(return_value=confirmation)

    result = query_service.await_transaction_confirmation(
        str(SIGNATURE), commitment=Finalized, timeout_ms=2_000
    )

    assert result == confirmation
    fake_solana_client.confirm_transaction.assert_awaited_once_with(
        str(SIGNATURE), commitment=Finalized, timeout_ms=2_000
    )
    fake_solana_client.__aexit__.assert_awaited_once()


def test_await_transaction_confirmation_propagates_timeout(
    query_service, fake_solana_client
):
    fake_solana_client.confirm_transaction = AsyncMock(
        side_effect=ConfirmationTimeoutError(str(SIGNATURE), 2_000)
    )

    with pytest.raises(ConfirmationTimeoutError):
        query_service.await_transaction_confirmation(str(SIGNATURE))

    fake_solana_client.__aexit__.assert_awaited_once()


@pytest.mark.parametrize(
    "balance, can_mint",
    [(Decimal("0.5"), True), (Decimal("0.02"), True), (Decimal("0.001"), False)],
)
def test_get_wallet_balance_reports_mint_eligibility(query_service, balance, can_mint):
    with patch(
        "django_solana_nft_minter.services.solana_query_service.SolanaBalanceClient"
    ) as mock_balance_client_class:
        mock_balance_client_class.return_value.get_balance_by_address = AsyncMock(
            return_value=balance
        )

        result = query_service.get_wallet_balance(ADDRESS)

    assert result == (balance, can_mint)
    mock_balance_client_class.return_value.get_balance_by_address.assert_awaited_once_with(
        Pubkey.from_string(ADDRESS)
    )
