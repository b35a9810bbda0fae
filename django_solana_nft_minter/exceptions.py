from typing import Any, Union

from rest_framework.exceptions import APIException


class BaseAPIException(APIException):
    """
    Base API exception.
    """

    def __init__(self, error_message: Union[str, dict], status_code: int):
        self.error_message = error_message
        self.status_code = status_code
        super().__init__(self.error_message)


class ViewException(BaseAPIException):
    """Base view exception."""


class SolanaNftMinterError(Exception):
    """Base exception for the library."""

    code: str = "solana_nft_minter_error"
    message: str = "Solana NFT minter error"


class ConfirmationError(SolanaNftMinterError):
    pass


class ConfirmationQueryError(ConfirmationError):
    """A single signature status query failed. Recovered by retrying."""

    code = "confirmation_query_error"

    def __init__(self, tx_signature: str, original: Exception):
        super().__init__(
            f"Status query for transaction {tx_signature} failed: {original}"
        )
        self.tx_signature = tx_signature
        self.original = original


class ConfirmationTimeoutError(ConfirmationError):
    code = "confirmation_timeout"

    def __init__(
        self,
        tx_signature: str,
        timeout_ms: int,
        last_query_error: ConfirmationQueryError | None = None,
    ):
        message = (
            f"Transaction confirmation timeout: {tx_signature} was not confirmed "
            f"within {timeout_ms} ms"
        )
        if last_query_error is not None:
            message = f"{message} (last query error: {last_query_error.original})"
        super().__init__(message)
        self.tx_signature = tx_signature
        self.timeout_ms = timeout_ms
        self.last_query_error = last_query_error


class NftMintError(SolanaNftMinterError):
    code = "nft_mint_error"

    def __init__(self, message: str, on_chain_error: Any = None):
        super().__init__(message)
        self.on_chain_error = on_chain_error


class InsufficientBalanceError(NftMintError):
    code = "insufficient_balance"


class InvalidNftMetadataError(SolanaNftMinterError):
    code = "invalid_nft_metadata"


class MetadataUploadError(SolanaNftMinterError):
    code = "metadata_upload_error"


class StorageConfigurationError(SolanaNftMinterError):
    code = "storage_configuration_error"
