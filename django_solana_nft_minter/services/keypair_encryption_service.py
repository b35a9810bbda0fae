import logging

from cryptography.fernet import Fernet, InvalidToken
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)


class KeypairEncryptionService:
    """Fernet wrapper for keeping the minter keypair encrypted in settings."""

    def __init__(self, encryption_key: str):
        try:
            self._fernet = Fernet(encryption_key.encode("utf-8"))
        except (ValueError, TypeError, AttributeError) as exc:
            raise ImproperlyConfigured(
                "Invalid MINTER_KEYPAIR_ENCRYPTION_KEY"
            ) from exc

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        try:
            return self._fernet.decrypt(ciphertext.encode("utf-8")).decode("utf-8")
        except InvalidToken as exc:
            logger.error("Failed to decrypt MINTER_KEYPAIR with the configured key")
            raise ImproperlyConfigured(
                "MINTER_KEYPAIR could not be decrypted with "
                "MINTER_KEYPAIR_ENCRYPTION_KEY"
            ) from exc
