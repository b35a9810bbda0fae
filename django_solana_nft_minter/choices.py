from django.db import models


class SolanaEnvironmentTypes(models.TextChoices):
    DEVNET = "devnet", "Devnet (Testing)"
    MAINNET = "mainnet", "Mainnet (Production)"


class ConfirmationStatusTypes(models.TextChoices):
    PENDING = "pending"
    CONFIRMED_SUCCESS = "confirmed_success"
    CONFIRMED_FAILURE = "confirmed_failure"


class StorageBackendTypes(models.TextChoices):
    MOCK = "mock", "Mock storage"
    PINATA = "pinata", "Pinata (IPFS)"
