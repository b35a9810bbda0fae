import json
from typing import Any

from solders.keypair import Keypair

INSUFFICIENT_BALANCE_MARKERS = ("insufficient lamports", "insufficient sol")


def parse_keypair(keypair_data: Any) -> Keypair:
    """
    Parse the minter keypair from one of the supported formats:

    - JSON array string: "[1,2,3,...,64]"
    - Base58 string: e.g. "5J3mBb..."
    - Python list or bytes: [1,2,3,...] or b"..."

    Raises ValueError on unsupported/invalid input.
    """
    if isinstance(keypair_data, Keypair):
        return keypair_data

    if isinstance(keypair_data, str):
        s = keypair_data.strip()
        if s.startswith("["):
            try:
                return Keypair.from_bytes(bytes(json.loads(s)))
            except (ValueError, TypeError) as e:
                raise ValueError(f"Failed to parse keypair from JSON array: {e}")
        try:
            return Keypair.from_base58_string(s)
        except ValueError as e:
            raise ValueError(f"Failed to parse keypair from base58 string: {e}")

    if isinstance(keypair_data, (list, bytes)):
        try:
            return Keypair.from_bytes(bytes(keypair_data))
        except (ValueError, TypeError) as e:
            raise ValueError(f"Failed to parse keypair from bytes/list: {e}")

    raise ValueError(f"Unsupported keypair format: {type(keypair_data)}")


def is_insufficient_balance_message(message: str) -> bool:
    lowered = (message or "").lower()
    return any(marker in lowered for marker in INSUFFICIENT_BALANCE_MARKERS)
