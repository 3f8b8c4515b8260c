"""
Address primitives used by the schema layer (template defaults and encode-time checks).
"""

from __future__ import annotations

from typing import Any

from eth_utils import is_address, to_checksum_address

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def is_valid_address(value: Any) -> bool:
    """True for 20-byte hex addresses (lowercase, uppercase or valid checksum)."""
    return isinstance(value, str) and is_address(value)


def normalize_address(value: str) -> str:
    """Return the EIP-55 checksummed form; raises ValueError for non-addresses."""
    if not is_valid_address(value):
        raise ValueError(f"invalid address: {value!r}")
    return to_checksum_address(value)


__all__ = ["ZERO_ADDRESS", "is_valid_address", "normalize_address"]
