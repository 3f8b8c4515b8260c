from __future__ import annotations

import re
from typing import Any, Union

BytesLike = Union[bytes, bytearray, memoryview]

BYTES32_SIZE = 32

_HEX_RE = re.compile(r"^0[xX](?:[0-9a-fA-F]{2})*$")


def ensure_bytes(data: Union[BytesLike, str]) -> bytes:
    """
    Ensure input is bytes.

    Accepts:
      - bytes / bytearray / memoryview  -> bytes(data)
      - str: treated as hex; optional '0x' prefix; even-length enforced

    Raises:
      ValueError on invalid hex strings.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return from_hex(data)
    raise TypeError(f"Unsupported type for ensure_bytes: {type(data)!r}")


def to_hex(b: BytesLike, prefix: bool = True) -> str:
    """
    Bytes -> hex string (lowercase). Prefix with '0x' by default.
    """
    s = bytes(b).hex()
    return f"0x{s}" if prefix else s


def from_hex(s: str) -> bytes:
    """
    Hex string (optionally '0x' prefixed) -> bytes.

    Enforces even-length (nibbles must pair to bytes) and lowercase/uppercase agnostic.
    """
    if not isinstance(s, str):
        raise TypeError("from_hex expects a string")
    if s.startswith(("0x", "0X")):
        s = s[2:]
    if len(s) % 2 != 0:
        raise ValueError("hex string must have even length")
    try:
        return bytes.fromhex(s)
    except ValueError as e:
        raise ValueError(f"invalid hex string: {e}") from e


def is_bytes_like(value: Any) -> bool:
    """
    True for raw byte sequences and for 0x-prefixed, even-length hex strings.

    Plain text (including un-prefixed hex) is not bytes-like.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return True
    return isinstance(value, str) and bool(_HEX_RE.match(value))


def format_bytes32_string(text: str, *, overflow: str = "truncate") -> bytes:
    """
    UTF-8 encode `text` and right-pad with zero bytes to 32.

    At most 31 bytes of text are kept so the result stays NUL-terminated;
    truncation never splits a multibyte character.
    With overflow="error" longer input raises ValueError instead of being
    truncated.
    """
    raw = text.encode("utf-8")
    if len(raw) > BYTES32_SIZE - 1:
        if overflow == "error":
            raise ValueError("bytes32 string must be less than 32 bytes")
        # back off to a character boundary so the result stays valid UTF-8
        raw = raw[: BYTES32_SIZE - 1].decode("utf-8", "ignore").encode("utf-8")
    return raw.ljust(BYTES32_SIZE, b"\x00")


def parse_bytes32_string(data: Union[BytesLike, str]) -> str:
    """Inverse of format_bytes32_string: strip trailing NULs and UTF-8 decode."""
    raw = ensure_bytes(data)
    if len(raw) != BYTES32_SIZE:
        raise ValueError("invalid bytes32 - not 32 bytes long")
    return raw.split(b"\x00", 1)[0].decode("utf-8")


__all__ = [
    "BytesLike",
    "BYTES32_SIZE",
    "ensure_bytes",
    "to_hex",
    "from_hex",
    "is_bytes_like",
    "format_bytes32_string",
    "parse_bytes32_string",
]
