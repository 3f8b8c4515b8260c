"""
eas_schema.codec.cid
====================

Content identifiers (CIDs) on the wire as a single `bytes32`.

Only the multihash *digest* is stored; the hash function, digest size, CID
version and codec are dropped. Decoding therefore assumes the common IPFS
case and rebuilds a CIDv0:

    multihash = 0x12 (sha2-256) || 0x20 (32 bytes) || digest
    cid       = base58btc(multihash)            # "Qm..."

Round trips are exact for sha2-256 CIDv0 values. A CIDv1 over a sha2-256
digest decodes to the equivalent CIDv0.

`encode_ipfs_value` is the forgiving entry point used for content-hash schema
fields: it accepts a CID string, a pre-encoded 32-byte value, or any other
string (stored as a bytes32 string).
"""

from __future__ import annotations

import logging
from typing import Any, Union

from eth_abi import encode as abi_encode
from multiformats import CID

from ..errors import CodecError, HashDecodeError
from ..utils.bytes import (BYTES32_SIZE, BytesLike, ensure_bytes,
                           format_bytes32_string, from_hex, is_bytes_like)

log = logging.getLogger(__name__)

__all__ = [
    "SHA2_256_CODE",
    "SHA2_256_SIZE",
    "parse_cid",
    "is_cid",
    "encode_cid",
    "decode_cid",
    "encode_bytes32_value",
    "encode_ipfs_value",
]

SHA2_256_CODE = 0x12
SHA2_256_SIZE = 32


def parse_cid(value: Any) -> CID:
    """Parse a CID string (v0 or multibase-prefixed v1); HashDecodeError otherwise."""
    if not isinstance(value, str):
        raise HashDecodeError("CID must be a string", value=value)
    try:
        return CID.decode(value)
    except Exception as e:  # multibase/multicodec/varint errors all mean "not a CID"
        raise HashDecodeError(f"invalid CID: {e}", value=value) from e


def is_cid(value: Any) -> bool:
    try:
        parse_cid(value)
    except HashDecodeError:
        return False
    return True


def encode_cid(value: str) -> bytes:
    """Return the CID's raw multihash digest ABI-encoded as bytes32."""
    cid = parse_cid(value)
    digest = bytes(cid.raw_digest)
    if len(digest) != BYTES32_SIZE:
        raise CodecError(
            f"CID digest is {len(digest)} bytes, expected {BYTES32_SIZE}",
            type="bytes32",
        )
    return abi_encode(["bytes32"], [digest])


def decode_cid(value: Union[BytesLike, str]) -> str:
    """Render a 32-byte sha2-256 digest (raw or 0x-hex) as a CIDv0 string."""
    try:
        digest = ensure_bytes(value)
    except (TypeError, ValueError) as e:
        raise HashDecodeError(f"invalid bytes32 value: {e}", value=value) from e
    if len(digest) != SHA2_256_SIZE:
        raise HashDecodeError(
            f"digest must be {SHA2_256_SIZE} bytes, got {len(digest)}", value=value
        )
    multihash = bytes([SHA2_256_CODE, SHA2_256_SIZE]) + digest
    return str(CID("base58btc", 0, "dag-pb", multihash))


def encode_bytes32_value(value: Any, *, overflow: str = "truncate") -> bytes:
    """
    Coerce `value` into the 32 bytes stored for a bytes32 slot.

    Exactly-32-byte inputs (raw or 0x-hex) pass through; any other string is
    stored as a NUL-padded UTF-8 bytes32 string.
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        if len(raw) != BYTES32_SIZE:
            raise CodecError(
                f"bytes32 value must be {BYTES32_SIZE} bytes, got {len(raw)}",
                type="bytes32",
            )
        return raw
    if not isinstance(value, str):
        raise CodecError(f"Unsupported bytes32 value: {type(value).__name__}", type="bytes32")
    if is_bytes_like(value):
        raw = from_hex(value)
        if len(raw) == BYTES32_SIZE:
            return raw
    try:
        return format_bytes32_string(value, overflow=overflow)
    except ValueError as e:
        raise CodecError(str(e), type="bytes32") from e


def encode_ipfs_value(value: Any, *, overflow: str = "truncate") -> bytes:
    """
    Encode a content-hash field value.

    Order of attempts: bytes-like passthrough, CID digest, bytes32 string.
    """
    if is_bytes_like(value):
        return encode_bytes32_value(value, overflow=overflow)
    try:
        return encode_cid(value)
    except (HashDecodeError, CodecError) as e:
        log.debug("content hash %r is not a usable CID (%s); storing as bytes32 string", value, e)
        return encode_bytes32_value(value, overflow=overflow)
