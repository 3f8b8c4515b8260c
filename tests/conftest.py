"""
Shared pytest fixtures:
- Deterministic sha2-256 digests and the CIDv0 strings they map to
- A few addresses in checksummed form (the ABI decoder returns checksummed)
- Isolation from EAS_SCHEMA_* environment overrides
"""
from __future__ import annotations

import hashlib
from typing import List

import pytest
from eth_utils import to_checksum_address

from eas_schema.codec.cid import decode_cid


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests must not pick up a developer's EAS_SCHEMA_* settings."""
    for key in (
        "EAS_SCHEMA_CONTENT_HASH_TYPE",
        "EAS_SCHEMA_CONTENT_HASH_FIELD",
        "EAS_SCHEMA_BYTES32_OVERFLOW",
        "EAS_SCHEMA_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def digest() -> bytes:
    return hashlib.sha256(b"eas-schema test document").digest()


@pytest.fixture
def qm_cid(digest: bytes) -> str:
    """CIDv0 for `digest`."""
    return decode_cid(digest)


@pytest.fixture
def addresses() -> List[str]:
    return [to_checksum_address("0x" + f"{i:02x}" * 20) for i in (0x11, 0xA5, 0xFE)]
