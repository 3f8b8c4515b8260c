"""
Encoder configuration: content-hash naming, bytes32 overflow policy, logging.

- Loads sane defaults and supports overrides via environment variables (EAS_SCHEMA_*).
- Library entry points use `SchemaConfig()` unless a config is passed; the CLI
  reads `SchemaConfig.from_env()`.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

_DEFAULT_CONTENT_HASH = "ipfsHash"
_OVERFLOW_POLICIES = ("truncate", "error")
_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


def _ensure_ident(value: str, what: str) -> str:
    if not _IDENT_RE.match(value):
        raise ValueError(f"{what} must be an identifier, got: {value!r}")
    return value


def _ensure_policy(value: str) -> str:
    v = value.strip().lower()
    if v not in _OVERFLOW_POLICIES:
        raise ValueError(f"bytes32 overflow policy must be one of {_OVERFLOW_POLICIES}, got: {value!r}")
    return v


def _ensure_level(value: str) -> str:
    v = value.strip().upper()
    if not isinstance(logging.getLevelName(v), int):
        raise ValueError(f"Unknown log level: {value!r}")
    return v


@dataclass(frozen=True, slots=True)
class SchemaConfig:
    # Pseudo-type literal rewritten to bytes32 in schemas
    content_hash_type: str = _DEFAULT_CONTENT_HASH
    # bytes32 fields with this name are encoded through the CID codec
    content_hash_field: str = _DEFAULT_CONTENT_HASH
    # What to do with strings longer than 31 UTF-8 bytes in a bytes32 slot
    bytes32_overflow: str = "truncate"
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        _ensure_ident(self.content_hash_type, "content_hash_type")
        _ensure_ident(self.content_hash_field, "content_hash_field")
        _ensure_policy(self.bytes32_overflow)
        _ensure_level(self.log_level)

    @classmethod
    def from_env(cls, prefix: str = "EAS_SCHEMA_") -> "SchemaConfig":
        """
        Create config from environment variables:

        EAS_SCHEMA_CONTENT_HASH_TYPE   (identifier, default ipfsHash)
        EAS_SCHEMA_CONTENT_HASH_FIELD  (identifier, default ipfsHash)
        EAS_SCHEMA_BYTES32_OVERFLOW    (truncate | error)
        EAS_SCHEMA_LOG_LEVEL           (DEBUG, INFO, WARNING, ...)
        """
        return cls(
            content_hash_type=_env(f"{prefix}CONTENT_HASH_TYPE", _DEFAULT_CONTENT_HASH),
            content_hash_field=_env(f"{prefix}CONTENT_HASH_FIELD", _DEFAULT_CONTENT_HASH),
            bytes32_overflow=_ensure_policy(_env(f"{prefix}BYTES32_OVERFLOW", "truncate")),
            log_level=_ensure_level(_env(f"{prefix}LOG_LEVEL", "WARNING")),
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["SchemaConfig"] = None, **overrides: Any
    ) -> "SchemaConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys and None values are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data and v is not None})
        if "bytes32_overflow" in overrides and overrides["bytes32_overflow"] is not None:
            data["bytes32_overflow"] = _ensure_policy(overrides["bytes32_overflow"])
        if "log_level" in overrides and overrides["log_level"] is not None:
            data["log_level"] = _ensure_level(overrides["log_level"])
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["SchemaConfig"]
