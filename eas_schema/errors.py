"""
Typed error classes for the schema encoder.

These are raised by schema/parser, codec/values and codec/cid so callers can
catch specific failure modes while still being able to catch the base
`EasSchemaError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

__all__ = [
    "EasSchemaError",
    "SchemaParseError",
    "ValidationError",
    "CodecError",
    "HashDecodeError",
    "InternalConsistencyError",
]


class EasSchemaError(Exception):
    """Base class for all schema encoder errors."""


@dataclass(slots=True)
class SchemaParseError(EasSchemaError):
    """
    Raised when a schema string cannot be parsed, or declares a type the ABI
    codec cannot encode. No partial encoder is produced.
    """

    message: str
    schema: Optional[str] = None
    declaration: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = f" [decl={self.declaration!r}]" if self.declaration else ""
        return f"SchemaParseError{where}: {self.message}"


@dataclass(slots=True)
class ValidationError(EasSchemaError):
    """
    Raised by encode when the provided items do not match the schema.

    Fields:
      - kind: "field_count", "item" (malformed item), "type" or "name"
      - index: position of the offending item (None for field_count)
      - expected / got: what the schema wanted and what the caller passed
    """

    message: str
    kind: str
    index: Optional[int] = None
    expected: Optional[Any] = None
    got: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        at = f" at field {self.index}" if self.index is not None else ""
        bits = [f"ValidationError[{self.kind}]{at}: {self.message}"]
        if self.expected is not None or self.got is not None:
            bits.append(f"(expected={self.expected!r} got={self.got!r})")
        return " ".join(bits)


@dataclass(slots=True)
class CodecError(EasSchemaError):
    """
    Raised when the ABI codec rejects a value or a payload.

    Typical causes: wrong value shapes, out-of-range integers, bad hex,
    truncated or malformed encoded data.
    """

    message: str
    type: Optional[str] = None
    details: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = f" [type={self.type}]" if self.type else ""
        extra = f" ({self.details})" if self.details else ""
        return f"CodecError{where}: {self.message}{extra}"


@dataclass(slots=True)
class HashDecodeError(EasSchemaError):
    """Raised when a value is not a parseable CID (or not a 32-byte digest)."""

    message: str
    value: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"HashDecodeError: {self.message} (value={self.value!r})"


@dataclass(slots=True)
class InternalConsistencyError(EasSchemaError):
    """A stored signature no longer describes the decoded structure. A defect, not a user error."""

    message: str
    signature: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        sig = f" [sig={self.signature!r}]" if self.signature else ""
        return f"InternalConsistencyError{sig}: {self.message}"
