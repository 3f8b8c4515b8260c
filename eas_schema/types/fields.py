"""
Schema datatypes

This module defines:
- `FieldKind`, the closed set of shapes a declared field can take
- `Param`, one parsed declaration (recursively nested for tuples)
- `FieldDescriptor`, the immutable per-field record an encoder holds
- `SchemaItem`, caller input for encoding
- `NamedValue` / `DecodedField`, decode output with names re-attached

Everything here is frozen: a descriptor list is built once per encoder and
never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..errors import ValidationError
from ..utils.bytes import to_hex

__all__ = [
    "FieldKind",
    "Param",
    "FieldDescriptor",
    "SchemaItem",
    "NamedValue",
    "DecodedField",
    "to_jsonable",
]

TUPLE = "tuple"


class FieldKind(str, Enum):
    PRIMITIVE = "primitive"
    PRIMITIVE_ARRAY = "primitive[]"
    TUPLE = "tuple"
    TUPLE_ARRAY = "tuple[]"


def _dims_suffix(dims: Tuple[Optional[int], ...]) -> str:
    return "".join("[]" if d is None else f"[{d}]" for d in dims)


@dataclass(frozen=True)
class Param:
    """
    A parsed `type name` declaration.

    `dims` lists array dimensions innermost first, so `uint8[2][]` is
    `(2, None)`: a dynamic array of `uint8[2]`.
    """

    name: str
    base: str
    dims: Tuple[Optional[int], ...] = ()
    components: Tuple["Param", ...] = ()
    declared: str = ""

    @property
    def is_tuple(self) -> bool:
        return self.base == TUPLE

    @property
    def is_array(self) -> bool:
        return bool(self.dims)

    @property
    def kind(self) -> FieldKind:
        if self.is_tuple:
            return FieldKind.TUPLE_ARRAY if self.is_array else FieldKind.TUPLE
        return FieldKind.PRIMITIVE_ARRAY if self.is_array else FieldKind.PRIMITIVE

    @property
    def element(self) -> "Param":
        """Same param with the outermost array dimension removed."""
        if not self.dims:
            raise ValueError(f"{self.canonical_type} is not an array type")
        return Param(
            name=self.name,
            base=self.base,
            dims=self.dims[:-1],
            components=self.components,
            declared=self.declared,
        )

    @property
    def canonical_type(self) -> str:
        if self.is_tuple:
            inner = ",".join(c.canonical_type for c in self.components)
            return f"({inner}){_dims_suffix(self.dims)}"
        return f"{self.base}{_dims_suffix(self.dims)}"

    @property
    def signature(self) -> str:
        if self.is_tuple:
            inner = ",".join(c.signature for c in self.components)
            typ = f"({inner}){_dims_suffix(self.dims)}"
        else:
            typ = self.canonical_type
        return f"{typ} {self.name}" if self.name else typ


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    type: str
    signature: str
    kind: FieldKind
    param: Param
    # Type-appropriate default, used for templates only
    value: Any = field(default="", compare=False)
    content_hash: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "signature": self.signature,
            "kind": self.kind.value,
            "value": to_jsonable(self.value),
            "contentHash": self.content_hash,
        }


@dataclass(frozen=True)
class SchemaItem:
    """One value to encode: must line up with the schema field at the same index."""

    name: str
    type: str
    value: Any

    @classmethod
    def coerce(
        cls, item: Union["SchemaItem", Mapping[str, Any]], index: Optional[int] = None
    ) -> "SchemaItem":
        """Accept a SchemaItem or a {name, type, value} mapping with string name/type."""
        if isinstance(item, Mapping):
            missing = [k for k in ("name", "type", "value") if k not in item]
            if missing:
                raise ValidationError(
                    f"schema item is missing key(s) {missing}", kind="item", index=index
                )
            item = cls(name=item["name"], type=item["type"], value=item["value"])
        elif not isinstance(item, SchemaItem):
            raise ValidationError(
                f"Unsupported schema item: {type(item).__name__}",
                kind="item",
                index=index,
                got=item,
            )
        if not isinstance(item.name, str) or not isinstance(item.type, str):
            raise ValidationError(
                "schema item name and type must be strings",
                kind="item",
                index=index,
                got={"name": item.name, "type": item.type},
            )
        return item

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "value": to_jsonable(self.value)}


@dataclass(frozen=True)
class NamedValue:
    name: str
    type: str
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type": self.type, "value": to_jsonable(self.value)}


@dataclass(frozen=True)
class DecodedField:
    name: str
    type: str
    signature: str
    value: NamedValue

    def to_item(self) -> SchemaItem:
        """Re-wrap as an encodable item (named component lists are accepted by encode)."""
        return SchemaItem(name=self.name, type=self.type, value=self.value.value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "signature": self.signature,
            "value": self.value.to_dict(),
        }


def to_jsonable(value: Any) -> Any:
    """Render decoded values for JSON: bytes as 0x-hex, envelopes as dicts."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return to_hex(value)
    if isinstance(value, (NamedValue, SchemaItem, DecodedField, FieldDescriptor)):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, Mapping):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    return value

