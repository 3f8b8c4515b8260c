"""
eas_schema.codec.values
=======================

Encode named schema values into one canonical ABI blob and decode such a blob
back into named values.

The ABI encoding is positional: a tuple `(uint256 x,uint256 y)` goes on the
wire as two words and comes back as a bare `(1, 2)`. Decoding therefore walks
the field's `Param` tree next to the decoded value and re-attaches component
names level by level:

    primitive          -> value as decoded
    primitive array    -> list of decoded values
    tuple              -> [NamedValue(c.name, c.type, ...), ...]
    tuple array        -> one such list per element

Nested tuples are named recursively at every depth.

Encoding accepts tuple values in several shapes so decoded output can be fed
straight back in:

    [1, 2]                                   positional
    {"x": 1, "y": 2}                         keyed by component name
    [{"x": 1}, {"y": 2}]                     one single-key mapping per component
    [NamedValue("x", "uint256", 1), ...]     decode output
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Mapping, Optional, Sequence, Union

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError, EncodingError

from ..config import SchemaConfig
from ..errors import (CodecError, EasSchemaError, InternalConsistencyError,
                      SchemaParseError, ValidationError)
from ..schema.parser import SchemaParser
from ..types.fields import (DecodedField, FieldDescriptor, NamedValue, Param,
                            SchemaItem)
from ..utils.address import normalize_address
from ..utils.bytes import (BytesLike, ensure_bytes, format_bytes32_string,
                           from_hex, is_bytes_like)
from .cid import encode_ipfs_value

log = logging.getLogger(__name__)

__all__ = ["ValueCodec"]

_WS_RE = re.compile(r"\s")
_ENVELOPE_KEYS = frozenset(("name", "type", "value"))
_BYTES32 = "bytes32"
_ADDRESS = "address"

ItemLike = Union[SchemaItem, Mapping[str, Any]]


def _is_list_like(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _parse_int(value: str, typ: str) -> int:
    s = value.strip()
    try:
        if s[:2].lower() == "0x":
            return int(s, 16)
        return int(s, 10)
    except ValueError as e:
        raise CodecError(f"invalid integer {value!r}", type=typ) from e


class ValueCodec:
    """Encoder/decoder bound to one immutable field descriptor tuple."""

    def __init__(
        self,
        fields: Sequence[FieldDescriptor],
        *,
        config: Optional[SchemaConfig] = None,
        parser: Optional[SchemaParser] = None,
    ) -> None:
        self.fields = tuple(fields)
        self.config = config or SchemaConfig()
        self._parser = parser or SchemaParser(self.config)
        self._types = [f.type for f in self.fields]

    def types(self) -> List[str]:
        return list(self._types)

    def signatures(self) -> List[str]:
        return [f.signature for f in self.fields]

    # -------------------------------------------------------------------------
    # Encode
    # -------------------------------------------------------------------------

    def encode(self, items: Sequence[ItemLike]) -> bytes:
        items = list(items)
        if len(items) != len(self.fields):
            raise ValidationError(
                "Invalid number of values",
                kind="field_count",
                expected=len(self.fields),
                got=len(items),
            )

        data: List[Any] = []
        for index, (field, raw_item) in enumerate(zip(self.fields, items)):
            item = SchemaItem.coerce(raw_item, index)
            self._check_item(index, field, item)
            data.append(self._prepare(field.param, self._transform(field, item.value)))

        try:
            out = abi_encode(self._types, data)
        except EncodingError as e:
            raise CodecError(str(e), details=",".join(self._types)) from e
        log.debug("encoded %d field(s) into %d bytes", len(self.fields), len(out))
        return out

    def _check_item(self, index: int, field: FieldDescriptor, item: SchemaItem) -> None:
        sanitized = _WS_RE.sub("", item.type)
        compatible = (
            sanitized == field.type
            or sanitized == _WS_RE.sub("", field.signature)
            or (sanitized == self.config.content_hash_type and field.type == _BYTES32)
        )
        if not compatible:
            raise ValidationError(
                f"Incompatible param type: {sanitized}",
                kind="type",
                index=index,
                expected=field.type,
                got=item.type,
            )
        if item.name != field.name:
            raise ValidationError(
                f"Incompatible param name: {item.name}",
                kind="name",
                index=index,
                expected=field.name,
                got=item.name,
            )

    def _transform(self, field: FieldDescriptor, value: Any) -> Any:
        if field.content_hash:
            return encode_ipfs_value(value, overflow=self.config.bytes32_overflow)
        if field.type == _BYTES32 and isinstance(value, str) and not is_bytes_like(value):
            try:
                return format_bytes32_string(value, overflow=self.config.bytes32_overflow)
            except ValueError as e:
                raise CodecError(str(e), type=_BYTES32) from e
        return value

    def _prepare(self, param: Param, value: Any) -> Any:
        """Shape `value` the way the ABI codec expects for `param`."""
        if isinstance(value, NamedValue):
            value = value.value

        if param.is_array:
            if not _is_list_like(value):
                raise CodecError(
                    f"expected a list, got {type(value).__name__}", type=param.canonical_type
                )
            element = param.element
            return [self._prepare(element, v) for v in value]

        if param.is_tuple:
            values = self._component_values(param, value)
            return tuple(self._prepare(c, v) for c, v in zip(param.components, values))

        base = param.base
        if base == _BYTES32 and param.declared == self.config.content_hash_type:
            return encode_ipfs_value(value, overflow=self.config.bytes32_overflow)
        if base.startswith("bytes"):
            if isinstance(value, str):
                if not is_bytes_like(value):
                    raise CodecError(f"expected 0x-hex for {base}, got {value!r}", type=base)
                return from_hex(value)
            if isinstance(value, (bytearray, memoryview)):
                return bytes(value)
            return value
        if base.startswith(("uint", "int")) and isinstance(value, str):
            return _parse_int(value, base)
        if base == _ADDRESS and isinstance(value, str):
            try:
                return normalize_address(value)
            except ValueError as e:
                raise CodecError(str(e), type=_ADDRESS) from e
        return value

    def _component_values(self, param: Param, value: Any) -> List[Any]:
        comps = param.components
        if isinstance(value, Mapping):
            names = [c.name for c in comps]
            if all(n and n in value for n in names):
                return [value[n] for n in names]
            if _ENVELOPE_KEYS <= set(value):
                return self._component_values(param, value["value"])
            missing = [n for n in names if n not in value]
            raise CodecError(f"missing tuple component(s) {missing}", type=param.canonical_type)

        if not _is_list_like(value):
            raise CodecError(
                f"expected a tuple value, got {type(value).__name__}", type=param.canonical_type
            )
        if len(value) != len(comps):
            raise CodecError(
                f"expected {len(comps)} tuple component(s), got {len(value)}",
                type=param.canonical_type,
            )
        return [self._component_value(c, v) for c, v in zip(comps, value)]

    @staticmethod
    def _component_value(comp: Param, value: Any) -> Any:
        if isinstance(value, NamedValue):
            if value.name != comp.name:
                raise CodecError(
                    f"expected component {comp.name!r}, got {value.name!r}", type=comp.canonical_type
                )
            return value.value
        if isinstance(value, Mapping):
            if len(value) == 1 and comp.name and comp.name in value:
                return value[comp.name]
            if {"name", "value"} <= set(value):
                if value["name"] != comp.name:
                    raise CodecError(
                        f"expected component {comp.name!r}, got {value['name']!r}",
                        type=comp.canonical_type,
                    )
                return value["value"]
            if comp.is_tuple:
                return value
            raise CodecError(
                f"cannot read component {comp.name!r} from {sorted(value)}",
                type=comp.canonical_type,
            )
        return value

    # -------------------------------------------------------------------------
    # Decode
    # -------------------------------------------------------------------------

    def decode(self, data: Union[BytesLike, str]) -> List[DecodedField]:
        try:
            raw = ensure_bytes(data)
        except (TypeError, ValueError) as e:
            raise CodecError(f"invalid encoded data: {e}") from e
        try:
            values = abi_decode(self._types, raw)
        except (DecodingError, ValueError, OverflowError) as e:
            raise CodecError(str(e) or type(e).__name__, details=",".join(self._types)) from e
        log.debug("decoded %d bytes into %d field(s)", len(raw), len(values))
        return [self._decode_field(f, v) for f, v in zip(self.fields, values)]

    def _decode_field(self, field: FieldDescriptor, raw: Any) -> DecodedField:
        try:
            params = self._parser.parse_params(field.signature)
        except SchemaParseError as e:
            raise InternalConsistencyError(str(e), signature=field.signature) from e
        if len(params) != 1:
            raise InternalConsistencyError(
                f"Unexpected inputs: {len(params)}", signature=field.signature
            )
        param = params[0]
        if param.canonical_type != field.type:
            raise InternalConsistencyError(
                f"signature describes {param.canonical_type}, field is {field.type}",
                signature=field.signature,
            )
        return DecodedField(
            name=field.name,
            type=field.type,
            signature=field.signature,
            value=NamedValue(name=field.name, type=field.type, value=self._name(param, raw)),
        )

    def _name(self, param: Param, raw: Any) -> Any:
        if param.is_array:
            element = param.element
            return [self._name(element, v) for v in raw]
        if param.is_tuple:
            if len(raw) != len(param.components):
                raise InternalConsistencyError(
                    f"decoded {len(raw)} member(s) for {len(param.components)} component(s)",
                    signature=param.signature,
                )
            return [
                NamedValue(name=c.name, type=c.canonical_type, value=self._name(c, v))
                for c, v in zip(param.components, raw)
            ]
        return raw

    def is_valid(self, data: Union[BytesLike, str]) -> bool:
        try:
            self.decode(data)
        except EasSchemaError as e:
            log.debug("encoded data rejected: %s", e)
            return False
        return True
