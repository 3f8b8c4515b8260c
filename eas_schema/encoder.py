"""
eas_schema.encoder
==================

`SchemaEncoder` binds one schema string to its parsed field descriptors and
exposes encode/decode against it.

Quickstart
----------
    from eas_schema import SchemaEncoder

    enc = SchemaEncoder("uint256 eventId, uint8 voteIndex, ipfsHash ipfsHash")
    blob = enc.encode_data([
        {"name": "eventId", "type": "uint256", "value": 1},
        {"name": "voteIndex", "type": "uint8", "value": 2},
        {"name": "ipfsHash", "type": "bytes32", "value": "Qm..."},
    ])
    for field in enc.decode_data(blob):
        print(field.name, field.value.value)

The schema is parsed exactly once; a malformed schema raises
`SchemaParseError` from the constructor and no encoder is produced.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from .codec import cid as _cid
from .codec.values import ValueCodec
from .config import SchemaConfig
from .schema.parser import SchemaParser
from .types.fields import DecodedField, FieldDescriptor, SchemaItem
from .utils.bytes import BytesLike

__all__ = ["SchemaEncoder"]


class SchemaEncoder:
    def __init__(self, schema: str, *, config: Optional[SchemaConfig] = None) -> None:
        self.config = config or SchemaConfig()
        parser = SchemaParser(self.config)
        self.schema_string = schema
        self.schema: Tuple[FieldDescriptor, ...] = parser.parse(schema)
        self._codec = ValueCodec(self.schema, config=self.config, parser=parser)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"SchemaEncoder({self.schema_string!r})"

    def __len__(self) -> int:
        return len(self.schema)

    def signatures(self) -> List[str]:
        return self._codec.signatures()

    def types(self) -> List[str]:
        return self._codec.types()

    def template(self) -> List[SchemaItem]:
        """One item per field carrying its default value; a starting point for encode_data."""
        return [SchemaItem(name=f.name, type=f.type, value=f.value) for f in self.schema]

    def encode_data(self, items: Sequence[Union[SchemaItem, Mapping[str, Any]]]) -> bytes:
        return self._codec.encode(items)

    def decode_data(self, data: Union[BytesLike, str]) -> List[DecodedField]:
        return self._codec.decode(data)

    def is_encoded_data_valid(self, data: Union[BytesLike, str]) -> bool:
        return self._codec.is_valid(data)

    # Schema-independent CID helpers

    @staticmethod
    def is_cid(value: Any) -> bool:
        return _cid.is_cid(value)

    @staticmethod
    def encode_qm_hash(value: str) -> bytes:
        return _cid.encode_cid(value)

    @staticmethod
    def decode_qm_hash(value: Union[BytesLike, str]) -> str:
        return _cid.decode_cid(value)
