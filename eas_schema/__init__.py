"""
EAS schema encoder for Python
Convenience exports for the schema, codec and CID APIs.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import SchemaConfig  # noqa: F401
from .errors import (  # noqa: F401
    CodecError,
    EasSchemaError,
    HashDecodeError,
    InternalConsistencyError,
    SchemaParseError,
    ValidationError,
)

# Types
from .types.fields import (  # noqa: F401
    DecodedField,
    FieldDescriptor,
    FieldKind,
    NamedValue,
    SchemaItem,
)

# Schema & codec
from .schema.parser import SchemaParser, parse_schema  # noqa: F401
from .codec.values import ValueCodec  # noqa: F401
from .codec.cid import (  # noqa: F401
    decode_cid,
    encode_cid,
    encode_ipfs_value,
    is_cid,
)
from .encoder import SchemaEncoder  # noqa: F401

# Utilities
from .utils.address import ZERO_ADDRESS  # noqa: F401
from .utils.bytes import to_hex, from_hex  # noqa: F401

__all__ = [
    "__version__",
    # Core
    "SchemaConfig",
    "EasSchemaError", "SchemaParseError", "ValidationError", "CodecError",
    "HashDecodeError", "InternalConsistencyError",
    # Types
    "FieldKind", "FieldDescriptor", "SchemaItem", "NamedValue", "DecodedField",
    # Schema & codec
    "SchemaParser", "parse_schema", "ValueCodec", "SchemaEncoder",
    "is_cid", "encode_cid", "decode_cid", "encode_ipfs_value",
    # Utils
    "ZERO_ADDRESS", "to_hex", "from_hex",
]
