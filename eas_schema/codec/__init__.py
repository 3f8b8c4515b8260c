from .cid import (  # noqa: F401
    decode_cid,
    encode_bytes32_value,
    encode_cid,
    encode_ipfs_value,
    is_cid,
    parse_cid,
)
from .values import ValueCodec  # noqa: F401
