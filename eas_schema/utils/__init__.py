from .address import ZERO_ADDRESS, is_valid_address, normalize_address  # noqa: F401
from .bytes import (  # noqa: F401
    ensure_bytes,
    format_bytes32_string,
    from_hex,
    is_bytes_like,
    parse_bytes32_string,
    to_hex,
)
