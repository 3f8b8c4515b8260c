"""
Default (template) values per type family.

`uint256` and `uint8` share the "uint" family; anything without an entry
defaults to the empty string.
"""

from __future__ import annotations

import re
from typing import Any, Dict

from ..utils.address import ZERO_ADDRESS

_FAMILY_RE = re.compile(r"^([a-z]+)")

_DEFAULTS: Dict[str, Any] = {
    "bool": False,
    "uint": "0",
    "address": ZERO_ADDRESS,
}


def type_family(type_name: str) -> str:
    """`uint256` -> `uint`, `bytes32` -> `bytes`, `(uint8,bool)` -> ``."""
    m = _FAMILY_RE.match(type_name)
    return m.group(1) if m else ""


def default_value_for(type_name: str, *, is_array: bool = False) -> Any:
    """Scalar default for the element type; arrays always default to an empty list."""
    if is_array:
        return []
    return _DEFAULTS.get(type_family(type_name), "")


__all__ = ["type_family", "default_value_for"]
