"""
Schema string parsing.

A schema is a comma-separated parameter list, the same grammar as a Solidity
function's inputs:

    uint256 eventId, (address who, uint8 score)[] votes, ipfsHash ipfsHash

Each declaration becomes a `Param` tree; each top-level Param becomes a
`FieldDescriptor` with a canonical type, a signature (types plus names) and a
default value. The content-hash pseudo-type is rewritten to `bytes32` in type
position only, so a field may still be *named* after it.

Every canonical type is checked against the ABI codec's type registry so a
schema that could never encode is rejected at construction time.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from eth_abi import is_encodable_type

from ..config import SchemaConfig
from ..errors import SchemaParseError
from ..types.fields import TUPLE, FieldDescriptor, Param
from .defaults import default_value_for

log = logging.getLogger(__name__)

__all__ = ["SchemaParser", "parse_schema", "split_top_level", "parse_dims"]

_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_ELEMENTARY_RE = re.compile(r"^([A-Za-z][A-Za-z0-9]*)((?:\[[0-9]*\])*)$")
_TUPLE_TAIL_RE = re.compile(r"^((?:\[[0-9]*\])*)(?:\s+(\S+))?\s*$")
_DIM_RE = re.compile(r"\[([0-9]*)\]")

# Shorthands the Solidity grammar widens
_BASE_ALIASES = {"uint": "uint256", "int": "int256"}

_BYTES32 = "bytes32"


def split_top_level(s: str) -> List[str]:
    """Split on commas but ignore commas inside nested tuples/arrays."""
    out: List[str] = []
    depth = 0
    buf: List[str] = []
    for ch in s:
        if ch in "([":
            depth += 1
            buf.append(ch)
        elif ch in ")]":
            depth -= 1
            if depth < 0:
                raise SchemaParseError("Unbalanced brackets in schema", declaration=s)
            buf.append(ch)
        elif ch == "," and depth == 0:
            out.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
    if depth != 0:
        raise SchemaParseError("Unbalanced brackets in schema", declaration=s)
    out.append("".join(buf).strip())
    return out


def parse_dims(suffix: str) -> Tuple[Optional[int], ...]:
    """`[2][]` -> (2, None). Fixed dimensions must be positive."""
    dims: List[Optional[int]] = []
    for m in _DIM_RE.finditer(suffix):
        if m.group(1) == "":
            dims.append(None)
            continue
        size = int(m.group(1))
        if size <= 0:
            raise SchemaParseError("Fixed array dimension must be positive", declaration=suffix)
        dims.append(size)
    return tuple(dims)


def _matching_paren(s: str) -> int:
    depth = 0
    for i, ch in enumerate(s):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
    raise SchemaParseError("Unterminated tuple", declaration=s)


class SchemaParser:
    """Turns schema strings into immutable field descriptor tuples."""

    def __init__(self, config: Optional[SchemaConfig] = None) -> None:
        self.config = config or SchemaConfig()
        self._aliases: Dict[str, str] = dict(_BASE_ALIASES)
        self._aliases[self.config.content_hash_type] = _BYTES32

    # --- Param grammar --------------------------------------------------------

    def parse_params(self, s: str) -> Tuple[Param, ...]:
        """Parse a parameter list. Blank input is the empty list."""
        if not s.strip():
            return ()
        return tuple(self.parse_param(decl) for decl in split_top_level(s))

    def parse_param(self, decl: str) -> Param:
        d = decl.strip()
        if not d:
            raise SchemaParseError("Empty declaration", declaration=decl)
        if d.startswith("tuple") and d[5:].lstrip().startswith("("):
            d = d[5:].lstrip()
        if d.startswith("("):
            return self._parse_tuple(d)
        return self._parse_elementary(d)

    def _parse_tuple(self, d: str) -> Param:
        close = _matching_paren(d)
        m = _TUPLE_TAIL_RE.match(d[close + 1 :])
        if not m:
            raise SchemaParseError("Malformed tuple declaration", declaration=d)
        name = self._check_name(m.group(2) or "", d)
        return Param(
            name=name,
            base=TUPLE,
            dims=parse_dims(m.group(1)),
            components=self.parse_params(d[1:close]),
            declared=TUPLE,
        )

    def _parse_elementary(self, d: str) -> Param:
        tokens = d.split()
        if len(tokens) > 2:
            raise SchemaParseError("Expected `type name`", declaration=d)
        m = _ELEMENTARY_RE.match(tokens[0])
        if not m:
            raise SchemaParseError(f"Invalid type: {tokens[0]!r}", declaration=d)
        declared = m.group(1)
        if declared == TUPLE:
            raise SchemaParseError("tuple type needs components: tuple(...)", declaration=d)
        name = self._check_name(tokens[1] if len(tokens) == 2 else "", d)
        return Param(
            name=name,
            base=self._aliases.get(declared, declared),
            dims=parse_dims(m.group(2)),
            declared=declared,
        )

    @staticmethod
    def _check_name(name: str, decl: str) -> str:
        if name and not _IDENT_RE.match(name):
            raise SchemaParseError(f"Invalid field name: {name!r}", declaration=decl)
        return name

    # --- Descriptors ----------------------------------------------------------

    def describe(self, param: Param) -> FieldDescriptor:
        canonical = param.canonical_type
        if not is_encodable_type(canonical):
            raise SchemaParseError(f"Unsupported type: {canonical}", declaration=param.signature)
        content_hash = canonical == _BYTES32 and (
            param.declared == self.config.content_hash_type
            or param.name == self.config.content_hash_field
        )
        return FieldDescriptor(
            name=param.name,
            type=canonical,
            signature=param.signature,
            kind=param.kind,
            param=param,
            value=default_value_for(param.base, is_array=param.is_array),
            content_hash=content_hash,
        )

    def parse(self, schema: str) -> Tuple[FieldDescriptor, ...]:
        try:
            fields = tuple(self.describe(p) for p in self.parse_params(schema))
        except SchemaParseError as e:
            if e.schema is None:
                e.schema = schema
            raise
        log.debug("parsed schema %r into %d field(s)", schema, len(fields))
        return fields


def parse_schema(
    schema: str, *, config: Optional[SchemaConfig] = None
) -> Tuple[FieldDescriptor, ...]:
    """Parse `schema` into its ordered, immutable field descriptors."""
    return SchemaParser(config).parse(schema)
