"""
tests.unit
==========

Small shared helpers for unit-test modules:

    from tests.unit import read_json_fixture, word

Fixtures live under `tests/fixtures/`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# tests/unit/__init__.py -> tests -> <root>
ROOT: Path = Path(__file__).resolve().parents[2]
FIXTURES: Path = ROOT / "tests" / "fixtures"

__all__ = ["ROOT", "FIXTURES", "read_json_fixture", "word"]


def read_json_fixture(rel_path: str) -> Any:
    """Load and parse a JSON file from tests/fixtures/."""
    return json.loads((FIXTURES / rel_path).read_text(encoding="utf-8"))


def word(n: int) -> bytes:
    """One 32-byte big-endian ABI word."""
    return n.to_bytes(32, "big")
