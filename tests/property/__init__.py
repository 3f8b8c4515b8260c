"""
tests.property package bootstrap.

Registers Hypothesis profiles and picks one on import:
HYPOTHESIS_PROFILE if set, otherwise "ci" when CI is truthy and "dev" locally.

Usage in tests:
    from tests.property import st, given

Environment knobs:
- HYPOTHESIS_PROFILE=dev|ci|fast
- CI=true
"""
from __future__ import annotations

import os
from typing import Final

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

# Deadlines off: ABI encode of long arrays is slow on shared CI runners.
settings.register_profile(
    "dev",
    settings(max_examples=100, deadline=None, suppress_health_check=(HealthCheck.too_slow,)),
)
settings.register_profile(
    "ci",
    settings(
        max_examples=200,
        deadline=None,
        suppress_health_check=(HealthCheck.too_slow,),
        derandomize=True,
    ),
)
settings.register_profile("fast", settings(max_examples=25, deadline=None))


def _env_truthy(name: str) -> bool:
    v = os.getenv(name)
    return (v or "").lower() not in ("", "0", "false", "no", "off")


_active: Final[str] = os.getenv("HYPOTHESIS_PROFILE") or ("ci" if _env_truthy("CI") else "dev")
settings.load_profile(_active)


def active_profile() -> str:
    """Return the name of the active Hypothesis profile."""
    return _active


__all__ = ["st", "given", "active_profile"]
