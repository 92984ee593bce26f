"""Settings for exprcalc, read from environment variables.

Self-contained — no external dependencies. CLI options override whatever
is loaded here.

    EXPRCALC_MAX_DEPTH            nesting limit for groups, unary minus and ^ chains
    EXPRCALC_POW_SNAP_TOLERANCE   relative distance at which ^ results snap to an integer
    EXPRCALC_DIGITS               significant digits for printed results (unset = exact)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_MAX_DEPTH = 100
DEFAULT_POW_SNAP_TOLERANCE = 1e-12


@dataclass(frozen=True)
class Settings:
    """Tunables shared by the parser, evaluator and CLI."""

    max_depth: int = DEFAULT_MAX_DEPTH
    pow_snap_tolerance: float = DEFAULT_POW_SNAP_TOLERANCE
    digits: Optional[int] = None


def _int_var(env: Mapping[str, str], key: str, minimum: int) -> Optional[int]:
    """Parse an integer env var; None if unset or invalid."""
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value >= minimum else None


def _float_var(env: Mapping[str, str], key: str) -> Optional[float]:
    """Parse a non-negative float env var; None if unset or invalid."""
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    # NaN fails this comparison too
    return value if value >= 0.0 else None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ``env`` (defaults to os.environ).

    Invalid values fall back to the defaults rather than failing, so a
    stray variable never breaks evaluation.
    """
    env = os.environ if env is None else env

    max_depth = _int_var(env, "EXPRCALC_MAX_DEPTH", minimum=1)
    tolerance = _float_var(env, "EXPRCALC_POW_SNAP_TOLERANCE")
    digits = _int_var(env, "EXPRCALC_DIGITS", minimum=1)

    return Settings(
        max_depth=max_depth if max_depth is not None else DEFAULT_MAX_DEPTH,
        pow_snap_tolerance=tolerance if tolerance is not None else DEFAULT_POW_SNAP_TOLERANCE,
        digits=digits,
    )
