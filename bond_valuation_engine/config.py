from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class EngineBounds:
    """
    Input bounds the engine validates against.

    allowed_frequencies=None accepts any whole number of payments per year
    from 1 to max_frequency; otherwise frequency must be one of the listed values.
    """
    max_face_value: float = 100_000.0
    max_rate: float = 0.50           # decimal, e.g. 0.50 = 50%
    min_years: float = 0.5
    max_years: float = 50.0
    allowed_frequencies: Optional[Tuple[int, ...]] = (1, 2, 4, 12)
    max_frequency: int = 365


STANDARD_BOUNDS = EngineBounds()
CLASSIC_BOUNDS = EngineBounds(max_rate=0.10)
LOOSE_BOUNDS = EngineBounds(allowed_frequencies=None)

BOUNDS_PRESETS: Dict[str, EngineBounds] = {
    "standard": STANDARD_BOUNDS,
    "classic": CLASSIC_BOUNDS,
    "loose": LOOSE_BOUNDS,
}

DEFAULT_BOUNDS = STANDARD_BOUNDS

# Par band in currency units; matches two-decimal display rounding.
PAR_EPSILON = 0.01

DEFAULT_FACE_VALUE = 100.0
DEFAULT_COUPON_RATE = 0.086
DEFAULT_YIELD = 0.065
DEFAULT_YEARS = 5.0
DEFAULT_FREQUENCY = 2


def get_bounds(name: str) -> EngineBounds:
    key = name.strip().lower()
    if key not in BOUNDS_PRESETS:
        raise KeyError(f"Unknown bounds preset {name!r}; expected one of {sorted(BOUNDS_PRESETS)}")
    return BOUNDS_PRESETS[key]
