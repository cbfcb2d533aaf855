"""Pure numeric helpers: nearest-factor rounding/flooring and linear range remap."""
from __future__ import annotations

from .config import DEFAULT_CONFIG, NumericConfig, load_numeric_config
from .errors import DegenerateFactorError, DegenerateRangeError, NumericDomainError
from .logging_setup import configure_structured_logging, get_logger
from .numeric import (
    floor_to_nearest,
    inverse_lerp,
    lerp,
    map_range,
    round_half,
    round_to_nearest,
)
from .precision import NumericVariant, double, single, variant_for

__version__ = "0.1.0"

__all__ = [
    "round_to_nearest",
    "floor_to_nearest",
    "map_range",
    "inverse_lerp",
    "lerp",
    "round_half",
    "NumericVariant",
    "single",
    "double",
    "variant_for",
    "NumericConfig",
    "DEFAULT_CONFIG",
    "load_numeric_config",
    "NumericDomainError",
    "DegenerateFactorError",
    "DegenerateRangeError",
    "configure_structured_logging",
    "get_logger",
]
