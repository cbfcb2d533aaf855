"""Single- and double-precision bindings of the numeric helpers."""
from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np

from straitjacket.config import DEFAULT_CONFIG, NumericConfig
from straitjacket import numeric
from straitjacket.numeric import FloatLike

__all__ = ["NumericVariant", "single", "double", "variant_for"]


class NumericVariant:
    """The numeric helpers fixed to one float dtype and one config.

    Example:
        >>> single.round_to_nearest(1.1345, 0.2).dtype
        dtype('float32')
        >>> strict = NumericVariant(np.float64, NumericConfig(on_degenerate="raise"))
        >>> strict.map_range(5, 0, 10, 0, 100) == 50.0
        True
    """

    def __init__(self, dtype: Any, config: Optional[NumericConfig] = None):
        resolved = np.dtype(dtype)
        if resolved.kind != "f":
            raise ValueError(f"NumericVariant needs a floating point dtype, got {resolved}")
        self.dtype = resolved
        self.config = (config or DEFAULT_CONFIG).validate()

    def __repr__(self) -> str:
        return f"NumericVariant({self.dtype.name}, {self.config!r})"

    def with_config(self, config: NumericConfig) -> "NumericVariant":
        return NumericVariant(self.dtype, config)

    def round_to_nearest(self, num: FloatLike, factor: FloatLike) -> FloatLike:
        return numeric.round_to_nearest(
            num,
            factor,
            tie_break=self.config.tie_break,
            on_degenerate=self.config.on_degenerate,
            dtype=self.dtype,
        )

    def floor_to_nearest(self, num: FloatLike, factor: FloatLike) -> FloatLike:
        return numeric.floor_to_nearest(
            num, factor, on_degenerate=self.config.on_degenerate, dtype=self.dtype
        )

    def map_range(
        self,
        input: FloatLike,
        input_from: FloatLike,
        input_to: FloatLike,
        output_from: FloatLike,
        output_to: FloatLike,
    ) -> FloatLike:
        return numeric.map_range(
            input,
            input_from,
            input_to,
            output_from,
            output_to,
            clamp=self.config.clamp_map,
            on_degenerate=self.config.on_degenerate,
            dtype=self.dtype,
        )

    def inverse_lerp(self, a: FloatLike, b: FloatLike, value: FloatLike) -> FloatLike:
        return numeric.inverse_lerp(
            a,
            b,
            value,
            clamp=self.config.clamp_map,
            on_degenerate=self.config.on_degenerate,
            dtype=self.dtype,
        )

    def lerp(self, a: FloatLike, b: FloatLike, t: FloatLike) -> FloatLike:
        return numeric.lerp(a, b, t, clamp=self.config.clamp_map, dtype=self.dtype)


single = NumericVariant(np.float32)
double = NumericVariant(np.float64)

_BY_DTYPE: Dict[np.dtype, NumericVariant] = {single.dtype: single, double.dtype: double}


def variant_for(dtype: Any) -> NumericVariant:
    """Return the shared variant for `dtype`, building one for other float widths."""
    resolved = np.dtype(dtype)
    try:
        return _BY_DTYPE[resolved]
    except KeyError:
        return NumericVariant(resolved)
