# src/straitjacket/numeric.py
from __future__ import annotations

"""
Nearest-factor rounding/flooring and linear range remapping.

# Common contract
- **Input**: Python numbers, numpy scalars, `np.ndarray` or `pd.Series`.
  Arrays are processed element-wise, a Series keeps its index.
- **Precision**: everything is computed in a single float dtype. Explicit
  `dtype=` wins; otherwise numpy promotion of the array/numpy-scalar inputs is
  used, with Python numbers treated as "weak" (they do not widen float32).
  Plain Python numbers alone give float64.
- **Output**: same shape as the input; scalars come back as numpy scalars of the
  working dtype (`np.float64` is a `float` subclass).
- **Degenerate input** (`factor == 0`, `input_from == input_to`):
  `on_degenerate="propagate"` returns the IEEE-754 result (NaN/Inf),
  `on_degenerate="raise"` raises `DegenerateFactorError`/`DegenerateRangeError`.
- **No side effects**: inputs are never modified.
"""

from numbers import Number
from typing import Any, Iterable, Optional, Type, Union

import numpy as np
import pandas as pd

from straitjacket.errors import DegenerateFactorError, DegenerateRangeError, NumericDomainError
from straitjacket.logging_setup import get_logger

__all__ = [
    "FloatLike",
    "TIE_BREAKS",
    "DEGENERATE_POLICIES",
    "resolve_dtype",
    "round_half",
    "round_to_nearest",
    "floor_to_nearest",
    "inverse_lerp",
    "lerp",
    "map_range",
]

LOG = get_logger("numeric")

FloatLike = Union[float, int, np.floating, np.ndarray, pd.Series]
DTypeLike = Any

TIE_BREAKS = ("half_even", "half_away")
DEGENERATE_POLICIES = ("propagate", "raise")


# ─────────────────────────────
# Nearest-factor rounding
# ─────────────────────────────
def round_to_nearest(
    num: FloatLike,
    factor: FloatLike,
    *,
    tie_break: str = "half_even",
    on_degenerate: str = "propagate",
    dtype: Optional[DTypeLike] = None,
) -> FloatLike:
    """
    Round `num` to the closest multiple of `factor`.

    Formula: ``y = f * [x / f]`` where ``[]`` rounds to the nearest integer.

    Parameters
    ----------
    num : float | np.ndarray | pd.Series
        Value(s) to round.
    factor : float | np.ndarray | pd.Series
        Rounding step.
    tie_break : {"half_even", "half_away"}
        How exact halves are resolved. ``half_even`` matches `np.rint` and
        Python's `round()`.
    on_degenerate : {"propagate", "raise"}
        Behaviour for ``factor == 0``.
    dtype : optional
        Working float dtype (``np.float32``/``np.float64``).

    Returns
    -------
    Same kind as the input, in the working dtype.

    Raises
    ------
    DegenerateFactorError
        If ``factor == 0`` and ``on_degenerate="raise"``.
    ValueError
        On an unknown `tie_break`/`on_degenerate` or a non-real dtype.

    Examples
    --------
    >>> float(round_to_nearest(1.1345, 0.2))
    1.2000000000000002
    """
    _check_choice("tie_break", tie_break, TIE_BREAKS)
    _check_choice("on_degenerate", on_degenerate, DEGENERATE_POLICIES)
    work = resolve_dtype((num, factor), dtype)
    x = _coerce(num, work)
    f = _coerce(factor, work)
    _guard(f == 0, on_degenerate, DegenerateFactorError, "round_to_nearest", work)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        out = f * round_half(x / f, tie_break)
    return _finish(out, work)


# ─────────────────────────────
# Nearest-factor flooring
# ─────────────────────────────
def floor_to_nearest(
    num: FloatLike,
    factor: FloatLike,
    *,
    on_degenerate: str = "propagate",
    dtype: Optional[DTypeLike] = None,
) -> FloatLike:
    """
    Floor `num` to a multiple of `factor`.

    Formula: ``y = f * floor(x / f)``. For ``factor > 0`` this is the largest
    multiple that is ``<= num``; for ``factor < 0`` the direction inverts and the
    result is the smallest multiple that is ``>= num``.

    Raises
    ------
    DegenerateFactorError
        If ``factor == 0`` and ``on_degenerate="raise"``.

    Examples
    --------
    >>> float(floor_to_nearest(1.1345, 0.2))
    1.0
    """
    _check_choice("on_degenerate", on_degenerate, DEGENERATE_POLICIES)
    work = resolve_dtype((num, factor), dtype)
    x = _coerce(num, work)
    f = _coerce(factor, work)
    _guard(f == 0, on_degenerate, DegenerateFactorError, "floor_to_nearest", work)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        out = f * np.floor(x / f)
    return _finish(out, work)


# ─────────────────────────────
# Linear interpolation / remap
# ─────────────────────────────
def inverse_lerp(
    a: FloatLike,
    b: FloatLike,
    value: FloatLike,
    *,
    clamp: bool = False,
    on_degenerate: str = "propagate",
    dtype: Optional[DTypeLike] = None,
) -> FloatLike:
    """
    Fractional position of `value` between `a` (0) and `b` (1).

    Not clamped unless ``clamp=True``: values outside ``[a, b]`` give ``t < 0``
    or ``t > 1``.

    Raises
    ------
    DegenerateRangeError
        If ``a == b`` and ``on_degenerate="raise"``.
    """
    _check_choice("on_degenerate", on_degenerate, DEGENERATE_POLICIES)
    work = resolve_dtype((a, b, value), dtype)
    lo, hi, v = (_coerce(p, work) for p in (a, b, value))
    _guard(lo == hi, on_degenerate, DegenerateRangeError, "inverse_lerp", work)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        t = _position(lo, hi, v, clamp, work)
    return _finish(t, work)


def lerp(
    a: FloatLike,
    b: FloatLike,
    t: FloatLike,
    *,
    clamp: bool = False,
    dtype: Optional[DTypeLike] = None,
) -> FloatLike:
    """
    Point at fraction `t` between `a` and `b`.

    Evaluated as ``(1 - t) * a + t * b``, so ``t == 0`` gives exactly `a` and
    ``t == 1`` gives exactly `b`.
    """
    work = resolve_dtype((a, b, t), dtype)
    lo, hi, tt = (_coerce(p, work) for p in (a, b, t))
    with np.errstate(invalid="ignore", over="ignore"):
        out = _interpolate(lo, hi, _maybe_clamp(tt, clamp, work), work)
    return _finish(out, work)


def map_range(
    input: FloatLike,
    input_from: FloatLike,
    input_to: FloatLike,
    output_from: FloatLike,
    output_to: FloatLike,
    *,
    clamp: bool = False,
    on_degenerate: str = "propagate",
    dtype: Optional[DTypeLike] = None,
) -> FloatLike:
    """
    Re-express `input` from ``[input_from, input_to]`` in ``[output_from, output_to]``.

    ``t = (input - input_from) / (input_to - input_from)`` followed by
    ``output = output_from + t * (output_to - output_from)``. Inputs outside the
    source range extrapolate linearly; pass ``clamp=True`` to pin the result to
    the target range instead. Reversed ranges (``input_from > input_to``) are
    valid.

    Parameters
    ----------
    input : float | np.ndarray | pd.Series
    input_from, input_to : float | np.ndarray | pd.Series
        Source range. Must have non-zero width.
    output_from, output_to : float | np.ndarray | pd.Series
        Target range. A zero-width target collapses everything to `output_from`.
    clamp : bool
        Restrict the fractional position to ``[0, 1]``.
    on_degenerate : {"propagate", "raise"}
        Behaviour for ``input_from == input_to``.
    dtype : optional
        Working float dtype.

    Raises
    ------
    DegenerateRangeError
        If ``input_from == input_to`` and ``on_degenerate="raise"``.

    Examples
    --------
    >>> float(map_range(5, 0, 10, 0, 100))
    50.0
    """
    _check_choice("on_degenerate", on_degenerate, DEGENERATE_POLICIES)
    work = resolve_dtype((input, input_from, input_to, output_from, output_to), dtype)
    x, a, b, c, d = (_coerce(p, work) for p in (input, input_from, input_to, output_from, output_to))
    _guard(a == b, on_degenerate, DegenerateRangeError, "map_range", work)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        t = _position(a, b, x, clamp, work)
        out = _interpolate(c, d, t, work)
    return _finish(out, work)


# ─────────────────────────────
# Rounding primitives
# ─────────────────────────────
def round_half(x: FloatLike, tie_break: str = "half_even") -> FloatLike:
    """Round to the nearest integer (as float) with the given tie-break rule."""
    _check_choice("tie_break", tie_break, TIE_BREAKS)
    if tie_break == "half_even":
        return np.rint(x)
    # x - trunc(x) is exact in binary floating point.
    whole = np.trunc(x)
    frac = x - whole
    return whole + np.sign(x) * (np.abs(frac) >= 0.5)


# ─────────────────────────────
# Utilities
# ─────────────────────────────
def resolve_dtype(values: Iterable[Any], dtype: Optional[DTypeLike] = None) -> np.dtype:
    """
    Pick the working float dtype for `values`.

    Python numbers do not take part in promotion unless nothing else does, in
    which case the result is float64. Integer inputs promote to a float able to
    hold them.
    """
    if dtype is not None:
        resolved = np.dtype(dtype)
        if resolved.kind != "f":
            raise ValueError(f"dtype must be a floating point type, got {resolved}")
        return resolved

    strong = []
    for value in values:
        if isinstance(value, (pd.Series, np.ndarray, np.generic)):
            strong.append(value.dtype)
        elif not isinstance(value, Number):
            strong.append(np.asarray(value).dtype)
    if not strong:
        return np.dtype(np.float64)

    resolved = np.result_type(*strong)
    if resolved.kind == "c":
        raise ValueError("complex input is not supported")
    if resolved.kind == "f":
        return resolved
    if resolved.kind in "biu":
        return np.promote_types(resolved, np.float32)
    return np.dtype(np.float64)


def _check_choice(name: str, value: str, allowed: tuple) -> None:
    if value not in allowed:
        raise ValueError(f"{name} must be one of {allowed}, got {value!r}")


def _coerce(value: FloatLike, dtype: np.dtype) -> FloatLike:
    if isinstance(value, pd.Series):
        return pd.to_numeric(value, errors="coerce").astype(dtype)
    arr = np.asarray(value, dtype=dtype)
    return arr[()] if arr.ndim == 0 else arr


def _finish(value: FloatLike, dtype: np.dtype) -> FloatLike:
    if isinstance(value, pd.Series):
        return value.astype(dtype)
    if isinstance(value, np.ndarray):
        return value.astype(dtype, copy=False)
    return dtype.type(value)


def _guard(
    degenerate: FloatLike,
    policy: str,
    error: Type[NumericDomainError],
    operation: str,
    dtype: np.dtype,
) -> None:
    if not np.any(degenerate):
        return
    if policy == "raise":
        raise error(operation)
    LOG.debug(
        "%s: degenerate input, propagating IEEE-754 result",
        operation,
        extra={"operation": operation, "dtype": dtype.name, "policy": policy},
    )


def _maybe_clamp(t: FloatLike, clamp: bool, dtype: np.dtype) -> FloatLike:
    if not clamp:
        return t
    if isinstance(t, pd.Series):
        return t.clip(dtype.type(0), dtype.type(1))
    return np.clip(t, dtype.type(0), dtype.type(1))


def _position(a: FloatLike, b: FloatLike, value: FloatLike, clamp: bool, dtype: np.dtype) -> FloatLike:
    return _maybe_clamp((value - a) / (b - a), clamp, dtype)


def _interpolate(a: FloatLike, b: FloatLike, t: FloatLike, dtype: np.dtype) -> FloatLike:
    return (dtype.type(1) - t) * a + t * b
