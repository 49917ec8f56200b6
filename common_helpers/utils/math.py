"""
Numeric interpolation and range-mapping helpers.

This module provides small, stateless functions for restricting, blending and
remapping numbers: clamp, lerp, map, step, pulse, smoothstep and linstep.

All helpers are written with numpy ufuncs, so besides plain Python numbers
they accept numpy arrays and pandas Series and work element-wise (a Series
keeps its index). Scalar inputs always come back as plain Python scalars.

Degenerate input is never an error: dividing by a zero-width range yields
nan or +/-inf exactly as IEEE-754 arithmetic does, and so does overflow in
the subtractions and products. Each helper runs its whole body under one
numpy error state, so whether numpy stays quiet, warns or logs on any of
these events is controlled by COMMON_HELPERS_FLOAT_ERRORS (see
common_helpers.config.settings).
"""

import functools
import logging

import numpy as np

from common_helpers.config.settings import get_settings

logger = logging.getLogger(__name__)


def _log_float_error(error_type: str, flag: int) -> None:
    """numpy seterrcall hook used in "log" mode."""
    logger.warning("Floating-point error in numeric helper: %s (flag=%d)", error_type, flag)


def _float_error_state() -> np.errstate:
    """Build the numpy error context for the configured reporting mode."""
    mode = get_settings().numeric.float_errors
    if mode == "log":
        return np.errstate(call=_log_float_error, divide="call", invalid="call", over="call")
    return np.errstate(divide=mode, invalid=mode, over=mode)


def _float_errors(func):
    """Run a helper's whole body under the configured numpy error state."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with _float_error_state():
            return func(*args, **kwargs)

    return wrapper


def _divide(numerator, denominator):
    # np.true_divide instead of "/" so 1/0 gives inf rather than ZeroDivisionError
    return np.true_divide(numerator, denominator)


def _to_python(value):
    """Unwrap numpy scalars and 0-d arrays; pass arrays and Series through."""
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray) and value.ndim == 0:
        return value.item()
    return value


@_float_errors
def clamp(a, b, x):
    """
    Limit the value `x` to the closed range [a, b].

    **Mathematical**:
        clamp(a, b, x) = max(a, min(b, x))

    **Edge cases**:
    - No ordering validation: when a > b the nested min/max still apply
      literally and the result is `a`.
    - NaN in any argument propagates to the result (IEEE min/max semantics,
      unlike Python's builtin min/max which silently drop NaN depending on
      argument order).

    Args:
        a: Lower bound.
        b: Upper bound.
        x: Value (or array/Series of values) to clamp.

    Returns:
        `x` restricted to [a, b].

    Example:
        >>> clamp(0, 5, 6)
        5
        >>> clamp(0, 5, -1)
        0
        >>> clamp(0, 5, 3)
        3
    """
    return _to_python(np.maximum(a, np.minimum(b, x)))


@_float_errors
def lerp(a, b, t):
    """
    Linearly interpolate between `a` and `b` by the factor `t`.

    **Conceptual**: `t` is clamped to [0, 1] before use, so factors outside
    that interval saturate at the endpoints instead of extrapolating.

    **Mathematical**:
        lerp(a, b, t) = a + clamp(0, 1, t) * (b - a)

    Example:
        >>> lerp(10, 20, 0.5)
        15.0
        >>> lerp(10, 20, 0.0)
        10.0
        >>> lerp(10, 20, 1.0)
        20.0
    """
    return _to_python(a + clamp(0, 1, t) * (b - a))


@_float_errors
def map(a, b, c, d, x):
    """
    Map `x` from the range [a, b] proportionally into the range [c, d].

    **Mathematical**:
        map(a, b, c, d, x) = (x - a) / (b - a) * (d - c) + c

    **Functionally**:
    - No clamping: values of `x` outside [a, b] land outside [c, d].
    - A zero-width source range (a == b) yields nan or +/-inf rather than
      raising.
    - Also available as `map_range`, which does not shadow the builtin when
      star-imported.

    Args:
        a: Source range start.
        b: Source range end.
        c: Target range start.
        d: Target range end.
        x: Value (or array/Series of values) to remap.

    Returns:
        The remapped value.

    Example:
        >>> map(0, 1, 0, 100, 0.5)
        50.0
        >>> map(0, 1, 50, 100, 0.5)
        75.0

        Convert Fahrenheit to Celsius from two known reference points
        (-40F = -40C, 100F = 37.78C):

        >>> def fahrenheit_to_celsius(f):
        ...     return map(-40, 100, -40, 37.78, f)
    """
    return _to_python(_divide(x - a, b - a) * (d - c) + c)


map_range = map


@_float_errors
def step(a, x):
    """
    Unit step located at `a`: returns 1 if x >= a, 0 otherwise.

    Implemented as "0 if x < a else 1", so a NaN `x` yields 1.

    Example:
        >>> step(10, 5)
        0
        >>> step(10, 10)
        1
    """
    return _to_python(1 - np.less(x, a).astype(int))


@_float_errors
def pulse(a, b, x):
    """
    Difference of two unit steps: step(a, x) - step(b, x).

    For a < b this is 1 on [a, b) and 0 elsewhere. The composition is kept
    literal, so at x == b the result is 0, and for b < a it can be -1.

    Example:
        >>> [pulse(1, 3, x) for x in (0, 1, 2, 3, 5)]
        [0, 1, 1, 0, 0]
    """
    return _to_python(step(a, x) - step(b, x))


@_float_errors
def smoothstep(a, b, x):
    """
    Like step(a, x), but with a smooth transition between `a` and `b`.

    **Mathematical**: with t = clamp(0, 1, (x - a) / (b - a)), returns the
    quintic smootherstep polynomial
        t^3 * (6t^2 - 15t + 10)
    which has zero first and second derivatives at both ends (C2-continuous).

    **Edge cases**:
    - a == b: (x - a) / 0 is nan at x == a and +/-inf elsewhere, so the
      result is nan at x == a and 0 or 1 otherwise.

    Example:
        >>> smoothstep(0, 1, -1.0)
        0.0
        >>> smoothstep(0, 1, 0.5)
        0.5
        >>> smoothstep(0, 1, 2.0)
        1.0
    """
    t = linstep(a, b, x)
    return _to_python(t * t * t * ((6 * t - 15) * t + 10))


@_float_errors
def linstep(a, b, x):
    """
    Clamped linear ramp from 0 at `a` to 1 at `b`.

    Example:
        >>> linstep(0, 1, 0.3)
        0.3
        >>> linstep(0, 1, 2.0)
        1.0
    """
    return clamp(0, 1, _divide(x - a, b - a))
