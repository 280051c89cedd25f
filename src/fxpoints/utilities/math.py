"""Numerical helpers for forward points and discounting.

Scalar routines work in float64 with numpy and back the term structures and
engines. ``interpolate_linear_vectorized`` is a JIT-compiled JAX kernel for
evaluating a curve at many times at once (e.g. scenario grids); it follows
JAX's default precision, which is float32 unless ``JAX_ENABLE_X64`` is set.
"""

from __future__ import annotations

import jax
import jax.numpy as jnp
import numpy as np

from fxpoints.core.types import PIP_FACTOR


def interpolate_linear(t: float, times: np.ndarray, values: np.ndarray) -> float:
    """Piecewise-linear interpolation, flat beyond the last node.

    Times before the first node are extrapolated linearly along the first
    segment.

    Args:
        t: Time to evaluate
        times: Strictly increasing node times (at least two)
        values: Node values

    Example:
        >>> interpolate_linear(0.5, np.array([0.0, 1.0]), np.array([0.0, 10.0]))
        5.0
    """
    if t < times[0]:
        slope = (values[1] - values[0]) / (times[1] - times[0])
        return float(values[0] + (t - times[0]) * slope)
    return float(np.interp(t, times, values))


@jax.jit
def interpolate_linear_vectorized(
    t: jnp.ndarray,
    times: jnp.ndarray,
    values: jnp.ndarray,
) -> jnp.ndarray:
    """Vectorized version of ``interpolate_linear``.

    Args:
        t: Array of times
        times: Node times
        values: Node values

    Returns:
        Array of interpolated values

    Note:
        This function is JIT-compiled for performance.
    """
    slope = (values[1] - values[0]) / (times[1] - times[0])
    left = values[0] + (t - times[0]) * slope
    # jnp.interp clamps to the end values outside the node range.
    return jnp.where(t < times[0], left, jnp.interp(t, times, values))


def all_in_forward_rate(spot: float, forward_points: float) -> float:
    """Spot plus forward points converted from pips.

    Example:
        >>> round(all_in_forward_rate(1.1351, 45.0), 6)
        1.1396
    """
    return spot + forward_points / PIP_FACTOR


def continuous_discount_factor(rate: float, t: float) -> float:
    """Discount factor ``exp(-r t)`` for a continuously compounded rate."""
    return float(np.exp(-rate * t))


def zero_rate_from_discount(discount: float, t: float) -> float:
    """Continuously compounded zero rate implied by a discount factor.

    Raises:
        ValueError: If ``t`` is not positive
    """
    if t <= 0.0:
        raise ValueError(f"Zero rate needs a positive time, got {t}")
    return float(-np.log(discount) / t)
