"""Approximate float comparison shared by the tolerance-aware predicates.

Two values are approximately equal when they are within an absolute
``epsilon`` of each other, or when they have the same sign and at most
``max_ulps`` representable doubles lie between them. The absolute test
handles values around zero, the ULP test scales with magnitude.
"""

import math

import numpy as np

from bbox2d import config


def resolve_tolerances(
    epsilon: float | None = None,
    max_ulps: int | None = None,
) -> tuple[float, int]:
    """Fill in missing tolerances from the configured defaults.

    Raises:
        ValueError: If a tolerance is negative or NaN.
    """
    if epsilon is None:
        epsilon = config.settings.default_epsilon
    if max_ulps is None:
        max_ulps = config.settings.default_max_ulps
    if not epsilon >= 0.0:
        raise ValueError(f"epsilon must be non-negative, got {epsilon}")
    if max_ulps < 0:
        raise ValueError(f"max_ulps must be non-negative, got {max_ulps}")
    return epsilon, max_ulps


def abs_diff_eq(a: float, b: float, epsilon: float) -> bool:
    """Return True if ``|a - b| <= epsilon``. Always False for NaN."""
    return abs(a - b) <= epsilon


def ulps_distance(a: float, b: float) -> int:
    """Number of representable doubles between ``a`` and ``b``.

    Only meaningful for values of the same sign.
    """
    bits = np.array([a, b], dtype=np.float64).view(np.int64)
    return abs(int(bits[0]) - int(bits[1]))


def ulps_eq(
    a: float,
    b: float,
    epsilon: float | None = None,
    max_ulps: int | None = None,
) -> bool:
    """Absolute-epsilon-or-ULP approximate equality of two floats."""
    epsilon, max_ulps = resolve_tolerances(epsilon, max_ulps)
    if abs_diff_eq(a, b, epsilon):
        return True
    if math.isnan(a) or math.isnan(b):
        return False
    if math.copysign(1.0, a) != math.copysign(1.0, b):
        return False
    return ulps_distance(a, b) <= max_ulps
