"""
Bounded sampling helpers.

Every curve and grid in the engine is sampled through these functions so
that the caller's sample count is the only knob on the amount of work.
"""

from __future__ import annotations

import numpy as np

from ..errors import InvalidInputError, require_count, require_positive


def linspace(start: float, stop: float, n: int) -> np.ndarray:
    """
    ``n`` evenly spaced samples over [start, stop].

    n = 0 gives an empty array and n = 1 gives ``[start]``.
    """
    n = require_count("samples", n)
    if n == 0:
        return np.empty(0)
    if n == 1:
        return np.array([float(start)])
    return np.linspace(start, stop, n)


def logspace(start: float, stop: float, n: int) -> np.ndarray:
    """``n`` log-spaced samples over [start, stop]; both ends must be > 0."""
    require_positive("start", start)
    require_positive("stop", stop)
    n = require_count("samples", n)
    if n == 0:
        return np.empty(0)
    if n == 1:
        return np.array([float(start)])
    return np.logspace(np.log10(start), np.log10(stop), n)


def grid(x_range: tuple[float, float], y_range: tuple[float, float], n: int) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Regular n×n grid.

    Returns (x, y, X, Y) with ``X[i, j] = x[j]`` and ``Y[i, j] = y[i]``
    (row index follows y).
    """
    if x_range[1] < x_range[0] or y_range[1] < y_range[0]:
        raise InvalidInputError("range", (x_range, y_range), "ranges must be (low, high)")
    x = linspace(x_range[0], x_range[1], n)
    y = linspace(y_range[0], y_range[1], n)
    X, Y = np.meshgrid(x, y)
    return x, y, X, Y
