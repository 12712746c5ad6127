# MIT License (see LICENSE)
"""
Scalar helpers for one-dimensional motion.

The track is 1D, so the vector helpers of a 2D engine collapse to a
handful of scalar operations. They are kept here so that sign conventions
are identical everywhere they are used.
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used for trail history so that positions and opacities share one
    precision regardless of what the caller passes in.
    """
    return np.array(x, dtype=np.float64)


def sign(x: float) -> float:
    """
    Sign of x as a float: -1.0, 0.0 or +1.0.

    Zero maps to 0.0 (not +1.0), so a body with zero applied force
    gets no friction direction.
    """
    return float(np.sign(x))
