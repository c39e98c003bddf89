# --- Purpose: Builds the Poisson/Binomial mixture matrix. ---

import logging
import math
import numbers

import numpy as np

from .config import POISSON_RATE, BINOMIAL_PROB, DEFAULT_DTYPE
from .distributions import poisson_pmf_vector, binomial_pmf_row

logger = logging.getLogger(__name__)

METHODS = ("reference", "vectorized", "tiled")


class InvalidArgument(ValueError):
    """Raised when a size, parameter, or option is outside its domain."""


def validate_size(size) -> int:
    """
    Checks that ``size`` is a non-negative integral value and returns it as int.

    Integral floats (e.g. ``3.0``) are accepted since numeric hosts often
    pass whole numbers as doubles. Booleans are rejected.
    """
    if isinstance(size, bool) or not isinstance(size, numbers.Real):
        raise InvalidArgument(f"size must be an integer, got {type(size).__name__}")

    if isinstance(size, numbers.Integral):
        size = int(size)
    elif math.isfinite(float(size)) and float(size).is_integer():
        size = int(size)
    else:
        raise InvalidArgument(f"size must be an integer, got {size!r}")

    if size < 0:
        raise InvalidArgument(f"size must be non-negative, got {size}")
    return size


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_parameters(rate: float, prob: float):
    """Checks the Poisson rate and Binomial success probability and returns them as floats."""
    if not _is_real(rate) or not math.isfinite(float(rate)) or rate <= 0:
        raise InvalidArgument(f"rate must be a positive finite number, got {rate!r}")
    if not _is_real(prob) or not math.isfinite(float(prob)) or not 0.0 <= prob <= 1.0:
        raise InvalidArgument(f"prob must lie in [0, 1], got {prob!r}")
    return float(rate), float(prob)


def reference_kernel(size: int, rate: float, prob: float) -> np.ndarray:
    """
    Sequential triple loop over rows, columns and mixing index ``m``.

    M[row, col] = sum_{m=0}^{min(row, col)} PoissonPMF(col - m) * BinomialPMF(m; row)
    """
    M = np.zeros((size, size), dtype=DEFAULT_DTYPE)

    # PMF values only depend on one index each, so look them up per row
    poisson = poisson_pmf_vector(size, rate)
    for row in range(size):
        binomial = binomial_pmf_row(row, prob)
        for col in range(size):
            for m in range(min(row, col) + 1):
                M[row, col] += poisson[col - m] * binomial[m]
    return M


def compute_matrix(size, rate: float = POISSON_RATE, prob: float = BINOMIAL_PROB,
                   method: str = "reference") -> np.ndarray:
    """
    Computes the ``size x size`` mixture matrix.

    Args:
        size: Non-negative integer dimension of the result.
        rate: Rate of the Poisson factor (default 1).
        prob: Success probability of the Binomial factor (default 0.75).
        method: "reference" (sequential loop), "vectorized" (one matrix
            product) or "tiled" (thread pool over output tiles).

    Returns:
        np.ndarray: A read-only float64 matrix of shape (size, size).

    Raises:
        InvalidArgument: for a negative or non-integral size, parameters
            outside their domain, or an unknown method.
    """
    size = validate_size(size)
    rate, prob = validate_parameters(rate, prob)

    if method == "reference":
        M = reference_kernel(size, rate, prob)
    elif method in METHODS:
        from . import backend
        if method == "vectorized":
            M = backend.compute_vectorized(size, rate, prob)
        else:
            M = backend.compute_tiled(size, rate, prob)
    else:
        raise InvalidArgument(f"Unknown method '{method}', expected one of {METHODS}")

    logger.debug(f"Built {size}x{size} matrix with method={method}, rate={rate}, prob={prob}")
    M.flags.writeable = False
    return M


def func(x) -> np.ndarray:
    """Host entry point: the mixture matrix of dimension ``x`` with the fixed parameters."""
    return compute_matrix(x)
