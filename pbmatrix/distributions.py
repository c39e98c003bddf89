# --- Purpose: Probability mass functions feeding the mixture matrix. ---
"""
Poisson and Binomial probability mass functions.

Both functions follow scipy.stats semantics: they broadcast over array
arguments and return 0.0 (not NaN) for values outside the support, so
callers can index with ``col - m`` without guarding negative offsets.
"""

import numpy as np
from scipy import stats


def poisson_pmf(k, rate):
    """P(X = k) for X ~ Poisson(rate). Zero for k < 0."""
    return stats.poisson.pmf(k, rate)


def binomial_pmf(k, n, prob):
    """P(X = k) for X ~ Binomial(n, prob). Zero for k < 0 or k > n."""
    return stats.binom.pmf(k, n, prob)


def poisson_pmf_vector(length: int, rate: float) -> np.ndarray:
    """Returns ``[PoissonPMF(0), ..., PoissonPMF(length - 1)]``."""
    return poisson_pmf(np.arange(length), rate)


def binomial_pmf_row(n: int, prob: float) -> np.ndarray:
    """Returns ``[BinomialPMF(0; n), ..., BinomialPMF(n; n)]``."""
    return binomial_pmf(np.arange(n + 1), n, prob)


def binomial_pmf_table(size: int, prob: float) -> np.ndarray:
    """
    Builds the lower-triangular table ``B[n, m] = BinomialPMF(m; n, prob)``
    for ``0 <= n, m < size``. Entries with ``m > n`` are zero.
    """
    trials = np.arange(size)[:, None]
    successes = np.arange(size)[None, :]
    return binomial_pmf(successes, trials, prob)


def poisson_shift_table(size: int, rate: float) -> np.ndarray:
    """
    Builds the upper-triangular Toeplitz table ``T[m, col] = PoissonPMF(col - m)``.
    Entries with ``m > col`` are zero because the PMF vanishes below 0.
    """
    offsets = np.arange(size)[None, :] - np.arange(size)[:, None]
    return poisson_pmf(offsets, rate)
