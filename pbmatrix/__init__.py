"""
pbmatrix: the Poisson/Binomial mixture matrix

    M[row, col] = sum_{m=0}^{min(row, col)} PoissonPMF(col - m; 1) * BinomialPMF(m; row, 0.75)
"""

from .core import InvalidArgument, compute_matrix, func, validate_size
from .backend import compute_tiled, compute_vectorized
from .observability import configure_logging, get_profiler

__all__ = [
    "InvalidArgument",
    "compute_matrix",
    "compute_tiled",
    "compute_vectorized",
    "configure_logging",
    "func",
    "get_profiler",
    "validate_size",
]
