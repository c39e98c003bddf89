# --- Purpose: Contains the high-performance execution kernels. ---

import logging
import numbers
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .config import POISSON_RATE, BINOMIAL_PROB, DEFAULT_DTYPE, TILE_SIZE, DEFAULT_MAX_WORKERS
from .core import InvalidArgument, validate_size, validate_parameters
from .distributions import binomial_pmf, binomial_pmf_table, poisson_pmf, poisson_shift_table
from .observability import get_profiler

logger = logging.getLogger(__name__)


def compute_vectorized(size, rate: float = POISSON_RATE, prob: float = BINOMIAL_PROB) -> np.ndarray:
    """
    Computes the whole matrix as one product ``B @ T``.

    B[row, m] is zero for m > row and T[m, col] is zero for m > col, so the
    inner sum runs over exactly m = 0..min(row, col).
    """
    size = validate_size(size)
    rate, prob = validate_parameters(rate, prob)

    with get_profiler().profile("backend.compute_vectorized", size=size):
        B = binomial_pmf_table(size, prob)
        T = poisson_shift_table(size, rate)
        return (B @ T).astype(DEFAULT_DTYPE, copy=False)


def _process_tile(rate, prob, r_start, r_end, c_start, c_end):
    """Helper function to process a single tile. This is what each thread runs."""
    # Mixing indices beyond min(row, col) contribute nothing
    depth = min(r_end, c_end)
    rows = np.arange(r_start, r_end)[:, None]
    cols = np.arange(c_start, c_end)[None, :]
    mix = np.arange(depth)

    tile_B = binomial_pmf(mix[None, :], rows, prob)
    tile_T = poisson_pmf(cols - mix[:, None], rate)
    return r_start, c_start, tile_B @ tile_T


def _validate_count(name, value) -> int:
    """Tile sizes and worker counts must be integers of at least 1."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidArgument(f"{name} must be at least 1, got {value}")
    return int(value)


def _create_empty_file(filepath, shape, dtype):
    """Helper to create an empty file of the correct size for writing."""
    with open(filepath, "wb") as f:
        file_size = shape[0] * shape[1] * np.dtype(dtype).itemsize
        if file_size > 0:
            f.seek(file_size - 1)
            f.write(b'\0')


def compute_tiled(size, rate: float = POISSON_RATE, prob: float = BINOMIAL_PROB,
                  output_path: str | None = None, max_workers: int = DEFAULT_MAX_WORKERS,
                  tile_size: int = TILE_SIZE) -> np.ndarray:
    """
    Computes the matrix tile by tile in parallel.

    Each tile covers a disjoint block of the output, so workers never write
    the same cell. When ``output_path`` is given the result is written to a
    raw float64 memory-mapped file (C order, no header) and the memmap is
    returned; otherwise an in-memory array is returned.
    """
    size = validate_size(size)
    rate, prob = validate_parameters(rate, prob)
    tile_size = _validate_count("tile_size", tile_size)
    max_workers = _validate_count("max_workers", max_workers)

    shape = (size, size)
    if output_path is None:
        M = np.zeros(shape, dtype=DEFAULT_DTYPE)
    elif size == 0:
        # np.memmap cannot map a zero-length file
        _create_empty_file(output_path, shape, DEFAULT_DTYPE)
        return np.zeros(shape, dtype=DEFAULT_DTYPE)
    else:
        M = np.memmap(output_path, dtype=DEFAULT_DTYPE, mode='w+', shape=shape)

    logger.info(f"Computing {size}x{size} matrix in tiles of {tile_size} with {max_workers} workers")

    with get_profiler().profile("backend.compute_tiled", size=size, tile_size=tile_size) as entry:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = []
            for r_start in range(0, size, tile_size):
                r_end = min(r_start + tile_size, size)
                for c_start in range(0, size, tile_size):
                    c_end = min(c_start + tile_size, size)
                    futures.append(executor.submit(
                        _process_tile,
                        rate, prob,
                        r_start, r_end, c_start, c_end
                    ))

            for future in futures:
                r_start, c_start, result_tile = future.result()
                r_end = r_start + result_tile.shape[0]
                c_end = c_start + result_tile.shape[1]
                M[r_start:r_end, c_start:c_end] = result_tile

        if entry is not None:
            entry.metadata["tiles"] = len(futures)

    if isinstance(M, np.memmap):
        M.flush()
    logger.debug(f"Tiled computation finished: {len(futures)} tiles")
    return M
