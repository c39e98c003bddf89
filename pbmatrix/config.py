# pbmatrix/config.py
"""
Centralized configuration for the pbmatrix library.
This module provides a single source of truth for all model parameters.
"""

import numpy as np

# Mixture model parameters
POISSON_RATE = 1.0   # lambda of the Poisson factor
BINOMIAL_PROB = 0.75  # success probability of the Binomial factor

# Output buffer
DEFAULT_DTYPE = np.float64

# Tiled kernel tuning
TILE_SIZE = 256  # Size of the square output tiles computed as one task
DEFAULT_MAX_WORKERS = 4  # Thread pool size for the tiled kernel
