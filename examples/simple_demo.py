#!/usr/bin/env python3
"""
Simple pbmatrix Demo

Builds a small mixture matrix with each kernel and prints the timings.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from pbmatrix import compute_matrix, configure_logging, func, get_profiler

configure_logging(level="INFO")
np.set_printoptions(precision=4, suppress=True)
get_profiler().enable()

print("func(5):")
print(func(5))

size = 120
for method in ["reference", "vectorized", "tiled"]:
    profiler = get_profiler()
    with profiler.profile(f"compute_matrix[{method}]", size=size):
        M = compute_matrix(size, method=method)
    print(f"{method:>10}: shape={M.shape}, M[0, 0]={M[0, 0]:.6f}")

for name, stats in get_profiler().get_summary().items():
    print(f"{name:<40} {stats['count']:>4} {stats['total']:>10.4f}s")
