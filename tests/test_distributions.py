"""
Unit tests for the Poisson and Binomial PMF helpers.
"""

import unittest
import os
import math
import numpy as np
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from pbmatrix.distributions import (
    poisson_pmf, binomial_pmf, poisson_pmf_vector, binomial_pmf_row,
    binomial_pmf_table, poisson_shift_table
)


class TestDistributions(unittest.TestCase):
    """Test cases for PMF values and their support."""

    def test_poisson_pmf_values(self):
        for k in range(6):
            with self.subTest(k=k):
                self.assertAlmostEqual(poisson_pmf(k, 1.0), math.exp(-1.0) / math.factorial(k), places=14)

    def test_poisson_pmf_is_zero_below_support(self):
        """Negative counts give 0, never NaN."""
        values = poisson_pmf(np.array([-3, -1]), 1.0)
        np.testing.assert_array_equal(values, [0.0, 0.0])

    def test_binomial_pmf_values(self):
        self.assertAlmostEqual(binomial_pmf(0, 0, 0.75), 1.0)
        self.assertAlmostEqual(binomial_pmf(1, 2, 0.75), 0.375)
        self.assertAlmostEqual(binomial_pmf(3, 3, 0.75), 0.421875)

    def test_binomial_pmf_is_zero_outside_support(self):
        np.testing.assert_array_equal(binomial_pmf(np.array([-1, 3]), 2, 0.75), [0.0, 0.0])

    def test_vectors_sum_to_one(self):
        self.assertAlmostEqual(binomial_pmf_row(10, 0.75).sum(), 1.0, places=12)
        self.assertAlmostEqual(poisson_pmf_vector(40, 1.0).sum(), 1.0, places=12)

    def test_binomial_table_is_lower_triangular(self):
        B = binomial_pmf_table(6, 0.75)
        self.assertEqual(B.shape, (6, 6))
        np.testing.assert_array_equal(np.triu(B, k=1), 0.0)
        np.testing.assert_allclose(B[4, :5], binomial_pmf_row(4, 0.75))

    def test_poisson_shift_table_is_upper_toeplitz(self):
        T = poisson_shift_table(5, 1.0)
        np.testing.assert_array_equal(np.tril(T, k=-1), 0.0)
        # Constant along diagonals
        self.assertEqual(T[1, 3], T[0, 2])
        self.assertAlmostEqual(T[2, 2], math.exp(-1.0), places=14)


if __name__ == '__main__':
    unittest.main()
