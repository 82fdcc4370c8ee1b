"""
Unit tests for SquareMatrix arithmetic and comparison operators.
"""

import unittest
import os
import sys
import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from squarematrix.core import SquareMatrix
from squarematrix import backend


class TestMatrixArithmetic(unittest.TestCase):
    """Test cases for matrix-matrix operators."""

    def setUp(self):
        self.rng = np.random.default_rng(2024)
        self.A = SquareMatrix(4).randomize(self.rng)
        self.B = SquareMatrix(4).randomize(self.rng)

    def test_addition_is_element_wise(self):
        C = self.A + self.B
        for i in range(4):
            for j in range(4):
                self.assertEqual(C.get(i, j), self.A.get(i, j) + self.B.get(i, j))

    def test_addition_leaves_operands_unchanged(self):
        a_before, b_before = self.A.copy(), self.B.copy()
        self.A + self.B
        self.assertEqual(self.A, a_before)
        self.assertEqual(self.B, b_before)

    def test_multiplication_matches_numpy(self):
        expected = self.A.to_numpy().astype(np.int64) @ self.B.to_numpy().astype(np.int64)
        for product in [self.A * self.B, self.A @ self.B]:
            with self.subTest(product=product):
                np.testing.assert_array_equal(product.to_numpy(), expected)

    def test_multiplication_by_identity(self):
        I = SquareMatrix(4).identity()
        self.assertEqual(self.A * I, self.A)
        self.assertEqual(I * self.A, self.A)

    def test_known_product(self):
        A = SquareMatrix(2, [1, 2, 3, 4])
        B = SquareMatrix(2, [5, 6, 7, 8])
        np.testing.assert_array_equal((A * B).to_numpy(), [[19, 22], [43, 50]])

    def test_size_mismatch_returns_zero_matrix_of_lhs_size(self):
        small = SquareMatrix(2, [1, 2, 3, 4])
        for result in [self.A + small, self.A * small, self.A @ small]:
            with self.subTest(result=result):
                self.assertEqual(result.size, 4)
                self.assertFalse(result.to_numpy().any())
        self.assertEqual((small + self.A).size, 2)
        self.assertFalse((small * self.A).to_numpy().any())

    def test_result_is_new_instance(self):
        self.assertIsNot(self.A + self.B, self.A)
        self.assertIsNot(self.A * self.B, self.A)

    def test_results_with_spare_capacity_operands(self):
        A = SquareMatrix(10).resize(2)
        A.set(0, 0, 1).set(1, 1, 1)
        B = SquareMatrix(2, [1, 2, 3, 4])
        np.testing.assert_array_equal((A * B).to_numpy(), [[1, 2], [3, 4]])
        self.assertEqual((A + B).capacity, 2)


class TestScalarArithmetic(unittest.TestCase):
    """Test cases for scalar operators and in-place updates."""

    def setUp(self):
        self.M = SquareMatrix(3, range(9))
        self.data = np.arange(9).reshape(3, 3)

    def test_scalar_add_sub_mul(self):
        np.testing.assert_array_equal((self.M + 5).to_numpy(), self.data + 5)
        np.testing.assert_array_equal((self.M - 2).to_numpy(), self.data - 2)
        np.testing.assert_array_equal((self.M * 3).to_numpy(), self.data * 3)
        # Operand unchanged
        np.testing.assert_array_equal(self.M.to_numpy(), self.data)

    def test_scalar_round_trip(self):
        rng = np.random.default_rng(3)
        for _ in range(5):
            A = SquareMatrix(4).randomize(rng)
            self.assertEqual((A + 5) - 5, A)

    def test_scalar_first_forms(self):
        self.assertEqual(5 + self.M, self.M + 5)
        self.assertEqual(3 * self.M, self.M * 3)
        np.testing.assert_array_equal((10 - self.M).to_numpy(), 10 - self.data)

    def test_numpy_integer_scalars(self):
        self.assertEqual(self.M + np.int64(2), self.M + 2)

    def test_in_place_updates_keep_identity(self):
        M = self.M
        original = M
        M += 2
        self.assertIs(M, original)
        M -= 1
        M *= 2
        self.assertIs(M, original)
        np.testing.assert_array_equal(M.to_numpy(), (self.data + 1) * 2)

    def test_increment_and_decrement(self):
        self.assertIs(self.M.increment(), self.M)
        np.testing.assert_array_equal(self.M.to_numpy(), self.data + 1)
        self.assertIs(self.M.decrement().decrement(), self.M)
        np.testing.assert_array_equal(self.M.to_numpy(), self.data - 1)

    def test_call_truncates_toward_zero(self):
        self.assertIs(self.M(5.99), self.M)
        np.testing.assert_array_equal(self.M.to_numpy(), self.data + 5)
        self.M(-2.7)
        np.testing.assert_array_equal(self.M.to_numpy(), self.data + 3)
        self.M(0.5)
        np.testing.assert_array_equal(self.M.to_numpy(), self.data + 3)

    def test_unsupported_operands_raise_type_error(self):
        with self.assertRaises(TypeError):
            self.M + 1.5
        with self.assertRaises(TypeError):
            self.M - self.M
        with self.assertRaises(TypeError):
            "a" * self.M

    def test_scalar_ops_on_empty_matrix(self):
        E = SquareMatrix()
        self.assertEqual((E + 3).size, 0)
        E += 1
        self.assertEqual(E.size, 0)


class TestOperandWrapping(unittest.TestCase):
    """Integer operands beyond int32 wrap the same way element arithmetic does."""

    def test_wrap_scalar_edges(self):
        self.assertEqual(backend.wrap_scalar(2**31 - 1), 2**31 - 1)
        self.assertEqual(backend.wrap_scalar(2**31), -2**31)
        self.assertEqual(backend.wrap_scalar(-2**31 - 1), 2**31 - 1)
        self.assertEqual(backend.wrap_scalar(2**64 + 5), 5)

    def test_set_wraps_large_value(self):
        m = SquareMatrix(1).set(0, 0, 2**31)
        self.assertEqual(m.get(0, 0), -2**31)

    def test_construction_wraps_values(self):
        m = SquareMatrix(2, [2**40 + 3, -2**33, 1, 2**31])
        np.testing.assert_array_equal(m.to_numpy(), [[3, 0], [1, -2**31]])

    def test_scalar_operators_wrap_operand(self):
        M = SquareMatrix(1)
        self.assertEqual((M + 2**31).get(0, 0), -2**31)
        self.assertEqual((M - 2**32).get(0, 0), 0)
        self.assertEqual((2**33 + 7 - M).get(0, 0), 7)
        self.assertEqual((SquareMatrix(1, [1]) * 2**32).get(0, 0), 0)

    def test_operand_wrap_matches_element_overflow(self):
        M = SquareMatrix(1, [2**31 - 1])
        self.assertEqual(M + 1, M + (2**32 + 1))
        self.assertEqual((M + 1).get(0, 0), -2**31)

    def test_in_place_and_call_wrap_operand(self):
        M = SquareMatrix(1)
        M += 2**32 + 2
        self.assertEqual(M.get(0, 0), 2)
        M *= 2**32
        self.assertEqual(M.get(0, 0), 0)
        M(1e10)
        # 10**10 mod 2**32
        self.assertEqual(M.get(0, 0), 1410065408)

    def test_fills_wrap_values(self):
        m = SquareMatrix(2).fill_row(0, [2**31, 2**32 + 1])
        np.testing.assert_array_equal(m.to_numpy(), [[-2**31, 1], [0, 0]])


class TestComparison(unittest.TestCase):
    """Test cases for ==, > and <."""

    def setUp(self):
        self.A = SquareMatrix(2, [1, 2, 3, 4])

    def test_equality_is_reflexive_and_symmetric(self):
        B = SquareMatrix(2, [1, 2, 3, 4])
        self.assertTrue(self.A == self.A)
        self.assertTrue(self.A == B)
        self.assertTrue(B == self.A)
        B.set(1, 1, 0)
        self.assertFalse(self.A == B)
        self.assertTrue(self.A != B)

    def test_size_mismatch_is_not_equal(self):
        self.assertFalse(self.A == SquareMatrix(3))
        self.assertFalse(SquareMatrix(1) == SquareMatrix(2))

    def test_equality_ignores_spare_capacity(self):
        B = SquareMatrix(8).resize(2)
        for i, v in enumerate([1, 2, 3, 4]):
            B.set(i // 2, i % 2, v)
        self.assertEqual(self.A, B)

    def test_greater_than_requires_every_element(self):
        bigger = self.A + 1
        self.assertTrue(bigger > self.A)
        self.assertFalse(self.A > self.A)
        bigger.set(0, 0, 1)
        self.assertFalse(bigger > self.A)

    def test_less_than_requires_every_element(self):
        smaller = self.A - 1
        self.assertTrue(smaller < self.A)
        self.assertFalse(self.A < self.A)
        mixed = SquareMatrix(2, [0, 5, 0, 0])
        self.assertFalse(mixed < self.A)
        self.assertFalse(mixed > self.A)

    def test_order_size_mismatch_is_false(self):
        big = SquareMatrix(3) + 100
        self.assertFalse(big > self.A)
        self.assertFalse(big < self.A)

    def test_not_hashable(self):
        with self.assertRaises(TypeError):
            hash(self.A)

    def test_compare_with_other_types(self):
        self.assertFalse(self.A == [1, 2, 3, 4])
        with self.assertRaises(TypeError):
            self.A < 5


if __name__ == '__main__':
    unittest.main()
