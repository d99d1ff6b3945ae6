import operator
import unittest
import numpy as np

from src.ndreduce.infrastructure.array._array import Array
from src.ndreduce.infrastructure.ops.reduce import (
    Extent,
    abs_extent,
    count,
    extent,
    maximum,
    mean,
    minimum,
    product,
    reduce,
    skip_missing,
    total,
)
from src.ndreduce.domain._errors import EmptySequenceError
from src.ndreduce.domain._missing import MISSING, is_missing


def _never_called(a, b):
    raise AssertionError(f"op must not be called, got ({a!r}, {b!r})")


class TestReduce(unittest.TestCase):
    def test_sum_matches_direct_iteration(self) -> None:
        rng = np.random.default_rng(0)
        x = rng.standard_normal((3, 4, 5))
        a = Array.from_numpy(x)
        self.assertAlmostEqual(reduce(operator.add, a), float(np.sum(x)), places=10)

    def test_folds_left_to_right_in_row_major_order(self) -> None:
        a = Array.from_list([[1, 2], [3, 4]])
        digits = lambda acc, x: acc * 10 + x
        self.assertEqual(reduce(digits, a), 1234)
        self.assertEqual(reduce(digits, a.T), 1324)

    def test_key_is_applied_to_every_element(self) -> None:
        a = Array.from_list([1, -2, 3])
        self.assertEqual(reduce(operator.add, a, abs), 6)

    def test_init_seeds_the_fold(self) -> None:
        self.assertEqual(reduce(operator.add, Array.from_list([1, 2]), init=10), 13)
        self.assertEqual(reduce(operator.add, Array((0,)), init=0), 0)

    def test_empty_without_init_raises(self) -> None:
        with self.assertRaises(EmptySequenceError):
            reduce(operator.add, Array((0,)))
        with self.assertRaises(EmptySequenceError) as ctx:
            maximum(Array((2, 0)))
        self.assertEqual(ctx.exception.op, "maximum")

    def test_missing_reaches_op_without_ignore_missing(self) -> None:
        a = Array.from_list([1, MISSING])
        with self.assertRaises(TypeError):
            total(a)

    def test_ignore_missing_sums_only_present_elements(self) -> None:
        a = Array.from_list([1, MISSING, 3, MISSING])
        self.assertEqual(total(a, ignore_missing=True), 4)
        self.assertEqual(reduce(operator.add, a, ignore_missing=True), 4)

    def test_ignore_missing_never_passes_missing_to_op(self) -> None:
        seen = []

        def op(acc, x):
            seen.append((acc, x))
            return acc + x

        a = Array.from_list([MISSING, 2, MISSING, 5, MISSING])
        self.assertEqual(reduce(op, a, ignore_missing=True), 7)
        self.assertEqual(seen, [(2, 5)])

    def test_ignore_missing_key_only_sees_present_elements(self) -> None:
        a = Array.from_list([MISSING, -2, 3])
        self.assertEqual(reduce(operator.add, a, abs, ignore_missing=True), 5)

    def test_ignore_missing_all_missing_or_empty_yields_missing(self) -> None:
        self.assertIs(total(Array.from_list([MISSING, MISSING]), ignore_missing=True), MISSING)
        self.assertIs(reduce(operator.add, Array((0,)), ignore_missing=True), MISSING)

    def test_specializations(self) -> None:
        a = Array.from_list([[3, 1], [4, 1], [5, 9]])
        self.assertEqual(maximum(a), 9)
        self.assertEqual(minimum(a), 1)
        self.assertEqual(total(a), 23)
        self.assertEqual(product(a), 540)
        self.assertEqual(maximum(a, lambda x: -x), -1)
        self.assertEqual(minimum(Array.from_list([2, MISSING, 1]), ignore_missing=True), 1)


class TestSkipMissing(unittest.TestCase):
    def test_identity_rules(self) -> None:
        step = skip_missing(_never_called)
        self.assertEqual(step(MISSING, 5), 5)
        self.assertEqual(step(5, MISSING), 5)
        self.assertIs(step(MISSING, MISSING), MISSING)

    def test_both_present_applies_op(self) -> None:
        self.assertEqual(skip_missing(operator.sub)(5, 3), 2)

    def test_zero_is_not_missing(self) -> None:
        self.assertEqual(skip_missing(operator.add)(0, 0), 0)
        self.assertEqual(total(Array.from_list([0, MISSING, 0]), ignore_missing=True), 0)


class TestCountAndMean(unittest.TestCase):
    def test_count(self) -> None:
        a = Array.from_list([1, 2, 3, 4])
        self.assertEqual(count(lambda e: e > 2, a), 2)
        self.assertEqual(count(lambda e: True, Array((0,))), 0)

    def test_count_ignore_missing_counts_present_elements(self) -> None:
        a = Array.from_list([1, MISSING, 3])
        self.assertEqual(count(lambda e: True, a, ignore_missing=True), 2)

    def test_mean(self) -> None:
        self.assertEqual(mean(Array.from_list([1, 2, 3, 4])), 2.5)

    def test_mean_ignore_missing_divides_by_present_count(self) -> None:
        a = Array.from_list([1, MISSING, 3])
        self.assertEqual(mean(a, ignore_missing=True), 2.0)

    def test_mean_all_missing_is_missing(self) -> None:
        self.assertTrue(is_missing(mean(Array.from_list([MISSING]), ignore_missing=True)))

    def test_mean_empty_raises(self) -> None:
        with self.assertRaises(EmptySequenceError):
            mean(Array((0,)))


class TestExtent(unittest.TestCase):
    def test_extent(self) -> None:
        r = extent(Array.from_list([3, 1, 4, 1, 5]))
        self.assertEqual(r, (1, 5))
        self.assertIsInstance(r, Extent)
        self.assertEqual((r.lo, r.hi), (1, 5))

    def test_single_element_is_a_pair(self) -> None:
        self.assertEqual(extent(Array.from_list([7])), Extent(7, 7))

    def test_two_elements(self) -> None:
        self.assertEqual(extent(Array.from_list([9, 2])), Extent(2, 9))

    def test_extent_over_transposed_view(self) -> None:
        a = Array.from_list([[2.0, -1.0], [8.0, 0.5]])
        self.assertEqual(extent(a.T), Extent(-1.0, 8.0))

    def test_key_and_abs_extent(self) -> None:
        a = Array.from_list([-3, 2, -1])
        self.assertEqual(extent(a, abs), Extent(1, 3))
        self.assertEqual(abs_extent(a), Extent(1, 3))

    def test_extent_ignore_missing(self) -> None:
        a = Array.from_list([MISSING, 3, MISSING, 1])
        self.assertEqual(extent(a, ignore_missing=True), Extent(1, 3))
        self.assertIs(extent(Array.from_list([MISSING]), ignore_missing=True), MISSING)

    def test_extent_empty_raises(self) -> None:
        with self.assertRaises(EmptySequenceError) as ctx:
            extent(Array((0,)))
        self.assertEqual(ctx.exception.op, "extent")


class TestArrayReductionMethods(unittest.TestCase):
    def test_methods_delegate_to_engine(self) -> None:
        a = Array.from_list([[1, 2, 3], [4, 5, 6]])
        self.assertEqual(a.sum(), 21)
        self.assertEqual(a.prod(), 720)
        self.assertEqual(a.max(), 6)
        self.assertEqual(a.min(), 1)
        self.assertEqual(a.mean(), 3.5)
        self.assertEqual(a.count(lambda e: e % 2 == 0), 3)
        self.assertEqual(a.extent(), Extent(1, 6))
        self.assertEqual(a.reduce(operator.add, init=100), 121)

    def test_count_defaults_to_truthiness(self) -> None:
        self.assertEqual(Array.from_list([0, 1, 0, 2]).count(), 2)

    def test_methods_on_views(self) -> None:
        buf = Array.from_list(list(range(10)))
        v = buf.view(2, (2, 2))
        self.assertEqual(v.sum(), 2 + 3 + 4 + 5)
        self.assertEqual(v.T.sum(), 14)
        self.assertEqual(v.abs_extent(), Extent(2, 5))


if __name__ == "__main__":
    unittest.main()
