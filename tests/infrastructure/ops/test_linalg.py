import unittest

from src.ndreduce.infrastructure.array._array import Array
from src.ndreduce.infrastructure.ops.linalg import dot, outer
from src.ndreduce.domain._errors import LengthMismatchError, ShapeMismatchError


class TestDot(unittest.TestCase):
    def test_dot(self) -> None:
        self.assertEqual(dot(Array.from_list([1, 2, 3]), Array.from_list([4, 5, 6])), 32)

    def test_dot_of_empty_vectors_is_zero(self) -> None:
        self.assertEqual(dot(Array((0,)), Array((0,))), 0)

    def test_dot_over_borrowed_window(self) -> None:
        buf = Array.from_list([9, 1, 2, 3, 9])
        self.assertEqual(dot(buf.view(1, (3,)), buf.view(1, (3,))), 14)

    def test_dot_rejects_matrices(self) -> None:
        with self.assertRaises(ShapeMismatchError):
            dot(Array((2, 2)), Array((4,)))

    def test_dot_rejects_unequal_lengths(self) -> None:
        with self.assertRaises(LengthMismatchError) as ctx:
            dot(Array((2,)), Array((3,)))
        self.assertEqual(ctx.exception.lengths, (2, 3))


class TestOuter(unittest.TestCase):
    def test_outer(self) -> None:
        out = outer(Array.from_list([1, 2]), Array.from_list([3, 4, 5]))
        self.assertEqual(out.shape, (2, 3))
        self.assertEqual(out.to_list(), [[3.0, 4.0, 5.0], [6.0, 8.0, 10.0]])

    def test_outer_with_empty_operand(self) -> None:
        self.assertEqual(outer(Array((0,)), Array.from_list([1.0])).shape, (0, 1))

    def test_outer_rejects_matrices(self) -> None:
        with self.assertRaises(ShapeMismatchError):
            outer(Array((1, 2)), Array((2,)))

    def test_array_methods(self) -> None:
        a = Array.from_list([1.0, -1.0])
        self.assertEqual(a.dot(a), 2.0)
        self.assertEqual(a.outer(a).to_list(), [[1.0, -1.0], [-1.0, 1.0]])


if __name__ == "__main__":
    unittest.main()
