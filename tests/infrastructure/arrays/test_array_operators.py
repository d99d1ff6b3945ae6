import unittest
import numpy as np

from src.ndreduce.infrastructure.array._array import Array
from src.ndreduce.domain._element_type import ElementType
from src.ndreduce.domain._errors import ArityMismatchError, ShapeMismatchError


class TestArrayArithmeticOperators(unittest.TestCase):
    def setUp(self) -> None:
        self.a = Array.from_list([[1, 2], [3, 4]])
        self.b = Array.from_list([[4, 3], [2, 1]])

    def test_array_array_operators(self) -> None:
        self.assertEqual((self.a + self.b).to_list(), [[5.0, 5.0], [5.0, 5.0]])
        self.assertEqual((self.a - self.b).to_list(), [[-3.0, -1.0], [1.0, 3.0]])
        self.assertEqual((self.a * self.b).to_list(), [[4.0, 6.0], [6.0, 4.0]])
        self.assertEqual((self.a / self.b).to_list(), [[0.25, 2 / 3], [1.5, 4.0]])

    def test_scalar_operators(self) -> None:
        self.assertEqual((self.a + 1).to_list(), [[2.0, 3.0], [4.0, 5.0]])
        self.assertEqual((10 - self.a).to_list(), [[9.0, 8.0], [7.0, 6.0]])
        self.assertEqual((self.a - 1).to_list(), [[0.0, 1.0], [2.0, 3.0]])
        self.assertEqual((2 * self.a).to_list(), [[2.0, 4.0], [6.0, 8.0]])
        self.assertEqual((self.a / 2).to_list(), [[0.5, 1.0], [1.5, 2.0]])
        self.assertEqual((1 / self.a).to_list(), [[1.0, 0.5], [1 / 3, 0.25]])

    def test_results_are_float64_and_owned(self) -> None:
        out = self.a + self.b
        self.assertIs(out.element_type, ElementType.FLOAT64)
        self.assertIsNone(out.base)

    def test_operators_on_views(self) -> None:
        out = self.a.T + self.a
        self.assertEqual(out.to_list(), [[2.0, 5.0], [5.0, 8.0]])

    def test_numpy_scalar_operand(self) -> None:
        out = self.a * np.float64(0.5)
        np.testing.assert_allclose(out.to_numpy(), self.a.to_numpy() * 0.5)

    def test_shape_mismatch(self) -> None:
        with self.assertRaises(ShapeMismatchError):
            self.a + Array((4,))

    def test_unsupported_operand(self) -> None:
        with self.assertRaises(TypeError):
            self.a + "x"


class TestArrayUnaryOperators(unittest.TestCase):
    def setUp(self) -> None:
        self.a = Array.from_list([1, -2, 4])

    def test_neg(self) -> None:
        self.assertEqual((-self.a).to_list(), [-1.0, 2.0, -4.0])

    def test_negate_and_reciprocal(self) -> None:
        self.assertEqual(self.a.negate(1).to_list(), [0.0, 3.0, -3.0])
        self.assertEqual(self.a.reciprocal().to_list(), [1.0, -0.5, 0.25])
        out = self.a.reciprocal(4, ElementType.INT64)
        self.assertIs(out.element_type, ElementType.INT64)
        self.assertEqual(out.to_list(), [4, -2, 1])

    def test_map(self) -> None:
        out = self.a.map(abs, ElementType.INT64)
        self.assertEqual(out.to_list(), [1, 2, 4])
        self.assertEqual(self.a.to_list(), [1, -2, 4])

    def test_map_multi(self) -> None:
        out = self.a.map_multi(lambda x: divmod(x, 3), 2, ElementType.INT64)
        self.assertEqual(out.shape, (3, 2))
        self.assertEqual(out.to_list(), [[0, 1], [-1, 1], [1, 1]])
        with self.assertRaises(ArityMismatchError):
            self.a.map_multi(lambda x: divmod(x, 3), 3)


if __name__ == "__main__":
    unittest.main()
