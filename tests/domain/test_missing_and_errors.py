import pickle
import unittest

from src.ndreduce.domain._missing import MISSING, Missing, is_missing
from src.ndreduce.domain._element_type import ElementType, Layout, Ownership
from src.ndreduce.domain._errors import (
    ArityMismatchError,
    EmptySequenceError,
    LengthMismatchError,
    NDReduceError,
    ShapeMismatchError,
    ViewMetadataError,
)


class TestMissingMarker(unittest.TestCase):
    def test_singleton(self) -> None:
        self.assertIs(Missing(), MISSING)
        self.assertIs(pickle.loads(pickle.dumps(MISSING)), MISSING)

    def test_does_not_collide_with_falsy_values(self) -> None:
        for v in (None, 0, 0.0, "", float("nan"), [], False):
            self.assertFalse(is_missing(v), v)
            self.assertNotEqual(MISSING, v)
        self.assertTrue(is_missing(MISSING))

    def test_repr(self) -> None:
        self.assertEqual(repr(MISSING), "MISSING")


class TestEnums(unittest.TestCase):
    def test_layout_flipped(self) -> None:
        self.assertIs(Layout.ROW_MAJOR.flipped(), Layout.COLUMN_MAJOR)
        self.assertIs(Layout.COLUMN_MAJOR.flipped(), Layout.ROW_MAJOR)

    def test_values(self) -> None:
        self.assertEqual(ElementType.FLOAT64.value, "float64")
        self.assertEqual(Ownership.BORROWS.value, "borrows")


class TestErrors(unittest.TestCase):
    def test_all_errors_share_base_and_value_error(self) -> None:
        errors = [
            ShapeMismatchError((2,), (3,)),
            LengthMismatchError((1, 2)),
            ArityMismatchError(2, 3, 0),
            EmptySequenceError("total"),
            ViewMetadataError("bad window"),
        ]
        for err in errors:
            self.assertIsInstance(err, NDReduceError)
            self.assertIsInstance(err, ValueError)

    def test_shape_mismatch_message_and_attributes(self) -> None:
        err = ShapeMismatchError([2, 3], (3, 2), "combine")
        self.assertEqual(err.shape_a, (2, 3))
        self.assertEqual(err.shape_b, (3, 2))
        self.assertIn("(2, 3) vs (3, 2)", str(err))
        self.assertIn("combine", str(err))

    def test_length_mismatch_attributes(self) -> None:
        err = LengthMismatchError([3, 4, 3])
        self.assertEqual(err.lengths, (3, 4, 3))

    def test_arity_mismatch_attributes(self) -> None:
        err = ArityMismatchError(expected=2, got=1, index=5)
        self.assertEqual((err.expected, err.got, err.index), (2, 1, 5))
        self.assertIn("flat index 5", str(err))

    def test_empty_sequence_names_operation(self) -> None:
        err = EmptySequenceError("maximum")
        self.assertEqual(err.op, "maximum")
        self.assertIn("maximum", str(err))


if __name__ == "__main__":
    unittest.main()
