"""
Structural and precondition exceptions for ndreduce.

This module defines the error taxonomy raised by the array core. Every error
is deterministic: an operation that fails a precondition fails identically
on retry, so callers are expected to fix the inputs rather than recover.

All errors derive from :class:`NDReduceError` and from ``ValueError`` so that
generic callers catching ``ValueError`` keep working.
"""


class NDReduceError(Exception):
    """Base class for all ndreduce errors."""


class ShapeMismatchError(NDReduceError, ValueError):
    """
    Raised when an elementwise operation receives arrays of different shape.

    Attributes
    ----------
    shape_a : tuple[int, ...]
        Shape of the first operand.
    shape_b : tuple[int, ...]
        Shape of the second operand.
    """

    def __init__(self, shape_a: tuple, shape_b: tuple, message: str = "") -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        shape_a : tuple[int, ...]
            Shape of the first operand.
        shape_b : tuple[int, ...]
            Shape of the second operand (or the required shape).
        message : str, optional
            Extra context appended to the formatted message.
        """
        text = f"Shape mismatch: {tuple(shape_a)} vs {tuple(shape_b)}"
        if message:
            text = f"{text} ({message})"
        super().__init__(text)
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)


class LengthMismatchError(NDReduceError, ValueError):
    """
    Raised when parallel sequences passed to a zip-style operation differ in
    length.

    Attributes
    ----------
    lengths : tuple[int, ...]
        Length of every input sequence, in argument order.
    """

    def __init__(self, lengths) -> None:
        self.lengths = tuple(int(n) for n in lengths)
        super().__init__(
            f"Length mismatch: all sequences must have the same length, got {self.lengths}"
        )


class ArityMismatchError(NDReduceError, ValueError):
    """
    Raised when a multi-value mapping function returns the wrong number of
    values for an element.

    Attributes
    ----------
    expected : int
        Number of values the mapping was declared to produce.
    got : int
        Number of values actually produced.
    index : int
        Flat (row-major) index of the element that produced the bad result.
    """

    def __init__(self, expected: int, got: int, index: int) -> None:
        super().__init__(
            f"Arity mismatch at flat index {index}: expected {expected} values, got {got}"
        )
        self.expected = expected
        self.got = got
        self.index = index


class EmptySequenceError(NDReduceError, ValueError):
    """
    Raised when a reduction has no elements to fold and no initial value.

    Attributes
    ----------
    op : str
        Name of the reduction that was attempted.
    """

    def __init__(self, op: str = "reduce") -> None:
        super().__init__(
            f"{op} over an empty sequence has no defined result; "
            "supply an initial value or use ignore_missing=True"
        )
        self.op = op


class ViewMetadataError(NDReduceError, ValueError):
    """
    Raised when array or view metadata (shape, offset, buffer size) is
    malformed.

    This signals a programming error in the caller constructing the view, not
    a condition the library expects to be recovered from at runtime.
    """
