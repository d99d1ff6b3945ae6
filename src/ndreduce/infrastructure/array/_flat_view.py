"""
Flat views: contiguous row-major windows over a backing buffer.

A :class:`FlatView` is the handle every engine in ndreduce walks. It is a
``(buffer, offset, length)`` triple plus an explicit ownership tag:

- ``Ownership.BORROWS``: the view aliases the buffer of ``source``; writes
  through the view are visible through the source array and through any
  other view over the same buffer region.
- ``Ownership.OWNS``: the view holds a freshly materialized buffer; writes do
  not propagate anywhere.

Reading a flat view from index 0 to ``len(view) - 1`` always yields the
source array's elements in row-major order, regardless of which resolution
path produced it.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Tuple

import numpy as np

from ...domain._array import IArray
from ...domain._element_type import Ownership
from ...domain._errors import ViewMetadataError
from ._dtypes import to_python


class FlatView:
    """
    Read/write handle over a contiguous run of a one-dimensional buffer.

    Parameters
    ----------
    buffer : numpy.ndarray
        One-dimensional backing buffer.
    offset : int
        Buffer index of logical element 0.
    length : int
        Number of logical elements.
    ownership : Ownership
        Whether the view owns ``buffer`` or borrows it from ``source``.
    source : Optional[IArray]
        The array whose buffer is borrowed. Required for borrowing views and
        forbidden for owning ones.

    Raises
    ------
    ViewMetadataError
        If the window does not fit in the buffer or the ownership tag and
        ``source`` disagree.
    """

    __slots__ = ("_buffer", "_offset", "_length", "_ownership", "_source")

    def __init__(
        self,
        buffer: np.ndarray,
        offset: int,
        length: int,
        *,
        ownership: Ownership,
        source: Optional[IArray] = None,
    ) -> None:
        if buffer.ndim != 1:
            raise ViewMetadataError(
                f"FlatView buffer must be one-dimensional, got ndim={buffer.ndim}"
            )
        if offset < 0 or length < 0 or offset + length > buffer.size:
            raise ViewMetadataError(
                f"FlatView window [{offset}, {offset + length}) does not fit "
                f"in a buffer of size {buffer.size}"
            )
        if ownership is Ownership.BORROWS and source is None:
            raise ViewMetadataError("a borrowing FlatView requires a source array")
        if ownership is Ownership.OWNS and source is not None:
            raise ViewMetadataError("an owning FlatView cannot have a source array")

        self._buffer = buffer
        self._offset = int(offset)
        self._length = int(length)
        self._ownership = ownership
        self._source = source

    @property
    def buffer(self) -> np.ndarray:
        return self._buffer

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def length(self) -> int:
        return self._length

    @property
    def ownership(self) -> Ownership:
        return self._ownership

    @property
    def source(self) -> Optional[IArray]:
        return self._source

    @property
    def is_aliasing(self) -> bool:
        """True if writes through this view reach the source array."""
        return self._ownership is Ownership.BORROWS

    def __len__(self) -> int:
        return self._length

    def _position(self, i: int) -> int:
        if i < 0:
            i += self._length
        if not 0 <= i < self._length:
            raise IndexError(
                f"FlatView index {i} out of range for length {self._length}"
            )
        return self._offset + i

    def __getitem__(self, i: int) -> Any:
        return to_python(self._buffer[self._position(i)])

    def __setitem__(self, i: int, value: Any) -> None:
        self._buffer[self._position(i)] = value

    def __iter__(self) -> Iterator[Any]:
        for i in range(self._length):
            yield to_python(self._buffer[self._offset + i])

    def window(self) -> np.ndarray:
        """Return the viewed buffer slice (a NumPy view, no copy)."""
        return self._buffer[self._offset : self._offset + self._length]

    def to_list(self) -> list:
        """Return the viewed elements as a Python list."""
        return self.window().tolist()

    def __repr__(self) -> str:
        return (
            f"FlatView(offset={self._offset}, length={self._length}, "
            f"ownership={self._ownership.value})"
        )


def resolve(array: IArray) -> Tuple[FlatView, int]:
    """
    Resolve ``array`` into a row-major flat view.

    When the array is already a contiguous row-major run of its buffer the
    returned view borrows that buffer (no allocation). Otherwise the elements
    are copied, in row-major order, into a new buffer owned by the view.

    Parameters
    ----------
    array : IArray
        Array of any rank.

    Returns
    -------
    tuple[FlatView, int]
        The flat view and its length (the array's total element count).
    """
    fv = array.flat_view()
    return fv, len(fv)
