"""
Array memory / construction mixin.

This module defines `ArrayMixinMemory`, a focused mixin that provides factory
constructors (zeros/full/from_numpy/from_list), view construction
(view/reshape/transpose), flat-view resolution and host interop
(to_numpy/to_list) for the concrete `Array`.

Design intent
-------------
- Keep buffer allocation and aliasing decisions in one place.
- Views never copy: they share the owner's buffer and record the owner in
  ``base``. Copies happen only where the row-major contract cannot be met
  by aliasing (see `flat_view`).
- New arrays are constructed via ``cls`` / ``self.__class__`` so this module
  does not import the concrete `Array`.

Notes
-----
`flat_view` is declared here and implemented per memory layout in
``_array_flat_view`` through the layout control-path dispatcher.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, Type
from abc import ABC

import numpy as np

from .....domain._array import IArray
from .....domain._element_type import ElementType, Layout
from .....domain._missing import is_missing
from ..._dtypes import element_type_of, to_numpy_dtype


def _infer_element_type(values: Sequence[Any]) -> ElementType:
    """Pick the narrowest element type able to hold every value."""
    kind = ElementType.INT64
    for v in values:
        if isinstance(v, (int, np.integer)):
            continue
        if isinstance(v, (float, np.floating)):
            kind = ElementType.FLOAT64
            continue
        return ElementType.GENERIC
    return kind


class ArrayMixinMemory(ABC):
    """
    Mixin that implements array construction, views and memory helpers.

    This mixin is intended to be inherited by the concrete `Array` class. It
    provides:

    - Factory constructors: `zeros`, `full`, `from_numpy`, `from_list`
    - View constructors: `view`, `reshape`, `transpose`
    - Flat-view resolution: `flat_view` (layout-dispatched)
    - Copy and fill utilities: `clone`, `fill`
    - Host interop: `to_numpy`, `to_list`
    """

    # ----------------------------
    # Factories
    # ----------------------------
    @classmethod
    def zeros(
        cls: Type[IArray],
        shape: tuple[int, ...],
        element_type: ElementType = ElementType.FLOAT64,
    ) -> "IArray":
        """
        Create an owned, row-major array filled with zeros.

        Parameters
        ----------
        shape : tuple[int, ...]
            Shape of the output array.
        element_type : ElementType, optional
            Element type. Defaults to ``FLOAT64``.
        """
        return cls(shape, element_type)

    @classmethod
    def full(
        cls: Type[IArray],
        shape: tuple[int, ...],
        value: Any,
        element_type: Optional[ElementType] = None,
    ) -> "IArray":
        """
        Create an owned, row-major array filled with ``value``.

        If ``element_type`` is omitted it is inferred from ``value``.
        """
        if element_type is None:
            element_type = _infer_element_type([value])
        out = cls(shape, element_type)
        out.fill(value)
        return out

    @classmethod
    def from_numpy(
        cls: Type[IArray],
        arr: Any,
        element_type: Optional[ElementType] = None,
    ) -> "IArray":
        """
        Create an owned array holding a copy of ``arr``.

        Parameters
        ----------
        arr : array-like
            Source data. Fortran-ordered (and not C-ordered) input keeps its
            memory order: the result has ``Layout.COLUMN_MAJOR``.
        element_type : Optional[ElementType]
            Element type of the result. Inferred from ``arr.dtype`` if omitted.

        Notes
        -----
        Column-major results resolve to materialized flat views; they are the
        common way non-row-major arrays enter the library.
        """
        src = np.asarray(arr)
        if element_type is None:
            element_type = element_type_of(src.dtype)
        dtype = to_numpy_dtype(element_type)

        if src.ndim > 1 and src.flags.f_contiguous and not src.flags.c_contiguous:
            layout = Layout.COLUMN_MAJOR
            buffer = np.array(src.ravel(order="F"), dtype=dtype)
        else:
            layout = Layout.ROW_MAJOR
            buffer = np.array(src.ravel(order="C"), dtype=dtype)

        return cls(
            tuple(int(d) for d in src.shape),
            element_type,
            buffer=buffer,
            layout=layout,
        )

    @classmethod
    def from_list(
        cls: Type[IArray],
        values: Sequence[Any],
        element_type: Optional[ElementType] = None,
    ) -> "IArray":
        """
        Create an owned, row-major array from (nested) Python lists.

        ``MISSING`` entries are allowed; they force ``ElementType.GENERIC``
        when the element type is inferred, and are rejected for numeric
        element types.

        Raises
        ------
        TypeError
            If ``MISSING`` is stored into a numeric element type.
        ValueError
            If the nested lists are ragged.
        """
        boxed = np.array(values, dtype=object)
        flat = boxed.ravel().tolist()
        # ragged input collapses into an object array of sub-lists
        if any(isinstance(v, (list, tuple)) for v in flat):
            raise ValueError(f"ragged nested lists cannot form an array: {values!r}")
        if element_type is None:
            element_type = _infer_element_type(flat)
        if element_type is not ElementType.GENERIC and any(is_missing(v) for v in flat):
            raise TypeError(
                f"MISSING can only be stored in GENERIC arrays, not {element_type.value}"
            )
        buffer = np.empty(len(flat), dtype=to_numpy_dtype(element_type))
        buffer[:] = flat
        return cls(tuple(int(d) for d in boxed.shape), element_type, buffer=buffer)

    # ----------------------------
    # Views
    # ----------------------------
    def flat_view(self: IArray):
        """
        Resolve this array into a contiguous row-major flat view.

        Returns
        -------
        FlatView
            - Borrowing view over this array's buffer (no allocation) when the
              array is row-major compatible.
            - Owning view over a fresh row-major copy otherwise.

        Notes
        -----
        Dispatched on ``self.layout``; see ``_array_flat_view``.
        """
        ...

    def view(self: IArray, offset: int, shape: tuple[int, ...]) -> "IArray":
        """
        Return a borrowed window over this array's buffer.

        Parameters
        ----------
        offset : int
            Number of buffer slots to skip, relative to this array's offset.
        shape : tuple[int, ...]
            Shape of the window. Its elements occupy the next ``prod(shape)``
            buffer slots, in this array's layout.

        Raises
        ------
        ViewMetadataError
            If the window does not fit in the buffer.
        """
        owner = self.base if self.base is not None else self
        return self.__class__(
            tuple(shape),
            self.element_type,
            buffer=self.buffer,
            offset=self.offset + int(offset),
            layout=self.layout,
            base=owner,
        )

    def reshape(self: IArray, shape: tuple[int, ...]) -> "IArray":
        """
        Reinterpret the row-major element sequence with a new shape.

        Returns a borrowed view when this array resolves by aliasing, and an
        owned array over the materialized copy otherwise.

        Raises
        ------
        ValueError
            If ``shape`` holds a different number of elements.
        """
        shape = tuple(int(d) for d in shape)
        n = 1
        for d in shape:
            n *= d
        if n != self.numel():
            raise ValueError(
                f"cannot reshape array of {self.numel()} elements into shape {shape}"
            )

        fv = self.flat_view()
        if fv.is_aliasing:
            # the borrowed run is already in row-major order
            owner = self.base if self.base is not None else self
            return self.__class__(
                shape,
                self.element_type,
                buffer=self.buffer,
                offset=self.offset,
                layout=Layout.ROW_MAJOR,
                base=owner,
            )
        return self.__class__(shape, self.element_type, buffer=fv.buffer)

    def transpose(self: IArray) -> "IArray":
        """
        Return a borrowed view with the axes reversed.

        Reversing the axes of a row-major block gives a column-major block
        over the same buffer slots (and vice versa), so no data moves.
        """
        owner = self.base if self.base is not None else self
        return self.__class__(
            tuple(reversed(self.shape)),
            self.element_type,
            buffer=self.buffer,
            offset=self.offset,
            layout=self.layout.flipped(),
            base=owner,
        )

    @property
    def T(self) -> "IArray":
        """Alias of :meth:`transpose`."""
        return self.transpose()

    # ----------------------------
    # Copy / fill / interop
    # ----------------------------
    def clone(self: IArray) -> "IArray":
        """Return an owned, row-major deep copy."""
        fv = self.flat_view()
        return self.__class__(
            self.shape, self.element_type, buffer=np.array(fv.window(), copy=True)
        )

    def fill(self: IArray, value: Any) -> None:
        """
        Set every element to ``value`` in place.

        Writes through views reach the owning array.
        """
        if is_missing(value) and self.element_type is not ElementType.GENERIC:
            raise TypeError("MISSING can only be stored in GENERIC arrays")
        self.buffer[self.offset : self.offset + self.numel()] = value

    def _logical_numpy(self: IArray) -> np.ndarray:
        window = self.buffer[self.offset : self.offset + self.numel()]
        order = "C" if self.layout is Layout.ROW_MAJOR else "F"
        return window.reshape(self.shape, order=order)

    def to_numpy(self: IArray) -> np.ndarray:
        """Return a copy of the elements as an ndarray of the logical shape."""
        return np.array(self._logical_numpy(), copy=True)

    def to_list(self: IArray) -> Any:
        """Return the elements as nested Python lists (row-major)."""
        return self._logical_numpy().tolist()
