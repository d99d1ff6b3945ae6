"""
Concrete Array implementation (NumPy-backed buffer).

This module provides `Array`, the concrete implementation of the domain-level
`IArray` protocol. An `Array` is a fixed-shape, homogeneous N-dimensional
container whose elements occupy a contiguous run of a one-dimensional NumPy
buffer:

- ``buffer[offset : offset + numel]`` holds the elements,
- in row-major or column-major order (``layout``),
- and the buffer is either owned by this array (``base is None``) or
  borrowed from the owning array ``base``.

Design notes
------------
- The ownership relation is explicit: ``ownership`` is ``Ownership.OWNS`` or
  ``Ownership.BORROWS`` and a borrowed array always records its owner, so
  write-through is a checkable property rather than incidental aliasing.
- Shapes never change after construction; only element values mutate.
- Operations are grouped into mixins (memory, reduction, arithmetic, unary);
  this class holds storage, metadata validation and element indexing.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Sequence, Union

import numpy as np

from ...domain._array import IArray
from ...domain._element_type import ElementType, Layout, Ownership
from ...domain._errors import ViewMetadataError
from ...domain._missing import is_missing
from ._dtypes import to_numpy_dtype, to_python

from .mixins.memory import ArrayMixinMemory
from .mixins.reduction import ArrayMixinReduction
from .mixins.arithmetic import ArrayMixinArithmetic
from .mixins.unary import ArrayMixinUnary


class Array(
    ArrayMixinMemory,
    ArrayMixinReduction,
    ArrayMixinArithmetic,
    ArrayMixinUnary,
):
    """
    Concrete N-dimensional array over a one-dimensional NumPy buffer.

    Parameters
    ----------
    shape : tuple[int, ...]
        Non-negative dimension sizes.
    element_type : ElementType, optional
        Element type tag. Defaults to ``FLOAT64``.
    buffer : Optional[np.ndarray], optional
        Backing buffer. When omitted a zero-filled buffer of exactly ``numel``
        elements is allocated. Its dtype must match ``element_type``.
    offset : int, optional
        Buffer index of the first element. Defaults to 0.
    layout : Layout, optional
        Element order within the buffer. Defaults to ``ROW_MAJOR``.
    base : Optional[Array], optional
        Owner of ``buffer`` when this array is a view. Defaults to None
        (this array owns its buffer).

    Raises
    ------
    ViewMetadataError
        If the shape, offset or buffer are inconsistent.

    Notes
    -----
    Arrays are normally built with the factories (`zeros`, `full`,
    `from_numpy`, `from_list`) or the view constructors (`view`, `reshape`,
    `transpose`) rather than by passing ``buffer``/``base`` directly.
    """

    def __init__(
        self,
        shape: Sequence[int],
        element_type: ElementType = ElementType.FLOAT64,
        *,
        buffer: Optional[np.ndarray] = None,
        offset: int = 0,
        layout: Layout = Layout.ROW_MAJOR,
        base: Optional["Array"] = None,
    ) -> None:
        self._shape = tuple(int(d) for d in shape)
        if any(d < 0 for d in self._shape):
            raise ViewMetadataError(f"negative dimension in shape {self._shape}")
        if not isinstance(element_type, ElementType):
            raise TypeError(f"element_type must be an ElementType, got {element_type!r}")
        if not isinstance(layout, Layout):
            raise TypeError(f"layout must be a Layout, got {layout!r}")

        self._element_type = element_type
        self._layout = layout
        self._offset = int(offset)
        self._numel = self._numel_from_shape()

        dtype = to_numpy_dtype(element_type)
        if buffer is None:
            if base is not None:
                raise ViewMetadataError("a view requires the owner's buffer")
            buffer = np.zeros(self._numel, dtype=dtype)
        self._validate_buffer(buffer, dtype)

        if base is not None and base.buffer is not buffer:
            raise ViewMetadataError("a view must share its base array's buffer")

        self._buffer = buffer
        self._base = base

    def _numel_from_shape(self) -> int:
        n = 1
        for d in self._shape:
            n *= d
        return n

    def _validate_buffer(self, buffer: Any, dtype: np.dtype) -> None:
        if not isinstance(buffer, np.ndarray) or buffer.ndim != 1:
            raise ViewMetadataError("buffer must be a one-dimensional numpy.ndarray")
        if buffer.dtype != dtype:
            raise ViewMetadataError(
                f"buffer dtype {buffer.dtype} does not match element type "
                f"{self._element_type.value} ({dtype})"
            )
        if self._offset < 0 or self._offset + self._numel > buffer.size:
            raise ViewMetadataError(
                f"window [{self._offset}, {self._offset + self._numel}) does not fit "
                f"in a buffer of size {buffer.size}"
            )

    # ----------------------------
    # Metadata
    # ----------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def ndim(self) -> int:
        return len(self._shape)

    @property
    def element_type(self) -> ElementType:
        return self._element_type

    @property
    def dtype(self) -> np.dtype:
        """NumPy dtype of the backing buffer."""
        return self._buffer.dtype

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def buffer(self) -> np.ndarray:
        return self._buffer

    @property
    def base(self) -> Optional["Array"]:
        return self._base

    @property
    def ownership(self) -> Ownership:
        return Ownership.OWNS if self._base is None else Ownership.BORROWS

    @property
    def is_view(self) -> bool:
        return self._base is not None

    def numel(self) -> int:
        """
        Return the total number of elements in the array.

        Returns
        -------
        int
            Product of all dimensions in the array shape.
        """
        return self._numel

    # ----------------------------
    # Element access
    # ----------------------------
    def _position(self, index: Union[int, tuple]) -> int:
        """Map a multi-index to its buffer position."""
        if not isinstance(index, tuple):
            index = (index,)
        if len(index) != len(self._shape):
            raise IndexError(
                f"expected {len(self._shape)} indices for shape {self._shape}, "
                f"got {len(index)}"
            )

        dims, idx = self._shape, index
        if self._layout is Layout.COLUMN_MAJOR:
            dims = tuple(reversed(dims))
            idx = tuple(reversed(idx))

        pos = 0
        for i, d in zip(idx, dims):
            i = int(i)
            if i < 0:
                i += d
            if not 0 <= i < d:
                raise IndexError(f"index {index} out of range for shape {self._shape}")
            pos = pos * d + i
        return self._offset + pos

    def __getitem__(self, index: Union[int, tuple]) -> Any:
        return to_python(self._buffer[self._position(index)])

    def __setitem__(self, index: Union[int, tuple], value: Any) -> None:
        if is_missing(value) and self._element_type is not ElementType.GENERIC:
            raise TypeError("MISSING can only be stored in GENERIC arrays")
        self._buffer[self._position(index)] = value

    def __iter__(self) -> Iterator[Any]:
        if len(self._shape) != 1:
            raise TypeError(
                f"iteration is only defined for rank-1 arrays, got shape {self._shape}"
            )
        return iter(self.flat_view())

    def __len__(self) -> int:
        if not self._shape:
            raise TypeError("len() of a rank-0 array")
        return self._shape[0]

    def __repr__(self) -> str:
        return (
            f"Array(shape={self._shape}, element_type={self._element_type.value}, "
            f"layout={self._layout.value}, offset={self._offset}, "
            f"ownership={self.ownership.value})"
        )
