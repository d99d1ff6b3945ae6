"""
Array interface definitions.

This module defines the domain-level interface for array-like objects using
structural typing. The interface captures the properties every engine in the
library relies on: shape and element metadata, the backing-buffer window
(offset and layout), the ownership relation, and flat-view resolution.

Notes
-----
The protocol does not import NumPy. ``buffer`` is typed loosely; the
infrastructure layer backs it with a one-dimensional ``numpy.ndarray``.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Union, runtime_checkable

from ._element_type import ElementType, Layout, Ownership

Number = Union[int, float]


@runtime_checkable
class IArray(Protocol):
    """
    Array interface.

    An ``IArray`` is a fixed-shape, homogeneous N-dimensional container whose
    elements occupy a contiguous run of a backing buffer, starting at
    ``offset``, in the order given by ``layout``.
    """

    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the shape of the array.

        Returns
        -------
        tuple[int, ...]
            Non-negative dimension sizes.
        """
        ...

    @property
    def ndim(self) -> int:
        """Return the rank of the array."""
        ...

    @property
    def element_type(self) -> ElementType:
        """Return the element type tag."""
        ...

    @property
    def layout(self) -> Layout:
        """Return the order in which elements occupy the backing buffer."""
        ...

    @property
    def offset(self) -> int:
        """Return the buffer index of the first element."""
        ...

    @property
    def buffer(self) -> Any:
        """
        Return the backing buffer.

        For views this is the owner's buffer, shared rather than copied.
        """
        ...

    @property
    def base(self) -> Optional["IArray"]:
        """
        Return the array that owns the buffer, or None if this array owns it.
        """
        ...

    @property
    def ownership(self) -> Ownership:
        """Return ``Ownership.OWNS`` or ``Ownership.BORROWS``."""
        ...

    def numel(self) -> int:
        """Return the total number of elements."""
        ...

    def flat_view(self) -> Any:
        """
        Resolve the array into a contiguous row-major flat view.

        Returns
        -------
        FlatView
            A view that borrows this array's buffer when it is already
            row-major contiguous, or owns a fresh copy otherwise.
        """
        ...

    def to_numpy(self) -> Any:
        """Return a copy of the elements as a backend-native array."""
        ...

    def to_list(self) -> list:
        """Return the elements as nested Python lists in row-major order."""
        ...
