"""
Element-type, memory-layout and ownership descriptors.

This module defines the small enumerations shared by the domain and
infrastructure layers. They intentionally avoid importing NumPy: the mapping
from :class:`ElementType` to concrete NumPy dtypes lives in the
infrastructure layer.
"""

from enum import Enum


class ElementType(Enum):
    """
    Enumeration of supported array element types.

    Attributes
    ----------
    INT64 : ElementType
        Signed 64-bit integers.
    FLOAT64 : ElementType
        IEEE double-precision floats.
    GENERIC : ElementType
        Arbitrary Python objects. This is the only element type that may
        hold the missing marker.
    """

    INT64 = "int64"
    FLOAT64 = "float64"
    GENERIC = "generic"


class Layout(Enum):
    """
    Order in which an array's logical elements occupy its backing buffer.

    Attributes
    ----------
    ROW_MAJOR : Layout
        The last axis varies fastest (C order).
    COLUMN_MAJOR : Layout
        The first axis varies fastest (Fortran order). Produced by
        Fortran-ordered input and by ``transpose()`` views.
    """

    ROW_MAJOR = "row_major"
    COLUMN_MAJOR = "column_major"

    def flipped(self) -> "Layout":
        """Return the opposite layout."""
        if self is Layout.ROW_MAJOR:
            return Layout.COLUMN_MAJOR
        return Layout.ROW_MAJOR


class Ownership(Enum):
    """
    Ownership tag carried by arrays and flat views.

    Attributes
    ----------
    OWNS : Ownership
        The holder allocated the buffer and is its only owner.
    BORROWS : Ownership
        The holder references a buffer owned by another array; writes through
        the holder are visible through the owner.
    """

    OWNS = "owns"
    BORROWS = "borrows"


DEFAULT_RESULT_TYPE = ElementType.FLOAT64
"""Element type of arrays produced by combiners and maps unless overridden."""
