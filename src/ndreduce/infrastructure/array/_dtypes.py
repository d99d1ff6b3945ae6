"""
Mapping between ndreduce element types and NumPy dtypes.

The domain layer describes element types with :class:`ElementType` and never
imports NumPy; this module is the single place where those tags are turned
into concrete buffer dtypes (and back).
"""

from typing import Any

import numpy as np

from ...domain._element_type import ElementType

_NUMPY_DTYPES = {
    ElementType.INT64: np.dtype(np.int64),
    ElementType.FLOAT64: np.dtype(np.float64),
    ElementType.GENERIC: np.dtype(object),
}


def to_numpy_dtype(element_type: ElementType) -> np.dtype:
    """
    Return the buffer dtype used for ``element_type``.

    Raises
    ------
    TypeError
        If ``element_type`` is not an :class:`ElementType`.
    """
    try:
        return _NUMPY_DTYPES[element_type]
    except KeyError as e:
        raise TypeError(f"Unsupported element type: {element_type!r}") from e


def element_type_of(dtype: Any) -> ElementType:
    """
    Infer the element type for a NumPy dtype.

    Integer and boolean dtypes map to ``INT64``, floating dtypes to
    ``FLOAT64``, everything else (objects, complex, strings) to ``GENERIC``.
    """
    kind = np.dtype(dtype).kind
    if kind in "iub":
        return ElementType.INT64
    if kind == "f":
        return ElementType.FLOAT64
    return ElementType.GENERIC


def to_python(value: Any) -> Any:
    """Convert a NumPy scalar read from a buffer into the matching Python scalar."""
    if isinstance(value, np.generic):
        return value.item()
    return value
