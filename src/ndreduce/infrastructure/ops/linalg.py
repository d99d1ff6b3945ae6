"""
Vector products over rank-1 arrays.

These helpers index their operands directly rather than going through flat
views; they are leaf utilities of the convenience layer.
"""

from __future__ import annotations

from typing import Any

from ...domain._array import IArray
from ...domain._element_type import DEFAULT_RESULT_TYPE, ElementType
from ...domain._errors import LengthMismatchError, ShapeMismatchError
from ..array._array import Array


def _require_vector(a: IArray) -> int:
    if a.ndim != 1:
        raise ShapeMismatchError(a.shape, (a.numel(),), "expected a rank-1 array")
    return a.shape[0]


def dot(a: IArray, b: IArray) -> Any:
    """
    Inner product of two equal-length vectors.

    Returns ``0`` for two empty vectors.

    Raises
    ------
    ShapeMismatchError
        If either operand is not rank-1.
    LengthMismatchError
        If the lengths differ.
    """
    n = _require_vector(a)
    m = _require_vector(b)
    if n != m:
        raise LengthMismatchError((n, m))

    s = 0
    for i in range(n):
        s += a[i] * b[i]
    return s


def outer(
    a: IArray, b: IArray, element_type: ElementType = DEFAULT_RESULT_TYPE
) -> Array:
    """
    Outer product ``out[i, j] = a[i] * b[j]`` of two vectors.

    Raises
    ------
    ShapeMismatchError
        If either operand is not rank-1.
    """
    n = _require_vector(a)
    m = _require_vector(b)

    out = Array((n, m), element_type)
    for i in range(n):
        ai = a[i]
        for j in range(m):
            out[i, j] = ai * b[j]
    return out
