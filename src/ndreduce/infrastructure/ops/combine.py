"""
Elementwise combiners that materialize a new array.

`combine` zips two equal-shaped arrays through a binary operator and
`map_elements` pushes one array through a unary operator. Both resolve their
inputs into flat views (each input independently, aliasing or materialized),
allocate a fresh owned row-major result of the requested element type and
fill it in a single pass over the flat index range. The result never aliases
an input.

The arithmetic specializations (`add`, `subtract`, `multiply`, `divide`)
default to a ``FLOAT64`` result, so integer inputs divide exactly.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Iterable

from ...domain._array import IArray
from ...domain._element_type import DEFAULT_RESULT_TYPE, ElementType
from ...domain._errors import ArityMismatchError, ShapeMismatchError
from ..array._array import Array
from ..array._flat_view import resolve


def _check_same_shape(a: IArray, b: IArray) -> None:
    if tuple(a.shape) != tuple(b.shape):
        raise ShapeMismatchError(a.shape, b.shape)


def combine(
    op: Callable[[Any, Any], Any],
    a: IArray,
    b: IArray,
    element_type: ElementType = DEFAULT_RESULT_TYPE,
) -> Array:
    """
    Apply ``op`` elementwise to two arrays of identical shape.

    Parameters
    ----------
    op : Callable[[Any, Any], Any]
        Binary operator, called as ``op(a_i, b_i)`` in row-major order.
    a, b : IArray
        Operands. Their layouts need not agree.
    element_type : ElementType, optional
        Element type of the result. Defaults to ``FLOAT64``.

    Returns
    -------
    Array
        Fresh owned array with ``a.shape``.

    Raises
    ------
    ShapeMismatchError
        If ``a.shape != b.shape``. Checked before any element is read.
    """
    _check_same_shape(a, b)

    fa, n = resolve(a)
    fb, _ = resolve(b)
    out = Array(tuple(a.shape), element_type)
    fo, _ = resolve(out)

    for i in range(n):
        fo[i] = op(fa[i], fb[i])
    return out


def map_elements(
    op: Callable[[Any], Any],
    a: IArray,
    element_type: ElementType = DEFAULT_RESULT_TYPE,
) -> Array:
    """
    Apply ``op`` to every element of ``a``, producing a new array.

    Used for scalar broadcasts (``x -> x + k``), reciprocals and negation.
    """
    fa, n = resolve(a)
    out = Array(tuple(a.shape), element_type)
    fo, _ = resolve(out)

    for i in range(n):
        fo[i] = op(fa[i])
    return out


def map_multi(
    fn: Callable[[Any], Iterable[Any]],
    a: IArray,
    n_values: int,
    element_type: ElementType = DEFAULT_RESULT_TYPE,
) -> Array:
    """
    Map every element to ``n_values`` values, stored along a new last axis.

    Parameters
    ----------
    fn : Callable[[Any], Iterable[Any]]
        Called once per element; must return exactly ``n_values`` values.
    a : IArray
        Input array.
    n_values : int
        Number of values produced per element.
    element_type : ElementType, optional
        Element type of the result. Defaults to ``FLOAT64``.

    Returns
    -------
    Array
        Fresh owned array of shape ``a.shape + (n_values,)``.

    Raises
    ------
    ArityMismatchError
        As soon as one call of ``fn`` returns a different number of values.
    """
    if n_values < 0:
        raise ValueError(f"n_values must be non-negative, got {n_values}")

    fa, n = resolve(a)
    out = Array(tuple(a.shape) + (int(n_values),), element_type)
    fo, _ = resolve(out)

    for i in range(n):
        values = tuple(fn(fa[i]))
        if len(values) != n_values:
            raise ArityMismatchError(n_values, len(values), i)
        base = i * n_values
        for j, v in enumerate(values):
            fo[base + j] = v
    return out


def add(a: IArray, b: IArray, element_type: ElementType = DEFAULT_RESULT_TYPE) -> Array:
    return combine(operator.add, a, b, element_type)


def subtract(
    a: IArray, b: IArray, element_type: ElementType = DEFAULT_RESULT_TYPE
) -> Array:
    return combine(operator.sub, a, b, element_type)


def multiply(
    a: IArray, b: IArray, element_type: ElementType = DEFAULT_RESULT_TYPE
) -> Array:
    return combine(operator.mul, a, b, element_type)


def divide(
    a: IArray, b: IArray, element_type: ElementType = DEFAULT_RESULT_TYPE
) -> Array:
    return combine(operator.truediv, a, b, element_type)


def reciprocal(
    a: IArray, k: Any = 1, element_type: ElementType = DEFAULT_RESULT_TYPE
) -> Array:
    """``k / x`` for every element ``x`` (``1 / x`` by default)."""
    return map_elements(lambda x: k / x, a, element_type)


def negate(
    a: IArray, k: Any = None, element_type: ElementType = DEFAULT_RESULT_TYPE
) -> Array:
    """``-x`` for every element, or ``k - x`` when ``k`` is given."""
    if k is None:
        return map_elements(operator.neg, a, element_type)
    return map_elements(lambda x: k - x, a, element_type)
