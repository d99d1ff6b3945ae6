"""
Generic fold over flat views, with optional key extraction and
missing-tolerant combining.

Every reduction in ndreduce is a left fold over the row-major flat view of
an array (see :func:`~ndreduce.infrastructure.array._flat_view.resolve`).
The specializations in this module (`maximum`, `minimum`, `total`,
`product`, `count`, `mean`, `extent`, `abs_extent`) only choose the
combining operator, the key function and the seed.

Missing-tolerant folds
----------------------
With ``ignore_missing=True`` the combining step is wrapped by
:func:`skip_missing`, which treats ``MISSING`` as an identity element:

- both operands present: ``op(acc, value)``
- exactly one present: that operand (``op`` is not called)
- neither present: ``MISSING``

so an empty or all-missing input yields ``MISSING`` instead of failing.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, NamedTuple, Optional

from ...domain._array import IArray
from ...domain._errors import EmptySequenceError
from ...domain._missing import MISSING, is_missing
from ..array._flat_view import resolve

BinaryOp = Callable[[Any, Any], Any]
KeyFn = Optional[Callable[[Any], Any]]


class _NoInit:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<no init>"


NO_INIT = _NoInit()
"""Default for ``init``: the fold is seeded with its first element."""


class Extent(NamedTuple):
    """Running ``(lo, hi)`` accumulator of :func:`extent`."""

    lo: Any
    hi: Any


def skip_missing(op: BinaryOp) -> BinaryOp:
    """
    Wrap ``op`` so that ``MISSING`` acts as its identity element.

    The wrapped operator never sees ``MISSING``; ``op`` only needs to handle
    present values.
    """

    def step(acc: Any, value: Any) -> Any:
        if is_missing(acc):
            return value
        if is_missing(value):
            return acc
        return op(acc, value)

    return step


def _reduce(
    op: BinaryOp,
    array: IArray,
    key: KeyFn,
    ignore_missing: bool,
    init: Any,
    name: str,
) -> Any:
    fv, n = resolve(array)

    if ignore_missing:
        step = skip_missing(op)
        acc = MISSING if init is NO_INIT else init
        for i in range(n):
            e = fv[i]
            if key is not None and not is_missing(e):
                e = key(e)
            acc = step(acc, e)
        return acc

    if init is NO_INIT:
        if n == 0:
            raise EmptySequenceError(name)
        acc = fv[0] if key is None else key(fv[0])
        start = 1
    else:
        acc = init
        start = 0

    for i in range(start, n):
        e = fv[i]
        acc = op(acc, e if key is None else key(e))
    return acc


def reduce(
    op: BinaryOp,
    array: IArray,
    key: KeyFn = None,
    *,
    ignore_missing: bool = False,
    init: Any = NO_INIT,
) -> Any:
    """
    Fold ``op`` left to right over the elements of ``array``.

    Parameters
    ----------
    op : Callable[[Any, Any], Any]
        Binary combining operator.
    array : IArray
        Array of any rank; folded in row-major order.
    key : Optional[Callable[[Any], Any]]
        Applied to every (present) element before it is combined.
    ignore_missing : bool, optional
        Treat ``MISSING`` elements as the identity of ``op``. An empty or
        all-missing input then yields ``MISSING`` (or ``init``).
    init : Any, optional
        Seed of the fold. When omitted the first element is the seed.

    Returns
    -------
    Any
        The folded value.

    Raises
    ------
    EmptySequenceError
        If ``array`` is empty, ``init`` is omitted and ``ignore_missing`` is
        False.
    """
    return _reduce(op, array, key, ignore_missing, init, "reduce")


def maximum(array: IArray, key: KeyFn = None, *, ignore_missing: bool = False) -> Any:
    """Largest element (or largest ``key(element)``)."""
    return _reduce(max, array, key, ignore_missing, NO_INIT, "maximum")


def minimum(array: IArray, key: KeyFn = None, *, ignore_missing: bool = False) -> Any:
    """Smallest element (or smallest ``key(element)``)."""
    return _reduce(min, array, key, ignore_missing, NO_INIT, "minimum")


def total(array: IArray, key: KeyFn = None, *, ignore_missing: bool = False) -> Any:
    """Sum of the elements."""
    return _reduce(operator.add, array, key, ignore_missing, NO_INIT, "total")


def product(array: IArray, key: KeyFn = None, *, ignore_missing: bool = False) -> Any:
    """Product of the elements."""
    return _reduce(operator.mul, array, key, ignore_missing, NO_INIT, "product")


def count(
    predicate: Callable[[Any], bool],
    array: IArray,
    *,
    ignore_missing: bool = False,
) -> int:
    """
    Number of elements for which ``predicate`` holds.

    Folds ``+`` over ``1``/``0`` from a seed of ``0``, so an empty array
    counts as ``0``. With ``ignore_missing`` the predicate is only applied to
    present elements.
    """
    return _reduce(
        operator.add,
        array,
        lambda e: 1 if predicate(e) else 0,
        ignore_missing,
        0,
        "count",
    )


def mean(array: IArray, *, ignore_missing: bool = False) -> Any:
    """
    Arithmetic mean.

    The divisor is ``numel`` or, with ``ignore_missing``, the number of
    present elements. All-missing input yields ``MISSING``.

    Raises
    ------
    EmptySequenceError
        If ``array`` is empty and ``ignore_missing`` is False.
    """
    if not ignore_missing:
        s = _reduce(operator.add, array, None, False, NO_INIT, "mean")
        return s / array.numel()

    s = _reduce(operator.add, array, None, True, NO_INIT, "mean")
    if is_missing(s):
        return MISSING
    return s / count(lambda e: True, array, ignore_missing=True)


def _merge_extent(acc: Extent, value: Extent) -> Extent:
    lo = value.lo if value.lo < acc.lo else acc.lo
    hi = value.hi if value.hi > acc.hi else acc.hi
    return Extent(lo, hi)


def extent(array: IArray, key: KeyFn = None, *, ignore_missing: bool = False) -> Any:
    """
    Smallest and largest element in one pass.

    Every element is lifted to the pair ``Extent(v, v)``, so the accumulator
    is a pair from the first element on and a single element yields
    ``Extent(x, x)``.

    Returns
    -------
    Extent
        ``(lo, hi)``; ``MISSING`` for an all-missing input under
        ``ignore_missing``.

    Raises
    ------
    EmptySequenceError
        If ``array`` is empty and ``ignore_missing`` is False.
    """

    def lift(e: Any) -> Extent:
        v = e if key is None else key(e)
        return Extent(v, v)

    return _reduce(_merge_extent, array, lift, ignore_missing, NO_INIT, "extent")


def abs_extent(array: IArray, *, ignore_missing: bool = False) -> Any:
    """:func:`extent` of the absolute values."""
    return extent(array, abs, ignore_missing=ignore_missing)
