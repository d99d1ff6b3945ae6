"""
Reduction mixin exposing the fold and extrema engines as Array methods.

This module declares :class:`ArrayMixinReduction`. Every method is a thin
call site of :mod:`ndreduce.infrastructure.ops.reduce` or
:mod:`ndreduce.infrastructure.ops.extrema`; no numerical logic lives here.

All reductions run over the row-major flat view of the array, so they behave
identically for owned arrays, borrowed windows and transposed views.
"""

from __future__ import annotations

from typing import Any, Callable, Optional
from abc import ABC

from .....domain._array import IArray

KeyFn = Optional[Callable[[Any], Any]]


class ArrayMixinReduction(ABC):
    """
    Mixin defining whole-array reductions.

    Notes
    -----
    - ``ignore_missing=True`` treats ``MISSING`` as the identity element of
      the fold; an all-missing array then reduces to ``MISSING``.
    - Without it, reducing an empty array raises ``EmptySequenceError``
      (``count`` excepted, which is ``0``).
    """

    def reduce(
        self: IArray,
        op: Callable[[Any, Any], Any],
        key: KeyFn = None,
        *,
        ignore_missing: bool = False,
        **kwargs: Any,
    ) -> Any:
        """
        Fold ``op`` over the elements in row-major order.

        Accepts the ``init`` keyword of
        :func:`ndreduce.infrastructure.ops.reduce.reduce`.
        """
        from ....ops.reduce import reduce as _reduce

        return _reduce(op, self, key, ignore_missing=ignore_missing, **kwargs)

    def sum(self: IArray, key: KeyFn = None, *, ignore_missing: bool = False) -> Any:
        """Sum of all elements."""
        from ....ops.reduce import total

        return total(self, key, ignore_missing=ignore_missing)

    def prod(self: IArray, key: KeyFn = None, *, ignore_missing: bool = False) -> Any:
        """Product of all elements."""
        from ....ops.reduce import product

        return product(self, key, ignore_missing=ignore_missing)

    def max(self: IArray, key: KeyFn = None, *, ignore_missing: bool = False) -> Any:
        """Largest element."""
        from ....ops.reduce import maximum

        return maximum(self, key, ignore_missing=ignore_missing)

    def min(self: IArray, key: KeyFn = None, *, ignore_missing: bool = False) -> Any:
        """Smallest element."""
        from ....ops.reduce import minimum

        return minimum(self, key, ignore_missing=ignore_missing)

    def mean(self: IArray, *, ignore_missing: bool = False) -> Any:
        """
        Arithmetic mean of all elements.

        Returns
        -------
        Any
            ``sum / n`` where ``n`` is ``numel`` or, with ``ignore_missing``,
            the number of present elements.
        """
        from ....ops.reduce import mean

        return mean(self, ignore_missing=ignore_missing)

    def count(
        self: IArray,
        predicate: Callable[[Any], bool] = bool,
        *,
        ignore_missing: bool = False,
    ) -> int:
        """Number of elements satisfying ``predicate`` (truthy by default)."""
        from ....ops.reduce import count

        return count(predicate, self, ignore_missing=ignore_missing)

    def extent(self: IArray, key: KeyFn = None, *, ignore_missing: bool = False) -> Any:
        """``Extent(lo, hi)`` of the elements, computed in one pass."""
        from ....ops.reduce import extent

        return extent(self, key, ignore_missing=ignore_missing)

    def abs_extent(self: IArray, *, ignore_missing: bool = False) -> Any:
        """``Extent(lo, hi)`` of the absolute values."""
        from ....ops.reduce import abs_extent

        return abs_extent(self, ignore_missing=ignore_missing)

    def argmax(self: IArray, key: KeyFn = None) -> Any:
        """
        Largest value and every flat index attaining it.

        Returns
        -------
        Extremum
            Positions are most-recently-found first.
        """
        from ....ops.extrema import argmax

        return argmax(self, key)

    def argmin(self: IArray, key: KeyFn = None) -> Any:
        """Smallest value and every flat index attaining it."""
        from ....ops.extrema import argmin

        return argmin(self, key)

    def max_abs(self: IArray) -> Any:
        """Largest absolute value."""
        from ....ops.extrema import max_abs

        return max_abs(self)
