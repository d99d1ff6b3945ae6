"""
Unary mixin: negation, reciprocals and element mapping.

Every method materializes a new owned array through the unary combiner in
:mod:`ndreduce.infrastructure.ops.combine`.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional
from abc import ABC

from .....domain._array import IArray
from .....domain._element_type import DEFAULT_RESULT_TYPE, ElementType


class ArrayMixinUnary(ABC):
    """Mixin defining unary elementwise operations."""

    def __neg__(self: IArray) -> "IArray":
        """Elementwise ``-self``."""
        from ....ops.combine import negate

        return negate(self)

    def negate(
        self: IArray,
        k: Optional[Any] = None,
        element_type: ElementType = DEFAULT_RESULT_TYPE,
    ) -> "IArray":
        """``-x`` for every element, or ``k - x`` when ``k`` is given."""
        from ....ops.combine import negate

        return negate(self, k, element_type)

    def reciprocal(
        self: IArray,
        k: Any = 1,
        element_type: ElementType = DEFAULT_RESULT_TYPE,
    ) -> "IArray":
        """``k / x`` for every element (``1 / x`` by default)."""
        from ....ops.combine import reciprocal

        return reciprocal(self, k, element_type)

    def map(
        self: IArray,
        fn: Callable[[Any], Any],
        element_type: ElementType = DEFAULT_RESULT_TYPE,
    ) -> "IArray":
        """Apply ``fn`` to every element, returning a new array."""
        from ....ops.combine import map_elements

        return map_elements(fn, self, element_type)

    def map_multi(
        self: IArray,
        fn: Callable[[Any], Iterable[Any]],
        n_values: int,
        element_type: ElementType = DEFAULT_RESULT_TYPE,
    ) -> "IArray":
        """
        Map every element to ``n_values`` values along a new last axis.

        Raises
        ------
        ArityMismatchError
            If ``fn`` returns a different number of values for any element.
        """
        from ....ops.combine import map_multi

        return map_multi(fn, self, n_values, element_type)
