"""
Arithmetic mixin defining elementwise Array operators.

This module declares :class:`ArrayMixinArithmetic`, which maps Python's
arithmetic operators onto the elementwise combiner:

- ``Array op Array`` runs ``combine`` and requires identical shapes.
- ``Array op scalar`` and ``scalar op Array`` run ``map_elements`` with the
  scalar closed over (``x -> x + k``, ``x -> k / x``, ...).

Results are fresh owned ``FLOAT64`` arrays; use the functions in
:mod:`ndreduce.infrastructure.ops.combine` to pick another element type.
"""

from __future__ import annotations

import operator
from numbers import Number
from typing import Any, Callable, Union
from abc import ABC

from .....domain._array import IArray


class ArrayMixinArithmetic(ABC):
    """
    Mixin defining elementwise arithmetic and vector products.

    Notes
    -----
    - No broadcasting beyond scalars: array operands must have equal shapes,
      otherwise ``ShapeMismatchError`` is raised.
    - Unsupported operand types return ``NotImplemented`` so Python can try
      the reflected operator.
    """

    def _binary(
        self: IArray,
        other: Union[IArray, Number],
        op: Callable[[Any, Any], Any],
        reflected: bool = False,
    ) -> Any:
        from ....ops.combine import combine, map_elements

        if isinstance(other, IArray):
            if reflected:
                return combine(op, other, self)
            return combine(op, self, other)
        if isinstance(other, Number):
            if reflected:
                return map_elements(lambda x: op(other, x), self)
            return map_elements(lambda x: op(x, other), self)
        return NotImplemented

    def __add__(self, other: Union[IArray, Number]) -> "IArray":
        """Elementwise ``self + other``."""
        return self._binary(other, operator.add)

    def __radd__(self, other: Number) -> "IArray":
        """Elementwise ``other + self``."""
        return self._binary(other, operator.add, reflected=True)

    def __sub__(self, other: Union[IArray, Number]) -> "IArray":
        """Elementwise ``self - other``."""
        return self._binary(other, operator.sub)

    def __rsub__(self, other: Number) -> "IArray":
        """Elementwise ``other - self``."""
        return self._binary(other, operator.sub, reflected=True)

    def __mul__(self, other: Union[IArray, Number]) -> "IArray":
        """Elementwise ``self * other``."""
        return self._binary(other, operator.mul)

    def __rmul__(self, other: Number) -> "IArray":
        """Elementwise ``other * self``."""
        return self._binary(other, operator.mul, reflected=True)

    def __truediv__(self, other: Union[IArray, Number]) -> "IArray":
        """Elementwise ``self / other``."""
        return self._binary(other, operator.truediv)

    def __rtruediv__(self, other: Number) -> "IArray":
        """Elementwise ``other / self``."""
        return self._binary(other, operator.truediv, reflected=True)

    def dot(self: IArray, other: IArray) -> Any:
        """Inner product with another vector."""
        from ....ops.linalg import dot

        return dot(self, other)

    def outer(self: IArray, other: IArray) -> "IArray":
        """Outer product with another vector."""
        from ....ops.linalg import outer

        return outer(self, other)
