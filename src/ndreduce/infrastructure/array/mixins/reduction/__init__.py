"""
Array reduction mixin.

Provides whole-array reductions (sum, prod, min, max, mean, count,
extent, argmax, argmin, max_abs) as thin call sites of the operation
engines in `ndreduce.infrastructure.ops`.

Public API
----------
- ``ArrayMixinReduction``
"""

from ._base import ArrayMixinReduction

__all__ = [
    ArrayMixinReduction.__name__,
]
