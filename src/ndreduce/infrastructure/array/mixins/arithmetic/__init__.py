"""
Array arithmetic mixin.

Provides elementwise arithmetic operators and vector products as thin
call sites of the operation engines in `ndreduce.infrastructure.ops`.

Public API
----------
- ``ArrayMixinArithmetic``
"""

from ._base import ArrayMixinArithmetic

__all__ = [
    ArrayMixinArithmetic.__name__,
]
