"""
Array unary mixin.

Provides negation, reciprocals and element mapping as thin call sites of
the operation engines in `ndreduce.infrastructure.ops`.

Public API
----------
- ``ArrayMixinUnary``
"""

from ._base import ArrayMixinUnary

__all__ = [
    ArrayMixinUnary.__name__,
]
