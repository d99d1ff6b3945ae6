"""
Array memory operation registrations for ndreduce.

This package aggregates the memory-related `Array` operations and registers
the layout-specific implementations of `flat_view` through the array
control-path dispatch system:

- `flat_view` : row-major (borrowing) and column-major (borrowing or
  materializing) resolution

Public API
----------
Only `ArrayMixinMemory` is re-exported. The control-path module is imported
for its side effect (registration) and is not intended to be used directly.
"""

from ._array_flat_view import *
from ._base import ArrayMixinMemory

__all__ = [
    ArrayMixinMemory.__name__,
]
