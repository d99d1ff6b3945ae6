"""
NumPy-backed arrays, views and flat-view resolution.

Public API
----------
- ``Array``    : concrete N-dimensional array (owned or view)
- ``FlatView`` : contiguous row-major handle over a backing buffer
- ``resolve``  : resolve an array into ``(FlatView, length)``
"""

from ._array import Array
from ._flat_view import FlatView, resolve

__all__ = [
    Array.__name__,
    FlatView.__name__,
    resolve.__name__,
]
