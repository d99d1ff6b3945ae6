"""
Layout-specific implementations of Array.flat_view via control-path dispatch.

This module registers one `flat_view` implementation per memory layout with
the `array_control_path_manager`. The implementation is selected at runtime
from the array's ``layout``:

- ``Layout.ROW_MAJOR``: the elements already form a contiguous row-major run
  of the buffer, so the flat view borrows the buffer in place.
- ``Layout.COLUMN_MAJOR``: the run is in column-major order. It is still
  row-major compatible when at most one dimension is larger than 1 (both
  orders visit the elements identically); otherwise the elements are copied
  in row-major order into a buffer owned by the flat view.
"""

import logging

from ..._array_builder import array_control_path_manager
from ..._flat_view import FlatView

from .....domain._array import IArray
from .....domain._element_type import Layout, Ownership
from ._base import ArrayMixinMemory as AMM

logger = logging.getLogger(__name__)


def _borrow(self: IArray) -> FlatView:
    return FlatView(
        self.buffer,
        self.offset,
        self.numel(),
        ownership=Ownership.BORROWS,
        source=self,
    )


@array_control_path_manager(AMM, AMM.flat_view, Layout.ROW_MAJOR)
def array_flat_view_row_major(self: IArray) -> FlatView:
    """
    Row-major control path for flat-view resolution.

    Returns a borrowing view at ``self.offset`` with length ``numel``. No
    memory is allocated; writes through the view are visible through
    ``self`` and through every other view of the same buffer region.
    """
    return _borrow(self)


@array_control_path_manager(AMM, AMM.flat_view, Layout.COLUMN_MAJOR)
def array_flat_view_column_major(self: IArray) -> FlatView:
    """
    Column-major control path for flat-view resolution.

    Degenerate shapes (at most one dimension larger than 1) are row-major
    compatible and are borrowed like row-major arrays. Any other shape is
    materialized: a new buffer of ``numel`` elements is filled in row-major
    order and owned by the returned view, so writes through it do not reach
    ``self``.
    """
    if sum(1 for d in self.shape if d > 1) <= 1:
        return _borrow(self)

    logger.debug(
        "materializing column-major array of shape %s (%d elements)",
        self.shape,
        self.numel(),
    )
    # flatten() always copies, even when the logical array happens to be C-contiguous
    buffer = self._logical_numpy().flatten(order="C")
    return FlatView(buffer, 0, buffer.size, ownership=Ownership.OWNS)
