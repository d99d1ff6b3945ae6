"""
Array control-path manager for layout-specific dispatch.

This module defines the shared control-path manager used to register and
resolve layout-specific implementations of Array methods.

The manager is created by specializing the generic `create_path_builder`
utility with the state attribute name ``"layout"``. As a result, method
dispatch is performed based on the runtime value of ``self.layout``.

Typical usage
-------------
    @array_control_path_manager(ArrayMixin, ArrayMixin.op, Layout.ROW_MAJOR)
    def op_row_major(self, ...): ...

    @array_control_path_manager(ArrayMixin, ArrayMixin.op, Layout.COLUMN_MAJOR)
    def op_column_major(self, ...): ...
"""

from ...domain.utils._control_path import create_path_builder

# Control-path manager that dispatches Array methods based on `self.layout`
array_control_path_manager = create_path_builder("layout")
