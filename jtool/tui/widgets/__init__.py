"""TUI widgets for the JTool viewer."""

from jtool.tui.widgets.json_tree_panel import JsonTreePanel
from jtool.tui.widgets.diff_indicator import (
    DIFF_STYLES,
    build_diff_map,
    format_diff_summary,
    get_diff_summary,
    get_node_diff_style,
)
from jtool.tui.widgets.field_detail_modal import FieldDetailModal

__all__ = [
    # JSON tree panel
    "JsonTreePanel",
    # Field detail modal
    "FieldDetailModal",
    # Diff indicator functions
    "DIFF_STYLES",
    "build_diff_map",
    "format_diff_summary",
    "get_diff_summary",
    "get_node_diff_style",
]
