"""TUI views for the JTool viewer."""

from jtool.tui.views.comparison_screen import ComparisonScreen
from jtool.tui.views.editor_screen import EditorScreen

__all__ = ["ComparisonScreen", "EditorScreen"]
