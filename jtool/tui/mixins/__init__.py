"""Mixins for the TUI application."""

from jtool.tui.mixins.dual_pane import DualPaneMixin
from jtool.tui.mixins.vim_navigation import VimNavigationMixin

__all__ = [
    "DualPaneMixin",
    "VimNavigationMixin",
]
