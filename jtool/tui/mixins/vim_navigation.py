"""
Vim Navigation Mixin for global vim-style keybindings.

Provides j/k/g/G navigation that works across screens by delegating
to the currently focused tree's native navigation methods.

Note: h/l bindings for panel switching are defined in DualPaneMixin.
"""

from __future__ import annotations

from textual.binding import Binding
from textual.widgets import Tree


class VimNavigationMixin:
    """Mixin providing global vim-style navigation keybindings.

    This mixin adds vim keybindings that delegate to the focused tree:
    - j/k: Move cursor down/up
    - g: Jump to first node
    - G: Jump to last visible node

    For dual-pane screens, use with DualPaneMixin which provides h/l bindings.

    Usage:
        class MyScreen(VimNavigationMixin, Screen):
            BINDINGS = VimNavigationMixin.VIM_BINDINGS + [...]

        # For dual-pane screens (DualPaneMixin MUST come first for h/l to work):
        class MyDualScreen(DualPaneMixin, VimNavigationMixin, Screen):
            BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [...]
    """

    VIM_BINDINGS = [
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
    ]

    def _get_navigable_widget(self) -> Tree | None:
        """Get the currently focused widget if it supports navigation.

        Returns:
            The focused widget if it's a Tree, otherwise None.
        """
        focused = self.focused
        if isinstance(focused, Tree):
            return focused
        return None

    def action_vim_down(self) -> None:
        """Move cursor down (vim j key)."""
        widget = self._get_navigable_widget()
        if widget is not None:
            widget.action_cursor_down()

    def action_vim_up(self) -> None:
        """Move cursor up (vim k key)."""
        widget = self._get_navigable_widget()
        if widget is not None:
            widget.action_cursor_up()

    def action_vim_top(self) -> None:
        """Jump to first node (vim g).

        Moves the cursor without selecting, so the root is not toggled.
        """
        widget = self._get_navigable_widget()
        if widget is None:
            return

        widget.cursor_line = 0
        widget.scroll_home()

    def action_vim_bottom(self) -> None:
        """Jump to last visible node (vim G)."""
        widget = self._get_navigable_widget()
        if widget is None:
            return

        widget.cursor_line = widget.last_line
        widget.scroll_end()
