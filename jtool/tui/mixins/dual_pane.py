"""
Dual Pane Mixin for left/right panel switching functionality.

Provides consistent panel switching behavior across dual-pane screens:
- action_switch_panel(): Toggle between left and right panels
- action_vim_left(): Switch focus to left panel (vim h key)
- action_vim_right(): Switch focus to right panel (vim l key)
- _update_panel_styles(): Update active/inactive CSS classes on panels
- _focus_active_widget(): Focus the tree of the active panel

Usage:
    # IMPORTANT: DualPaneMixin MUST come before VimNavigationMixin in MRO
    # so that action_vim_left/right (panel switching) takes precedence.
    class MyDualPaneScreen(DualPaneMixin, VimNavigationMixin, Screen):
        BINDINGS = DualPaneMixin.DUAL_PANE_BINDINGS + [...]
"""

from __future__ import annotations

from textual.binding import Binding
from textual.css.query import NoMatches

from jtool.tui.widgets import FieldDetailModal, JsonTreePanel


# Header text of the detail modal per tree ID
PANEL_LABELS = {
    "left-tree": "Old",
    "right-tree": "New",
}


class DualPaneMixin:
    """Mixin for screens with left/right panel switching.

    Manages panel state and switching for screens that display two
    JsonTreePanel widgets side-by-side, with IDs ``left-tree`` and
    ``right-tree`` inside containers ``left-panel`` and ``right-panel``.

    IMPORTANT: This mixin MUST come before VimNavigationMixin in the
    inheritance order so that h/l keys switch panels instead of doing nothing.

    Class Attributes:
        DUAL_PANE_BINDINGS: All bindings for dual-pane screens (includes
            vim j/k/g/G navigation plus panel switching).
    """

    # Combined bindings: vim navigation + panel switching
    DUAL_PANE_BINDINGS = [
        # Vim navigation (j/k/g/G from VimNavigationMixin)
        Binding("j", "vim_down", "Down", show=False),
        Binding("k", "vim_up", "Up", show=False),
        Binding("g", "vim_top", "Top", show=False),
        Binding("G", "vim_bottom", "Bottom", show=False),
        # Panel switching (h/l vim-style + tab)
        Binding("h", "vim_left", "Left Panel", show=False),
        Binding("l", "vim_right", "Right Panel", show=False),
        Binding("tab", "switch_panel", "Switch Panel", show=True),
        # Common actions
        Binding("escape", "go_back", "Back", show=True),
        Binding("b", "go_back", "Back", show=False),
        Binding("q", "quit", "Quit", show=False),
        Binding("m", "show_field_detail", "View Value", show=True),
    ]

    _active_panel: str = "left"
    """Currently active panel identifier ('left' or 'right')."""

    @property
    def is_left_active(self) -> bool:
        """Check if the left panel is currently active."""
        return self._active_panel == "left"

    def action_switch_panel(self) -> None:
        """Toggle between left and right panels."""
        self._active_panel = "right" if self._active_panel == "left" else "left"
        self._update_panel_styles()
        self._focus_active_widget()

    def action_vim_left(self) -> None:
        """Switch to left panel (vim h key)."""
        if self._active_panel != "left":
            self._active_panel = "left"
            self._update_panel_styles()
            self._focus_active_widget()

    def action_vim_right(self) -> None:
        """Switch to right panel (vim l key)."""
        if self._active_panel != "right":
            self._active_panel = "right"
            self._update_panel_styles()
            self._focus_active_widget()

    def action_go_back(self) -> None:
        """Leave the screen."""
        self.app.pop_screen()

    def action_quit(self) -> None:
        """Exit the application."""
        self.app.exit()

    def active_tree(self) -> JsonTreePanel | None:
        """Return the tree of the active panel, if it is mounted."""
        try:
            return self.query_one(f"#{self._active_panel}-tree", JsonTreePanel)
        except NoMatches:
            return None

    def action_show_field_detail(self) -> None:
        """Show the full value of the node under the cursor of the active tree."""
        tree = self.active_tree()
        if tree is not None and tree.display:
            tree.emit_node_inspected()

    def on_json_tree_panel_node_inspected(self, message: JsonTreePanel.NodeInspected) -> None:
        """Show the field detail modal for an inspected node."""
        self.app.push_screen(
            FieldDetailModal(
                field_value=message.node_value,
                panel_label=PANEL_LABELS.get(message.panel_id, message.panel_id),
                field_path=message.node_path,
                diff_kind=message.diff_kind,
            )
        )

    def _update_panel_styles(self) -> None:
        """Update active/inactive CSS classes on panels.

        Handles missing panels gracefully.
        """
        try:
            left = self.query_one("#left-panel")
            right = self.query_one("#right-panel")
        except NoMatches:
            return

        for panel, is_active in [(left, self.is_left_active), (right, not self.is_left_active)]:
            panel.set_class(is_active, "active")
            panel.set_class(not is_active, "inactive")

    def _focus_active_widget(self) -> None:
        """Focus the tree of the active panel."""
        tree = self.active_tree()
        if tree is not None:
            tree.focus()
