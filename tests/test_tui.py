"""Tests for the comparison screen, driven headlessly through Textual's test harness."""

from __future__ import annotations

import asyncio

from jtool.tui.app import JToolApp
from jtool.tui.views import ComparisonScreen
from jtool.tui.widgets import JsonTreePanel
from jtool.tui.widgets.field_detail_modal import FieldDetailModal, describe_field


OLD = {"a": {"x": 1}, "gone": True}
NEW = {"a": {"x": 2}, "b": [1]}


def run_comparison(scenario) -> None:
    """Open a comparison of OLD and NEW and run an async scenario against it."""
    async def _run():
        app = JToolApp(compare_values=(OLD, NEW))
        async with app.run_test() as pilot:
            await pilot.pause(0.1)
            screen = app.screen
            assert isinstance(screen, ComparisonScreen)
            left = screen.query_one("#left-tree", JsonTreePanel)
            right = screen.query_one("#right-tree", JsonTreePanel)
            await scenario(app, pilot, left, right)

    asyncio.run(_run())


class TestComparisonScreen:
    """Tests for the side-by-side comparison."""

    def test_nodes_addressed_by_path(self):
        """Each panel finds its nodes by diff path."""
        async def scenario(app, pilot, left, right):
            assert left.node_at_path(("a", "x")) is not None
            assert left.node_at_path(("b",)) is None
            assert right.node_at_path(("b", 0)) is not None
            assert right.node_at_path(("gone",)) is None

        run_comparison(scenario)

    def test_expansion_is_mirrored(self):
        """Expanding a node in one panel expands it in the other."""
        async def scenario(app, pilot, left, right):
            assert not right.node_at_path(("a",)).is_expanded

            left.node_at_path(("a",)).expand()
            await pilot.pause(0.1)

            assert right.node_at_path(("a",)).is_expanded

        run_comparison(scenario)

    def test_sync_can_be_disabled(self):
        """With sync off, panels expand independently."""
        async def scenario(app, pilot, left, right):
            await pilot.press("s")
            left.node_at_path(("a",)).expand()
            await pilot.pause(0.1)

            assert not right.node_at_path(("a",)).is_expanded

        run_comparison(scenario)

    def test_inspect_shows_path_and_diff_kind(self):
        """The detail modal names the node and how it differs."""
        async def scenario(app, pilot, left, right):
            left.node_at_path(("a",)).expand()
            await pilot.pause(0.1)
            left.move_cursor(left.node_at_path(("a", "x")))
            await pilot.pause(0.1)
            await pilot.press("m")
            await pilot.pause(0.1)

            modal = app.screen
            assert isinstance(modal, FieldDetailModal)
            assert modal.field_path == "$.a.x"
            assert modal.field_value == 1
            assert modal.diff_kind == "changed"
            assert modal.header_text.plain == "Old  $.a.x  (value changed)"

        run_comparison(scenario)

    def test_diff_text_modal(self):
        """The text diff opens in the detail modal without a path."""
        async def scenario(app, pilot, left, right):
            await pilot.press("t")
            await pilot.pause(0.1)

            modal = app.screen
            assert isinstance(modal, FieldDetailModal)
            assert modal.field_path is None
            assert modal.field_value.splitlines() == [
                "- $.gone: true",
                "+ $.b: [1]",
                "~ $.a.x: 1 -> 2",
            ]

        run_comparison(scenario)


class TestDescribeField:
    """Tests for the detail modal header."""

    def test_panel_only(self):
        """Without a path only the panel is named."""
        assert describe_field("Diff").plain == "Diff"

    def test_unchanged_node(self):
        """Unchanged nodes have no diff note."""
        assert describe_field("New", "$.a").plain == "New  $.a"

    def test_diff_kind_styled(self):
        """The diff note carries the diff type's style."""
        header = describe_field("New", "$.b", "added")

        assert header.plain == "New  $.b  (added in new)"
        assert any(str(span.style) == "bold green" for span in header.spans)
