"""Tests for the checklist TUI."""

import asyncio

from textual.widgets import DataTable

from checklister.tui import AmountScreen, ChecklistTUI


def _run(app, interact):
    async def scenario():
        async with app.run_test() as pilot:
            return await interact(app, pilot)

    return asyncio.run(scenario())


class TestChecklistTable:
    """Tests for the grouped table."""

    def test_bracketed_names_shown_as_typed(self, checklist_store):
        checklist_store.add_item("tomatoes [/b]", category="Veg")
        checklist_store.add_item("[organic] apples", category="Veg")

        async def read_names(app, pilot):
            table = app.query_one("#checklist-table", DataTable)
            return [table.get_row_at(row)[1].plain for row in range(table.row_count)]

        names = _run(ChecklistTUI(checklist_store), read_names)
        assert names == ["Veg", "tomatoes [/b]", "[organic] apples"]

    def test_space_asks_for_amount(self, checklist_store):
        checklist_store.add_item("[organic] apples", category="Veg")

        async def toggle(app, pilot):
            await pilot.press("space")
            await pilot.pause()
            return app.screen

        screen = _run(ChecklistTUI(checklist_store), toggle)
        assert isinstance(screen, AmountScreen)
        assert checklist_store.pending_amount_id == checklist_store.items[0].id
