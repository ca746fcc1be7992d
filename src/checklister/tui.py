"""Terminal UI for Checklister."""

from __future__ import annotations

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Static

from .checklist_store import ChecklistStore, parse_amount
from .exceptions import ChecklistError, InvalidAmountError
from .models import Progress, ToggleOutcome
from .output_formatter import category_emoji


class AmountScreen(ModalScreen[str | None]):
    """Modal dialog asking for the amount paid for an item."""

    DEFAULT_CSS = """
    AmountScreen {
        align: center middle;
    }

    #amount-dialog {
        width: 50;
        height: auto;
        padding: 1 2;
        border: round $primary;
        background: $surface;
    }

    #amount-actions {
        align-horizontal: right;
        height: auto;
        margin-top: 1;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, item_name: str, currency: str):
        super().__init__()
        self.item_name = item_name
        self.currency = currency

    def compose(self) -> ComposeResult:
        with Vertical(id="amount-dialog"):
            yield Label(Text(f"Add amount for {self.item_name}"))
            yield Input(placeholder=f"Amount in {self.currency}", id="amount")
            yield Label("", id="amount-error")
            with Horizontal(id="amount-actions"):
                yield Button("Cancel", id="cancel")
                yield Button("Save amount", id="submit", variant="primary")

    def action_cancel(self) -> None:
        self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.dismiss(None)
        elif event.button.id == "submit":
            self._submit()

    def _submit(self) -> None:
        raw = self.query_one("#amount", Input).value.strip()
        try:
            parse_amount(raw)
        except InvalidAmountError:
            self.query_one("#amount-error", Label).update("Please enter a valid amount")
            self.app.bell()
            return
        self.dismiss(raw)


class CategoryScreen(ModalScreen[str | None]):
    """Modal dialog to pick or create a category."""

    DEFAULT_CSS = """
    CategoryScreen {
        align: center middle;
    }

    #category-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: round $accent;
        background: $surface;
    }

    #category-actions {
        align-horizontal: right;
        height: auto;
        margin-top: 1;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, title: str, categories: list[str], current: str = ""):
        super().__init__()
        self.title_text = title
        self.categories = categories
        self.current = current

    def compose(self) -> ComposeResult:
        with Vertical(id="category-dialog"):
            yield Label(Text(self.title_text))
            yield Static(Text(", ".join(self.categories)), id="category-choices")
            yield Input(value=self.current, placeholder="Category name", id="category")
            with Horizontal(id="category-actions"):
                yield Button("Cancel", id="cancel")
                yield Button("Move", id="submit", variant="primary")

    def action_cancel(self) -> None:
        self.dismiss(None)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "cancel":
            self.dismiss(None)
        elif event.button.id == "submit":
            self._submit()

    def _submit(self) -> None:
        value = self.query_one("#category", Input).value.strip()
        if not value:
            self.app.bell()
            return
        # Typing an existing name in any case reuses it
        for category in self.categories:
            if category.lower() == value.lower():
                value = category
                break
        self.dismiss(value)


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no confirmation dialog."""

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
    }

    #confirm-dialog {
        width: 50;
        height: auto;
        padding: 1 2;
        border: round $warning;
        background: $surface;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, question: str):
        super().__init__()
        self.question = question

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(Text(self.question))
            with Horizontal():
                yield Button("Cancel", id="cancel")
                yield Button("Yes", id="yes", variant="error")

    def action_cancel(self) -> None:
        self.dismiss(False)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "yes")


class ChecklistTUI(App[None]):
    """Interactive checklist grouped by aisle."""

    TITLE = "Checklister"
    SUB_TITLE = "Shopping Checklist"

    DEFAULT_CSS = """
    #status {
        dock: bottom;
        height: 1;
        padding: 0 1;
        background: $boost;
        color: $text;
    }

    DataTable {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("r", "refresh", "Refresh"),
        Binding("space", "toggle", "Check/Uncheck"),
        Binding("m", "move", "Move"),
        Binding("d", "delete", "Delete"),
        Binding("n", "new_list", "New List"),
    ]

    def __init__(self, store: ChecklistStore, currency: str = "AED"):
        super().__init__()
        self.store = store
        self.currency = currency
        self._row_ids: list[str | None] = []
        self.store.on_complete(self._on_complete)

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield DataTable(id="checklist-table")
        yield Static("space:check  m:move  d:delete  n:new list  r:refresh  q:quit", id="status")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#checklist-table", DataTable)
        table.cursor_type = "row"
        table.add_columns("", "Item", "Amount")
        self.action_refresh()

    def action_refresh(self) -> None:
        self._refresh_table()
        self._set_status(self._progress_text(self.store.progress()))

    def action_toggle(self) -> None:
        item_id = self._selected_id()
        if item_id is None:
            self._set_status("No item selected")
            return

        try:
            outcome = self.store.toggle_check(item_id)
        except ChecklistError as exc:
            self._set_status(str(exc))
            return

        if outcome == ToggleOutcome.UNCHECKED:
            self.action_refresh()
            return

        item = self.store.get_item(item_id)
        self.push_screen(
            AmountScreen(item.name, self.currency),
            lambda amount, selected_id=item_id: self._handle_amount(selected_id, amount),
        )

    def action_move(self) -> None:
        item_id = self._selected_id()
        if item_id is None:
            self._set_status("No item selected")
            return

        item = self.store.get_item(item_id)
        self.push_screen(
            CategoryScreen(f"Move {item.name} to", self.store.categories(), item.category),
            lambda category, selected_id=item_id: self._handle_move(selected_id, category),
        )

    def action_delete(self) -> None:
        item_id = self._selected_id()
        if item_id is None:
            self._set_status("No item selected")
            return

        removed = self.store.delete_many([item_id])
        self.action_refresh()
        self._set_status(f"Deleted {removed[0].name}")

    def action_new_list(self) -> None:
        self.push_screen(ConfirmScreen("Discard the current list?"), self._handle_new_list)

    def _handle_amount(self, item_id: str, amount: str | None) -> None:
        if amount is None:
            self.store.cancel_pending()
            self._set_status("Check canceled")
            return

        try:
            item = self.store.confirm_amount(item_id, amount)
        except ChecklistError as exc:
            self._set_status(str(exc))
            return
        self._refresh_table()
        self._set_status(f"Checked {item.name}  {self._progress_text(self.store.progress())}")

    def _handle_move(self, item_id: str, category: str | None) -> None:
        if category is None:
            self._set_status("Move canceled")
            return

        try:
            item = self.store.move_to_category(item_id, category)
        except ChecklistError as exc:
            self._set_status(str(exc))
            return
        self.action_refresh()
        self._set_status(f"Moved {item.name} to {item.category}")

    def _handle_new_list(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        self.store.reset()
        self.action_refresh()
        self._set_status("Started a new list")

    def _on_complete(self, progress: Progress) -> None:
        self.notify(f"All {progress.total_count} items checked!", title="Done")

    def _refresh_table(self) -> None:
        table = self.query_one("#checklist-table", DataTable)
        previous_row = table.cursor_row
        table.clear(columns=False)
        self._row_ids = []

        for group in self.store.grouped_view():
            self._row_ids.append(None)
            table.add_row(
                category_emoji(group.category),
                Text(group.category, style="bold"),
                "",
                key=f"group:{group.category}",
            )
            for item in group.items:
                item_id = str(item.id)
                self._row_ids.append(item_id)
                if item.checked:
                    mark = "[green]✓[/green]"
                    name = Text(item.name, style="strike")
                    amount = f"{self.currency} {item.amount:.2f}" if item.amount else ""
                else:
                    mark, name, amount = "○", Text(item.name), ""
                table.add_row(mark, name, amount, key=item_id)

        if self._row_ids:
            row = previous_row if previous_row and previous_row > 0 else 1
            table.move_cursor(row=min(row, len(self._row_ids) - 1), column=0)

    def _progress_text(self, progress: Progress) -> str:
        text = f"{progress.checked_count}/{progress.total_count} checked"
        if progress.total_amount:
            text += f"  Total: {self.currency} {progress.total_amount:.2f}"
        return text

    def _selected_id(self) -> str | None:
        table = self.query_one("#checklist-table", DataTable)
        row = table.cursor_row
        if row is None or row < 0 or row >= len(self._row_ids):
            return None
        return self._row_ids[row]

    def _set_status(self, message: str) -> None:
        self.query_one("#status", Static).update(Text(message))
