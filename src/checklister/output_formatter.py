"""Output formatting for CLI and programmatic use."""

import json
from typing import Any
from uuid import UUID

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

DEFAULT_EMOJI = "\U0001f6d2"

CATEGORY_EMOJI: dict[str, str] = {
    "Fresh Vegetables & Herbs": "\U0001f96c",
    "Fresh Fruits": "\U0001f34e",
    "Meat & Poultry": "\U0001f969",
    "Fish & Seafood": "\U0001f41f",
    "Frozen Foods": "\U0001f9ca",
    "Dairy, Laban & Cheese": "\U0001f95b",
    "Bakery & Khubz": "\U0001f35e",
    "Oils, Ghee & Cooking Essentials": "\U0001fad2",
    "Canned, Jarred & Preserved": "\U0001f96b",
    "Sauces, Pastes & Condiments": "\U0001f36f",
    "Spices & Masalas": "\U0001f336️",
    "Rice, Atta, Flours & Grains": "\U0001f33e",
    "Pulses & Lentils": "\U0001fad8",
    "Pasta & Noodles": "\U0001f35d",
    "Breakfast & Cereals": "\U0001f963",
    "Baking & Desserts": "\U0001f382",
    "Beverages & Juices": "\U0001f9c3",
    "Water & Carbonated Drinks": "\U0001f4a7",
    "Snacks, Sweets & Chocolates": "\U0001f36b",
    "Deli & Ready-to-Eat": "\U0001f959",
    "Baby Care": "\U0001f476",
    "Personal Care": "\U0001f9f4",
    "Household & Cleaning": "\U0001f9fd",
    "Pets": "\U0001f415",
    "Unrecognized": "❓",
    "Produce": "\U0001f96c",
    "Dairy": "\U0001f95b",
    "Bakery": "\U0001f35e",
    "Meat": "\U0001f969",
    "Frozen": "❄️",
    "Pantry": "\U0001f96b",
    "Beverages": "\U0001f964",
    "Household": "\U0001f9fd",
    "Fruits": "\U0001f34e",
    "Vegetables": "\U0001f955",
    "Poultry": "\U0001f357",
    "Seafood": "\U0001f990",
    "Cheese": "\U0001f9c0",
    "Eggs": "\U0001f95a",
    "Snacks": "\U0001f37f",
    "Coffee": "☕",
    "Tea": "\U0001f375",
    "Cleaning": "\U0001f9fd",
    "Baby": "\U0001f476",
    "Pet": "\U0001f415",
    "Other / Miscellaneous": DEFAULT_EMOJI,
}


def category_emoji(category: str) -> str:
    """Emoji for a category: exact match, then a partial match, then a cart."""
    if category in CATEGORY_EMOJI:
        return CATEGORY_EMOJI[category]

    lowered = category.lower()
    for key, emoji in CATEGORY_EMOJI.items():
        key_lower = key.lower()
        if key_lower in lowered or (lowered and lowered in key_lower):
            return emoji
    return DEFAULT_EMOJI


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for output."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, UUID):
            return str(obj)
        return super().default(obj)


class OutputFormatter:
    """Formats output for both Rich terminal and JSON modes."""

    def __init__(self, json_mode: bool = False, currency: str = "AED"):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
            currency: Currency label shown next to amounts
        """
        self.json_mode = json_mode
        self.currency = currency
        self.console = Console()

    def output(self, data: dict[str, Any], message: str = "") -> None:
        """Output data in appropriate format.

        Args:
            data: Data to output
            message: Optional message for Rich mode
        """
        if self.json_mode:
            self._output_json(data)
        else:
            self._output_rich(data, message)

    def _output_json(self, data: dict[str, Any]) -> None:
        """Output as JSON to stdout."""
        print(json.dumps(data, cls=JSONEncoder, indent=2, ensure_ascii=False))

    def _output_rich(self, data: dict[str, Any], message: str) -> None:
        """Output with Rich formatting."""
        if message:
            self.console.print(f"[green]✓[/green] {escape(message)}")

        payload = data.get("data", {})
        if "ingest" in payload:
            self._render_ingest(payload)
        if "groups" in payload:
            self._render_checklist(payload)
        elif "item" in payload:
            self._render_item(payload)
        elif "items" in payload:
            self._render_items(payload)
        elif "categories" in payload:
            self._render_categories(payload)
        elif "progress" in payload:
            self._render_progress(payload["progress"])

    def format_amount(self, amount: float) -> str:
        return f"{self.currency} {amount:.2f}"

    def _render_ingest(self, payload: dict) -> None:
        """Render how the list was categorized."""
        ingest = payload["ingest"]
        if ingest.get("source") == "fallback":
            self.console.print(
                "[yellow]Sorted with local rules; categories may be less accurate[/yellow]"
            )
        for url in ingest.get("skipped_urls", []):
            self.console.print(
                f"[yellow]Skipped URL (service unavailable):[/yellow] {escape(url)}"
            )
        if ingest.get("notice"):
            self.console.print(f"[dim]{escape(ingest['notice'])}[/dim]")

    def _render_checklist(self, payload: dict) -> None:
        """Render the grouped checklist with Rich."""
        groups = payload["groups"]

        if not groups:
            self.console.print("[dim]No items on the list[/dim]")
            return

        for group in groups:
            table = Table(
                title=f"{escape(group['category'])} {category_emoji(group['category'])}",
                title_justify="left",
                show_header=False,
                expand=True,
            )
            table.add_column("", width=3)
            table.add_column("Item", style="cyan", ratio=1)
            table.add_column("Amount", justify="right")
            table.add_column("ID", style="dim", width=8)

            for item in group["items"]:
                if item.get("checked"):
                    mark = "[green]✓[/green]"
                    name = f"[strike dim]{escape(item['name'])}[/strike dim]"
                    amount = self.format_amount(item["amount"]) if item.get("amount") else ""
                else:
                    mark = "○"
                    name = escape(item["name"])
                    amount = ""
                table.add_row(mark, name, amount, str(item["id"])[:8])

            self.console.print(table)

        if "progress" in payload:
            self._render_progress(payload["progress"])

    def _render_progress(self, progress: dict) -> None:
        """Render a progress line with the running total."""
        checked = progress["checked_count"]
        total = progress["total_count"]
        line = f"\n{checked}/{total} checked"
        if progress.get("total_amount"):
            line += f"  [bold]Total: {self.format_amount(progress['total_amount'])}[/bold]"
        self.console.print(line)

    def _render_item(self, payload: dict) -> None:
        """Render a single item with Rich."""
        item = payload["item"]

        panel_content = f"""[bold]{escape(item["name"])}[/bold]

Category: {escape(item["category"])} {category_emoji(item["category"])}
Checked: {"yes" if item.get("checked") else "no"}"""

        if item.get("amount"):
            panel_content += f"\nAmount: {self.format_amount(item['amount'])}"

        panel = Panel(panel_content, title="Item Details", border_style="green")
        self.console.print(panel)

    def _render_items(self, payload: dict) -> None:
        """Render a flat list of items."""
        items = payload["items"]
        if not items:
            self.console.print("[dim]No items[/dim]")
            return
        for item in items:
            name = escape(item["name"])
            category = escape(item["category"])
            self.console.print(f"  - {name} [dim]({category}, {str(item['id'])[:8]})[/dim]")

    def _render_categories(self, payload: dict) -> None:
        """Render the available categories."""
        for category in payload["categories"]:
            self.console.print(f"  {category_emoji(category)} {escape(category)}")

    def error(self, message: str, error_code: str | None = None) -> None:
        """Output error message.

        Args:
            message: Error message
            error_code: Optional error code
        """
        if self.json_mode:
            output = {"success": False, "error": message}
            if error_code:
                output["error_code"] = error_code
            print(json.dumps(output))
        else:
            self.console.print(f"[red]✗ Error:[/red] {escape(message)}")
