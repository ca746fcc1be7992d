"""CLI entry point for Checklister."""

import sys
from pathlib import Path
from typing import Annotated

import typer

from .ai_client import CategorizationClient
from .checklist_store import ChecklistStore
from .config import ConfigManager
from .data_store import JSONFileStore
from .exceptions import (
    EmptyInputError,
    InvalidAmountError,
    InvalidCategoryError,
    ItemNotFoundError,
    OCRError,
    TaxonomyError,
)
from .ingest import ListIngestor
from .log import configure_logging
from .models import Progress
from .output_formatter import OutputFormatter
from .taxonomy import Taxonomy

app = typer.Typer(
    name="checklister",
    help="Sort your grocery list into supermarket aisles",
    no_args_is_help=True,
)

# Global state for formatter and config (set by callback)
formatter: OutputFormatter = OutputFormatter()
config: ConfigManager | None = None
data_dir_override: Path | None = None
store: ChecklistStore | None = None
taxonomy: Taxonomy | None = None
completed = False


def get_config() -> ConfigManager:
    """Get or create ConfigManager instance."""
    global config
    if config is None:
        config = ConfigManager()
    return config


def get_store() -> ChecklistStore:
    """Get or create the ChecklistStore using config values."""
    global store
    if store is None:
        cfg = get_config()
        adapter = JSONFileStore(
            data_dir=data_dir_override or cfg.data.storage_dir, slot=cfg.data.list_slot
        )
        store = ChecklistStore(adapter, taxonomy=taxonomy or cfg.load_taxonomy())
        store.on_complete(_announce_completion)
    return store


def get_ingestor() -> ListIngestor:
    """Create a ListIngestor wired to the configured service."""
    cfg = get_config()
    client = None
    if cfg.service.enabled:
        client = CategorizationClient(
            cfg.service.url, api_key=cfg.service.api_key or None, timeout=cfg.service.timeout
        )
    return ListIngestor(get_store(), client=client)


def _announce_completion(progress: Progress) -> None:
    global completed
    completed = True
    if not formatter.json_mode:
        formatter.console.print(
            f"[bold green]\U0001f389 All {progress.total_count} items checked![/bold green]"
        )


def checklist_data(checklist: ChecklistStore) -> dict:
    """Grouped view and progress as JSON-ready data."""
    progress = checklist.progress()
    return {
        "groups": [group.model_dump(mode="json") for group in checklist.grouped_view()],
        "progress": {**progress.model_dump(mode="json"), "percentage": progress.percentage},
    }


def _output(result: dict, message: str = "") -> None:
    if completed:
        result.setdefault("data", {})["completed"] = True
    formatter.output(result, message)


def _fail(message: str, error_code: str | None = None) -> None:
    formatter.error(message, error_code=error_code)
    raise typer.Exit(code=1)


@app.callback()
def main(
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as JSON for programmatic use")
    ] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path")] = None,
    config_path: Annotated[
        Path | None, typer.Option("--config", help="Path to a config.toml file")
    ] = None,
) -> None:
    """Checklister CLI - paste a grocery list, get it sorted by aisle."""
    global formatter, config, data_dir_override, store, taxonomy, completed

    config = ConfigManager(config_path)
    configure_logging(config.logging.level)
    formatter = OutputFormatter(json_mode=json_output, currency=config.display.currency)
    data_dir_override = data_dir
    store = None
    completed = False
    try:
        taxonomy = config.load_taxonomy()
    except TaxonomyError as e:
        _fail(str(e), error_code="TAXONOMY_ERROR")


@app.command()
def sort(
    text: Annotated[
        str | None, typer.Argument(help="List text; use '-' to read from stdin")
    ] = None,
    file: Annotated[
        Path | None, typer.Option("--file", "-f", help="Read the list from a text file")
    ] = None,
    image: Annotated[
        Path | None, typer.Option("--image", "-i", help="Read the list from a photo")
    ] = None,
) -> None:
    """Categorize a list into aisles, replacing the current checklist."""
    try:
        ingestor = get_ingestor()
        if image is not None:
            result = ingestor.ingest_image(image)
        else:
            if file is not None:
                text = file.read_text(encoding="utf-8")
            elif text == "-":
                text = sys.stdin.read()
            result = ingestor.ingest_text(text or "")

        data = {"ingest": result.model_dump(mode="json")}
        if result.replaced:
            data.update(checklist_data(get_store()))
            message = f"Checklist ready: {result.item_count} items"
        else:
            message = result.notice or "Nothing to sort"
        _output({"success": True, "message": message, "data": data}, message)
    except EmptyInputError as e:
        _fail(str(e), error_code="EMPTY_INPUT")
    except OCRError as e:
        _fail(str(e), error_code="OCR_FAILED")
    except UnicodeDecodeError:
        _fail(f"Could not read {file}: not UTF-8 text", error_code="INVALID_INPUT")
    except OSError as e:
        _fail(str(e))


@app.command(name="list")
def list_items() -> None:
    """View the checklist grouped by category."""
    _output({"success": True, "data": checklist_data(get_store())})


@app.command()
def check(
    item_id: Annotated[str, typer.Argument(help="Item ID (or unique prefix) to check off")],
    amount: Annotated[str, typer.Option("--amount", "-a", help="Price paid for the item")],
) -> None:
    """Check an item off with the amount paid."""
    try:
        checklist = get_store()
        item = checklist.confirm_amount(checklist.resolve_id(item_id), amount)
        message = f"Checked {item.name} ({formatter.format_amount(item.amount or 0)})"
        _output(
            {"success": True, "message": message, "data": {"item": item.model_dump(mode="json")}},
            message,
        )
    except ItemNotFoundError as e:
        _fail(str(e), error_code="ITEM_NOT_FOUND")
    except InvalidAmountError as e:
        _fail(str(e), error_code="INVALID_AMOUNT")


@app.command()
def uncheck(
    item_id: Annotated[str, typer.Argument(help="Item ID (or unique prefix) to uncheck")],
) -> None:
    """Uncheck an item and clear its amount."""
    try:
        checklist = get_store()
        item = checklist.uncheck(checklist.resolve_id(item_id))
        message = f"Unchecked {item.name}"
        _output(
            {"success": True, "message": message, "data": {"item": item.model_dump(mode="json")}},
            message,
        )
    except ItemNotFoundError as e:
        _fail(str(e), error_code="ITEM_NOT_FOUND")


@app.command()
def add(
    name: Annotated[str, typer.Argument(help="Item name to add")],
    category: Annotated[
        str | None, typer.Option("--category", "-c", help="Category; guessed when omitted")
    ] = None,
) -> None:
    """Add a single item to the checklist."""
    try:
        item = get_store().add_item(name, category=category)
        message = f"Added {item.name} to {item.category}"
        _output(
            {"success": True, "message": message, "data": {"item": item.model_dump(mode="json")}},
            message,
        )
    except ValueError as e:
        _fail(str(e), error_code="INVALID_ITEM")


@app.command()
def move(
    item_ids: Annotated[list[str], typer.Argument(help="Item IDs (or unique prefixes)")],
    to: Annotated[str, typer.Option("--to", "-t", help="Target category, new or existing")],
) -> None:
    """Move items to another category."""
    try:
        checklist = get_store()
        moved = checklist.move_many([checklist.resolve_id(i) for i in item_ids], to)
        message = f"Moved {len(moved)} items to {to.strip()}"
        _output(
            {
                "success": True,
                "message": message,
                "data": {"items": [item.model_dump(mode="json") for item in moved]},
            },
            message,
        )
    except ItemNotFoundError as e:
        _fail(str(e), error_code="ITEM_NOT_FOUND")
    except InvalidCategoryError as e:
        _fail(str(e), error_code="INVALID_CATEGORY")


@app.command()
def delete(
    item_ids: Annotated[list[str], typer.Argument(help="Item IDs (or unique prefixes)")],
) -> None:
    """Delete items from the checklist."""
    try:
        checklist = get_store()
        removed = checklist.delete_many([checklist.resolve_id(i) for i in item_ids])
        message = f"Deleted {len(removed)} items"
        _output(
            {
                "success": True,
                "message": message,
                "data": {"items": [item.model_dump(mode="json") for item in removed]},
            },
            message,
        )
    except ItemNotFoundError as e:
        _fail(str(e), error_code="ITEM_NOT_FOUND")


@app.command()
def new(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
) -> None:
    """Start a new list, discarding the current one."""
    checklist = get_store()
    if not yes and checklist.items and not typer.confirm("Discard the current list?"):
        raise typer.Exit(code=1)
    count = len(checklist.items)
    checklist.reset()
    message = f"Started a new list ({count} items cleared)"
    _output({"success": True, "message": message, "data": {"removed_count": count}}, message)


@app.command()
def categories() -> None:
    """Show the categories items can be moved to."""
    checklist = get_store()
    _output({"success": True, "data": {"categories": checklist.categories()}})


@app.command()
def unrecognized(
    move_to: Annotated[
        str | None,
        typer.Option("--move-to", help="Move every unrecognized item into this category"),
    ] = None,
) -> None:
    """Show items no rule recognized, optionally moving them all."""
    try:
        checklist = get_store()
        items = checklist.unrecognized_items()
        message = ""
        if move_to is not None and items:
            items = checklist.move_many([item.id for item in items], move_to)
            message = f"Moved {len(items)} items to {move_to.strip()}"
        _output(
            {
                "success": True,
                "message": message,
                "data": {"items": [item.model_dump(mode="json") for item in items]},
            },
            message,
        )
    except InvalidCategoryError as e:
        _fail(str(e), error_code="INVALID_CATEGORY")


@app.command()
def progress() -> None:
    """Show how much of the list is checked off."""
    current = get_store().progress()
    _output(
        {
            "success": True,
            "data": {
                "progress": {**current.model_dump(mode="json"), "percentage": current.percentage}
            },
        }
    )


@app.command()
def tui() -> None:
    """Open the interactive checklist."""
    from .tui import ChecklistTUI

    ChecklistTUI(get_store(), currency=get_config().get("display.currency", "AED")).run()


if __name__ == "__main__":
    app()
