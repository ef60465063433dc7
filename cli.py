# cli.py - interactive product inventory screen
import logging
import sys
from datetime import datetime
from typing import Optional

from rich.console import Console, Group
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.logging import RichHandler
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from app.config import get_settings
from sdk.controller import InventoryController
from sdk.pyinventory import InventoryClient
from sdk.state import FORM_FIELDS, InventoryState, format_price

console = Console()

FORM_LABELS = [
    ("product_name", "Product Name"),
    ("category", "Category"),
    ("description", "Description"),
    ("price", "Price (₱)"),
    ("quantity", "Quantity"),
]

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def form_panel(state: InventoryState) -> Panel:
    title = "Edit Product" if state.mode == "editing" else "Add New Product"
    grid = Table.grid(padding=(0, 2))
    grid.add_column("Field", style="bold cyan", width=14)
    grid.add_column("Value")
    for name, label in FORM_LABELS:
        value = getattr(state.form, name)
        cell = Text(value or "-", style="" if value else "dim")
        error = state.first_error(name)
        if error:
            cell.append(f"\n{error}", style="bold red")
        grid.add_row(label, cell)
    for field, messages in state.errors.items():
        if field not in FORM_FIELDS and messages:
            grid.add_row("", Text(messages[0], style="bold red"))
    border = "magenta" if state.mode == "editing" else "green"
    return Panel(grid, title=title, border_style=border)


def products_table(state: InventoryState, currency_symbol: str = "₱"):
    products = state.filtered_products
    heading = Text(f"Products ({len(products)})", style="bold magenta")
    if not products:
        return Group(heading, Text("No products found", style="italic yellow"))

    table = Table(box=box.ROUNDED, header_style="bold cyan", show_lines=True)
    table.add_column("ID", style="dim", justify="right", width=6)
    table.add_column("Product Name", style="bold", width=24)
    table.add_column("Category", width=16)
    table.add_column("Price", justify="right", width=14)
    table.add_column("Quantity", justify="right", width=10)

    for p in products:
        table.add_row(
            str(p.get("id", "")),
            p.get("product_name", ""),
            p.get("category") or "-",
            format_price(p.get("price"), currency_symbol),
            str(p.get("quantity", "")),
        )
    return Group(heading, table)


def filter_line(state: InventoryState) -> Text:
    line = Text()
    line.append("Search: ", style="bold")
    line.append(state.search_term or "(none)", style="cyan" if state.search_term else "dim")
    line.append("   Category: ", style="bold")
    line.append(state.category_filter or "All Categories", style="cyan" if state.category_filter else "dim")
    return line


def create_header(app_name: str):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        f"📦 {app_name}",
        "[bold blue]Product Inventory[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


def render(state: InventoryState, currency_symbol: str = "₱"):
    console.print(form_panel(state))
    console.print(filter_line(state))
    console.print(products_table(state, currency_symbol))


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_product_id(state: InventoryState) -> Optional[int]:
    ids = [str(p["id"]) for p in state.filtered_products]
    raw = prompt_with_autocomplete("Product ID", completer=WordCompleter(ids)).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Please enter a numeric product id.[/red]")
        return None


def load_with_spinner(ctl: InventoryController) -> bool:
    with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"), transient=True) as progress:
        progress.add_task(description="Loading products...", total=None)
        return ctl.load()


def fill_form(ctl: InventoryController):
    for name, label in FORM_LABELS:
        completer = WordCompleter(ctl.state.categories, ignore_case=True) if name == "category" else None
        value = prompt_with_autocomplete(label, completer=completer, default=getattr(ctl.state.form, name))
        ctl.set_field(name, value)


# ---------------------------
# Main menu
# ---------------------------
MENU = [
    ("1", "🔍 Search", "6", "✏️ Edit product"),
    ("2", "🏷️ Filter by category", "7", "↩️ Cancel edit"),
    ("3", "📝 Fill form", "8", "🗑️ Delete product"),
    ("4", "✍️ Edit one field", "9", "🔄 Reload"),
    ("5", "✅ Submit", "q", "👋 Quit"),
]


def menu(ctl: InventoryController, app_name: str, currency_symbol: str):
    console.clear()
    console.print(create_header(app_name))
    load_with_spinner(ctl)

    while True:
        render(ctl.state, currency_symbol)

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in MENU:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 10)] + ["q", "quit", "exit"])
        ).strip().lower()

        if choice == "1":
            ctl.set_search(prompt_with_autocomplete("Search products...", default=ctl.state.search_term))

        elif choice == "2":
            category = prompt_with_autocomplete(
                "Category (blank for all)",
                completer=WordCompleter(ctl.state.categories, ignore_case=True),
            ).strip()
            ctl.set_category(category)

        elif choice == "3":
            fill_form(ctl)

        elif choice == "4":
            names = [name for name, _ in FORM_LABELS]
            name = prompt_with_autocomplete("Field", completer=WordCompleter(names)).strip()
            if name in names:
                ctl.set_field(name, prompt_with_autocomplete(name, default=getattr(ctl.state.form, name)))
            else:
                console.print(f"[red]Unknown field '{name}'[/red]")

        elif choice == "5":
            editing = ctl.state.editing_id
            if ctl.submit():
                console.print(Panel.fit(
                    f"[green]Product {'updated' if editing is not None else 'added'}[/green]", title="Status"
                ))

        elif choice == "6":
            pid = ask_product_id(ctl.state)
            if pid is not None and not ctl.start_edit(pid):
                console.print(f"[red]No product with id {pid}[/red]")

        elif choice == "7":
            ctl.cancel_edit()

        elif choice == "8":
            pid = ask_product_id(ctl.state)
            if pid is not None:
                ctl.delete(pid, lambda: Confirm.ask("Are you sure you want to delete this product?"))

        elif choice == "9":
            load_with_spinner(ctl)

        elif choice in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye 👋[/bold green]"))
                return

        console.print()
        console.rule(style="dim")


def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    client = InventoryClient(base_url=settings.api_base_url, timeout=settings.request_timeout)
    ctl = InventoryController(client)
    try:
        menu(ctl, settings.app_name, settings.currency_symbol)
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
