# cli.py
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pycatalog import CatalogClient

console = Console()
c = CatalogClient(
    base_url=os.environ.get("CATALOG_URL", "http://127.0.0.1:3000"),
    api_key=os.environ.get("CATALOG_API_KEY", "mysecretapikey"),
)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products Catalog"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=8)
    table.add_column("Description", width=30)

    for p in products:
        in_stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            f"${float(p.get('price', 0)):.2f}",
            p.get("category", "N/A"),
            in_stock,
            p.get("description", "")
        )
    console.print(table)


def show_stats(stats: Dict[str, int]):
    if not stats:
        console.print("[italic yellow]No products, no stats[/italic yellow]")
        return

    table = Table(title="📊 Products per category", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category", width=20)
    table.add_column("Count", justify="right", width=8)
    for category, count in stats.items():
        table.add_row(category, str(count))
    table.add_row("[bold]Total[/bold]", f"[bold]{sum(stats.values())}[/bold]")
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with enhanced exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the result, or None when the call raised (the error is shown
    and kept in status_message).
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []

    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_category_completer():
    categories = sorted({p.get("category", "") for p in product_cache})
    return WordCompleter([cat for cat in categories if cat], ignore_case=True)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ PyCatalog SDK",
        "[bold blue]Product Catalog CLI with Autocomplete[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_optional_int(message: str) -> Optional[int]:
    raw = Prompt.ask(message, default="")
    try:
        return int(raw) if raw else None
    except ValueError:
        console.print("[yellow]Not a number, using the server default.[/yellow]")
        return None


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    name = prompt_with_autocomplete("Product name", default=current.get("name", ""))
    price = ask_float("💰 Price", default=current.get("price", 10.0))
    category = prompt_with_autocomplete(
        "🏷️ Category", completer=get_category_completer(), default=current.get("category", "general")
    )
    description = prompt_with_autocomplete("Description", default=current.get("description", ""))
    in_stock = Confirm.ask("In stock?", default=current.get("inStock", True))
    return {
        "name": name,
        "price": price,
        "category": category,
        "description": description,
        "inStock": in_stock,
    }


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())

    # Preload products for autocomplete
    product_cache = try_api(c.list_products, limit=100) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "➕ Create product"),
            ("2", "🔍 Search products", "6", "✏️ Update product"),
            ("3", "📊 Category stats", "7", "🗑️ Delete product"),
            ("4", "ℹ️ Get product by ID", "q", "👋 Quit"),
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 8)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            category = prompt_with_autocomplete("Category (blank for all)", completer=get_category_completer())
            page = ask_optional_int("Page (blank for 1)")
            limit = ask_optional_int("Limit (blank for 10)")
            products = try_api(c.list_products, category or None, page, limit,
                               success_msg="Products loaded successfully")
            if products is not None:
                show_products(products)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res, title=f"🔍 Results for '{term}'")

        elif choice == "3":
            stats = try_api(c.product_stats, success_msg="Stats loaded")
            if stats is not None:
                show_stats(stats)

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid)
            if resp:
                show_products([resp])
            elif resp is None and "Error" not in status_message:
                status_message = f"Error: no product with id {pid}"

        elif choice == "5":
            fields = ask_product_fields()
            resp = try_api(
                c.create_product, fields["name"], fields["price"], fields["description"],
                fields["category"], fields["inStock"],
                success_msg=f"Product '{fields['name']}' created"
            )
            if resp:
                console.print(Panel(f"Created product: [green]{resp['id']}[/green]"))
                product_cache = try_api(c.list_products, limit=100) or []

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            current = try_api(c.get_product, pid)
            if not current:
                status_message = f"Error: no product with id {pid}"
                continue
            fields = ask_product_fields(current)
            resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
            if resp:
                show_products([resp])
                product_cache = try_api(c.list_products, limit=100) or []

        elif choice == "7":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                product_cache = try_api(c.list_products, limit=100) or []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for using PyCatalog! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
