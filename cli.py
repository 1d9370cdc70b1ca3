# cli.py - interactive product catalog client
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

from sdk.product_client import ProductAPIError, ProductClient

console = Console()
c = ProductClient(
    base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
    token=os.getenv("PRODUCT_API_TOKEN", "demo-token"),
)

status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

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
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=8)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A"))[:12],
            p.get("name", "N/A"),
            p.get("description") or "",
            f"${float(p.get('price', 0)):.2f}",
            p.get("category") or "N/A",
            "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]",
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner. API errors end up in the
    status panel and yield None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except ProductAPIError as e:
        status_message = f"Error: {e.message} ({e.code})"
    except Exception as e:
        status_message = f"Error: {e}"
    console.print(show_status(status_message, False))
    return None


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def get_product_completer():
    global product_cache
    if not product_cache:
        resp = try_api(c.list_products) or {}
        product_cache = resp.get("data", [])
    return WordCompleter([p["id"] for p in product_cache if p.get("id")], ignore_case=True)


def refresh_cache():
    global product_cache
    resp = try_api(c.list_products) or {}
    product_cache = resp.get("data", [])


def ask_float(message: str, default: Optional[float] = None) -> float:
    while True:
        raw = Prompt.ask(message, default=None if default is None else str(default))
        try:
            return float(raw)
        except (TypeError, ValueError):
            console.print("[red]Please enter a valid number.[/red]")


def ask_optional(message: str) -> Optional[str]:
    raw = prompt_with_autocomplete(message).strip()
    return raw or None


def ask_product_fields(existing: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    existing = existing or {}
    name = prompt_with_autocomplete("Name", default=existing.get("name", "")).strip()
    price = ask_float("💰 Price", default=existing.get("price"))
    description = prompt_with_autocomplete("Description", default=existing.get("description") or "").strip()
    category = prompt_with_autocomplete("🏷️ Category", default=existing.get("category") or "").strip()
    in_stock = Confirm.ask("In stock?", default=bool(existing.get("inStock", False)))
    payload: Dict[str, Any] = {"name": name, "price": price, "inStock": in_stock}
    if description:
        payload["description"] = description
    if category:
        payload["category"] = category
    return payload


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)
    header.add_row(
        "🛍️ Product API",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{datetime.now().strftime('%Y-%m-%d %H:%M:%S')}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    console.clear()
    console.print(create_header())
    refresh_cache()

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        options = [
            ("1", "📦 List products", "4", "✏️ Update product"),
            ("2", "🔍 Filter products", "5", "🗑️ Delete product"),
            ("3", "➕ Create product", "6", "ℹ️ Get product by ID"),
            ("", "", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 7)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            resp = try_api(c.list_products, success_msg="Products loaded")
            if resp is not None:
                show_products(resp["data"])

        elif choice == "2":
            name = ask_optional("Name contains (blank to skip)")
            category = ask_optional("Category (blank to skip)")
            min_price = ask_optional("Min price (blank to skip)")
            max_price = ask_optional("Max price (blank to skip)")
            stock = ask_optional("In stock? true/false (blank to skip)")
            try:
                low = float(min_price) if min_price else None
                high = float(max_price) if max_price else None
            except ValueError:
                console.print("[red]Prices must be numbers.[/red]")
                continue
            resp = try_api(
                c.list_products, name, category, low, high,
                None if stock is None else stock.lower() == "true",
                success_msg="Filter applied",
            )
            if resp is not None:
                show_products(resp["data"], title=f"🔍 {resp['count']} matching products")

        elif choice == "3":
            payload = ask_product_fields()
            created = try_api(c.create_product, payload, success_msg=f"Product '{payload['name']}' created")
            if created:
                show_products([created])
                refresh_cache()

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
            existing = try_api(c.get_product, pid)
            if existing:
                payload = ask_product_fields(existing)
                updated = try_api(c.update_product, pid, payload, success_msg=f"Product {pid} updated")
                if updated:
                    show_products([updated])
                    refresh_cache()

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                if try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted") is not None:
                    refresh_cache()

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
            product = try_api(c.get_product, pid, success_msg=f"Product {pid} loaded")
            if product:
                show_products([product])

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Goodbye! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
