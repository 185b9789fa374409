import os
import json
from typing import List, Any, Dict
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()

def print_list_result(books: List[Any]) -> None:
    """Print the catalog in the current output mode.
    - plain: 'ISBN - Title by Author' lines, or 'No books in library.'
    - json: array of isbn, title, author
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print("No books in library.")
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("ISBN", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        for b in books:
            table.add_row(b.isbn, b.title, b.author)
        _console.print(table)
    else:
        for b in books:
            print(f"{b.isbn} - {b.title} by {b.author}")

def print_loans_result(loans: List[Any]) -> None:
    """Print the loan history; same modes as :func:`print_list_result`."""
    mode = get_output_mode()

    if not loans:
        print("No loans recorded.")
        return

    if mode == "json":
        print(json.dumps([loan.to_dict() for loan in loans], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📖 Loans", show_lines=True, header_style="bold cyan")
        table.add_column("ISBN", style="magenta", no_wrap=True)
        table.add_column("User", style="white")
        table.add_column("Date", style="dim")
        for loan in loans:
            table.add_row(loan.isbn, loan.user_id, loan.date.strftime("%Y-%m-%d %H:%M:%S"))
        _console.print(table)
    else:
        for loan in loans:
            print(f"{loan.isbn} loaned to {loan.user_id} at {loan.date:%Y-%m-%d %H:%M:%S}")

def print_stats_result(stats: Dict[str, Any]) -> None:
    mode = get_output_mode()

    if not stats:
        print("No statistics available.")
        return

    total = stats.get("total_books", 0)
    authors = stats.get("unique_authors", 0)
    loans = stats.get("total_loans", 0)
    subscribers = stats.get("subscribers", 0)

    if mode == "json":
        print(json.dumps(stats, ensure_ascii=False))
    elif mode == "rich":
        content = (
            f"[bold]Total Books:[/] {total}\n[bold]Unique Authors:[/] {authors}\n"
            f"[bold]Total Loans:[/] {loans}\n[bold]Subscribers:[/] {subscribers}"
        )
        _console.print(Panel.fit(content, title="📊 Stats", border_style="blue"))
    else:
        print(f"Total Books: {total}")
        print(f"Unique Authors: {authors}")
        print(f"Total Loans: {loans}")
        print(f"Subscribers: {subscribers}")
