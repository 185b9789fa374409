import json
import logging
import os
from typing import Optional

import typer

from config import settings
from library_core import BookBuilder, LibraryManager, LoanResult, User
from library_core.services import create_email_service
from utils.validators import TextValidator
from utils.ui_helpers import set_output_mode, print_list_result, print_loans_result, print_stats_result

APP_NAME = "Library CLI"

logger = logging.getLogger(__name__)

app = typer.Typer(help=f"{APP_NAME}: catalog, subscriber notifications and loans")


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default from LOG_LEVEL)",
    ),
):
    """Global options (output mode, log level)."""
    if output:
        set_output_mode(output)
    logging.basicConfig(level=(log_level or settings.log_level).upper())


def _report_loan(result: LoanResult) -> None:
    if not result.ok:
        print(f"Book with ISBN {result.isbn} not found.")
    elif not result.email_sent:
        print(f"Loan of {result.isbn} recorded, but the confirmation email was not delivered.")


def _print_summary(library: LibraryManager) -> None:
    print_list_result(library.list_books())
    print_loans_result(library.list_loans())
    print_stats_result(library.get_statistics())


@app.command("demo")
def cli_demo(
    title: str = typer.Option("The Great Gatsby", help="Title of the book to add"),
    author: str = typer.Option("F. Scott Fitzgerald", help="Author of the book to add"),
    isbn: str = typer.Option("123456789", help="ISBN of the book to add"),
    user_id: str = typer.Option("user01", "--user-id", help="Id of the subscribing user"),
    email: str = typer.Option("user01@example.com", help="Email of the subscribing user"),
    borrower: Optional[str] = typer.Option(None, help="User reference for the loan (default: --email)"),
    email_backend: Optional[str] = typer.Option(None, "--email-backend", help="console | smtp (default from EMAIL_BACKEND)"),
):
    """Run the sample flow: subscribe a user, add a book, lend it."""
    LibraryManager.reset_instance()
    try:
        library = LibraryManager.get_instance(create_email_service(email_backend))
    except ValueError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    User.register(user_id, email)

    try:
        book = BookBuilder().set_title(title).set_author(author).set_isbn(isbn).build()
    except ValueError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)
    library.add_book(book)

    _report_loan(library.loan_book(isbn, borrower or email))
    _print_summary(library)


@app.command("run")
def cli_run(
    file_path: str,
    strict: bool = typer.Option(False, "--strict", help="Validate books (title, author, ISBN) and user email addresses"),
    email_backend: Optional[str] = typer.Option(None, "--email-backend", help="console | smtp (default from EMAIL_BACKEND)"),
):
    """Play a JSON scenario with "users", "books" and "loans" lists against a fresh library."""
    if not os.path.exists(file_path):
        print(f"File not found: {file_path}")
        raise typer.Exit(code=1)

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            scenario = json.load(f)
    except json.JSONDecodeError as e:
        print(f"Invalid scenario file: {e}")
        raise typer.Exit(code=1)
    if not isinstance(scenario, dict):
        print("Invalid scenario file: expected a JSON object")
        raise typer.Exit(code=1)
    for section in ("users", "books", "loans"):
        entries = scenario.get(section, [])
        if not isinstance(entries, list) or not all(isinstance(entry, dict) for entry in entries):
            print(f"Invalid scenario file: '{section}' must be a list of JSON objects")
            raise typer.Exit(code=1)
    logger.info(
        f"Scenario {file_path}: {len(scenario.get('users', []))} users, "
        f"{len(scenario.get('books', []))} books, {len(scenario.get('loans', []))} loans"
    )

    try:
        library = LibraryManager(create_email_service(email_backend))
    except ValueError as e:
        print(f"Error: {e}")
        raise typer.Exit(code=1)

    for entry in scenario.get("users", []):
        user = User(entry.get("id", entry.get("user_id", "")), entry.get("email", ""))
        if strict and not TextValidator.validate_email(user.email):
            print(f"Skipped user: Invalid email: {user.email!r}")
            continue
        library.register_user(user)

    for entry in scenario.get("books", []):
        builder = (
            BookBuilder(strict=strict)
            .set_title(entry.get("title", ""))
            .set_author(entry.get("author", ""))
            .set_isbn(entry.get("isbn", ""))
        )
        try:
            library.add_book(builder.build())
        except ValueError as e:
            print(f"Skipped book: {e}")

    for entry in scenario.get("loans", []):
        _report_loan(library.loan_book(entry.get("isbn", ""), entry.get("user", "")))

    _print_summary(library)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
