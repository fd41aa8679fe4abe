"""Expense category registry commands (list, add, rename, remove)."""

import sqlite3
import sys

import typer

from offertory.commands.common import console, require_database, require_pin
from offertory.domain.categories import add_category, is_category_in_use, remove_category, rename_category
from offertory.domain.models import INCOME_CATEGORIES
from offertory.domain.transactions import transaction_to_dict
from offertory.store.queries import get_expense_categories, get_transactions, save_expense_categories, set_slots
from offertory.store.schema import EXPENSE_CATEGORIES_SLOT, TRANSACTIONS_SLOT, get_db_path


def list_categories_command() -> None:
    """List income categories and the registered expense categories."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        expense = get_expense_categories(db_path)
        console.print("[bold green]Income categories:[/bold green]")
        console.print("  " + ", ".join(INCOME_CATEGORIES))
        console.print("[bold red]Expense categories:[/bold red]")
        console.print("  " + (", ".join(expense) if expense else "[dim]none[/dim]"))

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def add_category_command(name: str) -> None:
    """Register a new expense category."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        categories, error = add_category(get_expense_categories(db_path), name)
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)
        save_expense_categories(categories, db_path)
        console.print(f"[green]✓[/green] Added expense category: {name.strip()}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def rename_category_command(old_name: str, new_name: str) -> None:
    """Rename an expense category, updating the expenses that use it."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        transactions = get_transactions(db_path)
        categories, updated, error = rename_category(
            get_expense_categories(db_path), transactions, old_name, new_name
        )
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)

        require_pin(db_path)
        set_slots(
            {
                EXPENSE_CATEGORIES_SLOT: list(categories),
                TRANSACTIONS_SLOT: [transaction_to_dict(t) for t in updated],
            },
            db_path,
        )
        moved = sum(1 for before, after in zip(transactions, updated) if before.category != after.category)
        console.print(f"[green]✓[/green] Renamed '{old_name}' to '{new_name.strip()}' ({moved} transactions updated)")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def remove_category_command(name: str) -> None:
    """Remove an expense category. Existing transactions keep it."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        categories = get_expense_categories(db_path)
        if name not in categories:
            console.print(f"[red]Category '{name}' does not exist[/red]")
            sys.exit(1)

        require_pin(db_path)
        if is_category_in_use(get_transactions(db_path), name):
            console.print(
                "[yellow]Existing transactions use this category. They are kept, "
                "but the category will no longer be offered.[/yellow]"
            )
        if not typer.confirm(f"Remove expense category '{name}'?", default=False):
            console.print("[dim]Cancelled[/dim]")
            return

        save_expense_categories(remove_category(categories, name), db_path)
        console.print(f"[green]✓[/green] Removed expense category: {name}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
