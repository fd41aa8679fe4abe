"""Helpers shared by the command modules: clock, date input, database guard, PIN gate."""

import os
import sys
import time
from datetime import date
from pathlib import Path

import pandas as pd
import typer
from rich.console import Console

from offertory.domain.models import IsoDate
from offertory.domain.pin import hash_pin, validate_pin, verify_pin
from offertory.store.queries import get_pin_hash, set_pin_hash
from offertory.store.schema import database_exists

console = Console()


def today_iso() -> IsoDate:
    """Current local calendar date (YYYY-MM-DD)."""
    return IsoDate(date.today().isoformat())


def now_ms() -> int:
    """Current time in milliseconds, used to allocate ids."""
    return time.time_ns() // 1_000_000


def normalize_date(raw: str | None) -> IsoDate:
    """Normalize a user-entered date to YYYY-MM-DD.

    Uses pandas.to_datetime so ISO, dotted (2024.06.09), and slashed input
    all work. An empty value means today.

    Exits with status 1 if the date cannot be parsed.
    """
    if not raw:
        return today_iso()
    try:
        return IsoDate(pd.to_datetime(raw, dayfirst=False).strftime("%Y-%m-%d"))
    except (ValueError, pd.errors.ParserError) as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, YYYY.MM.DD, YYYY/MM/DD, etc.[/dim]")
        sys.exit(1)


def require_database(db_path: Path) -> None:
    """Exit with a hint if the database has not been initialized."""
    if not database_exists(db_path):
        console.print("[red]Database not found. Run 'offertory init' first.[/red]", style="bold")
        sys.exit(1)


def require_pin(db_path: Path) -> None:
    """Gate a sensitive action behind the PIN.

    If no PIN exists yet the user creates one, and the action proceeds.
    Exits with status 1 on a wrong or invalid PIN.
    """
    stored = get_pin_hash(db_path)

    if stored is None:
        console.print("[yellow]No PIN set yet. Create a 4-digit PIN to protect sensitive actions.[/yellow]")
        pin = typer.prompt("New PIN", hide_input=True)
        confirmation = typer.prompt("Confirm PIN", hide_input=True)
        error = validate_pin(pin, confirmation)
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)
        set_pin_hash(hash_pin(pin, os.urandom(16)), db_path)
        console.print("[green]✓[/green] PIN set")
        return

    pin = typer.prompt("PIN", hide_input=True)
    if validate_pin(pin) is not None or not verify_pin(pin, stored):
        console.print("[red]Incorrect PIN[/red]")
        sys.exit(1)
