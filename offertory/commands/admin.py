"""Admin commands for init, church name, and settings."""

import logging
import sqlite3
import sys
import tomllib
from pathlib import Path

from offertory.commands.common import console, require_database, require_pin
from offertory.config import DEFAULT_SETTINGS, create_default_config, get_config_path, load_settings, set_setting
from offertory.store.queries import get_church_name, seed_defaults, set_church_name
from offertory.store.schema import get_db_path, init_database

logger = logging.getLogger(__name__)


def run_migration(db_path: Path) -> None:
    """Bring an existing database up to date without touching its data."""
    console.print(f"[cyan]Running migrations on {db_path}...[/cyan]")
    init_database(db_path)
    seeded = seed_defaults(db_path)
    logger.debug("Seeded slots during migration: %s", seeded)
    console.print("[green]✓[/green] Migrations complete")
    if seeded:
        console.print(f"[dim]Filled in missing slots: {', '.join(seeded)}[/dim]")


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize the database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    seed_defaults(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False, migrate: bool = False) -> None:
    """Initialize offertory database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = db_path.exists()
    config_exists = config_path.exists()

    try:
        if migrate:
            if not db_exists:
                console.print("[red]No database found to migrate[/red]", style="bold")
                console.print(f"[dim]Expected location: {db_path}[/dim]")
                sys.exit(1)
            run_migration(db_path)
            return

        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'offertory init --force' to reset the config[/yellow]")
            console.print("[yellow]Or 'offertory init --migrate' to update database schema only[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def rename_command(name: str) -> None:
    """Change the church name shown in headings."""
    db_path = get_db_path()
    require_database(db_path)

    name = name.strip()
    if not name:
        console.print("[red]Church name is required[/red]")
        sys.exit(1)

    try:
        previous = get_church_name(db_path)
        require_pin(db_path)
        set_church_name(name, db_path)
        console.print(f"[green]✓[/green] Church name changed: {previous} → {name}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def config_command(key: str | None = None, value: str | None = None) -> None:
    """Show settings, or change one."""
    try:
        if key is None:
            for name, current in load_settings().items():
                console.print(f"  {name} = {current!r}")
            console.print(f"[dim]Config: {get_config_path()}[/dim]")
            return

        if key not in DEFAULT_SETTINGS:
            console.print(f"[red]Unknown setting: {key}[/red]")
            console.print(f"[dim]Available: {', '.join(DEFAULT_SETTINGS)}[/dim]")
            sys.exit(1)

        if value is None:
            console.print(f"  {key} = {load_settings()[key]!r}")
            return

        parsed: int | str = value
        if isinstance(DEFAULT_SETTINGS[key], int):
            try:
                parsed = int(value)
            except ValueError:
                console.print(f"[red]{key} must be a whole number[/red]")
                sys.exit(1)
            if parsed < 1:
                console.print(f"[red]{key} must be at least 1[/red]")
                sys.exit(1)

        set_setting(key, parsed)
        logger.debug("Updated setting %s in %s", key, get_config_path())
        console.print(f"[green]✓[/green] {key} = {parsed!r}")

    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Config file is not valid TOML: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)
