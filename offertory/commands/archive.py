"""Export, import, and snapshot history commands."""

import logging
import sqlite3
import sys
from datetime import datetime
from pathlib import Path

import typer
from rich.table import Table

from offertory.commands.common import console, require_database, require_pin, today_iso
from offertory.config import load_settings
from offertory.domain.archive import (
    ArchiveFormatError,
    LedgerData,
    Snapshot,
    export_file_name,
    parse_import,
    push_snapshot,
    remove_snapshot,
    render_export,
)
from offertory.store.queries import get_snapshots, load_state, save_data, save_snapshots
from offertory.store.schema import get_db_path

logger = logging.getLogger(__name__)


def _describe(data: LedgerData) -> str:
    return f"{len(data.members)} members, {len(data.transactions)} transactions"


def _format_timestamp(timestamp: str) -> str:
    try:
        return datetime.fromisoformat(timestamp).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return timestamp


def export_command(output: str | None = None) -> None:
    """Save a snapshot and write the data to a JSON file."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        require_pin(db_path)
        settings = load_settings()
        data = load_state(db_path).data

        snapshot = Snapshot(timestamp=datetime.now().astimezone().isoformat(), data=data)
        save_snapshots(push_snapshot(get_snapshots(db_path), snapshot, settings["snapshot_limit"]), db_path)
        console.print(f"[green]✓[/green] Snapshot saved ({_describe(data)})")

        if output:
            output_path = Path(output).expanduser()
        else:
            export_dir = Path(settings["export_dir"]).expanduser() if settings["export_dir"] else Path.cwd()
            output_path = export_dir / export_file_name(today_iso())
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(render_export(data), encoding="utf-8")
        logger.debug("Exported %s to %s", _describe(data), output_path)
        console.print(f"[green]✓[/green] Data exported to: {output_path}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)


def import_command(path: str) -> None:
    """Replace members, transactions, and categories with the contents of a JSON file."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        text = Path(path).expanduser().read_text(encoding="utf-8")
        result = parse_import(text)
        logger.debug("Parsed import file %s: %s, %d skipped", path, _describe(result.data), result.skipped_records)

        require_pin(db_path)
        console.print(f"[yellow]Importing replaces all current data with {_describe(result.data)}.[/yellow]")
        if not typer.confirm("Continue?", default=False):
            console.print("[dim]Cancelled[/dim]")
            return

        save_data(result.data, db_path)

        if result.used_default_categories:
            console.print("[green]✓[/green] Data from an older version imported; expense categories reset to defaults")
        else:
            console.print("[green]✓[/green] Data imported")
        if result.skipped_records:
            console.print(f"[yellow]Skipped {result.skipped_records} malformed records[/yellow]")

    except ArchiveFormatError as e:
        console.print(f"[red]Cannot import this file: {e}[/red]", style="bold")
        sys.exit(1)
    except UnicodeDecodeError as e:
        console.print(f"[red]Cannot import this file: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Cannot read file: {e}[/red]", style="bold")
        sys.exit(1)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def _pick_snapshot(snapshots: list[Snapshot], index: int) -> Snapshot:
    if not 1 <= index <= len(snapshots):
        console.print(f"[red]No snapshot #{index} (there are {len(snapshots)})[/red]")
        sys.exit(1)
    return snapshots[index - 1]


def list_snapshots_command() -> None:
    """List saved snapshots, newest first."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        snapshots = get_snapshots(db_path)
        if not snapshots:
            console.print("[yellow]No snapshots saved[/yellow]")
            return

        table = Table(title=f"Snapshots ({len(snapshots)})")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Saved at", style="cyan")
        table.add_column("Members", justify="right")
        table.add_column("Transactions", justify="right")

        for index, snapshot in enumerate(snapshots, 1):
            table.add_row(
                str(index),
                _format_timestamp(snapshot.timestamp),
                str(len(snapshot.data.members)),
                str(len(snapshot.data.transactions)),
            )

        console.print(table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def restore_snapshot_command(index: int) -> None:
    """Replace current data with a saved snapshot."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        snapshot = _pick_snapshot(get_snapshots(db_path), index)

        console.print(
            f"[yellow]Restoring the snapshot from {_format_timestamp(snapshot.timestamp)} "
            f"replaces all current data with {_describe(snapshot.data)}.[/yellow]"
        )
        if not typer.confirm("Continue?", default=False):
            console.print("[dim]Cancelled[/dim]")
            return

        save_data(snapshot.data, db_path)
        console.print("[green]✓[/green] Snapshot restored")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def delete_snapshot_command(index: int) -> None:
    """Delete a saved snapshot."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        snapshots = get_snapshots(db_path)
        snapshot = _pick_snapshot(snapshots, index)

        require_pin(db_path)
        if not typer.confirm(f"Delete the snapshot from {_format_timestamp(snapshot.timestamp)}?", default=False):
            console.print("[dim]Cancelled[/dim]")
            return

        save_snapshots(remove_snapshot(snapshots, snapshot.timestamp), db_path)
        console.print("[green]✓[/green] Snapshot deleted")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
