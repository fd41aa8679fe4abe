"""Member roster commands (add, edit, remove, list)."""

import sqlite3
import sys

import typer
from rich.table import Table

from offertory.commands.common import console, now_ms, require_database, require_pin
from offertory.domain.members import (
    Member,
    add_member,
    match_members,
    remove_member,
    update_member,
    validate_member,
)
from offertory.domain.models import MemberId, allocate_id
from offertory.store.queries import get_members, save_members
from offertory.store.schema import get_db_path


def resolve_member_arg(members: list[Member], query: str) -> Member:
    """Resolve a --member argument to exactly one member, or exit."""
    matches = match_members(members, query)
    if not matches:
        console.print(f"[red]No member matches '{query}'[/red]")
        sys.exit(1)
    if len(matches) > 1:
        console.print(f"[red]Several members are named '{query}'. Use the id instead:[/red]")
        for member in matches:
            console.print(f"  {member.id}  {member.name} ({member.position})")
        sys.exit(1)
    return matches[0]


def add_member_command(name: str, position: str) -> None:
    """Add a member to the roster."""
    db_path = get_db_path()
    require_database(db_path)

    name = name.strip()
    error = validate_member(name, position)
    if error:
        console.print(f"[red]{error}[/red]")
        sys.exit(1)

    try:
        members = get_members(db_path)
        member_id = MemberId(allocate_id([m.id for m in members], now_ms()))
        save_members(add_member(members, Member(id=member_id, name=name, position=position)), db_path)
        console.print(f"[green]✓[/green] Added member: {name} ({position}) [dim]id {member_id}[/dim]")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def edit_member_command(query: str, name: str | None, position: str | None) -> None:
    """Change a member's name or position."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        members = get_members(db_path)
        member = resolve_member_arg(members, query)

        new_name = (name if name is not None else member.name).strip()
        new_position = position if position is not None else member.position
        error = validate_member(new_name, new_position)
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)

        require_pin(db_path)
        save_members(update_member(members, member.id, new_name, new_position), db_path)
        console.print(f"[green]✓[/green] Updated member {member.id}: {new_name} ({new_position})")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def remove_member_command(query: str) -> None:
    """Remove a member. Their transactions stay and show as unspecified."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        members = get_members(db_path)
        member = resolve_member_arg(members, query)

        require_pin(db_path)
        console.print(
            f"[yellow]Remove {member.name} ({member.position})?[/yellow]\n"
            "[dim]Their transactions are kept but will show as '미지정'.[/dim]"
        )
        if not typer.confirm("Continue?", default=False):
            console.print("[dim]Cancelled[/dim]")
            return

        save_members(remove_member(members, member.id), db_path)
        console.print(f"[green]✓[/green] Removed member: {member.name}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def list_members_command() -> None:
    """List the roster."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        members = get_members(db_path)

        if not members:
            console.print("[yellow]No members yet[/yellow]")
            return

        table = Table(title=f"Members ({len(members)})")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Name", style="cyan")
        table.add_column("Position", style="magenta")

        for member in members:
            table.add_row(str(member.id), member.name, member.position)

        console.print(table)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
