"""CLI entry point for offertory."""

import typer

from offertory.commands.admin import config_command, init_command, rename_command
from offertory.commands.archive import (
    delete_snapshot_command,
    export_command,
    import_command,
    list_snapshots_command,
    restore_snapshot_command,
)
from offertory.commands.categories import (
    add_category_command,
    list_categories_command,
    remove_category_command,
    rename_category_command,
)
from offertory.commands.members import (
    add_member_command,
    edit_member_command,
    list_members_command,
    remove_member_command,
)
from offertory.commands.report import search_command, summary_command
from offertory.commands.transactions import (
    delete_command,
    edit_command,
    expense_command,
    income_command,
    list_command,
)
from offertory.logs import configure_logging

app = typer.Typer(
    name="offertory",
    help="Offertory - a church offering and expense ledger",
    add_completion=False,
)
member_app = typer.Typer(help="Manage the member roster.")
category_app = typer.Typer(help="Manage expense categories.")
snapshot_app = typer.Typer(help="Browse and restore saved snapshots.")
app.add_typer(member_app, name="member")
app.add_typer(category_app, name="category")
app.add_typer(snapshot_app, name="snapshot")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Offertory - a church offering and expense ledger."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Reset the config file even if one exists"),
    migrate: bool = typer.Option(False, "--migrate", help="Update an existing database schema only"),
) -> None:
    """Initialize offertory database and configuration."""
    init_command(force, migrate)


@app.command(name="rename")
def rename(name: str) -> None:
    """Change the church name."""
    rename_command(name)


@app.command(name="config")
def config(
    key: str = typer.Argument(None, help="Setting name (page_size, snapshot_limit, export_dir)"),
    value: str = typer.Argument(None, help="New value"),
) -> None:
    """Show or change settings."""
    config_command(key, value)


@app.command()
def income(
    amount: int,
    member: str = typer.Option(..., "--member", "-m", help="Member name or id"),
    category: str = typer.Option(..., "--category", "-c", help="Offering category (e.g. 십일조)"),
    date: str = typer.Option(None, "--date", "-d", help="Date (default: today)"),
) -> None:
    """Record an offering."""
    income_command(amount, member, category, date)


@app.command()
def expense(
    amount: int,
    category: str = typer.Option(..., "--category", "-c", help="Expense category"),
    member: str = typer.Option(None, "--member", "-m", help="Member name or id"),
    memo: str = typer.Option(None, "--memo", help="Memo"),
    date: str = typer.Option(None, "--date", "-d", help="Date (default: today)"),
) -> None:
    """Record an expense."""
    expense_command(amount, category, member, memo, date)


@app.command()
def edit(
    transaction_id: int,
    date: str = typer.Option(None, "--date", "-d", help="New date"),
    amount: int = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    member: str = typer.Option(None, "--member", "-m", help="New member name or id (empty to clear on expenses)"),
    memo: str = typer.Option(None, "--memo", help="New memo (expenses only)"),
) -> None:
    """Edit a transaction."""
    edit_command(transaction_id, date, amount, category, member, memo)


@app.command()
def delete(transaction_id: int) -> None:
    """Delete a transaction."""
    delete_command(transaction_id)


@app.command(name="list")
def list_transactions(
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
) -> None:
    """List transactions with running balances, most recent first."""
    list_command(page)


@app.command()
def summary(
    year: int = typer.Option(None, "--year", "-y", help="Year for the category breakdown (default: this year)"),
) -> None:
    """Show weekly and yearly totals and today's balance."""
    summary_command(year)


@app.command()
def search(
    member: str = typer.Option(None, "--member", "-m", help="Member name or id"),
    category: str = typer.Option(None, "--category", "-c", help="Category, or ALL for a breakdown"),
    txn_type: str = typer.Option("income", "--type", "-t", help="'income' or 'expense' for category search"),
    amount: int = typer.Option(None, "--amount", help="Exact amount"),
    since: str = typer.Option(None, "--since", help="Start date (default: one year ago)"),
    until: str = typer.Option(None, "--until", help="End date (default: today)"),
) -> None:
    """Search transactions by member, category, or amount."""
    search_command(member, category, txn_type, amount, since, until)


@app.command(name="export")
def export(
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: 헌금_YYYY-MM-DD.json)"),
) -> None:
    """Save a snapshot and export data to JSON."""
    export_command(output)


@app.command(name="import")
def import_data(path: str) -> None:
    """Replace all data with an exported JSON file."""
    import_command(path)


@member_app.command(name="add")
def member_add(
    name: str,
    position: str = typer.Option(..., "--position", "-p", help="Position (e.g. 집사)"),
) -> None:
    """Add a member."""
    add_member_command(name, position)


@member_app.command(name="edit")
def member_edit(
    member: str,
    name: str = typer.Option(None, "--name", "-n", help="New name"),
    position: str = typer.Option(None, "--position", "-p", help="New position"),
) -> None:
    """Edit a member's name or position."""
    edit_member_command(member, name, position)


@member_app.command(name="remove")
def member_remove(member: str) -> None:
    """Remove a member."""
    remove_member_command(member)


@member_app.command(name="list")
def member_list() -> None:
    """List members."""
    list_members_command()


@category_app.command(name="list")
def category_list() -> None:
    """List categories."""
    list_categories_command()


@category_app.command(name="add")
def category_add(name: str) -> None:
    """Add an expense category."""
    add_category_command(name)


@category_app.command(name="rename")
def category_rename(old_name: str, new_name: str) -> None:
    """Rename an expense category and the expenses that use it."""
    rename_category_command(old_name, new_name)


@category_app.command(name="remove")
def category_remove(name: str) -> None:
    """Remove an expense category."""
    remove_category_command(name)


@snapshot_app.command(name="list")
def snapshot_list() -> None:
    """List saved snapshots."""
    list_snapshots_command()


@snapshot_app.command(name="restore")
def snapshot_restore(index: int) -> None:
    """Restore a snapshot by its number in the list."""
    restore_snapshot_command(index)


@snapshot_app.command(name="delete")
def snapshot_delete(index: int) -> None:
    """Delete a snapshot by its number in the list."""
    delete_snapshot_command(index)


if __name__ == "__main__":
    app()
