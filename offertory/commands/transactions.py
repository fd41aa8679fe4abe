"""Transaction commands (income, expense, edit, delete, list)."""

import sqlite3
import sys
from dataclasses import replace

import typer
from rich.table import Table

from offertory.commands.common import console, normalize_date, now_ms, require_database, require_pin, today_iso
from offertory.commands.members import resolve_member_arg
from offertory.config import load_settings
from offertory.dates import day_of_week_label
from offertory.domain.ledger import BalanceSplit, aggregate_ledger
from offertory.domain.members import resolve_member_name
from offertory.domain.models import (
    EXPENSE,
    INCOME,
    INCOME_CATEGORIES,
    CategoryName,
    MemberId,
    Money,
    TransactionId,
    allocate_id,
)
from offertory.domain.paging import paginate
from offertory.domain.transactions import (
    Transaction,
    add_transaction,
    find_transaction,
    format_won,
    remove_transaction,
    update_transaction,
    validate_transaction,
)
from offertory.store.queries import (
    get_expense_categories,
    get_members,
    get_transactions,
    load_state,
    save_transactions,
)
from offertory.store.schema import get_db_path


def _check_category(txn_type: str, category: str, expense_categories: list[CategoryName]) -> None:
    allowed = list(INCOME_CATEGORIES) if txn_type == INCOME else expense_categories
    if category not in allowed:
        console.print(f"[red]Unknown {txn_type} category: {category}[/red]")
        console.print(f"[dim]Choose one of: {', '.join(allowed)}[/dim]")
        sys.exit(1)


def _record(txn: Transaction, member_label: str) -> None:
    console.print(f"  Date: {txn.date} {day_of_week_label(txn.date)}")
    console.print(f"  Category: {txn.category}")
    console.print(f"  Member: {member_label}")
    console.print(f"  Amount: {format_won(txn.amount)}")
    if txn.memo:
        console.print(f"  Memo: {txn.memo}")


def income_command(amount: int, member: str, category: str, date: str | None) -> None:
    """Record an offering from a member."""
    db_path = get_db_path()
    require_database(db_path)
    txn_date = normalize_date(date)

    try:
        members = get_members(db_path)
        donor = resolve_member_arg(members, member)

        error = validate_transaction(INCOME, category, amount, donor.id)
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)
        _check_category(INCOME, category, [])

        transactions = get_transactions(db_path)
        txn = Transaction(
            id=TransactionId(allocate_id([t.id for t in transactions], now_ms())),
            type=INCOME,
            date=txn_date,
            category=CategoryName(category),
            amount=Money(amount),
            member_id=donor.id,
        )
        save_transactions(add_transaction(transactions, txn), db_path)

        console.print("[green]✓[/green] Income recorded:")
        _record(txn, f"{donor.name} ({donor.position})")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def expense_command(amount: int, category: str, member: str | None, memo: str | None, date: str | None) -> None:
    """Record a disbursement."""
    db_path = get_db_path()
    require_database(db_path)
    txn_date = normalize_date(date)

    try:
        members = get_members(db_path)
        payee = resolve_member_arg(members, member) if member else None

        error = validate_transaction(EXPENSE, category, amount, payee.id if payee else None)
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)
        _check_category(EXPENSE, category, get_expense_categories(db_path))

        transactions = get_transactions(db_path)
        txn = Transaction(
            id=TransactionId(allocate_id([t.id for t in transactions], now_ms())),
            type=EXPENSE,
            date=txn_date,
            category=CategoryName(category),
            amount=Money(amount),
            member_id=payee.id if payee else None,
            memo=memo or "",
        )
        save_transactions(add_transaction(transactions, txn), db_path)

        console.print("[green]✓[/green] Expense recorded:")
        _record(txn, f"{payee.name} ({payee.position})" if payee else "-")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def edit_command(
    transaction_id: int,
    date: str | None = None,
    amount: int | None = None,
    category: str | None = None,
    member: str | None = None,
    memo: str | None = None,
) -> None:
    """Edit fields of an existing transaction. The type cannot change."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        transactions = get_transactions(db_path)
        txn = find_transaction(transactions, transaction_id)
        if txn is None:
            console.print(f"[red]Transaction {transaction_id} not found[/red]")
            sys.exit(1)

        members = get_members(db_path)
        member_id: MemberId | None = txn.member_id
        if member is not None:
            member_id = resolve_member_arg(members, member).id if member else None

        updated = replace(
            txn,
            date=normalize_date(date) if date else txn.date,
            amount=Money(amount) if amount is not None else txn.amount,
            category=CategoryName(category) if category is not None else txn.category,
            member_id=member_id,
            memo=memo if memo is not None and txn.type == EXPENSE else txn.memo,
        )

        error = validate_transaction(updated.type, updated.category, updated.amount, updated.member_id)
        if error:
            console.print(f"[red]{error}[/red]")
            sys.exit(1)
        if category is not None:
            _check_category(updated.type, updated.category, get_expense_categories(db_path))

        require_pin(db_path)
        save_transactions(update_transaction(transactions, updated), db_path)

        console.print(f"[green]✓[/green] Updated transaction {transaction_id}:")
        _record(updated, resolve_member_name(members, updated.member_id) if updated.member_id else "-")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def delete_command(transaction_id: int) -> None:
    """Delete a transaction."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        transactions = get_transactions(db_path)
        txn = find_transaction(transactions, transaction_id)
        if txn is None:
            console.print(f"[red]Transaction {transaction_id} not found[/red]")
            sys.exit(1)

        require_pin(db_path)
        _record(txn, resolve_member_name(get_members(db_path), txn.member_id) if txn.member_id else "-")
        if not typer.confirm("Delete this transaction?", default=False):
            console.print("[dim]Cancelled[/dim]")
            return

        save_transactions(remove_transaction(transactions, transaction_id), db_path)
        console.print(f"[green]✓[/green] Deleted transaction {transaction_id}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def render_balance_split(balance: BalanceSplit) -> None:
    """Print the carried-in balance, today's change, and today's balance."""
    change_style = "green" if balance.todays_change >= 0 else "red"
    console.print(
        f"[bold]Previous balance:[/bold] {format_won(balance.previous_balance)}   "
        f"[bold]Today:[/bold] [{change_style}]{format_won(balance.todays_change, include_sign=True)}[/{change_style}]   "
        f"[bold cyan]Balance:[/bold cyan] {format_won(balance.todays_balance)}"
    )


def list_command(page: int = 1) -> None:
    """List transactions, most recent first, with running balances."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        state = load_state(db_path)
        today = today_iso()
        summary = aggregate_ledger(state.data.transactions, state.data.members, today, int(today[:4]))

        render_balance_split(summary.balance)

        if not summary.rows:
            console.print("[yellow]No transactions found[/yellow]")
            return

        settings = load_settings()
        current = paginate(summary.rows, page, settings["page_size"])

        table = Table(title=f"{state.church_name} - Page {current.number}/{current.total_pages}")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Date", style="cyan")
        table.add_column("Category", style="magenta")
        table.add_column("Name / Memo", style="white")
        table.add_column("Amount", justify="right")
        table.add_column("Balance", justify="right")

        for row in current.items:
            txn = row.transaction
            if txn.type == INCOME:
                amount_display = f"[green]+{format_won(txn.amount)}[/green]"
                detail = resolve_member_name(state.data.members, txn.member_id)
            else:
                amount_display = f"[red]-{format_won(txn.amount)}[/red]"
                detail = txn.memo or "[dim]-[/dim]"

            table.add_row(
                str(txn.id),
                f"{txn.date} {day_of_week_label(txn.date)}",
                txn.category,
                detail,
                amount_display,
                format_won(row.balance),
            )

        console.print(table)

        links = " ".join(
            f"[bold]{n}[/bold]" if n == current.number else str(n)
            for n in range(current.group_start, current.group_end + 1)
        )
        prefix = "<< " if current.has_previous_group else ""
        suffix = " >>" if current.has_next_group else ""
        console.print(f"[dim]Pages:[/dim] {prefix}{links}{suffix}")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
