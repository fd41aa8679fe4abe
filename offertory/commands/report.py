"""Summary and search commands for viewing ledger figures."""

import sqlite3
import sys

from rich.table import Table

from offertory.commands.common import console, normalize_date, require_database, today_iso
from offertory.commands.members import resolve_member_arg
from offertory.commands.transactions import render_balance_split
from offertory.dates import one_year_before
from offertory.domain.ledger import CategoryGroupTotals, PeriodTotals, aggregate_ledger
from offertory.domain.members import Member, resolve_member_name
from offertory.domain.models import ALL_CATEGORIES, EXPENSE, INCOME, INCOME_CATEGORIES, TRANSACTION_TYPES
from offertory.domain.search import (
    SearchResult,
    calculate_daily_totals,
    filter_by_date_range,
    search_by_amount,
    search_by_category,
    search_by_member,
)
from offertory.domain.transactions import format_won
from offertory.store.queries import load_state
from offertory.store.schema import get_db_path

# 주정헌금 is labelled as the Sunday offering on screen
CATEGORY_LABELS = {"주정헌금": "주일헌금"}


def render_period_totals(weekly: PeriodTotals, yearly: PeriodTotals) -> None:
    """Print this week's and this year's income, expense, and net."""
    table = Table(title="Income & expense")
    table.add_column("", style="bold")
    table.add_column("This week", justify="right")
    table.add_column("This year", justify="right")

    table.add_row("[green]Income[/green]", format_won(weekly.income), format_won(yearly.income))
    table.add_row("[red]Expense[/red]", format_won(weekly.expense), format_won(yearly.expense))
    table.add_row("[cyan]Net[/cyan]", format_won(weekly.net), format_won(yearly.net))

    console.print(table)


def render_category_groups(weekly: CategoryGroupTotals, selected: CategoryGroupTotals, year: int) -> None:
    """Print the core recurring and special offering breakdowns."""
    table = Table(title="Offerings by category")
    table.add_column("Group", style="bold")
    table.add_column("Category", style="magenta")
    table.add_column("This week", justify="right")
    table.add_column(f"{year}", justify="right")

    for index, (category, amount) in enumerate(weekly.core.items()):
        table.add_row(
            "경상비" if index == 0 else "",
            CATEGORY_LABELS.get(category, category),
            format_won(amount),
            format_won(selected.core[category]),
        )
    table.add_row("특별헌금", "선교헌금", format_won(weekly.mission), format_won(selected.mission))
    table.add_row("", "건축헌금", format_won(weekly.building), format_won(selected.building))

    console.print(table)


def summary_command(year: int | None = None) -> None:
    """Show weekly and yearly totals, category breakdowns, and today's balance."""
    db_path = get_db_path()
    require_database(db_path)

    try:
        state = load_state(db_path)
        today = today_iso()
        selected_year = year if year is not None else int(today[:4])

        summary = aggregate_ledger(state.data.transactions, state.data.members, today, selected_year)

        console.print(f"[bold cyan]{state.church_name} 헌금관리[/bold cyan] [dim]{today}[/dim]\n")
        periods = summary.periods
        render_period_totals(periods.weekly, periods.yearly)
        render_category_groups(periods.weekly_categories, periods.selected_year_categories, selected_year)
        console.print(f"[dim]Years with data: {', '.join(str(y) for y in summary.available_years)}[/dim]\n")
        render_balance_split(summary.balance)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def _render_matches(result: SearchResult, title: str, members: list[Member]) -> None:
    table = Table(title=f"{title} ({len(result.transactions)} transactions, total {format_won(result.total)})")
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Category", style="magenta")
    table.add_column("Name / Memo")
    table.add_column("Amount", justify="right")

    for txn in result.transactions:
        if txn.type == INCOME:
            type_display = "[green]입금[/green]"
            detail = resolve_member_name(members, txn.member_id)
        else:
            type_display = "[red]출금[/red]"
            detail = txn.memo or "메모 없음"
        table.add_row(txn.date, type_display, txn.category, detail, format_won(txn.amount))

    console.print(table)


def _render_breakdown(result: SearchResult, title: str) -> None:
    table = Table(title=title)
    table.add_column("Category", style="magenta")
    table.add_column("Total", justify="right")

    for row in result.breakdown:
        table.add_row(row.category, format_won(row.total))
    table.add_section()
    table.add_row("[bold]Total[/bold]", f"[bold]{format_won(result.total)}[/bold]")

    console.print(table)


def search_command(
    member: str | None = None,
    category: str | None = None,
    txn_type: str = INCOME,
    amount: int | None = None,
    since: str | None = None,
    until: str | None = None,
) -> None:
    """Search transactions by member, category, or amount within a date range."""
    db_path = get_db_path()
    require_database(db_path)

    if sum(option is not None for option in (member, category, amount)) != 1:
        console.print("[red]Search by exactly one of --member, --category, or --amount[/red]")
        sys.exit(1)
    if txn_type not in TRANSACTION_TYPES:
        console.print(f"[red]--type must be '{INCOME}' or '{EXPENSE}'[/red]")
        sys.exit(1)

    try:
        state = load_state(db_path)
        today = today_iso()
        start = normalize_date(since) if since else one_year_before(today)
        end = normalize_date(until) if until else today

        in_range = filter_by_date_range(state.data.transactions, start, end)
        period = f"{start} ~ {end}"

        if member is not None:
            donor = resolve_member_arg(state.data.members, member)
            result = search_by_member(in_range, donor.id)
            _render_matches(result, f"{donor.name} offerings, {period}", state.data.members)

        elif category is not None:
            result = search_by_category(
                in_range,
                txn_type,
                category,
                list(INCOME_CATEGORIES),
                state.data.expense_categories,
            )
            if category == ALL_CATEGORIES:
                label = "All income" if txn_type == INCOME else "All expense"
                _render_breakdown(result, f"{label}, {period}")
            else:
                _render_matches(result, f"{category}, {period}", state.data.members)

        elif amount is not None:
            result = search_by_amount(in_range, amount)
            _render_matches(result, f"{format_won(amount)}, {period}", state.data.members)

        daily = calculate_daily_totals(state.data.transactions, today)
        console.print(
            f"\n[dim]Today ({today}):[/dim] [green]income {format_won(daily.income)}[/green] "
            f"[red]expense {format_won(daily.expense)}[/red]"
        )

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
