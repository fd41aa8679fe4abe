"""Pure functions that derive ledger views from the transaction log.

This module contains the functional core for the ledger screen:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Every call builds its results from scratch out of the transactions and
members it is given, so recomputing after any change is always safe.

Records whose date is not a valid YYYY-MM-DD string are left out of every
date-bucketed figure (today split, week and year windows, year discovery) but
still appear in the ledger rows, placed by their raw date string. Records
with a non-positive amount contribute zero everywhere.

All monetary amounts are whole won (Money type).
"""

from dataclasses import dataclass
from functools import cmp_to_key
from typing import TypeVar

from offertory.dates import is_iso_date, parse_iso_date, week_start, year_range
from offertory.domain.collation import Collator, korean_compare
from offertory.domain.members import Member, member_names_by_id, sort_name_for
from offertory.domain.models import (
    BUILDING_CATEGORY,
    CORE_RECURRING_CATEGORIES,
    EXPENSE,
    INCOME,
    INCOME_CATEGORY_PRIORITY,
    MISSION_CATEGORY,
    CategoryName,
    IsoDate,
    MemberId,
    Money,
)
from offertory.domain.transactions import Transaction, signed_amount


@dataclass(frozen=True)
class LedgerRow:
    """A transaction with the account balance as of that transaction."""

    transaction: Transaction
    balance: Money


@dataclass(frozen=True)
class BalanceSplit:
    """Balance carried in from before today plus today's net change."""

    previous_balance: Money
    todays_change: Money
    todays_balance: Money


@dataclass(frozen=True)
class PeriodTotals:
    """Income, expense, and net for one time window."""

    income: Money
    expense: Money
    net: Money


@dataclass(frozen=True)
class CategoryGroupTotals:
    """Income split into the core recurring group and the two special offerings."""

    core: dict[CategoryName, Money]
    mission: Money
    building: Money


@dataclass(frozen=True)
class PeriodSummary:
    """Totals for the current week, the current year, and a selected year."""

    weekly: PeriodTotals
    yearly: PeriodTotals
    weekly_categories: CategoryGroupTotals
    selected_year_categories: CategoryGroupTotals


@dataclass(frozen=True)
class LedgerSummary:
    """Everything the ledger screen shows, derived in one pass."""

    today: IsoDate
    selected_year: int
    rows: list[LedgerRow]
    balance: BalanceSplit
    periods: PeriodSummary
    available_years: list[int]


_TYPE_RANK = {INCOME: 0, EXPENSE: 1}

# Dates and ids; both sides of a comparison share one type
_OrderKey = TypeVar("_OrderKey", str, int)


def _income_rank(category: str) -> int:
    try:
        return INCOME_CATEGORY_PRIORITY.index(CategoryName(category))
    except ValueError:
        return len(INCOME_CATEGORY_PRIORITY)


def _three_way(a: _OrderKey, b: _OrderKey) -> int:
    return (a > b) - (a < b)


def compare_transactions(
    a: Transaction,
    b: Transaction,
    names: dict[MemberId, str],
    compare: Collator = korean_compare,
) -> int:
    """Order two transactions for the ledger view.

    Keys, in priority order:
    1. Date ascending.
    2. Income before expense.
    3. Both income: category priority, then member name descending.
    4. Both expense: category descending, then memo descending.
    5. Id ascending.

    Income categories missing from the priority list share one rank after
    all listed categories; the name and id keys order them from there.

    Args:
        a: First transaction.
        b: Second transaction.
        names: Member names by id, for resolving income rows.
        compare: Locale-aware three-way string comparator.

    Returns:
        Negative if a sorts first, positive if b sorts first. Only 0 when
        both have the same id.
    """
    if a.date != b.date:
        return _three_way(a.date, b.date)

    rank_a = _TYPE_RANK.get(a.type, len(_TYPE_RANK))
    rank_b = _TYPE_RANK.get(b.type, len(_TYPE_RANK))
    if rank_a != rank_b:
        return rank_a - rank_b

    if a.type == INCOME:
        category_order = _income_rank(a.category) - _income_rank(b.category)
        if category_order != 0:
            return category_order
        name_order = compare(sort_name_for(names, b.member_id), sort_name_for(names, a.member_id))
        if name_order != 0:
            return name_order

    elif a.type == EXPENSE:
        category_order = compare(b.category, a.category)
        if category_order != 0:
            return category_order
        memo_order = compare(b.memo or "", a.memo or "")
        if memo_order != 0:
            return memo_order

    return _three_way(a.id, b.id)


def sort_for_ledger(
    transactions: list[Transaction],
    members: list[Member],
    compare: Collator = korean_compare,
) -> list[Transaction]:
    """Sort transactions oldest first in ledger order.

    Args:
        transactions: Transactions in any order.
        members: Roster used to resolve names for income tie-breaks.
        compare: Locale-aware three-way string comparator.

    Returns:
        New list in ascending ledger order.
    """
    names = member_names_by_id(members)
    return sorted(transactions, key=cmp_to_key(lambda a, b: compare_transactions(a, b, names, compare)))


def running_balances(ordered: list[Transaction]) -> list[LedgerRow]:
    """Fold transactions into running balances.

    Args:
        ordered: Transactions in ascending ledger order.

    Returns:
        Rows most recent first, each carrying the balance after that
        transaction was applied.
    """
    rows: list[LedgerRow] = []
    balance = 0
    for txn in ordered:
        balance += signed_amount(txn)
        rows.append(LedgerRow(transaction=txn, balance=Money(balance)))
    rows.reverse()
    return rows


def split_today_balance(transactions: list[Transaction], today: IsoDate) -> BalanceSplit:
    """Split the balance into what was carried in and today's change.

    Args:
        transactions: All transactions.
        today: Current local date (YYYY-MM-DD).

    Returns:
        BalanceSplit for ``today``.
    """
    previous = 0
    change = 0
    for txn in transactions:
        if not is_iso_date(txn.date):
            continue
        if txn.date < today:
            previous += signed_amount(txn)
        elif txn.date == today:
            change += signed_amount(txn)
    return BalanceSplit(
        previous_balance=Money(previous),
        todays_change=Money(change),
        todays_balance=Money(previous + change),
    )


def filter_window(transactions: list[Transaction], start: IsoDate, end: IsoDate) -> list[Transaction]:
    """Select transactions dated within an inclusive window.

    Records with an invalid date are never selected.
    """
    return [txn for txn in transactions if is_iso_date(txn.date) and start <= txn.date <= end]


def calculate_period_totals(transactions: list[Transaction]) -> PeriodTotals:
    """Sum income and expense over a set of transactions.

    Returns:
        PeriodTotals with both sums as positive amounts and their difference.
    """
    income = 0
    expense = 0
    for txn in transactions:
        amount = signed_amount(txn)
        if amount > 0:
            income += amount
        else:
            expense -= amount
    return PeriodTotals(income=Money(income), expense=Money(expense), net=Money(income - expense))


def calculate_category_groups(transactions: list[Transaction]) -> CategoryGroupTotals:
    """Sum income into the core recurring categories and the special offerings.

    Returns:
        CategoryGroupTotals with one entry per core category (zero included),
        in display order.
    """
    core = {category: 0 for category in CORE_RECURRING_CATEGORIES}
    mission = 0
    building = 0
    for txn in transactions:
        if txn.type != INCOME:
            continue
        amount = signed_amount(txn)
        if txn.category in core:
            core[txn.category] += amount
        elif txn.category == MISSION_CATEGORY:
            mission += amount
        elif txn.category == BUILDING_CATEGORY:
            building += amount
    return CategoryGroupTotals(
        core={category: Money(total) for category, total in core.items()},
        mission=Money(mission),
        building=Money(building),
    )


def summarize_periods(transactions: list[Transaction], today: IsoDate, selected_year: int) -> PeriodSummary:
    """Aggregate the weekly, current-year, and selected-year windows.

    The week runs from the most recent Sunday through today and the current
    year from 1 January through today. The selected year covers the whole
    calendar year regardless of today.

    Args:
        transactions: All transactions.
        today: Current local date (YYYY-MM-DD).
        selected_year: Year chosen for the category breakdown.

    Returns:
        PeriodSummary for the three windows.
    """
    this_week = filter_window(transactions, week_start(today), today)
    this_year = filter_window(transactions, year_range(int(today[:4]))[0], today)
    chosen_year = filter_window(transactions, *year_range(selected_year))

    return PeriodSummary(
        weekly=calculate_period_totals(this_week),
        yearly=calculate_period_totals(this_year),
        weekly_categories=calculate_category_groups(this_week),
        selected_year_categories=calculate_category_groups(chosen_year),
    )


def available_years(transactions: list[Transaction], current_year: int) -> list[int]:
    """List the years a user can pick for the breakdown.

    Args:
        transactions: All transactions.
        current_year: Always included, even without transactions.

    Returns:
        Distinct years, newest first.
    """
    years = {current_year}
    for txn in transactions:
        day = parse_iso_date(txn.date)
        if day is not None:
            years.add(day.year)
    return sorted(years, reverse=True)


def aggregate_ledger(
    transactions: list[Transaction],
    members: list[Member],
    today: IsoDate,
    selected_year: int,
    compare: Collator = korean_compare,
) -> LedgerSummary:
    """Derive every ledger view from the full transaction log.

    Args:
        transactions: All transactions, in any order.
        members: Current roster, for name resolution only.
        today: Current local date (YYYY-MM-DD), injected by the caller.
        selected_year: Year chosen for the category breakdown.
        compare: Locale-aware three-way string comparator.

    Returns:
        LedgerSummary built fresh from the inputs.

    Raises:
        ValueError: If ``today`` is not a valid date.
    """
    current = parse_iso_date(today)
    if current is None:
        raise ValueError(f"Invalid date for today: {today!r}")

    ordered = sort_for_ledger(transactions, members, compare)

    return LedgerSummary(
        today=today,
        selected_year=selected_year,
        rows=running_balances(ordered),
        balance=split_today_balance(transactions, today),
        periods=summarize_periods(transactions, today, selected_year),
        available_years=available_years(transactions, current.year),
    )
