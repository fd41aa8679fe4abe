"""Pure functions for looking up transactions by member, category, or amount.

Every search runs over transactions already narrowed to a date range with
``filter_by_date_range``. Totals follow the ledger: a record with a
non-positive amount still matches but adds nothing to any sum.
"""

from dataclasses import dataclass

from offertory.domain.ledger import filter_window
from offertory.domain.models import (
    ALL_CATEGORIES,
    EXPENSE,
    INCOME,
    CategoryName,
    IsoDate,
    Money,
)
from offertory.domain.transactions import Transaction, signed_amount


@dataclass(frozen=True)
class CategoryTotal:
    """Summed amount for one category."""

    category: CategoryName
    total: Money


@dataclass(frozen=True)
class SearchResult:
    """Matching transactions and the sum of their amounts."""

    transactions: list[Transaction]
    total: Money
    breakdown: list[CategoryTotal]


@dataclass(frozen=True)
class DailyTotals:
    """Income and expense recorded on a single day."""

    income: Money
    expense: Money


def filter_by_date_range(transactions: list[Transaction], start: IsoDate, end: IsoDate) -> list[Transaction]:
    """Select transactions dated between start and end, inclusive.

    Records with an invalid date are never selected.
    """
    return filter_window(transactions, start, end)


def _magnitude(txn: Transaction) -> int:
    return abs(signed_amount(txn))


def _sum_amounts(transactions: list[Transaction]) -> Money:
    return Money(sum(_magnitude(txn) for txn in transactions))


def search_by_member(transactions: list[Transaction], member_id: int) -> SearchResult:
    """Find a member's offerings.

    Only income counts; expenses attributed to the member are not offerings.
    """
    matches = [txn for txn in transactions if txn.member_id == member_id and txn.type == INCOME]
    return SearchResult(transactions=matches, total=_sum_amounts(matches), breakdown=[])


def search_by_amount(transactions: list[Transaction], amount: int) -> SearchResult:
    """Find transactions of either type with exactly this amount."""
    matches = [txn for txn in transactions if txn.amount == amount]
    return SearchResult(transactions=matches, total=_sum_amounts(matches), breakdown=[])


def calculate_category_breakdown(
    transactions: list[Transaction],
    categories: list[CategoryName],
    include_empty: bool,
) -> list[CategoryTotal]:
    """Sum transactions per category in the given category order.

    Args:
        transactions: Transactions to sum.
        categories: Categories to report, in output order.
        include_empty: Whether categories with a zero total get a row.

    Returns:
        One CategoryTotal per reported category.
    """
    totals = {category: 0 for category in categories}
    for txn in transactions:
        if txn.category in totals:
            totals[txn.category] += _magnitude(txn)
    return [
        CategoryTotal(category=category, total=Money(total))
        for category, total in totals.items()
        if include_empty or total > 0
    ]


def search_by_category(
    transactions: list[Transaction],
    txn_type: str,
    category: str,
    income_categories: list[CategoryName],
    expense_categories: list[CategoryName],
) -> SearchResult:
    """Find transactions of one type in one category, or in all of them.

    With ``category == "ALL"`` the result also carries a per-category
    breakdown. Income lists every income category in canonical order,
    including empty ones; expense lists only categories with spending.

    Args:
        transactions: Transactions to search.
        txn_type: "income" or "expense".
        category: Category name or "ALL".
        income_categories: Canonical income categories.
        expense_categories: Registered expense categories, sorted.

    Returns:
        SearchResult with matches, their total, and the breakdown.
    """
    matches = [
        txn
        for txn in transactions
        if txn.type == txn_type and (category == ALL_CATEGORIES or txn.category == category)
    ]

    breakdown: list[CategoryTotal] = []
    if category == ALL_CATEGORIES:
        if txn_type == INCOME:
            breakdown = calculate_category_breakdown(matches, income_categories, include_empty=True)
        elif txn_type == EXPENSE:
            breakdown = calculate_category_breakdown(matches, expense_categories, include_empty=False)

    return SearchResult(transactions=matches, total=_sum_amounts(matches), breakdown=breakdown)


def calculate_daily_totals(transactions: list[Transaction], day: IsoDate) -> DailyTotals:
    """Sum the income and expense recorded on one day."""
    on_day = [txn for txn in transactions if txn.date == day]
    return DailyTotals(
        income=_sum_amounts([txn for txn in on_day if txn.type == INCOME]),
        expense=_sum_amounts([txn for txn in on_day if txn.type == EXPENSE]),
    )
