"""Tests for offertory.domain.search pure functions."""

from offertory.domain.models import INCOME_CATEGORIES, CategoryName, IsoDate, MemberId, Money, TransactionId
from offertory.domain.search import (
    CategoryTotal,
    DailyTotals,
    calculate_category_breakdown,
    calculate_daily_totals,
    filter_by_date_range,
    search_by_amount,
    search_by_category,
    search_by_member,
)
from offertory.domain.transactions import Transaction

EXPENSE_CATEGORIES = [CategoryName("구제비"), CategoryName("선교비"), CategoryName("운영비")]


def _txn(
    txn_id: int,
    txn_type: str,
    date: str,
    category: str,
    amount: int,
    member_id: int | None = None,
) -> Transaction:
    return Transaction(
        id=TransactionId(txn_id),
        type=txn_type,
        date=IsoDate(date),
        category=CategoryName(category),
        amount=Money(amount),
        member_id=MemberId(member_id) if member_id is not None else None,
    )


TRANSACTIONS = [
    _txn(1, "income", "2024-06-02", "십일조", 10000, member_id=1),
    _txn(2, "income", "2024-06-09", "감사헌금", 5000, member_id=1),
    _txn(3, "income", "2024-06-09", "십일조", 30000, member_id=2),
    _txn(4, "expense", "2024-06-09", "운영비", 5000, member_id=1),
    _txn(5, "expense", "2024-06-10", "구제비", 20000),
]


class TestFilterByDateRange:
    """Tests for filter_by_date_range."""

    def test_inclusive(self) -> None:
        """Should include transactions on both end dates."""
        result = filter_by_date_range(TRANSACTIONS, IsoDate("2024-06-09"), IsoDate("2024-06-10"))

        assert [t.id for t in result] == [2, 3, 4, 5]

    def test_skips_invalid_dates(self) -> None:
        """Should never select a record whose date is not zero-padded."""
        transactions = [
            _txn(1, "income", "2024-06- 9", "십일조", 1000),
            _txn(2, "income", "2024-06-09", "십일조", 500),
        ]

        result = filter_by_date_range(transactions, IsoDate("2024-06-01"), IsoDate("2024-06-30"))

        assert [t.id for t in result] == [2]


class TestSearchByMember:
    """Tests for search_by_member."""

    def test_only_income_counts(self) -> None:
        """Should list a member's offerings and skip expenses attributed to them."""
        result = search_by_member(TRANSACTIONS, 1)

        assert [t.id for t in result.transactions] == [1, 2]
        assert result.total == 15000
        assert result.breakdown == []


class TestSearchByAmount:
    """Tests for search_by_amount."""

    def test_matches_both_types(self) -> None:
        """Should match income and expense of the exact amount."""
        result = search_by_amount(TRANSACTIONS, 5000)

        assert [t.id for t in result.transactions] == [2, 4]
        assert result.total == 10000


class TestSearchByCategory:
    """Tests for search_by_category."""

    def test_single_category(self) -> None:
        """Should match one category of the chosen type."""
        result = search_by_category(TRANSACTIONS, "income", "십일조", list(INCOME_CATEGORIES), EXPENSE_CATEGORIES)

        assert [t.id for t in result.transactions] == [1, 3]
        assert result.total == 40000
        assert result.breakdown == []

    def test_all_income_lists_every_category_in_order(self) -> None:
        """Should report every income category in canonical order, zeros included."""
        result = search_by_category(TRANSACTIONS, "income", "ALL", list(INCOME_CATEGORIES), EXPENSE_CATEGORIES)

        assert [row.category for row in result.breakdown] == list(INCOME_CATEGORIES)
        totals = {row.category: row.total for row in result.breakdown}
        assert totals["십일조"] == 40000
        assert totals["감사헌금"] == 5000
        assert totals["건축헌금"] == 0
        assert result.total == 45000

    def test_all_expense_skips_empty_categories(self) -> None:
        """Should only report expense categories with spending."""
        result = search_by_category(TRANSACTIONS, "expense", "ALL", list(INCOME_CATEGORIES), EXPENSE_CATEGORIES)

        assert result.breakdown == [
            CategoryTotal(CategoryName("구제비"), Money(20000)),
            CategoryTotal(CategoryName("운영비"), Money(5000)),
        ]
        assert result.total == 25000

    def test_negative_amount_adds_nothing(self) -> None:
        """Should keep a category with spending when another record in it is negative."""
        transactions = [
            _txn(1, "expense", "2024-06-09", "운영비", 5000),
            _txn(2, "expense", "2024-06-10", "운영비", -8000),
        ]

        result = search_by_category(transactions, "expense", "ALL", list(INCOME_CATEGORIES), EXPENSE_CATEGORIES)

        assert [t.id for t in result.transactions] == [1, 2]
        assert result.breakdown == [CategoryTotal(CategoryName("운영비"), Money(5000))]
        assert result.total == 5000


class TestCalculateCategoryBreakdown:
    """Tests for calculate_category_breakdown."""

    def test_ignores_unlisted_categories(self) -> None:
        """Should only sum categories it was asked about."""
        transactions = [_txn(1, "expense", "2024-06-09", "사라진항목", 100)]

        assert calculate_category_breakdown(transactions, EXPENSE_CATEGORIES, include_empty=False) == []

    def test_non_positive_amounts_count_zero(self) -> None:
        """Should treat zero and negative amounts as contributing nothing."""
        transactions = [
            _txn(1, "expense", "2024-06-09", "구제비", 0),
            _txn(2, "expense", "2024-06-09", "구제비", -300),
        ]

        assert calculate_category_breakdown(transactions, EXPENSE_CATEGORIES, include_empty=False) == []


class TestCalculateDailyTotals:
    """Tests for calculate_daily_totals."""

    def test_one_day(self) -> None:
        """Should sum income and expense on the given day only."""
        assert calculate_daily_totals(TRANSACTIONS, IsoDate("2024-06-09")) == DailyTotals(Money(35000), Money(5000))

    def test_empty_day(self) -> None:
        """Should return zeros for a day without transactions."""
        assert calculate_daily_totals(TRANSACTIONS, IsoDate("2024-01-01")) == DailyTotals(Money(0), Money(0))

    def test_negative_expense_not_subtracted(self) -> None:
        """Should not let a negative expense reduce the day's spending."""
        transactions = [
            _txn(1, "expense", "2024-06-09", "운영비", 5000),
            _txn(2, "expense", "2024-06-09", "운영비", -8000),
        ]

        assert calculate_daily_totals(transactions, IsoDate("2024-06-09")) == DailyTotals(Money(0), Money(5000))
