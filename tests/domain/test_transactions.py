"""Tests for offertory.domain.transactions pure functions."""

from offertory.domain.models import CategoryName, IsoDate, MemberId, Money, TransactionId
from offertory.domain.transactions import (
    Transaction,
    add_transaction,
    find_transaction,
    format_won,
    recategorize_expenses,
    remove_transaction,
    signed_amount,
    transaction_from_dict,
    transaction_to_dict,
    update_transaction,
    validate_transaction,
)


def _txn(txn_id: int, txn_type: str = "income", amount: int = 1000, category: str = "십일조") -> Transaction:
    return Transaction(
        id=TransactionId(txn_id),
        type=txn_type,
        date=IsoDate("2024-06-09"),
        category=CategoryName(category),
        amount=Money(amount),
        member_id=MemberId(1) if txn_type == "income" else None,
    )


class TestSignedAmount:
    """Tests for signed_amount."""

    def test_income_positive(self) -> None:
        """Should count income as positive."""
        assert signed_amount(_txn(1, "income", 1000)) == 1000

    def test_expense_negative(self) -> None:
        """Should count expense as negative."""
        assert signed_amount(_txn(1, "expense", 300)) == -300

    def test_non_positive_amount_is_zero(self) -> None:
        """Should ignore zero and negative amounts."""
        assert signed_amount(_txn(1, "income", 0)) == 0
        assert signed_amount(_txn(1, "expense", -50)) == 0

    def test_unknown_type_is_zero(self) -> None:
        """Should ignore transactions of an unknown type."""
        assert signed_amount(_txn(1, "transfer", 500)) == 0


class TestValidateTransaction:
    """Tests for validate_transaction."""

    def test_valid_income(self) -> None:
        """Should accept a complete income entry."""
        assert validate_transaction("income", "십일조", 1000, 1) is None

    def test_expense_without_member(self) -> None:
        """Should allow expenses without a member."""
        assert validate_transaction("expense", "운영비", 500, None) is None

    def test_income_requires_member(self) -> None:
        """Should reject income without a member."""
        assert validate_transaction("income", "십일조", 1000, None) == "Income requires a member"

    def test_amount_must_be_positive(self) -> None:
        """Should reject zero amounts."""
        assert validate_transaction("expense", "운영비", 0, None) == "Amount must be greater than 0"

    def test_category_required(self) -> None:
        """Should reject a blank category."""
        assert validate_transaction("expense", "  ", 100, None) == "Category is required"

    def test_unknown_type(self) -> None:
        """Should reject types other than income and expense."""
        assert validate_transaction("gift", "기타", 100, 1) == "Unknown transaction type: gift"


class TestTransactionFromDict:
    """Tests for transaction_from_dict."""

    def test_parses_record(self) -> None:
        """Should read camelCase keys."""
        raw = {"id": 5, "type": "income", "date": "2024-06-09", "category": "십일조", "amount": 1000, "memberId": 7}

        result = transaction_from_dict(raw)

        assert result == Transaction(
            id=TransactionId(5),
            type="income",
            date=IsoDate("2024-06-09"),
            category=CategoryName("십일조"),
            amount=Money(1000),
            member_id=MemberId(7),
        )

    def test_keeps_malformed_date(self) -> None:
        """Should keep an unparsable date for the aggregator to handle."""
        raw = {"id": 5, "type": "expense", "date": "soon", "category": "운영비", "amount": 1000}

        result = transaction_from_dict(raw)

        assert result is not None
        assert result.date == "soon"

    def test_rejects_missing_fields(self) -> None:
        """Should return None when required fields are missing or mistyped."""
        assert transaction_from_dict({"id": 1, "type": "income"}) is None
        assert transaction_from_dict({"id": "1", "type": "income", "date": "", "category": "", "amount": 1}) is None
        assert transaction_from_dict({"id": 1, "type": "income", "date": "", "category": "", "amount": 1.5}) is None
        assert transaction_from_dict({"id": True, "type": "income", "date": "", "category": "", "amount": 1}) is None
        assert transaction_from_dict(["not", "a", "dict"]) is None

    def test_drops_malformed_optional_fields(self) -> None:
        """Should drop a non-integer memberId and non-string memo."""
        raw = {"id": 1, "type": "expense", "date": "2024-06-09", "category": "운영비", "amount": 1, "memberId": "3"}
        raw["memo"] = 12

        result = transaction_from_dict(raw)

        assert result is not None
        assert result.member_id is None
        assert result.memo is None


class TestTransactionToDict:
    """Tests for transaction_to_dict."""

    def test_omits_empty_optional_fields(self) -> None:
        """Should leave out memberId and memo when absent."""
        record = transaction_to_dict(_txn(3, "expense", 200, "운영비"))

        assert record == {"id": 3, "type": "expense", "date": "2024-06-09", "category": "운영비", "amount": 200}

    def test_includes_member_id(self) -> None:
        """Should write memberId in camelCase."""
        assert transaction_to_dict(_txn(3))["memberId"] == 1


class TestListOperations:
    """Tests for add/update/remove/find_transaction."""

    def test_add_returns_new_list(self) -> None:
        """Should append without modifying the input."""
        existing = [_txn(1)]

        result = add_transaction(existing, _txn(2))

        assert [t.id for t in result] == [1, 2]
        assert len(existing) == 1

    def test_update_replaces_by_id(self) -> None:
        """Should replace only the transaction with the same id."""
        existing = [_txn(1), _txn(2)]

        result = update_transaction(existing, _txn(2, amount=5000))

        assert [t.amount for t in result] == [1000, 5000]

    def test_remove_by_id(self) -> None:
        """Should drop the transaction with the given id."""
        assert [t.id for t in remove_transaction([_txn(1), _txn(2)], 1)] == [2]

    def test_find(self) -> None:
        """Should find by id or return None."""
        existing = [_txn(1), _txn(2)]

        assert find_transaction(existing, 2) == _txn(2)
        assert find_transaction(existing, 3) is None


class TestRecategorizeExpenses:
    """Tests for recategorize_expenses."""

    def test_moves_only_expenses(self) -> None:
        """Should rename the category on expenses and leave income alone."""
        transactions = [_txn(1, "expense", category="운영비"), _txn(2, "income", category="운영비")]

        result = recategorize_expenses(transactions, CategoryName("운영비"), CategoryName("관리비"))

        assert [t.category for t in result] == ["관리비", "운영비"]


class TestFormatWon:
    """Tests for format_won."""

    def test_thousands_separator(self) -> None:
        """Should group thousands and add the won suffix."""
        assert format_won(1234567) == "1,234,567원"

    def test_negative(self) -> None:
        """Should prefix negatives with a minus."""
        assert format_won(-3000) == "-3,000원"

    def test_include_sign(self) -> None:
        """Should prefix positives with plus when asked."""
        assert format_won(3000, include_sign=True) == "+3,000원"
        assert format_won(0) == "0원"
