"""Tests for offertory.domain.categories pure functions."""

from offertory.domain.categories import add_category, is_category_in_use, remove_category, rename_category
from offertory.domain.models import CategoryName, IsoDate, Money, TransactionId
from offertory.domain.transactions import Transaction

REGISTRY = [CategoryName("구제비"), CategoryName("선교비"), CategoryName("운영비")]


def _txn(txn_id: int, txn_type: str, category: str) -> Transaction:
    return Transaction(
        id=TransactionId(txn_id),
        type=txn_type,
        date=IsoDate("2024-06-09"),
        category=CategoryName(category),
        amount=Money(1000),
    )


class TestAddCategory:
    """Tests for add_category."""

    def test_adds_sorted(self) -> None:
        """Should insert the new category in Korean order."""
        categories, error = add_category(REGISTRY, " 교육비 ")

        assert error is None
        assert categories == ["교육비", "구제비", "선교비", "운영비"]

    def test_rejects_duplicate(self) -> None:
        """Should refuse an existing name and return the registry unchanged."""
        categories, error = add_category(REGISTRY, "운영비")

        assert error == "Category '운영비' already exists"
        assert categories == REGISTRY

    def test_rejects_blank(self) -> None:
        """Should refuse a blank name."""
        _, error = add_category(REGISTRY, "  ")

        assert error == "Category name is required"


class TestRenameCategory:
    """Tests for rename_category."""

    def test_renames_and_cascades(self) -> None:
        """Should rename in the registry and on matching expenses only."""
        transactions = [_txn(1, "expense", "운영비"), _txn(2, "expense", "구제비"), _txn(3, "income", "운영비")]

        categories, updated, error = rename_category(REGISTRY, transactions, "운영비", "관리비")

        assert error is None
        assert categories == ["관리비", "구제비", "선교비"]
        assert [t.category for t in updated] == ["관리비", "구제비", "운영비"]

    def test_missing_category(self) -> None:
        """Should refuse to rename a category that is not registered."""
        categories, updated, error = rename_category(REGISTRY, [], "간식비", "다과비")

        assert error == "Category '간식비' does not exist"
        assert categories == REGISTRY
        assert updated == []

    def test_target_exists(self) -> None:
        """Should refuse to rename onto an existing category."""
        _, _, error = rename_category(REGISTRY, [], "운영비", "선교비")

        assert error == "Category '선교비' already exists"


class TestRemoveCategory:
    """Tests for remove_category and is_category_in_use."""

    def test_remove(self) -> None:
        """Should drop the category from the registry."""
        assert remove_category(REGISTRY, "선교비") == ["구제비", "운영비"]

    def test_in_use_only_counts_expenses(self) -> None:
        """Should only consider expense transactions."""
        transactions = [_txn(1, "income", "운영비"), _txn(2, "expense", "구제비")]

        assert is_category_in_use(transactions, "구제비")
        assert not is_category_in_use(transactions, "운영비")
