"""Pure functions for the expense category registry.

Income categories are a fixed list; expense categories are managed by the
user. The registry is kept sorted in Korean-locale order.
"""

from offertory.domain.collation import collation_key
from offertory.domain.models import EXPENSE, CategoryName
from offertory.domain.transactions import Transaction, recategorize_expenses


def sort_categories(categories: list[CategoryName]) -> list[CategoryName]:
    """Return the registry sorted in Korean-locale order."""
    return sorted(categories, key=collation_key)


def add_category(
    categories: list[CategoryName],
    name: str,
) -> tuple[list[CategoryName], str | None]:
    """Register a new expense category.

    Args:
        categories: Current registry.
        name: Proposed category name.

    Returns:
        Tuple of (new_registry, error_message). On error the registry is
        returned unchanged.
    """
    cleaned = name.strip()
    if not cleaned:
        return categories, "Category name is required"
    if cleaned in categories:
        return categories, f"Category '{cleaned}' already exists"
    return sort_categories([*categories, CategoryName(cleaned)]), None


def rename_category(
    categories: list[CategoryName],
    transactions: list[Transaction],
    old_name: str,
    new_name: str,
) -> tuple[list[CategoryName], list[Transaction], str | None]:
    """Rename an expense category and carry the change into the log.

    Args:
        categories: Current registry.
        transactions: All transactions.
        old_name: Existing category name.
        new_name: Replacement name.

    Returns:
        Tuple of (new_registry, new_transactions, error_message). On error
        both collections are returned unchanged.
    """
    cleaned = new_name.strip()
    if old_name not in categories:
        return categories, transactions, f"Category '{old_name}' does not exist"
    if not cleaned:
        return categories, transactions, "Category name is required"
    if cleaned in categories:
        return categories, transactions, f"Category '{cleaned}' already exists"

    renamed = sort_categories([CategoryName(cleaned) if c == old_name else c for c in categories])
    updated = recategorize_expenses(transactions, CategoryName(old_name), CategoryName(cleaned))
    return renamed, updated, None


def remove_category(categories: list[CategoryName], name: str) -> list[CategoryName]:
    """Drop a category from the registry. Transactions keep their category."""
    return [c for c in categories if c != name]


def is_category_in_use(transactions: list[Transaction], name: str) -> bool:
    """Check whether any expense transaction uses the category."""
    return any(txn.type == EXPENSE and txn.category == name for txn in transactions)
