"""Pure functions for transaction records.

This module contains the functional core for transaction operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are whole won (Money type).
"""

from dataclasses import dataclass, replace
from typing import Any

from offertory.domain.models import (
    EXPENSE,
    INCOME,
    TRANSACTION_TYPES,
    CategoryName,
    IsoDate,
    MemberId,
    Money,
    TransactionId,
)


@dataclass(frozen=True)
class Transaction:
    """Immutable ledger entry."""

    id: TransactionId
    type: str
    date: IsoDate
    category: CategoryName
    amount: Money
    member_id: MemberId | None = None
    memo: str | None = None

    @property
    def is_income(self) -> bool:
        return self.type == INCOME


def signed_amount(txn: Transaction) -> Money:
    """Calculate the effect of a transaction on the balance.

    Income counts positive, expense negative. Records that break the
    ``amount > 0`` precondition, or carry an unknown type, contribute zero.

    Args:
        txn: Transaction to evaluate.

    Returns:
        Signed amount in won.
    """
    if not isinstance(txn.amount, int) or txn.amount <= 0:
        return Money(0)
    if txn.type == INCOME:
        return txn.amount
    if txn.type == EXPENSE:
        return Money(-txn.amount)
    return Money(0)


def validate_transaction(
    txn_type: str,
    category: str,
    amount: int,
    member_id: int | None,
) -> str | None:
    """Validate user-entered transaction fields.

    Args:
        txn_type: "income" or "expense".
        category: Category name.
        amount: Amount in won.
        member_id: Member id, required for income.

    Returns:
        Error message, or None if the fields are acceptable.
    """
    if txn_type not in TRANSACTION_TYPES:
        return f"Unknown transaction type: {txn_type}"
    if amount <= 0:
        return "Amount must be greater than 0"
    if not category.strip():
        return "Category is required"
    if txn_type == INCOME and member_id is None:
        return "Income requires a member"
    return None


def transaction_from_dict(raw: Any) -> Transaction | None:
    """Parse a stored or imported transaction record.

    Only the record's shape is checked here; dates and amounts are kept as
    given so that the aggregator can decide how to treat them.

    Args:
        raw: Decoded JSON object with camelCase keys.

    Returns:
        Transaction if the record has the required fields, None otherwise.
    """
    if not isinstance(raw, dict):
        return None

    txn_id = raw.get("id")
    amount = raw.get("amount")
    if not isinstance(txn_id, int) or isinstance(txn_id, bool):
        return None
    if not isinstance(amount, int) or isinstance(amount, bool):
        return None

    txn_type = raw.get("type")
    date = raw.get("date")
    category = raw.get("category")
    if not isinstance(txn_type, str) or not isinstance(date, str) or not isinstance(category, str):
        return None

    member_id = raw.get("memberId")
    if not isinstance(member_id, int) or isinstance(member_id, bool):
        member_id = None

    memo = raw.get("memo")
    if not isinstance(memo, str):
        memo = None

    return Transaction(
        id=TransactionId(txn_id),
        type=txn_type,
        date=IsoDate(date),
        category=CategoryName(category),
        amount=Money(amount),
        member_id=MemberId(member_id) if member_id is not None else None,
        memo=memo,
    )


def transaction_to_dict(txn: Transaction) -> dict[str, Any]:
    """Serialize a transaction to its JSON record shape."""
    record: dict[str, Any] = {
        "id": txn.id,
        "type": txn.type,
        "date": txn.date,
        "category": txn.category,
        "amount": txn.amount,
    }
    if txn.member_id is not None:
        record["memberId"] = txn.member_id
    if txn.memo is not None:
        record["memo"] = txn.memo
    return record


def add_transaction(transactions: list[Transaction], txn: Transaction) -> list[Transaction]:
    """Return a new list with the transaction appended."""
    return [*transactions, txn]


def update_transaction(transactions: list[Transaction], updated: Transaction) -> list[Transaction]:
    """Return a new list with the transaction of the same id replaced."""
    return [updated if txn.id == updated.id else txn for txn in transactions]


def remove_transaction(transactions: list[Transaction], txn_id: int) -> list[Transaction]:
    """Return a new list without the transaction of the given id."""
    return [txn for txn in transactions if txn.id != txn_id]


def find_transaction(transactions: list[Transaction], txn_id: int) -> Transaction | None:
    """Look up a transaction by id."""
    return next((txn for txn in transactions if txn.id == txn_id), None)


def recategorize_expenses(
    transactions: list[Transaction],
    old_name: CategoryName,
    new_name: CategoryName,
) -> list[Transaction]:
    """Move expense transactions from one category name to another.

    Income transactions are left alone even if they share the name.
    """
    return [
        replace(txn, category=new_name) if txn.type == EXPENSE and txn.category == old_name else txn
        for txn in transactions
    ]


def format_won(amount: int, include_sign: bool = False) -> str:
    """Format a won amount for display.

    Args:
        amount: Amount in won.
        include_sign: Whether to prefix + or -.

    Returns:
        Formatted string (e.g., "12,000원" or "-3,000원").
    """
    formatted = f"{abs(amount):,}원"
    if amount < 0:
        return f"-{formatted}"
    if include_sign:
        return f"+{formatted}"
    return formatted
