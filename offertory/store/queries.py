"""Slot read/write functions.

Each piece of application state lives in one named slot holding a JSON
value. Reads fall back to the slot's default when the slot is missing or
its stored JSON cannot be decoded.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from offertory.domain.archive import LedgerData, LedgerState, Snapshot, snapshot_from_dict, snapshot_to_dict
from offertory.domain.members import Member, member_from_dict, member_to_dict
from offertory.domain.models import DEFAULT_CHURCH_NAME, DEFAULT_EXPENSE_CATEGORIES, CategoryName
from offertory.domain.transactions import Transaction, transaction_from_dict, transaction_to_dict
from offertory.store.schema import (
    CHURCH_NAME_SLOT,
    EXPENSE_CATEGORIES_SLOT,
    MEMBERS_SLOT,
    PIN_SLOT,
    SNAPSHOTS_SLOT,
    TRANSACTIONS_SLOT,
    get_db_path,
)

logger = logging.getLogger(__name__)


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _encode(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def get_slot(key: str, default: Any, db_path: Path | None = None) -> Any:
    """Read and decode one slot.

    Args:
        key: Slot name.
        default: Value returned when the slot is missing or unreadable.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Decoded JSON value or ``default``.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM slots WHERE key = ?", (key,))
        row = cursor.fetchone()

    if row is None:
        return default

    try:
        return json.loads(row["value"])
    except json.JSONDecodeError as e:
        logger.warning("Slot %s holds unreadable JSON, using default: %s", key, e)
        return default


def set_slots(values: dict[str, Any], db_path: Path | None = None) -> None:
    """Encode and write several slots in one transaction.

    Args:
        values: Slot name to JSON-serializable value.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            for key, value in values.items():
                cursor.execute(
                    """
                    INSERT INTO slots (key, value, updated_at) VALUES (?, ?, datetime('now'))
                    ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                    """,
                    (key, _encode(value)),
                )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
    logger.debug("Wrote slots: %s", ", ".join(values))


def set_slot(key: str, value: Any, db_path: Path | None = None) -> None:
    """Encode and write one slot."""
    set_slots({key: value}, db_path)


def get_church_name(db_path: Path | None = None) -> str:
    """Get the church name shown in headings."""
    name = get_slot(CHURCH_NAME_SLOT, DEFAULT_CHURCH_NAME, db_path)
    return name if isinstance(name, str) and name else DEFAULT_CHURCH_NAME


def set_church_name(name: str, db_path: Path | None = None) -> None:
    """Set the church name shown in headings."""
    set_slot(CHURCH_NAME_SLOT, name, db_path)


def _read_list(key: str, default: list[Any], db_path: Path | None) -> list[Any]:
    value = get_slot(key, default, db_path)
    if not isinstance(value, list):
        logger.warning("Slot %s is not a list, using default", key)
        return default
    return value


def get_members(db_path: Path | None = None) -> list[Member]:
    """Get the member roster.

    Records that cannot be parsed are skipped with a warning.
    """
    raw = _read_list(MEMBERS_SLOT, [], db_path)
    members = [m for m in (member_from_dict(r) for r in raw) if m is not None]
    if len(members) != len(raw):
        logger.warning("Skipped %d malformed member records", len(raw) - len(members))
    return members


def save_members(members: list[Member], db_path: Path | None = None) -> None:
    """Replace the member roster."""
    set_slot(MEMBERS_SLOT, [member_to_dict(m) for m in members], db_path)


def get_transactions(db_path: Path | None = None) -> list[Transaction]:
    """Get the full transaction log.

    Records that cannot be parsed are skipped with a warning.
    """
    raw = _read_list(TRANSACTIONS_SLOT, [], db_path)
    transactions = [t for t in (transaction_from_dict(r) for r in raw) if t is not None]
    if len(transactions) != len(raw):
        logger.warning("Skipped %d malformed transaction records", len(raw) - len(transactions))
    return transactions


def save_transactions(transactions: list[Transaction], db_path: Path | None = None) -> None:
    """Replace the transaction log."""
    set_slot(TRANSACTIONS_SLOT, [transaction_to_dict(t) for t in transactions], db_path)


def get_expense_categories(db_path: Path | None = None) -> list[CategoryName]:
    """Get the expense category registry."""
    raw = _read_list(EXPENSE_CATEGORIES_SLOT, list(DEFAULT_EXPENSE_CATEGORIES), db_path)
    return [CategoryName(c) for c in raw if isinstance(c, str)]


def save_expense_categories(categories: list[CategoryName], db_path: Path | None = None) -> None:
    """Replace the expense category registry."""
    set_slot(EXPENSE_CATEGORIES_SLOT, list(categories), db_path)


def get_pin_hash(db_path: Path | None = None) -> str | None:
    """Get the stored PIN hash, or None if no PIN has been set."""
    value = get_slot(PIN_SLOT, None, db_path)
    return value if isinstance(value, str) else None


def set_pin_hash(pin_hash: str, db_path: Path | None = None) -> None:
    """Store a PIN hash."""
    set_slot(PIN_SLOT, pin_hash, db_path)


def get_snapshots(db_path: Path | None = None) -> list[Snapshot]:
    """Get the snapshot history, newest first."""
    raw = _read_list(SNAPSHOTS_SLOT, [], db_path)
    snapshots = [s for s in (snapshot_from_dict(r) for r in raw) if s is not None]
    if len(snapshots) != len(raw):
        logger.warning("Skipped %d malformed snapshots", len(raw) - len(snapshots))
    return snapshots


def save_snapshots(snapshots: list[Snapshot], db_path: Path | None = None) -> None:
    """Replace the snapshot history."""
    set_slot(SNAPSHOTS_SLOT, [snapshot_to_dict(s) for s in snapshots], db_path)


def load_state(db_path: Path | None = None) -> LedgerState:
    """Load the full application state.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    return LedgerState(
        church_name=get_church_name(db_path),
        data=LedgerData(
            members=get_members(db_path),
            transactions=get_transactions(db_path),
            expense_categories=get_expense_categories(db_path),
        ),
    )


def save_data(data: LedgerData, db_path: Path | None = None) -> None:
    """Replace members, transactions, and expense categories together.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    set_slots(
        {
            MEMBERS_SLOT: [member_to_dict(m) for m in data.members],
            TRANSACTIONS_SLOT: [transaction_to_dict(t) for t in data.transactions],
            EXPENSE_CATEGORIES_SLOT: list(data.expense_categories),
        },
        db_path,
    )


def seed_defaults(db_path: Path | None = None) -> list[str]:
    """Write default values into slots that have never been set.

    Existing slots are left untouched, so this is safe on a populated database.

    Returns:
        Names of the slots that were seeded.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    defaults: dict[str, Any] = {
        CHURCH_NAME_SLOT: DEFAULT_CHURCH_NAME,
        MEMBERS_SLOT: [],
        TRANSACTIONS_SLOT: [],
        EXPENSE_CATEGORIES_SLOT: list(DEFAULT_EXPENSE_CATEGORIES),
    }

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT key FROM slots")
        existing = {row["key"] for row in cursor.fetchall()}

    missing = {key: value for key, value in defaults.items() if key not in existing}
    if missing:
        set_slots(missing, db_path)
    return list(missing)
