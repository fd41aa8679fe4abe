"""Pure functions for the exported data document and snapshot history.

The document shape is shared by file export/import and by snapshots:

    {"members": [...], "transactions": [...], "expenseCategories": [...]}

Snapshots wrap it as {"timestamp": ISO-8601, "data": document}.
"""

import json
from dataclasses import dataclass
from typing import Any

from offertory.domain.categories import sort_categories
from offertory.domain.members import Member, member_from_dict, member_to_dict
from offertory.domain.models import DEFAULT_CHURCH_NAME, DEFAULT_EXPENSE_CATEGORIES, CategoryName, IsoDate
from offertory.domain.transactions import Transaction, transaction_from_dict, transaction_to_dict

DEFAULT_SNAPSHOT_LIMIT = 50


class ArchiveFormatError(ValueError):
    """Raised when an imported document does not have the expected structure."""


@dataclass(frozen=True)
class LedgerData:
    """The portable part of the application state."""

    members: list[Member]
    transactions: list[Transaction]
    expense_categories: list[CategoryName]


@dataclass(frozen=True)
class LedgerState:
    """Full application state, loaded once per command and passed explicitly."""

    church_name: str
    data: LedgerData


@dataclass(frozen=True)
class Snapshot:
    """Timestamped copy of the portable state."""

    timestamp: str
    data: LedgerData


@dataclass(frozen=True)
class ImportResult:
    """Parsed import document."""

    data: LedgerData
    used_default_categories: bool
    skipped_records: int


def empty_state() -> LedgerState:
    """State of a freshly initialised ledger."""
    return LedgerState(
        church_name=DEFAULT_CHURCH_NAME,
        data=LedgerData(members=[], transactions=[], expense_categories=list(DEFAULT_EXPENSE_CATEGORIES)),
    )


def data_to_document(data: LedgerData) -> dict[str, Any]:
    """Serialize portable state to the export document shape."""
    return {
        "members": [member_to_dict(m) for m in data.members],
        "transactions": [transaction_to_dict(t) for t in data.transactions],
        "expenseCategories": list(data.expense_categories),
    }


def render_export(data: LedgerData) -> str:
    """Render the export document as pretty-printed JSON."""
    return json.dumps(data_to_document(data), ensure_ascii=False, indent=2)


def export_file_name(today: IsoDate) -> str:
    """Default file name for an export made on ``today``."""
    return f"헌금_{today}.json"


def parse_records(raw_members: list[Any], raw_transactions: list[Any]) -> tuple[list[Member], list[Transaction], int]:
    """Parse member and transaction records, dropping malformed ones.

    Returns:
        Tuple of (members, transactions, skipped_count).
    """
    members = [m for m in (member_from_dict(r) for r in raw_members) if m is not None]
    transactions = [t for t in (transaction_from_dict(r) for r in raw_transactions) if t is not None]
    skipped = (len(raw_members) - len(members)) + (len(raw_transactions) - len(transactions))
    return members, transactions, skipped


def document_to_data(document: Any) -> ImportResult:
    """Validate and parse a decoded export document.

    Args:
        document: Decoded JSON value.

    Returns:
        ImportResult. Documents from older versions without
        ``expenseCategories`` get the default categories.

    Raises:
        ArchiveFormatError: If ``members`` or ``transactions`` is not a list.
    """
    if not isinstance(document, dict):
        raise ArchiveFormatError("Document must be a JSON object")
    if not isinstance(document.get("members"), list) or not isinstance(document.get("transactions"), list):
        raise ArchiveFormatError("Document must contain 'members' and 'transactions' lists")

    members, transactions, skipped = parse_records(document["members"], document["transactions"])

    raw_categories = document.get("expenseCategories")
    if isinstance(raw_categories, list):
        categories = [CategoryName(c) for c in raw_categories if isinstance(c, str)]
        used_defaults = False
    else:
        categories = list(DEFAULT_EXPENSE_CATEGORIES)
        used_defaults = True

    return ImportResult(
        data=LedgerData(members=members, transactions=transactions, expense_categories=sort_categories(categories)),
        used_default_categories=used_defaults,
        skipped_records=skipped,
    )


def parse_import(text: str) -> ImportResult:
    """Decode and validate an import file's contents.

    Raises:
        ArchiveFormatError: If the text is not JSON or has the wrong structure.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ArchiveFormatError(f"File is not valid JSON: {e}") from e
    return document_to_data(document)


def push_snapshot(history: list[Snapshot], snapshot: Snapshot, limit: int = DEFAULT_SNAPSHOT_LIMIT) -> list[Snapshot]:
    """Prepend a snapshot and cap the history.

    Returns:
        New history, newest first, at most ``limit`` entries long.
    """
    return [snapshot, *history][:limit]


def remove_snapshot(history: list[Snapshot], timestamp: str) -> list[Snapshot]:
    """Return the history without the snapshot taken at ``timestamp``."""
    return [s for s in history if s.timestamp != timestamp]


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, Any]:
    """Serialize a snapshot to its stored shape."""
    return {"timestamp": snapshot.timestamp, "data": data_to_document(snapshot.data)}


def snapshot_from_dict(raw: Any) -> Snapshot | None:
    """Parse a stored snapshot.

    Returns:
        Snapshot, or None if the entry is not a well-formed snapshot.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("timestamp"), str):
        return None
    try:
        result = document_to_data(raw.get("data"))
    except ArchiveFormatError:
        return None
    return Snapshot(timestamp=raw["timestamp"], data=result.data)
