"""Domain type definitions and fixed vocabularies for offertory.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in whole won (no minor unit)
- IsoDate: Calendar date in YYYY-MM-DD format
- CategoryName: Name of an income or expense category
- MemberId / TransactionId: Integer identifiers assigned at creation
"""

from typing import NewType

# Money amounts are whole won; there is no fractional unit
Money = NewType("Money", int)

# Dates are always zero-padded YYYY-MM-DD so they sort lexicographically
IsoDate = NewType("IsoDate", str)

CategoryName = NewType("CategoryName", str)

MemberId = NewType("MemberId", int)

TransactionId = NewType("TransactionId", int)

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

POSITIONS = (
    "목사",
    "사모",
    "부목사",
    "전도사",
    "장로",
    "권사",
    "집사",
    "성도",
    "청년",
    "중고등부",
    "주일학교",
    "무명",
    "기타",
)

# Canonical order used by forms and the "ALL" income breakdown
INCOME_CATEGORIES = tuple(
    CategoryName(c)
    for c in (
        "십일조",
        "감사헌금",
        "건축헌금",
        "선교헌금",
        "주정헌금",
        "절기헌금",
        "생일감사",
        "심방감사",
        "일천번제",
        "기타",
    )
)

# Same-day ordering of income rows in the ledger view
INCOME_CATEGORY_PRIORITY = tuple(
    CategoryName(c)
    for c in (
        "기타",
        "일천번제",
        "심방감사",
        "생일감사",
        "절기헌금",
        "주정헌금",
        "감사헌금",
        "건축헌금",
        "선교헌금",
        "십일조",
    )
)

# "Core recurring" (경상비) offerings, in display order
CORE_RECURRING_CATEGORIES = tuple(CategoryName(c) for c in ("십일조", "주정헌금", "감사헌금", "절기헌금"))

MISSION_CATEGORY = CategoryName("선교헌금")
BUILDING_CATEGORY = CategoryName("건축헌금")

DEFAULT_EXPENSE_CATEGORIES = tuple(CategoryName(c) for c in ("구제비", "선교비", "운영비"))

# Shown for a member id that no longer resolves
UNSPECIFIED_MEMBER_NAME = "미지정"
# Used for ordering when a transaction carries no member id at all
ANONYMOUS_MEMBER_NAME = "무명"

DEFAULT_CHURCH_NAME = "우리교회"

ALL_CATEGORIES = "ALL"


def allocate_id(existing: list[int], clock_ms: int) -> int:
    """Pick a new identifier from a millisecond clock reading.

    Args:
        existing: Identifiers already in use.
        clock_ms: Current time in milliseconds since the epoch.

    Returns:
        ``clock_ms``, or one past the largest existing id if the clock has not
        moved past it.
    """
    if not existing:
        return clock_ms
    return max(clock_ms, max(existing) + 1)
