"""Domain models and types for offertory.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from offertory.domain.models import CategoryName, IsoDate, MemberId, Money, TransactionId

__all__ = ["Money", "IsoDate", "CategoryName", "MemberId", "TransactionId"]
