"""Korean-locale string ordering.

Precomposed Hangul syllables are encoded in 가나다 dictionary order, so
comparing NFC-normalised, case-folded text by code point reproduces the
Korean collation used for names and categories. The raw text breaks ties so
that distinct strings never compare equal.

Outside Hangul this is only an approximation of a full ICU Korean collator:
when two strings differ only by case the uppercase one sorts first, and other
non-Hangul characters keep their code point order, so "-x" sorts before "A"
and every Latin string sorts before every Hangul one.
"""

import unicodedata
from collections.abc import Callable

Collator = Callable[[str, str], int]


def collation_key(text: str) -> tuple[str, str]:
    """Build a sort key for Korean-locale ordering.

    Args:
        text: String to order.

    Returns:
        Tuple of (primary key, tie-break key).
    """
    normalized = unicodedata.normalize("NFC", text)
    return normalized.casefold(), normalized


def korean_compare(a: str, b: str) -> int:
    """Three-way compare two strings in Korean-locale order.

    Returns:
        Negative if a sorts first, positive if b sorts first, 0 if equal.
    """
    key_a = collation_key(a)
    key_b = collation_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_names(names: list[str]) -> list[str]:
    """Return names sorted in Korean-locale order."""
    return sorted(names, key=collation_key)
