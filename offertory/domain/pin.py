"""PIN validation and hashing.

The PIN is four digits. Only a salted PBKDF2 digest is ever stored, encoded
as ``pbkdf2_sha256$<iterations>$<salt hex>$<digest hex>``.
"""

import hashlib
import hmac
import re

PIN_PATTERN = re.compile(r"[0-9]{4}")
PBKDF2_ITERATIONS = 200_000
HASH_SCHEME = "pbkdf2_sha256"


def validate_pin(pin: str, confirmation: str | None = None) -> str | None:
    """Validate a PIN entry.

    Args:
        pin: Entered PIN.
        confirmation: Second entry when creating a PIN, if any.

    Returns:
        Error message, or None if the PIN is acceptable.
    """
    if not PIN_PATTERN.fullmatch(pin):
        return "PIN must be exactly 4 digits"
    if confirmation is not None and pin != confirmation:
        return "PINs do not match"
    return None


def hash_pin(pin: str, salt: bytes, iterations: int = PBKDF2_ITERATIONS) -> str:
    """Derive the stored form of a PIN.

    Args:
        pin: PIN to hash.
        salt: Random salt; callers generate it with ``os.urandom``.
        iterations: PBKDF2 iteration count.

    Returns:
        Encoded hash string.
    """
    digest = hashlib.pbkdf2_hmac("sha256", pin.encode("utf-8"), salt, iterations)
    return f"{HASH_SCHEME}${iterations}${salt.hex()}${digest.hex()}"


def verify_pin(pin: str, stored: str) -> bool:
    """Check an entered PIN against the stored hash.

    Returns:
        True on a match. A malformed stored value never matches.
    """
    try:
        scheme, iterations, salt_hex, digest_hex = stored.split("$")
        if scheme != HASH_SCHEME:
            return False
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
        actual = hashlib.pbkdf2_hmac("sha256", pin.encode("utf-8"), salt, int(iterations))
    except ValueError:
        return False

    return hmac.compare_digest(actual, expected)
