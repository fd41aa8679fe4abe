"""Tests for offertory.domain.pin."""

from offertory.domain.pin import hash_pin, validate_pin, verify_pin

SALT = bytes(range(16))


class TestValidatePin:
    """Tests for validate_pin."""

    def test_four_digits(self) -> None:
        """Should accept exactly four digits."""
        assert validate_pin("0420") is None

    def test_wrong_length_or_characters(self) -> None:
        """Should reject anything other than four digits."""
        assert validate_pin("123") == "PIN must be exactly 4 digits"
        assert validate_pin("12345") == "PIN must be exactly 4 digits"
        assert validate_pin("12a4") == "PIN must be exactly 4 digits"

    def test_confirmation_mismatch(self) -> None:
        """Should reject a confirmation that differs."""
        assert validate_pin("1234", "1243") == "PINs do not match"
        assert validate_pin("1234", "1234") is None


class TestHashPin:
    """Tests for hash_pin and verify_pin."""

    def test_never_stores_plain_pin(self) -> None:
        """Should encode scheme, iterations, salt, and digest."""
        stored = hash_pin("1234", SALT, iterations=1000)

        scheme, iterations, salt_hex, digest_hex = stored.split("$")
        assert scheme == "pbkdf2_sha256"
        assert iterations == "1000"
        assert salt_hex == SALT.hex()
        assert len(digest_hex) == 64

    def test_verify_correct_pin(self) -> None:
        """Should accept the PIN it was made from."""
        assert verify_pin("1234", hash_pin("1234", SALT, iterations=1000))

    def test_verify_wrong_pin(self) -> None:
        """Should reject any other PIN."""
        assert not verify_pin("4321", hash_pin("1234", SALT, iterations=1000))

    def test_salt_changes_hash(self) -> None:
        """Should produce different hashes for different salts."""
        assert hash_pin("1234", SALT, iterations=1000) != hash_pin("1234", bytes(16), iterations=1000)

    def test_malformed_stored_value(self) -> None:
        """Should never match a malformed stored value."""
        assert not verify_pin("1234", "1234")
        assert not verify_pin("1234", "md5$1$00$00")
        assert not verify_pin("1234", "pbkdf2_sha256$many$00$00")
        assert not verify_pin("1234", "pbkdf2_sha256$1000$zz$00")
