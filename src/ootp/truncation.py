"""RFC 4226 dynamic truncation."""

from ootp.constants import MAX_DIGITS, MIN_DIGITS, MIN_DIGEST_LENGTH
from ootp.errors import InvalidDigestLength, InvalidDigits


def validate_digits(digits: int) -> int:
    """
    Check that digits is an integer in [MIN_DIGITS, MAX_DIGITS].

    Raises:
        InvalidDigits: If it is not.
    """
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidDigits(f"digits must be an integer, got {digits!r}")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidDigits(
            f"digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {digits}"
        )
    return digits


def truncate(digest: bytes, digits: int) -> int:
    """
    Reduce an HMAC digest to an integer OTP value (RFC 4226, Section 5.3).

    Args:
        digest: Raw HMAC output, at least 20 bytes.
        digits: Number of decimal digits in the resulting code.

    Returns:
        An integer in [0, 10**digits).

    Raises:
        InvalidDigestLength: If the digest is shorter than 20 bytes.
        InvalidDigits: If digits is out of range.
    """
    validate_digits(digits)
    if len(digest) < MIN_DIGEST_LENGTH:
        raise InvalidDigestLength(
            f"digest must be at least {MIN_DIGEST_LENGTH} bytes, got {len(digest)}"
        )

    # Low nibble of the last byte selects the 4-byte window
    offset = digest[-1] & 0x0F
    binary = int.from_bytes(digest[offset : offset + 4], byteorder="big") & 0x7FFFFFFF

    return binary % (10**digits)
