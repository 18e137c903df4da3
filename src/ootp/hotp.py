"""RFC 4226 HOTP (HMAC-based One-Time Password) implementation."""

import base64
import binascii
import logging
import unicodedata
from typing import NamedTuple, Optional, Union

from cryptography.hazmat.primitives import constant_time

from ootp.algorithms import HashAlgorithm, compute_hmac, resolve_algorithm
from ootp.constants import (
    COUNTER_BYTES,
    DEFAULT_DIGITS,
    DEFAULT_WINDOW,
    MAX_COUNTER,
)
from ootp.errors import (
    InvalidCandidate,
    InvalidCounter,
    InvalidSecret,
    InvalidWindow,
)
from ootp.truncation import truncate, validate_digits

logger = logging.getLogger(__name__)

Secret = Union[str, bytes, bytearray, memoryview]
Algorithm = Union[HashAlgorithm, str]


class VerifyResult(NamedTuple):
    """Outcome of a verification: whether it matched and at which counter."""

    matched: bool
    matched_counter: Optional[int] = None


def encode_counter(counter: int) -> bytes:
    """
    Encode a counter as the 8-byte big-endian HMAC message.

    Raises:
        InvalidCounter: If the counter is not an unsigned 64-bit integer.
    """
    validate_counter(counter)
    return counter.to_bytes(COUNTER_BYTES, byteorder="big")


def validate_counter(counter: int) -> int:
    """
    Check that counter is an integer in [0, MAX_COUNTER].

    Raises:
        InvalidCounter: If it is not.
    """
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise InvalidCounter(f"counter must be an integer, got {counter!r}")
    if not 0 <= counter <= MAX_COUNTER:
        raise InvalidCounter(
            f"counter must be between 0 and {MAX_COUNTER}, got {counter}"
        )
    return counter


def validate_window(window: int) -> int:
    """
    Check that window is a non-negative integer.

    Raises:
        InvalidWindow: If it is not.
    """
    if isinstance(window, bool) or not isinstance(window, int):
        raise InvalidWindow(f"window must be an integer, got {window!r}")
    if window < 0:
        raise InvalidWindow(f"window must not be negative, got {window}")
    return window


def validate_candidate(candidate: str) -> str:
    """
    Check that a candidate code is a string.

    Integers are refused rather than converted, since leading zeros would
    already be lost.

    Raises:
        InvalidCandidate: If it is not a string.
    """
    if not isinstance(candidate, str):
        raise InvalidCandidate(
            f"candidate must be a string, got {type(candidate).__name__}"
        )
    return candidate


def format_code(value: int, digits: int) -> str:
    """Render an OTP value as a string of exactly `digits` characters."""
    return f"{value:0{digits}d}"


def decode_secret(secret: str) -> bytes:
    """
    Decode an OTP secret from Base32 (preferred) or Base64.

    Base32 padding may be omitted, as authenticator apps usually do.

    Args:
        secret: The encoded secret string.

    Returns:
        Decoded secret as bytes.

    Raises:
        InvalidSecret: If the secret cannot be decoded from either format.
    """
    secret = secret.strip()
    # Try Base32 first (common for OTP secrets)
    try:
        return base64.b32decode(secret + "=" * (-len(secret) % 8), casefold=True)
    except (binascii.Error, ValueError):
        pass

    # Fall back to Base64
    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidSecret(
            f"Unable to decode OTP secret from Base32 or Base64: {e}"
        ) from e


def secret_bytes(secret: Secret) -> bytes:
    """Return the raw key for a secret given as bytes or an encoded string."""
    if isinstance(secret, str):
        return decode_secret(secret)
    if isinstance(secret, (bytes, bytearray, memoryview)):
        return bytes(secret)
    raise InvalidSecret(
        f"secret must be bytes or an encoded string, got {type(secret).__name__}"
    )


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Both strings are NFKC-normalised first, so fullwidth digits compare
    equal to ASCII ones. Only whether the lengths differ is observable.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return constant_time.bytes_eq(s1.encode("utf-8"), s2.encode("utf-8"))


def generate_code(
    key: bytes, counter: int, digits: int, algorithm: HashAlgorithm
) -> str:
    """Compute one code from already-validated inputs."""
    digest = compute_hmac(algorithm, key, encode_counter(counter))
    return format_code(truncate(digest, digits), digits)


def hotp(
    secret: Secret,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    hash_alg: Algorithm = HashAlgorithm.SHA1,
) -> str:
    """
    Generate an HOTP code using RFC 4226.

    Args:
        secret: The shared secret as bytes, or Base32/Base64 encoded.
        counter: The moving counter value, an unsigned 64-bit integer.
        digits: Number of digits in the output code (default: 6).
        hash_alg: Hash algorithm member or name (default: SHA1).

    Returns:
        A zero-padded HOTP code string.

    Raises:
        InvalidDigits: If digits is out of range.
        InvalidCounter: If counter is not an unsigned 64-bit integer.
        UnsupportedHashAlgorithm: If the hash algorithm is unknown.
        InvalidSecret: If the secret cannot be decoded.
    """
    validate_digits(digits)
    validate_counter(counter)
    algorithm = resolve_algorithm(hash_alg)
    return generate_code(secret_bytes(secret), counter, digits, algorithm)


def hotp_verify(
    secret: Secret,
    candidate: str,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    hash_alg: Algorithm = HashAlgorithm.SHA1,
    window: int = DEFAULT_WINDOW,
) -> VerifyResult:
    """
    Verify an HOTP code against counters counter..counter+window.

    The scan only looks forward, so a code for a counter below `counter`
    never matches. Every counter in the window is checked; the smallest
    matching one is reported. The caller should store matched_counter + 1
    as the next expected counter.

    Args:
        secret: The shared secret as bytes, or Base32/Base64 encoded.
        candidate: The code to check.
        counter: The next expected counter value.
        digits: Number of digits in the code (default: 6).
        hash_alg: Hash algorithm member or name (default: SHA1).
        window: How many counters past `counter` to accept (default: 0).

    Returns:
        VerifyResult(matched, matched_counter).

    Raises:
        InvalidCandidate: If candidate is not a string.
    """
    validate_candidate(candidate)
    validate_digits(digits)
    validate_counter(counter)
    validate_window(window)
    algorithm = resolve_algorithm(hash_alg)
    key = secret_bytes(secret)

    last = min(counter + window, MAX_COUNTER)
    matched_counter = None
    for current in range(counter, last + 1):
        if strings_equal(candidate, generate_code(key, current, digits, algorithm)):
            if matched_counter is None:
                matched_counter = current

    if matched_counter is None:
        logger.debug("HOTP verification failed for counters %d..%d", counter, last)
        return VerifyResult(False, None)

    logger.debug(
        "HOTP verification matched at offset %d from counter %d",
        matched_counter - counter,
        counter,
    )
    return VerifyResult(True, matched_counter)
