"""RFC 6238 TOTP (Time-based One-Time Password) implementation.

Timestamps are always supplied by the caller; nothing here reads a clock.
"""

import logging
from numbers import Real
from typing import Iterator

from ootp.algorithms import HashAlgorithm, resolve_algorithm
from ootp.constants import (
    DEFAULT_DIGITS,
    DEFAULT_EPOCH,
    DEFAULT_STEP,
    DEFAULT_TOTP_WINDOW,
    MAX_COUNTER,
)
from ootp.errors import InvalidTimestamp, InvalidTimeStep
from ootp.hotp import (
    Algorithm,
    Secret,
    VerifyResult,
    generate_code,
    hotp,
    secret_bytes,
    strings_equal,
    validate_candidate,
    validate_counter,
    validate_window,
)
from ootp.truncation import validate_digits

logger = logging.getLogger(__name__)


def validate_step(step: Real) -> Real:
    """
    Check that step is a positive number.

    Raises:
        InvalidTimeStep: If it is not.
    """
    if isinstance(step, bool) or not isinstance(step, Real):
        raise InvalidTimeStep(f"step must be a number, got {step!r}")
    if step <= 0:
        raise InvalidTimeStep(f"step must be positive, got {step}")
    return step


def time_to_counter(
    timestamp: Real, epoch: Real = DEFAULT_EPOCH, step: Real = DEFAULT_STEP
) -> int:
    """
    Number of whole time steps between epoch and timestamp.

    Raises:
        InvalidTimeStep: If step is not positive.
        InvalidTimestamp: If timestamp is before epoch.
    """
    validate_step(step)
    if timestamp < epoch:
        raise InvalidTimestamp(
            f"timestamp {timestamp} is before the epoch {epoch}"
        )
    return int((timestamp - epoch) // step)


def totp(
    secret: Secret,
    timestamp: Real,
    epoch: Real = DEFAULT_EPOCH,
    step: Real = DEFAULT_STEP,
    digits: int = DEFAULT_DIGITS,
    hash_alg: Algorithm = HashAlgorithm.SHA1,
) -> str:
    """
    Generate a TOTP code for a given time.

    Args:
        secret: The shared secret as bytes, or Base32/Base64 encoded.
        timestamp: Seconds since the Unix epoch.
        epoch: Start of the first time step (default: 0).
        step: Time step length in seconds (default: 30).
        digits: Number of digits in the output code (default: 6).
        hash_alg: Hash algorithm member or name (default: SHA1).

    Returns:
        A zero-padded TOTP code string.
    """
    counter = time_to_counter(timestamp, epoch, step)
    return hotp(secret, counter, digits, hash_alg)


def _drift_order(window: int) -> Iterator[int]:
    # 0, -1, +1, -2, +2, ...
    yield 0
    for distance in range(1, window + 1):
        yield -distance
        yield distance


def totp_verify(
    secret: Secret,
    candidate: str,
    timestamp: Real,
    epoch: Real = DEFAULT_EPOCH,
    step: Real = DEFAULT_STEP,
    digits: int = DEFAULT_DIGITS,
    hash_alg: Algorithm = HashAlgorithm.SHA1,
    window: int = DEFAULT_TOTP_WINDOW,
) -> VerifyResult:
    """
    Verify a TOTP code, tolerating `window` steps of clock drift either way.

    Offsets are preferred by distance from the current step, the earlier
    step first when two are equally far. Steps that would fall before the
    epoch are skipped.

    Returns:
        VerifyResult(matched, matched_counter).

    Raises:
        InvalidCandidate: If candidate is not a string.
    """
    validate_candidate(candidate)
    current = time_to_counter(timestamp, epoch, step)
    validate_counter(current)
    validate_digits(digits)
    validate_window(window)
    algorithm = resolve_algorithm(hash_alg)
    key = secret_bytes(secret)

    matched_counter = None
    for offset in _drift_order(window):
        counter = current + offset
        if not 0 <= counter <= MAX_COUNTER:
            continue
        if strings_equal(candidate, generate_code(key, counter, digits, algorithm)):
            if matched_counter is None:
                matched_counter = counter

    if matched_counter is None:
        logger.debug(
            "TOTP verification failed within %d steps of counter %d", window, current
        )
        return VerifyResult(False, None)

    logger.debug(
        "TOTP verification matched with drift %+d steps", matched_counter - current
    )
    return VerifyResult(True, matched_counter)
