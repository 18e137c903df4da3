"""HOTP and TOTP token objects bound to one secret and parameter set."""

import time
from numbers import Real
from typing import Callable, Optional

from ootp.algorithms import HashAlgorithm, resolve_algorithm
from ootp.constants import (
    DEFAULT_DIGITS,
    DEFAULT_EPOCH,
    DEFAULT_STEP,
    DEFAULT_TOTP_WINDOW,
    DEFAULT_WINDOW,
)
from ootp.errors import InvalidTimestamp
from ootp.hotp import Algorithm, Secret, VerifyResult, hotp, hotp_verify, secret_bytes
from ootp.totp import time_to_counter, totp, totp_verify, validate_step
from ootp.truncation import validate_digits


class HotpToken:
    """
    A counter-based token.

    The token holds no counter; callers track the next expected counter
    themselves and pass it to every call.
    """

    def __init__(
        self,
        secret: Secret,
        digits: int = DEFAULT_DIGITS,
        algorithm: Algorithm = HashAlgorithm.SHA1,
    ):
        """
        Initialize a HotpToken instance.

        Args:
            secret: The shared secret as bytes, or Base32/Base64 encoded.
            digits: Number of digits in generated codes (default: 6).
            algorithm: Hash algorithm member or name (default: SHA1).

        Raises:
            InvalidSecret: If the secret cannot be decoded.
            InvalidDigits: If digits is out of range.
            UnsupportedHashAlgorithm: If the algorithm is unknown.
        """
        self._secret = secret_bytes(secret)
        self._digits = validate_digits(digits)
        self._algorithm = resolve_algorithm(algorithm)

    @property
    def secret(self) -> bytes:
        return self._secret

    @property
    def digits(self) -> int:
        return self._digits

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(digits={self._digits}, "
            f"algorithm={self._algorithm.value})"
        )

    def at(self, counter: int) -> str:
        """Generate the code for a counter value."""
        return hotp(self._secret, counter, self._digits, self._algorithm)

    def verify(
        self, candidate: str, counter: int, window: int = DEFAULT_WINDOW
    ) -> VerifyResult:
        """Check a code against counters counter..counter+window."""
        return hotp_verify(
            self._secret, candidate, counter, self._digits, self._algorithm, window
        )


class TotpToken:
    """
    A time-based token.

    When a method is called without a timestamp, the injected clock is
    asked for the current time.
    """

    def __init__(
        self,
        secret: Secret,
        step: Real = DEFAULT_STEP,
        epoch: Real = DEFAULT_EPOCH,
        digits: int = DEFAULT_DIGITS,
        algorithm: Algorithm = HashAlgorithm.SHA1,
        clock: Callable[[], Real] = time.time,
    ):
        """
        Initialize a TotpToken instance.

        Args:
            secret: The shared secret as bytes, or Base32/Base64 encoded.
            step: Time step length in seconds (default: 30).
            epoch: Start of the first time step (default: 0).
            digits: Number of digits in generated codes (default: 6).
            algorithm: Hash algorithm member or name (default: SHA1).
            clock: Callable returning seconds since the Unix epoch.

        Raises:
            InvalidSecret: If the secret cannot be decoded.
            InvalidTimeStep: If step is not positive.
            InvalidDigits: If digits is out of range.
            UnsupportedHashAlgorithm: If the algorithm is unknown.
        """
        self._secret = secret_bytes(secret)
        self._step = validate_step(step)
        self._epoch = epoch
        self._digits = validate_digits(digits)
        self._algorithm = resolve_algorithm(algorithm)
        self._clock = clock

    @property
    def secret(self) -> bytes:
        return self._secret

    @property
    def step(self) -> Real:
        return self._step

    @property
    def epoch(self) -> Real:
        return self._epoch

    @property
    def digits(self) -> int:
        return self._digits

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(step={self._step}, epoch={self._epoch}, "
            f"digits={self._digits}, algorithm={self._algorithm.value})"
        )

    def _resolve_time(self, timestamp: Optional[Real]) -> Real:
        return self._clock() if timestamp is None else timestamp

    def counter_at(self, timestamp: Optional[Real] = None) -> int:
        """Time step counter for a timestamp (default: now)."""
        return time_to_counter(self._resolve_time(timestamp), self._epoch, self._step)

    def at(self, timestamp: Real) -> str:
        """Generate the code valid at a timestamp."""
        return totp(
            self._secret,
            timestamp,
            self._epoch,
            self._step,
            self._digits,
            self._algorithm,
        )

    def now(self) -> str:
        """Generate the code for the current time."""
        return self.at(self._clock())

    def drift(self, steps: int) -> str:
        """
        Generate the code `steps` time steps away from now.

        Negative values give codes from the past, positive ones from the
        future; useful for simulating a token whose clock is off.
        """
        return self.at(self._clock() + self._step * steps)

    def remaining(self, timestamp: Optional[Real] = None) -> Real:
        """Seconds until the step containing timestamp (default: now) ends."""
        timestamp = self._resolve_time(timestamp)
        if timestamp < self._epoch:
            raise InvalidTimestamp(
                f"timestamp {timestamp} is before the epoch {self._epoch}"
            )
        return self._step - (timestamp - self._epoch) % self._step

    def verify(
        self,
        candidate: str,
        timestamp: Optional[Real] = None,
        window: int = DEFAULT_TOTP_WINDOW,
    ) -> VerifyResult:
        """Check a code against the steps within `window` of timestamp."""
        return totp_verify(
            self._secret,
            candidate,
            self._resolve_time(timestamp),
            self._epoch,
            self._step,
            self._digits,
            self._algorithm,
            window,
        )
