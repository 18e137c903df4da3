"""Exceptions raised for invalid OTP input."""


class OTPError(ValueError):
    """Base class for all ootp errors."""


class InvalidDigits(OTPError):
    """Digit count is not an integer in the supported range."""


class InvalidDigestLength(OTPError):
    """HMAC digest is too short for dynamic truncation."""


class UnsupportedHashAlgorithm(OTPError):
    """Hash algorithm is unknown or not available in the backend."""


class InvalidTimeStep(OTPError):
    """TOTP time step is not a positive number."""


class InvalidTimestamp(OTPError):
    """Timestamp precedes the epoch."""


class InvalidCounter(OTPError):
    """Counter is outside the unsigned 64-bit range."""


class InvalidWindow(OTPError):
    """Verification window is not a non-negative integer."""


class InvalidSecret(OTPError):
    """Secret could not be decoded to bytes."""


class InvalidCandidate(OTPError):
    """Candidate code is not a string."""
