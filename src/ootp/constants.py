"""Default parameters for HOTP and TOTP."""

DEFAULT_DIGITS = 6
MIN_DIGITS = 1
# 10**9 is the largest power of ten below 2**31
MAX_DIGITS = 9

COUNTER_BYTES = 8
MAX_COUNTER = 2**64 - 1

# HOTP looks ahead only; TOTP tolerates one step of drift either way
DEFAULT_WINDOW = 0
DEFAULT_TOTP_WINDOW = 1

DEFAULT_STEP = 30
DEFAULT_EPOCH = 0

MIN_DIGEST_LENGTH = 20
