"""Hash algorithm selection and the HMAC primitive."""

from enum import Enum
from typing import Type, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac

from ootp.errors import UnsupportedHashAlgorithm


class HashAlgorithm(Enum):
    """Hash functions usable for HOTP and TOTP."""

    SHA1 = "SHA1"
    SHA224 = "SHA224"
    SHA256 = "SHA256"
    SHA384 = "SHA384"
    SHA512 = "SHA512"

    @property
    def hash_type(self) -> Type[hashes.HashAlgorithm]:
        return _HASH_TYPES[self]

    @property
    def digest_size(self) -> int:
        return self.hash_type.digest_size

    @classmethod
    def from_name(cls, name: str) -> "HashAlgorithm":
        """
        Look up an algorithm by name.

        Case, dashes and underscores are ignored, so "sha-256", "SHA_256"
        and "sha256" all select SHA256.

        Raises:
            UnsupportedHashAlgorithm: If the name matches no member.
        """
        normalized = name.strip().upper().replace("-", "").replace("_", "")
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedHashAlgorithm(
                f"Unsupported hash algorithm: {name!r}"
            ) from None


_HASH_TYPES = {
    HashAlgorithm.SHA1: hashes.SHA1,
    HashAlgorithm.SHA224: hashes.SHA224,
    HashAlgorithm.SHA256: hashes.SHA256,
    HashAlgorithm.SHA384: hashes.SHA384,
    HashAlgorithm.SHA512: hashes.SHA512,
}


def resolve_algorithm(algorithm: Union[HashAlgorithm, str]) -> HashAlgorithm:
    """Return the HashAlgorithm for a member or a name."""
    if isinstance(algorithm, HashAlgorithm):
        return algorithm
    if isinstance(algorithm, str):
        return HashAlgorithm.from_name(algorithm)
    raise UnsupportedHashAlgorithm(f"Unsupported hash algorithm: {algorithm!r}")


def compute_hmac(
    algorithm: Union[HashAlgorithm, str], key: bytes, message: bytes
) -> bytes:
    """
    Compute HMAC(algorithm, key, message).

    Args:
        algorithm: Hash algorithm member or name.
        key: The shared secret.
        message: The encoded moving factor.

    Returns:
        The raw digest bytes.

    Raises:
        UnsupportedHashAlgorithm: If the algorithm is unknown or the
            cryptography backend does not provide it.
    """
    algorithm = resolve_algorithm(algorithm)
    try:
        mac = hmac.HMAC(key, algorithm.hash_type())
    except UnsupportedAlgorithm as e:
        raise UnsupportedHashAlgorithm(
            f"Hash algorithm {algorithm.value} is not supported by the backend: {e}"
        ) from e
    mac.update(message)
    return mac.finalize()
