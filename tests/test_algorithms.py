"""Tests for hash algorithm selection and the HMAC primitive."""

from unittest.mock import patch

import pytest
from cryptography.exceptions import UnsupportedAlgorithm

from ootp.algorithms import HashAlgorithm, compute_hmac, resolve_algorithm
from ootp.errors import UnsupportedHashAlgorithm


def test_from_name_variants():
    """Test that algorithm names are matched loosely."""
    assert HashAlgorithm.from_name("SHA1") is HashAlgorithm.SHA1
    assert HashAlgorithm.from_name("sha-256") is HashAlgorithm.SHA256
    assert HashAlgorithm.from_name(" sha_512 ") is HashAlgorithm.SHA512


def test_from_name_unknown():
    """Test that unknown names raise UnsupportedHashAlgorithm."""
    with pytest.raises(UnsupportedHashAlgorithm, match="MD5"):
        HashAlgorithm.from_name("MD5")


def test_resolve_algorithm():
    """Test resolving members, names and invalid values."""
    assert resolve_algorithm(HashAlgorithm.SHA384) is HashAlgorithm.SHA384
    assert resolve_algorithm("sha224") is HashAlgorithm.SHA224
    with pytest.raises(UnsupportedHashAlgorithm):
        resolve_algorithm(None)


def test_digest_sizes():
    """Test that every supported digest is long enough to truncate."""
    sizes = {algorithm: algorithm.digest_size for algorithm in HashAlgorithm}
    assert sizes == {
        HashAlgorithm.SHA1: 20,
        HashAlgorithm.SHA224: 28,
        HashAlgorithm.SHA256: 32,
        HashAlgorithm.SHA384: 48,
        HashAlgorithm.SHA512: 64,
    }


def test_compute_hmac_rfc4226():
    """Test HMAC-SHA1 against the RFC 4226 Appendix D value for count 0."""
    digest = compute_hmac(HashAlgorithm.SHA1, b"12345678901234567890", b"\x00" * 8)
    assert digest.hex() == "cc93cf18508d94934c64b65d8ba7667fb7cde4b0"


def test_compute_hmac_lengths():
    """Test that each algorithm returns its full digest."""
    for algorithm in HashAlgorithm:
        digest = compute_hmac(algorithm, b"key", b"\x00" * 8)
        assert len(digest) == algorithm.digest_size


def test_compute_hmac_backend_unsupported():
    """Test that a backend without the hash reports UnsupportedHashAlgorithm."""
    with patch(
        "ootp.algorithms.hmac.HMAC", side_effect=UnsupportedAlgorithm("no sha1")
    ):
        with pytest.raises(UnsupportedHashAlgorithm, match="not supported"):
            compute_hmac(HashAlgorithm.SHA1, b"key", b"message")
