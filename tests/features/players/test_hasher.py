"""
Tests for password hashing.
"""

import pytest

from players_api.features.players.exceptions import HashingError
from players_api.features.players.hasher import PasslibHasher


@pytest.fixture(scope="module")
def hasher():
    return PasslibHasher()


def test_hash_is_not_plaintext(hasher):
    hashed = hasher.hash("s3cret")

    assert isinstance(hashed, bytes)
    assert hashed.startswith(b"$argon2")
    assert b"s3cret" not in hashed


def test_hash_is_salted(hasher):
    assert hasher.hash("s3cret") != hasher.hash("s3cret")


def test_verify(hasher):
    hashed = hasher.hash("s3cret")

    assert hasher.verify("s3cret", hashed)
    assert not hasher.verify("wrong", hashed)


def test_verify_malformed_hash(hasher):
    assert not hasher.verify("s3cret", b"not-a-hash")


def test_hash_failure(hasher):
    with pytest.raises(HashingError) as exc_info:
        hasher.hash(None)

    assert str(exc_info.value).startswith("unable to hash password: ")
