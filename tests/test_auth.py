import pytest

from chirpy.auth import PasswordMismatchError, check_password_hash, hash_password


def test_hash_round_trip():
    password = "password"
    hashed = hash_password(password)
    assert hashed != password
    check_password_hash(hashed, password)
    with pytest.raises(PasswordMismatchError):
        check_password_hash(hashed, "secret")


def test_hash_uses_minimum_cost():
    hashed = hash_password("password")
    assert hashed.startswith("$2b$04$")


def test_hashes_are_salted():
    hashes = {hash_password("password") for _ in range(3)}
    assert len(hashes) == 3
    assert all(len(hashed) == 60 for hashed in hashes)
    assert all(hashed.startswith("$2b$04$") for hashed in hashes)


def test_wrong_password_rejected():
    hashed = hash_password("secret")
    with pytest.raises(PasswordMismatchError):
        check_password_hash(hashed, "password")


def test_malformed_hash_rejected():
    with pytest.raises(PasswordMismatchError):
        check_password_hash("not-a-hash", "password")


def test_too_long_password_rejected():
    with pytest.raises(ValueError):
        hash_password("x" * 73)


def test_empty_password_round_trip():
    hashed = hash_password("")
    check_password_hash(hashed, "")
    with pytest.raises(PasswordMismatchError):
        check_password_hash(hashed, "token")