"""
Tests for password hashing.
"""
from core.security import hash_password, verify_password


def test_hash_is_not_the_password():
    hashed = hash_password("pw123", rounds=4)
    assert hashed != "pw123"
    assert hashed.startswith("$2b$04$")


def test_same_password_hashes_differently():
    assert hash_password("pw123", rounds=4) != hash_password("pw123", rounds=4)


def test_verify_matching_password():
    hashed = hash_password("pw123", rounds=4)
    assert verify_password("pw123", hashed) is True


def test_verify_wrong_password():
    hashed = hash_password("pw123", rounds=4)
    assert verify_password("pw124", hashed) is False


def test_verify_against_garbage_hash():
    assert verify_password("pw123", "not-a-bcrypt-hash") is False


def test_long_password_is_accepted():
    password = "é" * 100  # 200 bytes in UTF-8
    hashed = hash_password(password, rounds=4)
    assert verify_password(password, hashed) is True
