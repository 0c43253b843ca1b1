"""Password hashing tests."""

from botdesk.core.memory import MemoryStorage
from botdesk.core.security import hash_password, verify_password


def test_hash_is_salted():
    first = hash_password("s3cret")
    second = hash_password("s3cret")

    assert first != second
    assert "s3cret" not in first
    assert verify_password("s3cret", first)
    assert verify_password("s3cret", second)


def test_wrong_password_does_not_verify():
    assert not verify_password("wrong", hash_password("s3cret"))


def test_malformed_hash_does_not_verify():
    assert verify_password("x", "pbkdf2_sha256$abc$salt$digest") is False
    assert verify_password("x", "not-a-hash") is False
    assert verify_password("x", "") is False


def test_default_store_starts_with_hashed_admin():
    storage = MemoryStorage()
    admin = next(iter(storage._users.values()))

    assert admin.username == "admin"
    assert verify_password("admin", admin.password)
