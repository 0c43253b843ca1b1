"""Password hashing utilities."""

from passlib.hash import pbkdf2_sha256


def hash_password(password: str) -> str:
    """Hash a password for storage (salted PBKDF2-SHA256, passlib format)."""
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, stored: str) -> bool:
    """Check a plain password against a stored hash. Malformed hashes never match."""
    try:
        return pbkdf2_sha256.verify(password, stored)
    except (ValueError, TypeError):
        return False
