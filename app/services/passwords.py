"""Password hashing with bcrypt."""

import bcrypt

from app.config import get_settings

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way hashing and verification of plaintext passwords."""

    def __init__(self, rounds: int | None = None) -> None:
        self.rounds = rounds or get_settings().BCRYPT_ROUNDS

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt. Input beyond 72 bytes is ignored."""
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash. Malformed hashes never match."""
        try:
            return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
        except ValueError:
            return False


_password_hasher: PasswordHasher | None = None


def get_password_hasher() -> PasswordHasher:
    """Get singleton password hasher instance."""
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = PasswordHasher()
    return _password_hasher
