"""One-way password hashing backed by passlib."""

from passlib.context import CryptContext


class PasswordHasher:
    def __init__(self, schemes: tuple[str, ...] = ("pbkdf2_sha256",)):
        self._context = CryptContext(schemes=list(schemes), deprecated="auto")

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        """False for a mismatch *and* for a digest passlib cannot parse."""
        try:
            return self._context.verify(plaintext, digest)
        except ValueError:
            return False

    def dummy_verify(self) -> bool:
        """Spend the cost of one ``verify`` against a throwaway digest."""
        return self._context.dummy_verify()


password_hasher = PasswordHasher()
