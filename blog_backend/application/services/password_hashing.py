"""Password hashing strategies."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from blog_backend.domain.users.repositories import PasswordHasher
from blog_backend.shared.errors.base import InfrastructureError

DEFAULT_METHOD = "scrypt:32768:8:1"


class PasswordHashingError(InfrastructureError):
    def __init__(self) -> None:
        super().__init__(code="password_hashing_failed")


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted one-way hashing; ``method`` carries the algorithm and its work factor."""

    def __init__(self, method: str = DEFAULT_METHOD, salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length

    def hash(self, password: str) -> str:
        if not isinstance(password, str) or not password:
            raise PasswordHashingError()
        try:
            return str(
                generate_password_hash(
                    password, method=self._method, salt_length=self._salt_length
                )
            )
        except (TypeError, ValueError) as exc:
            raise PasswordHashingError() from exc

    def verify(self, password: str, hashed: str) -> bool:
        if not password or not hashed:
            return False
        try:
            return bool(check_password_hash(hashed, password))
        except (TypeError, ValueError):
            # unknown method or malformed stored hash
            return False
