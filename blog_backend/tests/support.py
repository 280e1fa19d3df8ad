from __future__ import annotations

from datetime import UTC, datetime, timedelta

from flask.testing import FlaskClient
from werkzeug.test import TestResponse

# Cheap work factor so the suite stays fast; production uses scrypt
FAST_HASH_METHOD = "pbkdf2:sha256:1000"


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime.now(UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def register(
    client: FlaskClient, username: str, email: str, password: str = "secret1"
) -> TestResponse:
    return client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )


def login(client: FlaskClient, email: str, password: str = "secret1") -> TestResponse:
    return client.post("/api/auth/login", json={"email": email, "password": password})
