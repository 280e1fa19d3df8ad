from __future__ import annotations

import pytest

from blog_backend.application.services.password_hashing import (
    PasswordHashingError,
    WerkzeugPasswordHasher,
)

FAST_METHOD = "pbkdf2:sha256:1000"


@pytest.fixture()
def hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method=FAST_METHOD)


def test_hash_then_verify(hasher: WerkzeugPasswordHasher) -> None:
    hashed = hasher.hash("secret1")

    assert hashed != "secret1"
    assert hashed.startswith("pbkdf2:sha256:1000$")
    assert hasher.verify("secret1", hashed)


def test_verify_rejects_other_password(hasher: WerkzeugPasswordHasher) -> None:
    assert not hasher.verify("secret1", hasher.hash("secret2"))


def test_hash_is_salted_per_call(hasher: WerkzeugPasswordHasher) -> None:
    first = hasher.hash("secret1")
    second = hasher.hash("secret1")

    assert first != second
    assert hasher.verify("secret1", first)
    assert hasher.verify("secret1", second)


def test_default_method_is_scrypt() -> None:
    hashed = WerkzeugPasswordHasher().hash("secret1")

    assert hashed.startswith("scrypt:32768:8:1$")


def test_empty_password_cannot_be_hashed(hasher: WerkzeugPasswordHasher) -> None:
    with pytest.raises(PasswordHashingError) as exc_info:
        hasher.hash("")

    assert exc_info.value.to_dict()["error"] == "password_hashing_failed"
    assert exc_info.value.status == 500


def test_unknown_method_is_reported() -> None:
    with pytest.raises(PasswordHashingError):
        WerkzeugPasswordHasher(method="rot13").hash("secret1")


@pytest.mark.parametrize("stored", ["", "not-a-hash", "unknown$salt$digest"])
def test_verify_malformed_hash_is_false(hasher: WerkzeugPasswordHasher, stored: str) -> None:
    assert hasher.verify("secret1", stored) is False


def test_verify_empty_password_is_false(hasher: WerkzeugPasswordHasher) -> None:
    assert hasher.verify("", hasher.hash("secret1")) is False
