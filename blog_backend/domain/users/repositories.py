# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import AuthenticatedIdentity, SessionToken, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> AuthenticatedIdentity | None: ...
    def add(self, username: str, email: str, password_hash: str) -> User: ...


class SessionRepository(Protocol):
    def issue(self, user_id: int) -> SessionToken: ...
    def resolve(self, token: str) -> int | None: ...
    def revoke(self, token: str) -> None: ...
    def purge_expired(self) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
