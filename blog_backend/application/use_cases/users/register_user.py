# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.domain.users.entities import User
from blog_backend.domain.users.repositories import PasswordHasher, UserRepository


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, username: str, email: str, password: str) -> User:
        # Uniqueness is left to the store's constraints so concurrent sign-ups cannot race
        hashed = self._password_hasher.hash(password)
        return self._users.add(username=username, email=email, password_hash=hashed)
