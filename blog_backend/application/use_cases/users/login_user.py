# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from blog_backend.domain.users.entities import SessionToken, User
from blog_backend.domain.users.exceptions import InvalidCredentialsError
from blog_backend.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    UserRepository,
)
from blog_backend.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    user: User
    session: SessionToken


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> LoginResult:
        user = self._users.find_by_email(email)
        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash
        )

        if not password_valid:
            raise InvalidCredentialsError()

        purged = self._sessions.purge_expired()
        if purged:
            logger.debug(f"auth.login: purged {purged} expired sessions")

        session = self._sessions.issue(user.id)
        return LoginResult(user=user, session=session)
