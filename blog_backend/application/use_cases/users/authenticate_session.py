# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.domain.users.entities import AuthenticatedIdentity
from blog_backend.domain.users.exceptions import UserNotFoundError
from blog_backend.domain.users.repositories import SessionRepository, UserRepository
from blog_backend.shared.errors.base import UnauthenticatedError


class AuthenticateSessionUseCase:
    """Resolve a session id presented by a client into the caller's identity."""

    def __init__(self, *, users: UserRepository, sessions: SessionRepository) -> None:
        self._users = users
        self._sessions = sessions

    def execute(self, token: str) -> AuthenticatedIdentity:
        if not token:
            raise UnauthenticatedError()

        user_id = self._sessions.resolve(token)
        if user_id is None:
            raise UnauthenticatedError("Session is invalid or has expired")

        identity = self._users.find_by_id(user_id)
        if identity is None:
            raise UserNotFoundError()
        return identity
