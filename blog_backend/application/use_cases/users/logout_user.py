"""Use-case for revoking server-side sessions."""

from __future__ import annotations

from blog_backend.domain.users.repositories import SessionRepository


class LogoutUserUseCase:
    def __init__(self, *, sessions: SessionRepository) -> None:
        self._sessions = sessions

    def execute(self, token: str) -> None:
        if token:
            self._sessions.revoke(token)
