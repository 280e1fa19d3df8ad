# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import hmac
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_backend.domain.users.entities import AuthenticatedIdentity
from blog_backend.domain.users.entities import SessionToken as DomainSessionToken
from blog_backend.domain.users.entities import User as DomainUser
from blog_backend.domain.users.exceptions import UserAlreadyExistsError
from blog_backend.domain.users.repositories import SessionRepository, UserRepository
from blog_backend.infrastructure.db.models import User, UserSession, utcnow
from blog_backend.infrastructure.unit_of_work import unit_of_work_scope
from blog_backend.shared.logging import logger

DEFAULT_SESSION_LIFETIME = timedelta(hours=24)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> AuthenticatedIdentity | None:
        # identity columns only, the hash never leaves the login path
        with unit_of_work_scope(self._session_factory) as session:
            row = session.execute(
                select(User.id, User.username, User.email).where(User.id == user_id)
            ).first()
        if row is None:
            return None
        return AuthenticatedIdentity(user_id=row.id, username=row.username, email=row.email)

    def add(self, username: str, email: str, password_hash: str) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(username=username, email=email, password_hash=password_hash)
                session.add(row)
                session.flush()
                persisted = _to_domain(row)
        except IntegrityError as exc:
            logger.info(f"users.add: unique constraint rejected username={username}")
            raise UserAlreadyExistsError() from exc
        return persisted


class SqlAlchemySessionRepository(SessionRepository):
    """Server-side session store.

    Clients hold the random session id; rows are keyed by its HMAC under the
    application secret, so a leaked table cannot be replayed as cookies.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        secret_key: str,
        lifetime: timedelta = DEFAULT_SESSION_LIFETIME,
        clock: Callable[[], datetime] = utcnow,
    ):
        if not secret_key:
            raise ValueError("secret_key is required for the session store")
        self._session_factory = session_factory
        self._secret = secret_key.encode("utf-8")
        self._lifetime = lifetime
        self._clock = clock

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def _digest(self, token: str) -> str:
        return hmac.new(self._secret, token.encode("utf-8"), hashlib.sha256).hexdigest()

    def issue(self, user_id: int) -> DomainSessionToken:
        token_value = secrets.token_urlsafe(48)
        now = self._clock()
        expires_at = now + self._lifetime
        with unit_of_work_scope(self._session_factory) as session:
            session.add(
                UserSession(
                    user_id=user_id,
                    token_digest=self._digest(token_value),
                    created_at=now,
                    expires_at=expires_at,
                )
            )
        logger.info(f"sessions.issue: user_id={user_id} exp={expires_at.isoformat()}")
        return DomainSessionToken(user_id=user_id, token=token_value, expires_at=expires_at)

    def resolve(self, token: str) -> int | None:
        if not token:
            return None
        with unit_of_work_scope(self._session_factory) as session:
            return session.scalars(
                select(UserSession.user_id).where(
                    UserSession.token_digest == self._digest(token),
                    UserSession.expires_at > self._clock(),
                )
            ).first()

    def revoke(self, token: str) -> None:
        with unit_of_work_scope(self._session_factory) as session:
            session.execute(
                delete(UserSession).where(UserSession.token_digest == self._digest(token))
            )

    def purge_expired(self) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                delete(UserSession).where(UserSession.expires_at <= self._clock())
            )
            return int(result.rowcount or 0)
