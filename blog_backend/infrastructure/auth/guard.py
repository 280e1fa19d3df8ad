# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar, cast

from flask import g, request

from blog_backend.application.use_cases.users.authenticate_session import (
    AuthenticateSessionUseCase,
)
from blog_backend.domain.users.entities import AuthenticatedIdentity
from blog_backend.shared.errors.base import UnauthenticatedError
from blog_backend.shared.logging import logger

F = TypeVar("F", bound=Callable[..., Any])


class AuthGuard:
    def __init__(
        self,
        *,
        authenticate: AuthenticateSessionUseCase,
        cookie_name: str,
    ) -> None:
        self._authenticate = authenticate
        self._cookie_name = cookie_name

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    def session_id(self) -> str:
        return request.cookies.get(self._cookie_name, "")

    def required(self, view: F) -> F:
        @wraps(view)
        def inner(*args: Any, **kwargs: Any) -> Any:
            token = self.session_id()
            if not token:
                logger.warning(
                    f"No session cookie on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                raise UnauthenticatedError()

            try:
                identity = self._authenticate.execute(token)
            except UnauthenticatedError:
                logger.warning(
                    f"Auth failed (session not found/expired) on {request.method} {request.path}"
                )
                raise

            g.identity = identity
            g.user_id = identity.user_id
            logger.debug(f"Auth OK: user={identity.user_id} {request.method} {request.path}")
            return view(*args, **kwargs)

        return cast(F, inner)


def current_identity() -> AuthenticatedIdentity:
    """Return the identity attached by :meth:`AuthGuard.required`."""
    identity = getattr(g, "identity", None)
    if identity is None:
        raise RuntimeError("current_identity() used outside an authenticated view")
    return cast(AuthenticatedIdentity, identity)
