# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from blog_backend.application.services.ownership import PostOwnershipGuard
from blog_backend.application.services.password_hashing import WerkzeugPasswordHasher
from blog_backend.application.use_cases.posts.create_post import CreatePostUseCase
from blog_backend.application.use_cases.posts.delete_post import DeletePostUseCase
from blog_backend.application.use_cases.posts.get_post import GetPostUseCase
from blog_backend.application.use_cases.posts.list_posts import ListPostsUseCase
from blog_backend.application.use_cases.posts.update_post import UpdatePostUseCase
from blog_backend.application.use_cases.users.authenticate_session import (
    AuthenticateSessionUseCase,
)
from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.logout_user import LogoutUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.infrastructure.auth import AuthGuard
from blog_backend.infrastructure.db import build_engine, build_session_factory
from blog_backend.infrastructure.db.models import utcnow
from blog_backend.infrastructure.repositories.posts import SqlAlchemyPostRepository
from blog_backend.infrastructure.repositories.users import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from blog_backend.interfaces.http.controllers.auth_controller import AuthController
from blog_backend.interfaces.http.controllers.misc_controller import MiscController
from blog_backend.interfaces.http.controllers.posts_controller import PostsController
from blog_backend.shared.config import AppConfig


class Container:
    """Wires storage, services and controllers from one explicit config."""

    def __init__(
        self,
        config: AppConfig,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.config = config
        self._clock = clock

    # Storage

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(
            self.session_factory,
            secret_key=self.config.secret_key,
            lifetime=timedelta(seconds=self.config.security.session_lifetime),
            clock=self._clock,
        )

    @cached_property
    def post_repository(self) -> SqlAlchemyPostRepository:
        return SqlAlchemyPostRepository(self.session_factory, clock=self._clock)

    # Services

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.security.password_hash_method)

    @cached_property
    def ownership_guard(self) -> PostOwnershipGuard:
        return PostOwnershipGuard(posts=self.post_repository)

    # User use cases

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(sessions=self.session_repository)

    @cached_property
    def authenticate_session_use_case(self) -> AuthenticateSessionUseCase:
        return AuthenticateSessionUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
        )

    @cached_property
    def auth_guard(self) -> AuthGuard:
        return AuthGuard(
            authenticate=self.authenticate_session_use_case,
            cookie_name=self.config.security.session_cookie_name,
        )

    # Post use cases

    @cached_property
    def list_posts_use_case(self) -> ListPostsUseCase:
        return ListPostsUseCase(posts=self.post_repository)

    @cached_property
    def get_post_use_case(self) -> GetPostUseCase:
        return GetPostUseCase(posts=self.post_repository)

    @cached_property
    def create_post_use_case(self) -> CreatePostUseCase:
        return CreatePostUseCase(posts=self.post_repository)

    @cached_property
    def update_post_use_case(self) -> UpdatePostUseCase:
        return UpdatePostUseCase(posts=self.post_repository, ownership=self.ownership_guard)

    @cached_property
    def delete_post_use_case(self) -> DeletePostUseCase:
        return DeletePostUseCase(posts=self.post_repository, ownership=self.ownership_guard)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            guard=self.auth_guard,
            security=self.config.security,
        )

    @cached_property
    def posts_controller(self) -> PostsController:
        return PostsController(
            list_use_case=self.list_posts_use_case,
            get_use_case=self.get_post_use_case,
            create_use_case=self.create_post_use_case,
            update_use_case=self.update_post_use_case,
            delete_use_case=self.delete_post_use_case,
            guard=self.auth_guard,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
