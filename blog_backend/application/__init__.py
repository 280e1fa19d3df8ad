# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.ownership import PostOwnershipGuard
from .services.password_hashing import PasswordHashingError, WerkzeugPasswordHasher
from .use_cases.posts.create_post import CreatePostUseCase
from .use_cases.posts.delete_post import DeletePostUseCase
from .use_cases.posts.get_post import GetPostUseCase
from .use_cases.posts.list_posts import ListPostsUseCase
from .use_cases.posts.update_post import UpdatePostUseCase
from .use_cases.users.authenticate_session import AuthenticateSessionUseCase
from .use_cases.users.login_user import LoginResult, LoginUserUseCase
from .use_cases.users.logout_user import LogoutUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "AuthenticateSessionUseCase",
    "CreatePostUseCase",
    "DeletePostUseCase",
    "GetPostUseCase",
    "ListPostsUseCase",
    "LoginResult",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "PasswordHashingError",
    "PostOwnershipGuard",
    "RegisterUserUseCase",
    "UpdatePostUseCase",
    "WerkzeugPasswordHasher",
]
