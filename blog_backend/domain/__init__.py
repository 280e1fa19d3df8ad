# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .posts.entities import Author, Post, PostSummary
from .users.entities import AuthenticatedIdentity, SessionToken, User

__all__ = [
    "Author",
    "AuthenticatedIdentity",
    "Post",
    "PostSummary",
    "SessionToken",
    "User",
]
