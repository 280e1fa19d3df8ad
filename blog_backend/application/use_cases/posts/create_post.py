# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.domain.posts.repositories import PostRepository
from blog_backend.domain.users.entities import AuthenticatedIdentity


class CreatePostUseCase:
    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def execute(self, identity: AuthenticatedIdentity, title: str, content: str) -> int:
        return self._posts.add(title=title, content=content, author_id=identity.user_id)
