# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.application.services.ownership import PostOwnershipGuard
from blog_backend.domain.posts.exceptions import PostNotFoundError
from blog_backend.domain.posts.repositories import PostRepository
from blog_backend.domain.users.entities import AuthenticatedIdentity


class DeletePostUseCase:
    def __init__(self, *, posts: PostRepository, ownership: PostOwnershipGuard) -> None:
        self._posts = posts
        self._ownership = ownership

    def execute(self, identity: AuthenticatedIdentity, post_id: int) -> None:
        self._ownership.require_owner(post_id, identity.user_id)
        if not self._posts.delete(post_id):
            raise PostNotFoundError(post_id)
