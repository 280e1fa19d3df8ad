# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from blog_backend.domain.posts.exceptions import NotPostAuthorError, PostNotFoundError
from blog_backend.domain.posts.repositories import PostRepository
from blog_backend.shared.logging import logger


class PostOwnershipGuard:
    """Gate for mutating post operations.

    Existence is checked before authorship, so a missing post is reported as
    not found to every caller.
    """

    def __init__(self, *, posts: PostRepository) -> None:
        self._posts = posts

    def require_owner(self, post_id: int, user_id: int) -> int:
        author_id = self._posts.find_author_id(post_id)
        if author_id is None:
            raise PostNotFoundError(post_id)
        if author_id != user_id:
            logger.warning(
                f"posts.ownership: denied (post_id={post_id}, user_id={user_id}, "
                f"author_id={author_id})"
            )
            raise NotPostAuthorError(post_id)
        return author_id
