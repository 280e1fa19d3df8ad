# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from blog_backend.shared.errors.base import DomainError


class PostNotFoundError(DomainError):
    code = "post_not_found"
    status = HTTPStatus.NOT_FOUND
    message = "Post not found"

    def __init__(self, post_id: int) -> None:
        super().__init__(context={"post_id": post_id})


class NotPostAuthorError(DomainError):
    code = "forbidden"
    status = HTTPStatus.FORBIDDEN
    message = "Only the author can modify this post"

    def __init__(self, post_id: int) -> None:
        super().__init__(context={"post_id": post_id})
