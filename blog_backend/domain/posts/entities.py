# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class Author:
    id: int
    username: str


@dataclass(slots=True, frozen=True)
class PostSummary:
    """List projection of a post, carries no content."""

    id: int
    title: str
    author: Author
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Post:
    id: int
    title: str
    content: str
    author: Author
    created_at: datetime
    updated_at: datetime

    @property
    def author_id(self) -> int:
        return self.author.id

    def is_authored_by(self, user_id: int) -> bool:
        return self.author.id == user_id
