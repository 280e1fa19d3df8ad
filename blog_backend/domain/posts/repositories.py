# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Post, PostSummary


class PostRepository(Protocol):
    def list_summaries(self) -> Sequence[PostSummary]: ...
    def find_by_id(self, post_id: int) -> Post | None: ...
    def find_author_id(self, post_id: int) -> int | None: ...
    def add(self, title: str, content: str, author_id: int) -> int: ...
    def update(self, post_id: int, title: str, content: str) -> bool: ...
    def delete(self, post_id: int) -> bool: ...
