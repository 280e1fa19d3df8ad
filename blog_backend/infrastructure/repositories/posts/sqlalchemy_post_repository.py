# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_backend.domain.posts.entities import Author, PostSummary
from blog_backend.domain.posts.entities import Post as DomainPost
from blog_backend.domain.posts.repositories import PostRepository
from blog_backend.domain.users.exceptions import UserNotFoundError
from blog_backend.infrastructure.db.models import Post, User, utcnow
from blog_backend.infrastructure.repositories.users.sqlalchemy_user_repository import as_utc
from blog_backend.infrastructure.unit_of_work import unit_of_work_scope


class SqlAlchemyPostRepository(PostRepository):
    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._session_factory = session_factory
        self._clock = clock

    def list_summaries(self) -> Sequence[PostSummary]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = session.execute(
                select(Post.id, Post.title, Post.created_at, User.id, User.username)
                .join(User, Post.author_id == User.id)
                .order_by(Post.created_at.desc(), Post.id.desc())
            ).all()
        return [
            PostSummary(
                id=post_id,
                title=title,
                author=Author(id=author_id, username=username),
                created_at=as_utc(created_at),
            )
            for post_id, title, created_at, author_id, username in rows
        ]

    def find_by_id(self, post_id: int) -> DomainPost | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.execute(
                select(Post, User.username)
                .join(User, Post.author_id == User.id)
                .where(Post.id == post_id)
            ).first()
            if row is None:
                return None
            post, username = row
            return DomainPost(
                id=post.id,
                title=post.title,
                content=post.content,
                author=Author(id=post.author_id, username=username),
                created_at=as_utc(post.created_at),
                updated_at=as_utc(post.updated_at),
            )

    def find_author_id(self, post_id: int) -> int | None:
        with unit_of_work_scope(self._session_factory) as session:
            return session.scalars(select(Post.author_id).where(Post.id == post_id)).first()

    def add(self, title: str, content: str, author_id: int) -> int:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                now = self._clock()
                row = Post(
                    title=title,
                    content=content,
                    author_id=author_id,
                    created_at=now,
                    updated_at=now,
                )
                session.add(row)
                session.flush()
                post_id = row.id
        except IntegrityError as exc:
            # author vanished after authentication
            raise UserNotFoundError() from exc
        return post_id

    def update(self, post_id: int, title: str, content: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                update(Post)
                .where(Post.id == post_id)
                .values(title=title, content=content, updated_at=self._clock())
            )
            return bool(result.rowcount)

    def delete(self, post_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(delete(Post).where(Post.id == post_id))
            return bool(result.rowcount)
