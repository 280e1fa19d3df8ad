# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig


from __future__ import annotations

from http import HTTPStatus
from time import perf_counter

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from blog_backend.application.use_cases.posts.create_post import CreatePostUseCase
from blog_backend.application.use_cases.posts.delete_post import DeletePostUseCase
from blog_backend.application.use_cases.posts.get_post import GetPostUseCase
from blog_backend.application.use_cases.posts.list_posts import ListPostsUseCase
from blog_backend.application.use_cases.posts.update_post import UpdatePostUseCase
from blog_backend.domain.posts.exceptions import NotPostAuthorError
from blog_backend.infrastructure.audit import AuditAction, audit_log
from blog_backend.infrastructure.auth import AuthGuard, current_identity
from blog_backend.interfaces.http.dto.auth import MessageDTO
from blog_backend.interfaces.http.dto.posts import (
    PostCreatedResponseDTO,
    PostDetailDTO,
    PostDetailResponseDTO,
    PostListResponseDTO,
    PostSummaryDTO,
    PostWriteRequestDTO,
)
from blog_backend.shared.errors import InfrastructureError
from blog_backend.shared.errors.validation import raise_validation_error
from blog_backend.shared.logging import logger


def _parse_write_payload() -> PostWriteRequestDTO:
    try:
        return PostWriteRequestDTO.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


class PostsController:
    def __init__(
        self,
        *,
        list_use_case: ListPostsUseCase,
        get_use_case: GetPostUseCase,
        create_use_case: CreatePostUseCase,
        update_use_case: UpdatePostUseCase,
        delete_use_case: DeletePostUseCase,
        guard: AuthGuard,
    ) -> None:
        self._list = list_use_case
        self._get = get_use_case
        self._create = create_use_case
        self._update = update_use_case
        self._delete = delete_use_case
        self._guard = guard

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("posts", __name__, url_prefix="/api/posts")
        required = self._guard.required
        bp.add_url_rule("", view_func=self.list_posts, methods=["GET"])
        bp.add_url_rule("/<int:post_id>", view_func=self.get_post, methods=["GET"])
        bp.add_url_rule("", view_func=required(self.create), methods=["POST"])
        bp.add_url_rule("/<int:post_id>", view_func=required(self.update), methods=["PUT"])
        bp.add_url_rule("/<int:post_id>", view_func=required(self.delete), methods=["DELETE"])
        return bp

    def list_posts(self) -> tuple[Response, int]:
        t0 = perf_counter()
        try:
            items = self._list.execute()
        except SQLAlchemyError as exc:
            logger.exception("posts.list: err")
            raise InfrastructureError(code="posts_list_failed") from exc

        payload = PostListResponseDTO(posts=[PostSummaryDTO.from_summary(s) for s in items])
        dt = (perf_counter() - t0) * 1000
        logger.info(f"posts.list: ok (n={len(items)}, dt_ms={dt:.0f})")
        return jsonify(payload.model_dump(mode="json")), HTTPStatus.OK

    def get_post(self, post_id: int) -> tuple[Response, int]:
        try:
            post = self._get.execute(post_id)
        except SQLAlchemyError as exc:
            logger.exception(f"posts.get: err (post_id={post_id})")
            raise InfrastructureError(code="post_get_failed") from exc

        payload = PostDetailResponseDTO(post=PostDetailDTO.from_post(post))
        return jsonify(payload.model_dump(mode="json")), HTTPStatus.OK

    def create(self) -> tuple[Response, int]:
        identity = current_identity()
        dto = _parse_write_payload()
        try:
            post_id = self._create.execute(identity, dto.title, dto.content)
        except SQLAlchemyError as exc:
            logger.exception(f"posts.create: err (user_id={identity.user_id})")
            raise InfrastructureError(code="post_create_failed") from exc

        audit_log(
            AuditAction.POST_CREATED,
            user_id=identity.user_id,
            ip_address=request.remote_addr,
            details={"post_id": post_id, "title": dto.title},
        )
        logger.info(f"posts.create: ok (user_id={identity.user_id}, post_id={post_id})")
        payload = PostCreatedResponseDTO(post_id=post_id)
        return jsonify(payload.model_dump(by_alias=True)), HTTPStatus.CREATED

    def update(self, post_id: int) -> tuple[Response, int]:
        identity = current_identity()
        try:
            # Ownership is settled before the body is looked at
            self._update.authorize(identity, post_id)
            dto = _parse_write_payload()
            self._update.execute(identity, post_id, dto.title, dto.content)
        except NotPostAuthorError:
            audit_log(
                AuditAction.POST_ACCESS_DENIED,
                user_id=identity.user_id,
                ip_address=request.remote_addr,
                details={"post_id": post_id, "operation": "update"},
                success=False,
            )
            raise
        except SQLAlchemyError as exc:
            logger.exception(f"posts.update: err (user_id={identity.user_id}, post_id={post_id})")
            raise InfrastructureError(code="post_update_failed") from exc

        audit_log(
            AuditAction.POST_UPDATED,
            user_id=identity.user_id,
            ip_address=request.remote_addr,
            details={"post_id": post_id},
        )
        logger.info(f"posts.update: ok (user_id={identity.user_id}, post_id={post_id})")
        return jsonify(MessageDTO(message="Post updated").model_dump()), HTTPStatus.OK

    def delete(self, post_id: int) -> tuple[Response, int]:
        identity = current_identity()
        try:
            self._delete.execute(identity, post_id)
        except NotPostAuthorError:
            audit_log(
                AuditAction.POST_ACCESS_DENIED,
                user_id=identity.user_id,
                ip_address=request.remote_addr,
                details={"post_id": post_id, "operation": "delete"},
                success=False,
            )
            raise
        except SQLAlchemyError as exc:
            logger.exception(f"posts.delete: err (user_id={identity.user_id}, post_id={post_id})")
            raise InfrastructureError(code="post_delete_failed") from exc

        audit_log(
            AuditAction.POST_DELETED,
            user_id=identity.user_id,
            ip_address=request.remote_addr,
            details={"post_id": post_id},
        )
        logger.info(f"posts.delete: ok (user_id={identity.user_id}, post_id={post_id})")
        return jsonify(MessageDTO(message="Post deleted").model_dump()), HTTPStatus.OK
