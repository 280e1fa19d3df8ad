# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from blog_backend.application.use_cases.users.login_user import LoginUserUseCase
from blog_backend.application.use_cases.users.logout_user import LogoutUserUseCase
from blog_backend.application.use_cases.users.register_user import RegisterUserUseCase
from blog_backend.domain.users.exceptions import InvalidCredentialsError
from blog_backend.infrastructure.audit import AuditAction, audit_log
from blog_backend.infrastructure.auth import AuthGuard, current_identity
from blog_backend.interfaces.http.dto.auth import (
    CurrentUserResponseDTO,
    LoginRequestDTO,
    LoginResponseDTO,
    MessageDTO,
    RegisterRequestDTO,
    RegisterResponseDTO,
    UserPublicDTO,
)
from blog_backend.shared.config import SecurityConfig
from blog_backend.shared.errors import InfrastructureError
from blog_backend.shared.errors.validation import raise_validation_error
from blog_backend.shared.logging import logger


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        guard: AuthGuard,
        security: SecurityConfig,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._guard = guard
        self._security = security

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            user = self._register_use_case.execute(dto.username, dto.email, dto.password)
        except SQLAlchemyError as exc:
            logger.exception("auth.register: storage error")
            raise InfrastructureError(code="register_failed") from exc

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=_get_client_ip(),
            details={"username": dto.username},
            success=True,
        )

        payload = RegisterResponseDTO(user_id=user.id, user=UserPublicDTO.from_user(user))
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(payload.model_dump(by_alias=True)), HTTPStatus.CREATED

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()

        try:
            result = self._login_use_case.execute(dto.email, dto.password)
        except InvalidCredentialsError:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"email": dto.email},
                success=False,
            )
            raise
        except SQLAlchemyError as exc:
            logger.exception("auth.login: storage error")
            raise InfrastructureError(code="login_failed") from exc

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=result.user.id,
            ip_address=ip_address,
            success=True,
        )

        payload = LoginResponseDTO(user=UserPublicDTO.from_user(result.user))
        response = jsonify(payload.model_dump())
        response.set_cookie(
            self._security.session_cookie_name,
            result.session.token,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
            max_age=self._security.session_lifetime,
        )
        logger.info(f"auth.login: ok user_id={result.user.id}")
        return response, HTTPStatus.OK

    def logout(self) -> tuple[Response, int]:
        token = self._guard.session_id()

        try:
            self._logout_use_case.execute(token)
        except SQLAlchemyError as exc:
            logger.exception("auth.logout: storage error")
            raise InfrastructureError(code="logout_failed") from exc

        audit_log(
            AuditAction.LOGOUT,
            ip_address=_get_client_ip(),
            details={"had_session": bool(token)},
            success=True,
        )

        response = jsonify(MessageDTO(message="Logged out").model_dump())
        response.delete_cookie(
            self._security.session_cookie_name,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
        )
        logger.info("auth.logout: ok")
        return response, HTTPStatus.OK

    def me(self) -> tuple[Response, int]:
        identity = current_identity()
        payload = CurrentUserResponseDTO(user=UserPublicDTO.from_identity(identity))
        return jsonify(payload.model_dump()), HTTPStatus.OK

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/me", view_func=self._guard.required(self.me), methods=["GET"])
        return bp
