# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from imagestudio.application.use_cases.users.login_user import LoginUserUseCase
from imagestudio.application.use_cases.users.register_user import RegisterUserUseCase
from imagestudio.application.use_cases.users.verify_session import VerifySessionUseCase
from imagestudio.interfaces.http.dto.auth import (AuthSuccessDTO, LoginRequestDTO,
                                                  RegisterRequestDTO, UserDTO,
                                                  VerifySuccessDTO)
from imagestudio.shared.errors.base import AuthError
from imagestudio.shared.errors.validation import raise_validation_error
from imagestudio.shared.logging import logger
from imagestudio.shared.middleware.session_guard import SessionGuard


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        verify_use_case: VerifySessionUseCase,
        guard: SessionGuard,
        url_prefix: str = "/api",
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._verify_use_case = verify_use_case
        self._guard = guard
        self._url_prefix = url_prefix

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._register_use_case.execute(dto.email, dto.password)

        payload = AuthSuccessDTO(user=UserDTO.from_entity(user), token=token).model_dump()
        return jsonify(payload), 201

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user, token = self._login_use_case.execute(dto.email, dto.password)

        payload = AuthSuccessDTO(user=UserDTO.from_entity(user), token=token).model_dump()
        return jsonify(payload), 200

    def verify(self) -> tuple[Response, int]:
        try:
            user_id = self._guard.current_user_id()
            user = self._verify_use_case.execute(user_id)
        except AuthError as exc:
            logger.info(f"auth.verify: rejected reason={exc.code}")
            return jsonify({"valid": False, "error": exc.code}), exc.status

        g.user_id = user.id
        payload = VerifySuccessDTO(user=UserDTO.from_entity(user)).model_dump()
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix=f"{self._url_prefix}/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/verify", view_func=self.verify, methods=["GET"])
        return bp
