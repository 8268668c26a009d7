# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, jsonify, request

from imagestudio.domain.users.exceptions import InvalidTokenFormatError, MissingTokenError
from imagestudio.domain.users.repositories import TokenService
from imagestudio.shared.errors.base import AuthError
from imagestudio.shared.logging import logger

BEARER_PREFIX = "Bearer "


class SessionGuard:
    """Gate for routes that need an authenticated user.

    ``authenticate`` walks the header states and returns the user id or
    raises an ``AuthError`` subclass; ``required`` wraps a view, stores the
    user id in ``g.user_id`` and answers 401 itself on any failure.
    """

    def __init__(self, tokens: TokenService) -> None:
        self._tokens = tokens

    def authenticate(self, header: str | None) -> int:
        if not header:
            raise MissingTokenError()
        if not header.startswith(BEARER_PREFIX):
            raise InvalidTokenFormatError()
        token = header[len(BEARER_PREFIX):].strip()
        if not token:
            raise InvalidTokenFormatError()
        return self._tokens.verify(token)

    def current_user_id(self) -> int:
        return self.authenticate(request.headers.get("Authorization"))

    def required(self, f: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(f)
        def inner(*a, **kw):
            try:
                user_id = self.current_user_id()
            except AuthError as exc:
                logger.warning(
                    f"Auth failed ({exc.code}) on {request.method} {request.path} "
                    f"from {request.headers.get('X-Forwarded-For', request.remote_addr)}"
                )
                return jsonify(exc.to_dict()), exc.status

            g.user_id = user_id
            logger.debug(f"Auth OK: user={user_id} {request.method} {request.path}")
            return f(*a, **kw)

        return inner


__all__ = ["SessionGuard"]
