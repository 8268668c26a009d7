# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless signed session tokens."""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from imagestudio.domain.users.exceptions import InvalidTokenError
from imagestudio.domain.users.repositories import TokenService
from imagestudio.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JoseTokenService(TokenService):
    """HS256 JWTs carrying ``sub`` (user id) and an absolute ``exp``.

    A token is accepted only while the clock is strictly before ``exp``.
    There is no revocation list.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, user_id: int, ttl: timedelta) -> str:
        now = self._clock()
        expires_at = now + ttl
        claims = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(8),
        }
        token = jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
        logger.debug(f"tokens.issue: user={user_id} exp={expires_at.isoformat()}")
        return token

    def verify(self, token: str) -> int:
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as exc:
            logger.debug(f"tokens.verify: rejected reason={type(exc).__name__}")
            raise InvalidTokenError() from exc

        exp = claims.get("exp")
        sub = claims.get("sub")
        if not isinstance(exp, (int, float)) or not isinstance(sub, str) or not sub.isdigit():
            logger.debug("tokens.verify: rejected reason=claims")
            raise InvalidTokenError()

        if self._clock().timestamp() >= exp:
            logger.debug("tokens.verify: rejected reason=expired")
            raise InvalidTokenError()

        return int(sub)
