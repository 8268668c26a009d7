# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from imagestudio.domain.users.entities import User
from imagestudio.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from imagestudio.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        tokens: TokenService,
        password_hasher: PasswordHasher,
        token_ttl: timedelta,
    ) -> None:
        self._users = users
        self._tokens = tokens
        self._password_hasher = password_hasher
        self._token_ttl = token_ttl

    def execute(self, email: str, password: str) -> tuple[User, str]:
        # Uniqueness is enforced by the store on insert; add() raises
        # UserAlreadyExistsError when the email is taken.
        now = datetime.now(UTC)
        hashed = self._password_hasher.hash(password)
        user = User(id=0, email=email, password_hash=hashed, created_at=now)
        persisted = self._users.add(user)
        token = self._tokens.issue(persisted.id, self._token_ttl)
        logger.info(f"auth.register: ok user_id={persisted.id}")
        return persisted, token
