# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import timedelta

from imagestudio.domain.users.entities import User
from imagestudio.domain.users.exceptions import InvalidCredentialsError
from imagestudio.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from imagestudio.shared.logging import logger


class AuthenticateUserUseCase:
    """Check an email/password pair against the credential store.

    Unknown email and wrong password raise the same error, and both paths run
    one hash verification.
    """

    def __init__(self, *, users: UserRepository, password_hasher: PasswordHasher) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._dummy_hash = password_hasher.hash(secrets.token_urlsafe(16))

    def execute(self, email: str, password: str) -> User:
        user = self._users.find_by_email(email)
        hashed = user.password_hash if user else self._dummy_hash
        password_valid = self._password_hasher.verify(password, hashed)

        if user is None or not password_valid:
            logger.info("auth.login: rejected")
            raise InvalidCredentialsError()
        return user


class LoginUserUseCase:
    def __init__(
        self,
        *,
        authenticate: AuthenticateUserUseCase,
        tokens: TokenService,
        token_ttl: timedelta,
    ) -> None:
        self._authenticate = authenticate
        self._tokens = tokens
        self._token_ttl = token_ttl

    def execute(self, email: str, password: str) -> tuple[User, str]:
        user = self._authenticate.execute(email, password)
        token = self._tokens.issue(user.id, self._token_ttl)
        logger.info(f"auth.login: ok user_id={user.id}")
        return user, token
