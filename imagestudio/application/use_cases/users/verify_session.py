# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from imagestudio.domain.users.entities import User
from imagestudio.domain.users.exceptions import InvalidTokenError
from imagestudio.domain.users.repositories import UserRepository


class VerifySessionUseCase:
    """Resolve an authenticated user id to the stored user."""

    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            # Signed for an account the store no longer knows.
            raise InvalidTokenError()
        return user
