# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from imagestudio.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    password_hash: str
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.email:
            raise InvariantViolation("email must not be empty", field="email")
        if not self.password_hash:
            raise InvariantViolation("password hash must not be empty", field="password_hash")
