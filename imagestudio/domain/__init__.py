# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import EntityError, InvariantViolation
from .generations.entities import Generation, UploadCommand
from .users.entities import User

__all__ = [
    "EntityError",
    "Generation",
    "InvariantViolation",
    "UploadCommand",
    "User",
]
