# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.generations.list_recent import ListRecentGenerationsUseCase
from .use_cases.generations.upload_generation import UploadGenerationUseCase
from .use_cases.users.login_user import AuthenticateUserUseCase, LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase
from .use_cases.users.verify_session import VerifySessionUseCase

__all__ = [
    "AuthenticateUserUseCase",
    "ListRecentGenerationsUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "UploadGenerationUseCase",
    "VerifySessionUseCase",
]
