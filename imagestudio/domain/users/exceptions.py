# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from imagestudio.shared.errors.base import AuthError, DomainError


class UserAlreadyExistsError(DomainError):
    code = "email_already_registered"


class InvalidCredentialsError(AuthError):
    code = "invalid_credentials"


class MissingTokenError(AuthError):
    code = "missing_token"


class InvalidTokenFormatError(AuthError):
    code = "invalid_token_format"


class InvalidTokenError(AuthError):
    code = "invalid_token"
