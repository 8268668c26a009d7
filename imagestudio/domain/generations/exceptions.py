# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from imagestudio.shared.errors.base import AppError, DomainError


class MissingUploadFieldsError(DomainError):
    code = "image_and_prompt_required"


class UnsupportedImageTypeError(DomainError):
    code = "unsupported_media_type"
    status = HTTPStatus.UNSUPPORTED_MEDIA_TYPE


class ImageTooLargeError(AppError):
    def __init__(self, max_bytes: int) -> None:
        super().__init__(
            code="file_too_large",
            status=HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
            context={"max_bytes": max_bytes},
        )


class SimulatedServiceError(DomainError):
    code = "simulated_service_error"
    status = HTTPStatus.INTERNAL_SERVER_ERROR
