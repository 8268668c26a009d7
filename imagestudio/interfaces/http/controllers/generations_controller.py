# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from imagestudio.application.use_cases.generations.list_recent import \
    ListRecentGenerationsUseCase
from imagestudio.application.use_cases.generations.upload_generation import (
    DEFAULT_MAX_BYTES, UploadGenerationUseCase)
from imagestudio.domain.generations.entities import UploadCommand
from imagestudio.domain.generations.exceptions import ImageTooLargeError
from imagestudio.interfaces.http.dto.generations import GenerationDTO, UploadSuccessDTO
from imagestudio.shared.middleware.session_guard import SessionGuard

IMAGE_FIELD = "image"
PROMPT_FIELD = "prompt"


class GenerationsController:
    def __init__(
        self,
        *,
        upload_use_case: UploadGenerationUseCase,
        recent_use_case: ListRecentGenerationsUseCase,
        guard: SessionGuard,
        max_upload_bytes: int = DEFAULT_MAX_BYTES,
        url_prefix: str = "/api",
    ) -> None:
        self._upload_use_case = upload_use_case
        self._recent_use_case = recent_use_case
        self._guard = guard
        self._max_upload_bytes = max_upload_bytes
        self._url_prefix = url_prefix

    def _read_upload(self) -> UploadCommand:
        try:
            upload = request.files.get(IMAGE_FIELD)
        except RequestEntityTooLarge as exc:
            raise ImageTooLargeError(self._max_upload_bytes) from exc
        data = None
        filename = None
        content_type = None
        if upload is not None and upload.filename:
            # One byte past the cap is enough to detect an oversized file.
            data = upload.stream.read(self._max_upload_bytes + 1)
            filename = upload.filename
            content_type = upload.mimetype
        return UploadCommand(
            user_id=g.user_id,
            prompt=request.form.get(PROMPT_FIELD),
            filename=filename,
            content_type=content_type,
            data=data,
        )

    def upload(self) -> tuple[Response, int]:
        command = self._read_upload()
        generation = self._upload_use_case.execute(command)
        payload = UploadSuccessDTO(generation=GenerationDTO.from_entity(generation))
        return jsonify(payload.to_json()), 201

    def recent(self) -> tuple[Response, int]:
        generations = self._recent_use_case.execute(g.user_id)
        payload = [GenerationDTO.from_entity(item).to_json() for item in generations]
        return jsonify(payload), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("generations", __name__, url_prefix=f"{self._url_prefix}/generations")
        bp.add_url_rule(
            "/upload", view_func=self._guard.required(self.upload), methods=["POST"]
        )
        bp.add_url_rule(
            "/recent", view_func=self._guard.required(self.recent), methods=["GET"]
        )
        return bp
