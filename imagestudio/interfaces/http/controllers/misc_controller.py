# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, Response, jsonify, send_from_directory
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from imagestudio.infrastructure.health import check_database
from imagestudio.shared.logging import logger


class MiscController:
    def __init__(
        self,
        *,
        engine: Engine,
        upload_root: Path,
        upload_url_prefix: str = "/uploads",
        api_prefix: str = "/api",
    ) -> None:
        self._engine = engine
        self._upload_root = Path(upload_root).resolve()
        self._upload_url_prefix = upload_url_prefix
        self._api_prefix = api_prefix

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule(f"{self._api_prefix}/health", view_func=self.health, methods=["GET"])
        bp.add_url_rule(
            f"{self._upload_url_prefix}/<path:filename>",
            view_func=self.uploaded_file,
            methods=["GET"],
        )
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            check_database(self._engine)
            status["database"] = "ok"
        except SQLAlchemyError as exc:
            logger.error(f"health: database probe failed {type(exc).__name__}")
            status["ok"] = False
            status["database"] = "error"
            return jsonify(status), 503
        return jsonify(status), 200

    def uploaded_file(self, filename: str) -> Response:
        response = send_from_directory(self._upload_root, filename)
        # Images are displayed by a frontend on another origin.
        response.headers["Cross-Origin-Resource-Policy"] = "cross-origin"
        return response
