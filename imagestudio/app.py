# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from imagestudio.container import Container
from imagestudio.interfaces.http.routes import register_blueprints
from imagestudio.shared.config import AppConfig, load_config
from imagestudio.shared.logging import logger, setup_logging
from imagestudio.shared.middleware.error_handler import configure_error_handling
from imagestudio.shared.middleware.request_logger import configure_request_logging

# Multipart framing and the prompt field on top of the image itself.
_MULTIPART_OVERHEAD = 1024 * 1024


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)

    setup_logging(
        "DEBUG" if config.debug_logging else config.log_level,
        log_file=config.log_file,
    )
    container.database.init_schema()

    app = Flask(__name__)
    app.extensions["imagestudio.container"] = container
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    app.config.update(MAX_CONTENT_LENGTH=config.uploads.max_bytes + _MULTIPART_OVERHEAD)

    cors_kwargs: dict[str, object] = {
        "resources": {
            rf"{config.api_prefix}/*": {"origins": config.security.allowed_origins},
            rf"{config.uploads.url_prefix}/*": {"origins": config.security.allowed_origins},
        },
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    }
    if any(o != "*" for o in config.security.allowed_origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    register_blueprints(app, container)

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")

        resp.headers.setdefault("Referrer-Policy", "no-referrer")

        resp.headers.setdefault("X-Content-Type-Options", "nosniff")

        resp.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")

        if config.security.enable_hsts:
            resp.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains; preload",
            )

        return resp

    logger.info(f"Flask app initialized env={config.app_env}")
    return app


def get_container(app: Flask) -> Container:
    return app.extensions["imagestudio.container"]
