# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask

from imagestudio.container import Container


def register_blueprints(app: Flask, container: Container) -> None:
    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.generations_controller.as_blueprint())


__all__ = ["register_blueprints"]
