"""Shared pytest fixtures: app config on temp dirs, container, Flask client."""

from __future__ import annotations

import struct
import zlib
from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from imagestudio.app import create_app
from imagestudio.application.services.password_hashing import WerkzeugPasswordHasher
from imagestudio.container import Container
from imagestudio.shared.config import (AppConfig, DatabaseConfig, SecurityConfig,
                                       SimulationConfig, UploadConfig)


def make_png(width: int = 1, height: int = 1) -> bytes:
    def chunk(kind: bytes, data: bytes) -> bytes:
        body = kind + data
        return struct.pack(">I", len(data)) + body + struct.pack(">I", zlib.crc32(body))

    header = struct.pack(">IIBBBBB", width, height, 8, 6, 0, 0, 0)
    raw = b"".join(b"\x00" + b"\x00\x00\x00\xff" * width for _ in range(height))
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(raw))
        + chunk(b"IEND", b"")
    )


@pytest.fixture()
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        app_env="test",
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'studio.db'}"),
        security=SecurityConfig(secret_key="test-secret-key"),
        uploads=UploadConfig(directory=tmp_path / "uploads"),
        simulation=SimulationConfig(delay_seconds=0.0, failure_rate=0.0),
    )


@pytest.fixture()
def container(app_config: AppConfig) -> Iterator[Container]:
    container = Container(app_config)
    # Few iterations keep the suite fast; the algorithm stays the same.
    container.password_hasher = WerkzeugPasswordHasher("pbkdf2:sha256:1000")
    yield container
    container.database.dispose()


@pytest.fixture()
def app(app_config: AppConfig, container: Container) -> Flask:
    return create_app(app_config, container)


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as client:
        yield client
