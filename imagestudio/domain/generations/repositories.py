# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Generation


class GenerationRepository(Protocol):
    def add(self, user_id: int, prompt: str, image_path: str) -> Generation: ...
    def list_recent(self, user_id: int, limit: int = 5) -> Sequence[Generation]: ...


class ImageStorage(Protocol):
    def save_original(self, data: bytes, extension: str) -> str: ...
    def publish_generated(self, original: str) -> str: ...
    def delete(self, relative_path: str) -> None: ...
    def public_url(self, relative_path: str) -> str: ...


class GenerationEngine(Protocol):
    def run(self, prompt: str) -> None: ...
