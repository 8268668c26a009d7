# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Generation records and the upload payload that produces them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath

from imagestudio.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class Generation:
    """An immutable record of one simulated generation owned by a user."""

    id: int
    user_id: int
    prompt: str
    image_path: str
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.prompt or not self.prompt.strip():
            raise InvariantViolation("prompt must not be empty", field="prompt")
        if not self.image_path:
            raise InvariantViolation("image path must not be empty", field="image_path")


@dataclass(slots=True, frozen=True)
class UploadCommand:
    """Raw upload as received from the transport layer.

    ``data`` is ``None`` when no file part was sent; ``prompt`` is ``None``
    when the form field was absent.
    """

    user_id: int
    prompt: str | None
    filename: str | None
    content_type: str | None
    data: bytes | None

    @property
    def extension(self) -> str:
        if not self.filename:
            return ""
        return PurePosixPath(self.filename.replace("\\", "/")).suffix.lower()

    @property
    def media_type(self) -> str:
        if not self.content_type:
            return ""
        return self.content_type.split(";", 1)[0].strip().lower()

    @property
    def size(self) -> int:
        return len(self.data) if self.data is not None else 0
