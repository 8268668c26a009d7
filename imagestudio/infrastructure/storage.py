# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Local image store for uploads and simulated outputs."""

from __future__ import annotations

import secrets
import shutil
import time
from pathlib import Path, PurePosixPath

from imagestudio.domain.generations.repositories import ImageStorage
from imagestudio.shared.logging import logger

ORIGINALS_DIR = "originals"
GENERATED_DIR = "generated"


def _unique_name(extension: str, prefix: str = "") -> str:
    # Millisecond timestamp keeps names sortable; the random part avoids collisions.
    return f"{prefix}{int(time.time() * 1000)}-{secrets.token_hex(6)}{extension}"


class LocalImageStorage(ImageStorage):
    """Stores images on local filesystem within configured root.

    Paths handed in and out are relative to the root and use forward slashes;
    ``public_url`` maps them under the static URL prefix.
    """

    def __init__(self, root: Path, url_prefix: str = "/uploads") -> None:
        self._root = Path(root)
        self._url_prefix = "/" + url_prefix.strip("/")
        (self._root / ORIGINALS_DIR).mkdir(parents=True, exist_ok=True)
        (self._root / GENERATED_DIR).mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, relative_path: str) -> Path:
        root = self._root.resolve()
        path = (root / relative_path).resolve()
        if not path.is_relative_to(root):
            msg = "Attempted directory traversal outside storage root"
            raise ValueError(msg)
        return path

    def save_original(self, data: bytes, extension: str) -> str:
        relative = str(PurePosixPath(ORIGINALS_DIR, _unique_name(extension)))
        file_path = self._resolve(relative)
        with open(file_path, "xb") as handle:
            handle.write(data)
        logger.debug(f"storage: write path={relative} size={len(data)}")
        return relative

    def publish_generated(self, original: str) -> str:
        source = self._resolve(original)
        relative = str(PurePosixPath(GENERATED_DIR, _unique_name(source.suffix, prefix="gen-")))
        target = self._resolve(relative)
        shutil.copyfile(source, target)
        logger.debug(f"storage: copy {original} -> {relative}")
        return relative

    def delete(self, relative_path: str) -> None:
        file_path = self._resolve(relative_path)
        file_path.unlink(missing_ok=True)
        logger.debug(f"storage: delete path={relative_path}")

    def public_url(self, relative_path: str) -> str:
        return f"{self._url_prefix}/{PurePosixPath(relative_path).as_posix()}"


__all__ = ["LocalImageStorage", "ORIGINALS_DIR", "GENERATED_DIR"]
