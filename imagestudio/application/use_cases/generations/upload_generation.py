# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Upload pipeline: validate, store, simulate, record."""

from __future__ import annotations

from collections.abc import Iterable

from imagestudio.domain.generations.entities import Generation, UploadCommand
from imagestudio.domain.generations.exceptions import (
    ImageTooLargeError,
    MissingUploadFieldsError,
    UnsupportedImageTypeError,
)
from imagestudio.domain.generations.repositories import (
    GenerationEngine,
    GenerationRepository,
    ImageStorage,
)
from imagestudio.shared.logging import logger

ALLOWED_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})
ALLOWED_MEDIA_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png"})
DEFAULT_MAX_BYTES = 5 * 1024 * 1024


class UploadGenerationUseCase:
    def __init__(
        self,
        *,
        generations: GenerationRepository,
        storage: ImageStorage,
        engine: GenerationEngine,
        max_bytes: int = DEFAULT_MAX_BYTES,
        allowed_extensions: Iterable[str] = ALLOWED_EXTENSIONS,
        allowed_media_types: Iterable[str] = ALLOWED_MEDIA_TYPES,
    ) -> None:
        self._generations = generations
        self._storage = storage
        self._engine = engine
        self._max_bytes = max_bytes
        self._allowed_extensions = frozenset(allowed_extensions)
        self._allowed_media_types = frozenset(allowed_media_types)

    def validate(self, command: UploadCommand) -> str:
        """Run the validation steps in order and return the prompt as submitted."""

        prompt = command.prompt or ""
        if not command.data or not command.filename or not prompt.strip():
            raise MissingUploadFieldsError()

        if (
            command.extension not in self._allowed_extensions
            or command.media_type not in self._allowed_media_types
        ):
            raise UnsupportedImageTypeError(
                context={"extension": command.extension, "media_type": command.media_type}
            )

        if command.size > self._max_bytes:
            raise ImageTooLargeError(self._max_bytes)

        return prompt

    def execute(self, command: UploadCommand) -> Generation:
        prompt = self.validate(command)

        original = self._storage.save_original(command.data or b"", command.extension)
        generated: str | None = None
        try:
            self._engine.run(prompt)
            generated = self._storage.publish_generated(original)
            image_path = self._storage.public_url(generated)
            # Recording is the last step so a failure above leaves no record.
            generation = self._generations.add(command.user_id, prompt, image_path)
        except Exception:
            # No record points at these files, so none may stay published.
            for path in (generated, original):
                if path is not None:
                    self._storage.delete(path)
            logger.info(f"generation.upload: failed user_id={command.user_id}")
            raise

        logger.info(
            f"generation.upload: ok user_id={command.user_id} "
            f"generation_id={generation.id} size={command.size}"
        )
        return generation
