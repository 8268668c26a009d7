# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from imagestudio.domain.generations.entities import Generation
from imagestudio.domain.generations.repositories import GenerationRepository

RECENT_LIMIT = 5


class ListRecentGenerationsUseCase:
    def __init__(self, *, generations: GenerationRepository, limit: int = RECENT_LIMIT) -> None:
        self._generations = generations
        self._limit = limit

    def execute(self, user_id: int) -> Sequence[Generation]:
        return list(self._generations.list_recent(user_id, limit=self._limit))
