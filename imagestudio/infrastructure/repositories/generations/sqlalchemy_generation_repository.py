# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from imagestudio.domain.generations.entities import Generation as DomainGeneration
from imagestudio.domain.generations.repositories import GenerationRepository
from imagestudio.infrastructure.db.models import Generation
from imagestudio.infrastructure.db.session import Database
from imagestudio.infrastructure.repositories.users.sqlalchemy_user_repository import as_utc
from imagestudio.shared.errors.base import StoreUnavailableError
from imagestudio.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _to_domain(row: Generation) -> DomainGeneration:
    return DomainGeneration(
        id=row.id,
        user_id=row.user_id,
        prompt=row.prompt,
        image_path=row.image_path,
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyGenerationRepository(GenerationRepository):
    def __init__(self, database: Database, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._database = database
        self._clock = clock

    def add(self, user_id: int, prompt: str, image_path: str) -> DomainGeneration:
        try:
            with self._database.session_scope() as session:
                row = Generation(
                    user_id=user_id,
                    prompt=prompt,
                    image_path=image_path,
                    created_at=self._clock(),
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except SQLAlchemyError as exc:
            logger.error(f"generations.add: store error {type(exc).__name__}")
            raise StoreUnavailableError() from exc

    def list_recent(self, user_id: int, limit: int = 5) -> Sequence[DomainGeneration]:
        if limit <= 0:
            return []
        # Equal timestamps fall back to id, so the later insert comes first.
        stmt = (
            select(Generation)
            .where(Generation.user_id == user_id)
            .order_by(Generation.created_at.desc(), Generation.id.desc())
            .limit(limit)
        )
        try:
            with self._database.session_scope() as session:
                return [_to_domain(row) for row in session.scalars(stmt)]
        except SQLAlchemyError as exc:
            logger.error(f"generations.list_recent: store error {type(exc).__name__}")
            raise StoreUnavailableError() from exc
