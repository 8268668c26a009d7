# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from imagestudio.domain.users.entities import User as DomainUser
from imagestudio.domain.users.exceptions import UserAlreadyExistsError
from imagestudio.domain.users.repositories import UserRepository
from imagestudio.infrastructure.db.models import User
from imagestudio.infrastructure.db.session import Database
from imagestudio.shared.errors.base import StoreUnavailableError
from imagestudio.shared.logging import logger


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._database = database

    def find_by_email(self, email: str) -> DomainUser | None:
        try:
            with self._database.session_scope() as session:
                row = session.scalars(select(User).where(User.email == email)).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users.find_by_email: store error {type(exc).__name__}")
            raise StoreUnavailableError() from exc

    def find_by_id(self, user_id: int) -> DomainUser | None:
        try:
            with self._database.session_scope() as session:
                row = session.get(User, user_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            logger.error(f"users.find_by_id: store error {type(exc).__name__}")
            raise StoreUnavailableError() from exc

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with self._database.session_scope() as session:
                row = User(
                    email=user.email,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            # Unique constraint on users.email; concurrent registrations race here.
            logger.info("users.add: duplicate email")
            raise UserAlreadyExistsError() from exc
        except SQLAlchemyError as exc:
            logger.error(f"users.add: store error {type(exc).__name__}")
            raise StoreUnavailableError() from exc
