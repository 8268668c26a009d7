from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError

from imagestudio.domain.users.entities import User
from imagestudio.domain.users.exceptions import UserAlreadyExistsError
from imagestudio.infrastructure.db import Database
from imagestudio.infrastructure.repositories.generations.sqlalchemy_generation_repository import \
    SqlAlchemyGenerationRepository
from imagestudio.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from imagestudio.shared.config import DatabaseConfig
from imagestudio.shared.errors.base import StoreUnavailableError

T0 = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


class SteppingClock:
    def __init__(self, start: datetime, step: timedelta) -> None:
        self._next = start
        self._step = step

    def __call__(self) -> datetime:
        value = self._next
        self._next += self._step
        return value


@pytest.fixture()
def database(tmp_path: Path):
    database = Database(DatabaseConfig(url=f"sqlite:///{tmp_path / 'repo.db'}"))
    database.init_schema()
    yield database
    database.dispose()


def _user(email: str = "alice@example.com") -> User:
    return User(id=0, email=email, password_hash="hash", created_at=T0)


def test_user_add_and_lookup(database: Database) -> None:
    users = SqlAlchemyUserRepository(database)

    added = users.add(_user())

    assert added.id > 0
    assert users.find_by_email("alice@example.com") == added
    assert users.find_by_id(added.id) == added
    assert users.find_by_email("ALICE@example.com") is None
    assert users.find_by_id(added.id + 100) is None


def test_user_created_at_is_utc(database: Database) -> None:
    users = SqlAlchemyUserRepository(database)
    added = users.add(_user())

    assert users.find_by_id(added.id).created_at == T0


def test_duplicate_email_rejected_by_store(database: Database) -> None:
    users = SqlAlchemyUserRepository(database)
    first = users.add(_user())

    with pytest.raises(UserAlreadyExistsError):
        users.add(User(id=0, email="alice@example.com", password_hash="other", created_at=T0))

    assert users.find_by_email("alice@example.com") == first


def test_list_recent_orders_newest_first_and_limits(database: Database) -> None:
    user = SqlAlchemyUserRepository(database).add(_user())
    repo = SqlAlchemyGenerationRepository(
        database, clock=SteppingClock(T0, timedelta(seconds=1))
    )
    for index in range(7):
        repo.add(user.id, f"prompt {index}", f"/uploads/generated/{index}.png")

    recent = repo.list_recent(user.id, limit=5)

    assert [g.prompt for g in recent] == ["prompt 6", "prompt 5", "prompt 4", "prompt 3", "prompt 2"]
    stamps = [g.created_at for g in recent]
    assert stamps == sorted(stamps, reverse=True)
    assert all(stamp.tzinfo is not None for stamp in stamps)


def test_list_recent_breaks_ties_by_insertion(database: Database) -> None:
    user = SqlAlchemyUserRepository(database).add(_user())
    repo = SqlAlchemyGenerationRepository(database, clock=lambda: T0)
    for index in range(3):
        repo.add(user.id, f"prompt {index}", f"/uploads/generated/{index}.png")

    assert [g.prompt for g in repo.list_recent(user.id)] == ["prompt 2", "prompt 1", "prompt 0"]


def test_list_recent_scoped_to_user(database: Database) -> None:
    users = SqlAlchemyUserRepository(database)
    alice = users.add(_user())
    bob = users.add(_user("bob@example.com"))
    repo = SqlAlchemyGenerationRepository(database)
    repo.add(alice.id, "alice prompt", "/uploads/generated/a.png")

    assert repo.list_recent(bob.id) == []
    assert [g.prompt for g in repo.list_recent(alice.id)] == ["alice prompt"]


def test_store_failure_maps_to_store_unavailable(database: Database) -> None:
    repo = SqlAlchemyGenerationRepository(database)
    database.drop_schema()

    with pytest.raises(StoreUnavailableError) as excinfo:
        repo.list_recent(1)

    assert excinfo.value.code == "store_unavailable"
    assert isinstance(excinfo.value.__cause__, OperationalError)
