from __future__ import annotations

from datetime import timedelta

import pytest

from imagestudio.application.use_cases.users.login_user import (AuthenticateUserUseCase,
                                                                LoginUserUseCase)
from imagestudio.application.use_cases.users.register_user import RegisterUserUseCase
from imagestudio.application.use_cases.users.verify_session import VerifySessionUseCase
from imagestudio.domain.users.entities import User
from imagestudio.domain.users.exceptions import (InvalidCredentialsError, InvalidTokenError,
                                                 UserAlreadyExistsError)
from imagestudio.domain.users.repositories import PasswordHasher, TokenService, UserRepository

REGISTER_TTL = timedelta(hours=24)
LOGIN_TTL = timedelta(days=7)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return self._users.get(email)

    def find_by_id(self, user_id: int) -> User | None:
        return next((u for u in self._users.values() if u.id == user_id), None)

    def add(self, user: User) -> User:
        if user.email in self._users:
            raise UserAlreadyExistsError()
        new_user = User(
            id=self._seq,
            email=user.email,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        self._seq += 1
        self._users[new_user.email] = new_user
        return new_user


class FakeTokenService(TokenService):
    def __init__(self) -> None:
        self.issued: list[tuple[int, timedelta]] = []

    def issue(self, user_id: int, ttl: timedelta) -> str:
        self.issued.append((user_id, ttl))
        return f"token-{user_id}-{len(self.issued)}"

    def verify(self, token: str) -> int:
        parts = token.split("-")
        if len(parts) != 3 or parts[0] != "token":
            raise InvalidTokenError()
        return int(parts[1])


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.verify_calls = 0

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed:{password}"


@pytest.fixture()
def repositories() -> tuple[InMemoryUserRepository, FakeTokenService]:
    return InMemoryUserRepository(), FakeTokenService()


def _register(users, tokens, hasher=None) -> RegisterUserUseCase:
    return RegisterUserUseCase(
        users=users,
        tokens=tokens,
        password_hasher=hasher or DeterministicHasher(),
        token_ttl=REGISTER_TTL,
    )


def _login(users, tokens, hasher=None) -> LoginUserUseCase:
    authenticate = AuthenticateUserUseCase(
        users=users, password_hasher=hasher or DeterministicHasher()
    )
    return LoginUserUseCase(authenticate=authenticate, tokens=tokens, token_ttl=LOGIN_TTL)


def test_register_user_success(
    repositories: tuple[InMemoryUserRepository, FakeTokenService],
) -> None:
    users, tokens = repositories

    user, token = _register(users, tokens).execute("alice@example.com", "secret123")

    assert user.email == "alice@example.com"
    assert user.password_hash == "hashed:secret123"
    assert token == "token-1-1"
    assert users.find_by_email("alice@example.com") is not None


def test_register_user_duplicate_raises_and_keeps_first(
    repositories: tuple[InMemoryUserRepository, FakeTokenService],
) -> None:
    users, tokens = repositories
    use_case = _register(users, tokens)
    first, _ = use_case.execute("alice@example.com", "secret123")

    with pytest.raises(UserAlreadyExistsError):
        use_case.execute("alice@example.com", "other-password")

    stored = users.find_by_email("alice@example.com")
    assert stored == first
    assert stored.password_hash == "hashed:secret123"


def test_register_and_login_use_different_ttls(
    repositories: tuple[InMemoryUserRepository, FakeTokenService],
) -> None:
    users, tokens = repositories
    _register(users, tokens).execute("alice@example.com", "secret123")
    _login(users, tokens).execute("alice@example.com", "secret123")

    assert [ttl for _, ttl in tokens.issued] == [REGISTER_TTL, LOGIN_TTL]


def test_login_user_success(
    repositories: tuple[InMemoryUserRepository, FakeTokenService],
) -> None:
    users, tokens = repositories
    registered, _ = _register(users, tokens).execute("alice@example.com", "secret123")

    user, token = _login(users, tokens).execute("alice@example.com", "secret123")

    assert user.id == registered.id
    assert tokens.verify(token) == registered.id


def test_login_user_invalid_credentials(
    repositories: tuple[InMemoryUserRepository, FakeTokenService],
) -> None:
    users, tokens = repositories
    _register(users, tokens).execute("alice@example.com", "secret123")

    with pytest.raises(InvalidCredentialsError):
        _login(users, tokens).execute("alice@example.com", "wrong")


def test_login_email_match_is_exact(
    repositories: tuple[InMemoryUserRepository, FakeTokenService],
) -> None:
    users, tokens = repositories
    _register(users, tokens).execute("alice@example.com", "secret123")

    with pytest.raises(InvalidCredentialsError):
        _login(users, tokens).execute("Alice@Example.com", "secret123")


def test_unknown_email_still_runs_password_check(
    repositories: tuple[InMemoryUserRepository, FakeTokenService],
) -> None:
    users, _ = repositories
    hasher = DeterministicHasher()
    authenticate = AuthenticateUserUseCase(users=users, password_hasher=hasher)

    with pytest.raises(InvalidCredentialsError) as unknown:
        authenticate.execute("nobody@example.com", "secret123")

    assert hasher.verify_calls == 1
    assert unknown.value.code == "invalid_credentials"


def test_verify_session_returns_user(
    repositories: tuple[InMemoryUserRepository, FakeTokenService],
) -> None:
    users, tokens = repositories
    registered, _ = _register(users, tokens).execute("alice@example.com", "secret123")

    assert VerifySessionUseCase(users=users).execute(registered.id) == registered


def test_verify_session_unknown_user_is_invalid_token(
    repositories: tuple[InMemoryUserRepository, FakeTokenService],
) -> None:
    users, _ = repositories

    with pytest.raises(InvalidTokenError):
        VerifySessionUseCase(users=users).execute(42)
