"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from imagestudio.application.services.generation_simulator import GenerationSimulator
from imagestudio.application.services.password_hashing import WerkzeugPasswordHasher
from imagestudio.application.use_cases.generations.list_recent import \
    ListRecentGenerationsUseCase
from imagestudio.application.use_cases.generations.upload_generation import \
    UploadGenerationUseCase
from imagestudio.application.use_cases.users.login_user import (AuthenticateUserUseCase,
                                                                LoginUserUseCase)
from imagestudio.application.use_cases.users.register_user import RegisterUserUseCase
from imagestudio.application.use_cases.users.verify_session import VerifySessionUseCase
from imagestudio.infrastructure.auth.jwt_tokens import JoseTokenService
from imagestudio.infrastructure.db import Database
from imagestudio.infrastructure.repositories.generations.sqlalchemy_generation_repository import \
    SqlAlchemyGenerationRepository
from imagestudio.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from imagestudio.infrastructure.storage import LocalImageStorage
from imagestudio.interfaces.http.controllers.auth_controller import AuthController
from imagestudio.interfaces.http.controllers.generations_controller import \
    GenerationsController
from imagestudio.interfaces.http.controllers.misc_controller import MiscController
from imagestudio.shared.config import AppConfig
from imagestudio.shared.middleware.session_guard import SessionGuard


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> JoseTokenService:
        return JoseTokenService(
            self.config.security.secret_key,
            algorithm=self.config.security.algorithm,
        )

    @cached_property
    def session_guard(self) -> SessionGuard:
        return SessionGuard(self.token_service)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def generation_repository(self) -> SqlAlchemyGenerationRepository:
        return SqlAlchemyGenerationRepository(self.database)

    @cached_property
    def image_storage(self) -> LocalImageStorage:
        return LocalImageStorage(
            self.config.uploads.directory, url_prefix=self.config.uploads.url_prefix
        )

    @cached_property
    def generation_engine(self) -> GenerationSimulator:
        return GenerationSimulator(
            delay_seconds=self.config.simulation.delay_seconds,
            failure_rate=self.config.simulation.failure_rate,
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
            token_ttl=timedelta(seconds=self.config.security.register_token_ttl),
        )

    @cached_property
    def authenticate_user_use_case(self) -> AuthenticateUserUseCase:
        return AuthenticateUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            authenticate=self.authenticate_user_use_case,
            tokens=self.token_service,
            token_ttl=timedelta(seconds=self.config.security.login_token_ttl),
        )

    @cached_property
    def verify_session_use_case(self) -> VerifySessionUseCase:
        return VerifySessionUseCase(users=self.user_repository)

    @cached_property
    def upload_generation_use_case(self) -> UploadGenerationUseCase:
        return UploadGenerationUseCase(
            generations=self.generation_repository,
            storage=self.image_storage,
            engine=self.generation_engine,
            max_bytes=self.config.uploads.max_bytes,
        )

    @cached_property
    def list_recent_generations_use_case(self) -> ListRecentGenerationsUseCase:
        return ListRecentGenerationsUseCase(generations=self.generation_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            verify_use_case=self.verify_session_use_case,
            guard=self.session_guard,
            url_prefix=self.config.api_prefix,
        )

    @cached_property
    def generations_controller(self) -> GenerationsController:
        return GenerationsController(
            upload_use_case=self.upload_generation_use_case,
            recent_use_case=self.list_recent_generations_use_case,
            guard=self.session_guard,
            max_upload_bytes=self.config.uploads.max_bytes,
            url_prefix=self.config.api_prefix,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            engine=self.database.engine,
            upload_root=self.image_storage.root,
            upload_url_prefix=self.config.uploads.url_prefix,
            api_prefix=self.config.api_prefix,
        )
