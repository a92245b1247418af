# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from authgate.application.services.password_hashing import (
    Argon2PasswordHasher,
    parameters_from_config,
)
from authgate.application.services.tokens import TokenService
from authgate.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from authgate.application.use_cases.users.login_user import LoginUserUseCase
from authgate.application.use_cases.users.register_user import RegisterUserUseCase
from authgate.infrastructure.db import Database
from authgate.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authgate.interfaces.http.controllers.auth_controller import AuthController
from authgate.interfaces.http.controllers.health_controller import HealthController
from authgate.interfaces.http.session import SessionManager
from authgate.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def password_hasher(self) -> Argon2PasswordHasher:
        return Argon2PasswordHasher(parameters_from_config(self.config.password_hashing))

    @cached_property
    def token_service(self) -> TokenService:
        return TokenService.from_config(self.config.jwt_secret, self.config.security)

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(tokens=self.token_service, config=self.config.security)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def get_current_user_use_case(self) -> GetCurrentUserUseCase:
        return GetCurrentUserUseCase(users=self.user_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            current_user_use_case=self.get_current_user_use_case,
            sessions=self.session_manager,
        )

    @cached_property
    def health_controller(self) -> HealthController:
        return HealthController(database=self.database)
