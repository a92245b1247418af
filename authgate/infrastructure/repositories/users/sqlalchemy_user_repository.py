# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError

from authgate.domain.users.entities import User as DomainUser
from authgate.domain.users.entities import UserStatus
from authgate.domain.users.exceptions import UserAlreadyExistsError
from authgate.domain.users.repositories import UserRepository
from authgate.infrastructure.db.models import User
from authgate.infrastructure.db.session import Database


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back out.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        username=row.username,
        password_hash=row.password_hash,
        created_at=_as_utc(row.created_at) or datetime.now(UTC),
        status=UserStatus(row.status),
        updated_at=_as_utc(row.updated_at),
        deleted_at=_as_utc(row.deleted_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    def find_by_username(self, username: str) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.query(User).filter(User.username == username).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with self._db.session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with self._db.session_scope() as session:
                row = User(
                    username=user.username,
                    status=user.status.value,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            raise UserAlreadyExistsError() from exc

    def update_password_hash(self, user_id: int, password_hash: str) -> None:
        with self._db.session_scope() as session:
            session.query(User).filter(User.id == user_id).update(
                {User.password_hash: password_hash, User.updated_at: datetime.now(UTC)}
            )
