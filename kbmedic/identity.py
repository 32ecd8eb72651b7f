"""
Identity — resolve a bearer credential into a caller.

Optional-auth paths get ``ANONYMOUS`` for a missing, malformed or expired
token. Paths that need a user go through ``require_identity`` or
``require_admin``, which turn ``ANONYMOUS`` into ``UnauthorizedError``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import jwt
from kungfu import Error, Ok, Result
from sqlalchemy import select

from kbmedic.db import Database, UserTable
from kbmedic.domain import (
    ANONYMOUS,
    Caller,
    Errors,
    Identity,
    Role,
    StorefrontError,
    UserId,
)
from kbmedic.logging import get_logger

logger = get_logger(__name__)

USER_ID_CLAIM = "userId"


# ═══════════════════════════════════════════════════════════════════════════════
# User Directory
# ═══════════════════════════════════════════════════════════════════════════════


class UserDirectory(Protocol):
    async def get(self, user_id: UserId) -> Identity | None: ...


class SqlUserDirectory:
    def __init__(self, database: Database) -> None:
        self._database = database

    async def get(self, user_id: UserId) -> Identity | None:
        async with self._database.session() as session:
            row = (
                await session.execute(select(UserTable).where(UserTable.id == user_id.value))
            ).scalar_one_or_none()
            if row is None:
                return None
            return Identity(
                id=UserId(row.id),
                name=row.name,
                email=row.email,
                role=Role.parse(row.role),
                phone=row.phone,
                address=row.address,
            )


@dataclass
class MemoryUserDirectory:
    _users: dict[int, Identity] = field(default_factory=dict[int, Identity])

    def add(self, identity: Identity) -> Identity:
        self._users[identity.id.value] = identity
        return identity

    async def get(self, user_id: UserId) -> Identity | None:
        return self._users.get(user_id.value)


# ═══════════════════════════════════════════════════════════════════════════════
# Resolver
# ═══════════════════════════════════════════════════════════════════════════════


class IdentityResolver:
    """
    Verify an HS256 token and load the caller from the user directory.

    The role always comes from the directory, so a demoted admin loses
    access as soon as the record changes.
    """

    def __init__(
        self,
        directory: UserDirectory,
        secret: str,
        algorithm: str = "HS256",
    ) -> None:
        self._directory = directory
        self._secret = secret
        self._algorithm = algorithm

    async def resolve(self, credential: str | None) -> Caller:
        if not credential:
            return ANONYMOUS

        try:
            claims = jwt.decode(credential, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return ANONYMOUS
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected token: {}", e)
            return ANONYMOUS

        raw_id = claims.get(USER_ID_CLAIM)
        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, str)):
            return ANONYMOUS
        try:
            user_id = UserId(int(raw_id))
        except ValueError:
            return ANONYMOUS

        identity = await self._directory.get(user_id)
        if identity is None:
            logger.debug("Token for unknown user {}", user_id.value)
            return ANONYMOUS
        return identity


# ═══════════════════════════════════════════════════════════════════════════════
# Guards
# ═══════════════════════════════════════════════════════════════════════════════


def require_identity(caller: Caller) -> Result[Identity, StorefrontError]:
    match caller:
        case Identity():
            return Ok(caller)
        case _:
            return Error(Errors.token_required())


def require_admin(caller: Caller) -> Result[Identity, StorefrontError]:
    match caller:
        case Identity() if caller.is_admin:
            return Ok(caller)
        case Identity():
            return Error(Errors.admin_required())
        case _:
            return Error(Errors.token_required())


__all__ = (
    "USER_ID_CLAIM",
    "UserDirectory",
    "SqlUserDirectory",
    "MemoryUserDirectory",
    "IdentityResolver",
    "require_identity",
    "require_admin",
)
