"""Tests for bearer token resolution and the auth guards."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from kbmedic.db import Database
from kbmedic.domain import ANONYMOUS, ErrorKind, Identity, Role, UserId
from kbmedic.identity import (
    IdentityResolver,
    MemoryUserDirectory,
    SqlUserDirectory,
    require_admin,
    require_identity,
)

from tests._support import SECRET, Users, err, make_token, ok

ALICE = Identity(UserId(2), "Alice", "alice@example.com")
ADMIN = Identity(UserId(1), "Admin", "admin@pharmacy.com", Role.ADMIN)


@pytest.fixture
def resolver() -> IdentityResolver:
    directory = MemoryUserDirectory()
    directory.add(ALICE)
    directory.add(ADMIN)
    return IdentityResolver(directory, secret=SECRET)


class TestResolve:
    @pytest.mark.asyncio
    async def test_valid_token(self, resolver: IdentityResolver) -> None:
        assert await resolver.resolve(make_token(2)) == ALICE

    @pytest.mark.asyncio
    async def test_numeric_string_claim(self, resolver: IdentityResolver) -> None:
        assert await resolver.resolve(make_token("1")) == ADMIN

    @pytest.mark.parametrize("credential", [None, "", "not-a-jwt", "a.b.c"])
    @pytest.mark.asyncio
    async def test_missing_or_malformed(
        self, resolver: IdentityResolver, credential: str | None
    ) -> None:
        assert await resolver.resolve(credential) is ANONYMOUS

    @pytest.mark.asyncio
    async def test_wrong_signature(self, resolver: IdentityResolver) -> None:
        token = make_token(2, secret="another-secret-key-long-enough-for-hs256")
        assert await resolver.resolve(token) is ANONYMOUS

    @pytest.mark.asyncio
    async def test_expired(self, resolver: IdentityResolver) -> None:
        token = make_token(2, exp=datetime.now(timezone.utc) - timedelta(minutes=5))
        assert await resolver.resolve(token) is ANONYMOUS

    @pytest.mark.parametrize("claim", [None, True, "abc", 2.5, [2]])
    @pytest.mark.asyncio
    async def test_unusable_user_claim(self, resolver: IdentityResolver, claim: object) -> None:
        assert await resolver.resolve(make_token(claim)) is ANONYMOUS

    @pytest.mark.asyncio
    async def test_unknown_user(self, resolver: IdentityResolver) -> None:
        assert await resolver.resolve(make_token(404)) is ANONYMOUS

    @pytest.mark.asyncio
    async def test_role_claim_in_token_is_ignored(self, resolver: IdentityResolver) -> None:
        caller = await resolver.resolve(make_token(2, role="admin"))

        assert isinstance(caller, Identity)
        assert not caller.is_admin

    @pytest.mark.asyncio
    async def test_sql_directory(self, database: Database, users: Users) -> None:
        resolver = IdentityResolver(SqlUserDirectory(database), secret=SECRET)

        assert await resolver.resolve(make_token(2)) == users.alice
        assert await resolver.resolve(make_token(1)) == users.admin
        assert await resolver.resolve(make_token(77)) is ANONYMOUS


class TestGuards:
    def test_require_identity(self) -> None:
        assert ok(require_identity(ALICE)) == ALICE
        e = err(require_identity(ANONYMOUS))
        assert e.kind is ErrorKind.UNAUTHORIZED
        assert e.message == "Access token required"

    def test_require_admin(self) -> None:
        assert ok(require_admin(ADMIN)) == ADMIN
        assert err(require_admin(ALICE)).kind is ErrorKind.FORBIDDEN
        assert err(require_admin(ANONYMOUS)).kind is ErrorKind.UNAUTHORIZED

    def test_unknown_role_is_customer(self) -> None:
        assert Role.parse("superuser") is Role.CUSTOMER
        assert Role.parse(None) is Role.CUSTOMER
        assert Role.parse("admin") is Role.ADMIN
