"""
Dependencies — the service container and the caller for each request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from kbmedic.catalog import SqlCatalog
from kbmedic.config import AppConfig
from kbmedic.db import Database
from kbmedic.domain import Caller
from kbmedic.identity import IdentityResolver, SqlUserDirectory
from kbmedic.orders import OrderAccessPolicy, OrderTransactionManager
from kbmedic.shipping import StoreSettings


@dataclass(frozen=True, slots=True)
class Container:
    database: Database
    orders: OrderTransactionManager
    access: OrderAccessPolicy
    identity: IdentityResolver
    settings: StoreSettings

    @classmethod
    def build(cls, config: AppConfig, database: Database | None = None) -> Container:
        """Wire every service onto one database (and so one pool)."""
        database = database or Database(config.database_url, echo=config.database_echo)
        return cls(
            database=database,
            orders=OrderTransactionManager(database, SqlCatalog(database)),
            access=OrderAccessPolicy(database),
            identity=IdentityResolver(
                SqlUserDirectory(database),
                secret=config.jwt_secret,
                algorithm=config.jwt_algorithm,
            ),
            settings=StoreSettings.from_config(config),
        )


bearer = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    return request.app.state.container


async def get_caller(
    container: Annotated[Container, Depends(get_container)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
) -> Caller:
    return await container.identity.resolve(credentials.credentials if credentials else None)


ContainerDep = Annotated[Container, Depends(get_container)]
CallerDep = Annotated[Caller, Depends(get_caller)]


__all__ = ("Container", "bearer", "get_container", "get_caller", "ContainerDep", "CallerDep")
