"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
import tempfile
from collections.abc import AsyncIterator, Callable, Coroutine
from contextlib import asynccontextmanager
from pathlib import Path

from kbmedic.db import Database
from kbmedic.seed import migrate


# Scratch database
@asynccontextmanager
async def scratch_database() -> AsyncIterator[Database]:
    """A migrated and seeded SQLite file that is deleted afterwards."""
    with tempfile.TemporaryDirectory() as tmp:
        db = Database(f"sqlite+aiosqlite:///{Path(tmp) / 'kbmedic.db'}")
        try:
            await migrate(db)
            yield db
        finally:
            await db.dispose()


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())
