"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* One `kv_records` table: opaque string blobs under fixed keys
* `SqlKeyValueStore` – the persistent `KeyValueStore` used by the app
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from sqlalchemy import DateTime, String, Text, delete, func
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

_LOG = logging.getLogger(__name__)

# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class KeyValueRecord(Base):
    __tablename__ = "kv_records"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


# ───────── store ─────────────────────────────────────────────────────
class SqlKeyValueStore:
    """Whole-record overwrites only; no merge, no versioning."""

    def __init__(self, url: str | None = None, engine: AsyncEngine | None = None) -> None:
        self._engine = engine or create_async_engine(
            url or settings.database_url, pool_pre_ping=True
        )
        self._sessions = async_sessionmaker(self._engine, expire_on_commit=False)
        self._ready = False
        self._schema_lock = asyncio.Lock()

    async def _ensure_schema(self) -> None:
        if self._ready:
            return
        async with self._schema_lock:
            if self._ready:
                return
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            self._ready = True
        _LOG.debug("kv_records table ready on %s", self._engine.url)

    async def get(self, key: str) -> str | None:
        await self._ensure_schema()
        async with self._sessions() as session:
            row = await session.get(KeyValueRecord, key)
            return row.value if row else None

    async def set(self, key: str, value: str) -> None:
        await self._ensure_schema()
        async with self._sessions() as session:
            await session.merge(KeyValueRecord(key=key, value=value))
            await session.commit()

    async def delete(self, key: str) -> None:
        await self._ensure_schema()
        async with self._sessions() as session:
            await session.execute(delete(KeyValueRecord).where(KeyValueRecord.key == key))
            await session.commit()

    async def dispose(self) -> None:
        await self._engine.dispose()
