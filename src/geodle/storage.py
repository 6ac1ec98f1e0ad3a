"""
Key-value stores that the game's records are saved to. Each store maps string
keys to string values, and any of them can back the repositories in
persistence.py and statistics.py:

- MappingStore: any mutable mapping, e.g. NiceGUI's per-browser
  `app.storage.user`, or a plain dict in tests
- SqlStore: a table in the database at DATABASE_URL
- RedisStore: a Redis server
"""

import os
from typing import MutableMapping, Protocol

from redis import asyncio as aioredis
from sqlalchemy import Engine, String, Text, create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

engine = None


class KeyValueStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...


class MappingStore:
    def __init__(self, mapping: MutableMapping | None = None):
        self.mapping = {} if mapping is None else mapping

    async def get(self, key: str) -> str | None:
        return self.mapping.get(key)

    async def set(self, key: str, value: str) -> None:
        self.mapping[key] = value


class Base(DeclarativeBase):
    pass


class Record(Base):
    """A single stored value, keyed by name"""

    __tablename__ = "kv_records"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)


def get_engine():
    global engine

    if not engine:
        engine = create_engine(os.getenv("DATABASE_URL", "sqlite:///geodle.db"))
        Base.metadata.create_all(engine)
    return engine


class SqlStore:
    """
    Controls manipulation of the kv_records table. Keys are stored as
    `{prefix}:{key}` when a prefix is given. Each call opens its own session,
    so no connection is held between calls.
    """

    def __init__(self, engine: Engine, prefix: str = ""):
        self.engine = engine
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}" if self.prefix else key

    async def get(self, key: str) -> str | None:
        with Session(self.engine) as session:
            record = session.get(Record, self._key(key))
            return record.value if record else None

    async def set(self, key: str, value: str) -> None:
        with Session(self.engine) as session:
            session.merge(Record(key=self._key(key), value=value))
            session.commit()


def get_redis() -> aioredis.Redis:
    host = os.getenv("REDIS_HOST", "redis")
    port = os.getenv("REDIS_PORT", "6379")
    db = os.getenv("REDIS_DB", "0")

    url = os.getenv("REDIS_URL", f"redis://{host}:{port}/{db}")
    return aioredis.from_url(url, decode_responses=True)


class RedisStore:
    """
    Stores records under `{prefix}:{key}`, so several players (or games) can
    share one Redis database.
    """

    def __init__(self, r: aioredis.Redis, prefix: str = "geodle"):
        self.r = r
        self.prefix = prefix

    async def get(self, key: str) -> str | None:
        return await self.r.get(f"{self.prefix}:{key}")

    async def set(self, key: str, value: str) -> None:
        await self.r.set(f"{self.prefix}:{key}", value)
