import os

from nicegui import app

from geodle import persistence, statistics, storage
from geodle.storage import KeyValueStore, MappingStore, RedisStore, SqlStore

# Where players' rounds and statistics are kept: "browser" (NiceGUI user
# storage), "sql" (DATABASE_URL) or "redis" (REDIS_URL)
STORE_BACKEND = os.getenv("GEODLE_STORE", "browser")

# One client (and connection pool) for every page
redis_client = None


def get_redis_client():
    global redis_client

    if redis_client is None:
        redis_client = storage.get_redis()
    return redis_client


def get_store(backend: str = STORE_BACKEND) -> KeyValueStore:
    """
    Gets the store for the current browser. Shared backends keep each
    browser's records under its own prefix.
    """
    if backend == "sql":
        return SqlStore(storage.get_engine(), prefix=app.storage.browser["id"])
    if backend == "redis":
        return RedisStore(get_redis_client(), prefix=f"geodle:{app.storage.browser['id']}")
    return MappingStore(app.storage.user)


def init_repos(store: KeyValueStore) -> dict:
    return {
        "state_repo": persistence.get_daily_state_repository(store),
        "stats_repo": statistics.get_statistics_repository(store),
    }
