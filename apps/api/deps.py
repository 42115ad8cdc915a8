from functools import lru_cache

from core.config import settings
from services.persistence.base import Store
from services.persistence.memory import MemoryStore
from services.persistence.postgres import PostgresStore


@lru_cache(maxsize=1)
def get_store() -> Store:
    """
    Process-wide store, picked by STORE_BACKEND.
    Tests override this dependency with a fresh MemoryStore.
    """
    if settings.STORE_BACKEND == "postgres":
        store = PostgresStore(settings.DATABASE_URL)
        store.init_schema()
        return store
    return MemoryStore()
