from app.core.config import Settings
from app.db.base import make_engine

from .base import FactRepository
from .inmem import InMemoryFactRepository
from .sql import SQLFactRepository


def build_repository(settings: Settings) -> FactRepository:
    """Pick the store named by `REPOSITORY`."""
    backend = settings.REPOSITORY.lower()
    if backend == "inmem":
        return InMemoryFactRepository()
    if backend == "sql":
        return SQLFactRepository(make_engine(settings.DB_SOURCE, settings.DB_CONNECT_TIMEOUT))
    raise ValueError(f"unknown repository backend: {settings.REPOSITORY!r}")


__all__ = [
    "FactRepository",
    "InMemoryFactRepository",
    "SQLFactRepository",
    "build_repository",
]
