"""Database layer for the configurator."""

from configurator.database.base import CatalogProvider, Database, PersistenceStore
from configurator.database.factories import create_sqlite_database
from configurator.database.memory import InMemoryCatalog, InMemoryStore

__all__ = [
    "CatalogProvider",
    "Database",
    "PersistenceStore",
    "create_sqlite_database",
    "InMemoryCatalog",
    "InMemoryStore",
]
