from blocktix.config import Settings
from blocktix.database import build_engine, build_session_factory, init_db
from blocktix.stores.base import TicketStore
from blocktix.stores.memory import InMemoryTicketStore
from blocktix.stores.sql import SqlTicketStore


def build_store(settings: Settings) -> TicketStore:
    """Create the store selected by STORE_BACKEND."""
    if settings.store_backend == "sql":
        engine = build_engine(settings.database_url)
        init_db(engine)
        return SqlTicketStore(build_session_factory(engine))
    if settings.store_backend == "memory":
        return InMemoryTicketStore()
    raise ValueError(f"Unknown store backend: {settings.store_backend}")


__all__ = ["TicketStore", "InMemoryTicketStore", "SqlTicketStore", "build_store"]
