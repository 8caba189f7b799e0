import os

# Must be set before blocktix is imported: the limiter reads it at import time
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("AUTO_SEED_SAMPLE_EVENTS", "false")

import pytest
from fastapi.testclient import TestClient

from blocktix.config import Settings
from blocktix.database import build_engine, build_session_factory, init_db
from blocktix.main import create_app
from blocktix.stores import InMemoryTicketStore, SqlTicketStore

from tests.helpers import ADMIN_KEY, VIP_CATEGORIES, create_live_event


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        store_backend="memory",
        auto_seed_sample_events=False,
        admin_api_key=ADMIN_KEY,
        secret_key="unit-test-secret",
        smtp_user="",
        smtp_password="",
        smtp_from="",
        rate_limit_enabled=False
    )


@pytest.fixture
def memory_store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def sql_store(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'blocktix.db'}")
    init_db(engine)
    yield SqlTicketStore(build_session_factory(engine))
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Runs the test once against each store implementation."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def client(settings, memory_store):
    app = create_app(settings=settings, store=memory_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers() -> dict:
    return {"X-Admin-Key": ADMIN_KEY}


@pytest.fixture
def vip_event(store):
    return create_live_event(store, categories=VIP_CATEGORIES)
