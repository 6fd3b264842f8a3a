import fakeredis
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from seat_ledger.database.db import Base, get_db, make_engine
from seat_ledger.main import app
from seat_ledger.models.events import Event
from seat_ledger.services import locks as locks_module
from seat_ledger.services.locks import LocalEventLocks, RedisEventLocks, get_event_locks


# A file-backed SQLite database per test: every thread gets its own
# connection, which the concurrency tests rely on.
@pytest.fixture
def engine(tmp_path) -> Engine:
    engine = make_engine(f"sqlite:///{tmp_path / 'ledger.db'}", pool_size=30, max_overflow=20)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db_session(session_factory: sessionmaker) -> Session:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def make_event(db_session: Session):
    """Insert an event directly; ``available`` defaults to the full capacity."""

    def _make_event(title: str = "Event", capacity: int = 10, available: int | None = None) -> Event:
        event = Event(
            title=title,
            total_capacity=capacity,
            available_capacity=capacity if available is None else available,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make_event


@pytest.fixture
def fake_redis():
    client = fakeredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)
    yield client
    client.flushall()


@pytest.fixture
def redis_client(fake_redis, monkeypatch: pytest.MonkeyPatch):
    """Route the ledger's Redis locks to fakeredis."""
    monkeypatch.setattr(locks_module, "get_redis_client", lambda: fake_redis)
    monkeypatch.setattr(locks_module, "get_lock_backend", lambda: "redis")
    return fake_redis


@pytest.fixture
def redis_locks(redis_client) -> RedisEventLocks:
    return RedisEventLocks(redis_client, timeout=10, blocking_timeout=30)


@pytest.fixture
def local_locks() -> LocalEventLocks:
    return LocalEventLocks(blocking_timeout=30)


@pytest.fixture
def client(session_factory: sessionmaker, local_locks: LocalEventLocks):
    def override_get_db():
        db: Session = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_locks] = lambda: local_locks
    # Not entered as a context manager: startup would connect to DATABASE_URL
    yield TestClient(app)
    app.dependency_overrides.clear()
