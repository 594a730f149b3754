import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

# Nunca tocar ./data.db desde los tests: el engine global apunta a memoria
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("APP_ENV", "dev")

from taskboard.db import get_session, init_db  # noqa: E402


class CountingSession(Session):
    """Session that records close() calls and can fail its n-th commit."""

    def __init__(self, bind, fail_at_commit=None):
        super().__init__(bind)
        self.fail_at_commit = fail_at_commit
        self.commit_calls = 0
        self.close_calls = 0

    def commit(self):
        self.commit_calls += 1
        if self.commit_calls == self.fail_at_commit:
            raise OperationalError("COMMIT", {}, Exception("simulated outage"))
        super().commit()

    def close(self):
        self.close_calls += 1
        super().close()


@pytest.fixture()
def engine():
    # Base en memoria compartida por todas las sesiones del test
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def client(engine):
    from taskboard.main import app

    def override_get_session():
        session = Session(engine)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session
    client = TestClient(app)
    yield client
    client.close()
    app.dependency_overrides.clear()
