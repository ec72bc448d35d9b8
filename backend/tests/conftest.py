import os
from datetime import date

# Keep the module-level engine off disk; tests wire their own database.
os.environ["FORTRESS_DATABASE_URL"] = "sqlite://"
os.environ["GEMINI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from fortress.core.clock import FixedClock
from fortress.database import Base, get_db, get_session_factory
from fortress.deps import get_clock
from fortress.main import app

@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'fortress_test.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def today():
    return date(2026, 3, 10)


@pytest.fixture
def client(session_factory, today):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_clock] = lambda: FixedClock(today)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
