import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import sessionmaker

from tasklist.app import app
from tasklist.database import get_db
from tasklist.models import Base, TaskDB

TESTING_SQLITE_URL = "sqlite:///:memory:"
engine = create_engine(TESTING_SQLITE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def empty_store():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def setup(empty_store):
    db = TestingSessionLocal()
    db.add(TaskDB(name="Sample Task 1"))
    db.add(TaskDB(name="Sample Task 2", completed=True))
    db.commit()
    db.close()
    yield


@pytest.fixture
def broken_store(client):
    # A store without the task table: every statement fails.
    broken_engine = create_engine(
        TESTING_SQLITE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    BrokenSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=broken_engine)

    def broken_get_db():
        db = BrokenSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = broken_get_db
    yield
    broken_engine.dispose()


@pytest.fixture
def task_count():
    def count() -> int:
        db = TestingSessionLocal()
        try:
            return db.query(TaskDB).count()
        finally:
            db.close()

    return count
