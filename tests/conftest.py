"""
Shared fixtures: an isolated SQLite database per test, a store bound to it,
and a TestClient whose request stores point at the same database.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from trekker.database import Base, make_engine
from trekker.event.event_service import ChangeNotifier, EventBroadcaster
from trekker.main import create_app
from trekker.project import project_service
from trekker.schemas.epic_schema import EpicCreate
from trekker.schemas.task_schema import TaskCreate
from trekker.store import EntityStore, get_store
from trekker.task import task_service
from trekker.epic import epic_service


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'trekker-test.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    db = session_factory()
    yield EntityStore(db)
    db.close()


@pytest.fixture
def project(store):
    return project_service.initialize(store, "Test project")


@pytest.fixture
def make_task(store, project):
    def _make(title="Task", **fields):
        return task_service.create_task(store, TaskCreate(title=title, **fields))

    return _make


@pytest.fixture
def make_epic(store, project):
    def _make(title="Epic", **fields):
        return epic_service.create_epic(store, EpicCreate(title=title, **fields))

    return _make


@pytest.fixture
def client(session_factory):
    def _override_store():
        db = session_factory()
        try:
            yield EntityStore(db)
        finally:
            db.close()

    broadcaster = EventBroadcaster(ChangeNotifier(session_factory), interval=0.01)
    app = create_app(broadcaster=broadcaster, init_db=False)
    app.dependency_overrides[get_store] = _override_store
    return TestClient(app)
