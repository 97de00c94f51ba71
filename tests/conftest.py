import pytest
from fastapi.testclient import TestClient

from hr_service.config import Settings
from hr_service.db import Database
from hr_service.main import create_app
from hr_service.storage import BlobStore


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_dir=str(tmp_path),
        storage_path=str(tmp_path / "uploads"),
        admin_username="admin",
        admin_password="admin123",
    )


@pytest.fixture
def database(settings):
    database = Database(settings.db_url)
    database.init_db()
    yield database
    database.engine.dispose()


@pytest.fixture
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def blob_store(settings):
    store = BlobStore(settings.storage_path)
    store.ensure_root()
    return store


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
    app.state.database.engine.dispose()
