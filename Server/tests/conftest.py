"""
Shared fixtures for Arsip Server tests

Each test gets its own SQLite database and attachment storage under
tmp_path. The global db_manager is swapped for the test's manager, which
route handlers pick up because they import it at call time.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Keep server log files out of the working tree
os.environ.setdefault("ARSIP_LOG_DIR", tempfile.mkdtemp(prefix="arsip-logs-"))

from fastapi.testclient import TestClient

import database
from config import settings
from managers.database_manager import DatabaseManager
from models.database import User


ADMIN_PASSWORD = "admin123"
STAFF_PASSWORD = "staff123"
LEADERSHIP_PASSWORD = "leadership123"


@pytest.fixture()
def db_manager(tmp_path, monkeypatch):
    """Fresh database seeded with admin, staff and leadership accounts"""
    monkeypatch.setattr(settings, "storage_root", str(tmp_path / "storage"))

    manager = DatabaseManager(str(tmp_path / "database" / "arsip.db"))
    manager.InitializeDatabase(admin_password=ADMIN_PASSWORD, seed_demo_users=True)
    monkeypatch.setattr(database, "db_manager", manager)

    yield manager

    manager.engine.dispose()


@pytest.fixture()
def user_ids(db_manager):
    """Map of seeded username -> user id"""
    session = db_manager.GetSession()
    try:
        return {user.username: user.id for user in session.query(User).all()}
    finally:
        session.close()


@pytest.fixture()
def app(db_manager):
    from server import app
    return app


def _LoggedInClient(app, username, password):
    client = TestClient(app)
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return client


@pytest.fixture()
def client(app):
    """Client without a session"""
    return TestClient(app)


@pytest.fixture()
def admin_client(app):
    return _LoggedInClient(app, "admin", ADMIN_PASSWORD)


@pytest.fixture()
def staff_client(app):
    return _LoggedInClient(app, "staff", STAFF_PASSWORD)


@pytest.fixture()
def leadership_client(app):
    return _LoggedInClient(app, "leadership", LEADERSHIP_PASSWORD)


@pytest.fixture()
def attachment_dir(db_manager):
    """Attachment directory of the current test's storage root"""
    path = Path(settings.storage_root) / "attachments"
    path.mkdir(parents=True, exist_ok=True)
    return path
