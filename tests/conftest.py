import sqlite3
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'song_library_api' imports without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from song_library_api.app.core import db
from song_library_api.app.core.config import settings
from tests.support.fakes import ENRICHMENT_PAYLOAD, FakeResponse, FakeSession


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the app at a fresh, migrated SQLite file for every test."""
    db_path = tmp_path / "songs.db"
    monkeypatch.setattr(settings, "database_url", str(db_path))
    db.init_db()
    yield db_path


@pytest.fixture
def row_count(database):
    def _count():
        conn = sqlite3.connect(str(database))
        try:
            return conn.execute("SELECT COUNT(*) FROM songs").fetchone()[0]
        finally:
            conn.close()

    return _count


@pytest.fixture
def fake_session():
    return FakeSession(response=FakeResponse(200, dict(ENRICHMENT_PAYLOAD)))
