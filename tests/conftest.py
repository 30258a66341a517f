import asyncio
import sqlite3

import pytest
from fastapi.testclient import TestClient

from user_post_api.app.core.config import settings
from user_post_api.app.core.db import init_db
from user_post_api.app.main import app


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the application at a fresh database file."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    init_db()
    return settings.database_url


@pytest.fixture
def client(database):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def run():
    return asyncio.run


@pytest.fixture
def count_rows(database):
    def _count(table, where="1=1", params=()):
        conn = sqlite3.connect(database)
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {table} WHERE {where}", params).fetchone()[0]
        finally:
            conn.close()

    return _count
