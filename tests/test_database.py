import threading
import time

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from dailylog.core import database
from dailylog.core.database import (
    ConnectionManager,
    DEFAULT_DATABASE_URL,
    get_database_url,
    normalize_database_url,
)
from dailylog.core.exceptions import StorageUnavailable

UNREACHABLE = "sqlite:////nonexistent-dailylog-dir/logs.db"


def test_connect_is_idempotent(manager):
    first = manager.connect()
    assert manager.connect() is first
    assert manager.connected


def test_connect_creates_logs_collection(manager):
    engine = manager.connect()
    assert "logs" in inspect(engine).get_table_names()


def test_concurrent_first_callers_share_one_attempt(monkeypatch):
    manager = ConnectionManager("sqlite://")
    calls = []
    build = manager._build_engine

    def slow_build():
        calls.append(threading.get_ident())
        time.sleep(0.05)
        return build()

    monkeypatch.setattr(manager, "_build_engine", slow_build)

    engines = []
    start = threading.Barrier(8)

    def worker():
        start.wait()
        engines.append(manager.connect())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(calls) == 1
    assert len(engines) == 8
    assert all(engine is engines[0] for engine in engines)
    manager.dispose()


def test_unreachable_target_raises_storage_unavailable():
    manager = ConnectionManager(UNREACHABLE)
    with pytest.raises(StorageUnavailable) as exc_info:
        manager.connect()

    assert isinstance(exc_info.value.__cause__, OperationalError)
    assert exc_info.value.status_code == 503
    assert not manager.connected


def test_failed_attempt_is_not_cached():
    manager = ConnectionManager(UNREACHABLE)
    with pytest.raises(StorageUnavailable):
        manager.connect()

    manager.database_url = "sqlite://"
    assert manager.connect() is not None
    manager.dispose()


def test_session_is_scoped(manager):
    with manager.session() as db:
        assert isinstance(db, Session)
        assert manager.connected


def test_dispose_forgets_engine(manager):
    first = manager.connect()
    manager.dispose()
    assert not manager.connected
    assert manager.connect() is not first


def test_get_db_yields_session_from_manager(manager):
    gen = database.get_db(manager)
    db = next(gen)
    assert db.bind is manager.connect()
    gen.close()


@pytest.mark.parametrize("url, expected", [
    ("postgres://me@localhost:5432/dailylog", "postgresql://me@localhost:5432/dailylog"),
    ("postgresql://me@localhost/dailylog", "postgresql://me@localhost/dailylog"),
    ("sqlite:///./dailylog.db", "sqlite:///./dailylog.db"),
])
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected


def test_database_url_falls_back_to_local_default(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    assert get_database_url() == DEFAULT_DATABASE_URL


def test_database_url_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgres://me@db/dailylog")
    assert get_database_url() == "postgresql://me@db/dailylog"
    assert ConnectionManager().database_url == "postgresql://me@db/dailylog"


def test_malformed_url_raises_storage_unavailable():
    manager = ConnectionManager("not a database url")
    with pytest.raises(StorageUnavailable):
        manager.connect()
    assert not manager.connected


def test_unknown_driver_raises_storage_unavailable():
    manager = ConnectionManager("mysql+nosuchdriver://u@localhost/db")
    with pytest.raises(StorageUnavailable):
        manager.connect()
    assert not manager.connected


def test_missing_driver_module_raises_storage_unavailable(monkeypatch):
    manager = ConnectionManager("postgresql://me@localhost/dailylog")

    def missing_driver():
        raise ModuleNotFoundError("No module named 'psycopg2'")

    monkeypatch.setattr(manager, "_build_engine", missing_driver)

    with pytest.raises(StorageUnavailable) as exc_info:
        manager.connect()
    assert isinstance(exc_info.value.__cause__, ModuleNotFoundError)
