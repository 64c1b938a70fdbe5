import sqlite3

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from jobly.database import get_db, init_db
from jobly.main import app
from jobly.utils.security import create_token, hash_password


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="session")
def password_hashes():
    """Argon2 is deliberately slow; hash the fixture passwords once."""
    return {"u1": hash_password("password1"), "admin": hash_password("adminpass")}


@pytest.fixture
def db_path(tmp_path, password_hashes):
    path = tmp_path / "jobly.sqlite"
    init_db(path)

    conn = sqlite3.connect(str(path))
    conn.executemany(
        "INSERT INTO companies (handle, name, num_employees, description) VALUES (?, ?, ?, ?)",
        [
            ("c1", "C1", 1, "Desc1"),
            ("c2", "C2", 2, "Desc2"),
            ("c3", "C3", 3, "Desc3"),
        ],
    )
    conn.executemany(
        "INSERT INTO users (username, password, first_name, last_name, email, is_admin) "
        "VALUES (?, ?, ?, ?, ?, ?)",
        [
            ("u1", password_hashes["u1"], "U1F", "U1L", "u1@email.com", 0),
            ("admin", password_hashes["admin"], "AdF", "AdL", "admin@email.com", 1),
        ],
    )
    conn.executemany(
        "INSERT INTO jobs (title, salary, equity, company_handle) VALUES (?, ?, ?, ?)",
        [
            ("Software Engineer", 100000, "0.1", "c1"),
            ("Data Scientist", 120000, "0.2", "c2"),
            ("Product Manager", 90000, "0.05", "c3"),
            ("Office Intern", None, "0", "c1"),
        ],
    )
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def test_db(db_path):
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    TestSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    def override_get_db():
        db = TestSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestSession
    app.dependency_overrides.clear()
    engine.dispose()


@pytest.fixture
def db(test_db):
    session = test_db()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def job_ids(db_path):
    conn = sqlite3.connect(str(db_path))
    ids = dict(conn.execute("SELECT title, id FROM jobs").fetchall())
    conn.close()
    return ids


@pytest.fixture
def client(test_db):
    return TestClient(app)


@pytest.fixture
def u1_token():
    return create_token({"username": "u1", "isAdmin": False})


@pytest.fixture
def admin_token():
    return create_token({"username": "admin", "isAdmin": True})
