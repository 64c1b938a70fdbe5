import re
import sqlite3
from decimal import Decimal
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from jobly.config import settings

# Numeric columns arrive as Decimal; SQLite stores them through their text form.
sqlite3.register_adapter(Decimal, str)

_PLACEHOLDER_RE = re.compile(r"\$(\d+)")


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_query(db: Session, sql: str, values: list[Any] | tuple = ()) -> list[dict]:
    """Execute a statement written with ``$1``-style placeholders.

    SQLite spells numbered parameters ``?1``; the values are bound by position.
    Returns the produced rows as dicts (empty for statements without rows).
    """
    statement = _PLACEHOLDER_RE.sub(r"?\1", sql)
    result = db.connection().exec_driver_sql(statement, tuple(values))
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]


SCHEMA_SQL = """\
-- ============================================================
-- COMPANIES
-- ============================================================
CREATE TABLE IF NOT EXISTS companies (
    handle        TEXT PRIMARY KEY CHECK (handle = lower(handle)),
    name          TEXT NOT NULL UNIQUE,
    num_employees INTEGER CHECK (num_employees >= 0),
    description   TEXT NOT NULL DEFAULT '',
    logo_url      TEXT
);

-- ============================================================
-- USERS
-- ============================================================
CREATE TABLE IF NOT EXISTS users (
    username   TEXT PRIMARY KEY,
    password   TEXT NOT NULL,
    first_name TEXT NOT NULL,
    last_name  TEXT NOT NULL,
    email      TEXT NOT NULL CHECK (instr(email, '@') > 1),
    is_admin   BOOLEAN NOT NULL DEFAULT 0
);

-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS jobs (
    id             INTEGER PRIMARY KEY AUTOINCREMENT,
    title          TEXT NOT NULL,
    salary         INTEGER CHECK (salary >= 0),
    equity         NUMERIC CHECK (equity >= 0 AND equity <= 1.0),
    company_handle TEXT NOT NULL REFERENCES companies(handle) ON DELETE CASCADE,
    UNIQUE (title, company_handle)
);

CREATE INDEX IF NOT EXISTS idx_jobs_title ON jobs(title);
CREATE INDEX IF NOT EXISTS idx_jobs_company ON jobs(company_handle);
"""


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    conn.close()
