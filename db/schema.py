"""
SQLite schema for the Trench Wars league.
Save slots hold whole-league snapshots as JSON text; the league itself is never normalized into tables.
"""
import sqlite3
from pathlib import Path

import config

DEFAULT_SLOT = "main"


def get_db_path() -> Path:
    """Return absolute path to the save DB file."""
    db_dir = Path(config.DB_DIR)
    if not db_dir.is_absolute():
        db_dir = Path(__file__).resolve().parent.parent / db_dir
    return db_dir / config.DB_FILENAME


def _ensure_db_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def get_connection(path: Path | str | None = None) -> sqlite3.Connection:
    """Open a connection to the save DB. Creates dir and file if needed.
    timeout: seconds to wait for lock (avoids 'database is locked' under concurrent requests).
    """
    path = Path(path) if path is not None else get_db_path()
    _ensure_db_dir(path)
    conn = sqlite3.connect(str(path), timeout=15.0)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection | None = None) -> None:
    """Create all tables if they do not exist."""
    close = False
    if conn is None:
        conn = get_connection()
        close = True
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS saves (
                slot TEXT PRIMARY KEY,
                snapshot TEXT NOT NULL,
                season INTEGER NOT NULL DEFAULT 1,
                week INTEGER NOT NULL DEFAULT 1,
                mode TEXT NOT NULL DEFAULT 'standard',
                updated_at TEXT DEFAULT (datetime('now'))
            );
        """)
        conn.commit()
        _migrate_saves_mode(conn)
    finally:
        if close:
            conn.close()


def _migrate_saves_mode(conn: sqlite3.Connection) -> None:
    """Add mode column to saves if missing (existing save files)."""
    rows = conn.execute("PRAGMA table_info(saves)").fetchall()
    cols = {row[1] for row in rows}
    if "mode" not in cols:
        conn.execute("ALTER TABLE saves ADD COLUMN mode TEXT NOT NULL DEFAULT 'standard'")
        conn.commit()


def reset_saves() -> None:
    """Delete the save DB file and recreate the schema."""
    path = get_db_path()
    if path.exists():
        path.unlink()
    conn = get_connection()
    try:
        init_db(conn)
    finally:
        conn.close()
