"""
Database operations for the Trench Wars league: save slots holding league snapshots.
"""
import logging
import sqlite3

from .schema import DEFAULT_SLOT, get_connection, init_db
from .snapshot import dumps, league_from_snapshot
from models import LeagueState

logger = logging.getLogger(__name__)


def save_game(state: LeagueState, slot: str = DEFAULT_SLOT, conn: sqlite3.Connection | None = None) -> None:
    """Insert or replace the snapshot in ``slot``."""
    close = False
    if conn is None:
        conn = get_connection()
        close = True
    try:
        init_db(conn)
        conn.execute(
            """
            INSERT INTO saves (slot, snapshot, season, week, mode, updated_at)
            VALUES (?, ?, ?, ?, ?, datetime('now'))
            ON CONFLICT(slot) DO UPDATE SET
                snapshot = excluded.snapshot,
                season = excluded.season,
                week = excluded.week,
                mode = excluded.mode,
                updated_at = excluded.updated_at
            """,
            (slot, dumps(state), state.season.season, state.season.week, state.season.mode),
        )
        conn.commit()
        logger.debug("Saved slot %s (season %d week %d)", slot, state.season.season, state.season.week)
    finally:
        if close:
            conn.close()


def load_game(slot: str = DEFAULT_SLOT, conn: sqlite3.Connection | None = None) -> LeagueState | None:
    """Return the league stored in ``slot``, or None if the slot is empty.
    Raises SnapshotError if the stored snapshot cannot be read."""
    close = False
    if conn is None:
        conn = get_connection()
        close = True
    try:
        init_db(conn)
        row = conn.execute("SELECT snapshot FROM saves WHERE slot = ?", (slot,)).fetchone()
        if row is None:
            return None
        return league_from_snapshot(row["snapshot"])
    finally:
        if close:
            conn.close()


def has_save(slot: str = DEFAULT_SLOT, conn: sqlite3.Connection | None = None) -> bool:
    close = False
    if conn is None:
        conn = get_connection()
        close = True
    try:
        init_db(conn)
        row = conn.execute("SELECT 1 FROM saves WHERE slot = ?", (slot,)).fetchone()
        return row is not None
    finally:
        if close:
            conn.close()


def delete_save(slot: str = DEFAULT_SLOT, conn: sqlite3.Connection | None = None) -> None:
    close = False
    if conn is None:
        conn = get_connection()
        close = True
    try:
        init_db(conn)
        conn.execute("DELETE FROM saves WHERE slot = ?", (slot,))
        conn.commit()
    finally:
        if close:
            conn.close()
