"""SQLite storage layer for users, URL groups, URLs, and client-local app state.

Design:
 - SQLite stores the URL catalog and group assignments per user.
 - Group membership is ordered (display_order) and many-to-many.
 - The app_state table is the client-local key/value store (menu state, known ids).
 - Each call opens a short-lived connection (thread-safe, WAL mode).
"""
from __future__ import annotations

import contextlib
import os
import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from core.paths import DATA_DIR


def _db_path() -> Path:
    """Resolve SQLite DB path from environment or default."""
    return Path(os.environ.get("APP_DB_PATH", DATA_DIR / "app.db"))


@dataclass(frozen=True)
class UserRecord:
    id: str
    username: str
    created_at: str
    last_active_url_id: str | None
    menu_position: str | None


@dataclass(frozen=True)
class UrlGroupRecord:
    id: str
    name: str
    description: str | None
    created_at: str


@dataclass(frozen=True)
class UrlRecord:
    id: str
    title: str
    url: str
    url_mobile: str | None
    icon_path: str | None
    idle_timeout_minutes: int | None
    open_in_new_tab: int
    is_localhost: int
    port: str | None
    path: str | None
    localhost_mobile_port: str | None
    localhost_mobile_path: str | None
    created_at: str


def init_db() -> None:
    """Initialize SQLite schema and enable WAL mode."""
    db_path = _db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with connect() as conn:
        conn.execute("PRAGMA journal_mode=WAL")
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                username TEXT UNIQUE NOT NULL,
                created_at TEXT NOT NULL,
                last_active_url_id TEXT,
                menu_position TEXT
            );
            CREATE TABLE IF NOT EXISTS url_groups (
                id TEXT PRIMARY KEY,
                name TEXT UNIQUE NOT NULL,
                description TEXT,
                created_at TEXT NOT NULL
            );
            CREATE TABLE IF NOT EXISTS urls (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                url TEXT NOT NULL,
                url_mobile TEXT,
                icon_path TEXT,
                idle_timeout_minutes INTEGER,
                open_in_new_tab INTEGER NOT NULL DEFAULT 0,
                is_localhost INTEGER NOT NULL DEFAULT 0,
                port TEXT,
                path TEXT,
                localhost_mobile_port TEXT,
                localhost_mobile_path TEXT,
                created_at TEXT NOT NULL
            );
            CREATE TABLE IF NOT EXISTS url_group_urls (
                url_group_id TEXT NOT NULL,
                url_id TEXT NOT NULL,
                display_order INTEGER NOT NULL DEFAULT 0,
                PRIMARY KEY (url_group_id, url_id),
                FOREIGN KEY(url_group_id) REFERENCES url_groups(id) ON DELETE CASCADE,
                FOREIGN KEY(url_id) REFERENCES urls(id) ON DELETE CASCADE
            );
            CREATE TABLE IF NOT EXISTS user_url_groups (
                user_id TEXT NOT NULL,
                url_group_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                PRIMARY KEY (user_id, url_group_id),
                FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE,
                FOREIGN KEY(url_group_id) REFERENCES url_groups(id) ON DELETE CASCADE
            );
            CREATE TABLE IF NOT EXISTS app_state (
                key TEXT PRIMARY KEY,
                value TEXT
            );
            """
        )


@contextlib.contextmanager
def connect() -> Iterator[sqlite3.Connection]:
    """Yield a short-lived SQLite connection (thread-safe)."""
    conn = sqlite3.connect(_db_path(), timeout=10, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON")
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def _now() -> str:
    """Return UTC timestamp string."""
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex


# ---- users ----

def create_user(username: str) -> str:
    """Create a user record and return its id."""
    init_db()
    user_id = _new_id()
    with connect() as conn:
        conn.execute(
            "INSERT INTO users (id, username, created_at) VALUES (?, ?, ?)",
            (user_id, username, _now()),
        )
    return user_id


def get_user(user_id: str) -> UserRecord | None:
    """Return user record by id."""
    init_db()
    with connect() as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    return UserRecord(**dict(row)) if row else None


def get_user_by_name(username: str) -> UserRecord | None:
    """Return user record by username."""
    init_db()
    with connect() as conn:
        row = conn.execute("SELECT * FROM users WHERE username = ?", (username,)).fetchone()
    return UserRecord(**dict(row)) if row else None


def update_user_fields(
    user_id: str,
    *,
    last_active_url_id: str | None = None,
    menu_position: str | None = None,
) -> None:
    """Update mutable fields on a user record."""
    init_db()
    updates = []
    values: list[object] = []
    if last_active_url_id is not None:
        updates.append("last_active_url_id = ?")
        values.append(last_active_url_id)
    if menu_position is not None:
        updates.append("menu_position = ?")
        values.append(menu_position)
    if not updates:
        return
    values.append(user_id)
    with connect() as conn:
        conn.execute(
            f"UPDATE users SET {', '.join(updates)} WHERE id = ?",
            values,
        )


# ---- url groups ----

def create_url_group(name: str, description: str | None = None) -> str:
    """Create a URL group and return its id."""
    init_db()
    group_id = _new_id()
    with connect() as conn:
        conn.execute(
            "INSERT INTO url_groups (id, name, description, created_at) VALUES (?, ?, ?, ?)",
            (group_id, name, description, _now()),
        )
    return group_id


def get_url_group(group_id: str) -> UrlGroupRecord | None:
    init_db()
    with connect() as conn:
        row = conn.execute("SELECT * FROM url_groups WHERE id = ?", (group_id,)).fetchone()
    return UrlGroupRecord(**dict(row)) if row else None


def get_url_group_by_name(name: str) -> UrlGroupRecord | None:
    init_db()
    with connect() as conn:
        row = conn.execute("SELECT * FROM url_groups WHERE name = ?", (name,)).fetchone()
    return UrlGroupRecord(**dict(row)) if row else None


def delete_url_group(group_id: str) -> None:
    """Delete a URL group; memberships and assignments cascade."""
    init_db()
    with connect() as conn:
        conn.execute("DELETE FROM url_groups WHERE id = ?", (group_id,))


# ---- urls ----

def create_url(
    title: str,
    url: str,
    *,
    url_mobile: str | None = None,
    icon_path: str | None = None,
    idle_timeout_minutes: int | None = None,
    open_in_new_tab: bool = False,
    is_localhost: bool = False,
    port: str | None = None,
    path: str | None = None,
    localhost_mobile_port: str | None = None,
    localhost_mobile_path: str | None = None,
) -> str:
    """Create a URL record and return its id."""
    init_db()
    url_id = _new_id()
    with connect() as conn:
        conn.execute(
            "INSERT INTO urls (id, title, url, url_mobile, icon_path, idle_timeout_minutes,"
            " open_in_new_tab, is_localhost, port, path, localhost_mobile_port,"
            " localhost_mobile_path, created_at)"
            " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                url_id,
                title,
                url,
                url_mobile,
                icon_path,
                idle_timeout_minutes,
                int(open_in_new_tab),
                int(is_localhost),
                port,
                path,
                localhost_mobile_port,
                localhost_mobile_path,
                _now(),
            ),
        )
    return url_id


def get_url(url_id: str) -> UrlRecord | None:
    init_db()
    with connect() as conn:
        row = conn.execute("SELECT * FROM urls WHERE id = ?", (url_id,)).fetchone()
    return UrlRecord(**dict(row)) if row else None


def delete_url(url_id: str) -> None:
    """Delete a URL; memberships cascade."""
    init_db()
    with connect() as conn:
        conn.execute("DELETE FROM urls WHERE id = ?", (url_id,))


# ---- membership and assignment ----

def add_url_to_group(group_id: str, url_id: str, display_order: int | None = None) -> None:
    """Insert or reorder a URL in a group; appends when display_order is None."""
    init_db()
    with connect() as conn:
        if display_order is None:
            row = conn.execute(
                "SELECT COALESCE(MAX(display_order), -1) + 1 AS next_order"
                " FROM url_group_urls WHERE url_group_id = ?",
                (group_id,),
            ).fetchone()
            display_order = row["next_order"]
        conn.execute(
            "INSERT INTO url_group_urls (url_group_id, url_id, display_order) VALUES (?, ?, ?)"
            " ON CONFLICT(url_group_id, url_id) DO UPDATE SET display_order = excluded.display_order",
            (group_id, url_id, display_order),
        )


def remove_url_from_group(group_id: str, url_id: str) -> None:
    init_db()
    with connect() as conn:
        conn.execute(
            "DELETE FROM url_group_urls WHERE url_group_id = ? AND url_id = ?",
            (group_id, url_id),
        )


def list_group_urls(group_id: str) -> list[tuple[UrlRecord, int]]:
    """List (url, display_order) pairs for a group in display order."""
    init_db()
    with connect() as conn:
        rows = conn.execute(
            "SELECT urls.*, url_group_urls.display_order AS display_order"
            " FROM url_group_urls JOIN urls ON urls.id = url_group_urls.url_id"
            " WHERE url_group_urls.url_group_id = ?"
            " ORDER BY url_group_urls.display_order ASC, LOWER(urls.title) ASC",
            (group_id,),
        ).fetchall()
    pairs = []
    for row in rows:
        data = dict(row)
        order = data.pop("display_order")
        pairs.append((UrlRecord(**data), order))
    return pairs


def assign_group_to_user(user_id: str, group_id: str) -> None:
    init_db()
    with connect() as conn:
        conn.execute(
            "INSERT OR IGNORE INTO user_url_groups (user_id, url_group_id, created_at) VALUES (?, ?, ?)",
            (user_id, group_id, _now()),
        )


def unassign_group_from_user(user_id: str, group_id: str) -> None:
    init_db()
    with connect() as conn:
        conn.execute(
            "DELETE FROM user_url_groups WHERE user_id = ? AND url_group_id = ?",
            (user_id, group_id),
        )


def list_user_groups(user_id: str) -> list[UrlGroupRecord]:
    """List groups assigned to a user, ordered by name."""
    init_db()
    with connect() as conn:
        rows = conn.execute(
            "SELECT url_groups.* FROM user_url_groups"
            " JOIN url_groups ON url_groups.id = user_url_groups.url_group_id"
            " WHERE user_url_groups.user_id = ?"
            " ORDER BY LOWER(url_groups.name)",
            (user_id,),
        ).fetchall()
    return [UrlGroupRecord(**dict(row)) for row in rows]


# ---- client-local app state ----

def set_app_state(key: str, value: str | None) -> None:
    """Persist a single app state value."""
    init_db()
    with connect() as conn:
        if value is None:
            conn.execute("DELETE FROM app_state WHERE key = ?", (key,))
        else:
            conn.execute(
                "INSERT INTO app_state (key, value) VALUES (?, ?)"
                " ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )


def get_app_state(key: str) -> str | None:
    """Fetch a stored app state value."""
    init_db()
    with connect() as conn:
        row = conn.execute("SELECT value FROM app_state WHERE key = ?", (key,)).fetchone()
    return row["value"] if row else None
