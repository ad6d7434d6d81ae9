"""CRUD operations over the ``feeds`` table."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional

from feedstore.db import FEED_COLUMNS, FEEDS_TABLE, ConnectionFactory
from feedstore.models import Feed, FeedToCreate, FeedToUpdate

logger = logging.getLogger(__name__)

_SELECT_FEEDS = f"SELECT {', '.join(FEED_COLUMNS)} FROM {FEEDS_TABLE}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FeedRepository:
    """Synchronous access to the feeds catalogue.

    Every call opens its own connection from ``connection_factory`` and closes
    it before returning, so a repository holds no database state between
    calls. Concurrency is left to SQLite.

    Usage:
        repo = FeedRepository(connection_factory(StoreConfig("data/feeds.db")))
        repo.create(FeedToCreate(title="Example", link="https://example.com/rss"))
        feeds = repo.read_all()
    """

    def __init__(
        self,
        connection_factory: ConnectionFactory,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.connection_factory = connection_factory
        self.clock = clock

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        conn = self.connection_factory()
        try:
            yield conn
        finally:
            conn.close()

    def _execute_write(self, sql: str, params: tuple) -> int:
        """Run one statement in its own transaction and return the affected row count."""
        with self._connection() as conn:
            with conn:
                cursor = conn.execute(sql, params)
            return cursor.rowcount

    # --- Writes ---

    def create(self, arg: FeedToCreate) -> int:
        """Insert a feed. Status comes from the column default."""
        now = self.clock()
        if now.tzinfo is None:
            raise ValueError(f"clock returned a naive datetime: {now!r}")
        checked_at = now.astimezone(timezone.utc)
        count = self._execute_write(
            f"INSERT INTO {FEEDS_TABLE} (title, link, checked_at) VALUES (?, ?, ?)",
            (arg.title, arg.link, checked_at.isoformat()),
        )
        logger.info("Created feed %r (%s)", arg.title, arg.link)
        return count

    def update(self, arg: FeedToUpdate) -> int:
        """Write only the supplied fields of ``arg``. Returns the affected row count."""
        changes = arg.changes()
        if not changes:
            logger.debug("Empty update for feed %d, nothing to do", arg.id)
            return 0

        assignments = ", ".join(f"{column} = ?" for column in changes)
        count = self._execute_write(
            f"UPDATE {FEEDS_TABLE} SET {assignments} WHERE id = ?",
            (*changes.values(), arg.id),
        )
        logger.debug("Updated feed %d (%s): %d row(s)", arg.id, ", ".join(changes), count)
        return count

    def delete(self, feed_id: int) -> int:
        count = self._execute_write(f"DELETE FROM {FEEDS_TABLE} WHERE id = ?", (feed_id,))
        if count:
            logger.info("Deleted feed %d", feed_id)
        return count

    # --- Reads ---

    def read_all(self) -> List[Feed]:
        """All feeds in the store's row order."""
        with self._connection() as conn:
            cursor = conn.execute(_SELECT_FEEDS)
            feeds = [Feed.from_row(row) for row in _rows_as_dicts(cursor)]
        logger.debug("Read %d feed(s)", len(feeds))
        return feeds

    def read(self, feed_id: int) -> Optional[Feed]:
        """The feed with ``feed_id``, or None if there is none."""
        with self._connection() as conn:
            cursor = conn.execute(f"{_SELECT_FEEDS} WHERE id = ? LIMIT 1", (feed_id,))
            rows = _rows_as_dicts(cursor)
        return Feed.from_row(rows[0]) if rows else None


def _rows_as_dicts(cursor: sqlite3.Cursor) -> List[Dict[str, Any]]:
    """Key each row by column name, whatever row_factory the connection uses."""
    names = [col[0] for col in cursor.description]
    return [dict(zip(names, row)) for row in cursor.fetchall()]
