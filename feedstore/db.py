"""SQLite connection factory for the feed store."""

from __future__ import annotations

import logging
import sqlite3
from functools import partial
from pathlib import Path
from typing import Optional, Protocol

from feedstore.config import StoreConfig

logger = logging.getLogger(__name__)

FEEDS_TABLE = "feeds"
FEED_COLUMNS = ("id", "title", "link", "status", "checked_at")


class ConnectionFactory(Protocol):
    """Zero-argument callable handing out a fresh connection per call."""

    def __call__(self) -> sqlite3.Connection:
        ...


def open_connection(config: Optional[StoreConfig] = None) -> sqlite3.Connection:
    """Open a connection to the feeds database with rows addressable by name.

    ``db_path`` must name a file. Each call opens a new connection, so a
    ``:memory:`` path would give every call its own empty database.
    """
    config = config or StoreConfig()
    Path(config.db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(config.db_path, timeout=config.timeout)
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA busy_timeout={int(config.timeout * 1000)}")

    logger.debug("Opened connection to %s", config.db_path)
    return conn


def connection_factory(config: Optional[StoreConfig] = None) -> ConnectionFactory:
    """Return a factory that opens a new connection for ``config`` on each call."""
    return partial(open_connection, config or StoreConfig())
