"""Error types raised by the feed store."""

from __future__ import annotations

import sqlite3
from typing import Any, Optional

# Database failures propagate unchanged from the driver.
StoreError = sqlite3.Error


class FeedStoreError(Exception):
    """Base class for errors raised by feedstore itself."""


class InvalidStatus(FeedStoreError, ValueError):
    """A text value is not one of the known feed status spellings."""

    def __init__(self, value: Any):
        super().__init__(f"invalid feed status: {value!r}")
        self.value = value


class DataIntegrityError(FeedStoreError):
    """A stored row holds a value the store never writes."""

    def __init__(self, message: str, feed_id: Optional[int] = None, column: Optional[str] = None):
        super().__init__(message)
        self.feed_id = feed_id
        self.column = column
